"""Result shapes a transport reports back to the delivery use case."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class TransportSuccess:
    """Message accepted; ``receipt`` is whatever the transport returned."""

    receipt: Any


@dataclass(frozen=True, slots=True)
class NoCredentials:
    """Authentication was required but no username/password was configured."""


@dataclass(frozen=True, slots=True)
class TransportFailure:
    """Transport-level failure tagged with a reason and a free-form detail.

    Example:
        >>> TransportFailure("timeout", "timed out after 30s").reason
        'timeout'
    """

    reason: Any
    detail: Any


TransportResult = TransportSuccess | NoCredentials | TransportFailure


__all__ = [
    "NoCredentials",
    "TransportFailure",
    "TransportResult",
    "TransportSuccess",
]
