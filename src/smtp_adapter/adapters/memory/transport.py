"""In-memory transport for testing.

Provides a transport that satisfies the same Protocol as the smtplib
transport but performs no network I/O.

Contents:
    * :class:`TransportSpy` - Captures send calls and returns a scripted result.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from ...domain.results import TransportResult, TransportSuccess
from ..smtp.config import SmtpConfig

#: Registry name under which tests usually register the spy.
SPY_TRANSPORT_NAME = "memory"


@dataclass(frozen=True, slots=True)
class SentMessage:
    """One captured ``send_blocking`` call."""

    envelope_from: str | None
    envelope_to: tuple[str, ...]
    body: bytes
    config: SmtpConfig


def _empty_sent_list() -> list[SentMessage]:
    """Create an empty typed list for captured messages."""
    return []


@dataclass
class TransportSpy:
    """Captures transport calls for test assertions.

    Each test should create its own TransportSpy instance to avoid
    cross-test pollution.

    Attributes:
        sent: Captured calls in order.
        result: Result returned for every call. ``None`` returns
            ``TransportSuccess`` with :attr:`receipt`.
        receipt: Receipt used for the default success result.
        raise_exception: When set, calls raise this exception after capture.

    Example:
        >>> spy = TransportSpy()
        >>> config = SmtpConfig(relay="smtp.test.com", port=25)
        >>> spy.send_blocking("a@x.com", ["b@x.com"], b"...", config)
        TransportSuccess(receipt='queued')
        >>> spy.sent[0].envelope_to
        ('b@x.com',)
    """

    sent: list[SentMessage] = field(default_factory=_empty_sent_list)
    result: Any = None
    receipt: Any = "queued"
    raise_exception: Exception | None = None

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.sent.clear()
        self.result = None
        self.raise_exception = None

    def send_blocking(
        self,
        envelope_from: str | None,
        envelope_to: Sequence[str],
        body: bytes,
        config: SmtpConfig,
    ) -> TransportResult:
        """Record the call and return the scripted result."""
        self.sent.append(
            SentMessage(
                envelope_from=envelope_from,
                envelope_to=tuple(envelope_to),
                body=body,
                config=config,
            )
        )
        if self.raise_exception is not None:
            raise self.raise_exception
        if self.result is not None:
            return self.result
        return TransportSuccess(self.receipt)


__all__ = [
    "SPY_TRANSPORT_NAME",
    "SentMessage",
    "TransportSpy",
]
