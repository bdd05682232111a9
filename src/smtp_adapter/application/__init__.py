"""Application layer - use cases and port definitions.

Contains the delivery use case that orchestrates configuration resolution,
message encoding and the transport, plus the port protocols adapters
implement.

Contents:
    * :mod:`.delivery` - Delivery coordinator and transport-result mapping
    * :mod:`.ports` - Protocol definitions for adapter functions
"""

from __future__ import annotations

from .delivery import DeliveryCoordinator, map_transport_result
from .ports import (
    BuildMessage,
    DisplayConfig,
    GetConfig,
    InitLogging,
    ResolveSmtpConfig,
    Transport,
)

__all__ = [
    "BuildMessage",
    "DeliveryCoordinator",
    "DisplayConfig",
    "GetConfig",
    "InitLogging",
    "ResolveSmtpConfig",
    "Transport",
    "map_transport_result",
]
