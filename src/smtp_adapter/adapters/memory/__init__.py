"""In-memory adapter implementations for testing.

Provides lightweight implementations of the application ports that operate
entirely in memory -- no filesystem, no SMTP, no logging framework.

Contents:
    * :mod:`.config` - In-memory configuration and logging adapters
    * :mod:`.transport` - In-memory transport (TransportSpy class)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import display_config_in_memory, get_config_in_memory, init_logging_in_memory
from .transport import SPY_TRANSPORT_NAME, SentMessage, TransportSpy

# Static conformance assertions
if TYPE_CHECKING:
    from smtp_adapter.application.ports import DisplayConfig, GetConfig, InitLogging, Transport

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_transport: Transport = TransportSpy()

__all__ = [
    "SPY_TRANSPORT_NAME",
    "SentMessage",
    "TransportSpy",
    "display_config_in_memory",
    "get_config_in_memory",
    "init_logging_in_memory",
]
