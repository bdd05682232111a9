"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

# Configuration services
from ..adapters.config.display import display_config
from ..adapters.config.loader import get_config

# Logging services
from ..adapters.logging.setup import init_logging

# SMTP services
from ..adapters.smtp.config import resolve_smtp_config
from ..adapters.smtp.message import build_message
from ..adapters.smtp.transport import TRANSPORT_NAME, SmtplibTransport
from ..application.delivery import DeliveryCoordinator

if TYPE_CHECKING:
    from ..adapters.memory.transport import TransportSpy
    from ..application.ports import (
        BuildMessage,
        DisplayConfig,
        GetConfig,
        InitLogging,
        ResolveSmtpConfig,
        Transport,
    )
    from ..domain.message import EmailMessage

    _assert_get_config: GetConfig = get_config
    _assert_display_config: DisplayConfig = display_config
    _assert_init_logging: InitLogging = init_logging
    _assert_resolve_smtp_config: ResolveSmtpConfig = resolve_smtp_config
    _assert_build_message: BuildMessage = build_message
    _assert_transport: Transport = SmtplibTransport()


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    display_config: DisplayConfig
    init_logging: InitLogging
    resolve_smtp_config: ResolveSmtpConfig
    build_message: BuildMessage
    transports: Mapping[str, Transport]

    @property
    def coordinator(self) -> DeliveryCoordinator:
        """Delivery use case over this container's resolver, builder and transports."""
        return DeliveryCoordinator(
            resolve_config=self.resolve_smtp_config,
            build_message=self.build_message,
            transports=self.transports,
        )

    def deliver(
        self,
        email: EmailMessage,
        raw_config: Mapping[str, Any],
        *,
        environ: Mapping[str, str] | None = None,
    ) -> Any:
        """Shortcut for ``self.coordinator.deliver``."""
        return self.coordinator.deliver(email, raw_config, environ=environ)


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        get_config=get_config,
        display_config=display_config,
        init_logging=init_logging,
        resolve_smtp_config=resolve_smtp_config,
        build_message=build_message,
        transports={TRANSPORT_NAME: SmtplibTransport()},
    )


def build_testing(*, spy: TransportSpy | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    The real resolver and message builder are kept; only configuration
    loading, logging and the network transport are replaced.

    Args:
        spy: TransportSpy to capture sends. A fresh one is created when None.
            It is registered both as ``memory`` and under the default
            ``smtplib`` name so default settings never reach the network.
    """
    from ..adapters.memory import (
        SPY_TRANSPORT_NAME,
        TransportSpy,
        display_config_in_memory,
        get_config_in_memory,
        init_logging_in_memory,
    )

    transport_spy = spy if spy is not None else TransportSpy()

    return AppServices(
        get_config=get_config_in_memory,
        display_config=display_config_in_memory,
        init_logging=init_logging_in_memory,
        resolve_smtp_config=resolve_smtp_config,
        build_message=build_message,
        transports={SPY_TRANSPORT_NAME: transport_spy, TRANSPORT_NAME: transport_spy},
    )


__all__ = [
    # Configuration
    "get_config",
    "display_config",
    # Logging
    "init_logging",
    # SMTP
    "resolve_smtp_config",
    "build_message",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
]
