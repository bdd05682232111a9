"""Public package surface for the SMTP adapter.

Routes imports through the architectural layers:
- Domain exports: email model, address variants, config values, errors
- Adapter exports: SMTP settings resolution and message encoding
- Application exports: the delivery coordinator
- Metadata: Package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# SMTP adapter
from .adapters.smtp import SmtpConfig, SmtplibTransport, build_message, resolve_smtp_config

# Use case
from .application.delivery import DeliveryCoordinator

# Composition
from .composition import AppServices, build_production

# Domain exports
from .domain import (
    Attachment,
    AuthMode,
    BareAddress,
    ConfigurationError,
    DeliveryError,
    DeliveryErrorKind,
    EmailMessage,
    EncodedMessage,
    EnvRef,
    NamedAddress,
    NoCredentials,
    TlsMode,
    TlsVersion,
    TransportFailure,
    TransportSuccess,
)

__all__ = [
    "AppServices",
    "Attachment",
    "AuthMode",
    "BareAddress",
    "ConfigurationError",
    "DeliveryCoordinator",
    "DeliveryError",
    "DeliveryErrorKind",
    "EmailMessage",
    "EncodedMessage",
    "EnvRef",
    "NamedAddress",
    "NoCredentials",
    "SmtpConfig",
    "SmtplibTransport",
    "TlsMode",
    "TlsVersion",
    "TransportFailure",
    "TransportSuccess",
    "build_message",
    "build_production",
    "print_info",
    "resolve_smtp_config",
]
