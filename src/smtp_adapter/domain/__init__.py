"""Domain layer - pure business logic with no I/O or framework dependencies.

Contents:
    * :mod:`.addresses` - Address variants and envelope/header formatting
    * :mod:`.enums` - SMTP setting enumerations and output formats
    * :mod:`.errors` - Domain exception types
    * :mod:`.message` - Email model and encoded message
    * :mod:`.results` - Transport result shapes
    * :mod:`.values` - Literal and environment-indirection config values
"""

from __future__ import annotations

from .addresses import (
    Address,
    BareAddress,
    NamedAddress,
    encode_display_name,
    format_envelope,
    format_header,
    to_address,
    to_addresses,
)
from .enums import AuthMode, DeliveryErrorKind, OutputFormat, TlsMode, TlsVersion
from .errors import ConfigurationError, DeliveryError
from .message import Attachment, EmailMessage, EncodedMessage
from .results import NoCredentials, TransportFailure, TransportResult, TransportSuccess
from .values import EnvRef, LiteralValue

__all__ = [
    # Addresses
    "Address",
    "BareAddress",
    "NamedAddress",
    "encode_display_name",
    "format_envelope",
    "format_header",
    "to_address",
    "to_addresses",
    # Enums
    "AuthMode",
    "DeliveryErrorKind",
    "OutputFormat",
    "TlsMode",
    "TlsVersion",
    # Errors
    "ConfigurationError",
    "DeliveryError",
    # Message model
    "Attachment",
    "EmailMessage",
    "EncodedMessage",
    # Transport results
    "NoCredentials",
    "TransportFailure",
    "TransportResult",
    "TransportSuccess",
    # Config values
    "EnvRef",
    "LiteralValue",
]
