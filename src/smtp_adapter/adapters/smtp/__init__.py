"""SMTP adapter - configuration resolution, MIME encoding, smtplib transport.

Structure:
    * :mod:`.config` - Canonical SmtpConfig model and resolver
    * :mod:`.message` - MIME message builder
    * :mod:`.transport` - Default transport backed by smtplib

Contents:
    * :class:`.config.SmtpConfig` - Frozen canonical configuration
    * :func:`.config.resolve_smtp_config` - Raw settings to SmtpConfig
    * :func:`.message.build_message` - Email model to encoded message
    * :class:`.transport.SmtplibTransport` - Default transport
"""

from __future__ import annotations

from .config import DEFAULT_TRANSPORT, SmtpConfig, resolve_smtp_config
from .message import build_message
from .transport import SmtplibTransport, SmtpReceipt

__all__ = [
    "DEFAULT_TRANSPORT",
    "SmtpConfig",
    "SmtpReceipt",
    "SmtplibTransport",
    "build_message",
    "resolve_smtp_config",
]
