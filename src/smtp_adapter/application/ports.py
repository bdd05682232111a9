"""Application ports - Protocol definitions for adapter functions.

Each Protocol class defines a ``__call__`` (or ``send_blocking``) method
whose signature exactly matches the corresponding adapter. Existing
module-level functions satisfy these protocols automatically via structural
subtyping (PEP 544).

System Role:
    Sits between domain and adapters. Infrastructure types (``Config``,
    ``SmtpConfig``) are imported under ``TYPE_CHECKING`` only so that
    import-linter layer contracts remain satisfied at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.enums import OutputFormat
from ..domain.message import EmailMessage, EncodedMessage
from ..domain.results import TransportResult

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.smtp.config import SmtpConfig


class Transport(Protocol):
    """Deliver an already-encoded message using canonical SMTP settings."""

    def send_blocking(
        self,
        envelope_from: str | None,
        envelope_to: Sequence[str],
        body: bytes,
        config: SmtpConfig,
    ) -> TransportResult: ...


class ResolveSmtpConfig(Protocol):
    """Resolve raw adapter settings into the canonical SMTP configuration."""

    def __call__(self, raw_config: Mapping[str, Any], *, environ: Mapping[str, str] | None = ...) -> SmtpConfig: ...


class BuildMessage(Protocol):
    """Encode an email model into envelope addresses and MIME bytes."""

    def __call__(self, email: EmailMessage) -> EncodedMessage: ...


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "BuildMessage",
    "DisplayConfig",
    "GetConfig",
    "InitLogging",
    "ResolveSmtpConfig",
    "Transport",
]
