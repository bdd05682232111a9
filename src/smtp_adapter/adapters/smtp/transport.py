"""Default transport handing encoded messages to :mod:`smtplib`.

The transport consumes :class:`SmtpConfig` as-is: connection, STARTTLS
negotiation and AUTH are delegated to :mod:`smtplib` and :mod:`ssl`.
Failures are reported as :class:`TransportFailure` results tagged with a
reason, never raised, so the delivery use case can map them uniformly.

``retries`` and ``no_mx_lookups`` are carried by the configuration for
transports that honour them; this transport connects to the relay once and
performs no MX lookups.
"""

from __future__ import annotations

import logging
import smtplib
import ssl
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Final

from smtp_adapter.domain.enums import AuthMode, TlsMode, TlsVersion
from smtp_adapter.domain.results import NoCredentials, TransportFailure, TransportResult, TransportSuccess

from .config import SmtpConfig

logger = logging.getLogger(__name__)

#: Registry name of this transport.
TRANSPORT_NAME: Final[str] = "smtplib"

_SSL_VERSIONS: Final[Mapping[TlsVersion, ssl.TLSVersion]] = {
    TlsVersion.TLSV1: ssl.TLSVersion.TLSv1,
    TlsVersion.TLSV1_1: ssl.TLSVersion.TLSv1_1,
    TlsVersion.TLSV1_2: ssl.TLSVersion.TLSv1_2,
}


class TlsUnavailableError(smtplib.SMTPException):
    """STARTTLS was required but the server does not advertise it."""


@dataclass(frozen=True, slots=True)
class SmtpReceipt:
    """Outcome of an accepted message.

    Attributes:
        relay: Host the message was handed to.
        port: Port used for the session.
        accepted: Envelope recipients the server accepted.
        refused: Recipients the server refused, with ``(code, message)``.
    """

    relay: str
    port: int
    accepted: tuple[str, ...]
    refused: Mapping[str, tuple[int, bytes]] = field(default_factory=dict)


def build_ssl_context(config: SmtpConfig) -> ssl.SSLContext:
    """Create a verifying TLS context bounded by ``config.tls_versions``.

    Example:
        >>> from smtp_adapter.adapters.smtp.config import SmtpConfig
        >>> ctx = build_ssl_context(SmtpConfig(tls_versions=(TlsVersion.TLSV1_2,)))
        >>> ctx.maximum_version
        <TLSVersion.TLSv1_2: 771>
    """
    context = ssl.create_default_context()
    if config.tls_versions:
        allowed = [_SSL_VERSIONS[version] for version in config.tls_versions]
        context.minimum_version = min(allowed)
        context.maximum_version = max(allowed)
    return context


def _decode(message: bytes | str) -> str:
    return message.decode("utf-8", "replace") if isinstance(message, bytes) else str(message)


def _smtp_detail(exc: smtplib.SMTPResponseException) -> str:
    return f"{exc.smtp_code} {_decode(exc.smtp_error)}"


def _failure_from_exception(exc: Exception) -> TransportFailure:
    """Tag a transport exception with a stable reason.

    ``smtplib`` exceptions subclass :class:`OSError`, so SMTP-specific
    branches come first.
    """
    if isinstance(exc, smtplib.SMTPAuthenticationError):
        return TransportFailure("authentication_failed", _smtp_detail(exc))
    if isinstance(exc, smtplib.SMTPSenderRefused):
        return TransportFailure("sender_refused", _smtp_detail(exc))
    if isinstance(exc, smtplib.SMTPRecipientsRefused):
        refused = {rcpt: f"{code} {_decode(msg)}" for rcpt, (code, msg) in exc.recipients.items()}
        return TransportFailure("recipients_refused", refused)
    if isinstance(exc, smtplib.SMTPDataError):
        return TransportFailure("data_rejected", _smtp_detail(exc))
    if isinstance(exc, TlsUnavailableError):
        return TransportFailure("tls_unavailable", str(exc))
    if isinstance(exc, smtplib.SMTPNotSupportedError):
        return TransportFailure("not_supported", str(exc))
    if isinstance(exc, smtplib.SMTPException):
        return TransportFailure("smtp_error", str(exc))
    if isinstance(exc, TimeoutError):
        return TransportFailure("timeout", str(exc) or "timed out")
    if isinstance(exc, ssl.SSLError):
        return TransportFailure("tls_error", str(exc))
    return TransportFailure("connection_failed", str(exc))


class SmtplibTransport:
    """Send encoded messages through :class:`smtplib.SMTP` or ``SMTP_SSL``.

    Args:
        timeout: Socket timeout in seconds for connect and every command.
        smtp_factory: Factory for plain connections (replaceable in tests).
        smtp_ssl_factory: Factory for implicit-TLS connections.
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        smtp_factory: Callable[..., smtplib.SMTP] = smtplib.SMTP,
        smtp_ssl_factory: Callable[..., smtplib.SMTP] = smtplib.SMTP_SSL,
    ) -> None:
        self.timeout = timeout
        self._smtp_factory = smtp_factory
        self._smtp_ssl_factory = smtp_ssl_factory

    def _connect(self, config: SmtpConfig, relay: str, port: int) -> smtplib.SMTP:
        kwargs: dict[str, Any] = {"host": relay, "port": port, "timeout": self.timeout}
        if config.hostname is not None:
            kwargs["local_hostname"] = config.hostname
        if config.ssl:
            return self._smtp_ssl_factory(context=build_ssl_context(config), **kwargs)
        return self._smtp_factory(**kwargs)

    def _negotiate_tls(self, client: smtplib.SMTP, config: SmtpConfig) -> None:
        if config.ssl or config.tls is TlsMode.NEVER:
            return
        client.ehlo_or_helo_if_needed()
        if not client.has_extn("starttls"):
            if config.tls is TlsMode.ALWAYS:
                raise TlsUnavailableError("Server does not advertise STARTTLS")
            return
        client.starttls(context=build_ssl_context(config))
        client.ehlo()

    def _authenticate(self, client: smtplib.SMTP, config: SmtpConfig) -> None:
        if config.username is None or config.password is None:
            return
        client.ehlo_or_helo_if_needed()
        if config.auth is AuthMode.ALWAYS or client.has_extn("auth"):
            client.login(config.username, config.password)

    def send_blocking(
        self,
        envelope_from: str | None,
        envelope_to: Sequence[str],
        body: bytes,
        config: SmtpConfig,
    ) -> TransportResult:
        """Deliver ``body`` to ``envelope_to`` via the configured relay.

        Returns:
            ``TransportSuccess`` with an :class:`SmtpReceipt`, ``NoCredentials``
            when ``auth`` is ``always`` without username and password, or a
            ``TransportFailure`` tagged with the failure reason.
        """
        if config.relay is None or config.port is None:
            return TransportFailure("invalid_config", "relay and port must be configured")
        if config.auth is AuthMode.ALWAYS and (config.username is None or config.password is None):
            return NoCredentials()

        recipients = list(envelope_to)
        try:
            with self._connect(config, config.relay, config.port) as client:
                self._negotiate_tls(client, config)
                self._authenticate(client, config)
                refused = client.sendmail(envelope_from or "", recipients, body)
        except (smtplib.SMTPException, OSError) as exc:
            logger.debug("SMTP session failed", exc_info=True)
            return _failure_from_exception(exc)

        if refused:
            logger.warning("Some recipients were refused", extra={"refused": sorted(refused)})
        accepted = tuple(rcpt for rcpt in recipients if rcpt not in refused)
        return TransportSuccess(SmtpReceipt(relay=config.relay, port=config.port, accepted=accepted, refused=refused))


__all__ = [
    "TRANSPORT_NAME",
    "SmtpReceipt",
    "SmtplibTransport",
    "TlsUnavailableError",
    "build_ssl_context",
]
