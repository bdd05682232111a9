"""Delivery use case: resolve settings, encode the message, call the transport.

The coordinator is linear and holds no mutable state; every call resolves
the configuration afresh and builds exactly one encoded message. Retries,
timeouts and cancellation belong to the transport, whose exceptions
propagate unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..domain.errors import ConfigurationError, DeliveryError
from ..domain.enums import DeliveryErrorKind
from ..domain.message import EmailMessage
from ..domain.results import NoCredentials, TransportFailure, TransportResult, TransportSuccess
from ..domain.values import redact
from .ports import BuildMessage, ResolveSmtpConfig, Transport

if TYPE_CHECKING:
    from ..adapters.smtp.config import SmtpConfig

logger = logging.getLogger(__name__)


def map_transport_result(result: TransportResult) -> Any:
    """Translate a transport result into a receipt or a :class:`DeliveryError`.

    Raises:
        DeliveryError: For ``NoCredentials`` and ``TransportFailure`` results.
        TypeError: For any other shape, which indicates a transport defect.

    Example:
        >>> map_transport_result(TransportSuccess("250 OK"))
        '250 OK'
        >>> map_transport_result(NoCredentials())  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        DeliveryError: ...
    """
    if isinstance(result, TransportSuccess):
        return result.receipt
    if isinstance(result, NoCredentials):
        raise DeliveryError.missing_credentials()
    if isinstance(result, TransportFailure):
        raise DeliveryError(DeliveryErrorKind.TRANSPORT_REJECTED, result.reason, result.detail)
    raise TypeError(f"Transport returned an unexpected result: {result!r}")


@dataclass(frozen=True, slots=True)
class DeliveryCoordinator:
    """Compose configuration resolution, message encoding and a transport.

    Attributes:
        resolve_config: Turns raw settings into :class:`SmtpConfig`.
        build_message: Encodes the email model.
        transports: Registry of transports keyed by the ``transport`` setting.
    """

    resolve_config: ResolveSmtpConfig
    build_message: BuildMessage
    transports: Mapping[str, Transport]

    def select_transport(self, config: SmtpConfig, raw_config: Mapping[str, Any] | None = None) -> Transport:
        """Return the transport named by ``config.transport``.

        ``raw_config`` is attached, redacted, to the error for diagnostics.

        Raises:
            ConfigurationError: When the name is missing or not registered.
        """
        name = config.transport
        diagnostics = redact(raw_config or {})
        if name is None:
            raise ConfigurationError(
                "Key transport is required", missing_keys=("transport",), raw_config=diagnostics
            )
        try:
            return self.transports[name]
        except KeyError:
            known = ", ".join(sorted(self.transports)) or "none"
            raise ConfigurationError(
                f"Key transport names an unknown transport {name!r} (known: {known})",
                missing_keys=("transport",),
                raw_config=diagnostics,
            ) from None

    def deliver(
        self,
        email: EmailMessage,
        raw_config: Mapping[str, Any],
        *,
        environ: Mapping[str, str] | None = None,
    ) -> Any:
        """Deliver ``email`` using ``raw_config`` and return the transport receipt.

        Args:
            email: Message model to encode and send.
            raw_config: Raw adapter settings, resolved on every call.
            environ: Environment for indirections; ``os.environ`` when None.

        Returns:
            The receipt reported by the transport on success.

        Raises:
            ConfigurationError: Required settings are missing, or the
                configured transport is unknown.
            DeliveryError: The transport reported missing credentials or a
                ``(reason, detail)`` failure.
            TypeError: The transport returned an unexpected result shape.
        """
        config = self.resolve_config(raw_config, environ=environ)
        encoded = self.build_message(email)
        transport = self.select_transport(config, raw_config)

        logger.info(
            "Delivering email",
            extra={
                "relay": config.relay,
                "port": config.port,
                "transport": config.transport,
                "sender": encoded.envelope_from,
                "recipients": list(encoded.envelope_to),
            },
        )
        result = transport.send_blocking(encoded.envelope_from, encoded.envelope_to, encoded.body, config)
        try:
            receipt = map_transport_result(result)
        except DeliveryError as exc:
            logger.error(
                "Email delivery failed",
                extra={"kind": exc.kind.value, "reason": repr(exc.reason), "relay": config.relay},
            )
            raise
        logger.info("Email delivered", extra={"relay": config.relay, "recipients": list(encoded.envelope_to)})
        return receipt


__all__ = [
    "DeliveryCoordinator",
    "map_transport_result",
]
