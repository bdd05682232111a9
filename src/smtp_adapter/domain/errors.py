"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .enums import DeliveryErrorKind

#: Detail attached to ``no_credentials`` transport failures.
NO_CREDENTIALS_DETAIL = "Username and password were not provided for authentication."


class ConfigurationError(Exception):
    """Required SMTP settings are missing.

    Carries every missing key at once so callers can fix the whole
    configuration in one pass, plus the (redacted) raw configuration for
    diagnostics.

    Attributes:
        missing_keys: Required keys that were absent, ``None`` or empty,
            in the order they are checked.
        raw_config: Copy of the offending configuration with secrets redacted.

    Example:
        >>> err = ConfigurationError("Key port is required", missing_keys=("port",))
        >>> str(err)
        'Key port is required'
        >>> err.missing_keys
        ('port',)
    """

    def __init__(
        self,
        message: str,
        *,
        missing_keys: Sequence[str] = (),
        raw_config: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.missing_keys: tuple[str, ...] = tuple(missing_keys)
        self.raw_config: dict[str, Any] = dict(raw_config) if raw_config is not None else {}

    @classmethod
    def from_missing(cls, errors: Sequence[str], missing_keys: Sequence[str], raw_config: Mapping[str, Any]) -> ConfigurationError:
        """Build the aggregated error raised by the configuration resolver.

        Example:
            >>> err = ConfigurationError.from_missing(
            ...     ["Key server is required"], ["server"], {"port": 25}
            ... )
            >>> "* Key server is required" in str(err)
            True
        """
        formatted = "\n".join(f"* {error}" for error in errors)
        message = (
            "The following settings have not been found in your settings:\n\n"
            f"{formatted}\n\n"
            "They are required to make the SMTP adapter work. Here is your configuration:\n\n"
            f"{dict(raw_config)!r}"
        )
        return cls(message, missing_keys=missing_keys, raw_config=raw_config)


class DeliveryError(Exception):
    """The transport refused or failed to deliver the message.

    Attributes:
        kind: Failure category.
        reason: Transport-supplied reason tag, unchanged.
        detail: Transport-supplied detail, unchanged.

    Example:
        >>> err = DeliveryError(DeliveryErrorKind.TRANSPORT_REJECTED, "permanent_failure", "550 no such user")
        >>> err.reason, err.detail
        ('permanent_failure', '550 no such user')
        >>> "550 no such user" in str(err)
        True
    """

    def __init__(self, kind: DeliveryErrorKind, reason: Any, detail: Any) -> None:
        self.kind = kind
        self.reason = reason
        self.detail = detail
        super().__init__(
            "There was a problem sending the email through SMTP.\n\n"
            f"The error is {reason!r}\n\n"
            "More detail below:\n\n"
            f"{detail!r}"
        )

    @classmethod
    def missing_credentials(cls) -> DeliveryError:
        """Return the error for a transport that required credentials it did not get.

        Example:
            >>> DeliveryError.missing_credentials().kind
            <DeliveryErrorKind.MISSING_CREDENTIALS: 'missing_credentials'>
        """
        return cls(DeliveryErrorKind.MISSING_CREDENTIALS, "no_credentials", NO_CREDENTIALS_DETAIL)


__all__ = [
    "NO_CREDENTIALS_DETAIL",
    "ConfigurationError",
    "DeliveryError",
]
