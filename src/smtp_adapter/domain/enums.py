"""Type-safe domain enums for SMTP settings and output formats."""

from __future__ import annotations

from enum import Enum


class TlsMode(str, Enum):
    """STARTTLS policy handed to the transport.

    Inherits from str so configuration text compares equal to members.

    Attributes:
        IF_AVAILABLE: Upgrade when the server advertises STARTTLS.
        ALWAYS: Require STARTTLS; fail when the server lacks it.
        NEVER: Stay on the plain connection.

    Example:
        >>> TlsMode("always") is TlsMode.ALWAYS
        True
        >>> TlsMode.NEVER == "never"
        True
    """

    IF_AVAILABLE = "if_available"
    ALWAYS = "always"
    NEVER = "never"


class AuthMode(str, Enum):
    """Authentication policy handed to the transport.

    Attributes:
        IF_AVAILABLE: Authenticate when credentials are configured.
        ALWAYS: Refuse to send without credentials.

    Example:
        >>> AuthMode("if_available")
        <AuthMode.IF_AVAILABLE: 'if_available'>
    """

    IF_AVAILABLE = "if_available"
    ALWAYS = "always"


class TlsVersion(str, Enum):
    """TLS protocol versions that may be allowed for the SMTP session.

    Example:
        >>> [v.value for v in TlsVersion]
        ['tlsv1', 'tlsv1.1', 'tlsv1.2']
    """

    TLSV1 = "tlsv1"
    TLSV1_1 = "tlsv1.1"
    TLSV1_2 = "tlsv1.2"


class OutputFormat(str, Enum):
    """Output format options for configuration display.

    Attributes:
        HUMAN: Human-readable TOML-like output format.
        JSON: Machine-readable JSON output format.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


class DeliveryErrorKind(str, Enum):
    """Failure categories reported by :class:`~smtp_adapter.domain.errors.DeliveryError`.

    Attributes:
        MISSING_CREDENTIALS: Authentication was required but no username/password given.
        TRANSPORT_REJECTED: The transport reported a ``(reason, detail)`` failure.
    """

    MISSING_CREDENTIALS = "missing_credentials"
    TRANSPORT_REJECTED = "transport_rejected"


__all__ = [
    "AuthMode",
    "DeliveryErrorKind",
    "OutputFormat",
    "TlsMode",
    "TlsVersion",
]
