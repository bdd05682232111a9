"""Canonical SMTP configuration model and the resolver that produces it.

The resolver turns a loosely typed configuration mapping (strings, enums,
environment indirections) into a frozen, strongly typed
:class:`SmtpConfig`. Resolution runs on every delivery so environment
indirections always reflect the current process environment.

Resolution order:
    1. Replace every environment indirection with the variable's value.
    2. Fail with :class:`ConfigurationError` if ``server`` or ``port`` is missing.
    3. Insert defaults for ``tls``, ``ssl``, ``retries``, ``auth``, ``transport``.
    4. Coerce each recognised key; unknown keys and malformed values are dropped.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable, Iterator, Mapping
from enum import Enum
from typing import Any, Final, TypeVar

from pydantic import BaseModel, ConfigDict

from smtp_adapter.domain.enums import AuthMode, TlsMode, TlsVersion
from smtp_adapter.domain.errors import ConfigurationError
from smtp_adapter.domain.values import REDACTED, redact, resolve_value

logger = logging.getLogger(__name__)

#: Transport registry name used when ``transport`` is not configured.
DEFAULT_TRANSPORT: Final[str] = "smtplib"

REQUIRED_KEYS: Final[tuple[str, ...]] = ("server", "port")

DEFAULT_CONFIGURATION: Final[Mapping[str, Any]] = {
    "tls": TlsMode.IF_AVAILABLE,
    "ssl": False,
    "retries": 1,
    "transport": DEFAULT_TRANSPORT,
    "auth": AuthMode.IF_AVAILABLE,
}

E = TypeVar("E", bound=Enum)


class SmtpConfig(BaseModel):
    """Fully resolved, typed settings consumed by a transport.

    ``None`` means the setting was never supplied or its value was dropped
    as malformed; transports apply their own behaviour in that case.

    Example:
        >>> config = SmtpConfig(relay="smtp.example.com", port=587, password="secret123")
        >>> config.relay, config.port
        ('smtp.example.com', 587)
        >>> "secret123" in repr(config) or "secret123" in str(config)
        False
    """

    model_config = ConfigDict(frozen=True, strict=True)

    relay: str | None = None
    port: int | None = None
    username: str | None = None
    password: str | None = None
    tls: TlsMode | None = None
    tls_versions: tuple[TlsVersion, ...] | None = None
    ssl: bool | None = None
    retries: int | None = None
    hostname: str | None = None
    no_mx_lookups: bool | None = None
    auth: AuthMode | None = None
    transport: str | None = None

    def __repr_args__(self) -> Iterator[tuple[str | None, Any]]:
        """Feed ``repr`` and ``str`` with the password redacted."""
        for name, value in super().__repr_args__():
            if name == "password" and value is not None:
                yield name, REDACTED
            else:
                yield name, value

    def to_display_dict(self) -> dict[str, Any]:
        """Return the supplied settings as JSON-friendly values, password redacted.

        Example:
            >>> SmtpConfig(relay="smtp.example.com", password="x").to_display_dict()
            {'relay': 'smtp.example.com', 'password': '[REDACTED]'}
        """
        data = self.model_dump(mode="json", exclude_none=True)
        if "password" in data:
            data["password"] = REDACTED
        return data


# ======================== Coercion ========================
# Each coercer returns the typed value or None, where None means "drop".


def _coerce_text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _coerce_integer(value: Any) -> int | None:
    """Accept integers and numeric text.

    Example:
        >>> _coerce_integer("587"), _coerce_integer(25), _coerce_integer("abc")
        (587, 25, None)
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _coerce_boolean(value: Any) -> bool | None:
    """Accept booleans and the exact texts ``"true"``/``"false"``.

    Example:
        >>> _coerce_boolean("true"), _coerce_boolean(False), _coerce_boolean("maybe")
        (True, False, None)
    """
    if isinstance(value, bool):
        return value
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def _enum_coercer(enum_cls: type[E]) -> Callable[[Any], E | None]:
    def _coerce(value: Any) -> E | None:
        if isinstance(value, enum_cls):
            return value
        if isinstance(value, str):
            try:
                return enum_cls(value)
            except ValueError:
                return None
        return None

    return _coerce


_coerce_tls_version = _enum_coercer(TlsVersion)


def _coerce_tls_versions(value: Any) -> tuple[TlsVersion, ...] | None:
    """Parse comma-separated text or a list into an ordered set of versions.

    Example:
        >>> _coerce_tls_versions("tlsv1.1,tlsv1.2,bogus")
        (<TlsVersion.TLSV1_1: 'tlsv1.1'>, <TlsVersion.TLSV1_2: 'tlsv1.2'>)
    """
    items: Iterable[Any]
    if isinstance(value, str):
        items = (part.strip() for part in value.split(","))
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        return None
    versions = (_coerce_tls_version(item) for item in items)
    return tuple(dict.fromkeys(version for version in versions if version is not None))


#: Raw key -> (SmtpConfig field, coercer).
_KEY_MAPPING: Final[Mapping[str, tuple[str, Callable[[Any], Any]]]] = {
    "server": ("relay", _coerce_text),
    "hostname": ("hostname", _coerce_text),
    "port": ("port", _coerce_integer),
    "username": ("username", _coerce_text),
    "password": ("password", _coerce_text),
    "tls": ("tls", _enum_coercer(TlsMode)),
    "allowed_tls_versions": ("tls_versions", _coerce_tls_versions),
    "ssl": ("ssl", _coerce_boolean),
    "retries": ("retries", _coerce_integer),
    "no_mx_lookups": ("no_mx_lookups", _coerce_boolean),
    "auth": ("auth", _enum_coercer(AuthMode)),
    "transport": ("transport", _coerce_text),
}

# ======================== Resolution steps ========================


def _resolve_indirections(raw_config: Mapping[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    resolved: dict[str, Any] = {}
    for key, value in raw_config.items():
        concrete = resolve_value(value, environ)
        if concrete is not value:
            logger.debug("Resolved SMTP setting from environment", extra={"key": key, "found": concrete is not None})
        resolved[key] = concrete
    return resolved


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def _check_required(resolved: Mapping[str, Any], raw_config: Mapping[str, Any]) -> None:
    missing = [key for key in REQUIRED_KEYS if _is_missing(resolved.get(key))]
    if missing:
        errors = [f"Key {key} is required" for key in missing]
        raise ConfigurationError.from_missing(errors, missing, redact(raw_config))


def _apply_defaults(resolved: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(resolved)
    for key, default in DEFAULT_CONFIGURATION.items():
        if merged.get(key) is None:
            merged[key] = default
    return merged


def _coerce_all(settings: Mapping[str, Any]) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for key, value in settings.items():
        mapping = _KEY_MAPPING.get(key)
        if mapping is None:
            logger.warning("Dropping unrecognised SMTP setting", extra={"key": key})
            continue
        field_name, coerce = mapping
        coerced = coerce(value)
        if coerced is None:
            if value is not None:
                logger.warning("Dropping malformed SMTP setting value", extra={"key": key})
            continue
        fields[field_name] = coerced
    return fields


def resolve_smtp_config(
    raw_config: Mapping[str, Any],
    *,
    environ: Mapping[str, str] | None = None,
) -> SmtpConfig:
    """Resolve a raw SMTP configuration mapping into :class:`SmtpConfig`.

    Args:
        raw_config: Adapter settings keyed by ``server``, ``port``, ``username``
            and the other recognised keys. Values may be literals,
            :class:`~smtp_adapter.domain.values.EnvRef` markers or
            ``{"system": "NAME"}`` tables.
        environ: Environment used for indirections. Defaults to ``os.environ``
            read at call time.

    Returns:
        Frozen canonical configuration.

    Raises:
        ConfigurationError: When ``server`` or ``port`` is absent, ``None`` or
            empty after indirections are resolved. Lists every missing key.

    Example:
        >>> config = resolve_smtp_config({"server": "smtp.example.com", "port": "2525"})
        >>> config.port, config.tls.value, config.ssl, config.retries
        (2525, 'if_available', False, 1)

        >>> resolve_smtp_config({})  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ConfigurationError: ...
    """
    env: Mapping[str, str] = os.environ if environ is None else environ
    resolved = _resolve_indirections(raw_config, env)
    _check_required(resolved, raw_config)
    return SmtpConfig(**_coerce_all(_apply_defaults(resolved)))


__all__ = [
    "DEFAULT_CONFIGURATION",
    "DEFAULT_TRANSPORT",
    "REQUIRED_KEYS",
    "SmtpConfig",
    "redact",
    "resolve_smtp_config",
]
