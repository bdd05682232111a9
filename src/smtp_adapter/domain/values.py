"""Configuration values that are either literals or environment indirections.

Raw SMTP settings may defer to an environment variable that is read at
delivery time, so credentials can rotate without reloading configuration.
Configuration files express the same indirection as a ``{system = "NAME"}``
table.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

#: Table key marking an environment indirection inside configuration files.
SYSTEM_KEY = "system"

#: Placeholder shown instead of secret values.
REDACTED = "[REDACTED]"


@dataclass(frozen=True, slots=True)
class LiteralValue:
    """Value used as given."""

    value: Any


@dataclass(frozen=True, slots=True)
class EnvRef:
    """Value read from the named environment variable at resolution time.

    Example:
        >>> EnvRef("SMTP_PASSWORD").resolve({"SMTP_PASSWORD": "s3cret"})
        's3cret'
        >>> EnvRef("UNSET").resolve({}) is None
        True
    """

    name: str

    def resolve(self, environ: Mapping[str, str]) -> str | None:
        return environ.get(self.name)


ConfigValue = LiteralValue | EnvRef


def classify(value: Any) -> ConfigValue:
    """Tag a raw configuration value as a literal or an indirection.

    Example:
        >>> classify({"system": "SMTP_USERNAME"})
        EnvRef(name='SMTP_USERNAME')
        >>> classify(587)
        LiteralValue(value=587)
    """
    if isinstance(value, (EnvRef, LiteralValue)):
        return value
    if isinstance(value, Mapping) and set(value) == {SYSTEM_KEY} and isinstance(value[SYSTEM_KEY], str):
        return EnvRef(value[SYSTEM_KEY])
    return LiteralValue(value)


def resolve_value(value: Any, environ: Mapping[str, str]) -> Any:
    """Return the concrete value behind a raw configuration entry.

    Example:
        >>> resolve_value({"system": "PORT"}, {"PORT": "2525"})
        '2525'
        >>> resolve_value(LiteralValue("smtp.example.com"), {})
        'smtp.example.com'
    """
    tagged = classify(value)
    if isinstance(tagged, EnvRef):
        return tagged.resolve(environ)
    return tagged.value


def redact(raw_config: Mapping[str, Any]) -> dict[str, Any]:
    """Copy a raw configuration with the password hidden.

    Example:
        >>> redact({"server": "smtp", "password": "pw"})
        {'server': 'smtp', 'password': '[REDACTED]'}
    """
    return {key: (REDACTED if key == "password" and value is not None else value) for key, value in raw_config.items()}


__all__ = [
    "REDACTED",
    "SYSTEM_KEY",
    "ConfigValue",
    "EnvRef",
    "LiteralValue",
    "classify",
    "redact",
    "resolve_value",
]
