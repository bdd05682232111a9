"""``--set SECTION.KEY=VALUE`` overrides layered on top of loaded config.

Values are parsed as JSON when possible so ``smtp.port=2525`` becomes an
integer and ``smtp.ssl=true`` a boolean; anything else stays text. Dotted
key paths build nested tables, which is how an indirection is supplied on
the command line: ``smtp.password.system=SMTP_PASSWORD``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import cast

import orjson
from lib_layered_config import Config

OverrideValue = str | int | float | bool | None | list[object] | dict[str, object]
"""Values :func:`coerce_value` can produce."""


@dataclass(frozen=True, slots=True)
class ConfigOverride:
    """One parsed ``--set`` argument."""

    section: str
    key_path: tuple[str, ...]
    value: OverrideValue


def coerce_value(raw: str) -> OverrideValue:
    """Decode ``raw`` as JSON, keeping it as text when that fails.

    Examples:
        >>> coerce_value("2525"), coerce_value("false"), coerce_value("smtp.example.com")
        (2525, False, 'smtp.example.com')
        >>> coerce_value('{"system": "SMTP_PASSWORD"}')
        {'system': 'SMTP_PASSWORD'}
        >>> coerce_value("")
        ''
    """
    if not raw:
        return raw
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError:
        return raw


def parse_override(raw: str) -> ConfigOverride:
    """Parse ``SECTION.KEY[.SUBKEY...]=VALUE``.

    Only the first ``=`` separates path from value, so values may contain
    ``=`` themselves.

    Raises:
        ValueError: No ``=``, no dot in the path, or an empty path component.

    Examples:
        >>> parse_override("smtp.server=mx.example.com")
        ConfigOverride(section='smtp', key_path=('server',), value='mx.example.com')
        >>> parse_override("smtp.password.system=SMTP_PASSWORD").key_path
        ('password', 'system')
        >>> parse_override("smtp=1")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: Invalid override 'smtp=1': key must contain at least one dot (SECTION.KEY)
    """
    path, sep, value = raw.partition("=")
    if not sep:
        raise ValueError(f"Invalid override {raw!r}: must contain '='")
    section, dot, rest = path.partition(".")
    if not dot:
        raise ValueError(f"Invalid override {raw!r}: key must contain at least one dot (SECTION.KEY)")
    if not section:
        raise ValueError(f"Invalid override {raw!r}: section name is empty")
    key_path = tuple(rest.split("."))
    if not all(key_path):
        raise ValueError(f"Invalid override {raw!r}: key path contains empty component")
    return ConfigOverride(section=section, key_path=key_path, value=coerce_value(value))


def _merge_into(tree: dict[str, dict[str, object]], override: ConfigOverride) -> None:
    """Place ``override.value`` at its path inside ``tree``.

    Raises:
        TypeError: An earlier override already put a scalar on the path.

    Example:
        >>> tree: dict[str, dict[str, object]] = {}
        >>> _merge_into(tree, parse_override("smtp.password.system=PW"))
        >>> tree
        {'smtp': {'password': {'system': 'PW'}}}
    """
    node: dict[str, object] = tree.setdefault(override.section, {})
    *parents, leaf = override.key_path
    for part in parents:
        child = node.setdefault(part, {})
        if not isinstance(child, dict):
            raise TypeError(f"Expected dict at key {part!r}, got {type(child).__name__}")
        node = cast("dict[str, object]", child)
    node[leaf] = override.value


def apply_overrides(config: Config, raw_overrides: tuple[str, ...]) -> Config:
    """Return ``config`` with every ``--set`` argument deep-merged in.

    Raises:
        ValueError: Any override string is malformed.

    Examples:
        >>> cfg = Config({"smtp": {"port": 25}}, {})
        >>> apply_overrides(cfg, ("smtp.port=2525",))["smtp"]["port"]
        2525
        >>> apply_overrides(cfg, ()) is cfg
        True
    """
    if not raw_overrides:
        return config
    tree: dict[str, dict[str, object]] = {}
    for raw in raw_overrides:
        _merge_into(tree, parse_override(raw))
    return config.with_overrides(tree)


__all__ = [
    "ConfigOverride",
    "OverrideValue",
    "apply_overrides",
    "coerce_value",
    "parse_override",
]
