"""Layered configuration loading for the CLI.

The ``[smtp]`` section holds the raw adapter settings exactly as an operator
wrote them (literals or ``{ system = "VAR" }`` indirections); resolution into
:class:`SmtpConfig` happens later, per delivery, so indirections are read from
the environment at send time rather than at load time.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any, Protocol, cast

from lib_layered_config import (
    DEFAULT_MAX_PROFILE_LENGTH,
    Config,
    read_config,
    validate_profile_name,
)

from smtp_adapter import __init__conf__

#: Top-level section carrying the raw SMTP settings.
SMTP_SECTION = "smtp"


class ConfigLoaderProtocol(Protocol):
    """Loader callable that also exposes ``cache_clear``."""

    def __call__(self, *, profile: str | None = None, start_dir: str | None = None) -> Config: ...
    def cache_clear(self) -> None: ...


def validate_profile(profile: str, max_length: int | None = None) -> None:
    """Reject profile names that are unsafe as directory components.

    Raises:
        ValueError: Empty, too long, reserved or path-traversing names.

    Examples:
        >>> validate_profile("staging")

        >>> validate_profile("../secrets")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: profile contains invalid characters: ../secrets
    """
    validate_profile_name(profile, max_length=max_length if max_length is not None else DEFAULT_MAX_PROFILE_LENGTH)


@lru_cache(maxsize=1)
def get_default_config_path() -> Path:
    """Return the bundled ``defaultconfig.toml`` next to this module.

    Example:
        >>> get_default_config_path().name
        'defaultconfig.toml'
    """
    return Path(__file__).parent / "defaultconfig.toml"


@lru_cache(maxsize=4)
def _read_layers(*, profile: str | None, start_dir: str | None) -> Config:
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        default_file=get_default_config_path(),
        start_dir=start_dir,
    )


def _get_config(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Load defaults, app, host, user, dotenv and environment layers.

    Later layers win. Environment variables use the slug prefix, e.g.
    ``SMTP_ADAPTER___SMTP__SERVER=mail.example.com`` sets ``smtp.server``.
    Results are cached per ``(profile, start_dir)``.

    Args:
        profile: Optional profile name; inserts ``profile/<name>/`` into
            every configuration path.
        start_dir: Directory that seeds ``.env`` discovery.

    Example:
        >>> config = get_config()  # doctest: +SKIP
        >>> config.get("smtp", default={}).get("transport")  # doctest: +SKIP
        'smtplib'
    """
    if profile is not None:
        validate_profile(profile)
    return _read_layers(profile=profile, start_dir=start_dir)


def _cache_clear() -> None:
    """Forget cached configurations so the next load re-reads every layer."""
    _read_layers.cache_clear()


_get_config.cache_clear = _cache_clear  # type: ignore[attr-defined]
get_config: ConfigLoaderProtocol = cast(ConfigLoaderProtocol, _get_config)


def smtp_settings(config: Config) -> dict[str, Any]:
    """Return a mutable copy of the raw ``[smtp]`` section.

    A missing section yields an empty mapping; the resolver then reports the
    required keys.

    Example:
        >>> smtp_settings(Config({"smtp": {"server": "mx"}}, {}))
        {'server': 'mx'}
        >>> smtp_settings(Config({}, {}))
        {}
    """
    section: object = config.get(SMTP_SECTION, default={})
    if not isinstance(section, Mapping):
        return {}
    return dict(cast("Mapping[str, Any]", section))


__all__ = [
    "SMTP_SECTION",
    "get_config",
    "get_default_config_path",
    "smtp_settings",
    "validate_profile",
]
