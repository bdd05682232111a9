"""Logging initialization shared by every entry point.

The library modules only ever call ``logging.getLogger(__name__)``; this
module is where those records get a destination. It configures the
lib_log_rich runtime once from the ``[lib_log_rich]`` section of the layered
configuration, bridges stdlib logging into it, and applies the
``package_level`` threshold to the ``smtp_adapter`` logger hierarchy so the
resolver's DEBUG records (indirections, dropped settings) can be switched on
without touching third-party loggers.

Contents:
    * :class:`LoggingConfigModel` – validated view of the ``[lib_log_rich]`` section.
    * :func:`init_logging` – idempotent logging initialization.
"""

from __future__ import annotations

import logging
from typing import cast

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict, field_validator

from smtp_adapter import __init__conf__

#: Logger hierarchy controlled by ``package_level``.
PACKAGE_LOGGER = "smtp_adapter"


class LoggingConfigModel(BaseModel):
    """Pydantic model for the ``[lib_log_rich]`` config section.

    ``service``, ``environment`` and ``package_level`` are consumed here;
    every other key passes through to ``lib_log_rich.runtime.RuntimeConfig``.

    Example:
        >>> model = LoggingConfigModel(service="mailer", package_level="debug")
        >>> model.service, model.package_level
        ('mailer', 'DEBUG')

        >>> LoggingConfigModel().environment
        'prod'
    """

    service: str | None = None
    environment: str = "prod"
    package_level: str = "INFO"

    model_config = ConfigDict(extra="allow")

    @field_validator("package_level", mode="before")
    @classmethod
    def _normalise_level(cls, v: object) -> object:
        """Upper-case level names so ``debug`` and ``DEBUG`` behave alike."""
        return v.upper() if isinstance(v, str) else v

    def runtime_extras(self) -> dict[str, object]:
        """Return the pass-through keys destined for lib_log_rich."""
        return self.model_dump(exclude={"service", "environment", "package_level"}, exclude_none=True)


def _parse_logging_section(config: Config) -> LoggingConfigModel:
    log_raw: object = config.get("lib_log_rich", default={})
    return LoggingConfigModel.model_validate(cast("dict[str, object]", log_raw) if log_raw else {})


def _build_runtime_config(parsed: LoggingConfigModel) -> lib_log_rich.runtime.RuntimeConfig:
    """Map the parsed section onto lib_log_rich's RuntimeConfig.

    The service name falls back to the package name when not configured.
    """
    return lib_log_rich.runtime.RuntimeConfig(
        service=parsed.service or __init__conf__.name,
        environment=parsed.environment,
        **parsed.runtime_extras(),
    )


def init_logging(config: Config) -> None:
    """Initialize lib_log_rich runtime with the provided configuration.

    Safe to call repeatedly: the first call loads ``.env`` files (so
    ``LOG_*`` variables apply), initializes the runtime and attaches stdlib
    logging; later calls only re-apply ``package_level``.

    Args:
        config: Already-loaded layered configuration containing the
            ``[lib_log_rich]`` section.

    Side Effects:
        Loads .env files into the process environment on first invocation.
        Initializes the global lib_log_rich runtime on first invocation.
        Sets the level of the ``smtp_adapter`` logger.

    Example:
        >>> from lib_layered_config import Config
        >>> config = Config({"lib_log_rich": {"environment": "test"}}, {})
        >>> init_logging(config)  # doctest: +SKIP
    """
    parsed = _parse_logging_section(config)
    logging.getLogger(PACKAGE_LOGGER).setLevel(parsed.package_level)
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(_build_runtime_config(parsed))
    lib_log_rich.runtime.attach_std_logging()


__all__ = [
    "PACKAGE_LOGGER",
    "LoggingConfigModel",
    "init_logging",
]
