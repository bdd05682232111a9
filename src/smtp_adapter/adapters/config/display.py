"""Render layered and resolved configuration for the CLI.

Two views exist: the raw layered configuration (delegated to
lib_layered_config, with provenance) and the resolved :class:`SmtpConfig`
a delivery would use. Both flush pending log output first so records and
configuration text do not interleave on the terminal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import lib_log_rich.runtime
import orjson
from lib_layered_config import Config
from lib_layered_config import OutputFormat as LibOutputFormat
from lib_layered_config import display_config as _lib_display
from rich.console import Console

from smtp_adapter.domain.enums import OutputFormat

if TYPE_CHECKING:
    from smtp_adapter.adapters.smtp.config import SmtpConfig


def _flush_logs() -> None:
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.flush()


def display_config(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    console: Console | None = None,
    profile: str | None = None,
) -> None:
    """Show the layered configuration with per-key provenance.

    Args:
        config: Loaded layered configuration.
        output_format: TOML-like human view or JSON.
        section: Restrict output to one top-level section such as ``smtp``.
        console: Target console; defaults to stdout.
        profile: Profile name shown in provenance comments.

    Raises:
        ValueError: The requested section does not exist.
    """
    _flush_logs()
    _lib_display(
        config,
        output_format=LibOutputFormat(output_format.value),
        section=section,
        profile=profile,
        console=console,
    )


def render_smtp_config(smtp_config: SmtpConfig, output_format: OutputFormat = OutputFormat.HUMAN) -> str:
    """Format a resolved configuration; the password is always masked.

    Example:
        >>> from smtp_adapter.adapters.smtp.config import SmtpConfig
        >>> print(render_smtp_config(SmtpConfig(relay="mx", port=25, password="pw")))
        relay = "mx"
        port = 25
        password = "[REDACTED]"
        >>> render_smtp_config(SmtpConfig(relay="mx"), OutputFormat.JSON)
        '{\\n  "relay": "mx"\\n}'
    """
    values = smtp_config.to_display_dict()
    if output_format is OutputFormat.JSON:
        return orjson.dumps(values, option=orjson.OPT_INDENT_2).decode("utf-8")
    lines: list[str] = []
    for key, value in values.items():
        lines.append(f"{key} = {orjson.dumps(value).decode('utf-8')}")
    return "\n".join(lines)


def display_smtp_config(
    smtp_config: SmtpConfig,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    console: Console | None = None,
) -> None:
    """Print :func:`render_smtp_config` output to ``console``."""
    _flush_logs()
    target = console if console is not None else Console()
    target.print(render_smtp_config(smtp_config, output_format), markup=False, highlight=False, soft_wrap=True)


__all__ = [
    "display_config",
    "display_smtp_config",
    "render_smtp_config",
]
