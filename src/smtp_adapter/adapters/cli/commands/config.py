"""Configuration inspection commands.

Contents:
    * :func:`cli_config` - Display the merged layered configuration.
    * :func:`cli_smtp_config` - Display the resolved SMTP configuration.
"""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click
from lib_layered_config import Config

from smtp_adapter.adapters.config.display import display_smtp_config
from smtp_adapter.adapters.config.loader import smtp_settings
from smtp_adapter.adapters.config.overrides import apply_overrides
from smtp_adapter.domain.enums import OutputFormat
from smtp_adapter.domain.errors import ConfigurationError

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import CLIContext, get_cli_context
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)

_FORMAT_OPTION = click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
    default=OutputFormat.HUMAN.value,
    help="Output format (human-readable or JSON)",
)

_PROFILE_OPTION = click.option(
    "--profile",
    type=str,
    default=None,
    help="Override profile from root command (e.g., 'production', 'test')",
)


def _resolve_config(cli_ctx: CLIContext, profile: str | None) -> tuple[Config, str | None]:
    """Return the context config, or reload it for a subcommand ``--profile``.

    A reload reapplies the root-level ``--set`` overrides.
    """
    if profile:
        config = cli_ctx.services.get_config(profile=profile)
        return apply_overrides(config, cli_ctx.set_overrides), profile
    return cli_ctx.config, cli_ctx.profile


@click.command("config", context_settings=CLICK_CONTEXT_SETTINGS)
@_FORMAT_OPTION
@click.option(
    "--section",
    type=str,
    default=None,
    help="Show only a specific configuration section (e.g., 'smtp')",
)
@_PROFILE_OPTION
@click.pass_context
def cli_config(ctx: click.Context, output_format: str, section: str | None, profile: str | None) -> None:
    """Display the merged configuration from all sources.

    Precedence: defaults -> app -> host -> user -> dotenv -> env -> --set
    """
    cli_ctx = get_cli_context(ctx)
    effective_config, effective_profile = _resolve_config(cli_ctx, profile)
    fmt = OutputFormat(output_format.lower())

    extra = {"command": "config", "format": fmt.value, "profile": effective_profile}
    with lib_log_rich.runtime.bind(job_id="cli-config", extra=extra):
        logger.info("Displaying configuration", extra={"section": section})
        click.echo()
        try:
            cli_ctx.services.display_config(
                effective_config, output_format=fmt, section=section, profile=effective_profile
            )
        except ValueError as exc:
            click.echo(f"\nError: {exc}", err=True)
            raise SystemExit(ExitCode.INVALID_ARGUMENT) from exc


@click.command("smtp-config", context_settings=CLICK_CONTEXT_SETTINGS)
@_FORMAT_OPTION
@_PROFILE_OPTION
@click.pass_context
def cli_smtp_config(ctx: click.Context, output_format: str, profile: str | None) -> None:
    """Resolve the ``[smtp]`` section and show the settings a delivery would use.

    Environment indirections are read now; the password is masked.
    Exits with 78 when required settings are missing.
    """
    cli_ctx = get_cli_context(ctx)
    effective_config, effective_profile = _resolve_config(cli_ctx, profile)
    fmt = OutputFormat(output_format.lower())

    extra = {"command": "smtp-config", "format": fmt.value, "profile": effective_profile}
    with lib_log_rich.runtime.bind(job_id="cli-smtp-config", extra=extra):
        try:
            resolved = cli_ctx.services.resolve_smtp_config(smtp_settings(effective_config))
        except ConfigurationError as exc:
            logger.error("SMTP configuration incomplete", extra={"missing_keys": list(exc.missing_keys)})
            click.echo(f"\nError: {exc}", err=True)
            raise SystemExit(ExitCode.CONFIG_ERROR) from exc
        display_smtp_config(resolved, output_format=fmt)


__all__ = [
    "cli_config",
    "cli_smtp_config",
]
