"""Send email CLI command.

Delivers a message through the transport named in ``[smtp]``.
"""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from smtp_adapter.adapters.config.loader import smtp_settings

from ...constants import CLICK_CONTEXT_SETTINGS
from ...context import get_cli_context
from ._common import build_email_from_options, execute_with_delivery_error_handling, read_attachments

logger = logging.getLogger(__name__)


@click.command("send-email", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--from", "from_address", required=True, help="Sender address")
@click.option("--from-name", default=None, help="Sender display name")
@click.option("--to", "to", multiple=True, required=True, help="Recipient address (repeatable)")
@click.option("--cc", "cc", multiple=True, help="Carbon-copy address (repeatable)")
@click.option("--bcc", "bcc", multiple=True, help="Blind carbon-copy address (repeatable, envelope only)")
@click.option("--subject", default="", help="Email subject line")
@click.option("--body", default="", help="Plain-text email body")
@click.option("--body-html", default="", help="HTML email body")
@click.option(
    "--attachment",
    "attachments",
    multiple=True,
    type=click.Path(path_type=str),
    help="File to attach (repeatable)",
)
@click.pass_context
def cli_send_email(
    ctx: click.Context,
    from_address: str,
    from_name: str | None,
    to: tuple[str, ...],
    cc: tuple[str, ...],
    bcc: tuple[str, ...],
    subject: str,
    body: str,
    body_html: str,
    attachments: tuple[str, ...],
) -> None:
    """Send an email using the configured SMTP settings.

    Exit codes: 78 for incomplete settings, 2 for a missing attachment
    file, 69 when the transport reports a failure.
    """
    cli_ctx = get_cli_context(ctx)
    extra = {"command": "send-email", "recipients": [*to, *cc], "subject": subject}

    with lib_log_rich.runtime.bind(job_id="cli-send-email", extra=extra):

        def _send() -> object:
            email = build_email_from_options(
                from_address=from_address,
                from_name=from_name,
                to=to,
                cc=cc,
                bcc=bcc,
                subject=subject,
                body=body,
                body_html=body_html,
                attachments=read_attachments(attachments),
            )
            logger.info(
                "Sending email",
                extra={"has_html": bool(body_html), "attachment_count": len(attachments), "bcc_count": len(bcc)},
            )
            return cli_ctx.services.deliver(email, smtp_settings(cli_ctx.config))

        receipt = execute_with_delivery_error_handling(_send)
        click.echo("\nEmail sent successfully!")
        click.echo(f"Receipt: {receipt}")


__all__ = ["cli_send_email"]
