"""Helpers shared by the email CLI commands.

Builds the email model from command-line values and maps delivery errors
onto exit codes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import rich_click as click

from smtp_adapter import __init__conf__
from smtp_adapter.domain.errors import ConfigurationError, DeliveryError
from smtp_adapter.domain.message import Attachment, EmailMessage

from ...exit_codes import ExitCode

logger = logging.getLogger(__name__)


def read_attachments(paths: Sequence[str]) -> list[Attachment]:
    """Load each file as an attachment named after its basename.

    Raises:
        FileNotFoundError: A path does not exist or is not a regular file.
    """
    attachments: list[Attachment] = []
    for raw in paths:
        path = Path(raw)
        if not path.is_file():
            raise FileNotFoundError(f"Attachment not found: {raw}")
        attachments.append(Attachment(filename=path.name, data=path.read_bytes()))
    return attachments


def build_email_from_options(
    *,
    from_address: str | None,
    from_name: str | None,
    to: Sequence[str],
    cc: Sequence[str],
    bcc: Sequence[str],
    subject: str,
    body: str | None,
    body_html: str | None,
    attachments: Sequence[Attachment],
) -> EmailMessage:
    """Assemble an :class:`EmailMessage` from CLI option values.

    Empty bodies are treated as absent.

    Example:
        >>> email = build_email_from_options(
        ...     from_address="a@x.com", from_name="Alice", to=["b@x.com"], cc=[], bcc=[],
        ...     subject="Hi", body="hello", body_html="", attachments=[],
        ... )
        >>> email.from_address
        NamedAddress(display_name='Alice', email='a@x.com')
        >>> email.html_body is None
        True
    """
    sender: Any = None
    if from_address:
        sender = (from_name, from_address) if from_name else from_address
    return EmailMessage.create(
        subject=subject,
        from_address=sender,
        to=list(to),
        cc=list(cc),
        bcc=list(bcc),
        text_body=body or None,
        html_body=body_html or None,
        attachments=list(attachments),
    )


def _fail(exc: Exception, log_message: str, user_message: str, exit_code: ExitCode, hint: str | None = None) -> None:
    logger.error(log_message, extra={"error": str(exc), "error_type": type(exc).__name__})
    click.echo(f"\nError: {user_message} - {exc}", err=True)
    if hint:
        click.echo(hint, err=True)
    raise SystemExit(exit_code)


def execute_with_delivery_error_handling(operation: Callable[[], Any]) -> Any:
    """Run ``operation`` and turn known failures into exit codes.

    * :class:`ConfigurationError` -> 78 (``CONFIG_ERROR``)
    * :class:`FileNotFoundError` -> 2 (``FILE_NOT_FOUND``)
    * :class:`DeliveryError` -> 69 (``SMTP_FAILURE``)

    Anything else propagates to ``lib_cli_exit_tools`` at the CLI boundary.

    Returns:
        The value returned by ``operation``.
    """
    try:
        return operation()
    except ConfigurationError as exc:
        _fail(
            exc,
            "SMTP configuration error",
            "Configuration error",
            ExitCode.CONFIG_ERROR,
            hint=f"See: {__init__conf__.shell_command} smtp-config",
        )
    except FileNotFoundError as exc:
        _fail(exc, "Attachment file not found", "Attachment file not found", ExitCode.FILE_NOT_FOUND)
    except DeliveryError as exc:
        _fail(exc, "SMTP delivery failed", "Failed to send email", ExitCode.SMTP_FAILURE)
    return None


__all__ = [
    "build_email_from_options",
    "execute_with_delivery_error_handling",
    "read_attachments",
]
