"""Email CLI commands.

Contents:
    * :func:`.send_email.cli_send_email` - Deliver a message from the command line.
"""

from __future__ import annotations

from .send_email import cli_send_email

__all__ = ["cli_send_email"]
