"""Exit codes for the CLI error paths.

Values follow ``sysexits.h`` where one fits, so scripts wrapping
``smtp-adapter`` can tell configuration problems from relay outages.

Contents:
    * :class:`ExitCode` - IntEnum of the codes raised by commands.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes raised via ``SystemExit`` by CLI commands.

    * 0: success
    * 1: unexpected failure
    * 2: attachment file not found (``ENOENT``)
    * 22: invalid argument (``EINVAL``)
    * 69: delivery failed (``EX_UNAVAILABLE``)
    * 78: SMTP settings incomplete (``EX_CONFIG``)

    Example:
        >>> int(ExitCode.CONFIG_ERROR)
        78
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    FILE_NOT_FOUND = 2
    INVALID_ARGUMENT = 22
    SMTP_FAILURE = 69
    CONFIG_ERROR = 78


__all__ = ["ExitCode"]
