"""Static package metadata surfaced to CLI commands and documentation.

Keep these values in sync with ``pyproject.toml``. The layered configuration
identifiers determine where configuration files are discovered on each
platform.
"""

from __future__ import annotations

name = "smtp_adapter"
title = "Translate email models and SMTP settings into wire-ready messages"
version = "1.0.0"
homepage = "https://github.com/smtp-adapter/smtp_adapter"
author = "smtp_adapter contributors"
author_email = "maintainers@smtp-adapter.dev"
shell_command = "smtp-adapter"

#: Vendor, application and slug used by lib_layered_config path discovery.
LAYEREDCONF_VENDOR = "smtp-adapter"
LAYEREDCONF_APP = "smtp-adapter"
LAYEREDCONF_SLUG = "smtp-adapter"


def print_info() -> None:
    """Print the summarised metadata block used by the ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for smtp_adapter:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "author",
    "author_email",
    "homepage",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
