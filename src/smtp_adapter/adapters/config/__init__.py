"""Configuration adapter - layered loading, display and ``--set`` overrides.

Contents:
    * :mod:`.loader` - Cached lib_layered_config loading and the ``[smtp]`` section
    * :mod:`.display` - Layered and resolved configuration display
    * :mod:`.overrides` - CLI ``--set`` override parsing and application
"""

from __future__ import annotations

from .display import display_config, display_smtp_config, render_smtp_config
from .loader import SMTP_SECTION, get_config, get_default_config_path, smtp_settings
from .overrides import apply_overrides

__all__ = [
    "SMTP_SECTION",
    "apply_overrides",
    "display_config",
    "display_smtp_config",
    "get_config",
    "get_default_config_path",
    "render_smtp_config",
    "smtp_settings",
]
