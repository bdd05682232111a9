"""Adapters layer - infrastructure and framework integrations.

Contents:
    * :mod:`.smtp` - Settings resolution, MIME encoding, smtplib transport
    * :mod:`.config` - Layered configuration loading, display and overrides
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.memory` - In-memory doubles used by the testing composition
    * :mod:`.cli` - rich-click command line interface
"""

from __future__ import annotations

__all__: list[str] = []
