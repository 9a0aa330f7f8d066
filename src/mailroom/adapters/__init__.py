"""Adapters layer - delivery backends and framework integrations.

Contents:
    * :mod:`.smtp` - SMTP delivery via btx_lib_mail
    * :mod:`.memory` - In-process adapters (local mailbox, recording spy)
    * :mod:`.background` - Shared pool behind ``deliver_async``
    * :mod:`.config` - Configuration loading, overrides, display, mailer definitions
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.cli` - Click CLI framework integration
"""

from __future__ import annotations

__all__: list[str] = []
