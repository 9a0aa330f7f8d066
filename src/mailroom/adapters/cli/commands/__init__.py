"""CLI command implementations.

Contents:
    * :func:`.info.cli_info` - Display package metadata
    * :func:`.config.cli_config` - Display merged configuration
    * :func:`.send_email.cli_send_email` - Compose and deliver an email
"""

from __future__ import annotations

from .config import cli_config
from .info import cli_info
from .send_email import cli_send_email

__all__ = [
    "cli_config",
    "cli_info",
    "cli_send_email",
]
