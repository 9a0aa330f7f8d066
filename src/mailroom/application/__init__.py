"""Application layer - the mailer and the port definitions it depends on.

Contents:
    * :mod:`.ports` - Adapter contract and callable service protocols
    * :mod:`.mailer` - Mailer binding and address normalization
"""

from __future__ import annotations

from .mailer import Mailer, MailerConfig, normalize_addresses
from .ports import (
    Adapter,
    DisplayConfig,
    GetConfig,
    InitLogging,
    LoadMailer,
)

__all__ = [
    "Adapter",
    "DisplayConfig",
    "GetConfig",
    "InitLogging",
    "LoadMailer",
    "Mailer",
    "MailerConfig",
    "normalize_addresses",
]
