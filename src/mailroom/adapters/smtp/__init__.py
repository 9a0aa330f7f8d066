"""SMTP adapter - email delivery via btx_lib_mail.

Contents:
    * :class:`.transport.SmtpAdapter` - The delivery adapter
    * :class:`.config.SmtpConfig` - Adapter configuration model
    * :func:`.config.load_smtp_config` - Config mapping loader
"""

from __future__ import annotations

from .config import SmtpConfig, load_smtp_config
from .transport import SmtpAdapter

__all__ = [
    "SmtpAdapter",
    "SmtpConfig",
    "load_smtp_config",
]
