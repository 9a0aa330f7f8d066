"""Logging port that leaves lib_log_rich untouched.

Records stay in stdlib ``logging``, where pytest's ``caplog`` sees them.
"""

from __future__ import annotations

from lib_layered_config import Config


def init_logging_in_memory(config: Config) -> None:
    """Accept ``config`` and start nothing."""


__all__ = ["init_logging_in_memory"]
