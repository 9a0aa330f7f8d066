"""Shared CLI constants.

Contents:
    * :data:`CLICK_CONTEXT_SETTINGS` - Click settings shared by every command.
    * :data:`DEFAULT_MAILER_NAME` - Mailer used when ``--mailer`` is omitted.
    * :data:`MAILERS_SECTION` - Top-level config section holding mailer definitions.
    * :data:`TRACEBACK_SUMMARY_LIMIT` / :data:`TRACEBACK_VERBOSE_LIMIT` -
      Character budgets for printed tracebacks.
"""

from __future__ import annotations

from typing import Final

CLICK_CONTEXT_SETTINGS: Final[dict[str, list[str]]] = {"help_option_names": ["-h", "--help"]}

#: Matches ``[mailers.default]`` in the bundled defaultconfig.toml.
DEFAULT_MAILER_NAME: Final[str] = "default"

MAILERS_SECTION: Final[str] = "mailers"

TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

__all__ = [
    "CLICK_CONTEXT_SETTINGS",
    "DEFAULT_MAILER_NAME",
    "MAILERS_SECTION",
    "TRACEBACK_SUMMARY_LIMIT",
    "TRACEBACK_VERBOSE_LIMIT",
]
