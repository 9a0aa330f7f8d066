"""CLI adapter - rich_click command line for mailroom.

Contents:
    * :func:`.root.cli` - Root command group
    * :func:`.main.main` - Entry point with error handling
"""

from __future__ import annotations

from .main import main
from .root import cli

__all__ = ["cli", "main"]
