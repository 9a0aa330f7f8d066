"""Configuration display on top of lib_layered_config.

Contents:
    * :func:`display_config` - Render the merged config (or one section).
    * :func:`mailer_view` - Narrow a config down to one mailer definition.

Secrets are redacted by lib_layered_config, so a mailer's
``smtp_password`` never reaches the terminal.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import lib_log_rich.runtime
from lib_layered_config import Config
from lib_layered_config import OutputFormat as LibOutputFormat
from lib_layered_config import display_config as _lib_display
from rich.console import Console

from mailroom.domain.enums import OutputFormat


def mailer_view(config: Config, name: str) -> Config:
    """Return a config holding only ``[mailers.<name>]``.

    Raises:
        ValueError: If no such mailer is configured.

    Example:
        >>> config = Config({"mailers": {"a": {"adapter": "local"}, "b": {"adapter": "smtp"}}}, {})
        >>> mailer_view(config, "b").as_dict()
        {'mailers': {'b': {'adapter': 'smtp'}}}
    """
    section: Any = config.get(f"mailers.{name}", default=None)
    if not isinstance(section, Mapping):
        raise ValueError(f"Mailer '{name}' not found in configuration")
    return Config({"mailers": {name: dict(section)}}, {})


def display_config(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    console: Console | None = None,
    profile: str | None = None,
) -> None:
    """Render ``config`` as TOML-like text or JSON.

    Pending log output is flushed first so log lines never interleave with
    the dump.

    Args:
        config: Already-loaded layered configuration object to display.
        output_format: HUMAN for TOML-like display or JSON.
        section: Show only this top-level section (``mailers``, ``lib_log_rich``).
        console: Rich Console to print to, mainly for tests.
        profile: Profile name shown in provenance comments.

    Raises:
        ValueError: If a section was requested that doesn't exist.
    """
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.flush()

    _lib_display(
        config,
        output_format=LibOutputFormat(output_format.value),
        section=section,
        profile=profile,
        console=console,
    )


__all__ = ["display_config", "mailer_view"]
