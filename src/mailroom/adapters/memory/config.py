"""Configuration ports without files or environment lookups.

``build_testing`` wires these in place of the layered loader and the Rich
display so tests never depend on the machine's configuration.
"""

from __future__ import annotations

from typing import Any

from lib_layered_config import Config

from mailroom.domain.enums import OutputFormat

#: Mailer definitions every in-memory config starts from.
DEFAULT_MAILERS: dict[str, dict[str, Any]] = {"default": {"adapter": "local"}}


def get_config_in_memory(
    *,
    profile: str | None = None,
    start_dir: str | None = None,
) -> Config:
    """Return a fresh Config holding only :data:`DEFAULT_MAILERS`.

    ``profile`` and ``start_dir`` are accepted for protocol compatibility
    and ignored.
    """
    mailers = {name: dict(section) for name, section in DEFAULT_MAILERS.items()}
    return Config({"mailers": mailers}, {})


def display_config_in_memory(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    profile: str | None = None,
) -> None:
    """Print nothing, but reject unknown sections like the real display.

    Raises:
        ValueError: If ``section`` is not present in ``config``.
    """
    if section is not None and config.get(section, default=None) is None:
        raise ValueError(f"Section '{section}' not found in configuration")


__all__ = [
    "DEFAULT_MAILERS",
    "display_config_in_memory",
    "get_config_in_memory",
]
