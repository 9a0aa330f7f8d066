"""Configuration adapter - loading, overrides, display, and mailer definitions.

Contents:
    * :mod:`.loader` - Layered configuration loading with caching
    * :mod:`.overrides` - CLI ``--set`` override parsing and application
    * :mod:`.display` - Configuration display in human/JSON formats
    * :mod:`.mailers` - Mailer definitions from ``[mailers.<name>]`` sections
"""

from __future__ import annotations

from .display import display_config
from .loader import get_config, get_default_config_path
from .mailers import define_mailer, load_mailer, resolve_adapter
from .overrides import apply_overrides

__all__ = [
    "apply_overrides",
    "define_mailer",
    "display_config",
    "get_config",
    "get_default_config_path",
    "load_mailer",
    "resolve_adapter",
]
