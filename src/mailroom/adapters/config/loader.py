"""Layered configuration loading, cached per profile.

Contents:
    * :data:`get_config` - Read defaults, app, host, user, dotenv and env layers.
    * :func:`validate_profile` - Reject unsafe profile names.
    * :func:`get_default_config_path` - The bundled ``defaultconfig.toml``.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any, Protocol, cast

from lib_layered_config import (
    DEFAULT_MAX_PROFILE_LENGTH,
    Config,
    read_config,
    validate_profile_name,
)

from mailroom import __init__conf__
from mailroom.domain.errors import ConfigurationError


class ConfigLoaderProtocol(Protocol):
    """A ``get_config`` callable whose cache can be dropped (tests do)."""

    def __call__(self, *, profile: str | None = None, start_dir: str | None = None) -> Config: ...
    def cache_clear(self) -> None: ...


def validate_profile(profile: str, max_length: int | None = None) -> None:
    """Validate a profile name with lib_layered_config's rules.

    Raises:
        ValueError: If the name is empty, too long, or tries path traversal.

    Examples:
        >>> validate_profile("production")

        >>> validate_profile("../etc/passwd")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: profile contains invalid characters: ../etc/passwd
    """
    validate_profile_name(profile, max_length=max_length or DEFAULT_MAX_PROFILE_LENGTH)


@lru_cache(maxsize=1)
def get_default_config_path() -> Path:
    """Return the path to the bundled ``defaultconfig.toml``.

    Example:
        >>> get_default_config_path().name
        'defaultconfig.toml'
    """
    return Path(__file__).parent / "defaultconfig.toml"


def check_mailers_section(config: Config) -> Config:
    """Fail fast when ``mailers`` or one of its entries is not a table.

    A bad definition would otherwise only surface when that mailer is
    loaded, possibly long after startup.

    Raises:
        ConfigurationError: If ``mailers`` or ``mailers.<name>`` is a scalar.

    Example:
        >>> check_mailers_section(Config({"mailers": "smtp"}, {}))  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ConfigurationError: [mailers] must be a table, got str
    """
    mailers: Any = config.get("mailers", default={})
    if not isinstance(mailers, Mapping):
        raise ConfigurationError(f"[mailers] must be a table, got {type(mailers).__name__}")
    for name, section in mailers.items():
        if not isinstance(section, Mapping):
            raise ConfigurationError(f"[mailers.{name}] must be a table, got {type(section).__name__}")
    return config


@lru_cache(maxsize=4)
def _read_layers(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    config = read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        default_file=get_default_config_path(),
        start_dir=start_dir,
    )
    return check_mailers_section(config)


def _get_config(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Load the layered configuration.

    Sources in precedence order: defaults -> app -> host -> user -> dotenv -> env.
    Mailer definitions live under ``[mailers.<name>]``; logging settings
    under ``[lib_log_rich]``.

    Args:
        profile: Inserts a ``profile/<name>/`` subdirectory into every path.
        start_dir: Directory that seeds .env discovery.

    Raises:
        ValueError: If ``profile`` is not a safe name.
        ConfigurationError: If the mailer definitions are malformed.

    Example:
        >>> get_config().get("mailers.default.adapter")
        'local'
    """
    if profile is not None:
        validate_profile(profile)
    return _read_layers(profile=profile, start_dir=start_dir)


_get_config.cache_clear = _read_layers.cache_clear  # type: ignore[attr-defined]
get_config: ConfigLoaderProtocol = cast(ConfigLoaderProtocol, _get_config)


__all__ = [
    "check_mailers_section",
    "get_config",
    "get_default_config_path",
    "validate_profile",
]
