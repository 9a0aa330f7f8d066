"""Parse and apply ``--set SECTION.KEY=VALUE`` CLI overrides to Config.

Lets one invocation retarget a mailer without editing files, e.g.
``--set mailers.default.adapter=smtp --set 'mailers.default.smtp_hosts=["mx:25"]'``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import cast

import orjson
from lib_layered_config import Config

CoercedValue = str | int | float | bool | None | list[object] | dict[str, object]
"""Union of types that :func:`coerce_value` can produce."""


@dataclass(frozen=True, slots=True)
class ConfigOverride:
    """A single parsed configuration override."""

    section: str
    key_path: tuple[str, ...]
    value: CoercedValue


def parse_override(raw: str) -> ConfigOverride:
    """Split a ``SECTION.KEY[.SUBKEY...]=VALUE`` string into a ConfigOverride.

    The first dot separates the section from the key path; the first ``=``
    separates the path from the value.

    Raises:
        ValueError: If the string lacks ``=``, has no dot in the key, or has
            empty section/key components.

    Examples:
        >>> override = parse_override("mailers.default.adapter=smtp")
        >>> override.section
        'mailers'
        >>> override.key_path
        ('default', 'adapter')
        >>> parse_override("mailers.smtp.timeout=5").value
        5
    """
    if "=" not in raw:
        raise ValueError(f"Invalid override {raw!r}: must contain '='")

    path_part, value_str = raw.split("=", maxsplit=1)

    if "." not in path_part:
        raise ValueError(f"Invalid override {raw!r}: key must contain at least one dot (SECTION.KEY)")

    section, *key_parts = path_part.split(".")

    if not section:
        raise ValueError(f"Invalid override {raw!r}: section name is empty")
    if not all(key_parts):
        raise ValueError(f"Invalid override {raw!r}: key path contains empty component")

    return ConfigOverride(section=section, key_path=tuple(key_parts), value=coerce_value(value_str))


def coerce_value(raw: str) -> CoercedValue:
    """Coerce a raw string value using JSON parsing with string fallback.

    Examples:
        >>> coerce_value("true")
        True
        >>> coerce_value('["smtp.example.com:587"]')
        ['smtp.example.com:587']
        >>> coerce_value("local")
        'local'
        >>> coerce_value("")
        ''
    """
    if raw == "":
        return ""
    try:
        return orjson.loads(raw)
    except (orjson.JSONDecodeError, ValueError):
        return raw


def _nest_override(target: dict[str, dict[str, object]], override: ConfigOverride) -> None:
    """Merge one override into a nested dict, creating intermediate levels.

    Raises:
        TypeError: When an intermediate key already holds a non-dict value.
    """
    node: dict[str, object] = target.setdefault(override.section, {})
    for part in override.key_path[:-1]:
        existing = node.setdefault(part, {})
        if not isinstance(existing, dict):
            raise TypeError(f"Expected dict at key {part!r}, got {type(existing).__name__}")
        node = cast("dict[str, object]", existing)
    node[override.key_path[-1]] = override.value


def scope_overrides(prefix: str, raw_overrides: tuple[str, ...]) -> tuple[str, ...]:
    """Prefix ``KEY=VALUE`` strings with a dotted path such as ``mailers.smtp``.

    Raises:
        ValueError: If an entry lacks ``=`` or has an empty key.

    Example:
        >>> scope_overrides("mailers.smtp", ("timeout=5",))
        ('mailers.smtp.timeout=5',)
    """
    scoped: list[str] = []
    for raw in raw_overrides:
        key, sep, _ = raw.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Invalid mailer option {raw!r}: expected KEY=VALUE")
        scoped.append(f"{prefix}.{raw}")
    return tuple(scoped)


def apply_overrides(config: Config, raw_overrides: tuple[str, ...]) -> Config:
    """Deep-merge CLI overrides into a Config instance.

    Returns:
        New Config with overrides applied, or ``config`` itself when there
        are none.

    Raises:
        ValueError: If any override string is malformed.

    Examples:
        >>> cfg = Config({"mailers": {"default": {"adapter": "local"}}}, {})
        >>> apply_overrides(cfg, ("mailers.default.adapter=smtp",))["mailers"]["default"]["adapter"]
        'smtp'
        >>> apply_overrides(cfg, ()) is cfg
        True
    """
    if not raw_overrides:
        return config

    overrides: dict[str, dict[str, object]] = {}
    for raw in raw_overrides:
        _nest_override(overrides, parse_override(raw))

    return config.with_overrides(overrides)


__all__ = [
    "CoercedValue",
    "ConfigOverride",
    "apply_overrides",
    "coerce_value",
    "parse_override",
    "scope_overrides",
]
