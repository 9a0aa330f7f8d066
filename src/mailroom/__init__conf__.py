"""Static package metadata surfaced to CLI commands and documentation.

Keeps the distribution name, console script name and layered-configuration
identifiers in one place so the CLI, the config loader and the logging setup
agree on them.
"""

from __future__ import annotations

from importlib import metadata as _metadata

name = "mailroom"
title = "Compose outbound email and dispatch it through swappable delivery adapters"
shell_command = "mailroom"
homepage = "https://github.com/mailroom-dev/mailroom"
author = "mailroom contributors"

#: Identifiers passed to lib_layered_config to locate configuration files.
LAYEREDCONF_VENDOR = "mailroom"
LAYEREDCONF_APP = "mailroom"
LAYEREDCONF_SLUG = "mailroom"


def _resolve_version() -> str:
    try:
        return _metadata.version(name)
    except _metadata.PackageNotFoundError:
        return "0.0.0"


version = _resolve_version()


def print_info() -> None:
    """Print the summarised metadata block used by the ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for mailroom:
        ...
    """
    fields = (
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("shell_command", shell_command),
    )
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "author",
    "homepage",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
