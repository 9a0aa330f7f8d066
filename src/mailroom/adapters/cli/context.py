"""Click context helpers: the per-invocation state every subcommand reads.

Contents:
    * :class:`CLIContext` - Loaded config, services and global flags.
    * :class:`TracebackState` - Snapshot of lib_cli_exit_tools traceback flags.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import rich_click as click
from lib_layered_config import Config

from mailroom.adapters.config.overrides import apply_overrides, scope_overrides

from .constants import MAILERS_SECTION

if TYPE_CHECKING:
    from mailroom.application.mailer import Mailer
    from mailroom.composition import AppServices


@dataclass(slots=True)
class CLIContext:
    """Typed CLI state stored on ``click.Context.obj`` by the root group."""

    traceback: bool
    config: Config
    services: AppServices
    profile: str | None = None
    set_overrides: tuple[str, ...] = ()

    def load_mailer(self, name: str, options: tuple[str, ...] = ()) -> Mailer:
        """Define the mailer ``[mailers.<name>]`` from the loaded config.

        Args:
            name: Mailer section name.
            options: ``KEY=VALUE`` overrides applied to that section only.

        Raises:
            ValueError: If an option is malformed.
            MailerDefinitionError: If the section is missing or has no usable adapter.
        """
        config = self.config
        if options:
            config = apply_overrides(config, scope_overrides(f"{MAILERS_SECTION}.{name}", options))
        return self.services.load_mailer(config, name)

    def mailer_adapters(self) -> dict[str, str]:
        """Map every configured mailer name to its ``adapter`` setting.

        Nothing is resolved or imported; a section without ``adapter`` shows
        as ``"?"``.
        """
        section: Any = self.config.get(MAILERS_SECTION, default={})
        if not isinstance(section, Mapping):
            return {}
        adapters: dict[str, str] = {}
        for name, definition in section.items():
            reference = definition.get("adapter") if isinstance(definition, Mapping) else None
            adapters[str(name)] = "?" if reference is None else str(reference)
        return adapters


def store_cli_context(ctx: click.Context, **state: Any) -> CLIContext:
    """Build a :class:`CLIContext` from ``state`` and attach it to ``ctx``."""
    cli_ctx = CLIContext(**state)
    ctx.obj = cli_ctx
    return cli_ctx


def get_cli_context(ctx: click.Context) -> CLIContext:
    """Retrieve typed CLI state from Click context.

    Raises:
        RuntimeError: If the root group did not store a context.
    """
    if not isinstance(ctx.obj, CLIContext):
        raise RuntimeError("CLI context not initialized. Call store_cli_context first.")
    return ctx.obj


def apply_traceback_preferences(enabled: bool) -> None:
    """Turn lib_cli_exit_tools tracebacks (and their colour) on or off.

    Example:
        >>> apply_traceback_preferences(True)
        >>> bool(lib_cli_exit_tools.config.traceback)
        True
    """
    lib_cli_exit_tools.config.traceback = bool(enabled)
    lib_cli_exit_tools.config.traceback_force_color = bool(enabled)


@dataclass(frozen=True, slots=True)
class TracebackState:
    """Traceback flags of lib_cli_exit_tools at one point in time."""

    enabled: bool = False
    force_color: bool = False

    @classmethod
    def capture(cls) -> TracebackState:
        return cls(
            enabled=bool(getattr(lib_cli_exit_tools.config, "traceback", False)),
            force_color=bool(getattr(lib_cli_exit_tools.config, "traceback_force_color", False)),
        )

    def restore(self) -> None:
        lib_cli_exit_tools.config.traceback = self.enabled
        lib_cli_exit_tools.config.traceback_force_color = self.force_color


__all__ = [
    "CLIContext",
    "TracebackState",
    "apply_traceback_preferences",
    "get_cli_context",
    "store_cli_context",
]
