"""Root ``mailroom`` command group.

The group loads configuration once per invocation (profile first, then
``--set`` overrides), starts logging from it, and hands a
:class:`~mailroom.adapters.cli.context.CLIContext` to the subcommands.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import rich_click as click
from lib_layered_config import Config

from mailroom import __init__conf__
from mailroom.adapters.config.loader import check_mailers_section
from mailroom.adapters.config.overrides import apply_overrides

from .constants import CLICK_CONTEXT_SETTINGS
from .context import apply_traceback_preferences, store_cli_context

if TYPE_CHECKING:
    from mailroom.composition import AppServices


def _load_config(services: AppServices, profile: str | None, set_overrides: tuple[str, ...]) -> Config:
    """Read the layered config for ``profile`` and apply ``--set`` overrides.

    Raises:
        click.UsageError: If an override is malformed.
        ConfigurationError: If an override turns a mailer into a scalar.
    """
    config = services.get_config(profile=profile)
    try:
        config = apply_overrides(config, set_overrides)
    except (TypeError, ValueError) as exc:
        raise click.UsageError(str(exc)) from exc
    return check_mailers_section(config)


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option("--traceback/--no-traceback", default=False, help="Show full Python traceback on errors")
@click.option(
    "--profile",
    default=None,
    help="Configuration profile to layer on top of the defaults (e.g. 'production')",
)
@click.option(
    "--set",
    "set_overrides",
    multiple=True,
    metavar="SECTION.KEY=VALUE",
    help="Override one setting, e.g. mailers.default.adapter=smtp (repeatable)",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, profile: str | None, set_overrides: tuple[str, ...]) -> None:
    """Load configuration, start logging, and store the CLI context."""
    if not callable(ctx.obj):
        raise RuntimeError("Services factory not provided. This is a bug.")
    services: AppServices = ctx.obj()  # type: ignore[assignment]  # Click's obj is typed as Any

    config = _load_config(services, profile, set_overrides)
    services.init_logging(config)
    store_cli_context(
        ctx,
        traceback=traceback,
        config=config,
        services=services,
        profile=profile,
        set_overrides=set_overrides,
    )
    apply_traceback_preferences(traceback)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


def _register_commands() -> None:
    # Command modules import package ancestors that import this module.
    from .commands import cli_config, cli_info, cli_send_email

    for command in (cli_config, cli_info, cli_send_email):
        cli.add_command(command)


_register_commands()


__all__ = ["cli"]
