"""Package metadata CLI command."""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from mailroom import __init__conf__

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import get_cli_context

logger = logging.getLogger(__name__)


@click.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
@click.pass_context
def cli_info(ctx: click.Context) -> None:
    """Print installation metadata and the configured mailers."""
    adapters = get_cli_context(ctx).mailer_adapters()
    with lib_log_rich.runtime.bind(job_id="cli-info", extra={"command": "info"}):
        logger.info("Displaying package information", extra={"mailers": sorted(adapters)})
        __init__conf__.print_info()
        click.echo("\nMailers:")
        if not adapters:
            click.echo("    (none configured)")
        pad = max((len(name) for name in adapters), default=0)
        for name in sorted(adapters):
            click.echo(f"    {name.ljust(pad)} -> {adapters[name]}")


__all__ = ["cli_info"]
