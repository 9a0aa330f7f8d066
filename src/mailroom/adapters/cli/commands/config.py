"""Configuration display CLI command.

Contents:
    * :func:`cli_config` - Display the merged configuration, one section, or
      one mailer definition.
"""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from mailroom.adapters.config.display import mailer_view
from mailroom.domain.enums import OutputFormat

from ..constants import CLICK_CONTEXT_SETTINGS, MAILERS_SECTION
from ..context import get_cli_context
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)


@click.command("config", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
    default=OutputFormat.HUMAN.value,
    help="Output format (human-readable or JSON)",
)
@click.option("--section", default=None, help="Show only one top-level section (e.g. 'mailers')")
@click.option("--mailer", "mailer_name", default=None, help="Show only the [mailers.NAME] definition")
@click.pass_context
def cli_config(ctx: click.Context, output_format: str, section: str | None, mailer_name: str | None) -> None:
    """Display the current merged configuration from all sources.

    Precedence: defaults -> app -> host -> user -> dotenv -> env
    """
    if section is not None and mailer_name is not None:
        raise click.UsageError("--section and --mailer cannot be combined")

    cli_ctx = get_cli_context(ctx)
    fmt = OutputFormat(output_format.lower())

    extra = {"command": "config", "format": fmt.value, "profile": cli_ctx.profile}
    with lib_log_rich.runtime.bind(job_id="cli-config", extra=extra):
        logger.info("Displaying configuration", extra={"section": section, "mailer": mailer_name})
        click.echo()
        try:
            config = cli_ctx.config
            if mailer_name is not None:
                config, section = mailer_view(config, mailer_name), MAILERS_SECTION
            cli_ctx.services.display_config(config, output_format=fmt, section=section, profile=cli_ctx.profile)
        except ValueError as exc:
            click.echo(f"\nError: {exc}", err=True)
            raise SystemExit(ExitCode.INVALID_ARGUMENT) from exc


__all__ = ["cli_config"]
