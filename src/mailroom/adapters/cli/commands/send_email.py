"""Send email CLI command.

Builds an email from command-line options with the pure builder functions,
defines the selected mailer from configuration, and delivers through it.
Delivery errors become exit codes through ``exit_code_for``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from typing import Any

import lib_log_rich.runtime
import rich_click as click

from mailroom.domain import email as mail

from ..constants import CLICK_CONTEXT_SETTINGS, DEFAULT_MAILER_NAME
from ..context import get_cli_context
from ..exit_codes import ExitCode, exit_code_for

logger = logging.getLogger(__name__)


def _parse_headers(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]) -> dict[str, str]:
    """Parse repeated ``NAME=VALUE`` header options.

    Raises:
        click.BadParameter: If a value lacks ``=`` or has an empty name.
    """
    headers: dict[str, str] = {}
    for raw in values:
        name, sep, value = raw.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected NAME=VALUE, got {raw!r}")
        headers[name.strip()] = value
    return headers


def build_email(
    *,
    from_address: str | None,
    recipients: tuple[str, ...],
    cc: tuple[str, ...],
    bcc: tuple[str, ...],
    subject: str,
    text: str | None,
    html: str | None,
    headers: dict[str, str],
) -> mail.Email:
    """Assemble the email through the builder functions.

    Example:
        >>> email = build_email(
        ...     from_address="me@example.com", recipients=("foo@example.com",), cc=(), bcc=(),
        ...     subject="Welcome!!!", text=None, html="<strong>WELCOME</strong>", headers={},
        ... )
        >>> email.to
        ('foo@example.com',)
    """
    email = mail.subject(mail.new_email(), subject)
    if from_address is not None:
        email = mail.from_(email, from_address)
    email = mail.to(email, list(recipients))
    if cc:
        email = mail.cc(email, list(cc))
    if bcc:
        email = mail.bcc(email, list(bcc))
    if text is not None:
        email = mail.text_body(email, text)
    if html is not None:
        email = mail.html_body(email, html)
    for name, value in headers.items():
        email = mail.put_header(email, name, value)
    return email


_FAILURE_MESSAGES: dict[ExitCode, tuple[str, str]] = {
    ExitCode.CONFIG_ERROR: ("Mailer configuration error", "Configuration error"),
    ExitCode.INVALID_ARGUMENT: ("Invalid email parameters", "Invalid email parameters"),
    ExitCode.DELIVERY_FAILURE: ("Email delivery failed", "Failed to send email"),
    ExitCode.GENERAL_ERROR: ("Unexpected error sending email", "Unexpected error"),
}


def execute_with_delivery_error_handling(operation: Callable[[], Any]) -> Any:
    """Run a delivery and translate failures into exit codes.

    The code comes from :func:`~mailroom.adapters.cli.exit_codes.exit_code_for`.
    Set the DEVELOPMENT_MODE environment variable to re-raise unexpected
    exceptions with their traceback instead.

    Raises:
        SystemExit: On any error.
    """
    try:
        return operation()
    except Exception as exc:
        exit_code = exit_code_for(exc)
        unexpected = exit_code is ExitCode.GENERAL_ERROR
        if unexpected and os.environ.get("DEVELOPMENT_MODE"):
            raise
        log_message, user_message = _FAILURE_MESSAGES[exit_code]
        logger.error(
            log_message,
            extra={"error": str(exc), "error_type": type(exc).__name__, "exit_code": int(exit_code)},
            exc_info=unexpected,
        )
        click.echo(f"\nError: {user_message} - {exc}", err=True)
        raise SystemExit(exit_code) from exc


@click.command("send-email", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--mailer", "mailer_name", default=DEFAULT_MAILER_NAME, show_default=True, help="Mailer section [mailers.NAME] to use")
@click.option("--from", "from_address", default=None, help="Sender address")
@click.option("--to", "recipients", multiple=True, required=True, help="Recipient address (repeatable)")
@click.option("--cc", multiple=True, help="Carbon-copy recipient (repeatable)")
@click.option("--bcc", multiple=True, help="Blind carbon-copy recipient (repeatable)")
@click.option("--subject", default="", help="Subject line")
@click.option("--text", default=None, help="Plain-text body")
@click.option("--html", default=None, help="HTML body")
@click.option(
    "--header",
    "headers",
    multiple=True,
    callback=_parse_headers,
    metavar="NAME=VALUE",
    help="Extra message header (repeatable)",
)
@click.option(
    "--option",
    "mailer_options",
    multiple=True,
    metavar="KEY=VALUE",
    help="Override one setting of the selected mailer for this send (repeatable)",
)
@click.option(
    "--async/--sync",
    "use_async",
    default=False,
    help="Deliver through deliver_async and wait on the returned handle",
)
@click.pass_context
def cli_send_email(
    ctx: click.Context,
    mailer_name: str,
    from_address: str | None,
    recipients: tuple[str, ...],
    cc: tuple[str, ...],
    bcc: tuple[str, ...],
    subject: str,
    text: str | None,
    html: str | None,
    headers: dict[str, str],
    mailer_options: tuple[str, ...],
    use_async: bool,
) -> None:
    """Compose an email and deliver it through a configured mailer."""
    cli_ctx = get_cli_context(ctx)
    email = build_email(
        from_address=from_address,
        recipients=recipients,
        cc=cc,
        bcc=bcc,
        subject=subject,
        text=text,
        html=html,
        headers=headers,
    )

    def _deliver() -> Any:
        mailer = cli_ctx.load_mailer(mailer_name, mailer_options)
        if use_async:
            handle = mailer.deliver_async(email)
            click.echo("Email handed off for background delivery, waiting for completion...")
            return handle.result()
        return mailer.deliver(email)

    extra = {"command": "send-email", "mailer": mailer_name, "async": use_async}
    with lib_log_rich.runtime.bind(job_id="cli-send-email", extra=extra):
        result = execute_with_delivery_error_handling(_deliver)
        if result is False:
            click.echo("\nEmail sending failed.", err=True)
            raise SystemExit(ExitCode.DELIVERY_FAILURE)
        logger.info("Email sent via CLI", extra={"mailer": mailer_name, "recipients": list(recipients)})
        click.echo("\nEmail sent successfully!")


__all__ = ["build_email", "cli_send_email", "execute_with_delivery_error_handling"]
