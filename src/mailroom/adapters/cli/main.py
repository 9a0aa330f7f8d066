"""CLI entry point and execution wrapper.

Contents:
    * :func:`main` - Run the ``mailroom`` command line and return its exit code.
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import lib_cli_exit_tools
import lib_log_rich.runtime
import rich_click as click

from mailroom import __init__conf__
from mailroom.adapters.background import shutdown_background
from mailroom.domain.errors import MailroomError

from .constants import TRACEBACK_SUMMARY_LIMIT, TRACEBACK_VERBOSE_LIMIT
from .context import TracebackState, apply_traceback_preferences
from .exit_codes import exit_code_for

if TYPE_CHECKING:
    from mailroom.composition import AppServices


def _report_uncaught(exc: BaseException) -> int:
    """Print ``exc`` through lib_cli_exit_tools and pick its exit code.

    Mailroom errors that escape a command keep their sysexits code; anything
    else (SystemExit, KeyboardInterrupt, foreign exceptions) is classified by
    lib_cli_exit_tools.
    """
    tracebacks_enabled = bool(getattr(lib_cli_exit_tools.config, "traceback", False))
    apply_traceback_preferences(tracebacks_enabled)
    length_limit = TRACEBACK_VERBOSE_LIMIT if tracebacks_enabled else TRACEBACK_SUMMARY_LIMIT
    lib_cli_exit_tools.print_exception_message(trace_back=tracebacks_enabled, length_limit=length_limit)
    if isinstance(exc, MailroomError):
        return int(exit_code_for(exc))
    return lib_cli_exit_tools.get_system_exit_code(exc)


def _run_cli(argv: Sequence[str] | None, *, services_factory: Callable[[], AppServices]) -> int:
    from .root import cli

    try:
        cli.main(
            args=list(argv) if argv is not None else sys.argv[1:],
            prog_name=__init__conf__.shell_command,
            obj=services_factory,
            standalone_mode=False,
        )
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except BaseException as exc:  # noqa: BLE001
        return _report_uncaught(exc)
    return 0


def _shutdown_runtime() -> None:
    """Let queued background deliveries finish, then stop logging."""
    shutdown_background(wait=True)
    if threading.current_thread() is threading.main_thread() and lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.shutdown()


def main(
    argv: Sequence[str] | None = None,
    *,
    restore_traceback: bool = True,
    services_factory: Callable[[], AppServices] | None = None,
) -> int:
    """Execute the CLI and return the exit code.

    Args:
        argv: CLI arguments; None uses ``sys.argv``.
        restore_traceback: Put the traceback flags back the way they were afterwards.
        services_factory: Returns the AppServices to run with. Required.

    Raises:
        ValueError: If services_factory is not provided.
    """
    if services_factory is None:
        raise ValueError("services_factory is required. Pass build_production from composition layer.")

    previous = TracebackState.capture()
    try:
        return _run_cli(argv, services_factory=services_factory)
    finally:
        if restore_traceback:
            previous.restore()
        _shutdown_runtime()


__all__ = ["main"]
