"""Shared pytest fixtures for mailer, adapter and CLI tests.

Centralizes test infrastructure:
- All shared fixtures live here
- Tests import fixtures implicitly via pytest's conftest discovery
- Fixtures use descriptive names that read as plain English
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

if TYPE_CHECKING:
    from mailroom.adapters.memory.email import RecordingAdapter
    from mailroom.composition import AppServices


def _load_dotenv() -> None:
    """Load .env file when it exists for integration test configuration."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))


def _remove_ansi_codes(text: str) -> str:
    """Return *text* stripped of ANSI escape sequences."""
    return ANSI_ESCAPE_PATTERN.sub("", text)


def _snapshot_cli_config() -> dict[str, object]:
    """Capture every attribute from ``lib_cli_exit_tools.config``."""
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    """Reapply a configuration snapshot captured by ``_snapshot_cli_config``."""
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Use result.stdout for clean output (e.g., JSON parsing) to avoid
    log messages on stderr contaminating the output.
    """
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for tests.

    Use this when invoking CLI commands that don't need custom injection.
    """
    from mailroom.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string.

    Example:
        def test_output(cli_runner: CliRunner, strip_ansi: Callable[[str], str]) -> None:
            result = cli_runner.invoke(cli, ["info"])
            plain = strip_ansi(result.output)
            assert "version" in plain
    """

    def _strip(value: str) -> str:
        return _remove_ansi_codes(value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore after the test.

    Use this whenever a test reads or mutates the global
    ``lib_cli_exit_tools.config`` traceback flags.
    """
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config lru_cache before each test.

    Note: Only clears before, not after, to avoid errors when the function
    has been monkeypatched during the test (losing cache_clear method).
    """
    from mailroom.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts.

    Builds actual ``lib_layered_config.Config`` objects without filesystem I/O.
    The second argument (empty dict) represents no source provenance info.

    Example:
        def test_mailer_section(config_factory: Callable[[dict[str, Any]], Config]) -> None:
            config = config_factory({"mailers": {"default": {"adapter": "local"}}})
            assert config.get("mailers.default.adapter") == "local"
    """

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def recording_adapter() -> RecordingAdapter:
    """Provide a fresh RecordingAdapter per test to avoid cross-test pollution."""
    from mailroom.adapters.memory.email import RecordingAdapter

    return RecordingAdapter()


@pytest.fixture
def inject_config(
    clear_config_cache: None,
) -> Callable[[Config], Callable[[], AppServices]]:
    """Return a factory that provides production services with injected Config.

    Only replaces the I/O boundary (``get_config``), not the Config object
    itself, so mailers are defined by the real ``load_mailer``.

    Example:
        def test_config_display(cli_runner, config_factory, inject_config) -> None:
            factory = inject_config(config_factory({"section": {"key": "value"}}))
            result = cli_runner.invoke(cli, ["config"], obj=factory)
            assert "key" in result.output
    """
    from mailroom.composition import AppServices, build_production

    def _inject(config: Config) -> Callable[[], AppServices]:
        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        prod = build_production()
        test_services = AppServices(
            get_config=_fake_get_config,
            display_config=prod.display_config,
            load_mailer=prod.load_mailer,
            init_logging=prod.init_logging,
        )
        return lambda: test_services

    return _inject


@pytest.fixture
def inject_config_with_profile_capture(
    clear_config_cache: None,
) -> Callable[[Config, list[str | None]], Callable[[], AppServices]]:
    """Return a factory that captures profile arguments during get_config."""
    from mailroom.composition import AppServices, build_production

    def _inject(config: Config, captured_profiles: list[str | None]) -> Callable[[], AppServices]:
        def _capturing_get_config(*, profile: str | None = None, **_kwargs: Any) -> Config:
            captured_profiles.append(profile)
            return config

        prod = build_production()
        test_services = AppServices(
            get_config=_capturing_get_config,
            display_config=prod.display_config,
            load_mailer=prod.load_mailer,
            init_logging=prod.init_logging,
        )
        return lambda: test_services

    return _inject


@dataclass
class MailerCliContext:
    """Container for send-email CLI test setup.

    Attributes:
        factory: Callable that returns wired AppServices for CLI invocation.
        adapter: RecordingAdapter every mailer name is bound to.
    """

    factory: Callable[[], Any]
    adapter: RecordingAdapter


@pytest.fixture
def mailer_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], MailerCliContext]:
    """Create send-email CLI test context with a recording adapter.

    Takes the ``mailers`` section contents and returns a context whose
    factory binds every mailer name to one RecordingAdapter, so tests can
    assert on the normalized emails the CLI delivered.

    Example:
        def test_send_email(cli_runner, mailer_cli_context) -> None:
            ctx = mailer_cli_context({"default": {"adapter": "local"}})
            result = cli_runner.invoke(cli, ["send-email", "--from", "a@b.com", "--to", "c@d.com"], obj=ctx.factory)
            assert ctx.adapter.calls == 1
    """
    from mailroom.adapters.memory.email import RecordingAdapter as RecordingAdapterImpl
    from mailroom.adapters.memory.email import recording_mailer_loader
    from mailroom.composition import AppServices, build_production

    def _create(mailers: dict[str, Any]) -> MailerCliContext:
        adapter = RecordingAdapterImpl()
        config = Config({"mailers": mailers}, {})
        prod = build_production()

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        test_services = AppServices(
            get_config=_fake_get_config,
            display_config=prod.display_config,
            load_mailer=recording_mailer_loader(adapter),
            init_logging=prod.init_logging,
        )
        return MailerCliContext(factory=lambda: test_services, adapter=adapter)

    return _create
