"""Port behavioral contract tests: in-memory implementations and composition wiring.

Static type conformance is enforced by pyright through the TYPE_CHECKING
assertions in the composition and memory packages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from lib_layered_config import Config

from mailroom.adapters.memory import (
    LocalAdapter,
    RecordingAdapter,
    get_config_in_memory,
    init_logging_in_memory,
    recording_mailer_loader,
)
from mailroom.application.mailer import Mailer
from mailroom.domain.email import new_email

if TYPE_CHECKING:
    from mailroom.application.ports import GetConfig, InitLogging, LoadMailer


# ======================== In-Memory Adapter Contract Tests ========================


@pytest.fixture
def get_config_impl() -> GetConfig:
    """Provide in-memory GetConfig implementation."""
    return get_config_in_memory


@pytest.fixture
def load_mailer_impl() -> LoadMailer:
    """Provide in-memory LoadMailer implementation."""
    return recording_mailer_loader(RecordingAdapter())


@pytest.fixture
def init_logging_impl() -> InitLogging:
    """Provide in-memory InitLogging implementation."""
    return init_logging_in_memory


@pytest.mark.os_agnostic
def test_get_config_returns_config_with_dict(get_config_impl: GetConfig) -> None:
    """GetConfig must return a Config whose as_dict() yields a dict."""
    config = get_config_impl()
    assert isinstance(config, Config)
    assert isinstance(config.as_dict(), dict)


@pytest.mark.os_agnostic
def test_load_mailer_returns_a_named_mailer(get_config_impl: GetConfig, load_mailer_impl: LoadMailer) -> None:
    """LoadMailer must return a Mailer carrying the requested name."""
    mailer = load_mailer_impl(get_config_impl(), "default")
    assert isinstance(mailer, Mailer)
    assert mailer.name == "default"


@pytest.mark.os_agnostic
def test_init_logging_does_not_raise(init_logging_impl: InitLogging) -> None:
    """InitLogging must not raise when called with a Config."""
    init_logging_impl(Config({}, {}))


@pytest.mark.os_agnostic
@pytest.mark.parametrize("adapter_type", [LocalAdapter, RecordingAdapter])
def test_adapters_return_a_settled_future_from_deliver_async(adapter_type: type) -> None:
    """deliver_async must return a handle whose result can be awaited."""
    email = new_email(from_="me@example.com", to="foo@example.com")
    future = Mailer("contract", adapter_type).deliver_async(email)
    future.result(timeout=5)
    assert future.done()


# ======================== Composition Wiring Tests ========================


@pytest.mark.os_agnostic
def test_build_production_returns_fully_populated_app_services() -> None:
    """build_production() must return AppServices with all fields callable."""
    from mailroom.composition import AppServices, build_production

    services = build_production()
    assert isinstance(services, AppServices)
    for field_name in services.__dataclass_fields__:
        assert callable(getattr(services, field_name))


@pytest.mark.os_agnostic
def test_build_testing_returns_fully_populated_app_services() -> None:
    """build_testing() must return AppServices with all in-memory implementations."""
    from mailroom.composition import AppServices, build_testing

    services = build_testing()
    assert isinstance(services, AppServices)
    for field_name in services.__dataclass_fields__:
        assert callable(getattr(services, field_name))


@pytest.mark.os_agnostic
def test_build_testing_binds_mailers_to_the_given_adapter() -> None:
    """build_testing(adapter=...) routes every mailer to that adapter."""
    from mailroom.composition import build_testing

    adapter = RecordingAdapter()
    services = build_testing(adapter=adapter)
    mailer = services.load_mailer(services.get_config(), "default")

    mailer.deliver(new_email(from_="me@example.com", to="foo@example.com"))

    assert adapter.calls == 1
