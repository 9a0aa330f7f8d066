"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..adapters.config.display import display_config
from ..adapters.config.loader import get_config
from ..adapters.config.mailers import load_mailer
from ..adapters.logging.setup import init_logging

# Static conformance assertions -- pyright verifies that each adapter function
# structurally satisfies its corresponding Protocol at type-check time.
if TYPE_CHECKING:
    from ..application.ports import (
        DisplayConfig,
        GetConfig,
        InitLogging,
        LoadMailer,
    )

    _assert_get_config: GetConfig = get_config
    _assert_display_config: DisplayConfig = display_config
    _assert_load_mailer: LoadMailer = load_mailer
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    display_config: DisplayConfig
    load_mailer: LoadMailer
    init_logging: InitLogging


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        get_config=get_config,
        display_config=display_config,
        load_mailer=load_mailer,
        init_logging=init_logging,
    )


def build_testing(*, adapter: Any | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Args:
        adapter: Adapter every mailer name is bound to. When None, a fresh
            RecordingAdapter is created. Pass your own to assert on deliveries.

    Returns:
        AppServices container with in-memory adapters.
    """
    from ..adapters.memory import (
        RecordingAdapter,
        display_config_in_memory,
        get_config_in_memory,
        init_logging_in_memory,
        recording_mailer_loader,
    )

    bound = adapter if adapter is not None else RecordingAdapter()

    return AppServices(
        get_config=get_config_in_memory,
        display_config=display_config_in_memory,
        load_mailer=recording_mailer_loader(bound),
        init_logging=init_logging_in_memory,
    )


__all__ = [
    "AppServices",
    "build_production",
    "build_testing",
    "display_config",
    "get_config",
    "init_logging",
    "load_mailer",
]
