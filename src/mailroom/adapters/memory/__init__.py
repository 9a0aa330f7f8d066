"""In-memory adapter implementations.

Provides delivery adapters that never touch the network plus lightweight
implementations of the service ports that operate entirely in memory.

Contents:
    * :mod:`.email` - LocalAdapter, RecordingAdapter, Mailbox
    * :mod:`.config` - In-memory configuration adapters
    * :mod:`.logging` - In-memory logging adapter
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import display_config_in_memory, get_config_in_memory
from .email import (
    Delivery,
    LocalAdapter,
    Mailbox,
    RecordingAdapter,
    local_mailbox,
    recording_mailer_loader,
)
from .logging import init_logging_in_memory

# Static conformance assertions
if TYPE_CHECKING:
    from mailroom.application.ports import Adapter, DisplayConfig, GetConfig, InitLogging

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_local_adapter: Adapter = LocalAdapter()
    _assert_recording_adapter: Adapter = RecordingAdapter()

__all__ = [
    "Delivery",
    "LocalAdapter",
    "Mailbox",
    "RecordingAdapter",
    "display_config_in_memory",
    "get_config_in_memory",
    "init_logging_in_memory",
    "local_mailbox",
    "recording_mailer_loader",
]
