"""Application ports - Protocol definitions for adapters and services.

:class:`Adapter` is the sole boundary through which transport happens. The
remaining protocols define ``__call__`` signatures that the module-level
adapter functions satisfy through structural subtyping (PEP 544).

System Role:
    Sits between domain and adapters. Infrastructure types (``Config``,
    ``Mailer``) are imported under ``TYPE_CHECKING`` only so that layer
    contracts remain satisfied at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from concurrent.futures import Future
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from ..domain.email import Email
from ..domain.enums import OutputFormat

if TYPE_CHECKING:
    from lib_layered_config import Config

    from .mailer import Mailer


@runtime_checkable
class Adapter(Protocol):
    """A pluggable delivery backend.

    Adapters receive fully normalized emails: ``from_`` is an
    :class:`~mailroom.domain.address.Address` and ``to``/``cc``/``bcc`` are
    tuples of addresses. ``config`` is the read-only, adapter-specific
    mapping bound to the mailer.

    Neither method is required to be idempotent.
    """

    def deliver(self, email: Email, config: Mapping[str, Any]) -> Any:
        """Send ``email`` and block until the transport succeeds or fails.

        Failures must be observable by the caller, either by raising or
        through the returned value.
        """
        ...

    def deliver_async(self, email: Email, config: Mapping[str, Any]) -> Future[Any]:
        """Start sending ``email`` without blocking on transport completion.

        Returns a future that settles with the transport result or error.
        """
        ...


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class LoadMailer(Protocol):
    """Define a named mailer from the ``[mailers.<name>]`` configuration section."""

    def __call__(self, config: Config, name: str = ...) -> Mailer: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "Adapter",
    "DisplayConfig",
    "GetConfig",
    "InitLogging",
    "LoadMailer",
]
