"""In-memory delivery adapters.

Contents:
    * :class:`Mailbox` - Thread-safe store of delivered emails.
    * :class:`LocalAdapter` - Delivers into a process-wide mailbox; the
      development default, no network involved.
    * :class:`RecordingAdapter` - Captures every call for test assertions,
      with optional delay and failure injection.
    * :func:`recording_mailer_loader` - ``LoadMailer`` implementation binding
      any mailer name to one adapter instance.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Mapping
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from mailroom.application.mailer import Mailer
from mailroom.domain.email import Email

from ..background import completed, submit_delivery

if TYPE_CHECKING:
    from lib_layered_config import Config

    from mailroom.application.ports import LoadMailer


class Mailbox:
    """Thread-safe, newest-first store of delivered emails.

    Example:
        >>> box = Mailbox()
        >>> box.push(Email(subject="Hi"))
        >>> [email.subject for email in box.all()]
        ['Hi']
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._emails: list[Email] = []

    def push(self, email: Email) -> None:
        with self._lock:
            self._emails.insert(0, email)

    def all(self) -> list[Email]:
        """Return every stored email, newest first."""
        with self._lock:
            return list(self._emails)

    def clear(self) -> None:
        with self._lock:
            self._emails.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._emails)


#: Process-wide mailbox shared by every :class:`LocalAdapter` without its own.
local_mailbox = Mailbox()


class LocalAdapter:
    """Stores delivered emails in a mailbox instead of sending them.

    Storing never blocks, so ``deliver_async`` returns an already-settled
    future.

    Args:
        mailbox: Where to store emails. Defaults to :data:`local_mailbox`.
    """

    def __init__(self, mailbox: Mailbox | None = None) -> None:
        self.mailbox = mailbox if mailbox is not None else local_mailbox

    def deliver(self, email: Email, config: Mapping[str, Any]) -> Email:
        self.mailbox.push(email)
        return email

    def deliver_async(self, email: Email, config: Mapping[str, Any]) -> Future[Any]:
        return completed(self.deliver(email, config))


@dataclass(frozen=True, slots=True)
class Delivery:
    """One captured adapter call."""

    operation: str
    email: Email
    config: Mapping[str, Any]


def _empty_delivery_list() -> list[Delivery]:
    return []


@dataclass
class RecordingAdapter:
    """Captures deliveries for test assertions.

    Each test should create its own instance to avoid cross-test pollution.
    Calls are recorded when the adapter is invoked, before any delay or
    injected failure, so a test can count invocations even for failing sends.

    Attributes:
        deliveries: Captured calls in invocation order.
        delay: Seconds to sleep inside each delivery, simulating a slow transport.
        raise_exception: When set, deliveries raise this exception.
        result: Value returned by successful deliveries.

    Example:
        >>> spy = RecordingAdapter(result="queued")
        >>> spy.deliver(Email(subject="Hi"), {})
        'queued'
        >>> spy.calls
        1
    """

    deliveries: list[Delivery] = field(default_factory=_empty_delivery_list)
    delay: float = 0.0
    raise_exception: Exception | None = None
    result: Any = True
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def calls(self) -> int:
        with self._lock:
            return len(self.deliveries)

    @property
    def emails(self) -> list[Email]:
        with self._lock:
            return [delivery.email for delivery in self.deliveries]

    def clear(self) -> None:
        """Reset captured data for the next test."""
        with self._lock:
            self.deliveries.clear()
        self.raise_exception = None

    def deliver(self, email: Email, config: Mapping[str, Any]) -> Any:
        self._record("deliver", email, config)
        return self._send()

    def deliver_async(self, email: Email, config: Mapping[str, Any]) -> Future[Any]:
        self._record("deliver_async", email, config)
        return submit_delivery(lambda _email, _config: self._send(), email, config)

    def _record(self, operation: str, email: Email, config: Mapping[str, Any]) -> None:
        with self._lock:
            self.deliveries.append(Delivery(operation=operation, email=email, config=config))

    def _send(self) -> Any:
        if self.delay:
            time.sleep(self.delay)
        if self.raise_exception is not None:
            raise self.raise_exception
        return self.result


def recording_mailer_loader(adapter: Any) -> LoadMailer:
    """Return a ``LoadMailer`` that binds every mailer name to ``adapter``.

    The configured ``[mailers.<name>]`` section still supplies the adapter
    config, minus its ``adapter`` key, so tests observe real settings.

    Example:
        >>> from lib_layered_config import Config
        >>> spy = RecordingAdapter()
        >>> load = recording_mailer_loader(spy)
        >>> load(Config({}, {}), "default").adapter is spy
        True
    """

    def _load(config: Config, name: str = "default") -> Mailer:
        section: Any = config.get(f"mailers.{name}", default={})
        options = dict(section) if isinstance(section, Mapping) else {}
        options["adapter"] = adapter
        return Mailer.from_options(name, options)

    return _load


__all__ = [
    "Delivery",
    "LocalAdapter",
    "Mailbox",
    "RecordingAdapter",
    "local_mailbox",
    "recording_mailer_loader",
]
