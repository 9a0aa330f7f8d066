"""Background execution for asynchronous deliveries.

Adapters whose transport blocks (SMTP, the recording spy with a delay) hand
``deliver_async`` work to a shared thread pool and return its future. A done
callback logs every failed background send, so an error is never lost when
the caller drops the handle without awaiting it.

Contents:
    * :func:`submit_delivery` - Run a blocking delivery on the shared pool.
    * :func:`completed` - Wrap an already-known result in a settled future.
    * :func:`shutdown_background` - Stop the shared pool.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from mailroom.domain.email import Email

logger = logging.getLogger(__name__)

_MAX_WORKERS = 4
_lock = threading.Lock()
_executor: ThreadPoolExecutor | None = None

DeliverFunc = Callable[[Email, Mapping[str, Any]], Any]


def _get_executor() -> ThreadPoolExecutor:
    global _executor
    with _lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=_MAX_WORKERS, thread_name_prefix="mailroom")
        return _executor


def _log_failure(future: Future[Any]) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error(
            "Background email delivery failed",
            extra={"error": str(exc), "error_type": type(exc).__name__},
            exc_info=(type(exc), exc, exc.__traceback__),
        )


def submit_delivery(deliver: DeliverFunc, email: Email, config: Mapping[str, Any]) -> Future[Any]:
    """Run ``deliver(email, config)`` on the shared pool and return its future.

    Args:
        deliver: A blocking delivery function, usually an adapter's ``deliver``.
        email: The normalized email.
        config: The adapter config bound to the mailer.

    Returns:
        A future settling with the delivery result or its exception.

    Example:
        >>> future = submit_delivery(lambda email, config: "sent", Email(), {})
        >>> future.result(timeout=5)
        'sent'
    """
    future = _get_executor().submit(deliver, email, config)
    future.add_done_callback(_log_failure)
    return future


def completed(result: Any) -> Future[Any]:
    """Return a future that is already resolved with ``result``.

    Example:
        >>> completed(1).done()
        True
    """
    future: Future[Any] = Future()
    future.set_result(result)
    return future


def shutdown_background(*, wait: bool = True) -> None:
    """Shut the shared pool down; the next submission creates a fresh one.

    Args:
        wait: Block until queued deliveries finish.
    """
    global _executor
    with _lock:
        executor, _executor = _executor, None
    if executor is not None:
        executor.shutdown(wait=wait)


__all__ = [
    "DeliverFunc",
    "completed",
    "shutdown_background",
    "submit_delivery",
]
