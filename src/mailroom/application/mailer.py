"""Mailer - binds one adapter and its config, then dispatches emails to it.

A :class:`Mailer` is constructed once (usually at startup, from the
``[mailers.<name>]`` configuration section) and passed to call sites. Every
delivery normalizes the email's addresses, logs the normalized email at DEBUG
level, and hands it to the bound adapter on the calling thread.

The mailer performs no recovery: adapter errors, synchronous or carried by
the future returned from ``deliver_async``, reach the caller unchanged.

Example:
    >>> from mailroom.adapters.memory import RecordingAdapter
    >>> from mailroom.domain.email import new_email
    >>> adapter = RecordingAdapter()
    >>> mailer = Mailer("welcome", adapter, {"api_key": "k"})
    >>> _ = mailer.deliver(new_email(from_="me@example.com", to="foo@example.com"))
    >>> adapter.deliveries[0].email.to
    (Address(name='', address='foo@example.com'),)
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from concurrent.futures import Future
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from ..domain.address import Address
from ..domain.email import Email
from ..domain.enums import AddressRole
from ..domain.errors import EmptyFromAddressError, InvalidFromAddressError, MailerDefinitionError
from ..domain.formatter import FormatContext, format_email_address
from .ports import Adapter

logger = logging.getLogger(__name__)

_CONTEXTS = {role: FormatContext(role) for role in AddressRole}


@dataclass(frozen=True, slots=True)
class MailerConfig:
    """The resolved ``{adapter, config}`` pair of one mailer.

    Read-only after construction and safe to share between threads.
    """

    adapter: Adapter
    config: Mapping[str, Any]


def _wrap(value: Any) -> list[Any]:
    """Coerce a recipient field to a list: ``None`` is empty, a bare value is one element."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _normalize_from(value: Any) -> Address:
    if value is None:
        raise EmptyFromAddressError()
    result = format_email_address(value, _CONTEXTS[AddressRole.FROM])
    if isinstance(result, Address):
        return result
    if len(result) != 1:
        raise InvalidFromAddressError(f"from address must resolve to exactly one address, got {len(result)}")
    return result[0]


def _normalize_recipients(value: Any, role: AddressRole) -> tuple[Address, ...]:
    result = format_email_address(_wrap(value), _CONTEXTS[role])
    return tuple(result) if isinstance(result, list) else (result,)


def normalize_addresses(email: Email) -> Email:
    """Return a copy of ``email`` with every address field in canonical form.

    ``from_`` becomes a single :class:`Address`; ``to``, ``cc`` and ``bcc``
    become tuples of addresses. All other fields pass through unchanged.

    Args:
        email: The email as built by the caller.

    Returns:
        The normalized email.

    Raises:
        EmptyFromAddressError: When ``from_`` is ``None``.
        InvalidFromAddressError: When ``from_`` resolves to zero or several addresses.
        NoFormatterError: When an address value has no registered formatter.

    Example:
        >>> normalized = normalize_addresses(Email(from_="me@example.com", to="foo@example.com"))
        >>> normalized.from_
        Address(name='', address='me@example.com')
        >>> normalized.cc
        ()
    """
    return dataclasses.replace(
        email,
        from_=_normalize_from(email.from_),
        to=_normalize_recipients(email.to, AddressRole.TO),
        cc=_normalize_recipients(email.cc, AddressRole.CC),
        bcc=_normalize_recipients(email.bcc, AddressRole.BCC),
    )


def describe_email(email: Email) -> dict[str, Any]:
    """Render a normalized email as a plain dict for structured log records.

    Example:
        >>> describe_email(normalize_addresses(Email(from_="a@x.com", subject="Hi")))["from"]
        'a@x.com'
    """
    return {
        "from": str(email.from_),
        "to": [str(address) for address in email.to],
        "cc": [str(address) for address in email.cc],
        "bcc": [str(address) for address in email.bcc],
        "subject": email.subject,
        "html_body": email.html_body,
        "text_body": email.text_body,
        "headers": dict(email.headers),
        "assigns": dict(email.assigns),
        "private": dict(email.private),
    }


class Mailer:
    """A named, pre-configured binding of one adapter and its config.

    Args:
        name: Identifies the mailer in log records and error messages.
        adapter: An object implementing :class:`~mailroom.application.ports.Adapter`.
            A class is instantiated without arguments.
        config: Adapter-specific settings, opaque to the mailer.

    Raises:
        MailerDefinitionError: When ``adapter`` is missing or is not an adapter.
    """

    __slots__ = ("_binding", "_name")

    def __init__(self, name: str, adapter: Any, config: Mapping[str, Any] | None = None) -> None:
        if adapter is None:
            raise MailerDefinitionError(f"mailer {name!r} has no adapter configured")
        if isinstance(adapter, type):
            adapter = adapter()
        if not isinstance(adapter, Adapter):
            raise MailerDefinitionError(
                f"mailer {name!r}: {type(adapter).__name__} does not implement deliver() and deliver_async()"
            )
        self._name = name
        self._binding = MailerConfig(adapter=adapter, config=MappingProxyType(dict(config or {})))

    @classmethod
    def from_options(cls, name: str, options: Mapping[str, Any]) -> Mailer:
        """Define a mailer from a named configuration object.

        ``options`` must contain ``adapter``; every other key becomes the
        adapter config. The check happens here, at definition time, so a
        broken definition never survives until the first delivery.

        Raises:
            MailerDefinitionError: When ``adapter`` is absent or invalid.

        Example:
            >>> Mailer.from_options("default", {"api_key": "k"})  # doctest: +IGNORE_EXCEPTION_DETAIL
            Traceback (most recent call last):
            ...
            MailerDefinitionError: mailer 'default' has no 'adapter' key
        """
        if "adapter" not in options:
            raise MailerDefinitionError(f"mailer {name!r} has no 'adapter' key")
        config = {key: value for key, value in options.items() if key != "adapter"}
        return cls(name, options["adapter"], config)

    @property
    def name(self) -> str:
        return self._name

    @property
    def adapter(self) -> Adapter:
        return self._binding.adapter

    @property
    def config(self) -> Mapping[str, Any]:
        return self._binding.config

    def deliver(self, email: Email) -> Any:
        """Normalize, log, and send ``email`` synchronously.

        Returns:
            Whatever the adapter's ``deliver`` returns.

        Raises:
            EmptyFromAddressError: Before any adapter call when ``from_`` is unset.
            Exception: Any adapter error, propagated unchanged.
        """
        normalized = self._prepare(email, "deliver")
        return self._binding.adapter.deliver(normalized, self._binding.config)

    def deliver_async(self, email: Email) -> Future[Any]:
        """Normalize, log, and start sending ``email`` in the background.

        Returns immediately with the adapter's handle. Transport failures
        surface through that handle, never from this call.

        Raises:
            EmptyFromAddressError: Before any adapter call when ``from_`` is unset.
        """
        normalized = self._prepare(email, "deliver_async")
        return self._binding.adapter.deliver_async(normalized, self._binding.config)

    def _prepare(self, email: Email, operation: str) -> Email:
        normalized = normalize_addresses(email)
        logger.debug(
            "Sending email with %s",
            type(self._binding.adapter).__name__,
            extra={
                "mailer": self._name,
                "operation": operation,
                "email": describe_email(normalized),
            },
        )
        return normalized

    def __repr__(self) -> str:
        return f"Mailer(name={self._name!r}, adapter={type(self._binding.adapter).__name__})"


__all__ = [
    "Mailer",
    "MailerConfig",
    "describe_email",
    "normalize_addresses",
]
