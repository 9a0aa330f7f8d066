"""Polymorphic conversion of caller-supplied values into canonical addresses.

The formatter is a type registry built on :func:`functools.singledispatch`.
Built-in registrations cover :class:`Address`, ``str`` and sequences; any
other type joins by registering a function, without touching this module:

    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class User:
    ...     first_name: str
    ...     email: str
    >>> @register_formatter(User)
    ... def _format_user(user: User, context: FormatContext) -> Address:
    ...     return Address(user.first_name, user.email)
    >>> format_email_address(User("John", "j@x.com"), FormatContext(AddressRole.TO))
    Address(name='John', address='j@x.com')

Formatting is pure: the same ``(value, context)`` pair always yields the
same result.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import singledispatch
from typing import Any

from .address import Address
from .enums import AddressRole
from .errors import NoFormatterError

Formatted = Address | list[Address]
"""What :func:`format_email_address` returns: one address, or a flat list."""

FormatterFunc = Callable[[Any, "FormatContext"], Any]
"""A registered formatter: ``(value, context) -> Address | str | sequence of these``."""


@dataclass(frozen=True, slots=True)
class FormatContext:
    """Context handed to every formatter call.

    Attributes:
        role: The email field being normalized.
    """

    role: AddressRole


class _Flattened(list):  # type: ignore[type-arg]
    """A list the sequence formatter built: every element is already an Address."""


@singledispatch
def _dispatch(value: object, context: FormatContext) -> object:
    raise NoFormatterError(value)


@_dispatch.register
def _format_address(value: Address, context: FormatContext) -> object:
    return value


@_dispatch.register
def _format_string(value: str, context: FormatContext) -> object:
    return Address(name="", address=value)


@_dispatch.register(list)
@_dispatch.register(tuple)
def _format_sequence(value: list[Any] | tuple[Any, ...], context: FormatContext) -> object:
    formatted = _Flattened()
    for item in value:
        result = format_email_address(item, context)
        if isinstance(result, list):
            formatted.extend(result)
        else:
            formatted.append(result)
    return formatted


def format_email_address(value: object, context: FormatContext) -> Formatted:
    """Normalize ``value`` into canonical address form.

    Whatever a registered formatter returns (a string, a domain object, a
    sequence of these) is formatted again with the same context until only
    addresses remain.

    Args:
        value: An :class:`Address`, a raw address string, a registered
            domain object, or a list/tuple of any of these.
        context: Carries the role of the field being normalized.

    Returns:
        A single :class:`Address` for scalar input, or a flat list of
        addresses for sequences and for formatters that expand to several
        addresses (a mailing list, for instance).

    Raises:
        NoFormatterError: When no formatter is registered for a value's type,
            or a formatter returns a value of the very type it formats.

    Example:
        >>> ctx = FormatContext(AddressRole.TO)
        >>> format_email_address("a@b.com", ctx)
        Address(name='', address='a@b.com')
        >>> format_email_address(["a@b.com", Address("B", "b@b.com")], ctx)
        [Address(name='', address='a@b.com'), Address(name='B', address='b@b.com')]
    """
    result = _dispatch(value, context)
    if isinstance(result, Address):
        return result
    if isinstance(result, _Flattened):
        return list(result)
    if type(result) is type(value):
        raise NoFormatterError(
            value, reason=f"the formatter for {type(value).__name__!r} returned another {type(value).__name__!r}"
        )
    return format_email_address(result, context)


def register_formatter(cls: type, func: FormatterFunc | None = None) -> Any:
    """Register ``func`` as the address formatter for ``cls`` and its subclasses.

    Works as a plain call or as a decorator. A later registration for the
    same class replaces the earlier one.

    Args:
        cls: The type that becomes address-formattable.
        func: ``(value, context) -> Address | str | sequence of these``.

    Returns:
        ``func`` unchanged, so decorated functions stay callable.

    Example:
        >>> class Team:
        ...     members = ["a@x.com", "b@x.com"]
        >>> _ = register_formatter(Team, lambda team, ctx: team.members)
        >>> format_email_address(Team(), FormatContext(AddressRole.BCC))
        [Address(name='', address='a@x.com'), Address(name='', address='b@x.com')]
    """
    if func is None:

        def decorator(inner: FormatterFunc) -> FormatterFunc:
            _dispatch.register(cls, inner)
            return inner

        return decorator

    _dispatch.register(cls, func)
    return func


__all__ = [
    "FormatContext",
    "Formatted",
    "FormatterFunc",
    "format_email_address",
    "register_formatter",
]
