"""Immutable email value and its pure builder functions.

An :class:`Email` describes a message independently of any transport.
Builder functions never validate or normalize: construction cannot fail, and
address normalization is deferred to delivery time.

Example:
    >>> email = new_email(subject="Welcome!!!")
    >>> email = to(from_(email, "me@example.com"), "foo@example.com")
    >>> email = put_header(html_body(email, "<strong>WELCOME</strong>"), "Reply-To", "help@example.com")
    >>> email.to
    'foo@example.com'
    >>> dict(email.headers)
    {'Reply-To': 'help@example.com'}
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .address import Address

_EMPTY: Mapping[str, Any] = MappingProxyType({})


def _freeze_addresses(value: Any) -> Any:
    """Turn plain lists and tuples (nested ones included) into tuples.

    Tuple subclasses such as named tuples are domain values and pass through.

    Example:
        >>> _freeze_addresses(["a@x.com", ["b@x.com"]])
        ('a@x.com', ('b@x.com',))
    """
    if type(value) in (list, tuple):
        return tuple(_freeze_addresses(item) for item in value)
    return value


def _freeze(mapping: Mapping[str, Any] | None) -> Mapping[str, Any]:
    """Return a read-only copy so later changes to the caller's dict do not leak in."""
    if not mapping:
        return _EMPTY
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class Email:
    """A transport-independent description of one outbound message.

    Address fields hold whatever the caller supplied (raw strings, domain
    objects, :class:`Address` values) until the mailer normalizes them;
    sequences are stored as tuples so the caller's list can change freely.
    After normalization ``from_`` is an :class:`Address` and
    ``to``/``cc``/``bcc`` are tuples of addresses.

    Attributes:
        from_: Sender. ``None`` is rejected at delivery time.
        to: Primary recipients, a single value or a sequence.
        cc: Carbon-copy recipients.
        bcc: Blind carbon-copy recipients.
        subject: Subject line.
        html_body: HTML body.
        text_body: Plain-text body.
        headers: Extra message headers; keys are case-sensitive.
        assigns: Opaque values for an external template renderer.
        private: Adapter-specific metadata (tags and the like).
    """

    from_: Any = None
    to: Any = None
    cc: Any = None
    bcc: Any = None
    subject: str | None = None
    html_body: str | None = None
    text_body: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    assigns: Mapping[str, Any] = field(default_factory=dict)
    private: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Frozen dataclasses need object.__setattr__ to install the read-only copies.
        for name in ("from_", "to", "cc", "bcc"):
            object.__setattr__(self, name, _freeze_addresses(getattr(self, name)))
        for name in ("headers", "assigns", "private"):
            object.__setattr__(self, name, _freeze(getattr(self, name)))

    def recipients(self) -> tuple[Address, ...]:
        """Return ``to + cc + bcc`` of a normalized email.

        Example:
            >>> e = Email(to=(Address("", "a@x.com"),), bcc=(Address("", "b@x.com"),))
            >>> [a.address for a in e.recipients()]
            ['a@x.com', 'b@x.com']
        """
        return tuple(self.to or ()) + tuple(self.cc or ()) + tuple(self.bcc or ())


def new_email(**fields: Any) -> Email:
    """Build an email from keyword fields.

    Args:
        **fields: Any :class:`Email` attribute. ``from_`` may also be given
            as ``from_address``.

    Raises:
        TypeError: When an unknown field name is given.

    Example:
        >>> new_email(from_="me@example.com", to="foo@example.com").to
        'foo@example.com'
    """
    if "from_address" in fields:
        fields["from_"] = fields.pop("from_address")
    return Email(**fields)


def from_(email: Email, value: Any) -> Email:
    """Return a copy of ``email`` with the sender set."""
    return dataclasses.replace(email, from_=value)


def to(email: Email, value: Any) -> Email:
    """Return a copy of ``email`` with the ``to`` recipients replaced."""
    return dataclasses.replace(email, to=value)


def cc(email: Email, value: Any) -> Email:
    """Return a copy of ``email`` with the ``cc`` recipients replaced."""
    return dataclasses.replace(email, cc=value)


def bcc(email: Email, value: Any) -> Email:
    """Return a copy of ``email`` with the ``bcc`` recipients replaced."""
    return dataclasses.replace(email, bcc=value)


def subject(email: Email, value: str) -> Email:
    return dataclasses.replace(email, subject=value)


def text_body(email: Email, value: str) -> Email:
    return dataclasses.replace(email, text_body=value)


def html_body(email: Email, value: str) -> Email:
    return dataclasses.replace(email, html_body=value)


def put_header(email: Email, name: str, value: str) -> Email:
    """Return a copy of ``email`` with header ``name`` added or replaced.

    Example:
        >>> e = put_header(Email(), "X-Priority", "1")
        >>> e.headers["X-Priority"]
        '1'
        >>> dict(put_header(e, "X-Priority", "3").headers)
        {'X-Priority': '3'}
    """
    return dataclasses.replace(email, headers={**email.headers, name: value})


def assign(email: Email, key: str, value: Any) -> Email:
    """Return a copy of ``email`` with template assign ``key`` set."""
    return dataclasses.replace(email, assigns={**email.assigns, key: value})


def put_private(email: Email, key: str, value: Any) -> Email:
    """Return a copy of ``email`` with adapter-specific entry ``key`` set.

    The dispatch core never reads these entries; adapters may.
    """
    return dataclasses.replace(email, private={**email.private, key: value})


def tag(email: Email, value: str) -> Email:
    """Append ``value`` to the adapter-specific ``tags`` list.

    Example:
        >>> tag(tag(Email(), "welcome"), "onboarding").private["tags"]
        ('welcome', 'onboarding')
    """
    tags = tuple(email.private.get("tags", ()))
    return put_private(email, "tags", (*tags, value))


__all__ = [
    "Email",
    "assign",
    "bcc",
    "cc",
    "from_",
    "html_body",
    "new_email",
    "put_header",
    "put_private",
    "subject",
    "tag",
    "text_body",
    "to",
]
