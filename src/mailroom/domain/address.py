"""Canonical sender/recipient value."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Address:
    """A display name paired with an email address.

    Every sender and recipient is reduced to this form before an adapter
    sees the email. Equality is structural.

    Example:
        >>> Address("John", "john@example.com") == Address(name="John", address="john@example.com")
        True
        >>> str(Address("John", "john@example.com"))
        'John <john@example.com>'
        >>> str(Address("", "john@example.com"))
        'john@example.com'
    """

    name: str
    address: str

    def __str__(self) -> str:
        if self.name:
            return f"{self.name} <{self.address}>"
        return self.address


__all__ = ["Address"]
