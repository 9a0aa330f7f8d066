"""Envelope address validation for the SMTP transport.

Raises domain exceptions (InvalidRecipientError) rather than
library-specific exceptions.
"""

from __future__ import annotations

from collections.abc import Iterable

from btx_lib_mail import validate_email_address

from mailroom.domain.address import Address
from mailroom.domain.errors import InvalidRecipientError


def validate_address(address: Address) -> None:
    """Validate a single canonical address.

    Raises:
        InvalidRecipientError: When the address part is not a valid email address.

    Example:
        >>> validate_address(Address("", "valid@example.com"))  # no exception
        >>> validate_address(Address("", "invalid"))  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        InvalidRecipientError: Invalid recipient: invalid
    """
    try:
        validate_email_address(address.address)
    except ValueError as e:
        raise InvalidRecipientError(f"Invalid recipient: {address.address}") from e


def validate_addresses(addresses: Iterable[Address]) -> None:
    for address in addresses:
        validate_address(address)


__all__ = ["validate_address", "validate_addresses"]
