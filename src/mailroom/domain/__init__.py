"""Domain layer - pure value types and functions with no I/O.

Contents:
    * :mod:`.address` - Canonical :class:`Address` value
    * :mod:`.email` - Immutable :class:`Email` and its builder functions
    * :mod:`.formatter` - Polymorphic address formatter registry
    * :mod:`.enums` - Domain enumerations (AddressRole, OutputFormat)
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .address import Address
from .email import Email, new_email
from .enums import AddressRole, OutputFormat
from .errors import (
    ConfigurationError,
    DeliveryError,
    EmptyFromAddressError,
    InvalidFromAddressError,
    InvalidRecipientError,
    MailerDefinitionError,
    MailroomError,
    NoFormatterError,
)
from .formatter import FormatContext, format_email_address, register_formatter

__all__ = [
    # Values
    "Address",
    "Email",
    "new_email",
    # Formatter
    "FormatContext",
    "format_email_address",
    "register_formatter",
    # Enums
    "AddressRole",
    "OutputFormat",
    # Errors
    "ConfigurationError",
    "DeliveryError",
    "EmptyFromAddressError",
    "InvalidFromAddressError",
    "InvalidRecipientError",
    "MailerDefinitionError",
    "MailroomError",
    "NoFormatterError",
]
