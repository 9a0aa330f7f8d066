"""Public package surface exposing emails, mailers, and configuration.

This module provides the stable public API for the package, routing imports
through the proper architectural layers:
- Domain exports: Email values, builders, address formatting, errors
- Application exports: The mailer
- Composition exports: Wired adapter services (configuration, mailer loading)
- Metadata: Package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Application exports
from .application.mailer import Mailer, normalize_addresses

# Composition exports (wired adapters)
from .composition import get_config, load_mailer

# Domain exports
from .domain import email as builders
from .domain.address import Address
from .domain.email import Email, new_email
from .domain.enums import AddressRole
from .domain.errors import (
    ConfigurationError,
    DeliveryError,
    EmptyFromAddressError,
    InvalidFromAddressError,
    InvalidRecipientError,
    MailerDefinitionError,
    MailroomError,
    NoFormatterError,
)
from .domain.formatter import FormatContext, format_email_address, register_formatter

__all__ = [
    "Address",
    "AddressRole",
    "ConfigurationError",
    "DeliveryError",
    "Email",
    "EmptyFromAddressError",
    "FormatContext",
    "InvalidFromAddressError",
    "InvalidRecipientError",
    "Mailer",
    "MailerDefinitionError",
    "MailroomError",
    "NoFormatterError",
    "builders",
    "format_email_address",
    "get_config",
    "load_mailer",
    "new_email",
    "normalize_addresses",
    "print_info",
    "register_formatter",
]
