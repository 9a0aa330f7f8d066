"""Type-safe domain enums for address roles and output formats."""

from __future__ import annotations

from enum import Enum


class AddressRole(str, Enum):
    """The email field an address is being formatted for.

    Passed to address formatters inside :class:`~mailroom.domain.formatter.FormatContext`
    so a domain object can render differently as a sender than as a recipient.

    Example:
        >>> AddressRole.FROM.value
        'from'
        >>> AddressRole.BCC == "bcc"
        True
    """

    FROM = "from"
    TO = "to"
    CC = "cc"
    BCC = "bcc"


class OutputFormat(str, Enum):
    """Output format options for configuration display.

    Inherits from str to allow direct string comparison and Click integration.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


__all__ = [
    "AddressRole",
    "OutputFormat",
]
