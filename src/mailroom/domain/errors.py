"""Domain-specific exceptions for typed error handling at boundaries.

The dispatch core raises only precondition and definition errors. Transport
errors belong to adapters and are propagated to callers untouched.
"""

from __future__ import annotations


class MailroomError(Exception):
    """Common base for every error raised by mailroom itself."""


class ConfigurationError(MailroomError):
    """Missing, invalid, or incomplete configuration.

    Raised when required configuration values are absent, malformed, or
    logically inconsistent. Typically caught at CLI boundaries to provide
    user-friendly error messages.

    Example:
        >>> from mailroom.domain.errors import ConfigurationError
        >>> err = ConfigurationError("No SMTP hosts configured")
        >>> str(err)
        'No SMTP hosts configured'
    """


class MailerDefinitionError(ConfigurationError):
    """A mailer cannot be defined from the given options.

    Raised at definition time, never at the first delivery, when the
    ``adapter`` key is missing or names something that is not an adapter.

    Example:
        >>> err = MailerDefinitionError("mailer 'default' has no adapter")
        >>> isinstance(err, ConfigurationError)
        True
    """


class EmptyFromAddressError(MailroomError, ValueError):
    """The email has no sender.

    A precondition failure raised before any adapter is invoked. The sender
    is never defaulted.

    Example:
        >>> err = EmptyFromAddressError()
        >>> str(err)
        'email has no from address; set one with from_() before delivering'
    """

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "email has no from address; set one with from_() before delivering")


class InvalidFromAddressError(MailroomError, ValueError):
    """The sender did not normalize to exactly one address."""


class NoFormatterError(MailroomError, TypeError):
    """No address formatter is registered for a value's type.

    Example:
        >>> err = NoFormatterError(42)
        >>> err.value
        42
        >>> str(err)
        "no email address formatter registered for type 'int'"
    """

    def __init__(self, value: object, *, reason: str | None = None) -> None:
        self.value = value
        if reason is None:
            reason = f"no email address formatter registered for type {type(value).__name__!r}"
        super().__init__(reason)


class DeliveryError(MailroomError):
    """Email delivery failed at transport level.

    Raised by the shipped adapters when the transport rejects or cannot
    accept the message. The mailer itself never raises or catches it.

    Example:
        >>> from mailroom.domain.errors import DeliveryError
        >>> err = DeliveryError("Connection refused by smtp.example.com:587")
        >>> str(err)
        'Connection refused by smtp.example.com:587'
    """


class InvalidRecipientError(MailroomError, ValueError):
    """Email address validation failure.

    Raised by transports when an address fails RFC 5321/5322 validation.
    Inherits from ValueError so ``except ValueError`` handlers catch it.

    Example:
        >>> err = InvalidRecipientError("Invalid email: not-an-email")
        >>> isinstance(err, ValueError)
        True
    """


__all__ = [
    "ConfigurationError",
    "DeliveryError",
    "EmptyFromAddressError",
    "InvalidFromAddressError",
    "InvalidRecipientError",
    "MailerDefinitionError",
    "MailroomError",
    "NoFormatterError",
]
