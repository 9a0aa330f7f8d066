"""Exit codes and the error-to-exit-code mapping of the CLI boundary.

Contents:
    * :class:`ExitCode` -- IntEnum of every exit code ``mailroom`` returns.
    * :func:`exit_code_for` -- Classify an exception raised while sending.
"""

from __future__ import annotations

from enum import IntEnum

from mailroom.domain.errors import ConfigurationError, DeliveryError


class ExitCode(IntEnum):
    """Exit codes following sysexits.h and errno where one fits.

    * 22: EINVAL, a bad sender or recipient
    * 69: EX_UNAVAILABLE, the transport could not deliver
    * 78: EX_CONFIG, a missing or broken mailer definition

    Example:
        >>> int(ExitCode.DELIVERY_FAILURE)
        69
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_ARGUMENT = 22
    DELIVERY_FAILURE = 69
    CONFIG_ERROR = 78


def exit_code_for(exc: BaseException) -> ExitCode:
    """Return the exit code for an error raised while loading or delivering.

    Order matters: ``MailerDefinitionError`` is a ``ConfigurationError`` and
    ``InvalidRecipientError`` is a ``ValueError``.

    Example:
        >>> from mailroom.domain.errors import EmptyFromAddressError, MailerDefinitionError
        >>> exit_code_for(MailerDefinitionError("no adapter")).name
        'CONFIG_ERROR'
        >>> exit_code_for(EmptyFromAddressError()).name
        'INVALID_ARGUMENT'
        >>> exit_code_for(KeyError("x")).name
        'GENERAL_ERROR'
    """
    if isinstance(exc, ConfigurationError):
        return ExitCode.CONFIG_ERROR
    if isinstance(exc, ValueError):
        return ExitCode.INVALID_ARGUMENT
    if isinstance(exc, (DeliveryError, RuntimeError)):
        return ExitCode.DELIVERY_FAILURE
    return ExitCode.GENERAL_ERROR


__all__ = ["ExitCode", "exit_code_for"]
