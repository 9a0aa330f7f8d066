"""Domain error types: instantiation, message preservation, and hierarchy."""

from __future__ import annotations

import pytest

from mailroom.domain.errors import (
    ConfigurationError,
    DeliveryError,
    EmptyFromAddressError,
    InvalidFromAddressError,
    InvalidRecipientError,
    MailerDefinitionError,
    MailroomError,
    NoFormatterError,
)


@pytest.mark.os_agnostic
def test_configuration_error_preserves_message() -> None:
    """Instantiation stores the message for display."""
    exc = ConfigurationError("SMTP hosts not configured")
    assert str(exc) == "SMTP hosts not configured"


@pytest.mark.os_agnostic
def test_delivery_error_preserves_message() -> None:
    """Instantiation stores the SMTP failure detail."""
    exc = DeliveryError("Connection refused on smtp.example.com:587")
    assert str(exc) == "Connection refused on smtp.example.com:587"


@pytest.mark.os_agnostic
def test_invalid_recipient_error_is_value_error() -> None:
    """InvalidRecipientError is caught by plain ValueError handlers."""
    with pytest.raises(ValueError, match="missing domain"):
        raise InvalidRecipientError("missing domain")


@pytest.mark.os_agnostic
def test_mailer_definition_error_is_configuration_error() -> None:
    """A broken mailer definition is reported like any configuration error."""
    assert issubclass(MailerDefinitionError, ConfigurationError)


@pytest.mark.os_agnostic
def test_empty_from_address_error_has_a_default_message() -> None:
    """The precondition error explains how to fix the email."""
    assert "from_()" in str(EmptyFromAddressError())


@pytest.mark.os_agnostic
def test_empty_from_address_error_accepts_a_custom_message() -> None:
    assert str(EmptyFromAddressError("no sender")) == "no sender"


@pytest.mark.os_agnostic
def test_precondition_errors_are_value_errors() -> None:
    assert issubclass(EmptyFromAddressError, ValueError)
    assert issubclass(InvalidFromAddressError, ValueError)


@pytest.mark.os_agnostic
def test_no_formatter_error_names_the_type_and_keeps_the_value() -> None:
    value = object()
    exc = NoFormatterError(value)

    assert exc.value is value
    assert "'object'" in str(exc)
    assert isinstance(exc, TypeError)


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    "error_type",
    [
        ConfigurationError,
        MailerDefinitionError,
        EmptyFromAddressError,
        InvalidFromAddressError,
        DeliveryError,
        InvalidRecipientError,
    ],
)
def test_every_error_shares_the_package_base(error_type: type[Exception]) -> None:
    assert issubclass(error_type, MailroomError)
