"""SMTP adapter stories: config parsing, validation, and btx_lib_mail hand-off.

``btx_lib_mail.lib_mail.send`` is patched where the adapter imported it, so
no test opens a network connection.
"""

from __future__ import annotations

import logging
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from pydantic import ValidationError

from mailroom.adapters.smtp import SmtpAdapter, SmtpConfig, load_smtp_config
from mailroom.adapters.smtp.transport import _sanitize_exception_message
from mailroom.adapters.smtp.validation import validate_address
from mailroom.application.mailer import Mailer, normalize_addresses
from mailroom.application.ports import Adapter
from mailroom.domain.address import Address
from mailroom.domain.email import Email, new_email
from mailroom.domain.errors import ConfigurationError, DeliveryError, InvalidRecipientError

SEND_TARGET = "mailroom.adapters.smtp.transport.btx_send"

_hostname = st.from_regex(r"[a-z][a-z0-9]{0,15}\.[a-z]{2,6}", fullmatch=True)
_port = st.integers(min_value=1, max_value=65535)
_smtp_host = st.builds(lambda h, p: f"{h}:{p}", _hostname, _port)  # type: ignore[arg-type]

SMTP_OPTIONS: dict[str, Any] = {
    "smtp_hosts": ["smtp.test.com:587"],
    "smtp_username": "mailer",
    "smtp_password": "s3cret",
    "timeout": 10,
}


def _normalized(**fields: Any) -> Email:
    defaults: dict[str, Any] = {
        "from_": Address("Shop", "shop@example.com"),
        "to": "foo@example.com",
        "subject": "Welcome!!!",
        "html_body": "<strong>WELCOME</strong>",
        "text_body": "WELCOME",
    }
    return normalize_addresses(new_email(**{**defaults, **fields}))


# ======================== SmtpConfig ========================


@pytest.mark.os_agnostic
def test_smtp_config_defaults() -> None:
    config = SmtpConfig()

    assert config.smtp_hosts == []
    assert config.credentials is None
    assert config.use_starttls is True
    assert config.timeout == 30.0
    assert config.raise_on_invalid_recipient is True


@pytest.mark.os_agnostic
def test_smtp_config_coerces_a_single_host_string() -> None:
    assert load_smtp_config({"smtp_hosts": "smtp.test.com:25"}).smtp_hosts == ["smtp.test.com:25"]


@pytest.mark.os_agnostic
@given(hosts=st.lists(_smtp_host, min_size=1, max_size=3))
@settings(max_examples=50)
def test_smtp_config_accepts_well_formed_hosts(hosts: list[str]) -> None:
    assert SmtpConfig(smtp_hosts=hosts).smtp_hosts == hosts


@pytest.mark.os_agnostic
@pytest.mark.parametrize("host", ["smtp.test.com:0", "smtp.test.com:99999", "smtp.test.com:abc"])
def test_smtp_config_rejects_malformed_ports(host: str) -> None:
    with pytest.raises(ValidationError):
        SmtpConfig(smtp_hosts=[host])


@pytest.mark.os_agnostic
def test_smtp_config_treats_blank_credentials_as_unset() -> None:
    config = load_smtp_config({"smtp_username": "  ", "smtp_password": ""})

    assert config.smtp_username is None
    assert config.credentials is None


@pytest.mark.os_agnostic
def test_smtp_config_pairs_credentials() -> None:
    assert load_smtp_config(SMTP_OPTIONS).credentials == ("mailer", "s3cret")


@pytest.mark.os_agnostic
@pytest.mark.parametrize("timeout", [0, -1.5])
def test_smtp_config_rejects_non_positive_timeouts(timeout: float) -> None:
    with pytest.raises(ValidationError, match="timeout must be positive"):
        SmtpConfig(timeout=timeout)


@pytest.mark.os_agnostic
def test_smtp_config_ignores_unrelated_keys() -> None:
    assert load_smtp_config({"smtp_hosts": ["smtp.test.com"], "api_key": "k"}).smtp_hosts == ["smtp.test.com"]


@pytest.mark.os_agnostic
def test_smtp_config_is_immutable() -> None:
    config = SmtpConfig()

    with pytest.raises(ValidationError):
        config.timeout = 5  # type: ignore[misc]


@pytest.mark.os_agnostic
def test_smtp_config_repr_redacts_the_password() -> None:
    text = repr(load_smtp_config(SMTP_OPTIONS))

    assert "s3cret" not in text
    assert "[REDACTED]" in text


# ======================== Validation helpers ========================


@pytest.mark.os_agnostic
def test_validate_address_accepts_a_valid_address() -> None:
    validate_address(Address("John", "john@example.com"))


@pytest.mark.os_agnostic
@pytest.mark.parametrize("value", ["not-an-email", "a@@example.com", "@example.com"])
def test_validate_address_rejects_malformed_addresses(value: str) -> None:
    with pytest.raises(InvalidRecipientError, match="Invalid recipient"):
        validate_address(Address("", value))


@pytest.mark.os_agnostic
def test_sanitize_hides_messages_that_mention_credentials() -> None:
    assert "password" not in _sanitize_exception_message(RuntimeError("bad password for mailer"))
    assert _sanitize_exception_message(RuntimeError("connection refused")) == "connection refused"


# ======================== SmtpAdapter.deliver ========================


@pytest.mark.os_agnostic
def test_smtp_adapter_satisfies_the_adapter_protocol() -> None:
    assert isinstance(SmtpAdapter(), Adapter)


@pytest.mark.os_agnostic
def test_deliver_hands_the_message_to_btx_lib_mail() -> None:
    email = _normalized(cc="cc@example.com", bcc=Address("Ops", "ops@example.com"))

    with patch(SEND_TARGET, return_value=True) as send:
        result = SmtpAdapter().deliver(email, SMTP_OPTIONS)

    assert result is True
    kwargs = send.call_args.kwargs
    assert kwargs["mail_from"] == "shop@example.com"
    assert kwargs["mail_recipients"] == ["foo@example.com", "cc@example.com", "ops@example.com"]
    assert kwargs["mail_subject"] == "Welcome!!!"
    assert kwargs["mail_body"] == "WELCOME"
    assert kwargs["mail_body_html"] == "<strong>WELCOME</strong>"
    assert kwargs["smtphosts"] == ["smtp.test.com:587"]
    assert kwargs["credentials"] == ("mailer", "s3cret")
    assert kwargs["timeout"] == 10.0


@pytest.mark.os_agnostic
def test_deliver_records_the_custom_headers_it_cannot_send(caplog: pytest.LogCaptureFixture) -> None:
    email = _normalized(headers={"Reply-To": "help@example.com", "X-Campaign": "spring"})
    caplog.set_level(logging.DEBUG, logger="mailroom.adapters.smtp.transport")

    with patch(SEND_TARGET, return_value=True) as send:
        SmtpAdapter().deliver(email, SMTP_OPTIONS)

    dropped = [record for record in caplog.records if "custom headers" in record.getMessage()]
    assert len(dropped) == 1
    assert dropped[0].dropped_headers == ["Reply-To", "X-Campaign"]  # type: ignore[attr-defined]
    assert "Reply-To" not in str(send.call_args.kwargs)


@pytest.mark.os_agnostic
def test_deliver_without_headers_logs_nothing_about_them(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="mailroom.adapters.smtp.transport")

    with patch(SEND_TARGET, return_value=True):
        SmtpAdapter().deliver(_normalized(), SMTP_OPTIONS)

    assert not [record for record in caplog.records if "custom headers" in record.getMessage()]


@pytest.mark.os_agnostic
def test_deliver_sends_empty_strings_for_missing_bodies() -> None:
    email = _normalized(html_body=None, text_body=None, subject=None)

    with patch(SEND_TARGET, return_value=True) as send:
        SmtpAdapter().deliver(email, SMTP_OPTIONS)

    kwargs = send.call_args.kwargs
    assert kwargs["mail_subject"] == ""
    assert kwargs["mail_body"] == ""
    assert kwargs["mail_body_html"] == ""


@pytest.mark.os_agnostic
def test_deliver_returns_false_when_the_transport_reports_failure() -> None:
    with patch(SEND_TARGET, return_value=False):
        assert SmtpAdapter().deliver(_normalized(), SMTP_OPTIONS) is False


@pytest.mark.os_agnostic
def test_deliver_without_hosts_is_a_configuration_error() -> None:
    send = MagicMock()

    with patch(SEND_TARGET, send), pytest.raises(ConfigurationError, match="No SMTP hosts"):
        SmtpAdapter().deliver(_normalized(), {"smtp_hosts": []})

    send.assert_not_called()


@pytest.mark.os_agnostic
def test_deliver_with_invalid_config_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="Invalid SMTP configuration"):
        SmtpAdapter().deliver(_normalized(), {"smtp_hosts": ["smtp.test.com"], "timeout": -1})


@pytest.mark.os_agnostic
def test_deliver_without_recipients_is_rejected() -> None:
    with patch(SEND_TARGET) as send, pytest.raises(InvalidRecipientError, match="no recipients"):
        SmtpAdapter().deliver(_normalized(to=None), SMTP_OPTIONS)

    send.assert_not_called()


@pytest.mark.os_agnostic
def test_deliver_rejects_a_malformed_recipient_before_sending() -> None:
    with patch(SEND_TARGET) as send, pytest.raises(InvalidRecipientError):
        SmtpAdapter().deliver(_normalized(to=["ok@example.com", "broken"]), SMTP_OPTIONS)

    send.assert_not_called()


@pytest.mark.os_agnostic
def test_deliver_wraps_transport_failures_in_delivery_error() -> None:
    with patch(SEND_TARGET, side_effect=RuntimeError("all hosts failed")), pytest.raises(DeliveryError) as excinfo:
        SmtpAdapter().deliver(_normalized(), SMTP_OPTIONS)

    assert str(excinfo.value) == "all hosts failed"
    assert isinstance(excinfo.value.__cause__, RuntimeError)


@pytest.mark.os_agnostic
def test_deliver_never_leaks_credentials_in_delivery_errors() -> None:
    failure = RuntimeError("SMTP AUTH failed for mailer:s3cret")

    with patch(SEND_TARGET, side_effect=failure), pytest.raises(DeliveryError) as excinfo:
        SmtpAdapter().deliver(_normalized(), SMTP_OPTIONS)

    assert "s3cret" not in str(excinfo.value)


# ======================== SmtpAdapter.deliver_async ========================


@pytest.mark.os_agnostic
def test_deliver_async_runs_the_send_in_the_background() -> None:
    with patch(SEND_TARGET, return_value=True) as send:
        future = SmtpAdapter().deliver_async(_normalized(), SMTP_OPTIONS)
        assert future.result(timeout=5) is True

    send.assert_called_once()


@pytest.mark.os_agnostic
def test_deliver_async_reports_config_errors_through_the_handle() -> None:
    future = SmtpAdapter().deliver_async(_normalized(), {})

    with pytest.raises(ConfigurationError):
        future.result(timeout=5)


# ======================== Through a mailer ========================


@pytest.mark.os_agnostic
def test_a_mailer_bound_to_smtp_delivers_with_its_config() -> None:
    mailer = Mailer.from_options("transactional", {"adapter": SmtpAdapter, **SMTP_OPTIONS})
    email = new_email(from_="me@example.com", to="foo@example.com", subject="Hi")

    with patch(SEND_TARGET, return_value=True) as send:
        assert mailer.deliver(email) is True

    assert send.call_args.kwargs["smtphosts"] == ["smtp.test.com:587"]
