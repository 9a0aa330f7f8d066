"""SMTP delivery adapter built on btx_lib_mail.

The adapter receives a normalized email and the mailer's adapter config,
validates both, and hands the message to ``btx_lib_mail.lib_mail.send``.
btx_lib_mail takes a flat envelope recipient list, so ``to``, ``cc`` and
``bcc`` are all delivered as envelope recipients.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from concurrent.futures import Future
from typing import Any

from btx_lib_mail.lib_mail import send as btx_send
from pydantic import ValidationError

from mailroom.domain.email import Email
from mailroom.domain.errors import ConfigurationError, DeliveryError, InvalidRecipientError

from ..background import submit_delivery
from .config import SmtpConfig, load_smtp_config
from .validation import validate_address, validate_addresses

logger = logging.getLogger(__name__)

# Keywords that may indicate sensitive data in exception messages
_SENSITIVE_KEYWORDS = frozenset(
    {
        "password",
        "credential",
        "auth",
        "secret",
        "token",
        "key",
        "login",
    }
)


def _sanitize_exception_message(exc: Exception) -> str:
    """Sanitize exception message to prevent credential exposure.

    Returns a generic message when the original exception text contains
    keywords suggesting sensitive data (passwords, credentials, tokens).
    The full exception is preserved in the chain for DEBUG-level logging.

    Example:
        >>> class FakeExc(Exception): pass
        >>> _sanitize_exception_message(FakeExc("Connection failed"))
        'Connection failed'
        >>> _sanitize_exception_message(FakeExc("Auth password rejected"))
        'Email delivery failed. Check SMTP configuration.'
    """
    message = str(exc).lower()
    if any(keyword in message for keyword in _SENSITIVE_KEYWORDS):
        return "Email delivery failed. Check SMTP configuration."
    return str(exc)


def _parse_config(config: Mapping[str, Any]) -> SmtpConfig:
    """Validate the adapter config and require at least one host.

    Raises:
        ConfigurationError: When the config is invalid or lists no SMTP host.
    """
    try:
        smtp_config = load_smtp_config(config)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid SMTP configuration: {exc}") from exc
    if not smtp_config.smtp_hosts:
        raise ConfigurationError("No SMTP hosts configured (smtp_hosts is empty)")
    return smtp_config


class SmtpAdapter:
    """Sends emails over SMTP.

    Stateless: every setting comes from the config mapping bound to the
    mailer, so one instance can serve any number of mailers.

    btx_lib_mail sends a subject, bodies and a flat envelope recipient list
    only: ``email.headers`` and recipient display names are not transmitted
    (a DEBUG record lists dropped header names). ``assigns`` and ``private``
    are ignored.

    Example:
        >>> from mailroom.application.mailer import Mailer
        >>> mailer = Mailer("smtp", SmtpAdapter, {"smtp_hosts": ["smtp.example.com:587"]})
        >>> type(mailer.adapter).__name__
        'SmtpAdapter'
    """

    def deliver(self, email: Email, config: Mapping[str, Any]) -> bool:
        """Send ``email`` and block until every SMTP host has been tried.

        Returns:
            True when delivery succeeds; False if the transport reports
            partial failure without raising.

        Raises:
            ConfigurationError: Invalid config or no SMTP hosts.
            InvalidRecipientError: A sender or recipient address is malformed.
            DeliveryError: All SMTP hosts failed.
        """
        smtp_config = _parse_config(config)
        recipients = email.recipients()
        if not recipients:
            raise InvalidRecipientError("Email has no recipients (to, cc and bcc are empty)")
        validate_address(email.from_)
        validate_addresses(recipients)

        if email.headers:
            logger.debug(
                "SMTP transport does not send custom headers; dropping them",
                extra={"dropped_headers": sorted(email.headers)},
            )

        recipient_list = [address.address for address in recipients]
        sender = str(email.from_)
        logger.info(
            "Sending email via SMTP",
            extra={
                "sender": sender,
                "recipients": recipient_list,
                "subject": email.subject,
                "has_html": bool(email.html_body),
            },
        )

        try:
            result = btx_send(
                mail_from=email.from_.address,
                mail_recipients=recipient_list,
                mail_subject=email.subject or "",
                mail_body=email.text_body or "",
                mail_body_html=email.html_body or "",
                smtphosts=smtp_config.smtp_hosts,
                credentials=smtp_config.credentials,
                use_starttls=smtp_config.use_starttls,
                timeout=smtp_config.timeout,
                raise_on_invalid_recipient=smtp_config.raise_on_invalid_recipient,
            )
        except RuntimeError as exc:
            logger.debug("SMTP delivery failed", exc_info=True)
            raise DeliveryError(_sanitize_exception_message(exc)) from exc

        if result:
            logger.info("Email sent successfully", extra={"sender": sender, "recipients": recipient_list})
        else:
            logger.warning("Email send returned failure", extra={"sender": sender, "recipients": recipient_list})
        return result

    def deliver_async(self, email: Email, config: Mapping[str, Any]) -> Future[Any]:
        """Send ``email`` on the shared background pool.

        Config errors are raised by the future, like transport errors.
        """
        return submit_delivery(self.deliver, email, config)


__all__ = ["SmtpAdapter"]
