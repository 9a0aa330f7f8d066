"""SMTP adapter configuration model.

Provides the SmtpConfig Pydantic model for validated, immutable SMTP
settings. The mapping bound to a mailer (everything in
``[mailers.<name>]`` except ``adapter``) is parsed into this model on
each delivery.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from btx_lib_mail import validate_smtp_host
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SmtpConfig(BaseModel):
    """Validated, immutable SMTP settings.

    Unknown keys are ignored so one mailer section may also carry settings
    meant for other tooling.

    Example:
        >>> config = SmtpConfig(smtp_hosts=["smtp.example.com:587"])
        >>> config.smtp_hosts
        ['smtp.example.com:587']
        >>> config.use_starttls
        True
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    smtp_hosts: list[str] = Field(default_factory=list)
    smtp_username: str | None = None
    smtp_password: str | None = None
    use_starttls: bool = True
    timeout: float = 30.0
    raise_on_invalid_recipient: bool = True

    @field_validator("smtp_hosts", mode="before")
    @classmethod
    def _coerce_string_to_list(cls, v: Any) -> list[str]:
        """Coerce single strings to single-element lists.

        Handles environment variables and .env files that provide single strings
        instead of TOML arrays. Empty strings become empty lists.

        Examples:
            >>> SmtpConfig._coerce_string_to_list("smtp.example.com:587")
            ['smtp.example.com:587']
            >>> SmtpConfig._coerce_string_to_list("")
            []
        """
        if isinstance(v, str):
            return [v] if v.strip() else []
        if isinstance(v, (list, tuple)):
            return list(cast(list[str], v))
        return []

    @field_validator("smtp_username", "smtp_password", mode="before")
    @classmethod
    def _coerce_empty_string_to_none(cls, v: str | None) -> str | None:
        """Treat blank credentials from config files as "not configured"."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def _validate_config(self) -> SmtpConfig:
        """Catch configuration mistakes with clear messages.

        Raises:
            ValueError: When the timeout is not positive or a host is malformed.
        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

        for host in self.smtp_hosts:
            validate_smtp_host(host)

        return self

    @property
    def credentials(self) -> tuple[str, str] | None:
        """Return ``(username, password)`` when both are set, else None."""
        if self.smtp_username is not None and self.smtp_password is not None:
            return (self.smtp_username, self.smtp_password)
        return None

    def __repr__(self) -> str:
        """Return string representation with smtp_password redacted.

        Example:
            >>> config = SmtpConfig(smtp_hosts=["smtp.example.com:587"], smtp_password="secret123")
            >>> "secret123" in repr(config)
            False
            >>> "[REDACTED]" in repr(config)
            True
        """
        fields: list[str] = []
        for name, value in self:
            if name == "smtp_password" and value is not None:
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"SmtpConfig({', '.join(fields)})"


def load_smtp_config(config: Mapping[str, Any]) -> SmtpConfig:
    """Parse a mailer's adapter config into :class:`SmtpConfig`.

    Example:
        >>> load_smtp_config({"smtp_hosts": "smtp.example.com:25", "timeout": 5}).timeout
        5.0
    """
    return SmtpConfig.model_validate(dict(config))


__all__ = [
    "SmtpConfig",
    "load_smtp_config",
]
