"""Mailer definitions from layered configuration.

Each ``[mailers.<name>]`` section is the named configuration object of one
mailer: the ``adapter`` key selects the delivery adapter and every other key
becomes that adapter's config. Resolution happens once, when the mailer is
defined; a missing or unresolvable adapter fails here and never at the first
delivery.

Contents:
    * :class:`MailerSettings` - Boundary model for one mailer section.
    * :func:`resolve_adapter` - Turn an adapter reference into an adapter object.
    * :func:`load_mailer` - Define a :class:`~mailroom.application.mailer.Mailer` from config.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Mapping
from typing import Any, cast

from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict, ValidationError

from mailroom.application.mailer import Mailer
from mailroom.domain.errors import MailerDefinitionError

logger = logging.getLogger(__name__)

#: Short names accepted for the adapters shipped with mailroom.
BUILTIN_ADAPTERS: Mapping[str, str] = {
    "local": "mailroom.adapters.memory:LocalAdapter",
    "smtp": "mailroom.adapters.smtp:SmtpAdapter",
    "test": "mailroom.adapters.memory:RecordingAdapter",
}


class MailerSettings(BaseModel):
    """Pydantic model for one ``[mailers.<name>]`` section.

    ``adapter`` is required; extra keys pass through as adapter config.

    Example:
        >>> settings = MailerSettings.model_validate({"adapter": "smtp", "timeout": 10})
        >>> settings.adapter
        'smtp'
        >>> settings.adapter_config()
        {'timeout': 10}
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    adapter: Any

    def adapter_config(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


def _import_reference(reference: str) -> Any:
    module_name, _, attribute = reference.partition(":")
    if not module_name or not attribute:
        raise MailerDefinitionError(f"adapter reference {reference!r} must look like 'package.module:ClassName'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise MailerDefinitionError(f"cannot import adapter module {module_name!r}: {exc}") from exc
    try:
        return getattr(module, attribute)
    except AttributeError as exc:
        raise MailerDefinitionError(f"module {module_name!r} has no adapter {attribute!r}") from exc


def resolve_adapter(reference: Any) -> Any:
    """Resolve an adapter reference from configuration.

    Args:
        reference: A built-in short name (``local``, ``smtp``, ``test``), a
            ``"package.module:ClassName"`` import path, or an adapter object
            or class, which is returned unchanged.

    Returns:
        The adapter object or class. Classes are instantiated by the mailer.

    Raises:
        MailerDefinitionError: When a string reference cannot be imported.

    Example:
        >>> resolve_adapter("local").__name__
        'LocalAdapter'
        >>> resolve_adapter("mailroom.adapters.smtp:SmtpAdapter").__name__
        'SmtpAdapter'
    """
    if not isinstance(reference, str):
        return reference
    name = reference.strip()
    return _import_reference(BUILTIN_ADAPTERS.get(name.lower(), name))


def define_mailer(name: str, section: Mapping[str, Any]) -> Mailer:
    """Define a mailer from one configuration section.

    Raises:
        MailerDefinitionError: When ``adapter`` is missing or unresolvable.

    Example:
        >>> define_mailer("dev", {"adapter": "local"})
        Mailer(name='dev', adapter=LocalAdapter)
    """
    try:
        settings = MailerSettings.model_validate(dict(section))
    except ValidationError as exc:
        raise MailerDefinitionError(f"mailer {name!r} has no 'adapter' configured") from exc
    adapter = resolve_adapter(settings.adapter)
    return Mailer.from_options(name, {**settings.adapter_config(), "adapter": adapter})


def load_mailer(config: Config, name: str = "default") -> Mailer:
    """Define the mailer configured under ``[mailers.<name>]``.

    Args:
        config: Already-loaded layered configuration.
        name: Mailer name; selects the configuration section.

    Returns:
        A mailer bound to the resolved adapter and its config.

    Raises:
        MailerDefinitionError: When the section is missing, has no
            ``adapter``, or names an adapter that cannot be resolved.

    Example:
        >>> config = Config({"mailers": {"default": {"adapter": "local"}}}, {})
        >>> load_mailer(config).name
        'default'
    """
    section: object = config.get(f"mailers.{name}", default=None)
    if not isinstance(section, Mapping):
        raise MailerDefinitionError(f"no mailer named {name!r} is configured (expected a [mailers.{name}] section)")
    mailer = define_mailer(name, cast(Mapping[str, Any], section))
    logger.debug("Mailer defined", extra={"mailer": name, "adapter": type(mailer.adapter).__name__})
    return mailer


__all__ = [
    "BUILTIN_ADAPTERS",
    "MailerSettings",
    "define_mailer",
    "load_mailer",
    "resolve_adapter",
]
