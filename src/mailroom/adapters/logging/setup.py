"""lib_log_rich runtime initialisation shared by every entry point.

The console script, ``python -m mailroom`` and the tests start logging the
same way, once per process. Every ``mailroom`` module logs through
``logging.getLogger(__name__)``; those stdlib records (the mailer's DEBUG
"Sending email" record included) are bridged into lib_log_rich.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from mailroom import __init__conf__

#: Config section read by :func:`init_logging`.
LOGGING_SECTION = "lib_log_rich"


class LoggingConfigModel(BaseModel):
    """The ``[lib_log_rich]`` section.

    Unknown keys are kept and forwarded to ``RuntimeConfig`` unchanged.

    Example:
        >>> model = LoggingConfigModel(service="mailroom-worker", environment="staging")
        >>> model.to_runtime_config().service
        'mailroom-worker'
        >>> LoggingConfigModel().to_runtime_config().service
        'mailroom'
    """

    model_config = ConfigDict(extra="allow")

    service: str | None = None
    environment: str = "prod"

    @classmethod
    def from_config(cls, config: Config) -> LoggingConfigModel:
        section: Any = config.get(LOGGING_SECTION, default={})
        return cls.model_validate(dict(section) if isinstance(section, Mapping) else {})

    def to_runtime_config(self) -> lib_log_rich.runtime.RuntimeConfig:
        """Build the RuntimeConfig; the service defaults to the package name."""
        passthrough = self.model_dump(exclude={"service", "environment"}, exclude_none=True)
        return lib_log_rich.runtime.RuntimeConfig(
            service=self.service or __init__conf__.name,
            environment=self.environment,
            **passthrough,
        )


def _build_runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    return LoggingConfigModel.from_config(config).to_runtime_config()


def init_logging(config: Config) -> None:
    """Start the lib_log_rich runtime from ``config``; later calls are no-ops.

    The first call also loads .env files so ``LOG_*`` variables apply.

    Example:
        >>> config = Config({"lib_log_rich": {"environment": "test"}}, {})
        >>> init_logging(config)  # doctest: +SKIP
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(_build_runtime_config(config))
    lib_log_rich.runtime.attach_std_logging()


__all__ = [
    "LOGGING_SECTION",
    "LoggingConfigModel",
    "init_logging",
]
