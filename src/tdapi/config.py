"""Client configuration and logging setup."""

import json
import logging
import pathlib
import sys
from typing import Any

import pydantic
import structlog

from .credentials import BasicCredentials, Credentials, parse_credentials

CONFIG_ENV_VAR = "TDAPI_CONFIG_PATH"

DEFAULT_BASE_URL = "https://api.teamdynamix.com/TDWebAPI/api"

DEFAULT_TIMEOUT = 30.0


class ClientConfig(pydantic.BaseModel):
    """Configuration for a TeamDynamix API client.

    Accepts the API's camelCase keys (``baseUrl``, ``logLevel``) as well as
    the Python field names. Immutable once constructed.
    """

    model_config = pydantic.ConfigDict(frozen=True, populate_by_name=True)

    base_url: str = pydantic.Field(
        DEFAULT_BASE_URL,
        alias="baseUrl",
        description="Base URL of the TeamDynamix Web API",
    )
    credentials: Credentials = pydantic.Field(
        default_factory=BasicCredentials,
        description="End-user or administrative credentials",
    )
    timeout: float = pydantic.Field(
        DEFAULT_TIMEOUT,
        description="Request timeout in seconds",
        gt=0,
    )
    log_level: str = pydantic.Field("INFO", alias="logLevel", description="Logging level")

    @pydantic.field_validator("base_url")
    @classmethod
    def _require_base_url(cls, value: str) -> str:
        if not value:
            msg = "baseUrl cannot be empty"
            raise ValueError(msg)
        return value

    @pydantic.field_validator("credentials", mode="before")
    @classmethod
    def _select_variant(cls, value: Any) -> Credentials:
        return parse_credentials(value)


def configure_logging(level: str) -> None:
    """Send tdapi events to stderr as logfmt lines.

    ``method`` and ``endpoint`` follow the message when an event has them.
    Unknown level names mean INFO.
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.EventRenamer("msg"),
            structlog.processors.format_exc_info,
            structlog.processors.LogfmtRenderer(
                key_order=("timestamp", "level", "msg", "method", "endpoint"),
                drop_missing=True,
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def load_config(config_path: str | pathlib.Path) -> ClientConfig:
    """Load client configuration from a JSON file."""
    path = pathlib.Path(config_path)
    if not path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with path.open("r") as f:
        data = json.load(f)

    return ClientConfig.model_validate(data)
