"""TeamDynamix Web API client.

Python client for the TeamDynamix ticketing and asset management REST API.
Handles bearer-token authentication with transparent renewal and maps API
records onto Pydantic resource models.

Exports:
    TDAPIClient: HTTP client with authentication and one method per operation.
    ClientConfig: Validated client configuration.
    BasicCredentials, AdminCredentials: The two supported identities.
    SessionManager: Bearer token lifecycle used by the client.
    create_client: Build a client from a JSON configuration file.
"""

import os
import pathlib

from .client import TDAPIClient
from .config import (
    CONFIG_ENV_VAR,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    ClientConfig,
    configure_logging,
    load_config,
)
from .credentials import AdminCredentials, BasicCredentials, Credentials
from .resources import (
    Account,
    Article,
    Asset,
    Location,
    Ticket,
    UnboundResourceError,
    User,
)
from .session import EmptyTokenError, Session, SessionManager

__version__ = "0.1.0"


def create_client(config_path: str | pathlib.Path | None = None) -> TDAPIClient:
    """Create a client using a config path or the environment default."""
    resolved_path = config_path or os.environ.get(CONFIG_ENV_VAR, "tdapi.json")
    config = load_config(resolved_path)
    configure_logging(config.log_level)
    return TDAPIClient.from_config(config)


__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "Account",
    "AdminCredentials",
    "Article",
    "Asset",
    "BasicCredentials",
    "ClientConfig",
    "Credentials",
    "EmptyTokenError",
    "Location",
    "Session",
    "SessionManager",
    "TDAPIClient",
    "Ticket",
    "UnboundResourceError",
    "User",
    "configure_logging",
    "create_client",
    "load_config",
]
