"""Credential variants accepted by the TeamDynamix authentication endpoints.

The API accepts either an end-user login (``UserName``/``Password``) or an
administrative key pair (``BEID``/``WebServicesKey``). Each variant knows
which login sub-endpoint it targets and how to render itself as a form body.
"""

from collections.abc import Mapping
from typing import Any, ClassVar, TypeAlias

from pydantic import BaseModel, ConfigDict, Field


class BasicCredentials(BaseModel):
    """Username/password credentials for the standard login endpoint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    login_path: ClassVar[str] = "/auth/login"

    username: str = Field("", alias="UserName")
    password: str = Field("", alias="Password", repr=False)

    def form(self) -> dict[str, str]:
        """Render the credentials as a form body using API field names."""
        return self.model_dump(by_alias=True)


class AdminCredentials(BaseModel):
    """Administrative credentials for the ``loginadmin`` endpoint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    login_path: ClassVar[str] = "/auth/loginadmin"

    beid: str = Field(alias="BEID")
    web_services_key: str = Field(alias="WebServicesKey", repr=False)

    def form(self) -> dict[str, str]:
        """Render the credentials as a form body using API field names."""
        return self.model_dump(by_alias=True)


Credentials: TypeAlias = BasicCredentials | AdminCredentials

_ADMIN_MARKERS = ("BEID", "beid")


def parse_credentials(value: Credentials | Mapping[str, Any] | None) -> Credentials:
    """Pick the credential variant for a raw configuration value.

    Presence of the administrative ``BEID`` field selects
    :class:`AdminCredentials`; anything else is treated as
    :class:`BasicCredentials`. ``None`` yields empty basic credentials.
    """
    if value is None:
        return BasicCredentials()
    if isinstance(value, (BasicCredentials, AdminCredentials)):
        return value
    if any(marker in value for marker in _ADMIN_MARKERS):
        return AdminCredentials.model_validate(dict(value))
    return BasicCredentials.model_validate(dict(value))
