"""Accounts (departments)."""

from datetime import datetime
from typing import Any

from pydantic import Field

from .base import Resource


class Account(Resource):
    """An account or department."""

    id: int | None = Field(None, alias="ID")
    name: str | None = Field(None, alias="Name")
    is_active: bool | None = Field(None, alias="IsActive")
    address1: str | None = Field(None, alias="Address1")
    address2: str | None = Field(None, alias="Address2")
    address3: str | None = Field(None, alias="Address3")
    address4: str | None = Field(None, alias="Address4")
    city: str | None = Field(None, alias="City")
    state_name: str | None = Field(None, alias="StateName")
    state_abbr: str | None = Field(None, alias="StateAbbr")
    postal_code: str | None = Field(None, alias="PostalCode")
    country: str | None = Field(None, alias="Country")
    phone: str | None = Field(None, alias="Phone")
    fax: str | None = Field(None, alias="Fax")
    url: str | None = Field(None, alias="Url")
    notes: str | None = Field(None, alias="Notes")
    created_date: datetime | None = Field(None, alias="CreatedDate")
    modified_date: datetime | None = Field(None, alias="ModifiedDate")
    code: str | None = Field(None, alias="Code")
    industry_id: int | None = Field(None, alias="IndustryID")
    industry_name: str | None = Field(None, alias="IndustryName")
    domain: str | None = Field(None, alias="Domain")

    def edit(self) -> Any:
        return self.client.edit_account(self.id, self)
