"""Assets tracked in the asset/CI application."""

from datetime import datetime
from typing import Any

from pydantic import Field

from .base import Resource


class Asset(Resource):
    """A tracked asset.

    Identity, ownership and placement fields are modelled; custom attributes
    and attachments are kept as the raw dictionaries the API returns.
    """

    id: int | None = Field(None, alias="ID")
    app_id: int | None = Field(None, alias="AppID")
    tag: str | None = Field(None, alias="Tag")
    name: str | None = Field(None, alias="Name")
    serial_number: str | None = Field(None, alias="SerialNumber")
    external_id: str | None = Field(None, alias="ExternalID")
    uri: str | None = Field(None, alias="Uri")

    # Product
    product_model_id: int | None = Field(None, alias="ProductModelID")
    product_model_name: str | None = Field(None, alias="ProductModelName")
    manufacturer_id: int | None = Field(None, alias="ManufacturerID")
    manufacturer_name: str | None = Field(None, alias="ManufacturerName")
    supplier_id: int | None = Field(None, alias="SupplierID")
    supplier_name: str | None = Field(None, alias="SupplierName")
    status_id: int | None = Field(None, alias="StatusID")
    status_name: str | None = Field(None, alias="StatusName")

    # Placement
    location_id: int | None = Field(None, alias="LocationID")
    location_name: str | None = Field(None, alias="LocationName")
    location_room_id: int | None = Field(None, alias="LocationRoomID")
    location_room_name: str | None = Field(None, alias="LocationRoomName")

    # Purchase
    purchase_cost: float | None = Field(None, alias="PurchaseCost")
    acquisition_date: datetime | None = Field(None, alias="AcquisitionDate")
    expected_replacement_date: datetime | None = Field(
        None, alias="ExpectedReplacementDate"
    )

    # Ownership
    requesting_customer_id: str | None = Field(None, alias="RequestingCustomerID")
    requesting_customer_name: str | None = Field(None, alias="RequestingCustomerName")
    requesting_department_id: int | None = Field(None, alias="RequestingDepartmentID")
    requesting_department_name: str | None = Field(
        None, alias="RequestingDepartmentName"
    )
    owning_customer_id: str | None = Field(None, alias="OwningCustomerID")
    owning_customer_name: str | None = Field(None, alias="OwningCustomerName")
    owning_department_id: int | None = Field(None, alias="OwningDepartmentID")
    owning_department_name: str | None = Field(None, alias="OwningDepartmentName")

    parent_id: int | None = Field(None, alias="ParentID")
    parent_serial_number: str | None = Field(None, alias="ParentSerialNumber")
    parent_tag: str | None = Field(None, alias="ParentTag")
    maintenance_schedule_id: int | None = Field(None, alias="MaintenanceScheduleID")
    maintenance_schedule_name: str | None = Field(
        None, alias="MaintenanceScheduleName"
    )
    configuration_item_id: int | None = Field(None, alias="ConfigurationItemID")

    created_date: datetime | None = Field(None, alias="CreatedDate")
    created_uid: str | None = Field(None, alias="CreatedUid")
    created_full_name: str | None = Field(None, alias="CreatedFullName")
    modified_date: datetime | None = Field(None, alias="ModifiedDate")
    modified_uid: str | None = Field(None, alias="ModifiedUid")
    modified_full_name: str | None = Field(None, alias="ModifiedFullName")

    attributes: list[dict[str, Any]] | None = Field(None, alias="Attributes")
    attachments: list[dict[str, Any]] | None = Field(None, alias="Attachments")

    def update(self) -> "Asset":
        return self.client.edit_asset(self.id, self)

    def get_feed_entries(self) -> Any:
        return self.client.get_asset_feed_entries(self.id)

    def add_feed_entry(self, feed_entry: dict[str, Any]) -> Any:
        return self.client.add_asset_feed_entry(self.id, feed_entry)

    def add_to_ticket(self, ticket_id: int) -> Any:
        return self.client.add_asset_to_ticket(self.id, ticket_id)

    def remove_from_ticket(self, ticket_id: int) -> Any:
        return self.client.remove_asset_from_ticket(self.id, ticket_id)

    def get_resources(self) -> Any:
        return self.client.get_asset_resources(self.id)

    def add_resource(self, resource_id: str) -> Any:
        return self.client.add_asset_resource(self.id, resource_id)

    def remove_resource(self, resource_id: str) -> Any:
        return self.client.remove_asset_resource(self.id, resource_id)
