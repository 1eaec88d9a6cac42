"""Locations and the rooms inside them."""

from datetime import datetime
from typing import Any

from pydantic import Field

from .base import Resource


class Location(Resource):
    """A building or site that can contain rooms."""

    id: int | None = Field(None, alias="ID")
    name: str | None = Field(None, alias="Name")
    description: str | None = Field(None, alias="Description")
    external_id: str | None = Field(None, alias="ExternalID")
    is_active: bool | None = Field(None, alias="IsActive")
    address: str | None = Field(None, alias="Address")
    city: str | None = Field(None, alias="City")
    state: str | None = Field(None, alias="State")
    postal_code: str | None = Field(None, alias="PostalCode")
    country: str | None = Field(None, alias="Country")
    is_room_required: bool | None = Field(None, alias="IsRoomRequired")
    assets_count: int | None = Field(None, alias="AssetsCount")
    tickets_count: int | None = Field(None, alias="TicketsCount")
    rooms_count: int | None = Field(None, alias="RoomsCount")
    rooms: list[dict[str, Any]] | None = Field(None, alias="Rooms")
    attributes: list[dict[str, Any]] | None = Field(None, alias="Attributes")
    created_date: datetime | None = Field(None, alias="CreatedDate")
    created_uid: str | None = Field(None, alias="CreatedUid")
    created_full_name: str | None = Field(None, alias="CreatedFullName")
    modified_date: datetime | None = Field(None, alias="ModifiedDate")
    modified_uid: str | None = Field(None, alias="ModifiedUid")
    modified_full_name: str | None = Field(None, alias="ModifiedFullName")
    latitude: float | None = Field(None, alias="Latitude")
    longitude: float | None = Field(None, alias="Longitude")

    def edit(self) -> "Location":
        return self.client.edit_location(self.id, self)

    def create_room(self, room: dict[str, Any]) -> Any:
        return self.client.create_room(self.id, room)

    def edit_room(self, room_id: int, room: dict[str, Any]) -> Any:
        return self.client.edit_room(self.id, room_id, room)

    def delete_room(self, room_id: int) -> Any:
        return self.client.delete_room(self.id, room_id)
