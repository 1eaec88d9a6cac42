"""Tickets belonging to a ticketing application."""

from datetime import datetime
from typing import Any

from pydantic import Field

from .base import Resource
from .user import User


class Ticket(Resource):
    """A ticket in a TeamDynamix ticketing application.

    Every ticket operation is scoped by ``app_id`` as well as ``id``, so both
    must be populated before calling methods on an instance.
    """

    id: int | None = Field(None, alias="ID")
    app_id: int | None = Field(None, alias="AppID")
    parent_id: int | None = Field(None, alias="ParentID")
    parent_title: str | None = Field(None, alias="ParentTitle")
    type_id: int | None = Field(None, alias="TypeID")
    type_name: str | None = Field(None, alias="TypeName")
    type_category_id: int | None = Field(None, alias="TypeCategoryID")
    type_category_name: str | None = Field(None, alias="TypeCategoryName")
    classification: int | None = Field(None, alias="Classification")
    title: str | None = Field(None, alias="Title")
    description: str | None = Field(None, alias="Description")
    uri: str | None = Field(None, alias="Uri")
    account_id: int | None = Field(None, alias="AccountID")
    account_name: str | None = Field(None, alias="AccountName")
    source_id: int | None = Field(None, alias="SourceID")
    source_name: str | None = Field(None, alias="SourceName")

    # Status and priority
    status_id: int | None = Field(None, alias="StatusID")
    status_name: str | None = Field(None, alias="StatusName")
    status_class: int | None = Field(None, alias="StatusClass")
    impact_id: int | None = Field(None, alias="ImpactID")
    impact_name: str | None = Field(None, alias="ImpactName")
    urgency_id: int | None = Field(None, alias="UrgencyID")
    urgency_name: str | None = Field(None, alias="UrgencyName")
    priority_id: int | None = Field(None, alias="PriorityID")
    priority_name: str | None = Field(None, alias="PriorityName")
    priority_order: float | None = Field(None, alias="PriorityOrder")

    # SLA
    sla_id: int | None = Field(None, alias="SlaID")
    sla_name: str | None = Field(None, alias="SlaName")
    is_sla_violated: bool | None = Field(None, alias="IsSlaViolated")
    is_sla_respond_by_violated: bool | None = Field(
        None, alias="IsSlaRespondByViolated"
    )
    is_sla_resolve_by_violated: bool | None = Field(
        None, alias="IsSlaResolveByViolated"
    )
    respond_by_date: datetime | None = Field(None, alias="RespondByDate")
    resolve_by_date: datetime | None = Field(None, alias="ResolveByDate")
    sla_begin_date: datetime | None = Field(None, alias="SlaBeginDate")
    is_on_hold: bool | None = Field(None, alias="IsOnHold")
    placed_on_hold_date: datetime | None = Field(None, alias="PlacedOnHoldDate")
    goes_off_hold_date: datetime | None = Field(None, alias="GoesOffHoldDate")

    # People
    created_date: datetime | None = Field(None, alias="CreatedDate")
    created_uid: str | None = Field(None, alias="CreatedUid")
    created_full_name: str | None = Field(None, alias="CreatedFullName")
    modified_date: datetime | None = Field(None, alias="ModifiedDate")
    modified_uid: str | None = Field(None, alias="ModifiedUid")
    modified_full_name: str | None = Field(None, alias="ModifiedFullName")
    requestor_name: str | None = Field(None, alias="RequestorName")
    requestor_email: str | None = Field(None, alias="RequestorEmail")
    requestor_phone: str | None = Field(None, alias="RequestorPhone")
    requestor_uid: str | None = Field(None, alias="RequestorUid")
    responsible_uid: str | None = Field(None, alias="ResponsibleUid")
    responsible_full_name: str | None = Field(None, alias="ResponsibleFullName")
    responsible_group_id: int | None = Field(None, alias="ResponsibleGroupID")
    responsible_group_name: str | None = Field(None, alias="ResponsibleGroupName")
    completed_date: datetime | None = Field(None, alias="CompletedDate")
    completed_uid: str | None = Field(None, alias="CompletedUid")

    # Effort
    actual_minutes: int | None = Field(None, alias="ActualMinutes")
    estimated_minutes: int | None = Field(None, alias="EstimatedMinutes")
    days_old: int | None = Field(None, alias="DaysOld")
    start_date: datetime | None = Field(None, alias="StartDate")
    end_date: datetime | None = Field(None, alias="EndDate")

    location_id: int | None = Field(None, alias="LocationID")
    location_name: str | None = Field(None, alias="LocationName")
    location_room_id: int | None = Field(None, alias="LocationRoomID")
    location_room_name: str | None = Field(None, alias="LocationRoomName")
    ref_code: str | None = Field(None, alias="RefCode")
    service_id: int | None = Field(None, alias="ServiceID")
    service_name: str | None = Field(None, alias="ServiceName")
    article_id: int | None = Field(None, alias="ArticleID")
    article_subject: str | None = Field(None, alias="ArticleSubject")

    attributes: list[dict[str, Any]] | None = Field(None, alias="Attributes")
    attachments: list[dict[str, Any]] | None = Field(None, alias="Attachments")
    tasks: list[dict[str, Any]] | None = Field(None, alias="Tasks")
    notify: list[dict[str, Any]] | None = Field(None, alias="Notify")

    def _path(self, *segments: Any) -> str:
        base = f"/{self.app_id}/tickets/{self.id}"
        return "/".join([base, *(str(s) for s in segments)])

    def add_asset(self, asset_id: int) -> Any:
        return self.client.request("POST", self._path("assets", asset_id))

    def remove_asset(self, asset_id: int) -> Any:
        return self.client.request("DELETE", self._path("assets", asset_id))

    def get_contacts(self) -> list[User] | Any:
        data = self.client.request("GET", self._path("contacts"))
        return User.bind_all(self.client, data)

    def add_contact(self, contact_uid: str) -> Any:
        return self.client.request("POST", self._path("contacts", contact_uid))

    def remove_contact(self, contact_uid: str) -> Any:
        return self.client.request("DELETE", self._path("contacts", contact_uid))

    def get_feed_entries(self) -> Any:
        return self.client.request("GET", self._path("feed"))

    def update(self, feed_entry: dict[str, Any]) -> Any:
        """Add a feed entry (comment or status change) to the ticket."""
        return self.client.update_ticket(self.app_id, self.id, feed_entry)

    def edit(self, notify_new_responsible: bool = False) -> "Ticket":
        """Replace the ticket with this instance's fields."""
        data = self.client.request(
            "POST",
            self._path(),
            params={"notifyNewResponsible": str(notify_new_responsible).lower()},
            json=self.to_payload(),
        )
        return Ticket.bind(self.client, data)

    def patch(self, patch: Any, notify_new_responsible: bool = False) -> "Ticket":
        """Edit only the fields named in a JSON Patch document."""
        return self.client.patch_ticket(
            self.app_id,
            self.id,
            patch,
            notify_new_responsible=notify_new_responsible,
        )
