"""Knowledge base articles."""

from datetime import datetime
from typing import Any

from pydantic import Field

from .base import Resource


class Article(Resource):
    """A knowledge base article.

    ``tags`` is not populated by the search endpoint, and related articles
    come back with ``body`` omitted.
    """

    id: int | None = Field(None, alias="ID")
    category_id: int | None = Field(None, alias="CategoryID")
    category_name: str | None = Field(None, alias="CategoryName")
    subject: str | None = Field(None, alias="Subject")
    body: str | None = Field(None, alias="Body")
    summary: str | None = Field(None, alias="Summary")
    status: int | None = Field(None, alias="Status")
    attributes: list[dict[str, Any]] | None = Field(None, alias="Attributes")
    review_date_utc: datetime | None = Field(None, alias="ReviewDateUtc")
    order: float | None = Field(None, alias="Order")
    is_published: bool | None = Field(None, alias="IsPublished")
    is_public: bool | None = Field(None, alias="IsPublic")
    whitelist_groups: bool | None = Field(None, alias="WhitelistGroups")
    inherit_permissions: bool | None = Field(None, alias="InheritPermissions")
    notify_owner: bool | None = Field(None, alias="NotifyOwner")
    revision_id: int | None = Field(None, alias="RevisionID")
    revision_number: int | None = Field(None, alias="RevisionNumber")
    created_date: datetime | None = Field(None, alias="CreatedDate")
    created_uid: str | None = Field(None, alias="CreatedUid")
    created_full_name: str | None = Field(None, alias="CreatedFullName")
    modified_date: datetime | None = Field(None, alias="ModifiedDate")
    modified_uid: str | None = Field(None, alias="ModifiedUid")
    modified_full_name: str | None = Field(None, alias="ModifiedFullName")
    owner_uid: str | None = Field(None, alias="OwnerUid")
    owner_full_name: str | None = Field(None, alias="OwnerFullName")
    owning_group_id: int | None = Field(None, alias="OwningGroupID")
    owning_group_name: str | None = Field(None, alias="OwningGroupName")
    tags: list[str] | None = Field(None, alias="Tags")
    attachments: list[dict[str, Any]] | None = Field(None, alias="Attachments")
    uri: str | None = Field(None, alias="Uri")

    def update(self) -> "Article":
        data = self.client.request(
            "PUT", f"/knowledgebase/{self.id}", json=self.to_payload()
        )
        return Article.bind(self.client, data)

    def get_related(self) -> list["Article"] | Any:
        data = self.client.request("GET", f"/knowledgebase/{self.id}/related")
        return Article.bind_all(self.client, data)
