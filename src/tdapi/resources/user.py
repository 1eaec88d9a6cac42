"""People records."""

from datetime import datetime
from typing import Any

from pydantic import Field

from .base import Resource


class User(Resource):
    """A TeamDynamix user or customer.

    ``type_id`` is 1 for users and 2 for customers. Staffing fields such as
    ``default_rate`` and ``is_employee`` only carry meaning for users.
    """

    uid: str | None = Field(None, alias="UID")
    beid: str | None = Field(None, alias="BEID")
    beid_int: int | None = Field(None, alias="BEIDInt")
    is_active: bool | None = Field(None, alias="IsActive")
    user_name: str | None = Field(None, alias="UserName")
    full_name: str | None = Field(None, alias="FullName")
    first_name: str | None = Field(None, alias="FirstName")
    last_name: str | None = Field(None, alias="LastName")
    middle_name: str | None = Field(None, alias="MiddleName")
    birthday: datetime | None = Field(None, alias="Birthday")
    salutation: str | None = Field(None, alias="Salutation")
    nickname: str | None = Field(None, alias="Nickname")
    default_account_id: int | None = Field(None, alias="DefaultAccountID")
    default_account_name: str | None = Field(None, alias="DefaultAccountName")
    primary_email: str | None = Field(None, alias="PrimaryEmail")
    alternate_email: str | None = Field(None, alias="AlternateEmail")
    alert_email: str | None = Field(None, alias="AlertEmail")
    external_id: str | None = Field(None, alias="ExternalID")
    alternate_id: str | None = Field(None, alias="AlternateID")
    applications: list[Any] | None = Field(None, alias="Applications")
    org_applications: list[Any] | None = Field(None, alias="OrgApplications")
    security_role_id: str | None = Field(None, alias="SecurityRoleID")
    security_role_name: str | None = Field(None, alias="SecurityRoleName")
    permissions: list[str] | None = Field(None, alias="Permissions")
    group_ids: list[int] | None = Field(None, alias="GroupIDs")
    reference_id: int | None = Field(None, alias="ReferenceID")
    profile_image_file_name: str | None = Field(None, alias="ProfileImageFileName")
    company: str | None = Field(None, alias="Company")
    title: str | None = Field(None, alias="Title")

    # Phones
    primary_phone: str | None = Field(None, alias="PrimaryPhone")
    home_phone: str | None = Field(None, alias="HomePhone")
    work_phone: str | None = Field(None, alias="WorkPhone")
    mobile_phone: str | None = Field(None, alias="MobilePhone")
    other_phone: str | None = Field(None, alias="OtherPhone")
    pager: str | None = Field(None, alias="Pager")
    fax: str | None = Field(None, alias="Fax")

    # Addresses
    work_address: str | None = Field(None, alias="WorkAddress")
    work_city: str | None = Field(None, alias="WorkCity")
    work_state: str | None = Field(None, alias="WorkState")
    work_zip: str | None = Field(None, alias="WorkZip")
    work_country: str | None = Field(None, alias="WorkCountry")
    home_address: str | None = Field(None, alias="HomeAddress")
    home_city: str | None = Field(None, alias="HomeCity")
    home_state: str | None = Field(None, alias="HomeState")
    home_zip: str | None = Field(None, alias="HomeZip")
    home_country: str | None = Field(None, alias="HomeCountry")

    default_priority_id: int | None = Field(None, alias="DefaultPriorityID")
    default_priority_name: str | None = Field(None, alias="DefaultPriorityName")
    about_me: str | None = Field(None, alias="AboutMe")

    # Staffing (users only)
    default_rate: float | None = Field(None, alias="DefaultRate")
    cost_rate: float | None = Field(None, alias="CostRate")
    is_employee: bool | None = Field(None, alias="IsEmployee")
    workable_hours: float | None = Field(None, alias="WorkableHours")
    is_capacity_managed: bool | None = Field(None, alias="IsCapacityManaged")
    report_time_after_date: datetime | None = Field(None, alias="ReportTimeAfterDate")
    end_date: datetime | None = Field(None, alias="EndDate")
    should_report_time: bool | None = Field(None, alias="ShouldReportTime")
    reports_to_uid: str | None = Field(None, alias="ReportsToUID")
    reports_to_full_name: str | None = Field(None, alias="ReportsToFullName")
    resource_pool_id: int | None = Field(None, alias="ResourcePoolID")
    resource_pool_name: str | None = Field(None, alias="ResourcePoolName")

    tz_id: int | None = Field(None, alias="TZID")
    tz_name: str | None = Field(None, alias="TZName")
    type_id: int | None = Field(None, alias="TypeID")
    authentication_user_name: str | None = Field(None, alias="AuthenticationUserName")
    authentication_provider_id: int | None = Field(
        None, alias="AuthenticationProviderID"
    )
    attributes: list[dict[str, Any]] | None = Field(None, alias="Attributes")
    gender: int | None = Field(None, alias="Gender")
    im_provider: str | None = Field(None, alias="IMProvider")
    im_handle: str | None = Field(None, alias="IMHandle")

    def _path(self, *segments: Any) -> str:
        return "/".join(["/people", str(self.uid), *(str(s) for s in segments)])

    def update(self) -> "User":
        """Save this user and return the record the server stored."""
        data = self.client.request("POST", self._path(), json=self.to_payload())
        return User.bind(self.client, data)

    def get_functional_roles(self) -> Any:
        return self.client.request("GET", self._path("functionalroles"))

    def delete_functional_role(self, role_id: Any) -> Any:
        return self.client.request("DELETE", self._path("functionalroles", role_id))

    def get_groups(self) -> Any:
        return self.client.request("GET", self._path("groups"))

    def add_group(
        self,
        group_id: int,
        is_primary: bool = False,
        is_notified: bool = False,
        is_manager: bool = False,
    ) -> Any:
        """Add this user to a group, or update their membership flags."""
        params = {
            "isPrimary": str(is_primary).lower(),
            "isNotified": str(is_notified).lower(),
            "isManager": str(is_manager).lower(),
        }
        return self.client.request("PUT", self._path("groups", group_id), params=params)

    def remove_group(self, group_id: int) -> Any:
        return self.client.request("DELETE", self._path("groups", group_id))

    def set_active(self, status: bool) -> Any:
        return self.client.request(
            "PUT",
            self._path("isactive"),
            params={"status": str(status).lower()},
        )

    def get_tickets(self, app_id: int, search: dict[str, Any] | None = None) -> Any:
        """Search tickets in an application that this user requested."""
        params = {"RequestorUids": [self.uid], **(search or {})}
        return self.client.get_tickets(app_id, params)
