"""TeamDynamix Web API client.

Provides an HTTP client with bearer-token authentication, thread safety,
and Pydantic-validated resource objects for people, tickets, accounts,
locations, assets and knowledge base articles.
"""

import pathlib
import threading
import time
from collections.abc import Mapping
from typing import Any

import httpx
import structlog

from .config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, ClientConfig
from .credentials import Credentials, parse_credentials
from .resources import Account, Article, Asset, Location, Ticket, User
from .resources.base import Resource, as_payload
from .session import SessionManager

logger = structlog.get_logger(__name__)

Body = Resource | Mapping[str, Any] | list[Any] | None


class TDAPIClient:
    """HTTP client for the TeamDynamix Web API.

    Authenticates with the configured credentials, keeps the bearer token
    for as long as it is valid, and exposes one method per API operation.
    Single-record operations are also available on the returned resource
    objects, which keep a reference back to this client.

    Thread-safe through thread-local storage of httpx.Client instances and
    a locked session manager. Can be used as a context manager for
    automatic cleanup.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        credentials: Credentials | Mapping[str, Any] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the API client.

        Args:
            base_url: Base URL of the API
                (e.g., "https://api.teamdynamix.com/TDWebAPI/api").
            credentials: Basic or administrative credentials, as a model or
                a mapping using the API field names. Defaults to empty basic
                credentials.
            timeout: Request timeout in seconds (default: 30.0).
            transport: Optional httpx transport, mainly for testing.

        Raises:
            ValueError: If base_url is empty or timeout is not positive.
        """
        if not base_url:
            msg = "base_url cannot be empty"
            raise ValueError(msg)
        if timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)

        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._headers = {"Accept": "application/json"}

        self._session = SessionManager(
            credentials=parse_credentials(credentials),
            exchange=self._exchange_credentials,
        )

        # Use thread-local storage for httpx.Client (thread safety)
        self._local = threading.local()

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> "TDAPIClient":
        """Build a client from validated configuration."""
        return cls(
            base_url=config.base_url,
            credentials=config.credentials,
            timeout=config.timeout,
            transport=transport,
        )

    @property
    def credentials(self) -> Credentials:
        return self._session.credentials

    @property
    def client(self) -> httpx.Client:
        """HTTP connection pool for the calling thread.

        Pools are opened on first use and share the base URL, Accept header
        and timeout. The bearer token is not stored here; :meth:`request`
        attaches the current one to every call.
        """
        http = getattr(self._local, "client", None)
        if http is None or http.is_closed:
            http = self._local.client = httpx.Client(
                base_url=self.base_url,
                headers=self._headers,
                timeout=self._timeout,
                transport=self._transport,
            )
        return http

    def __enter__(self) -> "TDAPIClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Release this thread's connection pool. The held token survives."""
        http = getattr(self._local, "client", None)
        if http is not None and not http.is_closed:
            http.close()

    # -----------------------------------------------------------------------
    # Authentication
    # -----------------------------------------------------------------------

    def _exchange_credentials(self, endpoint: str, form: dict[str, str]) -> str:
        """POST credentials as a form body and return the raw bearer token."""
        try:
            response = self.client.post(endpoint, data=form)
            response.raise_for_status()
        except httpx.HTTPError:
            logger.exception("Authentication failed", endpoint=endpoint)
            raise
        return response.text.strip()

    def login(self) -> str:
        """Return a bearer token, authenticating only when necessary."""
        return self._session.obtain_token()

    # -----------------------------------------------------------------------
    # Requests
    # -----------------------------------------------------------------------

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        files: Mapping[str, Any] | None = None,
    ) -> Any:
        """Make an authenticated request to the API.

        Obtains a bearer token, sends the request, checks the status and
        decodes the body. Logs request details and duration.

        Args:
            method: HTTP method (e.g., "GET", "POST").
            endpoint: API path relative to the base URL (e.g., "/people/search").
            params: Optional query parameters.
            json: Optional JSON request body.
            files: Optional multipart files.

        Returns:
            Decoded JSON, the raw text for non-JSON bodies, or None for an
            empty body.

        Raises:
            httpx.HTTPError: If authentication or the request fails.
        """
        token = self.login()
        start_time = time.time()

        try:
            logger.debug(
                "Making API request",
                method=method,
                endpoint=endpoint,
                params=params,
            )
            response = self.client.request(
                method,
                endpoint,
                params=params,
                json=json,
                files=files,
                headers={"Authorization": f"Bearer {token}"},
            )
            response.raise_for_status()
            duration = time.time() - start_time
            logger.debug("API request completed", duration_seconds=round(duration, 3))

        except httpx.HTTPError:
            duration = time.time() - start_time
            logger.exception(
                "API request failed",
                method=method,
                endpoint=endpoint,
                duration_seconds=round(duration, 3),
            )
            raise

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    # -----------------------------------------------------------------------
    # People, groups and security roles
    # -----------------------------------------------------------------------

    def get_user(self, uid: str) -> User:
        return User.bind(self, self.request("GET", f"/people/{uid}"))

    def get_users(self, search: Body = None) -> list[User] | Any:
        data = self.request("POST", "/people/search", json=as_payload(search))
        return User.bind_all(self, data)

    def create_user(self, user: Body) -> User:
        return User.bind(self, self.request("POST", "/people", json=as_payload(user)))

    def import_people(self, file: str | pathlib.Path) -> Any:
        """Upload an .xlsx file to be processed by the people import job."""
        path = pathlib.Path(file)
        with path.open("rb") as f:
            return self.request(
                "POST",
                "/people/import",
                files={"import.xlsx": (path.name, f)},
            )

    def get_security_role(self, role_id: str) -> Any:
        return self.request("GET", f"/securityroles/{role_id}")

    def get_security_roles(self, search: Body = None) -> Any:
        return self.request("POST", "/securityroles/search", json=as_payload(search))

    def get_groups(self, search: Body = None) -> Any:
        return self.request("POST", "/groups/search", json=as_payload(search))

    def get_group_members(self, group_id: int) -> list[User] | Any:
        data = self.request("GET", f"/groups/{group_id}/members")
        return User.bind_all(self, data)

    # -----------------------------------------------------------------------
    # Tickets
    # -----------------------------------------------------------------------

    def get_ticket(self, app_id: int, ticket_id: int) -> Ticket:
        return Ticket.bind(self, self.request("GET", f"/{app_id}/tickets/{ticket_id}"))

    def get_tickets(self, app_id: int, search: Body = None) -> list[Ticket] | Any:
        data = self.request(
            "POST", f"/{app_id}/tickets/search", json=as_payload(search)
        )
        return Ticket.bind_all(self, data)

    def patch_ticket(
        self,
        app_id: int,
        ticket_id: int,
        patch: Any,
        notify_new_responsible: bool = False,
    ) -> Ticket:
        """Edit only the fields named in a JSON Patch document."""
        data = self.request(
            "PATCH",
            f"/{app_id}/tickets/{ticket_id}",
            params={"notifyNewResponsible": str(notify_new_responsible).lower()},
            json=patch,
        )
        return Ticket.bind(self, data)

    def update_ticket(self, app_id: int, ticket_id: int, feed_entry: Body) -> Any:
        return self.request(
            "POST",
            f"/{app_id}/tickets/{ticket_id}/feed",
            json=as_payload(feed_entry),
        )

    def get_ticket_types(self, app_id: int) -> Any:
        return self.request("GET", f"/{app_id}/tickets/types")

    def get_ticket_statuses(self, app_id: int) -> Any:
        return self.request("GET", f"/{app_id}/tickets/statuses")

    # -----------------------------------------------------------------------
    # Accounts
    # -----------------------------------------------------------------------

    def get_accounts(self) -> list[Account] | Any:
        return Account.bind_all(self, self.request("GET", "/accounts"))

    def create_account(self, account: Body) -> Account:
        data = self.request("POST", "/accounts", json=as_payload(account))
        return Account.bind(self, data)

    def edit_account(self, account_id: int, account: Body) -> Any:
        return self.request("PUT", f"/accounts/{account_id}", json=as_payload(account))

    def search_accounts(self, search: Body = None) -> list[Account] | Any:
        data = self.request("POST", "/accounts/search", json=as_payload(search))
        return Account.bind_all(self, data)

    # -----------------------------------------------------------------------
    # Locations and rooms
    # -----------------------------------------------------------------------

    def create_location(self, location: Body) -> Location:
        data = self.request("POST", "/locations", json=as_payload(location))
        return Location.bind(self, data)

    def get_location(self, location_id: int) -> Location:
        return Location.bind(self, self.request("GET", f"/locations/{location_id}"))

    def edit_location(self, location_id: int, location: Body) -> Location:
        data = self.request(
            "PUT", f"/locations/{location_id}", json=as_payload(location)
        )
        return Location.bind(self, data)

    def get_locations(self, search: Body = None) -> list[Location] | Any:
        data = self.request("POST", "/locations/search", json=as_payload(search))
        return Location.bind_all(self, data)

    def create_room(self, location_id: int, room: Body) -> Any:
        return self.request(
            "POST", f"/locations/{location_id}/rooms", json=as_payload(room)
        )

    def edit_room(self, location_id: int, room_id: int, room: Body) -> Any:
        return self.request(
            "PUT",
            f"/locations/{location_id}/rooms/{room_id}",
            json=as_payload(room),
        )

    def delete_room(self, location_id: int, room_id: int) -> Any:
        return self.request("DELETE", f"/locations/{location_id}/rooms/{room_id}")

    def get_custom_attributes(
        self,
        component_id: int,
        associated_type_id: int = 0,
        app_id: int = 0,
    ) -> Any:
        """Get the custom attributes defined for a component.

        Args:
            component_id: The component (e.g. tickets, assets) to query.
            associated_type_id: Narrow to attributes of a type, such as a
                ticket type ID.
            app_id: Narrow to attributes of an application.
        """
        params = {
            "componentId": component_id,
            "associatedTypeId": associated_type_id,
            "appId": app_id,
        }
        return self.request("GET", "/attributes/custom", params=params)

    # -----------------------------------------------------------------------
    # Assets
    # -----------------------------------------------------------------------

    def get_asset_statuses(self) -> Any:
        return self.request("GET", "/assets/statuses")

    def create_asset(self, asset: Body) -> Asset:
        return Asset.bind(self, self.request("POST", "/assets", json=as_payload(asset)))

    def get_asset(self, asset_id: int) -> Asset:
        return Asset.bind(self, self.request("GET", f"/assets/{asset_id}"))

    def edit_asset(self, asset_id: int, asset: Body) -> Asset:
        data = self.request("POST", f"/assets/{asset_id}", json=as_payload(asset))
        return Asset.bind(self, data)

    def get_assets(self, search: Body = None) -> list[Asset] | Any:
        data = self.request("POST", "/assets/search", json=as_payload(search))
        return Asset.bind_all(self, data)

    def import_assets(self, import_data: Body) -> Any:
        """Bulk insert or update assets using the API's import settings."""
        return self.request("POST", "/assets/import", json=as_payload(import_data))

    def get_asset_feed_entries(self, asset_id: int) -> Any:
        return self.request("GET", f"/assets/{asset_id}/feed")

    def add_asset_feed_entry(self, asset_id: int, feed_entry: Body) -> Any:
        return self.request(
            "POST", f"/assets/{asset_id}/feed", json=as_payload(feed_entry)
        )

    def add_asset_to_ticket(self, asset_id: int, ticket_id: int) -> Any:
        return self.request("POST", f"/assets/{asset_id}/tickets/{ticket_id}")

    def remove_asset_from_ticket(self, asset_id: int, ticket_id: int) -> Any:
        return self.request("DELETE", f"/assets/{asset_id}/tickets/{ticket_id}")

    def get_asset_resources(self, asset_id: int) -> Any:
        return self.request("GET", f"/assets/{asset_id}/users")

    def add_asset_resource(self, asset_id: int, resource_id: str) -> Any:
        return self.request("POST", f"/assets/{asset_id}/users/{resource_id}")

    def remove_asset_resource(self, asset_id: int, resource_id: str) -> Any:
        return self.request("DELETE", f"/assets/{asset_id}/users/{resource_id}")

    # -----------------------------------------------------------------------
    # Knowledge base
    # -----------------------------------------------------------------------

    def get_article(self, article_id: int) -> Article:
        return Article.bind(self, self.request("GET", f"/knowledgebase/{article_id}"))

    def get_articles(self, search: Body = None) -> list[Article] | Any:
        data = self.request("POST", "/knowledgebase/search", json=as_payload(search))
        return Article.bind_all(self, data)
