"""Tests for TDAPIClient against an in-memory httpx transport.

A MockTransport plays the API: /auth/login and /auth/loginadmin hand out
tokens, every other path echoes canned JSON. Each test inspects the
recorded requests to check URLs, bodies and the Authorization header.
"""

import base64
import json
import time
from collections.abc import Callable
from urllib.parse import parse_qs

import httpx
import pytest

from tdapi import (
    Account,
    Article,
    Asset,
    ClientConfig,
    EmptyTokenError,
    Location,
    TDAPIClient,
    Ticket,
    User,
    create_client,
)

BASE_URL = "https://x/TDWebAPI/api"

Responder = Callable[[httpx.Request], httpx.Response]


def _make_jwt(payload: dict) -> str:
    """Build a minimal unsigned JWT string from a payload dict."""
    header = {"alg": "HS256", "typ": "JWT"}
    h = base64.urlsafe_b64encode(json.dumps(header).encode()).rstrip(b"=").decode()
    p = base64.urlsafe_b64encode(json.dumps(payload).encode()).rstrip(b"=").decode()
    return f"{h}.{p}.fakesignature"


class FakeApi:
    """Records requests and answers them from a route table."""

    def __init__(self, token: str | None = None):
        self.token = token or _make_jwt({"exp": int(time.time()) + 3600})
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], Responder] = {}

    def route(self, method: str, path: str, json_body=None, status: int = 200):
        self.routes[(method, path)] = lambda _request: httpx.Response(
            status, json=json_body
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/TDWebAPI/api")
        if path in ("/auth/login", "/auth/loginadmin"):
            return httpx.Response(200, text=self.token)
        responder = self.routes.get((request.method, path))
        if responder is None:
            return httpx.Response(404, json={"Message": "not found"})
        return responder(request)

    @property
    def auth_requests(self) -> list[httpx.Request]:
        auth_paths = ("/login", "/loginadmin")
        return [r for r in self.requests if r.url.path.endswith(auth_paths)]

    @property
    def api_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r not in self.auth_requests]


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def tdx(api: FakeApi) -> TDAPIClient:
    client = TDAPIClient(
        base_url=BASE_URL,
        credentials={"UserName": "a", "Password": "b"},
        transport=httpx.MockTransport(api.handler),
    )
    yield client
    client.close()


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def test_client_rejects_empty_base_url():
    with pytest.raises(ValueError, match="base_url"):
        TDAPIClient(base_url="")


def test_client_rejects_non_positive_timeout():
    with pytest.raises(ValueError, match="timeout"):
        TDAPIClient(timeout=0)


def test_client_defaults_to_empty_basic_credentials():
    client = TDAPIClient()
    assert client.credentials.form() == {"UserName": "", "Password": ""}


def test_from_config_uses_config_values(api: FakeApi):
    cfg = ClientConfig(
        base_url=BASE_URL,
        credentials={"BEID": "b1", "WebServicesKey": "k1"},
        timeout=5.0,
    )
    client = TDAPIClient.from_config(cfg, transport=httpx.MockTransport(api.handler))

    assert client.base_url == BASE_URL
    assert client.credentials.beid == "b1"


def test_create_client_reads_env_config(tmp_path, monkeypatch):
    path = tmp_path / "tdapi.json"
    path.write_text(json.dumps({"baseUrl": BASE_URL, "logLevel": "WARNING"}))
    monkeypatch.setenv("TDAPI_CONFIG_PATH", str(path))
    levels: list[str] = []
    monkeypatch.setattr("tdapi.configure_logging", levels.append)

    client = create_client()

    assert client.base_url == BASE_URL
    assert levels == ["WARNING"]


# ---------------------------------------------------------------------------
# Authentication exchange
# ---------------------------------------------------------------------------


def test_login_posts_form_to_login_endpoint(api: FakeApi, tdx: TDAPIClient):
    token = tdx.login()

    assert token == api.token
    (request,) = api.auth_requests
    assert request.method == "POST"
    assert str(request.url) == f"{BASE_URL}/auth/login"
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert parse_qs(request.content.decode()) == {"UserName": ["a"], "Password": ["b"]}


def test_login_admin_posts_to_loginadmin(api: FakeApi):
    client = TDAPIClient(
        base_url=BASE_URL,
        credentials={"BEID": "b1", "WebServicesKey": "k1"},
        transport=httpx.MockTransport(api.handler),
    )

    client.login()

    (request,) = api.auth_requests
    assert str(request.url) == f"{BASE_URL}/auth/loginadmin"
    assert parse_qs(request.content.decode()) == {
        "BEID": ["b1"],
        "WebServicesKey": ["k1"],
    }


def test_login_strips_whitespace_from_token(api: FakeApi, tdx: TDAPIClient):
    api.token = api.token + "\n"
    assert tdx.login() == api.token.strip()


def test_login_failure_raises_http_status_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="Invalid credentials")

    client = TDAPIClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))

    with pytest.raises(httpx.HTTPStatusError):
        client.login()


def test_login_network_failure_propagates():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = TDAPIClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))

    with pytest.raises(httpx.ConnectError):
        client.get_accounts()


def test_login_empty_body_raises(api: FakeApi, tdx: TDAPIClient):
    api.token = "   "
    with pytest.raises(EmptyTokenError):
        tdx.login()


# ---------------------------------------------------------------------------
# Authenticated requests
# ---------------------------------------------------------------------------


def test_request_attaches_bearer_token(api: FakeApi, tdx: TDAPIClient):
    api.route("GET", "/accounts", json_body=[])

    tdx.get_accounts()

    (request,) = api.api_requests
    assert request.headers["Authorization"] == f"Bearer {api.token}"


def test_token_reused_across_requests(api: FakeApi, tdx: TDAPIClient):
    """A valid token is exchanged once for several API calls."""
    api.route("GET", "/accounts", json_body=[])
    api.route("GET", "/assets/statuses", json_body=[])

    tdx.get_accounts()
    tdx.get_asset_statuses()
    tdx.get_accounts()

    assert len(api.auth_requests) == 1
    assert len(api.api_requests) == 3


def test_expired_token_renewed_before_request():
    api = FakeApi(token=_make_jwt({"exp": int(time.time()) - 1}))
    api.route("GET", "/accounts", json_body=[])
    client = TDAPIClient(base_url=BASE_URL, transport=httpx.MockTransport(api.handler))

    client.get_accounts()
    client.get_accounts()

    assert len(api.auth_requests) == 2


def test_request_error_status_raises(api: FakeApi, tdx: TDAPIClient):
    api.route("GET", "/people/missing", json_body={"Message": "nope"}, status=404)

    with pytest.raises(httpx.HTTPStatusError):
        tdx.get_user("missing")


def test_request_empty_body_returns_none(api: FakeApi, tdx: TDAPIClient):
    api.routes[("DELETE", "/locations/1/rooms/2")] = lambda _r: httpx.Response(204)

    assert tdx.delete_room(1, 2) is None


def test_request_text_body_returned_raw(api: FakeApi, tdx: TDAPIClient):
    api.routes[("POST", "/assets/5/users/u1")] = lambda _r: httpx.Response(
        200, text="Resource added."
    )

    assert tdx.add_asset_resource(5, "u1") == "Resource added."


# ---------------------------------------------------------------------------
# Factory operations
# ---------------------------------------------------------------------------


def test_get_user_returns_bound_user(api: FakeApi, tdx: TDAPIClient):
    api.route("GET", "/people/u1", json_body={"UID": "u1", "FullName": "Ada L"})

    user = tdx.get_user("u1")

    assert isinstance(user, User)
    assert user.uid == "u1"
    assert user.full_name == "Ada L"
    assert user.client is tdx


def test_get_users_maps_array(api: FakeApi, tdx: TDAPIClient):
    api.route("POST", "/people/search", json_body=[{"UID": "u1"}, {"UID": "u2"}])

    users = tdx.get_users({"SearchText": "ada"})

    assert [u.uid for u in users] == ["u1", "u2"]
    (request,) = api.api_requests
    assert json.loads(request.content) == {"SearchText": "ada"}


def test_search_defaults_to_empty_body(api: FakeApi, tdx: TDAPIClient):
    api.route("POST", "/assets/search", json_body=[])

    tdx.get_assets()

    (request,) = api.api_requests
    assert json.loads(request.content) == {}


def test_non_array_search_response_passes_through(api: FakeApi, tdx: TDAPIClient):
    api.route("POST", "/accounts/search", json_body={"Message": "odd"})

    assert tdx.search_accounts() == {"Message": "odd"}


def test_create_user_serializes_model_by_alias(api: FakeApi, tdx: TDAPIClient):
    api.route("POST", "/people", json_body={"UID": "new", "UserName": "ada"})

    created = tdx.create_user(User(user_name="ada", first_name="Ada"))

    (request,) = api.api_requests
    assert json.loads(request.content) == {"UserName": "ada", "FirstName": "Ada"}
    assert created.uid == "new"


def test_security_role_operations(api: FakeApi, tdx: TDAPIClient):
    api.route("GET", "/securityroles/r1", json_body={"ID": "r1", "Name": "Tech"})
    api.route("POST", "/securityroles/search", json_body=[{"ID": "r1"}])

    role = tdx.get_security_role("r1")
    roles = tdx.get_security_roles({"NameLike": "Tech"})

    assert role == {"ID": "r1", "Name": "Tech"}
    assert roles == [{"ID": "r1"}]
    get, search = api.api_requests
    assert get.method == "GET"
    assert get.url.path.endswith("/securityroles/r1")
    assert json.loads(search.content) == {"NameLike": "Tech"}


def test_get_group_members_returns_bound_users(api: FakeApi, tdx: TDAPIClient):
    api.route(
        "GET",
        "/groups/12/members",
        json_body=[{"UID": "u1", "FullName": "Ada L"}, {"UID": "u2"}],
    )

    members = tdx.get_group_members(12)

    assert all(isinstance(m, User) for m in members)
    assert [m.uid for m in members] == ["u1", "u2"]
    assert members[0].full_name == "Ada L"
    assert all(m.client is tdx for m in members)
    (request,) = api.api_requests
    assert request.method == "GET"


def test_get_ticket_and_tickets(api: FakeApi, tdx: TDAPIClient):
    api.route("GET", "/10/tickets/7", json_body={"ID": 7, "AppID": 10, "Title": "x"})
    api.route("POST", "/10/tickets/search", json_body=[{"ID": 1}, {"ID": 2}])

    ticket = tdx.get_ticket(10, 7)
    tickets = tdx.get_tickets(10)

    assert isinstance(ticket, Ticket)
    assert ticket.title == "x"
    assert all(isinstance(t, Ticket) for t in tickets)


def test_ticket_types_and_statuses(api: FakeApi, tdx: TDAPIClient):
    api.route("GET", "/10/tickets/types", json_body=[{"ID": 1, "Name": "Incident"}])
    api.route("GET", "/10/tickets/statuses", json_body=[{"ID": 2, "Name": "New"}])

    types = tdx.get_ticket_types(10)
    statuses = tdx.get_ticket_statuses(10)

    assert types == [{"ID": 1, "Name": "Incident"}]
    assert statuses == [{"ID": 2, "Name": "New"}]
    assert [r.url.path for r in api.api_requests] == [
        "/TDWebAPI/api/10/tickets/types",
        "/TDWebAPI/api/10/tickets/statuses",
    ]


def test_patch_ticket_sends_json_patch(api: FakeApi, tdx: TDAPIClient):
    api.route("PATCH", "/10/tickets/7", json_body={"ID": 7, "AppID": 10})
    patch = [{"op": "replace", "path": "/Title", "value": "new"}]

    tdx.patch_ticket(10, 7, patch, notify_new_responsible=True)

    (request,) = api.api_requests
    assert request.url.params["notifyNewResponsible"] == "true"
    assert json.loads(request.content) == patch


def test_account_operations(api: FakeApi, tdx: TDAPIClient):
    api.route("GET", "/accounts", json_body=[{"ID": 1, "Name": "IT"}])
    api.route("POST", "/accounts", json_body={"ID": 2, "Name": "HR"})
    api.route("PUT", "/accounts/2", json_body={"Message": "ok"})

    accounts = tdx.get_accounts()
    created = tdx.create_account({"Name": "HR"})
    result = tdx.edit_account(2, created)

    assert isinstance(accounts[0], Account)
    assert created.name == "HR"
    assert result == {"Message": "ok"}
    put = api.api_requests[-1]
    assert put.headers["Authorization"] == f"Bearer {api.token}"
    assert json.loads(put.content) == {"ID": 2, "Name": "HR"}


def test_location_operations(api: FakeApi, tdx: TDAPIClient):
    api.route("GET", "/locations/3", json_body={"ID": 3, "Name": "Main"})
    api.route("POST", "/locations/search", json_body=[{"ID": 3}])
    api.route("POST", "/locations/3/rooms", json_body={"ID": 9, "Name": "101"})

    location = tdx.get_location(3)
    locations = tdx.get_locations({"NameLike": "Main"})
    room = tdx.create_room(3, {"Name": "101"})

    assert isinstance(location, Location)
    assert isinstance(locations[0], Location)
    assert room == {"ID": 9, "Name": "101"}


def test_custom_attributes_query(api: FakeApi, tdx: TDAPIClient):
    api.route("GET", "/attributes/custom", json_body=[])

    tdx.get_custom_attributes(9, associated_type_id=4, app_id=10)

    (request,) = api.api_requests
    assert dict(request.url.params) == {
        "componentId": "9",
        "associatedTypeId": "4",
        "appId": "10",
    }


def test_asset_operations(api: FakeApi, tdx: TDAPIClient):
    api.route("GET", "/assets/5", json_body={"ID": 5, "Tag": "A-5"})
    api.route("POST", "/assets/5", json_body={"ID": 5, "Tag": "A-6"})

    asset = tdx.get_asset(5)
    asset.tag = "A-6"
    edited = tdx.edit_asset(5, asset)

    assert isinstance(edited, Asset)
    assert edited.tag == "A-6"
    assert json.loads(api.api_requests[-1].content) == {"ID": 5, "Tag": "A-6"}


def test_import_assets_posts_settings(api: FakeApi, tdx: TDAPIClient):
    api.route("POST", "/assets/import", json_body={"InsertedCount": 2})
    settings = {"Items": [{"Tag": "A-1"}, {"Tag": "A-2"}], "UpdateExisting": True}

    result = tdx.import_assets(settings)

    assert result == {"InsertedCount": 2}
    (request,) = api.api_requests
    assert request.method == "POST"
    assert request.headers["Authorization"] == f"Bearer {api.token}"
    assert json.loads(request.content) == settings


def test_article_operations(api: FakeApi, tdx: TDAPIClient):
    api.route("GET", "/knowledgebase/4", json_body={"ID": 4, "Subject": "VPN"})
    api.route("POST", "/knowledgebase/search", json_body=[{"ID": 4}])

    article = tdx.get_article(4)
    articles = tdx.get_articles()

    assert isinstance(article, Article)
    assert article.subject == "VPN"
    assert articles[0].id == 4


def test_import_people_uploads_file(api: FakeApi, tdx: TDAPIClient, tmp_path):
    path = tmp_path / "people.xlsx"
    path.write_bytes(b"spreadsheet-bytes")
    api.route("POST", "/people/import", json_body={"Message": "queued"})

    result = tdx.import_people(path)

    assert result == {"Message": "queued"}
    (request,) = api.api_requests
    assert request.headers["Content-Type"].startswith("multipart/form-data")
    assert b'name="import.xlsx"' in request.content
    assert b"spreadsheet-bytes" in request.content


def test_context_manager_closes_client(api: FakeApi):
    with TDAPIClient(
        base_url=BASE_URL, transport=httpx.MockTransport(api.handler)
    ) as client:
        http = client.client
    assert http.is_closed
