"""Tests for the API client and request dispatch."""

import base64
import json
from pathlib import Path

import httpx
import pytest
import respx

from printnode_cli.api import Account, PrintNodeClient, RequestOptions
from printnode_cli.api.exceptions import (
    AuthenticationError,
    DecodeError,
    NotConfiguredError,
    NotFoundError,
    RateLimitError,
    RequestError,
    TransportError,
)
from printnode_cli.api.transport import TransportResponse


FIXTURES_DIR = Path(__file__).parent / "fixtures"
BASE = "https://api.printnode.com"


@pytest.fixture
def account_response():
    """Load account fixture."""
    with open(FIXTURES_DIR / "account.json") as f:
        return json.load(f)


@pytest.fixture
def accounts_response():
    """Load account list fixture."""
    with open(FIXTURES_DIR / "accounts.json") as f:
        return json.load(f)


class RecordingTransport:
    """Transport that records calls and replays a canned response."""

    def __init__(self, status_code=200, body=b"", headers=None):
        self.calls = []
        self.response = TransportResponse(status_code, headers or {}, body)

    def send(self, method, url, headers, body):
        self.calls.append((method, url, dict(headers), body))
        return self.response

    def close(self):
        pass


class TestClientLifecycle:
    """Tests for context manager handling."""

    def test_context_manager(self):
        """Client can be used as context manager."""
        client = PrintNodeClient(api_key="key123")

        assert client._transport is None

        with client:
            assert client._transport is not None

        assert client._transport is None

    def test_client_not_initialized_error(self):
        """Error when using client outside context manager."""
        client = PrintNodeClient(api_key="key123")

        with pytest.raises(RuntimeError, match="not initialized"):
            client.request("GET", "/whoami")

    def test_injected_transport_is_not_closed(self):
        transport = RecordingTransport()
        client = PrintNodeClient(transport=transport)

        with client:
            pass

        assert client._transport is transport

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.setattr("printnode_cli.auth.get_stored_api_key", lambda profile: None)

        with pytest.raises(NotConfiguredError):
            with PrintNodeClient():
                pass

    def test_base_url_from_settings(self, monkeypatch):
        monkeypatch.setenv("PRINTNODE_BASE_URL", "https://printnode.test/")

        assert PrintNodeClient(api_key="k").base_url == "https://printnode.test"


class TestBuildPath:
    """Tests for path building."""

    def test_single_id(self):
        assert PrintNodeClient.build_path("/account/{}", 12345) == "/account/12345"

    def test_multiple_placeholders(self):
        assert PrintNodeClient.build_path("/account/{}/tag/{}", 1, "plan") == "/account/1/tag/plan"

    def test_id_list_joined(self):
        assert PrintNodeClient.build_path("/account/{}", [12345, 12346]) == "/account/12345,12346"

    def test_ids_are_escaped(self):
        assert PrintNodeClient.build_path("/account/{}/tag/{}", 1, "a/b c") == "/account/1/tag/a%2Fb%20c"
        assert PrintNodeClient.build_path("/account/{}", ["a,b", "c"]) == "/account/a%2Cb,c"

    def test_empty_list_rejected(self):
        with pytest.raises(ValueError):
            PrintNodeClient.build_path("/account/{}", [])


class TestSerializeBody:
    """Tests for body serialization."""

    def test_none(self):
        assert PrintNodeClient.serialize_body(None) is None

    def test_mapping(self):
        body = PrintNodeClient.serialize_body({"Account[state]": "active"})

        assert json.loads(body) == {"Account[state]": "active"}

    def test_scalar_string(self):
        assert PrintNodeClient.serialize_body("suspended") == b'"suspended"'

    def test_scalar_bool_and_number(self):
        assert PrintNodeClient.serialize_body(True) == b"true"
        assert PrintNodeClient.serialize_body(500) == b"500"


class TestHeaders:
    """Tests for header layering."""

    def test_header_layers(self):
        transport = RecordingTransport(body=b"{}")
        client = PrintNodeClient(
            transport=transport,
            default_options={"headers": {"X-A": "client", "X-B": "client", "X-C": "client"}},
        )
        client.set_default_header("X-D", "runtime")

        with client:
            client.request(
                "GET",
                "/whoami",
                options=RequestOptions(headers={"X-B": "options", "X-C": "options"}),
                headers={"X-C": "call"},
            )

        headers = transport.calls[0][2]
        assert headers["X-A"] == "client"
        assert headers["X-B"] == "options"
        assert headers["X-C"] == "call"
        assert headers["X-D"] == "runtime"

    def test_options_header_beats_default_selector(self):
        """An explicit per-call impersonation header wins over a client-wide selector."""
        transport = RecordingTransport(body=b"{}")
        client = PrintNodeClient(
            transport=transport,
            default_options=RequestOptions(child_account_by_id=5),
        )

        with client:
            client.request(
                "GET",
                "/whoami",
                options=RequestOptions(headers={"X-Child-Account-By-Id": "9"}),
            )
            client.request("GET", "/whoami")

        assert transport.calls[0][2]["X-Child-Account-By-Id"] == "9"
        assert transport.calls[1][2]["X-Child-Account-By-Id"] == "5"

    def test_default_impersonation_header(self):
        transport = RecordingTransport(body=b"{}")
        client = PrintNodeClient(transport=transport)
        client.set_default_header("X-Child-Account-By-Id", "42")

        with client:
            client.request("GET", "/whoami")

        assert transport.calls[0][2]["X-Child-Account-By-Id"] == "42"

    def test_call_impersonation_replaces_default(self):
        """A per-call selector removes the shared default selector."""
        transport = RecordingTransport(body=b"{}")
        client = PrintNodeClient(transport=transport)
        client.set_default_header("X-Child-Account-By-Id", "42")

        with client:
            client.request("GET", "/whoami", options={"child_account_by_creator_ref": "customer-1"})

        headers = transport.calls[0][2]
        assert headers["X-Child-Account-By-CreatorRef"] == "customer-1"
        assert "X-Child-Account-By-Id" not in headers
        assert client.default_headers == {"X-Child-Account-By-Id": "42"}

    def test_content_type_only_with_body(self):
        transport = RecordingTransport(body=b"{}")

        with PrintNodeClient(transport=transport) as client:
            client.request("GET", "/whoami")
            client.request("PATCH", "/account/1", {"a": 1})

        assert "Content-Type" not in transport.calls[0][2]
        assert transport.calls[1][2]["Content-Type"] == "application/json"
        assert transport.calls[1][3] == b'{"a":1}'


class TestDecoding:
    """Tests for response decoding."""

    def test_object_to_resource(self, account_response):
        transport = RecordingTransport(body=json.dumps(account_response).encode())

        with PrintNodeClient(transport=transport) as client:
            account = client.request("GET", "/account/12345", resource_type=Account)

        assert isinstance(account, Account)
        assert account.id == 12345

    def test_array_to_resources(self, accounts_response):
        transport = RecordingTransport(body=json.dumps(accounts_response).encode())

        with PrintNodeClient(transport=transport) as client:
            accounts = client.request("GET", "/account", resource_type=Account)

        assert [a.id for a in accounts] == [12345, 12346]

    def test_raw_pass_through(self):
        transport = RecordingTransport(body=b"[12345, 12346]")

        with PrintNodeClient(transport=transport) as client:
            result = client.request("DELETE", "/account/12345,12346")

        assert result == [12345, 12346]

    @pytest.mark.parametrize("body,expected", [(b"", True), (b"null", True), (b"true", True), (b"false", False)])
    def test_empty_and_boolean_bodies(self, body, expected):
        transport = RecordingTransport(body=body)

        with PrintNodeClient(transport=transport) as client:
            assert client.request("DELETE", "/account/1", resource_type=Account) is expected

    def test_invalid_json(self):
        transport = RecordingTransport(body=b"<html>")

        with PrintNodeClient(transport=transport) as client:
            with pytest.raises(DecodeError) as exc_info:
                client.request("GET", "/account/1")

        assert exc_info.value.path == "/account/1"

    def test_wrong_shape_for_resource(self):
        transport = RecordingTransport(body=b'"hello"')

        with PrintNodeClient(transport=transport) as client:
            with pytest.raises(DecodeError) as exc_info:
                client.request("GET", "/account/1", resource_type=Account)

        assert exc_info.value.path == "/account/1"

    def test_collection(self, accounts_response):
        transport = RecordingTransport(body=json.dumps(accounts_response).encode())

        with PrintNodeClient(transport=transport) as client:
            accounts = client.request_collection("GET", "/account", resource_type=Account)

        assert len(accounts) == 2
        assert all(isinstance(a, Account) for a in accounts)

    def test_collection_requires_array(self, account_response):
        transport = RecordingTransport(body=json.dumps(account_response).encode())

        with PrintNodeClient(transport=transport) as client:
            with pytest.raises(DecodeError):
                client.request_collection("GET", "/account", resource_type=Account)

    def test_collection_empty_body(self):
        transport = RecordingTransport(body=b"")

        with PrintNodeClient(transport=transport) as client:
            assert client.request_collection("GET", "/account") == []


class TestHttpErrors:
    """Tests for error responses through the httpx transport."""

    @respx.mock
    def test_basic_auth_header(self, account_response):
        """The API key is the Basic auth username."""
        route = respx.get(f"{BASE}/whoami").mock(
            return_value=httpx.Response(200, json=account_response)
        )

        with PrintNodeClient(api_key="my_secret_key") as client:
            client.request("GET", "/whoami", resource_type=Account)

        request = route.calls[0].request
        expected = base64.b64encode(b"my_secret_key:").decode()
        assert request.headers["Authorization"] == f"Basic {expected}"

    @respx.mock
    def test_authentication_error(self):
        respx.get(f"{BASE}/whoami").mock(
            return_value=httpx.Response(401, json={"message": "Unauthorized"})
        )

        with pytest.raises(AuthenticationError) as exc_info:
            with PrintNodeClient(api_key="bad") as client:
                client.request("GET", "/whoami")

        assert exc_info.value.status_code == 401
        assert exc_info.value.path == "/whoami"

    @respx.mock
    def test_not_found_error(self):
        respx.get(f"{BASE}/account/999").mock(
            return_value=httpx.Response(404, text="no such account")
        )

        with pytest.raises(NotFoundError) as exc_info:
            with PrintNodeClient(api_key="key") as client:
                client.request("GET", "/account/999")

        assert exc_info.value.body == "no such account"

    @respx.mock
    def test_rate_limit_error(self):
        respx.get(f"{BASE}/account").mock(
            return_value=httpx.Response(429, headers={"Retry-After": "120"})
        )

        with pytest.raises(RateLimitError) as exc_info:
            with PrintNodeClient(api_key="key") as client:
                client.request("GET", "/account")

        assert exc_info.value.retry_after == 120

    @respx.mock
    def test_generic_api_error(self):
        route = respx.post(f"{BASE}/account").mock(
            return_value=httpx.Response(500, text="Internal Server Error")
        )

        with pytest.raises(RequestError) as exc_info:
            with PrintNodeClient(api_key="key") as client:
                client.request("POST", "/account", {"Account": {}})

        assert exc_info.value.status_code == 500
        assert exc_info.value.body == "Internal Server Error"
        assert exc_info.value.path == "/account"
        # Exactly one attempt for an HTTP error
        assert len(route.calls) == 1

    @respx.mock
    def test_connection_failure(self, monkeypatch):
        respx.get(f"{BASE}/whoami").mock(side_effect=httpx.ConnectError("refused"))
        monkeypatch.setenv("PRINTNODE_CONNECT_RETRIES", "1")

        with pytest.raises(TransportError):
            with PrintNodeClient(api_key="key") as client:
                client.request("GET", "/whoami")
