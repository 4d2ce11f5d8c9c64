"""Tests for the typer command line interface."""

import json
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest
import respx
from typer.testing import CliRunner

from printnode_cli import config
from printnode_cli.main import app


FIXTURES_DIR = Path(__file__).parent / "fixtures"
BASE = "https://api.printnode.com"

runner = CliRunner()


def load_fixture(name: str):
    with open(FIXTURES_DIR / name) as f:
        return json.load(f)


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("PRINTNODE_API_KEY", "test-key")


class TestAuthCommands:
    """Tests for login / logout."""

    @patch("printnode_cli.main.store_api_key")
    def test_login(self, mock_store):
        result = runner.invoke(app, ["login", "--api-key", "secret", "--profile", "integrator"])

        assert result.exit_code == 0
        mock_store.assert_called_once_with("secret", "integrator")
        assert "integrator" in result.output

    @patch("printnode_cli.main.clear_api_key")
    def test_logout_without_key(self, mock_clear):
        mock_clear.return_value = False

        result = runner.invoke(app, ["logout"])

        assert result.exit_code == 0
        mock_clear.assert_called_once_with("default")
        assert "No API key stored" in result.output


@pytest.mark.usefixtures("api_key")
class TestAccountCommands:
    """Tests for the accounts command group."""

    @respx.mock
    def test_whoami(self):
        respx.get(f"{BASE}/whoami").mock(
            return_value=httpx.Response(200, json=load_fixture("whoami.json"))
        )

        result = runner.invoke(app, ["whoami"])

        assert result.exit_code == 0
        assert "integrator@example.com" in result.output

    @respx.mock
    def test_list(self):
        respx.get(f"{BASE}/account").mock(
            return_value=httpx.Response(200, json=load_fixture("accounts.json"))
        )

        result = runner.invoke(app, ["accounts", "list"])

        assert result.exit_code == 0
        assert "12345" in result.output
        assert "12346" in result.output

    @respx.mock
    def test_list_as_child(self):
        route = respx.get(f"{BASE}/account").mock(return_value=httpx.Response(200, json=[]))

        result = runner.invoke(app, ["accounts", "list", "--as-child", "42"])

        assert result.exit_code == 0
        assert route.calls[0].request.headers["X-Child-Account-By-Id"] == "42"
        assert "No child accounts" in result.output

    @respx.mock
    def test_show(self):
        respx.get(f"{BASE}/account/12345").mock(
            return_value=httpx.Response(200, json=load_fixture("account.json"))
        )

        result = runner.invoke(app, ["accounts", "show", "12345"])

        assert result.exit_code == 0
        assert "customer1@example.com" in result.output
        assert "customerType" in result.output

    @respx.mock
    def test_create(self):
        route = respx.post(f"{BASE}/account").mock(
            return_value=httpx.Response(200, json=load_fixture("account_created.json"))
        )

        result = runner.invoke(app, [
            "accounts", "create",
            "--email", "newcustomer@example.com",
            "--password", "securepass123",
            "--ref", "customer_789",
            "--api-key", "production",
            "--tag", "plan=trial",
        ])

        assert result.exit_code == 0
        sent = json.loads(route.calls[0].request.content)
        assert sent["Account"]["creatorRef"] == "customer_789"
        assert sent["ApiKeys"] == ["production"]
        assert sent["Tags"] == {"plan": "trial"}
        assert "Created account 12347" in result.output

    @respx.mock
    def test_create_invalid_email(self):
        route = respx.post(f"{BASE}/account")

        result = runner.invoke(app, [
            "accounts", "create", "--email", "invalid-email", "--password", "securepass123",
        ])

        assert result.exit_code == 1
        assert "Invalid input" in result.output
        assert not route.called

    def test_create_bad_tag(self):
        result = runner.invoke(app, [
            "accounts", "create",
            "--email", "a@example.com",
            "--password", "securepass123",
            "--tag", "plan",
        ])

        assert result.exit_code == 1
        assert "NAME=VALUE" in result.output

    @respx.mock
    def test_suspend(self):
        respx.patch(f"{BASE}/account/12345").mock(
            return_value=httpx.Response(200, json=load_fixture("account_suspended.json"))
        )

        result = runner.invoke(app, ["accounts", "suspend", "12345"])

        assert result.exit_code == 0
        assert "is suspended" in result.output

    @respx.mock
    def test_suspend_as_child(self):
        route = respx.patch(f"{BASE}/account/12345").mock(
            return_value=httpx.Response(200, json=load_fixture("account_suspended.json"))
        )

        result = runner.invoke(app, ["accounts", "suspend", "12345", "--as-child", "500"])

        assert result.exit_code == 0
        assert route.calls[0].request.headers["X-Child-Account-By-Id"] == "500"

    @respx.mock
    def test_activate_not_applied(self):
        """Exit with an error when the server still reports the old state."""
        respx.patch(f"{BASE}/account/12345").mock(
            return_value=httpx.Response(200, json=load_fixture("account_suspended.json"))
        )

        result = runner.invoke(app, ["accounts", "activate", "12345"])

        assert result.exit_code == 1
        assert "still suspended" in result.output

    @respx.mock
    def test_delete_partial(self):
        respx.delete(url__regex=r".*/account/.*").mock(
            return_value=httpx.Response(200, json=[12345])
        )

        result = runner.invoke(app, ["accounts", "delete", "12345", "12346", "--yes"])

        assert result.exit_code == 0
        assert "Deleted: 12345" in result.output
        assert "Not deleted: 12346" in result.output

    def test_delete_aborted(self):
        result = runner.invoke(app, ["accounts", "delete", "12345"], input="n\n")

        assert result.exit_code == 1

    @respx.mock
    def test_add_tag(self):
        route = respx.patch(f"{BASE}/account/12345/tags").mock(
            return_value=httpx.Response(200, json={"tier": "gold"})
        )

        result = runner.invoke(app, ["accounts", "add-tag", "12345", "tier", "gold"])

        assert result.exit_code == 0
        assert json.loads(route.calls[0].request.content) == {"tier": "gold"}
        assert "gold" in result.output

    @respx.mock
    def test_authentication_error(self):
        respx.get(f"{BASE}/account").mock(return_value=httpx.Response(401))

        result = runner.invoke(app, ["accounts", "list"])

        assert result.exit_code == 1
        assert "Authentication failed" in result.output


class TestNotConfigured:
    """Tests without any API key."""

    @patch("printnode_cli.auth.get_stored_api_key")
    def test_not_configured(self, mock_stored):
        mock_stored.return_value = None

        result = runner.invoke(app, ["accounts", "list"])

        assert result.exit_code == 1
        assert "No API key" in result.output


class TestConfigCommands:
    """Tests for the config command group."""

    def test_set_and_show(self):
        result = runner.invoke(app, ["config", "set", "timeout", "60"])

        assert result.exit_code == 0
        assert config.load_config() == {"timeout": 60}

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "timeout" in result.output
        assert "60" in result.output

    def test_set_out_of_range(self):
        result = runner.invoke(app, ["config", "set", "timeout", "500"])

        assert result.exit_code != 0
        assert config.load_config() == {}

    def test_set_unknown_key(self):
        result = runner.invoke(app, ["config", "set", "api_key", "secret"])

        assert result.exit_code == 1
        assert "Unknown setting" in result.output
