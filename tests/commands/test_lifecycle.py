"""Tests for the lifecycle command."""

import json

import pytest
from click.testing import CliRunner

from recordcheck.cli import cli
from recordcheck.infrastructure.client import BookingClient
from tests.conftest import PASSWORD, USERNAME, FakeBookerApi

pytestmark = pytest.mark.usefixtures("_isolated_env")


@pytest.fixture
def api(fake_api: FakeBookerApi, monkeypatch: pytest.MonkeyPatch) -> FakeBookerApi:
    """Route every BookingClient the lifecycle service builds to the fake API."""

    def client(base_url: str, *, timeout: float, transport: object = None) -> BookingClient:
        return BookingClient(base_url, timeout=timeout, transport=fake_api.transport())

    monkeypatch.setattr("recordcheck.services.lifecycle.BookingClient", client)
    monkeypatch.setenv("RECORDCHECK_API__USERNAME", USERNAME)
    monkeypatch.setenv("RECORDCHECK_API__PASSWORD", PASSWORD)
    return fake_api


class TestLifecycleCommand:
    def test_pass(self, cli_runner: CliRunner, api: FakeBookerApi) -> None:
        result = cli_runner.invoke(cli, ["lifecycle", "--base-url", "https://booker.test"])
        assert result.exit_code == 0, result.output
        assert "6 passed, 0 failed, 0 skipped" in result.stdout
        assert "verify_deleted" in result.stdout

    def test_json(self, cli_runner: CliRunner, api: FakeBookerApi) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "lifecycle", "--base-url", "https://booker.test", "--seed", "7"]
        )
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["ok"] is True
        assert payload["data"]["booking_id"] == 1
        assert [s["status"] for s in payload["data"]["steps"]] == ["passed"] * 6

    def test_base_url_from_env(
        self, cli_runner: CliRunner, api: FakeBookerApi, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("RECORDCHECK_API__BASE_URL", "https://env.test")
        result = cli_runner.invoke(cli, ["--json", "lifecycle"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["data"]["base_url"] == "https://env.test"

    def test_step_failure_exits_1(self, cli_runner: CliRunner, api: FakeBookerApi) -> None:
        api.echo = lambda b: {**b, "firstname": b["firstname"] + "x"}
        result = cli_runner.invoke(cli, ["lifecycle", "--base-url", "https://booker.test"])
        assert result.exit_code == 1
        assert "FAILED" in result.stderr
        assert "1 passed, 1 failed, 4 skipped" in result.stderr

    def test_missing_config(self, cli_runner: CliRunner, api: FakeBookerApi) -> None:
        result = cli_runner.invoke(cli, ["--json", "lifecycle"])
        assert result.exit_code == 1
        payload = json.loads(result.stdout)
        assert payload["error"]["code"] == "CONFIG_MISSING"
        assert payload["error"]["detail"]["missing"] == ["base_url"]
        assert api.requests == []

    def test_quiet_failure(self, cli_runner: CliRunner, api: FakeBookerApi) -> None:
        api.status_overrides[("POST", "/auth")] = 500
        result = cli_runner.invoke(cli, ["-q", "lifecycle", "--base-url", "https://booker.test"])
        assert result.exit_code == 1
        assert result.stderr.strip() == (
            "ERROR: lifecycle — Step 'auth' failed: expected HTTP 200, got 500"
        )
