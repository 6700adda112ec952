"""Shared pytest fixtures and test helpers for recordcheck tests."""

from __future__ import annotations

import copy
import json
import logging
import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import httpx
import pytest
from click.testing import CliRunner

from recordcheck.config.settings import RecordcheckSettings
from recordcheck.services.telemetry import disable_telemetry

BOOKING: dict[str, Any] = {
    "firstname": "Jane",
    "lastname": "Doe",
    "totalprice": 150,
    "depositpaid": True,
    "bookingdates": {"checkin": "2024-06-01", "checkout": "2024-06-05"},
    "additionalneeds": "Breakfast",
}

USERNAME = "admin"
PASSWORD = "password123"


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    yield
    disable_telemetry()


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo configure_logging() calls made by CLI invocations."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    rc = logging.getLogger("recordcheck")
    rc_level = rc.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    rc.setLevel(rc_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def booking() -> dict[str, Any]:
    """A fresh copy of the reference booking record."""
    return copy.deepcopy(BOOKING)


@pytest.fixture
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in an empty temp directory with no RECORDCHECK_* env vars.

    Keeps a developer's recordcheck.toml / .env.test out of the tests.
    """
    for key in list(os.environ):
        if key.startswith("RECORDCHECK_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings(_isolated_env: None) -> RecordcheckSettings:
    """Settings with API credentials and a fixed generator seed."""
    return make_settings()


def make_settings(**api: Any) -> RecordcheckSettings:
    api_section = {
        "base_url": "https://booker.test",
        "username": USERNAME,
        "password": PASSWORD,
        **api,
    }
    return RecordcheckSettings(api=api_section, generator={"seed": 1234})


def write_json(path: Path, data: Any) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Fake booking API
# ---------------------------------------------------------------------------


class FakeBookerApi:
    """In-memory stand-in for the restful-booker API behind httpx.MockTransport.

    ``echo`` post-processes every booking the API returns, so tests can
    simulate an API that corrupts data.  ``status_overrides`` maps
    ``(method, path)`` to a forced status code.
    """

    token = "fake-token-123"

    def __init__(self) -> None:
        self.bookings: dict[int, dict[str, Any]] = {}
        self.next_id = 1
        self.requests: list[httpx.Request] = []
        self.echo: Callable[[dict[str, Any]], Any] = lambda b: copy.deepcopy(b)
        self.status_overrides: dict[tuple[str, str], int] = {}

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method, path = request.method, request.url.path
        forced = self.status_overrides.get((method, path))
        if forced is not None:
            return httpx.Response(forced, text="forced")

        if method == "POST" and path == "/auth":
            creds = json.loads(request.content)
            if creds == {"username": USERNAME, "password": PASSWORD}:
                return httpx.Response(200, json={"token": self.token})
            return httpx.Response(200, json={"reason": "Bad credentials"})

        if method == "POST" and path == "/booking":
            booking_id = self.next_id
            self.next_id += 1
            self.bookings[booking_id] = json.loads(request.content)
            return httpx.Response(
                200,
                json={"bookingid": booking_id, "booking": self.echo(self.bookings[booking_id])},
            )

        booking_id = int(path.rsplit("/", 1)[-1])
        if method in ("PUT", "DELETE") and request.headers.get("cookie") != f"token={self.token}":
            return httpx.Response(403, text="Forbidden")
        if booking_id not in self.bookings:
            return httpx.Response(404 if method != "DELETE" else 405, text="Not Found")
        if method == "GET":
            return httpx.Response(200, json=self.echo(self.bookings[booking_id]))
        if method == "PUT":
            self.bookings[booking_id] = json.loads(request.content)
            return httpx.Response(200, json=self.echo(self.bookings[booking_id]))
        del self.bookings[booking_id]
        return httpx.Response(201, text="Created")


@pytest.fixture
def fake_api() -> FakeBookerApi:
    return FakeBookerApi()
