"""HTTP client for the restful-booker booking API.

Thin wrapper over :class:`httpx.Client`.  Every call returns an
:class:`ApiResponse` so callers can assert on status codes themselves;
only transport failures raise (:class:`BookingApiError`).
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)

_JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class BookingApiError(Exception):
    """The booking API could not be reached or the request failed in transit."""


@dataclass(frozen=True)
class ApiResponse:
    """Status code and decoded body of one API call.

    ``body`` is ``None`` when the response is not JSON.
    """

    status_code: int
    body: Any
    elapsed_ms: float
    text: str = ""


class BookingClient:
    """Issue booking API requests.

    Usage::

        with BookingClient("https://restful-booker.herokuapp.com") as client:
            token = client.auth("admin", "password123")
            created = client.create_booking(payload)
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._http = httpx.Client(base_url=self.base_url, timeout=timeout, transport=transport)

    def __enter__(self) -> BookingClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    def auth(self, username: str, password: str) -> ApiResponse:
        """POST /auth — the token is in ``body["token"]`` on success."""
        return self._request(
            "POST",
            "/auth",
            json={"username": username, "password": password},
            headers=_JSON_HEADERS,
        )

    def create_booking(self, payload: dict[str, Any]) -> ApiResponse:
        return self._request("POST", "/booking", json=payload, headers=_JSON_HEADERS)

    def get_booking(self, booking_id: int) -> ApiResponse:
        return self._request(
            "GET", f"/booking/{booking_id}", headers={"Accept": "application/json"}
        )

    def update_booking(
        self, booking_id: int, payload: dict[str, Any], *, token: str
    ) -> ApiResponse:
        return self._request(
            "PUT",
            f"/booking/{booking_id}",
            json=payload,
            headers={**_JSON_HEADERS, "Cookie": f"token={token}"},
        )

    def delete_booking(self, booking_id: int, *, token: str) -> ApiResponse:
        return self._request(
            "DELETE", f"/booking/{booking_id}", headers={"Cookie": f"token={token}"}
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _request(self, method: str, url: str, **kwargs: Any) -> ApiResponse:
        started = time.perf_counter()
        try:
            response = self._http.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise BookingApiError(f"{method} {url} failed: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            body = None

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            "%s %s -> %d (%.1fms)", method, url, response.status_code, elapsed_ms
        )
        return ApiResponse(
            status_code=response.status_code,
            body=body,
            elapsed_ms=elapsed_ms,
            text=response.text,
        )
