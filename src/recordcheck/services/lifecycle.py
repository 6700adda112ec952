"""LifecycleService — full create/read/update/delete run against the booking API.

Steps, in order:

- ``auth``           POST /auth -> 200 with a token
- ``create``         POST /booking -> 200, numeric ``bookingid``, echoed
                     ``booking`` validates against the sent payload
- ``get``            GET /booking/{id} -> 200, body validates
- ``update``         PUT /booking/{id} with a fresh payload -> 200, body
                     validates against the new payload
- ``delete``         DELETE /booking/{id} -> 201
- ``verify_deleted`` GET /booking/{id} -> 404

The run stops at the first failing step; later steps are reported as
skipped.  The result is ok only when every step passed.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar

from recordcheck.config.logging import log_context
from recordcheck.domain.booking import BOOKING_SCHEMA
from recordcheck.domain.validator import RecordValidator
from recordcheck.infrastructure.client import ApiResponse, BookingApiError, BookingClient
from recordcheck.services.base import BaseService
from recordcheck.services.generate import build_generator
from recordcheck.services.result import (
    API_UNREACHABLE,
    CONFIG_MISSING,
    STEP_FAILED,
    ServiceResult,
)
from recordcheck.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    import httpx

    from recordcheck.config.settings import RecordcheckSettings
    from recordcheck.infrastructure.generator import BookingGenerator

OP = "lifecycle"

PASSED = "passed"
FAILED = "failed"
SKIPPED = "skipped"

STEP_NAMES = ("auth", "create", "get", "update", "delete", "verify_deleted")


class StepFailure(Exception):
    """Raised inside a step to mark it failed with a message."""


@dataclass
class StepOutcome:
    step: str
    status: str
    message: str = ""
    status_code: int | None = None
    expected_status: int | None = None
    elapsed_ms: float | None = None
    report: dict[str, Any] | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class _RunState:
    token: str | None = None
    booking_id: int | None = None
    payload: dict[str, Any] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)


class LifecycleService(BaseService):
    """Drive the booking API through its lifecycle and validate every echo.

    Args:
        settings: Resolved settings; ``[api]`` supplies URL and credentials.
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``).
    """

    def __init__(
        self,
        settings: RecordcheckSettings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(settings)
        self._transport = transport
        self._validator = RecordValidator(BOOKING_SCHEMA)

    @traced
    def run(self, *, base_url: str | None = None, seed: int | None = None) -> ServiceResult:
        api = self.settings.api
        url = base_url or api.base_url
        missing = [
            name
            for name, value in (
                ("base_url", url),
                ("username", api.username),
                ("password", api.password),
            )
            if not value
        ]
        if missing or url is None:
            return ServiceResult.failure(
                OP,
                CONFIG_MISSING,
                f"Missing API settings: {', '.join(missing)}",
                missing=missing,
            )

        generator = build_generator(self.settings.generator, seed=seed)
        state = _RunState()
        outcomes: list[StepOutcome] = []

        with (
            log_context(base_url=url),
            BookingClient(url, timeout=api.timeout, transport=self._transport) as client,
        ):
            for name, step in self._steps(client, generator, state):
                if outcomes and outcomes[-1].status != PASSED:
                    outcomes.append(StepOutcome(step=name, status=SKIPPED))
                    continue
                outcomes.append(self._run_step(name, step))

        counts = {s: sum(1 for o in outcomes if o.status == s) for s in (PASSED, FAILED, SKIPPED)}
        data = {
            "base_url": url,
            "booking_id": state.booking_id,
            "steps": [o.to_dict() for o in outcomes],
            **counts,
        }
        self._log.info("lifecycle.complete", base_url=url, **counts)

        failed = next((o for o in outcomes if o.status == FAILED), None)
        if failed is None:
            return ServiceResult(ok=True, op=OP, data=data, warnings=state.warnings)
        return ServiceResult.failure(
            OP,
            failed.error_code or STEP_FAILED,
            f"Step '{failed.step}' failed: {failed.message}",
            data=data,
            warnings=state.warnings,
            step=failed.step,
        )

    # ------------------------------------------------------------------
    # Step machinery
    # ------------------------------------------------------------------

    def _run_step(self, name: str, step: Callable[[StepOutcome], None]) -> StepOutcome:
        outcome = StepOutcome(step=name, status=PASSED)
        with trace_span(name) as span:
            try:
                step(outcome)
            except StepFailure as exc:
                outcome.status = FAILED
                outcome.message = str(exc)
                outcome.error_code = STEP_FAILED
            except BookingApiError as exc:
                outcome.status = FAILED
                outcome.message = str(exc)
                outcome.error_code = API_UNREACHABLE
            if span is not None:
                span.annotate("status", outcome.status)
                if outcome.status_code is not None:
                    span.annotate("status_code", outcome.status_code)
        self._log.debug("lifecycle.step", step=name, status=outcome.status)
        return outcome

    def _steps(
        self,
        client: BookingClient,
        generator: BookingGenerator,
        state: _RunState,
    ) -> list[tuple[str, Callable[[StepOutcome], None]]]:
        api = self.settings.api

        def auth(outcome: StepOutcome) -> None:
            response = client.auth(api.username or "", api.password or "")
            _expect_status(outcome, response, 200)
            token = response.body.get("token") if isinstance(response.body, dict) else None
            if not token:
                raise StepFailure("no token in auth response")
            state.token = str(token)

        def create(outcome: StepOutcome) -> None:
            state.payload = generator.payload()
            response = client.create_booking(state.payload)
            _expect_status(outcome, response, 200)
            body = response.body if isinstance(response.body, dict) else {}
            booking_id = body.get("bookingid")
            if not isinstance(booking_id, int) or isinstance(booking_id, bool):
                raise StepFailure(f"bookingid must be a number, got {booking_id!r}")
            state.booking_id = booking_id
            self._check_record(outcome, body.get("booking"), state.payload)

        def get(outcome: StepOutcome) -> None:
            response = client.get_booking(_require(state.booking_id))
            _expect_status(outcome, response, 200)
            self._check_record(outcome, response.body, state.payload)

        def update(outcome: StepOutcome) -> None:
            previous = state.payload
            payload = generator.payload()
            response = client.update_booking(
                _require(state.booking_id), payload, token=_require(state.token)
            )
            _expect_status(outcome, response, 200)
            self._check_record(outcome, response.body, payload)
            if payload["firstname"] == previous.get("firstname"):
                state.warnings.append(
                    "update reused the previous firstname; change not observable"
                )
            state.payload = payload

        def delete(outcome: StepOutcome) -> None:
            response = client.delete_booking(_require(state.booking_id), token=_require(state.token))
            _expect_status(outcome, response, 201)

        def verify_deleted(outcome: StepOutcome) -> None:
            response = client.get_booking(_require(state.booking_id))
            _expect_status(outcome, response, 404)

        return list(zip(STEP_NAMES, (auth, create, get, update, delete, verify_deleted), strict=True))

    def _check_record(self, outcome: StepOutcome, actual: Any, expected: dict[str, Any]) -> None:
        report = self._validator.validate(actual, expected)
        outcome.report = report.to_payload()
        if not report.valid:
            raise StepFailure("; ".join(report.errors))


def _expect_status(outcome: StepOutcome, response: ApiResponse, expected: int) -> None:
    outcome.status_code = response.status_code
    outcome.expected_status = expected
    outcome.elapsed_ms = round(response.elapsed_ms, 2)
    if response.status_code != expected:
        raise StepFailure(f"expected HTTP {expected}, got {response.status_code}")


_T = TypeVar("_T")


def _require(value: _T | None) -> _T:
    if value is None:
        raise StepFailure("earlier step did not provide a value")
    return value
