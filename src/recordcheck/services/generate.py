"""GenerateService — booking payloads for expected-side test data."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recordcheck.infrastructure.generator import BookingGenerator
from recordcheck.services.base import BaseService
from recordcheck.services.result import INVALID_COUNT, ServiceResult
from recordcheck.services.telemetry import traced

if TYPE_CHECKING:
    from recordcheck.config.models import GeneratorConfig


def build_generator(config: GeneratorConfig, *, seed: int | None = None) -> BookingGenerator:
    """Build a BookingGenerator from a ``[generator]`` section; *seed* overrides."""
    return BookingGenerator(
        seed=seed if seed is not None else config.seed,
        checkin_window_days=config.checkin_window_days,
        stay_max_days=config.stay_max_days,
        additional_needs=config.additional_needs,
        min_price=config.min_price,
        max_price=config.max_price,
    )


class GenerateService(BaseService):
    """Generate expected-side payloads."""

    @traced
    def booking(self, *, count: int = 1, seed: int | None = None) -> ServiceResult:
        if count < 1:
            return ServiceResult.failure(
                "generate_booking", INVALID_COUNT, "count must be at least 1", count=count
            )
        items = build_generator(self.settings.generator, seed=seed).payloads(count)
        return ServiceResult(
            ok=True,
            op="generate_booking",
            data={"items": items, "count": len(items)},
        )
