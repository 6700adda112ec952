"""Faker-backed booking payload generator.

Produces the *expected* side of a comparison: a booking payload with
realistic names and dates serialized as ``YYYY-MM-DD``.

INVARIANT: today <= checkin <= checkout.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, timedelta
from typing import Any

from faker import Faker

logger = logging.getLogger(__name__)

DEFAULT_ADDITIONAL_NEEDS: tuple[str, ...] = (
    "Breakfast",
    "Lunch",
    "Dinner",
    "Baby crib",
    "Late checkout",
)


class BookingGenerator:
    """Generate booking payloads.

    Args:
        seed: Seed for a reproducible sequence. ``None`` draws fresh data.
        checkin_window_days: Check-in falls within this many days from today.
        stay_max_days: Check-out falls within this many days after check-in.
        additional_needs: Menu ``additionalneeds`` is drawn from.
        today: Reference date (defaults to ``date.today()``).
    """

    def __init__(
        self,
        *,
        seed: int | None = None,
        checkin_window_days: int = 30,
        stay_max_days: int = 5,
        additional_needs: Sequence[str] = DEFAULT_ADDITIONAL_NEEDS,
        min_price: int = 50,
        max_price: int = 500,
        today: date | None = None,
    ) -> None:
        if checkin_window_days < 0 or stay_max_days < 0:
            raise ValueError("Date windows must be non-negative")
        if not additional_needs:
            raise ValueError("additional_needs must not be empty")
        self._faker = Faker()
        if seed is not None:
            self._faker.seed_instance(seed)
        self._checkin_window = checkin_window_days
        self._stay_max = stay_max_days
        self._needs = list(additional_needs)
        self._min_price = min_price
        self._max_price = max_price
        self._today = today

    def payload(self) -> dict[str, Any]:
        """Return one booking payload."""
        today = self._today or date.today()
        checkin = today + timedelta(days=self._faker.random_int(0, self._checkin_window))
        checkout = checkin + timedelta(days=self._faker.random_int(0, self._stay_max))
        payload = {
            "firstname": self._faker.first_name(),
            "lastname": self._faker.last_name(),
            "totalprice": self._faker.random_int(self._min_price, self._max_price),
            "depositpaid": self._faker.pybool(),
            "bookingdates": {
                "checkin": checkin.isoformat(),
                "checkout": checkout.isoformat(),
            },
            "additionalneeds": self._faker.random_element(self._needs),
        }
        logger.debug("Generated booking payload for %s", payload["lastname"])
        return payload

    def payloads(self, count: int) -> list[dict[str, Any]]:
        return [self.payload() for _ in range(count)]
