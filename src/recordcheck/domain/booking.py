"""Booking record schema for the restful-booker API.

Field list and constraints follow the API's published booking shape:
non-empty names, a non-negative total price, a deposit flag, and
``YYYY-MM-DD`` check-in/check-out dates.  ``additionalneeds`` is optional.
"""

from __future__ import annotations

from typing import Any

from recordcheck.domain.schema import FieldSpec, RecordSchema
from recordcheck.domain.types import FieldType

BOOKING_SCHEMA = RecordSchema.from_paths(
    "booking",
    [
        FieldSpec(name="firstname", expected_type=FieldType.STRING, min_length=1),
        FieldSpec(name="lastname", expected_type=FieldType.STRING, min_length=1),
        FieldSpec(name="totalprice", expected_type=FieldType.NUMBER, minimum=0),
        FieldSpec(name="depositpaid", expected_type=FieldType.BOOLEAN),
        FieldSpec(name="bookingdates", expected_type=FieldType.OBJECT),
        FieldSpec(name="bookingdates.checkin", expected_type=FieldType.STRING, format="date"),
        FieldSpec(name="bookingdates.checkout", expected_type=FieldType.STRING, format="date"),
        FieldSpec(name="additionalneeds", expected_type=FieldType.STRING, required=False),
    ],
    description="restful-booker booking record",
)

# The same shape as a JSON Schema document (accepted by load_schema()).
BOOKING_JSON_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["firstname", "lastname", "totalprice", "depositpaid", "bookingdates"],
    "properties": {
        "firstname": {"type": "string", "minLength": 1},
        "lastname": {"type": "string", "minLength": 1},
        "totalprice": {"type": "number", "minimum": 0},
        "depositpaid": {"type": "boolean"},
        "bookingdates": {
            "type": "object",
            "required": ["checkin", "checkout"],
            "properties": {
                "checkin": {"type": "string", "pattern": r"^\d{4}-\d{2}-\d{2}$"},
                "checkout": {"type": "string", "pattern": r"^\d{4}-\d{2}-\d{2}$"},
            },
        },
        "additionalneeds": {"type": "string"},
    },
}
