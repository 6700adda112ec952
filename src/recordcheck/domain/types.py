"""Field type tags and comparison enums.

Runtime values are decoded JSON, so the four tags map onto Python types:
string -> str, number -> int/float (never bool), boolean -> bool,
object -> any Mapping.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any


class FieldType(StrEnum):
    """Expected runtime type of a validated field."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"


class CompareMode(StrEnum):
    """How an actual value is compared against its expected value."""

    EXACT = "exact"
    PATTERN = "pattern"
    TYPE_ONLY = "type-only"


class ErrorCategory(StrEnum):
    """Report category of a validation issue."""

    TYPE = "type"
    VALUE = "value"


def matches_type(value: Any, field_type: FieldType) -> bool:
    """Check whether *value* has the runtime type described by *field_type*."""
    if field_type is FieldType.STRING:
        return isinstance(value, str)
    if field_type is FieldType.NUMBER:
        # bool is an int subclass; JSON true is not a number.
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if field_type is FieldType.BOOLEAN:
        return isinstance(value, bool)
    return isinstance(value, Mapping)
