"""RecordValidator — structural and value comparison of records.

For every FieldSpec, in declaration order, three checks run:

1. Presence/type: a required field must be present; a present field must
   have the declared runtime type.  A nested object field that is absent or
   not a mapping yields one type error and its children are not visited.
2. Format: named format, pattern, min_length, minimum.  Only evaluated for
   present values of the right type.  Violations are type errors.
3. Value: any present field is compared with the expected record under the
   field's compare mode, whatever steps 1-2 found.  Object fields with
   children delegate to their children.

INVARIANT: validate() is a pure function of its inputs.  It never raises
for malformed records; every anomaly becomes a report entry.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterator, Mapping, Sequence
from typing import Any, Final

from recordcheck.domain.formats import check_format, compile_pattern, format_label
from recordcheck.domain.report import (
    CODE_FORMAT,
    CODE_MIN_LENGTH,
    CODE_MINIMUM,
    CODE_MISMATCH,
    CODE_MISSING,
    CODE_PATTERN,
    CODE_PATTERN_MISMATCH,
    CODE_WRONG_TYPE,
    ValidationIssue,
    ValidationReport,
)
from recordcheck.domain.schema import FieldSpec, RecordSchema, join_path
from recordcheck.domain.types import CompareMode, ErrorCategory, FieldType, matches_type


class _Missing:
    """Sentinel for a key absent from a record."""

    def __repr__(self) -> str:
        return "<missing>"


MISSING: Final = _Missing()

_ARTICLES: dict[FieldType, str] = {
    FieldType.STRING: "a string",
    FieldType.NUMBER: "a number",
    FieldType.BOOLEAN: "a boolean",
    FieldType.OBJECT: "an object",
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate(actual: Any, expected: Any, schema: RecordSchema) -> ValidationReport:
    """Compare *actual* against *expected* under *schema*."""
    issues = list(_check_fields(schema.fields, actual, expected, prefix=""))
    return ValidationReport.from_issues(issues)


class RecordValidator:
    """A validator bound to one schema.

    Usage::

        validator = RecordValidator(BOOKING_SCHEMA)
        report = validator.validate(response.json(), payload)
        assert report.valid, report.errors
    """

    def __init__(self, schema: RecordSchema) -> None:
        self.schema = schema

    def validate(self, actual: Any, expected: Any) -> ValidationReport:
        return validate(actual, expected, self.schema)


def values_equal(left: Any, right: Any) -> bool:
    """Strict equality over decoded JSON values.

    Booleans only equal booleans, so ``True`` never equals ``1``.
    Mappings and sequences compare element-wise under the same rule.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        return left.keys() == right.keys() and all(values_equal(left[k], right[k]) for k in left)
    if _is_sequence(left) and _is_sequence(right):
        return len(left) == len(right) and all(
            values_equal(a, b) for a, b in zip(left, right, strict=True)
        )
    return bool(left == right)


def render_value(value: Any) -> str:
    """Render a value for a message: JSON literal, or ``<missing>``."""
    if value is MISSING:
        return "<missing>"
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(value)


# ---------------------------------------------------------------------------
# Field walk
# ---------------------------------------------------------------------------


def _check_fields(
    specs: Sequence[FieldSpec],
    actual: Any,
    expected: Any,
    *,
    prefix: str,
) -> Iterator[ValidationIssue]:
    for spec in specs:
        path = join_path(prefix, spec.name)
        value = _lookup(actual, spec.name)
        expected_value = _lookup(expected, spec.name)

        yield from _check_field(spec, path, value, expected_value)

        if spec.is_nested and matches_type(value, FieldType.OBJECT):
            yield from _check_fields(spec.children, value, expected_value, prefix=path)


def _check_field(
    spec: FieldSpec, path: str, value: Any, expected_value: Any
) -> Iterator[ValidationIssue]:
    if value is MISSING:
        if spec.required:
            yield _type_issue(path, CODE_MISSING, f"{path} must be present", spec, value)
        return

    if not matches_type(value, spec.expected_type):
        yield _type_issue(
            path,
            CODE_WRONG_TYPE,
            f"{path} must be {_ARTICLES[spec.expected_type]}",
            spec,
            value,
        )
    else:
        yield from _check_format(spec, path, value)

    if spec.is_nested:
        return
    yield from _check_value(spec, path, value, expected_value)


def _check_format(spec: FieldSpec, path: str, value: Any) -> Iterator[ValidationIssue]:
    if spec.format is not None and not check_format(spec.format, value):
        yield _type_issue(
            path,
            CODE_FORMAT,
            f"{path} must be in {format_label(spec.format)} format",
            spec,
            value,
        )
    if spec.pattern is not None and compile_pattern(spec.pattern).search(value) is None:
        yield _type_issue(path, CODE_PATTERN, f"{path} must match /{spec.pattern}/", spec, value)
    if spec.min_length is not None and len(value) < spec.min_length:
        yield _type_issue(
            path,
            CODE_MIN_LENGTH,
            f"{path} must be at least {spec.min_length} characters long",
            spec,
            value,
        )
    if spec.minimum is not None and value < spec.minimum:
        yield _type_issue(
            path, CODE_MINIMUM, f"{path} must be >= {spec.minimum:g}", spec, value
        )


def _check_value(
    spec: FieldSpec, path: str, value: Any, expected_value: Any
) -> Iterator[ValidationIssue]:
    if spec.compare_mode is CompareMode.TYPE_ONLY:
        return

    if spec.compare_mode is CompareMode.PATTERN:
        if not _matches_expected_pattern(value, expected_value):
            yield _value_issue(
                path,
                CODE_PATTERN_MISMATCH,
                f"{path} value mismatch: expected to match {render_value(expected_value)}, "
                f"got {render_value(value)}",
                expected_value,
                value,
            )
        return

    if expected_value is MISSING or not values_equal(value, expected_value):
        yield _value_issue(
            path,
            CODE_MISMATCH,
            f"{path} value mismatch: expected {render_value(expected_value)}, "
            f"got {render_value(value)}",
            expected_value,
            value,
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _lookup(record: Any, key: str) -> Any:
    if isinstance(record, Mapping) and key in record:
        return record[key]
    return MISSING


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return render_value(value)


def _matches_expected_pattern(value: Any, expected_value: Any) -> bool:
    if not isinstance(expected_value, str):
        return False
    try:
        return re.fullmatch(expected_value, _as_text(value)) is not None
    except re.error:
        return False


def _jsonable(value: Any) -> Any:
    if value is MISSING:
        return None
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)
    return value


def _type_issue(
    path: str, code: str, message: str, spec: FieldSpec, value: Any
) -> ValidationIssue:
    return ValidationIssue(
        path=path,
        category=ErrorCategory.TYPE,
        code=code,
        message=message,
        expected=str(spec.expected_type),
        actual=_jsonable(value),
    )


def _value_issue(
    path: str, code: str, message: str, expected_value: Any, value: Any
) -> ValidationIssue:
    return ValidationIssue(
        path=path,
        category=ErrorCategory.VALUE,
        code=code,
        message=message,
        expected=_jsonable(expected_value),
        actual=_jsonable(value),
    )
