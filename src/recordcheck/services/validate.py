"""ValidationService — compare actual and expected records under a schema.

Reads records from JSON files (or takes them in memory), resolves the
schema by built-in name or file path, and runs the RecordValidator.
An invalid record is a failed result that still carries the full report.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from recordcheck.domain.loader import resolve_schema
from recordcheck.domain.schema import RecordSchema, SchemaError
from recordcheck.domain.validator import validate
from recordcheck.services.base import BaseService
from recordcheck.services.result import (
    FILE_NOT_FOUND,
    INVALID_JSON,
    INVALID_SCHEMA,
    RECORD_INVALID,
    ServiceResult,
)
from recordcheck.services.telemetry import trace_span, traced

OP = "validate"


class _LoadError(Exception):
    def __init__(self, code: str, message: str, path: Path) -> None:
        super().__init__(message)
        self.code = code
        self.path = path


class ValidationService(BaseService):
    """Validate records against a RecordSchema."""

    @traced
    def validate_files(
        self,
        actual_path: Path,
        expected_path: Path,
        *,
        schema: str | None = None,
    ) -> ServiceResult:
        """Load two JSON records and validate *actual* against *expected*."""
        try:
            with trace_span("load_records"):
                actual = _read_json(actual_path)
                expected = _read_json(expected_path)
        except _LoadError as exc:
            return ServiceResult.failure(OP, exc.code, str(exc), path=str(exc.path))
        return self.validate_records(actual, expected, schema=schema)

    @traced
    def validate_records(
        self,
        actual: Any,
        expected: Any,
        *,
        schema: str | RecordSchema | None = None,
    ) -> ServiceResult:
        """Validate in-memory records; *schema* defaults to ``[validation] default_schema``."""
        try:
            with trace_span("resolve_schema"):
                record_schema = self._resolve(schema)
        except SchemaError as exc:
            return ServiceResult.failure(OP, INVALID_SCHEMA, str(exc))

        with trace_span("compare"):
            report = validate(actual, expected, record_schema)

        data = {"schema": record_schema.name, **report.to_payload()}
        self._log.debug(
            "record.validated",
            schema=record_schema.name,
            valid=report.valid,
            type_errors=report.summary.type_error_count,
            value_errors=report.summary.value_error_count,
        )
        if report.valid:
            return ServiceResult(ok=True, op=OP, data=data)

        summary = report.summary
        return ServiceResult.failure(
            OP,
            RECORD_INVALID,
            f"{summary.type_error_count} type errors, {summary.value_error_count} value errors",
            data=data,
        )

    def _resolve(self, schema: str | RecordSchema | None) -> RecordSchema:
        if isinstance(schema, RecordSchema):
            return schema
        return resolve_schema(schema or self.settings.validation.default_schema)


def _read_json(path: Path) -> Any:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise _LoadError(FILE_NOT_FOUND, f"File not found: {path}", path) from exc
    except OSError as exc:
        raise _LoadError(FILE_NOT_FOUND, f"Cannot read {path}: {exc}", path) from exc
    except UnicodeDecodeError as exc:
        raise _LoadError(INVALID_JSON, f"{path} is not valid UTF-8: {exc}", path) from exc
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise _LoadError(INVALID_JSON, f"Invalid JSON in {path}: {exc}", path) from exc
