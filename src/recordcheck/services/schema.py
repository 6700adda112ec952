"""SchemaService — list built-in schemas and describe a resolved schema."""

from __future__ import annotations

from typing import Any

from recordcheck.domain.loader import list_builtin_schemas, resolve_schema
from recordcheck.domain.schema import FieldSpec, SchemaError
from recordcheck.services.base import BaseService
from recordcheck.services.result import INVALID_SCHEMA, ServiceResult


class SchemaService(BaseService):
    def list_schemas(self) -> ServiceResult:
        return ServiceResult(ok=True, op="schema_list", data={"schemas": list_builtin_schemas()})

    def describe(self, ref: str | None = None) -> ServiceResult:
        """Describe the schema named or stored at *ref* (default: configured schema)."""
        ref = ref or self.settings.validation.default_schema
        try:
            schema = resolve_schema(ref)
        except SchemaError as exc:
            return ServiceResult.failure("schema_show", INVALID_SCHEMA, str(exc), ref=ref)
        return ServiceResult(
            ok=True,
            op="schema_show",
            data={
                "name": schema.name,
                "description": schema.description,
                "fields": [_describe(path, spec) for path, spec in schema.walk()],
            },
        )


def _describe(path: str, spec: FieldSpec) -> dict[str, Any]:
    constraints = []
    if spec.format:
        constraints.append(spec.format)
    if spec.pattern:
        constraints.append(f"/{spec.pattern}/")
    if spec.min_length is not None:
        constraints.append(f"minLength={spec.min_length}")
    if spec.minimum is not None:
        constraints.append(f"minimum={spec.minimum:g}")
    return {
        "path": path,
        "type": str(spec.expected_type),
        "required": spec.required,
        "format": ", ".join(constraints) or None,
        "compare": str(spec.compare_mode),
    }
