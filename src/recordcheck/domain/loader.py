"""Schema loading — built-in registry, native files, and JSON Schema.

Two document shapes are accepted (JSON or YAML):

- Native: ``{"name": ..., "fields": [{"name": ..., "type": ..., ...}]}``.
  Field names may be dotted paths or carry ``children``.
- JSON Schema subset: ``{"properties": {...}, "required": [...]}`` with
  ``type``, ``pattern``, ``format``, ``minLength``, ``minimum`` per
  property and one level of nested ``object`` properties.
  ``x-compare`` selects the compare mode.

Every failure surfaces as :class:`SchemaError`.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from recordcheck.domain.booking import BOOKING_SCHEMA
from recordcheck.domain.formats import FORMAT_PATTERNS
from recordcheck.domain.schema import FieldSpec, RecordSchema, SchemaError
from recordcheck.domain.types import FieldType

BUILTIN_SCHEMAS: dict[str, RecordSchema] = {
    BOOKING_SCHEMA.name: BOOKING_SCHEMA,
}

_JSON_TYPES: dict[str, FieldType] = {
    "string": FieldType.STRING,
    "number": FieldType.NUMBER,
    "integer": FieldType.NUMBER,
    "boolean": FieldType.BOOLEAN,
    "object": FieldType.OBJECT,
}

_JSON_FORMATS: dict[str, str] = {
    "date": "date",
    "date-time": "datetime",
}

# Patterns identical to a registered format are reported as that format.
_PATTERN_FORMATS: dict[str, str] = {p.pattern: name for name, p in FORMAT_PATTERNS.items()}


# ---------------------------------------------------------------------------
# Built-ins
# ---------------------------------------------------------------------------


def list_builtin_schemas() -> list[str]:
    return sorted(BUILTIN_SCHEMAS)


def get_builtin_schema(name: str) -> RecordSchema:
    try:
        return BUILTIN_SCHEMAS[name]
    except KeyError:
        known = ", ".join(list_builtin_schemas())
        raise SchemaError(f"Unknown schema '{name}' (built-in schemas: {known})") from None


def resolve_schema(ref: str) -> RecordSchema:
    """Resolve *ref* as a built-in schema name, then as a file path."""
    if ref in BUILTIN_SCHEMAS:
        return BUILTIN_SCHEMAS[ref]
    path = Path(ref)
    if path.is_file():
        return load_schema(path)
    return get_builtin_schema(ref)


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


def load_schema(path: Path) -> RecordSchema:
    """Load a schema document from a ``.json``, ``.yaml`` or ``.yml`` file."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaError(f"Cannot read schema file {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise SchemaError(f"Schema file {path} is not valid UTF-8: {exc}") from exc

    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            document = json.loads(raw)
        elif suffix in (".yaml", ".yml"):
            document = YAML(typ="safe").load(raw)
        else:
            raise SchemaError(f"Unsupported schema file type '{suffix}': {path}")
    except (json.JSONDecodeError, YAMLError) as exc:
        raise SchemaError(f"Invalid schema document {path}: {exc}") from exc

    return schema_from_document(document, default_name=path.stem)


def schema_from_document(document: Any, *, default_name: str = "schema") -> RecordSchema:
    """Build a schema from a parsed document of either accepted shape."""
    if not isinstance(document, Mapping):
        raise SchemaError("Schema document must be a mapping")
    name = str(document.get("name") or document.get("title") or default_name)
    if "fields" in document:
        return schema_from_native(name, document)
    if "properties" in document:
        return schema_from_json_schema(name, document)
    raise SchemaError("Schema document needs a 'fields' list or a 'properties' mapping")


def schema_from_native(name: str, document: Mapping[str, Any]) -> RecordSchema:
    raw_fields = document.get("fields")
    if not isinstance(raw_fields, list):
        raise SchemaError("'fields' must be a list")
    try:
        specs = [FieldSpec.model_validate(item) for item in raw_fields]
    except ValidationError as exc:
        raise SchemaError(f"Invalid field in schema '{name}': {exc}") from exc
    return RecordSchema.from_paths(
        name, specs, description=str(document.get("description", ""))
    )


def schema_from_json_schema(name: str, document: Mapping[str, Any]) -> RecordSchema:
    """Convert a JSON Schema object document into a RecordSchema."""
    fields = _json_properties(document, where=name)
    return RecordSchema(
        name=name,
        description=str(document.get("description", "")),
        fields=tuple(fields),
    )


def _json_properties(node: Mapping[str, Any], *, where: str) -> list[FieldSpec]:
    properties = node.get("properties")
    if not isinstance(properties, Mapping):
        raise SchemaError(f"'{where}': 'properties' must be a mapping")
    required = node.get("required", [])
    if not isinstance(required, list):
        raise SchemaError(f"'{where}': 'required' must be a list")
    if not all(isinstance(item, str) for item in required):
        raise SchemaError(f"'{where}': 'required' entries must be strings")
    unknown = set(required) - set(properties)
    if unknown:
        raise SchemaError(f"'{where}': required names undeclared properties {sorted(unknown)}")

    return [
        _json_property(key, prop, required=key in required, where=f"{where}.{key}")
        for key, prop in properties.items()
    ]


def _json_property(
    key: str, prop: Any, *, required: bool, where: str
) -> FieldSpec:
    if not isinstance(prop, Mapping):
        raise SchemaError(f"'{where}': property definition must be a mapping")
    json_type = prop.get("type")
    field_type = _JSON_TYPES.get(json_type) if isinstance(json_type, str) else None
    if field_type is None:
        raise SchemaError(f"'{where}': unsupported type {json_type!r}")

    data: dict[str, Any] = {
        "name": key,
        "expected_type": field_type,
        "required": required,
    }
    pattern = prop.get("pattern")
    if pattern is not None:
        if isinstance(pattern, str) and pattern in _PATTERN_FORMATS:
            data["format"] = _PATTERN_FORMATS[pattern]
        else:
            data["pattern"] = pattern
    if "format" in prop:
        fmt = _JSON_FORMATS.get(prop["format"]) if isinstance(prop["format"], str) else None
        if fmt is None:
            raise SchemaError(f"'{where}': unsupported format {prop['format']!r}")
        data["format"] = fmt
    if "minLength" in prop:
        data["min_length"] = prop["minLength"]
    if "minimum" in prop:
        data["minimum"] = prop["minimum"]
    if "x-compare" in prop:
        data["compare_mode"] = prop["x-compare"]
    if field_type is FieldType.OBJECT and "properties" in prop:
        data["children"] = tuple(_json_properties(prop, where=where))

    try:
        return FieldSpec(**data)
    except ValidationError as exc:
        raise SchemaError(f"'{where}': {exc}") from exc
