"""Tests for schema loading: built-ins, native documents, and JSON Schema."""

import json
from pathlib import Path

import pytest

from recordcheck.domain.booking import BOOKING_JSON_SCHEMA, BOOKING_SCHEMA
from recordcheck.domain.loader import (
    get_builtin_schema,
    list_builtin_schemas,
    load_schema,
    resolve_schema,
    schema_from_document,
)
from recordcheck.domain.schema import SchemaError
from recordcheck.domain.types import CompareMode, FieldType

NATIVE_YAML = """\
name: order
description: shop order
fields:
  - name: id
    type: number
    compare: type-only
  - name: customer
    type: object
  - name: customer.email
    type: string
    pattern: "@"
  - name: note
    type: string
    required: false
"""


class TestBuiltins:
    def test_list(self) -> None:
        assert list_builtin_schemas() == ["booking"]

    def test_get(self) -> None:
        assert get_builtin_schema("booking") is BOOKING_SCHEMA

    def test_unknown_lists_known_names(self) -> None:
        with pytest.raises(SchemaError, match="built-in schemas: booking"):
            get_builtin_schema("invoice")


class TestResolve:
    def test_builtin_name(self) -> None:
        assert resolve_schema("booking") is BOOKING_SCHEMA

    def test_file_path(self, tmp_path: Path) -> None:
        path = tmp_path / "order.yaml"
        path.write_text(NATIVE_YAML, encoding="utf-8")
        assert resolve_schema(str(path)).name == "order"

    def test_neither(self, tmp_path: Path) -> None:
        with pytest.raises(SchemaError, match="Unknown schema"):
            resolve_schema(str(tmp_path / "missing.json"))


class TestNativeDocuments:
    def test_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "order.yml"
        path.write_text(NATIVE_YAML, encoding="utf-8")
        schema = load_schema(path)
        assert schema.name == "order"
        assert schema.description == "shop order"
        assert schema.paths() == ["id", "customer", "customer.email", "note"]
        assert schema.get("id").compare_mode is CompareMode.TYPE_ONLY
        assert schema.get("customer.email").pattern == "@"
        assert schema.get("note").required is False

    def test_json_with_children(self, tmp_path: Path) -> None:
        document = {
            "fields": [
                {
                    "name": "dates",
                    "type": "object",
                    "children": [{"name": "start", "type": "string", "format": "date"}],
                }
            ]
        }
        path = tmp_path / "stay.json"
        path.write_text(json.dumps(document), encoding="utf-8")
        schema = load_schema(path)
        assert schema.name == "stay"
        assert schema.get("dates.start").format == "date"

    def test_invalid_field_type(self) -> None:
        with pytest.raises(SchemaError, match="Invalid field"):
            schema_from_document({"fields": [{"name": "x", "type": "array"}]})

    def test_constraint_error_propagates(self) -> None:
        with pytest.raises(SchemaError, match="unknown format"):
            schema_from_document({"fields": [{"name": "x", "type": "string", "format": "uuid"}]})

    def test_fields_must_be_list(self) -> None:
        with pytest.raises(SchemaError, match="must be a list"):
            schema_from_document({"fields": {"x": "string"}})


class TestJsonSchemaDocuments:
    def test_booking_json_schema_matches_builtin(self) -> None:
        schema = schema_from_document(BOOKING_JSON_SCHEMA, default_name="booking")
        assert schema.paths() == BOOKING_SCHEMA.paths()
        for path, spec in BOOKING_SCHEMA.walk():
            loaded = schema.get(path)
            assert loaded.expected_type is spec.expected_type, path
            assert loaded.required is spec.required, path
            assert loaded.format == spec.format, path
            assert loaded.min_length == spec.min_length, path
            assert loaded.minimum == spec.minimum, path

    def test_title_names_schema(self) -> None:
        schema = schema_from_document(
            {"title": "Guest", "properties": {"age": {"type": "integer"}}}
        )
        assert schema.name == "Guest"
        assert schema.get("age").expected_type is FieldType.NUMBER
        assert schema.get("age").required is False

    def test_format_and_compare_extension(self) -> None:
        schema = schema_from_document(
            {
                "properties": {
                    "at": {"type": "string", "format": "date-time"},
                    "ref": {"type": "string", "x-compare": "pattern"},
                }
            }
        )
        assert schema.get("at").format == "datetime"
        assert schema.get("ref").compare_mode is CompareMode.PATTERN

    def test_custom_pattern_kept(self) -> None:
        schema = schema_from_document({"properties": {"c": {"type": "string", "pattern": "^A"}}})
        assert schema.get("c").pattern == "^A"
        assert schema.get("c").format is None

    @pytest.mark.parametrize(
        "document,match",
        [
            ({"properties": {"x": {"type": "array"}}}, "unsupported type"),
            ({"properties": {"x": {"type": "string", "format": "uuid"}}}, "unsupported format"),
            ({"properties": {"x": {"type": "string"}}, "required": ["y"]}, "undeclared"),
            ({"properties": {"x": "string"}}, "must be a mapping"),
            ({"properties": []}, "must be a mapping"),
            ({"properties": {"x": {"type": "number", "minLength": 2}}}, "applies only to"),
            (
                {"properties": {"x": {"type": "string"}}, "required": [{"x": 1}]},
                "must be strings",
            ),
            ({"properties": {"x": {"type": "string", "format": ["date"]}}}, "unsupported format"),
            ({"properties": {"x": {"type": "string", "pattern": ["^a"]}}}, "pattern"),
        ],
    )
    def test_rejections(self, document: dict[str, object], match: str) -> None:
        with pytest.raises(SchemaError, match=match):
            schema_from_document(document)


class TestLoadErrors:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SchemaError, match="Cannot read"):
            load_schema(tmp_path / "nope.json")

    def test_bad_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SchemaError, match="Invalid schema document"):
            load_schema(path)

    def test_bad_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("fields: [unclosed", encoding="utf-8")
        with pytest.raises(SchemaError, match="Invalid schema document"):
            load_schema(path)

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "latin.json"
        path.write_bytes(b'{"fields": [{"name": "\xff", "type": "string"}]}')
        with pytest.raises(SchemaError, match="not valid UTF-8"):
            load_schema(path)

    def test_unsupported_suffix(self, tmp_path: Path) -> None:
        path = tmp_path / "schema.toml"
        path.write_text("x = 1", encoding="utf-8")
        with pytest.raises(SchemaError, match="Unsupported schema file type"):
            load_schema(path)

    @pytest.mark.parametrize("document", [[], "text", None])
    def test_document_must_be_mapping(self, document: object) -> None:
        with pytest.raises(SchemaError, match="must be a mapping"):
            schema_from_document(document)

    def test_document_needs_fields_or_properties(self) -> None:
        with pytest.raises(SchemaError, match="needs a 'fields' list"):
            schema_from_document({"name": "x"})
