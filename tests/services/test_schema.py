"""Tests for SchemaService."""

from pathlib import Path

from recordcheck.config.settings import RecordcheckSettings
from recordcheck.services.result import INVALID_SCHEMA
from recordcheck.services.schema import SchemaService
from tests.conftest import write_json


class TestListSchemas:
    def test_builtins(self, settings: RecordcheckSettings) -> None:
        result = SchemaService(settings).list_schemas()
        assert result.ok
        assert result.op == "schema_list"
        assert result.data == {"schemas": ["booking"]}


class TestDescribe:
    def test_default_is_booking(self, settings: RecordcheckSettings) -> None:
        result = SchemaService(settings).describe()
        assert result.ok
        assert result.op == "schema_show"
        assert result.data["name"] == "booking"
        assert result.data["description"] == "restful-booker booking record"
        rows = {row["path"]: row for row in result.data["fields"]}
        assert rows["firstname"] == {
            "path": "firstname",
            "type": "string",
            "required": True,
            "format": "minLength=1",
            "compare": "exact",
        }
        assert rows["totalprice"]["format"] == "minimum=0"
        assert rows["bookingdates"]["format"] is None
        assert rows["bookingdates.checkin"]["format"] == "date"
        assert rows["additionalneeds"]["required"] is False

    def test_file(self, settings: RecordcheckSettings, tmp_path: Path) -> None:
        path = write_json(
            tmp_path / "ref.json",
            {
                "name": "ref",
                "fields": [
                    {"name": "code", "type": "string", "pattern": "^[A-Z]+$", "min_length": 2}
                ],
            },
        )
        result = SchemaService(settings).describe(str(path))
        assert result.ok
        (row,) = result.data["fields"]
        assert row["format"] == "/^[A-Z]+$/, minLength=2"

    def test_unknown(self, settings: RecordcheckSettings) -> None:
        result = SchemaService(settings).describe("invoice")
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == INVALID_SCHEMA
        assert result.error.detail == {"ref": "invoice"}
