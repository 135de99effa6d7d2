"""Tests for the homekeep command line interface."""

import json
import logging

import pytest

from homekeep.__main__ import main


@pytest.fixture(autouse=True)
def compact_json(monkeypatch):
    monkeypatch.setenv("HOMEKEEP_JSON_INDENT", "0")
    monkeypatch.delenv("HOMEKEEP_SUBTYPE_MODULES", raising=False)


def _output(capsys):
    return json.loads(capsys.readouterr().out)


class TestCatalogCommands:
    """Tests for types, subtypes, schema and questions."""

    @pytest.mark.unit
    def test_types(self, capsys):
        assert main(["types"]) == 0
        assert "appliance" in _output(capsys)

    @pytest.mark.unit
    def test_subtypes_by_type(self, capsys):
        assert main(["subtypes", "--type", "structure"]) == 0
        assert _output(capsys) == [
            {"type": "structure", "subtype": "roof", "label": "Roof"},
            {"type": "structure", "subtype": "foundation", "label": "Foundation"},
        ]

    @pytest.mark.unit
    def test_schema(self, capsys):
        assert main(["schema", "dishwasher"]) == 0
        schema = _output(capsys)
        assert schema["title"] == "DishwasherMaintainableData"
        assert "metadata" in schema["properties"]

    @pytest.mark.unit
    def test_schema_unknown(self, capsys):
        assert main(["schema", "toaster"]) == 1
        assert capsys.readouterr().out == ""

    @pytest.mark.unit
    def test_errors_log_under_package_logger(self, caplog):
        with caplog.at_level(logging.ERROR, logger="homekeep"):
            assert main(["schema", "toaster"]) == 1
        assert [record.name for record in caplog.records] == ["homekeep.cli"]

    @pytest.mark.unit
    def test_questions(self, capsys):
        assert main(["questions", "heat"]) == 0
        fields = [question["field"] for question in _output(capsys)]
        assert fields[0] == "metadata.heatSource"
        assert len(fields) == 7

    @pytest.mark.unit
    def test_no_command(self):
        assert main([]) == 1


class TestValidateCommand:
    """Tests for the validate command."""

    @pytest.mark.unit
    def test_valid_item(self, tmp_path, capsys, dishwasher_data):
        path = tmp_path / "item.json"
        path.write_text(json.dumps(dishwasher_data))
        assert main(["validate", str(path)]) == 0
        assert _output(capsys) == {"success": True, "data": dishwasher_data}

    @pytest.mark.unit
    def test_invalid_item(self, tmp_path, capsys):
        path = tmp_path / "item.json"
        path.write_text(json.dumps({"subtype": "dishwasher"}))
        assert main(["validate", str(path), "--base"]) == 1
        output = _output(capsys)
        assert output["success"] is False
        assert "type" in output["errors"]

    @pytest.mark.unit
    def test_property(self, tmp_path, capsys, property_data):
        path = tmp_path / "house.json"
        path.write_text(json.dumps(property_data))
        assert main(["validate", str(path), "--property"]) == 0

    @pytest.mark.unit
    def test_bad_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        assert main(["validate", str(path)]) == 1

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        assert main(["validate", str(tmp_path / "nope.json")]) == 1


class TestEnvCommand:
    """Tests for the env command."""

    @pytest.mark.unit
    def test_env_category(self, capsys):
        assert main(["env", "--category", "cli"]) == 0
        rows = _output(capsys)
        assert [row["name"] for row in rows] == ["HOMEKEEP_JSON_INDENT"]
        assert rows[0]["value"] == 0
