"""Unit tests for the developer CLI."""

import json

import pytest

from dashboard_engine.schema import get_default_schema

from .lib import (
    handle_apply_command,
    handle_new_command,
    handle_parse_command,
    handle_validate_command,
)


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(get_default_schema()))
    return path


class TestNewCommand:
    """Tests for `python . new`."""

    @pytest.mark.unit
    def test_prints_default_schema(self, capsys, monkeypatch):
        """Without flags the populated light schema is printed."""
        monkeypatch.delenv("DASHBOARD_DEFAULT_MODE", raising=False)
        assert handle_new_command([]) == 0
        assert json.loads(capsys.readouterr().out) == get_default_schema()

    @pytest.mark.integration
    def test_blank_dark_to_file(self, tmp_path):
        """--mode and --blank select the factory; -o writes a file."""
        output = tmp_path / "out.json"
        assert handle_new_command(["--mode", "dark", "--blank", "-o", str(output)]) == 0
        document = json.loads(output.read_text())
        assert document["theme"]["mode"] == "dark"
        assert document["components"] == []

    @pytest.mark.unit
    def test_mode_from_environment(self, capsys, monkeypatch):
        """DASHBOARD_DEFAULT_MODE sets the default mode."""
        monkeypatch.setenv("DASHBOARD_DEFAULT_MODE", "dark")
        assert handle_new_command(["--blank"]) == 0
        assert json.loads(capsys.readouterr().out)["theme"]["mode"] == "dark"


class TestValidateCommand:
    """Tests for `python . validate`."""

    @pytest.mark.integration
    def test_valid_file(self, schema_file):
        """A valid schema exits 0."""
        assert handle_validate_command([str(schema_file)]) == 0

    @pytest.mark.integration
    def test_invalid_file(self, tmp_path):
        """An invalid schema exits 1."""
        document = get_default_schema()
        document["layout"]["columns"] = 9
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(document))
        assert handle_validate_command([str(path)]) == 1

    @pytest.mark.integration
    def test_missing_file(self, tmp_path):
        """A missing file exits 1."""
        assert handle_validate_command([str(tmp_path / "nope.json")]) == 1


class TestApplyCommand:
    """Tests for `python . apply`."""

    @pytest.mark.integration
    def test_applies_operations(self, schema_file, tmp_path, capsys):
        """Operations in an object are applied and the result printed."""
        ops = tmp_path / "ops.json"
        ops.write_text(json.dumps({"operations": [{"op": "update", "path": "layout/columns", "value": "3 columns"}]}))
        assert handle_apply_command([str(schema_file), str(ops)]) == 0
        assert json.loads(capsys.readouterr().out)["layout"]["columns"] == 3

    @pytest.mark.integration
    def test_raw_model_output(self, schema_file, tmp_path):
        """Fenced model output is accepted and written to -o."""
        ops = tmp_path / "response.txt"
        ops.write_text('```json\n[{"op": "remove_component", "id": "chart1"}]\n```')
        output = tmp_path / "result.json"
        assert handle_apply_command([str(schema_file), str(ops), "--sanitize", "-o", str(output)]) == 0
        assert [c["id"] for c in json.loads(output.read_text())["components"]] == ["table1"]

    @pytest.mark.integration
    def test_rejected_batch(self, schema_file, tmp_path):
        """A dangling reference exits 1."""
        ops = tmp_path / "ops.json"
        ops.write_text(json.dumps([{"op": "remove_component", "id": "ghost1"}]))
        assert handle_apply_command([str(schema_file), str(ops)]) == 1


class TestParseCommand:
    """Tests for `python . parse`."""

    @pytest.mark.integration
    def test_prints_sanitized_operations(self, tmp_path, capsys):
        """Sanitized operations are printed as JSON."""
        response = tmp_path / "response.txt"
        response.write_text('Here: {"operations": [{"op": "remove_component", "id": 5}, {"op": "?"}]}')
        assert handle_parse_command([str(response)]) == 0
        assert json.loads(capsys.readouterr().out) == [{"op": "remove_component", "id": "5"}]

    @pytest.mark.integration
    def test_unparseable(self, tmp_path):
        """Garbage exits 1."""
        response = tmp_path / "response.txt"
        response.write_text("no json here")
        assert handle_parse_command([str(response)]) == 1
