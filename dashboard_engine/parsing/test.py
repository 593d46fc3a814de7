"""Unit tests for model response parsing."""

import logging

import pytest

from .lib import (
    OperationParseError,
    decode_response,
    parse_and_sanitize,
    parse_operations_response,
    sanitize_operations,
)

REMOVE = '{"op": "remove_component", "id": "table1"}'


class TestParseOperationsResponse:
    """Tests for decoding operation lists from model text."""

    @pytest.mark.unit
    def test_object_with_operations(self):
        """An object contributes its operations key."""
        content = '{"operations": [' + REMOVE + "]}"
        assert parse_operations_response(content) == [{"op": "remove_component", "id": "table1"}]

    @pytest.mark.unit
    def test_bare_array(self):
        """A top-level array is the operation list."""
        assert len(parse_operations_response("[" + REMOVE + "," + REMOVE + "]")) == 2

    @pytest.mark.unit
    def test_object_without_operations(self):
        """A missing operations key means no operations."""
        assert parse_operations_response('{"message": "nothing to do"}') == []

    @pytest.mark.unit
    def test_markdown_fences(self):
        """Code fences are stripped."""
        content = '```json\n{"operations": [' + REMOVE + "]}\n```"
        assert len(parse_operations_response(content)) == 1

    @pytest.mark.unit
    def test_trailing_commas(self):
        """Trailing commas are removed."""
        content = '{"operations": [' + REMOVE + ",],}"
        assert len(parse_operations_response(content)) == 1

    @pytest.mark.unit
    def test_object_in_prose(self):
        """JSON surrounded by prose is extracted."""
        content = 'Sure! Here you go: {"operations": [' + REMOVE + "]} Hope that helps."
        assert len(parse_operations_response(content)) == 1

    @pytest.mark.unit
    def test_array_in_prose(self):
        """A bare array inside prose is extracted when the object match fails."""
        content = "Operations: [" + REMOVE + ", " + REMOVE + "] done"
        assert len(parse_operations_response(content)) == 2

    @pytest.mark.unit
    def test_repair_disabled(self):
        """Without repair only a direct parse is attempted."""
        content = "```json\n[" + REMOVE + "]\n```"
        with pytest.raises(OperationParseError):
            parse_operations_response(content, repair=False)

    @pytest.mark.unit
    def test_repair_setting_from_environment(self, monkeypatch):
        """DASHBOARD_REPAIR_JSON controls the default."""
        monkeypatch.setenv("DASHBOARD_REPAIR_JSON", "false")
        with pytest.raises(OperationParseError):
            parse_operations_response("```\n[]\n```")

    @pytest.mark.unit
    @pytest.mark.parametrize("content", ["", "   ", "not json at all", "{broken", '"just a string"'])
    def test_unusable_content(self, content):
        """Undecodable or non-list content raises OperationParseError."""
        with pytest.raises(OperationParseError):
            parse_operations_response(content)

    @pytest.mark.unit
    def test_decode_response_direct(self):
        """decode_response returns any JSON value."""
        assert decode_response('{"a": 1}') == {"a": 1}


class TestSanitizeOperations:
    """Tests for candidate sanitization."""

    @pytest.mark.unit
    def test_drops_invalid_candidates(self, caplog):
        """Non-mappings, unknown ops and incomplete ops are dropped with warnings."""
        candidates = [
            "remove table1",
            {"op": "explode"},
            {"op": "set_style", "path": "theme/mode"},
            {"op": "remove_component", "id": "table1"},
        ]
        with caplog.at_level(logging.WARNING):
            operations = sanitize_operations(candidates)
        assert operations == [{"op": "remove_component", "id": "table1"}]
        assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 3

    @pytest.mark.unit
    def test_path_write_normalized(self):
        """Paths are stringified and null values are kept."""
        operations = sanitize_operations([{"op": "update", "path": "filters/search", "value": None}])
        assert operations == [{"op": "update", "path": "filters/search", "value": None}]

    @pytest.mark.unit
    def test_add_component_defaults(self):
        """Components get empty props/style and string ids."""
        operations = sanitize_operations([{"op": "add_component", "component": {"id": 7, "type": "kpi"}}])
        assert operations == [
            {"op": "add_component", "component": {"id": "7", "type": "kpi", "props": {}, "style": {}}}
        ]

    @pytest.mark.unit
    def test_add_component_image_allowed(self):
        """Every component type is accepted, images included."""
        operations = sanitize_operations(
            [{"op": "add_component", "component": {"id": "img1", "type": "image", "props": {"src": "/a.png"}}}]
        )
        assert operations[0]["component"]["type"] == "image"

    @pytest.mark.unit
    def test_unknown_component_type_dropped(self):
        """Types outside the closed set are dropped."""
        operations = sanitize_operations(
            [
                {"op": "add_component", "component": {"id": "g1", "type": "gauge"}},
                {"op": "remove_component", "id": "x"},
            ]
        )
        assert operations == [{"op": "remove_component", "id": "x"}]

    @pytest.mark.unit
    def test_move_component(self):
        """Move keeps numeric coordinates and drops non-numeric sizes."""
        operations = sanitize_operations(
            [{"op": "move_component", "id": "t1", "position": {"x": 1, "y": 2, "width": "wide", "height": 3}}]
        )
        assert operations[0]["position"] == {"x": 1, "y": 2, "height": 3}

    @pytest.mark.unit
    def test_move_requires_numeric_coordinates(self):
        """String coordinates invalidate a move."""
        with pytest.raises(OperationParseError):
            sanitize_operations([{"op": "move_component", "id": "t1", "position": {"x": "1", "y": 2}}])

    @pytest.mark.unit
    def test_reorder_index(self):
        """Integral float indices are accepted; other types are not."""
        operations = sanitize_operations(
            [
                {"op": "reorder_component", "id": "t1", "newIndex": 2.0},
                {"op": "reorder_component", "id": "t2", "newIndex": "0"},
                {"op": "reorder_component", "id": "t3", "newIndex": True},
            ]
        )
        assert operations == [{"op": "reorder_component", "id": "t1", "newIndex": 2}]

    @pytest.mark.unit
    def test_replace_component(self):
        """Replace needs an id and a complete component."""
        operations = sanitize_operations(
            [
                {"op": "replace_component", "id": "chart1", "component": {"id": "pie1", "type": "pie_chart"}},
                {"op": "replace_component", "component": {"id": "pie2", "type": "pie_chart"}},
            ]
        )
        assert [op["component"]["id"] for op in operations] == ["pie1"]

    @pytest.mark.unit
    def test_empty_candidates(self):
        """No candidates means no operations and no error."""
        assert sanitize_operations([]) == []

    @pytest.mark.unit
    def test_none_survive(self):
        """All candidates dropped raises."""
        with pytest.raises(OperationParseError, match="No valid operations"):
            sanitize_operations([{"op": "nope"}])

    @pytest.mark.unit
    def test_parse_and_sanitize(self):
        """The combined helper parses then sanitizes."""
        content = '```json\n{"operations": [{"op": "remove_component", "id": 3}]}\n```'
        assert parse_and_sanitize(content) == [{"op": "remove_component", "id": "3"}]
