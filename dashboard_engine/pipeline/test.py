"""Unit tests for the operation pipeline."""

import logging

import pytest

from dashboard_engine.operations import RemoveComponentOperation, parse_operation
from dashboard_engine.schema import get_blank_schema, get_default_schema

from .lib import (
    OperationRejected,
    OperationsRejected,
    PipelineResult,
    ReferenceRejected,
    ResultRejected,
    SchemaRejected,
    process_operations,
    summarize_operation,
)


class TestProcessOperations:
    """Tests for process_operations."""

    @pytest.mark.unit
    def test_happy_path(self, default_schema, sample_operations):
        """A valid batch produces a new schema and a summary."""
        result = process_operations(default_schema, sample_operations)
        assert isinstance(result, PipelineResult)
        assert result.warnings == []
        assert result.schema["layout"]["columns"] == 2
        assert [c["id"] for c in result.schema["components"]][0] == "kpi1"
        assert result.summary["operationCount"] == len(sample_operations)
        assert result.summary["componentsBefore"] == 2
        assert result.summary["componentsAfter"] == 3
        assert default_schema == get_default_schema()

    @pytest.mark.unit
    def test_invalid_input_schema(self):
        """An invalid stored schema is rejected before anything else."""
        document = get_default_schema()
        document["layout"]["columns"] = 0
        with pytest.raises(SchemaRejected) as exc_info:
            process_operations(document, [])
        assert exc_info.value.stage == "schema"
        assert exc_info.value.reason.startswith("Schema validation failed")

    @pytest.mark.unit
    def test_invalid_operations(self, default_schema):
        """Structurally invalid batches are rejected."""
        with pytest.raises(OperationsRejected) as exc_info:
            process_operations(default_schema, [{"op": "update", "path": "layout/gap"}])
        assert exc_info.value.reason.startswith("Operation validation failed")

    @pytest.mark.unit
    def test_dangling_reference(self, default_schema):
        """An unknown id on an identity operation rejects the batch."""
        with pytest.raises(ReferenceRejected) as exc_info:
            process_operations(default_schema, [{"op": "remove_component", "id": "ghost1"}])
        assert exc_info.value.component_id == "ghost1"
        assert exc_info.value.reason == "Operation references unknown component ID: ghost1"
        assert default_schema == get_default_schema()

    @pytest.mark.unit
    def test_invalid_result(self):
        """A batch that breaks the schema is caught by the post-check."""
        operations = [{"op": "update", "path": "layout/padding", "value": {"nested": True}}]
        with pytest.raises(ResultRejected) as exc_info:
            process_operations(get_blank_schema(), operations)
        assert exc_info.value.stage == "result"

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [7, "9 columns"])
    def test_out_of_range_columns_rejected(self, blank_schema, value):
        """Columns above 4 are not clamped; the result check rejects them."""
        operations = [{"op": "update", "path": "layout/columns", "value": value}]
        with pytest.raises(ResultRejected) as exc_info:
            process_operations(blank_schema, operations)
        assert "layout.columns" in exc_info.value.reason

    @pytest.mark.unit
    def test_font_stack_and_clear_round_trip(self, default_schema):
        """Vendor font stacks and cleared component fonts survive later batches."""
        operations = [
            {
                "op": "set_style",
                "path": "theme/fontFamily",
                "value": "-apple-system, BlinkMacSystemFont, sans-serif",
            },
            {"op": "set_style", "path": "components[id=table1]/style/fontFamily", "value": None},
            {
                "op": "set_style",
                "path": "components[id=chart1]/style/fontFamily",
                "value": "微软雅黑, sans-serif",
            },
        ]
        result = process_operations(default_schema, operations)
        assert result.schema["theme"]["fontFamily"].startswith("-apple-system")
        assert result.schema["components"][0]["style"]["fontFamily"] is None
        assert process_operations(result.schema, []).schema == result.schema

    @pytest.mark.unit
    def test_rejections_share_a_base(self, default_schema):
        """Every rejection is an OperationRejected."""
        with pytest.raises(OperationRejected):
            process_operations(default_schema, "not a list")

    @pytest.mark.unit
    def test_soft_skips_still_succeed(self, blank_schema):
        """A fully soft-skipped batch returns the unchanged schema."""
        operations = [
            {"op": "add_component", "component": {"id": "k1", "type": "kpi"}},
            {"op": "remove_component", "id": "k1"},
            {"op": "set_style", "path": "components[id=k1]/style/color", "value": "red"},
        ]
        result = process_operations(blank_schema, operations, warn_on_missing_target=False)
        assert result.schema["components"] == []
        assert result.warnings == []

    @pytest.mark.unit
    def test_summary_logged(self, default_schema, caplog):
        """One info line summarizes each batch."""
        with caplog.at_level(logging.INFO, logger="dashboard_engine.pipeline.lib"):
            process_operations(default_schema, [{"op": "remove_component", "id": "chart1"}])
        assert "components 2 -> 1" in caplog.text

    @pytest.mark.unit
    def test_rejection_logged(self, default_schema, caplog):
        """Rejections are logged as warnings with their reason."""
        with caplog.at_level(logging.WARNING, logger="dashboard_engine.pipeline.lib"):
            with pytest.raises(ReferenceRejected):
                process_operations(default_schema, [{"op": "remove_component", "id": "ghost1"}])
        assert "ghost1" in caplog.text


class TestSummarizeOperation:
    """Tests for summarize_operation."""

    @pytest.mark.unit
    def test_path_operations(self):
        """Path operations report the path but not the value."""
        summary = summarize_operation(
            parse_operation({"op": "set_style", "path": "theme/primaryColor", "value": "#000"})
        )
        assert summary == {"op": "set_style", "path": "theme/primaryColor"}

    @pytest.mark.unit
    def test_add_component(self):
        """add_component reports id and type, not props."""
        summary = summarize_operation(
            parse_operation(
                {"op": "add_component", "component": {"id": "kpi1", "type": "kpi", "props": {"x": 1}}}
            )
        )
        assert summary == {"op": "add_component", "componentId": "kpi1", "componentType": "kpi"}

    @pytest.mark.unit
    def test_identity_operations(self):
        """Identity operations report the id."""
        assert summarize_operation(RemoveComponentOperation(id="t1")) == {
            "op": "remove_component",
            "componentId": "t1",
        }
