"""Unit tests for the operation algebra."""

import pytest
from pydantic import ValidationError

from dashboard_engine.path import PathError
from dashboard_engine.schema import MAX_COMPONENTS, get_blank_schema, get_default_schema

from .lib import (
    AddComponentOperation,
    MoveComponentOperation,
    OperationKind,
    OperationSkipped,
    RemoveComponentOperation,
    ReorderComponentOperation,
    ReplaceComponentOperation,
    SetStyleOperation,
    UpdateOperation,
    apply_operation,
    coerce_numeric,
    export_operation_schema,
    operation_to_dict,
    parse_operation,
    referenced_component_id,
)


def _ids(document):
    return [component["id"] for component in document["components"]]


def _kpi(component_id="kpi1"):
    return {
        "id": component_id,
        "type": "kpi",
        "props": {"dataSource": "/api/data", "calculation": "count", "label": "Total Items"},
    }


class TestParseOperation:
    """Tests for parsing loosely typed operations."""

    @pytest.mark.unit
    def test_discriminates_on_op(self):
        """Each op tag selects its model."""
        op = parse_operation({"op": "reorder_component", "id": "table1", "newIndex": 0})
        assert isinstance(op, ReorderComponentOperation)
        assert op.new_index == 0

    @pytest.mark.unit
    def test_unknown_op_rejected(self):
        """Unknown op tags are rejected."""
        with pytest.raises(ValidationError):
            parse_operation({"op": "delete_everything"})

    @pytest.mark.unit
    def test_missing_value_rejected(self):
        """set_style requires a value key (null is allowed)."""
        with pytest.raises(ValidationError):
            parse_operation({"op": "set_style", "path": "theme/mode"})
        assert parse_operation({"op": "set_style", "path": "x/y", "value": None}).value is None

    @pytest.mark.unit
    def test_wrong_field_types_rejected(self):
        """Field types are checked strictly."""
        with pytest.raises(ValidationError):
            parse_operation({"op": "reorder_component", "id": "a", "newIndex": "2"})
        with pytest.raises(ValidationError):
            parse_operation({"op": "remove_component", "id": 7})
        with pytest.raises(ValidationError):
            parse_operation({"op": "move_component", "id": "a", "position": {"x": "1", "y": 0}})

    @pytest.mark.unit
    def test_embedded_image_requires_src(self):
        """add_component validates its component, including image src."""
        with pytest.raises(ValidationError, match="src"):
            parse_operation(
                {"op": "add_component", "component": {"id": "img1", "type": "image", "props": {}}}
            )

    @pytest.mark.unit
    def test_models_pass_through(self):
        """Already parsed operations are returned unchanged."""
        op = RemoveComponentOperation(id="table1")
        assert parse_operation(op) is op

    @pytest.mark.unit
    def test_operation_to_dict(self):
        """Operations dump to camelCase JSON without null fields."""
        op = parse_operation({"op": "add_component", "component": _kpi()})
        data = operation_to_dict(op)
        assert data["op"] == "add_component"
        assert "position" not in data["component"]
        assert operation_to_dict(ReorderComponentOperation(id="a", new_index=1)) == {
            "op": "reorder_component",
            "id": "a",
            "newIndex": 1,
        }
        assert operation_to_dict(UpdateOperation(path="filters/search", value=None)) == {
            "op": "update",
            "path": "filters/search",
            "value": None,
        }

    @pytest.mark.unit
    def test_referenced_component_id(self):
        """Only identity operations report a referenced id."""
        assert referenced_component_id(RemoveComponentOperation(id="a")) == "a"
        assert referenced_component_id(SetStyleOperation(path="components[id=a]/style/color", value="red")) is None

    @pytest.mark.unit
    def test_export_schema(self):
        """The union schema names every operation kind."""
        schema = export_operation_schema()
        text = str(schema)
        for kind in OperationKind:
            assert kind.value in text


class TestCoerceNumeric:
    """Tests for numeric coercion of layout and filter values."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [("3 columns", 3), ("2", 2), ("2.5", 3), ("0", 1), ("-4", 1), ("9 columns", 9)],
    )
    def test_columns_from_strings(self, value, expected):
        """Column strings are rounded half up and raised to at least 1."""
        assert coerce_numeric("layout/columns", value, 1) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [3, 7, -4, 12.5, 0])
    def test_numbers_pass_through(self, value):
        """Numbers are stored as given; range checks belong to validation."""
        result = coerce_numeric("layout/gap", value, 0)
        assert result == value
        assert type(result) is type(value)

    @pytest.mark.unit
    def test_gap_extracts_first_number(self):
        """Units and trailing text are ignored."""
        assert coerce_numeric("layout/gap", "24px", 0) == 24
        assert coerce_numeric("layout/gap", "-5", 0) == 0

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["wide", None, True, [3], float("nan"), float("inf")])
    def test_non_numeric_skipped(self, value):
        """Values without a number skip the operation."""
        with pytest.raises(OperationSkipped, match="non-numeric"):
            coerce_numeric("filters/limit", value, 0)


class TestSetValue:
    """Tests for set_style and update."""

    @pytest.mark.unit
    def test_update_columns_coerced(self):
        """update layout/columns "3 columns" stores the integer 3."""
        document = get_default_schema()
        apply_operation(document, UpdateOperation(path="layout/columns", value="3 columns"))
        assert document["layout"]["columns"] == 3

    @pytest.mark.unit
    def test_numeric_gap_stored_as_given(self):
        """A fractional gap is not rounded."""
        document = get_default_schema()
        apply_operation(document, UpdateOperation(path="layout/gap", value=12.5))
        assert document["layout"]["gap"] == 12.5

    @pytest.mark.unit
    def test_filters_limit_created(self):
        """Numeric filter writes create the filters object if needed."""
        document = get_blank_schema()
        del document["filters"]
        apply_operation(document, UpdateOperation(path="filters/limit", value="top 10"))
        assert document["filters"] == {"limit": 10}

    @pytest.mark.unit
    def test_non_numeric_columns_skipped(self):
        """A non-numeric columns value leaves the layout untouched."""
        document = get_default_schema()
        with pytest.raises(OperationSkipped):
            apply_operation(document, UpdateOperation(path="layout/columns", value="wide"))
        assert document["layout"]["columns"] == 1

    @pytest.mark.unit
    def test_component_style(self):
        """set_style writes through a component selector."""
        document = get_default_schema()
        apply_operation(
            document,
            SetStyleOperation(path="components[id=table1]/style/color", value="#ff0000"),
        )
        assert document["components"][0]["style"]["color"] == "#ff0000"

    @pytest.mark.unit
    def test_props_update_not_coerced(self):
        """Only the listed layout/filter paths are coerced."""
        document = get_default_schema()
        apply_operation(
            document,
            UpdateOperation(path="components[id=table1]/props/dataColumns", value="2 columns"),
        )
        assert document["components"][0]["props"]["dataColumns"] == "2 columns"

    @pytest.mark.unit
    def test_selector_miss_is_silent(self):
        """A missing component makes set_style a no-op."""
        document = get_default_schema()
        apply_operation(document, SetStyleOperation(path="components[id=ghost]/style/color", value="red"))
        assert document == get_default_schema()

    @pytest.mark.unit
    def test_selector_miss_can_warn(self):
        """With warn_on_missing_target the miss becomes a skip."""
        document = get_default_schema()
        with pytest.raises(OperationSkipped, match="ghost"):
            apply_operation(
                document,
                SetStyleOperation(path="components[id=ghost]/style/color", value="red"),
                warn_on_missing_target=True,
            )

    @pytest.mark.unit
    def test_theme_required_fields_restored(self):
        """Clearing a required theme field restores it from the baseline."""
        document = get_default_schema()
        baseline = get_default_schema()
        baseline["theme"]["fontFamily"] = "Inter, sans-serif"
        apply_operation(document, UpdateOperation(path="theme/fontFamily", value=""), baseline)
        assert document["theme"]["fontFamily"] == "Inter, sans-serif"

    @pytest.mark.unit
    def test_theme_replaced_wholesale(self):
        """Replacing the theme object keeps required fields present."""
        document = get_default_schema()
        apply_operation(document, UpdateOperation(path="theme", value={"mode": "dark"}))
        theme = document["theme"]
        assert theme["mode"] == "dark"
        assert theme["primaryColor"] == "#3b82f6"
        assert theme["fontSize"] == "16px"
        assert theme["fontFamily"] == "system-ui, sans-serif"

    @pytest.mark.unit
    def test_theme_defaults_when_baseline_lacks_fields(self):
        """Built-in defaults fill fields missing from the baseline too."""
        document = {"theme": {}}
        apply_operation(document, SetStyleOperation(path="theme/accentColor", value="#abc"), {})
        assert document["theme"]["mode"] == "light"
        assert document["theme"]["accentColor"] == "#abc"

    @pytest.mark.unit
    def test_theme_set_to_scalar_raises(self):
        """A theme that is not an object cannot be repaired."""
        document = get_default_schema()
        with pytest.raises(TypeError):
            apply_operation(document, UpdateOperation(path="theme", value="dark"))

    @pytest.mark.unit
    def test_malformed_path_raises(self):
        """Malformed paths propagate PathError."""
        with pytest.raises(PathError):
            apply_operation(get_default_schema(), UpdateOperation(path="theme/mode/x", value=1))


class TestAddComponent:
    """Tests for add_component."""

    @pytest.mark.unit
    def test_appends(self):
        """New components go to the end of the sequence."""
        document = get_default_schema()
        apply_operation(document, parse_operation({"op": "add_component", "component": _kpi()}))
        assert _ids(document) == ["table1", "chart1", "kpi1"]
        assert document["components"][-1]["type"] == "kpi"
        assert document["components"][-1]["style"] == {}

    @pytest.mark.unit
    def test_duplicate_id_skipped(self):
        """Adding an existing id is skipped with a duplicate warning."""
        document = get_default_schema()
        op = parse_operation({"op": "add_component", "component": {"id": "table1", "type": "text"}})
        with pytest.raises(OperationSkipped, match="already exists"):
            apply_operation(document, op)
        assert _ids(document) == ["table1", "chart1"]

    @pytest.mark.unit
    def test_cap_enforced(self):
        """A full schema rejects further components."""
        document = get_blank_schema()
        document["components"] = [
            {"id": f"t{i}", "type": "text", "props": {}} for i in range(MAX_COMPONENTS)
        ]
        op = parse_operation({"op": "add_component", "component": _kpi()})
        with pytest.raises(OperationSkipped, match="Maximum 30 components"):
            apply_operation(document, op)
        assert len(document["components"]) == MAX_COMPONENTS

    @pytest.mark.unit
    def test_missing_components_list_created(self):
        """A document without components gets a list."""
        document = {"theme": {}}
        apply_operation(document, AddComponentOperation.model_validate({"component": _kpi()}))
        assert _ids(document) == ["kpi1"]


class TestRemoveComponent:
    """Tests for remove_component."""

    @pytest.mark.unit
    def test_removes(self):
        """The named component disappears."""
        document = get_default_schema()
        apply_operation(document, RemoveComponentOperation(id="table1"))
        assert _ids(document) == ["chart1"]

    @pytest.mark.unit
    def test_missing_is_noop(self):
        """Removing an unknown id changes nothing."""
        document = get_default_schema()
        apply_operation(document, RemoveComponentOperation(id="ghost"))
        assert document == get_default_schema()


class TestMoveComponent:
    """Tests for move_component."""

    @pytest.mark.unit
    def test_defaults_size_to_one(self):
        """Without previous position width and height default to 1."""
        document = get_default_schema()
        op = parse_operation({"op": "move_component", "id": "chart1", "position": {"x": 2, "y": 0}})
        apply_operation(document, op)
        assert document["components"][1]["position"] == {"x": 2, "y": 0, "width": 1, "height": 1}

    @pytest.mark.unit
    def test_keeps_previous_size(self):
        """Previous width and height carry over when not given."""
        document = get_default_schema()
        document["components"][0]["position"] = {"x": 0, "y": 0, "width": 2, "height": 3}
        op = parse_operation(
            {"op": "move_component", "id": "table1", "position": {"x": 1, "y": 1, "height": 4}}
        )
        apply_operation(document, op)
        assert document["components"][0]["position"] == {"x": 1, "y": 1, "width": 2, "height": 4}

    @pytest.mark.unit
    def test_missing_is_noop(self):
        """Moving an unknown id changes nothing."""
        document = get_default_schema()
        op = MoveComponentOperation.model_validate({"id": "ghost", "position": {"x": 1, "y": 1}})
        apply_operation(document, op)
        assert document == get_default_schema()


class TestReplaceComponent:
    """Tests for replace_component."""

    @pytest.mark.unit
    def test_replaces_in_place(self):
        """The replacement keeps the sequence index and may change type."""
        document = get_default_schema()
        op = parse_operation(
            {
                "op": "replace_component",
                "id": "chart1",
                "component": {"id": "pie1", "type": "pie_chart", "props": {"dataSource": "/api/data"}},
            }
        )
        apply_operation(document, op)
        assert _ids(document) == ["table1", "pie1"]
        assert document["components"][1]["type"] == "pie_chart"

    @pytest.mark.unit
    def test_replacement_cannot_duplicate_id(self):
        """A replacement reusing another component's id is skipped."""
        document = get_default_schema()
        op = ReplaceComponentOperation.model_validate(
            {"id": "chart1", "component": {"id": "table1", "type": "text"}}
        )
        with pytest.raises(OperationSkipped, match="already exists"):
            apply_operation(document, op)
        assert _ids(document) == ["table1", "chart1"]

    @pytest.mark.unit
    def test_missing_is_noop(self):
        """Replacing an unknown id changes nothing."""
        document = get_default_schema()
        op = ReplaceComponentOperation.model_validate(
            {"id": "ghost", "component": {"id": "ghost", "type": "text"}}
        )
        apply_operation(document, op)
        assert document == get_default_schema()


class TestReorderComponent:
    """Tests for reorder_component."""

    @pytest.mark.unit
    def test_reorder_to_top(self):
        """Moving the last component to index 0."""
        document = get_default_schema()
        apply_operation(document, ReorderComponentOperation(id="chart1", new_index=0))
        assert _ids(document) == ["chart1", "table1"]

    @pytest.mark.unit
    @pytest.mark.parametrize("new_index", [-1, 2, 99])
    def test_out_of_range_is_noop(self, new_index):
        """Indices outside [0, length) leave the order unchanged."""
        document = get_default_schema()
        apply_operation(document, ReorderComponentOperation(id="table1", new_index=new_index))
        assert _ids(document) == ["table1", "chart1"]

    @pytest.mark.unit
    def test_missing_is_noop(self):
        """Reordering an unknown id changes nothing."""
        document = get_default_schema()
        apply_operation(document, ReorderComponentOperation(id="ghost", new_index=0))
        assert _ids(document) == ["table1", "chart1"]
