"""Unit tests for the operation applicator."""

import pytest

from dashboard_engine.schema import (
    MAX_COMPONENTS,
    REQUIRED_THEME_FIELDS,
    DesignSchema,
    get_blank_schema,
    get_dark_default_schema,
    get_default_schema,
)

from .lib import ApplyResult, apply_operations


def _ids(document):
    return [component["id"] for component in document["components"]]


def _text(component_id):
    return {"id": component_id, "type": "text", "props": {"content": component_id}}


def _schema_with(*ids):
    document = get_blank_schema()
    document["components"] = [_text(component_id) for component_id in ids]
    return document


class TestApplyOperations:
    """Tests for batch application semantics."""

    @pytest.mark.unit
    def test_empty_batch_is_identity(self):
        """An empty operation list returns a deep-equal schema."""
        for factory in (get_default_schema, get_dark_default_schema, get_blank_schema):
            document = factory()
            result = apply_operations(document, [])
            assert result.schema == document
            assert result.schema is not document
            assert result.warnings == []
            assert result.fully_applied

    @pytest.mark.unit
    def test_input_not_mutated(self):
        """The caller's schema is never changed."""
        document = get_default_schema()
        apply_operations(
            document,
            [
                {"op": "remove_component", "id": "table1"},
                {"op": "update", "path": "layout/columns", "value": 2},
            ],
        )
        assert document == get_default_schema()

    @pytest.mark.unit
    def test_accepts_typed_schema(self):
        """A DesignSchema model is accepted in place of a document."""
        model = DesignSchema.from_document(get_default_schema())
        result = apply_operations(model, [{"op": "remove_component", "id": "chart1"}])
        assert _ids(result.schema) == ["table1"]

    @pytest.mark.unit
    def test_order_sensitivity(self):
        """Reorder-then-remove and remove-then-reorder differ."""
        reorder = {"op": "reorder_component", "id": "A", "newIndex": 2}
        remove = {"op": "remove_component", "id": "B"}

        forward = apply_operations(_schema_with("A", "B", "C"), [reorder, remove])
        backward = apply_operations(_schema_with("A", "B", "C"), [remove, reorder])

        assert _ids(forward.schema) == ["C", "A"]
        assert _ids(backward.schema) == ["A", "C"]

    @pytest.mark.unit
    def test_component_cap(self):
        """Adding to a full schema warns and keeps the count at the cap."""
        document = _schema_with(*(f"t{i}" for i in range(MAX_COMPONENTS)))
        result = apply_operations(
            document,
            [{"op": "add_component", "component": {"id": "kpi1", "type": "kpi"}}],
        )
        assert len(result.schema["components"]) == MAX_COMPONENTS
        assert len(result.warnings) == 1
        assert "Maximum 30 components" in result.warnings[0]

    @pytest.mark.unit
    def test_cap_holds_across_many_adds(self):
        """A batch of adds never grows past the cap."""
        operations = [
            {"op": "add_component", "component": _text(f"t{i}")}
            for i in range(MAX_COMPONENTS + 5)
        ]
        result = apply_operations(get_blank_schema(), operations)
        assert len(result.schema["components"]) == MAX_COMPONENTS
        assert len(result.warnings) == 5

    @pytest.mark.unit
    def test_unique_ids(self):
        """Duplicate adds and replacements never produce repeated ids."""
        result = apply_operations(
            get_default_schema(),
            [
                {"op": "add_component", "component": _text("table1")},
                {"op": "add_component", "component": _text("t1")},
                {"op": "add_component", "component": _text("t1")},
                {"op": "replace_component", "id": "chart1", "component": _text("t1")},
            ],
        )
        ids = _ids(result.schema)
        assert len(ids) == len(set(ids))
        assert ids == ["table1", "chart1", "t1"]
        assert len(result.warnings) == 3

    @pytest.mark.unit
    def test_theme_required_fields_survive(self):
        """Theme writes never leave a required field missing or empty."""
        result = apply_operations(
            get_default_schema(),
            [
                {"op": "set_style", "path": "theme/primaryColor", "value": ""},
                {"op": "update", "path": "theme/fontSize", "value": None},
                {"op": "update", "path": "theme", "value": {"mode": "dark"}},
            ],
        )
        theme = result.schema["theme"]
        for key in REQUIRED_THEME_FIELDS:
            assert theme[key]
        assert theme["mode"] == "dark"
        assert theme["primaryColor"] == "#3b82f6"

    @pytest.mark.unit
    def test_add_then_style(self):
        """A component added in the batch can be styled later in the batch."""
        result = apply_operations(
            get_blank_schema(),
            [
                {
                    "op": "add_component",
                    "component": {
                        "id": "kpi1",
                        "type": "kpi",
                        "props": {
                            "dataSource": "/api/data",
                            "calculation": "count",
                            "label": "Total Items",
                        },
                    },
                },
                {"op": "set_style", "path": "components[id=kpi1]/style/color", "value": "#ff0000"},
            ],
        )
        assert _ids(result.schema) == ["kpi1"]
        assert result.schema["components"][0]["style"]["color"] == "#ff0000"
        assert result.warnings == []

    @pytest.mark.unit
    def test_reorder_to_top(self):
        """table1 moves ahead of pie1."""
        document = get_blank_schema()
        document["components"] = [
            {"id": "pie1", "type": "pie_chart", "props": {}},
            {"id": "table1", "type": "table", "props": {}},
        ]
        result = apply_operations(
            document, [{"op": "reorder_component", "id": "table1", "newIndex": 0}]
        )
        assert _ids(result.schema) == ["table1", "pie1"]

    @pytest.mark.unit
    def test_style_after_remove_is_silent(self):
        """Styling a component removed earlier in the batch is a silent no-op."""
        result = apply_operations(
            get_blank_schema(),
            [
                {"op": "add_component", "component": {"id": "k1", "type": "kpi"}},
                {"op": "remove_component", "id": "k1"},
                {"op": "set_style", "path": "components[id=k1]/style/color", "value": "red"},
            ],
            warn_on_missing_target=False,
        )
        assert result.schema["components"] == []
        assert result.warnings == []

    @pytest.mark.unit
    def test_missing_target_warning_opt_in(self):
        """With warn_on_missing_target the dangling style edit is reported."""
        result = apply_operations(
            get_blank_schema(),
            [{"op": "set_style", "path": "components[id=k1]/style/color", "value": "red"}],
            warn_on_missing_target=True,
        )
        assert result.schema == get_blank_schema()
        assert len(result.warnings) == 1
        assert "k1" in result.warnings[0]

    @pytest.mark.unit
    def test_missing_target_warning_from_environment(self, monkeypatch):
        """The default comes from DASHBOARD_WARN_ON_MISSING_TARGET."""
        monkeypatch.setenv("DASHBOARD_WARN_ON_MISSING_TARGET", "true")
        result = apply_operations(
            get_blank_schema(),
            [{"op": "set_style", "path": "components[id=k1]/style/color", "value": "red"}],
        )
        assert len(result.warnings) == 1

    @pytest.mark.unit
    def test_numeric_coercion(self):
        """A "3 columns" string becomes the integer 3."""
        result = apply_operations(
            get_default_schema(),
            [{"op": "update", "path": "layout/columns", "value": "3 columns"}],
        )
        assert result.schema["layout"]["columns"] == 3

    @pytest.mark.unit
    def test_non_numeric_value_skipped(self):
        """A non-numeric gap is skipped with a warning."""
        result = apply_operations(
            get_default_schema(),
            [{"op": "update", "path": "layout/gap", "value": "roomy"}],
        )
        assert result.schema["layout"]["gap"] == 16
        assert "non-numeric" in result.warnings[0]

    @pytest.mark.unit
    def test_malformed_operation_becomes_warning(self):
        """Unparseable operations are reported and the batch continues."""
        result = apply_operations(
            get_default_schema(),
            [
                {"op": "explode"},
                {"op": "update", "path": "components[id=]/style", "value": 1},
                {"op": "remove_component", "id": "chart1"},
            ],
        )
        assert _ids(result.schema) == ["table1"]
        assert len(result.warnings) == 2
        assert result.warnings[0].startswith("Failed to apply operation explode:")
        assert result.warnings[1].startswith("Failed to apply operation update:")

    @pytest.mark.unit
    def test_failed_operation_leaves_no_partial_change(self):
        """An operation that raises midway is rolled back."""
        result = apply_operations(
            get_default_schema(),
            [{"op": "update", "path": "theme", "value": "dark"}],
        )
        assert result.schema == get_default_schema()
        assert len(result.warnings) == 1

    @pytest.mark.unit
    def test_result_type(self):
        """apply_operations returns an ApplyResult."""
        assert isinstance(apply_operations(get_blank_schema(), []), ApplyResult)
