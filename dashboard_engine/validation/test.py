"""Unit tests for validation module."""

import pytest

from dashboard_engine.schema import (
    MAX_COMPONENTS,
    DesignSchema,
    get_blank_schema,
    get_dark_blank_schema,
    get_dark_default_schema,
    get_default_schema,
)
from dashboard_engine.validation import (
    ValidationResult,
    validate_component_ids,
    validate_operations,
    validate_schema,
)


class TestValidateSchema:
    """Tests for validate_schema function."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "factory",
        [get_default_schema, get_dark_default_schema, get_blank_schema, get_dark_blank_schema],
    )
    def test_factories_validate(self, factory):
        """Every named starting state is valid."""
        result = validate_schema(factory())
        assert result.valid
        assert result.error is None
        assert result

    @pytest.mark.unit
    def test_typed_schema_accepted(self):
        """A DesignSchema model validates like its document."""
        assert validate_schema(DesignSchema.from_document(get_default_schema()))

    @pytest.mark.unit
    def test_missing_theme_field(self):
        """Missing required theme fields are reported by path."""
        document = get_default_schema()
        del document["theme"]["mode"]
        result = validate_schema(document)
        assert not result
        assert result.error.startswith("Schema validation failed: ")
        assert "theme.mode" in result.error
        assert result.errors[0].path == "theme.mode"

    @pytest.mark.unit
    def test_columns_out_of_range(self):
        """layout.columns must be in [1, 4]."""
        document = get_default_schema()
        document["layout"]["columns"] = 5
        result = validate_schema(document)
        assert not result.valid
        assert any(issue.path == "layout.columns" for issue in result.errors)

    @pytest.mark.unit
    def test_too_many_components(self):
        """More than 30 components is invalid."""
        document = get_blank_schema()
        document["components"] = [
            {"id": f"t{i}", "type": "text", "props": {}} for i in range(MAX_COMPONENTS + 1)
        ]
        assert not validate_schema(document)

    @pytest.mark.unit
    def test_unknown_component_type(self):
        """Component types are a closed set."""
        document = get_blank_schema()
        document["components"] = [{"id": "g1", "type": "gauge", "props": {}}]
        result = validate_schema(document)
        assert not result
        assert result.errors[0].path.startswith("components.0.type")

    @pytest.mark.unit
    def test_image_without_src(self):
        """Image components need a non-empty src."""
        document = get_blank_schema()
        document["components"] = [{"id": "img1", "type": "image", "props": {"src": ""}}]
        result = validate_schema(document)
        assert not result
        assert "src" in result.error

    @pytest.mark.unit
    def test_invalid_theme_font(self):
        """The theme font family must be a recognizable font name."""
        document = get_default_schema()
        document["theme"]["fontFamily"] = "x; background: url(evil)"
        result = validate_schema(document)
        assert not result
        assert result.errors[0].error_type == "invalid_font"
        assert result.errors[0].path == "theme.fontFamily"

    @pytest.mark.unit
    def test_font_list_checked_by_primary_family(self):
        """Quoted family lists are accepted by their first family."""
        document = get_default_schema()
        document["theme"]["fontFamily"] = '"Open Sans", Arial, sans-serif'
        document["components"][0]["style"]["fontFamily"] = "Roboto Mono, monospace"
        assert validate_schema(document)

    @pytest.mark.unit
    def test_invalid_component_font(self):
        """Component font families are checked too."""
        document = get_default_schema()
        document["components"][1]["style"]["fontFamily"] = "{bad}"
        result = validate_schema(document)
        assert not result
        assert result.errors[0].path == "components.1.style.fontFamily"

    @pytest.mark.unit
    def test_empty_component_font_allowed(self):
        """A component with an empty fontFamily inherits the theme font."""
        document = get_default_schema()
        document["components"][0]["style"]["fontFamily"] = ""
        document["components"][1]["style"]["fontFamily"] = None
        assert validate_schema(document)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "family",
        ["-apple-system, BlinkMacSystemFont, sans-serif", "微软雅黑, sans-serif"],
    )
    def test_vendor_and_cjk_theme_fonts(self, family):
        """Vendor-prefixed and non-Latin theme font stacks are valid."""
        document = get_default_schema()
        document["theme"]["fontFamily"] = family
        assert validate_schema(document)

    @pytest.mark.unit
    def test_empty_theme_font_rejected(self):
        """The required theme font may not be blank."""
        document = get_default_schema()
        document["theme"]["fontFamily"] = "  "
        result = validate_schema(document)
        assert not result
        assert result.errors[0].path == "theme.fontFamily"

    @pytest.mark.unit
    def test_duplicate_ids(self):
        """Duplicate component ids are detected."""
        document = get_default_schema()
        document["components"][1]["id"] = "table1"
        result = validate_schema(document)
        assert not result
        assert result.errors[0].error_type == "duplicate_id"
        assert "table1" in result.errors[0].message

    @pytest.mark.unit
    def test_not_an_object(self):
        """Non-object input fails without raising."""
        result = validate_schema(["not", "a", "schema"])
        assert not result
        assert result.error.startswith("Schema validation failed")

    @pytest.mark.unit
    def test_result_is_a_validation_result(self):
        """Validators return ValidationResult instances."""
        assert isinstance(validate_schema({}), ValidationResult)


class TestValidateOperations:
    """Tests for validate_operations function."""

    @pytest.mark.unit
    def test_valid_batch(self, sample_operations):
        """A well-formed mixed batch passes."""
        assert validate_operations(sample_operations)

    @pytest.mark.unit
    def test_empty_batch(self):
        """An empty list is a valid batch."""
        assert validate_operations([])

    @pytest.mark.unit
    def test_not_a_list(self):
        """The batch must be a list."""
        result = validate_operations({"op": "update", "path": "layout/gap", "value": 8})
        assert not result
        assert result.error == "Operation validation failed: Operations must be a list"

    @pytest.mark.unit
    def test_unknown_kind(self):
        """Unknown op tags fail with the item index in the path."""
        result = validate_operations([{"op": "update", "path": "a", "value": 1}, {"op": "teleport"}])
        assert not result
        assert result.error.startswith("Operation validation failed: 1")

    @pytest.mark.unit
    def test_wrong_field_type(self):
        """Fields are type-checked."""
        result = validate_operations([{"op": "reorder_component", "id": "a", "newIndex": "first"}])
        assert not result
        assert result.errors[0].path.startswith("0.reorder_component.newIndex")

    @pytest.mark.unit
    def test_embedded_component_rules(self):
        """add_component payloads follow the component rules."""
        result = validate_operations(
            [{"op": "add_component", "component": {"id": "img1", "type": "image", "props": {}}}]
        )
        assert not result
        assert "src" in result.error

    @pytest.mark.unit
    def test_embedded_component_font(self):
        """replace_component payload fonts are checked."""
        result = validate_operations(
            [
                {
                    "op": "replace_component",
                    "id": "table1",
                    "component": {"id": "t1", "type": "text", "style": {"fontFamily": "a;b"}},
                }
            ]
        )
        assert not result
        assert result.errors[0].path == "0.component.style.fontFamily"

    @pytest.mark.unit
    def test_font_path_write(self):
        """set_style on a fontFamily path must carry a valid font."""
        good = [{"op": "set_style", "path": "theme/fontFamily", "value": "Inter, sans-serif"}]
        bad = [{"op": "set_style", "path": "components[id=t1]/style/fontFamily", "value": "<script>"}]
        assert validate_operations(good)
        result = validate_operations(bad)
        assert not result
        assert result.errors[0].path == "0.value"

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [None, ""])
    def test_font_clear_allowed(self, value):
        """Writing null or an empty string clears a component font."""
        operations = [
            {"op": "set_style", "path": "components[id=table1]/style/fontFamily", "value": value}
        ]
        assert validate_operations(operations)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "family",
        ["-apple-system, BlinkMacSystemFont, sans-serif", "微软雅黑, sans-serif"],
    )
    def test_vendor_and_cjk_font_writes(self, family):
        """set_style accepts vendor-prefixed and non-Latin font stacks."""
        operations = [{"op": "set_style", "path": "theme/fontFamily", "value": family}]
        assert validate_operations(operations)


class TestValidateComponentIds:
    """Tests for the reference validator."""

    @pytest.mark.unit
    def test_dangling_remove_rejected(self):
        """Removing an id that never exists fails the whole batch."""
        document = get_default_schema()
        result = validate_component_ids([{"op": "remove_component", "id": "ghost1"}], document)
        assert not result
        assert result.error == "Operation references unknown component ID: ghost1"
        assert document == get_default_schema()

    @pytest.mark.unit
    def test_existing_ids_pass(self):
        """Identity operations on existing components pass."""
        operations = [
            {"op": "move_component", "id": "table1", "position": {"x": 0, "y": 1}},
            {"op": "reorder_component", "id": "chart1", "newIndex": 0},
        ]
        assert validate_component_ids(operations, get_default_schema())

    @pytest.mark.unit
    def test_ids_added_in_batch_pass(self):
        """Ids introduced by add_component in the batch count as known."""
        operations = [
            {"op": "add_component", "component": {"id": "kpi1", "type": "kpi"}},
            {"op": "reorder_component", "id": "kpi1", "newIndex": 0},
        ]
        assert validate_component_ids(operations, get_blank_schema())

    @pytest.mark.unit
    def test_selector_paths_exempt(self):
        """Style edits on missing components are not reference errors."""
        operations = [{"op": "set_style", "path": "components[id=ghost]/style/color", "value": "red"}]
        assert validate_component_ids(operations, get_blank_schema())

    @pytest.mark.unit
    def test_all_dangling_ids_listed(self):
        """Every dangling reference is reported; the summary names the first."""
        operations = [
            {"op": "remove_component", "id": "a"},
            {"op": "replace_component", "id": "b", "component": {"id": "c", "type": "text"}},
        ]
        result = validate_component_ids(operations, DesignSchema.from_document(get_blank_schema()))
        assert [issue.path for issue in result.errors] == ["0.id", "1.id"]
        assert result.error.endswith(": a")

    @pytest.mark.unit
    def test_unparseable_operation_fails_without_raising(self):
        """An operation of unknown kind yields a failed result."""
        result = validate_component_ids([{"op": "bogus"}], get_blank_schema())
        assert not result
        assert result.error.startswith("Operation validation failed")
        assert result.errors[0].path.startswith("0")

    @pytest.mark.unit
    def test_unparseable_operation_reported_before_references(self):
        """Parse failures win over dangling references in the same batch."""
        operations = [{"op": "remove_component", "id": "ghost"}, {"op": "move_component"}]
        result = validate_component_ids(operations, get_blank_schema())
        assert not result
        assert all(issue.path.startswith("1") for issue in result.errors)
