"""Unit tests for the Schema module."""

import pytest
from pydantic import ValidationError

from dashboard_engine.schema import (
    COMPONENT_REGISTRY,
    MAX_COMPONENTS,
    REQUIRED_THEME_FIELDS,
    STYLE_KEYS,
    Component,
    ComponentCategory,
    ComponentType,
    DesignSchema,
    Layout,
    build_schema,
    export_component_enum_schema,
    export_json_schema,
    get_blank_schema,
    get_component_meta,
    get_components_by_category,
    get_dark_blank_schema,
    get_dark_default_schema,
    get_default_schema,
    is_chart_type,
    is_known_style_key,
    resolve_alias,
)


class TestComponentRegistry:
    """Tests for COMPONENT_REGISTRY completeness."""

    @pytest.mark.unit
    def test_all_component_types_registered(self):
        """Every ComponentType has metadata in registry."""
        for ct in ComponentType:
            assert ct in COMPONENT_REGISTRY, f"Missing metadata for {ct}"

    @pytest.mark.unit
    def test_registry_has_13_entries(self):
        """Registry contains exactly 13 component definitions."""
        assert len(COMPONENT_REGISTRY) == 13

    @pytest.mark.unit
    def test_all_entries_have_descriptions(self):
        """Every component has a non-empty description."""
        for ct, meta in COMPONENT_REGISTRY.items():
            assert len(meta.description) > 10, f"{ct} description too short"

    @pytest.mark.unit
    def test_only_image_requires_props(self):
        """Image is the only type with enforced props."""
        required = {ct for ct, meta in COMPONENT_REGISTRY.items() if meta.required_props}
        assert required == {ComponentType.IMAGE}
        assert get_component_meta("image").required_props == ("src",)

    @pytest.mark.unit
    def test_chart_category(self):
        """Generic chart and all named variants are charts."""
        charts = get_components_by_category(ComponentCategory.CHART)
        assert ComponentType.CHART in charts
        assert ComponentType.HISTOGRAM in charts
        assert ComponentType.TABLE not in charts
        assert len(charts) == 9

    @pytest.mark.unit
    def test_is_chart_type(self):
        """is_chart_type accepts enum members and raw values."""
        assert is_chart_type(ComponentType.PIE_CHART)
        assert is_chart_type("composed_chart")
        assert not is_chart_type("kpi")
        assert not is_chart_type("sparkline")

    @pytest.mark.unit
    def test_meta_to_dict(self):
        """ComponentMeta converts to dictionary correctly."""
        d = get_component_meta(ComponentType.KPI).to_dict()
        assert d["type"] == "kpi"
        assert d["category"] == "data"
        assert isinstance(d["aliases"], list)

    @pytest.mark.unit
    def test_unknown_type_raises(self):
        """Unknown type values raise ValueError."""
        with pytest.raises(ValueError):
            get_component_meta("gauge")


class TestResolveAlias:
    """Tests for alias resolution."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "alias,expected",
        [
            ("pie", ComponentType.PIE_CHART),
            ("Donut", ComponentType.PIE_CHART),
            ("metric", ComponentType.KPI),
            ("logo", ComponentType.IMAGE),
            ("bar-chart", ComponentType.BAR_CHART),
            ("table", ComponentType.TABLE),
        ],
    )
    def test_known_aliases(self, alias, expected):
        """Common synonyms map to canonical types."""
        assert resolve_alias(alias) == expected

    @pytest.mark.unit
    def test_unknown_alias(self):
        """Unknown aliases resolve to None."""
        assert resolve_alias("carousel") is None


class TestStyleVocabulary:
    """Tests for the recognized style keys."""

    @pytest.mark.unit
    def test_font_family_is_known(self):
        """Typography keys are part of the vocabulary."""
        assert "fontFamily" in STYLE_KEYS["typography"]
        assert is_known_style_key("boxShadow")

    @pytest.mark.unit
    def test_unknown_key(self):
        """Unknown keys are reported as unknown but are not forbidden."""
        assert not is_known_style_key("glowIntensity")
        component = Component(id="t1", type="text", style={"glowIntensity": 3})
        assert component.style["glowIntensity"] == 3


class TestComponentModel:
    """Tests for the Component model."""

    @pytest.mark.unit
    def test_defaults(self):
        """Props and style default to empty maps, position to None."""
        component = Component(id="kpi1", type="kpi")
        assert component.props == {}
        assert component.style == {}
        assert component.position is None

    @pytest.mark.unit
    def test_image_requires_src(self):
        """Image components without src are rejected."""
        with pytest.raises(ValidationError, match="src"):
            Component(id="img1", type="image", props={})

    @pytest.mark.unit
    def test_image_rejects_empty_src(self):
        """An empty src string is not a src."""
        with pytest.raises(ValidationError):
            Component(id="img1", type="image", props={"src": ""})

    @pytest.mark.unit
    def test_image_with_src(self):
        """Image components with a src are accepted."""
        component = Component(id="img1", type="image", props={"src": "/logo.png"})
        assert component.type == "image"

    @pytest.mark.unit
    def test_unknown_type_rejected(self):
        """Types outside the closed set are rejected."""
        with pytest.raises(ValidationError):
            Component(id="g1", type="gauge")

    @pytest.mark.unit
    def test_empty_id_rejected(self):
        """Component ids must be non-empty."""
        with pytest.raises(ValidationError):
            Component(id="", type="text")

    @pytest.mark.unit
    def test_camel_case_aliases(self):
        """Document keys use camelCase."""
        layout = Layout.model_validate({"columns": 2, "gap": 8, "alignItems": "center"})
        assert layout.align_items == "center"


class TestDesignSchemaModel:
    """Tests for the DesignSchema model."""

    @pytest.mark.unit
    def test_columns_bounds(self):
        """layout.columns must be an integer in [1, 4]."""
        document = get_blank_schema()
        for bad in (0, 5, 2.5, "2"):
            document["layout"]["columns"] = bad
            with pytest.raises(ValidationError):
                DesignSchema.from_document(document)

    @pytest.mark.unit
    def test_negative_gap_rejected(self):
        """layout.gap must be non-negative."""
        document = get_blank_schema()
        document["layout"]["gap"] = -1
        with pytest.raises(ValidationError):
            DesignSchema.from_document(document)

    @pytest.mark.unit
    def test_component_cap(self):
        """More than MAX_COMPONENTS components is rejected."""
        document = get_blank_schema()
        document["components"] = [
            {"id": f"text{i}", "type": "text", "props": {}}
            for i in range(MAX_COMPONENTS + 1)
        ]
        with pytest.raises(ValidationError):
            DesignSchema.from_document(document)

    @pytest.mark.unit
    def test_missing_theme_field(self):
        """Each required theme field is enforced."""
        for key in REQUIRED_THEME_FIELDS:
            document = get_blank_schema()
            del document["theme"][key]
            with pytest.raises(ValidationError):
                DesignSchema.from_document(document)

    @pytest.mark.unit
    def test_document_round_trip(self):
        """A factory document survives from_document/to_document unchanged."""
        document = get_default_schema()
        assert DesignSchema.from_document(document).to_document() == document

    @pytest.mark.unit
    def test_unknown_keys_preserved(self):
        """Open extra keys pass through the typed view."""
        document = get_blank_schema()
        document["theme"]["glassEffect"] = True
        model = DesignSchema.from_document(document)
        assert model.to_document()["theme"]["glassEffect"] is True


class TestFactories:
    """Tests for the named starting states."""

    @pytest.mark.unit
    def test_default_schema(self):
        """Default schema is light with a table and a chart."""
        document = get_default_schema()
        assert document["theme"] == {
            "mode": "light",
            "primaryColor": "#3b82f6",
            "fontSize": "16px",
            "fontFamily": "system-ui, sans-serif",
        }
        assert document["layout"] == {"columns": 1, "gap": 16}
        assert [c["id"] for c in document["components"]] == ["table1", "chart1"]
        assert document["filters"] == {"sortBy": "date", "sortOrder": "desc"}

    @pytest.mark.unit
    def test_dark_default_schema(self):
        """Dark default adds background and text colors."""
        theme = get_dark_default_schema()["theme"]
        assert theme["mode"] == "dark"
        assert theme["backgroundColor"] == "#1a1a1a"
        assert theme["textColor"] == "#ffffff"

    @pytest.mark.unit
    def test_blank_schemas_have_no_components(self):
        """Blank factories carry no components."""
        assert get_blank_schema()["components"] == []
        assert get_dark_blank_schema()["components"] == []
        assert get_dark_blank_schema()["theme"]["mode"] == "dark"

    @pytest.mark.unit
    def test_factories_return_fresh_documents(self):
        """Mutating one factory result does not leak into the next."""
        first = get_default_schema()
        first["components"].clear()
        assert len(get_default_schema()["components"]) == 2

    @pytest.mark.unit
    def test_build_schema_accepts_string_mode(self):
        """build_schema accepts the raw mode value."""
        model = build_schema("dark", blank=True)
        assert model.theme.mode == "dark"
        assert model.component_ids() == []

    @pytest.mark.unit
    def test_chart_defaults(self):
        """The starter chart is a line chart over the summary endpoint."""
        chart = get_default_schema()["components"][1]
        assert chart["props"]["chartType"] == "line"
        assert chart["style"] == {"width": "100%", "height": "400px"}
        assert "position" not in chart


class TestSchemaExport:
    """Tests for JSON Schema export."""

    @pytest.mark.unit
    def test_json_schema_uses_aliases(self):
        """Exported schema uses camelCase property names."""
        schema = export_json_schema()
        theme_ref = schema["$defs"]["Theme"]["properties"]
        assert "primaryColor" in theme_ref
        assert "primary_color" not in theme_ref

    @pytest.mark.unit
    def test_component_enum_schema(self):
        """Every type value maps to its description."""
        enum_schema = export_component_enum_schema()
        assert set(enum_schema) == {ct.value for ct in ComponentType}
