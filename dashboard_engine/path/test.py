"""Unit tests for path addressing."""

import pytest

from dashboard_engine.schema import get_default_schema

from .lib import (
    PathError,
    PropertyStep,
    SelectorStep,
    component_path,
    parse_path,
    resolve_path,
    set_path_value,
)


class TestParsePath:
    """Tests for parse_path."""

    @pytest.mark.unit
    def test_plain_path(self):
        """Plain segments become property steps."""
        assert parse_path("theme/primaryColor") == (
            PropertyStep("theme"),
            PropertyStep("primaryColor"),
        )

    @pytest.mark.unit
    def test_selector_segment(self):
        """components[id=X] becomes a selector step."""
        steps = parse_path("components[id=table1]/style/color")
        assert steps[0] == SelectorStep("components", "id", "table1")
        assert steps[1:] == (PropertyStep("style"), PropertyStep("color"))

    @pytest.mark.unit
    def test_quoted_selector_value(self):
        """Quotes around selector values are removed."""
        steps = parse_path('components[id="kpi-1"]/props/label')
        assert steps[0] == SelectorStep("components", "id", "kpi-1")

    @pytest.mark.unit
    def test_empty_segments_ignored(self):
        """Leading, trailing and doubled slashes are tolerated."""
        assert parse_path("/layout//columns/") == (
            PropertyStep("layout"),
            PropertyStep("columns"),
        )

    @pytest.mark.unit
    @pytest.mark.parametrize("path", ["", "/", "//"])
    def test_empty_path_rejected(self, path):
        """Paths without segments are rejected."""
        with pytest.raises(PathError, match="Empty path"):
            parse_path(path)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "path", ["components[id=]/style", "components[table1]/style", "a]/b"]
    )
    def test_malformed_selector_rejected(self, path):
        """Bracketed segments must follow the selector grammar."""
        with pytest.raises(PathError, match="Malformed selector"):
            parse_path(path)

    @pytest.mark.unit
    def test_non_string_rejected(self):
        """Paths must be strings."""
        with pytest.raises(PathError):
            parse_path(["theme", "mode"])


class TestResolvePath:
    """Tests for resolve_path and set_path_value."""

    @pytest.mark.unit
    def test_theme_write(self):
        """Writing a theme key replaces its value."""
        doc = get_default_schema()
        assert set_path_value(doc, "theme/primaryColor", "#000000")
        assert doc["theme"]["primaryColor"] == "#000000"

    @pytest.mark.unit
    def test_creates_intermediate_objects(self):
        """Missing intermediate objects are created when writing."""
        doc = {"filters": None}
        assert set_path_value(doc, "filters/dateRange/start", "2024-01-01")
        assert doc == {"filters": {"dateRange": {"start": "2024-01-01"}}}

    @pytest.mark.unit
    def test_selector_write(self):
        """Selector steps continue resolution at the matched component."""
        doc = get_default_schema()
        assert set_path_value(doc, "components[id=chart1]/style/color", "red")
        assert doc["components"][1]["style"]["color"] == "red"
        assert "color" not in doc["components"][0]["style"]

    @pytest.mark.unit
    def test_selector_creates_missing_style(self):
        """A component without a style map gets one on first write."""
        doc = {"components": [{"id": "k1", "type": "kpi", "props": {}}]}
        assert set_path_value(doc, component_path("k1", "style", "color"), "blue")
        assert doc["components"][0]["style"] == {"color": "blue"}

    @pytest.mark.unit
    def test_selector_miss_is_silent(self):
        """A selector that matches nothing resolves to None and writes nothing."""
        doc = get_default_schema()
        before = get_default_schema()
        assert resolve_path(doc, "components[id=ghost]/style/color") is None
        assert not set_path_value(doc, "components[id=ghost]/style/color", "red")
        assert doc == before

    @pytest.mark.unit
    def test_selector_without_collection(self):
        """A selector over a missing list is a miss, not an error."""
        assert resolve_path({}, "components[id=a]/style/color") is None

    @pytest.mark.unit
    def test_no_create(self):
        """create=False reports missing intermediates as None."""
        doc = {"layout": {}}
        assert resolve_path(doc, "filters/limit", create=False) is None
        assert "filters" not in doc

    @pytest.mark.unit
    def test_descend_through_scalar_rejected(self):
        """Writing below a scalar value is an error."""
        doc = get_default_schema()
        with pytest.raises(PathError, match="primaryColor"):
            set_path_value(doc, "theme/primaryColor/shade", "dark")

    @pytest.mark.unit
    def test_final_selector_rejected(self):
        """A path cannot end in a selector."""
        with pytest.raises(PathError, match="must end in a property"):
            resolve_path(get_default_schema(), "components[id=table1]")

    @pytest.mark.unit
    def test_accepts_parsed_steps(self):
        """Pre-parsed steps are accepted in place of a string."""
        doc = {"layout": {"columns": 1}}
        target = resolve_path(doc, parse_path("layout/columns"))
        target.set(3)
        assert doc["layout"]["columns"] == 3


class TestComponentPath:
    """Tests for component_path."""

    @pytest.mark.unit
    def test_builds_selector_path(self):
        """Parts are joined under the selector."""
        assert component_path("kpi1", "style", "color") == "components[id=kpi1]/style/color"
        assert parse_path(component_path("kpi1", "props"))[0].value == "kpi1"
