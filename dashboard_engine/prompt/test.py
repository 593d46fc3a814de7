"""Tests for prompt context preparation."""

import pytest

from dashboard_engine.schema import get_blank_schema, get_default_schema

from .lib import (
    PromptContext,
    RequestKind,
    build_prompt_context,
    classify_request,
    is_vague_request,
    optimize_schema_for_prompt,
)


def _styled_schema():
    document = get_default_schema()
    document["components"][0]["style"]["color"] = "#333"
    document["components"][0]["style"]["fontFamily"] = "Inter"
    document["components"].append(
        {"id": "img1", "type": "image", "props": {"src": "/logo.png", "alt": "Logo"}, "style": {}}
    )
    return document


class TestClassifyRequest:
    """Tests for request classification."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "prompt,kind",
        [
            ("switch to dark mode", RequestKind.THEME),
            ("add a dark table", RequestKind.COMPONENTS),
            ("move the chart to the top", RequestKind.COMPONENTS),
            ("make the fonts bigger", RequestKind.STYLE),
            ("make it look like Spotify", RequestKind.VAGUE),
            ("show me sales", RequestKind.GENERAL),
        ],
    )
    def test_classification(self, prompt, kind):
        """Keywords select the request kind."""
        assert classify_request(prompt) == kind

    @pytest.mark.unit
    def test_vague_keywords(self):
        """Brand names and comparison phrases are vague."""
        assert is_vague_request("something inspired by netflix")
        assert is_vague_request("Uber vibes")
        assert not is_vague_request("set columns to 3")


class TestOptimizeSchemaForPrompt:
    """Tests for schema reduction."""

    @pytest.mark.unit
    def test_theme_request(self):
        """Theme requests keep components as id/type only."""
        reduced = optimize_schema_for_prompt(_styled_schema(), "use a dark theme")
        assert reduced["components"][0] == {"id": "table1", "type": "table"}
        assert reduced["theme"]["mode"] == "light"
        assert "filters" in reduced

    @pytest.mark.unit
    def test_simple_component_request(self):
        """Simple add/remove requests keep components as id/type only."""
        reduced = optimize_schema_for_prompt(_styled_schema(), "add a kpi")
        assert all(set(c) == {"id", "type"} for c in reduced["components"])

    @pytest.mark.unit
    def test_complex_component_request(self):
        """Other structural requests keep essential props."""
        reduced = optimize_schema_for_prompt(_styled_schema(), "reorder so the chart comes first")
        table, chart, image = reduced["components"]
        assert table["props"]["dataSource"] == "/api/data"
        assert "columns" in table["props"]
        assert chart["props"]["chartType"] == "line"
        assert "style" not in chart
        assert image["props"] == {"src": "/logo.png"}

    @pytest.mark.unit
    def test_many_components_minimized(self):
        """Large dashboards are always minimized for structural requests."""
        document = get_blank_schema()
        document["components"] = [
            {"id": f"t{i}", "type": "text", "props": {"content": "x"}} for i in range(11)
        ]
        reduced = optimize_schema_for_prompt(document, "reorder t3 to the top")
        assert reduced["components"][3] == {"id": "t3", "type": "text"}

    @pytest.mark.unit
    def test_style_request(self):
        """Style requests keep component styles."""
        reduced = optimize_schema_for_prompt(_styled_schema(), "increase padding")
        assert reduced["components"][0]["style"]["color"] == "#333"
        assert "props" not in reduced["components"][0]

    @pytest.mark.unit
    def test_vague_request(self):
        """Vague requests keep a small set of style keys."""
        reduced = optimize_schema_for_prompt(_styled_schema(), "something like apple")
        assert reduced["components"][0]["style"] == {"color": "#333", "fontFamily": "Inter"}
        assert reduced["components"][1]["style"] == {}

    @pytest.mark.unit
    def test_general_request_returns_full_schema(self):
        """Unclassified requests get the cleaned full schema."""
        document = _styled_schema()
        assert optimize_schema_for_prompt(document, "show me sales") == document

    @pytest.mark.unit
    def test_nulls_removed_and_input_untouched(self):
        """Null values are dropped and the input is not mutated."""
        document = get_default_schema()
        document["filters"]["search"] = None
        reduced = optimize_schema_for_prompt(document, "show me sales")
        assert "search" not in reduced["filters"]
        assert document["filters"]["search"] is None

    @pytest.mark.unit
    def test_build_prompt_context(self):
        """The context records the kind and a token estimate."""
        context = build_prompt_context(get_default_schema(), "dark mode please")
        assert isinstance(context, PromptContext)
        assert context.request_kind == RequestKind.THEME
        assert context.total_tokens_estimate > 0
