"""Tests for font-name recognition."""

import pytest

from dashboard_engine.schema import get_default_schema

from .lib import (
    extract_font_names,
    is_known_font,
    is_valid_font_name,
    primary_font_name,
)


class TestPrimaryFontName:
    """Tests for primary family extraction."""

    @pytest.mark.unit
    def test_strips_fallbacks_and_quotes(self):
        """Only the first family survives, without quotes."""
        assert primary_font_name('"Open Sans", Arial, sans-serif') == "Open Sans"
        assert primary_font_name("'Lora',serif") == "Lora"

    @pytest.mark.unit
    def test_single_family(self):
        """A single family is returned trimmed."""
        assert primary_font_name("  Inter ") == "Inter"


class TestIsValidFontName:
    """Tests for font-name validation."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "name",
        [
            "system-ui",
            "Open Sans",
            "Source Sans Pro",
            "My_Custom.Font-2",
            "PT Sans",
            "-apple-system",
            "微软雅黑",
            "Noto Sans JP (Regular)",
        ],
    )
    def test_accepts_font_names(self, name):
        """Ordinary and custom font names are accepted."""
        assert is_valid_font_name(name)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "name",
        [
            "",
            "   ",
            "Arial; color: red",
            "x}</style>",
            '"Quoted"',
            "Tab\tName",
            "a" * 100,
            None,
            12,
        ],
    )
    def test_rejects_bad_values(self, name):
        """Empty, overlong, non-string and injection-like values are rejected."""
        assert not is_valid_font_name(name)


class TestIsKnownFont:
    """Tests for known-font lookup."""

    @pytest.mark.unit
    def test_system_and_web_fonts(self):
        """System families and popular web fonts are known."""
        assert is_known_font("Sans-Serif")
        assert is_known_font("montserrat")
        assert not is_known_font("Comic Neue")


class TestExtractFontNames:
    """Tests for font collection from schema documents."""

    @pytest.mark.unit
    def test_theme_font_first(self):
        """Theme font is listed before component fonts, without duplicates."""
        schema = get_default_schema()
        schema["components"][0]["style"]["fontFamily"] = "Lora, serif"
        schema["components"][1]["style"]["fontFamily"] = "'Lora'"
        assert extract_font_names(schema) == ["system-ui", "Lora"]

    @pytest.mark.unit
    def test_tolerates_malformed_documents(self):
        """Non-mapping parts are skipped rather than raising."""
        assert extract_font_names({"theme": None, "components": [1, {"style": 2}]}) == []

    @pytest.mark.unit
    def test_vendor_and_cjk_stacks_keep_primary_family(self):
        """Vendor-prefixed and non-Latin primary families are valid names."""
        assert is_valid_font_name(
            primary_font_name("-apple-system, BlinkMacSystemFont, sans-serif")
        )
        assert is_valid_font_name(primary_font_name("微软雅黑, sans-serif"))
        assert extract_font_names({"theme": {"fontFamily": "-apple-system, sans-serif"}}) == [
            "-apple-system"
        ]
