"""Tests for composite text-style output."""

from __future__ import annotations

import pytest

from tests.conftest import SnapshotBuilder
from varcss.core.ir import ExportOptions, TextStyleFormat
from varcss.core.pipeline import generate_css
from varcss.core.source import RawTextStyle
from varcss.core.text_styles import compose_text_styles, font_weight, raw_property


def heading(**overrides) -> RawTextStyle:
    data = {
        "id": "s1",
        "name": "Short-form/Heading L",
        "fontFamily": "Inter",
        "fontStyle": "Semi Bold Italic",
        "fontSize": 32,
        "lineHeight": {"unit": "PIXELS", "value": 40},
        "letterSpacing": {"unit": "PERCENT", "value": -2},
    }
    data.update(overrides)
    return RawTextStyle.model_validate(data)


class TestFontWeight:
    @pytest.mark.parametrize(
        ("style", "weight"),
        [
            ("Thin", 100),
            ("Extra Light", 200),
            ("Light Italic", 300),
            ("Regular", 400),
            ("Medium", 500),
            ("Semi-Bold", 600),
            ("Bold", 700),
            ("ExtraBold", 800),
            ("Black", 900),
        ],
    )
    def test_keywords(self, style: str, weight: int):
        assert font_weight(style) == weight


class TestRawProperty:
    def test_computed_values(self):
        style = heading()
        assert raw_property(style, "fontFamily") == '"Inter"'
        assert raw_property(style, "fontSize") == "32px"
        assert raw_property(style, "fontStyle") == "italic"
        assert raw_property(style, "fontWeight") == "600"
        assert raw_property(style, "lineHeight") == "40px"
        assert raw_property(style, "letterSpacing") == "-0.020em"

    def test_percent_line_height(self):
        style = heading(lineHeight={"unit": "PERCENT", "value": 120})
        assert raw_property(style, "lineHeight") == "1.20"

    def test_auto_line_height(self):
        style = heading(lineHeight={"unit": "AUTO"})
        assert raw_property(style, "lineHeight") == "normal"

    def test_default_letter_spacing(self):
        style = RawTextStyle(id="s", name="Body")
        assert raw_property(style, "letterSpacing") == "0px"
        assert raw_property(style, "fontStyle") == "normal"


class TestCompose:
    def test_css_vars(self):
        lines = compose_text_styles([heading()], ExportOptions(), {})
        assert "   Format: CSS Custom Properties" in lines
        assert ":root {" in lines
        assert '  --heading-l-family: "Inter";' in lines
        assert "  --heading-l-weight: 600;" in lines
        assert "  --heading-l-letter-spacing: -0.020em;" in lines
        assert lines[-1] == "}"

    def test_scss_mixin(self):
        options = ExportOptions(text_style_format=TextStyleFormat.SCSS_MIXIN)
        lines = compose_text_styles([heading()], options, {})
        assert "@mixin heading-l {" in lines
        assert "  font-style: italic;" in lines

    def test_css_class(self):
        options = ExportOptions(text_style_format=TextStyleFormat.CSS_CLASS)
        lines = compose_text_styles([heading()], options, {})
        assert ".heading-l {" in lines
        assert "  line-height: 40px;" in lines

    def test_no_styles(self):
        assert compose_text_styles([], ExportOptions(), {}) == []


class TestBoundVariables:
    @pytest.mark.asyncio
    async def test_bound_property_references_variable(self, stepped: SnapshotBuilder):
        stepped.text_style(
            "s1",
            "Display",
            fontFamily="Inter",
            fontSize=48,
            boundVariables={"fontSize": {"type": "VARIABLE_ALIAS", "id": "v-display"}},
        )
        result = await generate_css(stepped.source(), ExportOptions(include_text_styles=True))

        assert "  --display-size: var(--typo-size-display);" in result.css
        assert "  --display-family: \"Inter\";" in result.css
        assert result.report.text_style_count == 1

    @pytest.mark.asyncio
    async def test_unknown_binding_falls_back(self, stepped: SnapshotBuilder):
        stepped.text_style("s1", "Display", fontSize=48, boundVariables={"fontSize": "gone"})
        result = await generate_css(stepped.source(), ExportOptions(include_text_styles=True))
        assert "  --display-size: 48px;" in result.css

    @pytest.mark.asyncio
    async def test_text_styles_off_by_default(self, stepped: SnapshotBuilder):
        stepped.text_style("s1", "Display")
        result = await generate_css(stepped.source())
        assert "TEXT STYLES" not in result.css
        assert result.report.text_style_count == 0
