"""Tests for token name normalization and keyword classification."""

from __future__ import annotations

import pytest

from varcss.core.ir import LayerType
from varcss.core.naming import (
    generate_css_name,
    is_font_style_value,
    is_unitless,
    matches_as_segment,
    slugify,
    text_style_slug,
)


class TestSlugify:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Space/Fixed/1", "space-fixed-1"),
            ("Stroke--Width", "stroke--width"),
            ("a / b", "a--b"),
            ("Size.Body, Large", "size-body--large"),
            ("  Heading   XL ", "heading-xl"),
            ("/leading/", "leading"),
        ],
    )
    def test_slugify(self, name: str, expected: str):
        assert slugify(name) == expected

    def test_only_valid_characters(self):
        assert slugify("Größe/Äther 100%") == "gr--e--ther-100"


class TestGenerateCssName:
    def test_foundations_get_domain_prefix(self):
        assert generate_css_name("fixed/1", "space", LayerType.FOUNDATIONS) == "--space-fixed-1"

    def test_prefix_not_doubled(self):
        assert generate_css_name("Space/Fixed/1", "space", LayerType.ALIASES) == "--space-fixed-1"

    def test_extended_aliases_prefixed(self):
        assert (
            generate_css_name("gap/lg", "space", LayerType.ALIASES_EXTENDED) == "--space-gap-lg"
        )

    def test_mappings_never_prefixed(self):
        assert generate_css_name("button/padding", "space", LayerType.MAPPINGS) == "--button-padding"

    def test_other_layer_keeps_known_domain(self):
        assert generate_css_name("radius/sm", "misc", LayerType.OTHER) == "--radius-sm"

    def test_other_layer_prefixes_unknown(self):
        assert generate_css_name("gap", "grid", LayerType.OTHER) == "--grid-gap"


class TestUnitless:
    def test_segment_match(self):
        assert matches_as_segment("layout/order", "order")
        assert not matches_as_segment("border/width", "order")

    @pytest.mark.parametrize(
        "name",
        ["font/weight/bold", "layout/order", "z-index/modal", "opacity/50", "grid columns"],
    )
    def test_unitless_names(self, name: str):
        assert is_unitless(name)

    @pytest.mark.parametrize("name", ["border/width", "line-height/body", "weighty", "reorder"])
    def test_names_with_units(self, name: str):
        assert not is_unitless(name)

    def test_css_name_checked_too(self):
        assert is_unitless("misc", "--typo-font-weight")


class TestKeywords:
    @pytest.mark.parametrize("value", ["italic", "Oblique", "oblique 10deg", "normal"])
    def test_font_style_values(self, value: str):
        assert is_font_style_value(value)

    def test_font_family_not_keyword(self):
        assert not is_font_style_value("Inter")

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Short-form/Heading L", "heading-l"),
            ("LF / Body", "body"),
            ("Caption", "caption"),
        ],
    )
    def test_text_style_slug(self, name: str, expected: str):
        assert text_style_slug(name) == expected
