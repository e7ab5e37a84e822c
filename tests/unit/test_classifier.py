"""Tests for collection and mode classification."""

from __future__ import annotations

import logging

import pytest

from varcss.core.classifier import (
    classify_collection,
    classify_modes,
    detect_layer_type,
    detect_mode_type,
    parse_collection_name,
)
from varcss.core.ir import BreakpointTable, LayerType, Mode, ModeType


class TestCollectionName:
    @pytest.mark.parametrize(
        ("name", "domain", "layer", "layer_type"),
        [
            ("Typo - 1. Foundations", "typo", "1. Foundations", LayerType.FOUNDATIONS),
            ("Space - 2. Aliases", "space", "2. Aliases", LayerType.ALIASES),
            ("Space - 2.1 Aliases Extended", "space", "2.1 Aliases Extended", LayerType.ALIASES_EXTENDED),
            ("Color - 3. Mappings", "color", "3. Mappings", LayerType.MAPPINGS),
            ("Radius-Scale", "radius", "Scale", LayerType.OTHER),
        ],
    )
    def test_parse(self, name: str, domain: str, layer: str, layer_type: LayerType):
        parsed = parse_collection_name(name)
        assert parsed.domain == domain
        assert parsed.layer == layer
        assert parsed.layer_type == layer_type

    def test_unstructured_name(self):
        parsed = parse_collection_name("Misc Tokens")
        assert parsed.domain == "misc tokens"
        assert parsed.layer == "default"
        assert parsed.layer_type == LayerType.OTHER

    def test_numbered_extended_layer(self):
        assert detect_layer_type("Space - 2.1 Aliases") == LayerType.ALIASES_EXTENDED


class TestModeType:
    def test_breakpoint_widths_attached(self):
        modes = classify_modes(
            [("m1", "Desktop"), ("m2", "Tablet Portrait"), ("m3", "mobile")], BreakpointTable()
        )
        assert [m.breakpoint_px for m in modes] == [1680, 840, 480]

    def test_custom_table(self):
        modes = classify_modes([("m1", "Desktop")], BreakpointTable(desktop=1440))
        assert modes[0].breakpoint_px == 1440

    def test_breakpoint(self):
        modes = [Mode(mode_id="a", name="Desktop", breakpoint_px=1680), Mode(mode_id="b", name="Mobile", breakpoint_px=480)]
        assert detect_mode_type(modes) == ModeType.BREAKPOINT

    def test_theme(self):
        modes = [Mode(mode_id="a", name="Light"), Mode(mode_id="b", name="Dark")]
        assert detect_mode_type(modes) == ModeType.THEME

    def test_single_mode(self):
        assert detect_mode_type([Mode(mode_id="a", name="Desktop", breakpoint_px=1680)]) == ModeType.SINGLE

    def test_unrelated_modes(self):
        modes = [Mode(mode_id="a", name="Compact"), Mode(mode_id="b", name="Comfortable")]
        assert detect_mode_type(modes) == ModeType.SINGLE


class TestClassifyCollection:
    def test_full_classification(self):
        collection = classify_collection(
            "c1",
            "Space - 1. Foundations",
            [("m1", "Desktop"), ("m2", "Mobile")],
            BreakpointTable(),
            variable_ids=["v1", "v2"],
        )
        assert collection.domain == "space"
        assert collection.layer_type == LayerType.FOUNDATIONS
        assert collection.mode_type == ModeType.BREAKPOINT
        assert collection.variable_count == 2
        assert collection.default_mode.name == "Desktop"

    def test_partial_breakpoints_warn(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING, logger="varcss.core.classifier"):
            collection = classify_collection(
                "c1", "Space - 1. Foundations", [("m1", "Desktop"), ("m2", "Print")], BreakpointTable()
            )
        assert collection.mode_type == ModeType.SINGLE
        assert "Print" in caplog.text
