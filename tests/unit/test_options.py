"""Tests for export options, the breakpoint table and varcss.toml loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from varcss.core.errors import ConfigError
from varcss.core.ir import (
    AliasMode,
    BreakpointDirection,
    BreakpointTable,
    ColorFormat,
    DarkModeOutput,
    ExportOptions,
    OutputMode,
    TextStyleFormat,
)

# =============================================================================
# ExportOptions
# =============================================================================


class TestExportOptions:
    def test_defaults(self):
        options = ExportOptions()
        assert options.output_mode == OutputMode.FLUID
        assert options.breakpoint_direction == BreakpointDirection.DESKTOP_FIRST
        assert options.alias_mode == AliasMode.PRESERVED
        assert options.dark_mode_output == DarkModeOutput.BOTH
        assert options.color_format == ColorFormat.HEX
        assert options.text_style_format == TextStyleFormat.CSS_VARS
        assert options.viewport_relative_overrides == ()
        assert not options.include_text_styles

    def test_camel_case_names(self):
        options = ExportOptions.from_mapping(
            {
                "outputMode": "fixed",
                "breakpointDirection": "mobile-first",
                "nonLinearOverrides": ["--typo-size-display"],
            }
        )
        assert options.output_mode == OutputMode.FIXED
        assert not options.desktop_first
        assert options.non_linear_overrides == ("--typo-size-display",)

    def test_snake_case_names(self):
        options = ExportOptions(dark_mode_output=DarkModeOutput.CLASS)
        assert options.use_theme_class
        assert not options.use_prefers_color_scheme

    def test_frozen(self):
        options = ExportOptions()
        with pytest.raises(ValidationError):
            options.output_mode = OutputMode.FIXED  # type: ignore[misc]

    @pytest.mark.parametrize(
        "data", [{"outputMode": "stepped"}, {"colorFormat": "rgb"}, {"unknownOption": True}]
    )
    def test_invalid_values_raise_config_error(self, data: dict):
        with pytest.raises(ConfigError):
            ExportOptions.from_mapping(data)


# =============================================================================
# BreakpointTable
# =============================================================================


class TestBreakpointTable:
    def test_defaults(self):
        assert dict(BreakpointTable().items()) == {
            "desktop": 1680,
            "laptop": 1366,
            "tablet": 840,
            "mobile": 480,
        }

    def test_lookup_is_case_insensitive(self):
        table = BreakpointTable()
        assert table.lookup("DESKTOP Wide") == 1680
        assert table.lookup("Small Mobile") == 480
        assert table.lookup("Print") is None

    def test_with_overrides_returns_new_table(self):
        table = BreakpointTable()
        updated = table.with_overrides({"mobile": 375, "laptop": None, "watch": 200})
        assert updated.mobile == 375
        assert updated.laptop == 1366
        assert table.mobile == 480

    @pytest.mark.parametrize("data", [{"desktop": 0}, {"tablet": -1}, {"phone": 400}])
    def test_invalid_widths(self, data: dict):
        with pytest.raises(ConfigError):
            BreakpointTable.from_mapping(data)


# =============================================================================
# varcss.toml
# =============================================================================


class TestSettings:
    def test_load_file(self, tmp_path: Path):
        from varcss.core.settings import load_settings

        path = tmp_path / "varcss.toml"
        path.write_text(
            '[export]\noutputMode = "fixed"\ncolorFormat = "oklch"\n\n'
            "[breakpoints]\ndesktop = 1440\nmobile = 375\n"
        )
        options, breakpoints = load_settings(path)
        assert options.output_mode == OutputMode.FIXED
        assert options.color_format == ColorFormat.OKLCH
        assert breakpoints.desktop == 1440
        assert breakpoints.mobile == 375
        assert breakpoints.tablet == 840

    def test_overrides_win_and_none_falls_through(self, tmp_path: Path):
        from varcss.core.settings import load_settings

        path = tmp_path / "varcss.toml"
        path.write_text('[export]\noutputMode = "fixed"\ncolorFormat = "oklch"\n')
        options, _ = load_settings(path, {"outputMode": "fluid", "colorFormat": None})
        assert options.output_mode == OutputMode.FLUID
        assert options.color_format == ColorFormat.OKLCH

    def test_no_file_gives_defaults(self):
        from varcss.core.settings import load_settings

        options, breakpoints = load_settings(None)
        assert options == ExportOptions()
        assert breakpoints == BreakpointTable()

    def test_malformed_toml(self, tmp_path: Path):
        from varcss.core.settings import load_settings

        path = tmp_path / "varcss.toml"
        path.write_text("[export\n")
        with pytest.raises(ConfigError) as exc_info:
            load_settings(path)
        assert str(path) in str(exc_info.value)

    def test_invalid_value_names_file(self, tmp_path: Path):
        from varcss.core.settings import load_settings

        path = tmp_path / "varcss.toml"
        path.write_text('[export]\noutputMode = "stepped"\n')
        with pytest.raises(ConfigError) as exc_info:
            load_settings(path)
        assert exc_info.value.context is not None
        assert exc_info.value.context.file == path

    def test_find_settings_walks_up(self, tmp_path: Path):
        from varcss.core.settings import find_settings

        path = tmp_path / "varcss.toml"
        path.write_text("")
        nested = tmp_path / "tokens" / "export"
        nested.mkdir(parents=True)
        assert find_settings(nested) == path
