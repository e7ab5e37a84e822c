"""Tests for the generation pipeline and collection scan."""

from __future__ import annotations

import logging

import pytest

from tests.conftest import SnapshotBuilder, alias, rgb
from varcss.core.ir import BreakpointTable, ExportOptions, LayerType, ModeType
from varcss.core.pipeline import generate_css, scan_collections


class TestGenerateCss:
    @pytest.mark.asyncio
    async def test_report_counts(self, spacing: SnapshotBuilder, theme: SnapshotBuilder):
        # spacing and theme share one builder
        result = await generate_css(spacing.source())

        assert result.report.collections == 3
        assert result.report.variables == 5
        assert result.report.errors == ()

    @pytest.mark.asyncio
    async def test_defaults_when_options_omitted(self, spacing: SnapshotBuilder):
        default = await generate_css(spacing.source())
        explicit = await generate_css(spacing.source(), ExportOptions(), BreakpointTable())
        assert default.css == explicit.css

    @pytest.mark.asyncio
    async def test_remote_collections_not_counted(self, builder: SnapshotBuilder):
        builder.collection("c-remote", "Color - 1. Foundations", ["Value"], remote=True)
        builder.variable("c-remote", "v-red", "red", "COLOR", {"Value": rgb(1, 0, 0)})
        builder.collection("c-local", "Color - 3. Mappings", ["Value"])
        builder.variable("c-local", "v-ink", "ink", "COLOR", {"Value": rgb(0, 0, 0)})

        result = await generate_css(builder.source())
        assert result.report.collections == 1
        assert result.report.variables == 1
        assert "#ff0000" not in result.css

    @pytest.mark.asyncio
    async def test_diagnostics_collected(self, builder: SnapshotBuilder):
        builder.collection("c1", "Color - 3. Mappings", ["Value"])
        builder.variable("c1", "v1", "link", "COLOR", {"Value": alias("missing")})

        result = await generate_css(builder.source())
        assert result.report.errors == ("Broken alias: link references unknown variable",)
        assert "--link" not in result.css

    @pytest.mark.asyncio
    async def test_diagnostic_logged_once(
        self, builder: SnapshotBuilder, caplog: pytest.LogCaptureFixture
    ):
        builder.collection("c1", "Color - 3. Mappings", ["Value"])
        builder.variable("c1", "v1", "link", "COLOR", {"Value": alias("missing")})

        with caplog.at_level(logging.WARNING, logger="varcss"):
            await generate_css(builder.source())
        assert caplog.text.count("Broken alias: link") == 1

    @pytest.mark.asyncio
    async def test_custom_breakpoints(self, spacing: SnapshotBuilder):
        result = await generate_css(
            spacing.source(), breakpoints=BreakpointTable(desktop=1480, mobile=280)
        )
        # Same 1200px span, so the slope is unchanged and the intercept moves
        assert "--space-fixed-1: clamp(25.6px, calc(24.11px + 0.5333vw), 32px);" in result.css
        assert "@media (max-width: 1479px)" in result.css

    @pytest.mark.asyncio
    async def test_report_serializes(self, stepped: SnapshotBuilder):
        result = await generate_css(stepped.source())
        data = result.report.model_dump(mode="json")
        assert data["non_linear_candidates"][0]["interior"][0]["name"] == "Tablet"


class TestScanCollections:
    @pytest.mark.asyncio
    async def test_summary(self, spacing: SnapshotBuilder, theme: SnapshotBuilder):
        result = await scan_collections(spacing.source())

        assert [c.name for c in result.collections] == [
            "Color - 3. Mappings",
            "Space - 1. Foundations",
            "Space - 2. Aliases",
        ]
        assert result.total_variables == 5

        color, space, _ = result.collections
        assert color.mode_type == ModeType.THEME
        assert color.layer_type == LayerType.MAPPINGS
        assert space.mode_type == ModeType.BREAKPOINT
        assert [m.breakpoint_px for m in space.modes] == [1680, 480]

    @pytest.mark.asyncio
    async def test_remote_excluded(self, builder: SnapshotBuilder):
        builder.collection("c-remote", "Color - 1. Foundations", ["Value"], remote=True)
        result = await scan_collections(builder.source())
        assert result.collections == ()
        assert result.total_variables == 0
