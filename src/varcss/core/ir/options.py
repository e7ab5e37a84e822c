"""
Generation options and the breakpoint-width table.

Both are immutable values built once per generation request. The caller
supplies them (or accepts the defaults) and they are threaded explicitly
through every stage that needs them.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import ConfigError

# =============================================================================
# Enums
# =============================================================================


class OutputMode(StrEnum):
    """How breakpoint collections are rendered."""

    FLUID = "fluid"
    FIXED = "fixed"


class BreakpointDirection(StrEnum):
    """Which end of the breakpoint range holds the default block."""

    MOBILE_FIRST = "mobile-first"
    DESKTOP_FIRST = "desktop-first"


class AliasMode(StrEnum):
    """Whether alias values stay as var() references or are flattened."""

    PRESERVED = "preserved"
    RESOLVED = "resolved"


class DarkModeOutput(StrEnum):
    """Selector strategy for theme collections."""

    PREFERS_COLOR_SCHEME = "prefers-color-scheme"
    CLASS = "class"
    BOTH = "both"


class ColorFormat(StrEnum):
    """Literal color notation."""

    HEX = "hex"
    OKLCH = "oklch"


class TextStyleFormat(StrEnum):
    """Output shape for composite text styles."""

    SCSS_MIXIN = "scss-mixin"
    CSS_CLASS = "css-class"
    CSS_VARS = "css-vars"


# =============================================================================
# Export options
# =============================================================================


class ExportOptions(BaseModel):
    """Options bundle for one generation pass.

    Accepts both snake_case field names and the camelCase names used by
    host applications (``outputMode``, ``breakpointDirection``, ...).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    output_mode: OutputMode = Field(default=OutputMode.FLUID, alias="outputMode")
    breakpoint_direction: BreakpointDirection = Field(
        default=BreakpointDirection.DESKTOP_FIRST, alias="breakpointDirection"
    )
    alias_mode: AliasMode = Field(default=AliasMode.PRESERVED, alias="aliasMode")
    dark_mode_output: DarkModeOutput = Field(
        default=DarkModeOutput.BOTH, alias="darkModeOutput"
    )
    color_format: ColorFormat = Field(default=ColorFormat.HEX, alias="colorFormat")
    include_legacy_fallbacks: bool = Field(default=False, alias="includeLegacyFallbacks")
    include_ids: bool = Field(default=False, alias="includeIds")
    include_timestamp: bool = Field(default=False, alias="includeTimestamp")
    viewport_relative_overrides: tuple[str, ...] = Field(
        default=(),
        alias="viewportRelativeOverrides",
        description="Identifiers rendered as min(100vw, max) instead of clamp()",
    )
    non_linear_overrides: tuple[str, ...] = Field(
        default=(),
        alias="nonLinearOverrides",
        description="Identifiers rendered as piecewise clamp() segments",
    )
    include_text_styles: bool = Field(default=False, alias="includeTextStyles")
    text_style_format: TextStyleFormat = Field(
        default=TextStyleFormat.CSS_VARS, alias="textStyleFormat"
    )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> ExportOptions:
        """Validate caller-supplied options, raising ConfigError on bad input."""
        try:
            return cls.model_validate(dict(data or {}))
        except ValidationError as e:
            raise ConfigError(f"Invalid export options: {e}") from e

    @property
    def desktop_first(self) -> bool:
        return self.breakpoint_direction == BreakpointDirection.DESKTOP_FIRST

    @property
    def use_prefers_color_scheme(self) -> bool:
        return self.dark_mode_output in (
            DarkModeOutput.PREFERS_COLOR_SCHEME,
            DarkModeOutput.BOTH,
        )

    @property
    def use_theme_class(self) -> bool:
        return self.dark_mode_output in (DarkModeOutput.CLASS, DarkModeOutput.BOTH)


# =============================================================================
# Breakpoint table
# =============================================================================

BREAKPOINT_NAMES: tuple[str, ...] = ("desktop", "laptop", "tablet", "mobile")


class BreakpointTable(BaseModel):
    """Viewport widths for the four known breakpoint keywords.

    The widths are where each breakpoint starts applying. They are the
    interpolation endpoints for clamp() and the media-query thresholds:
    ``max-width: width - 1`` when desktop-first, ``min-width: width`` when
    mobile-first.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    desktop: int = Field(default=1680, gt=0)
    laptop: int = Field(default=1366, gt=0)
    tablet: int = Field(default=840, gt=0)
    mobile: int = Field(default=480, gt=0)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> BreakpointTable:
        """Build a table from caller widths, defaulting any that are missing."""
        try:
            return cls.model_validate(dict(data or {}))
        except ValidationError as e:
            raise ConfigError(f"Invalid breakpoint widths: {e}") from e

    def with_overrides(self, overrides: Mapping[str, int | None]) -> BreakpointTable:
        """Return a new table with the truthy overrides applied."""
        update = {
            name: width
            for name, width in overrides.items()
            if name in BREAKPOINT_NAMES and width
        }
        if not update:
            return self
        return BreakpointTable.from_mapping({**self.model_dump(), **update})

    def items(self) -> Iterator[tuple[str, int]]:
        for name in BREAKPOINT_NAMES:
            yield name, getattr(self, name)

    def keyword_for(self, mode_name: str) -> str | None:
        """Return the first breakpoint keyword contained in a mode name."""
        lower = mode_name.lower()
        for name in BREAKPOINT_NAMES:
            if name in lower:
                return name
        return None

    def lookup(self, mode_name: str) -> int | None:
        """Width for a mode name, or None when no keyword matches."""
        keyword = self.keyword_for(mode_name)
        if keyword is None:
            return None
        return int(getattr(self, keyword))
