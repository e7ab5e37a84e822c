"""
Fluid scaling.

Value formatting, mode-variance checks and the interpolation formulas
used for breakpoint collections:

- linear clamp between the widest and narrowest breakpoint,
- piecewise clamp, one linear segment per adjacent breakpoint pair,
- ``min(100vw, max)`` for viewport-relative tokens,
- bare column counts for grid proportions.

It also measures how far interior breakpoints stray from the end-to-end
line so callers can offer piecewise treatment. Nothing here holds state.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from .ir.options import AliasMode, ExportOptions
from .ir.report import InteriorDeviation, ModeSample, NonLinearCandidate
from .ir.tokens import AliasValue, LiteralValue, Mode, ProcessedValue, Variable, VariableType
from .naming import is_font_style_value, is_unitless
from .numbers import format_number, round_to

logger = logging.getLogger(__name__)

# Longest names first so "three-quarters" wins over "quarter"
PROPORTION_COLUMNS: tuple[tuple[tuple[str, ...], int], ...] = (
    (
        (
            "three-quarters",
            "three quarters",
            "threequarters",
            "three-quarter",
            "three quarter",
            "threequarter",
        ),
        9,
    ),
    (("two-thirds", "two thirds", "twothirds", "two-third", "two third", "twothird"), 8),
    (("quarter",), 3),
    (("whole",), 12),
    (("third",), 4),
    (("half",), 6),
)

GRID_COLUMNS = 12


# =============================================================================
# Formatting
# =============================================================================


def unit_for(variable: Variable) -> str:
    return "" if is_unitless(variable.name, variable.css_name) else "px"


def format_value(
    value: ProcessedValue | None, variable: Variable, options: ExportOptions
) -> str | None:
    """CSS text for one mode's value, or None when nothing should be emitted."""
    match value:
        case None:
            return None
        case AliasValue(target_name=target_name):
            if options.alias_mode == AliasMode.PRESERVED and target_name:
                return f"var({target_name})"
            return None
        case LiteralValue(value=literal):
            return _format_literal(literal, variable)


def _format_literal(literal: int | float | str, variable: Variable) -> str:
    match variable.resolved_type:
        case VariableType.FLOAT if isinstance(literal, (int, float)):
            return f"{format_number(round_to(literal, 2))}{unit_for(variable)}"
        case VariableType.STRING if isinstance(literal, str):
            if is_font_style_value(literal):
                return literal.lower().strip()
            return f'"{literal}"'
        case _:
            return str(literal)


def numeric_value(variable: Variable, mode: Mode) -> float | None:
    value = variable.values_by_mode.get(mode.mode_id)
    if isinstance(value, LiteralValue) and isinstance(value.value, (int, float)):
        return float(value.value)
    return None


def sort_breakpoint_modes(modes: Sequence[Mode]) -> list[Mode]:
    """Modes ordered widest first; unmatched modes sort as width 0."""
    return sorted(modes, key=lambda m: m.breakpoint_px or 0, reverse=True)


def width(mode: Mode) -> int:
    return mode.breakpoint_px or 0


# =============================================================================
# Variance
# =============================================================================


def has_mode_variance(variable: Variable, modes: Sequence[Mode], options: ExportOptions) -> bool:
    """True if any mode formats differently from the first mode."""
    if len(modes) <= 1:
        return False
    first = format_value(variable.values_by_mode.get(modes[0].mode_id), variable, options)
    for mode in modes[1:]:
        value = variable.values_by_mode.get(mode.mode_id)
        if value is None:
            continue
        if format_value(value, variable, options) != first:
            return True
    return False


def needs_media_queries(
    variable: Variable, modes: Sequence[Mode], options: ExportOptions
) -> bool:
    """Whether per-breakpoint values must come from media queries.

    Varying aliases and non-numeric values cannot be interpolated; varying
    numeric literals can.
    """
    if not has_mode_variance(variable, modes, options):
        return False
    if variable.resolved_type != VariableType.FLOAT:
        return True
    return any(
        isinstance(variable.values_by_mode.get(mode.mode_id), AliasValue) for mode in modes
    )


def is_scaling_float(variable: Variable, modes: Sequence[Mode], options: ExportOptions) -> bool:
    """Numeric literal that changes across breakpoints."""
    return (
        variable.resolved_type == VariableType.FLOAT
        and not variable.is_alias
        and has_mode_variance(variable, modes, options)
    )


# =============================================================================
# Clamp formulas
# =============================================================================


def linear_clamp(
    from_px: int, from_value: float, to_px: int, to_value: float, unit: str
) -> str:
    """clamp() interpolating linearly between two (width, value) points.

    slope = (wide_value - narrow_value) / (wide_px - narrow_px)
    intercept = narrow_value - slope * narrow_px
    """
    if from_px >= to_px:
        max_px, max_val, min_px, min_val = from_px, from_value, to_px, to_value
    else:
        max_px, max_val, min_px, min_val = to_px, to_value, from_px, from_value

    if max_val == min_val or max_px == min_px:
        return f"{format_number(round_to(max_val, 2))}{unit}"

    slope = (max_val - min_val) / (max_px - min_px)
    intercept = min_val - slope * min_px

    slope_vw = format_number(round_to(slope * 100, 4))
    intercept_px = round_to(intercept, 2)
    lower = format_number(round_to(min(min_val, max_val), 2))
    upper = format_number(round_to(max(min_val, max_val), 2))

    if intercept_px >= 0:
        preferred = f"{format_number(intercept_px)}{unit} + {slope_vw}vw"
    else:
        preferred = f"{slope_vw}vw - {format_number(abs(intercept_px))}{unit}"

    return f"clamp({lower}{unit}, calc({preferred}), {upper}{unit})"


def viewport_relative_value(max_value: float, unit: str) -> str:
    return f"min(100vw, {format_number(round_to(max_value, 2))}{unit})"


@dataclass(frozen=True)
class FluidValue:
    value: str
    kind: Literal["clamp", "viewport", "static"]


def fluid_value(
    modes: Sequence[Mode], variable: Variable, options: ExportOptions
) -> FluidValue | None:
    """End-to-end value for a scaling variable (``modes`` widest first).

    Returns None if either extreme mode has no numeric value.
    """
    widest, narrowest = modes[0], modes[-1]
    max_value = numeric_value(variable, widest)
    min_value = numeric_value(variable, narrowest)
    if max_value is None or min_value is None:
        return None

    unit = unit_for(variable)
    if should_use_viewport_relative(variable, options):
        return FluidValue(viewport_relative_value(max_value, unit), "viewport")

    if not unit and max_value == min_value:
        return FluidValue(format_number(round_to(max_value, 2)), "static")

    return FluidValue(
        linear_clamp(width(widest), max_value, width(narrowest), min_value, unit), "clamp"
    )


@dataclass(frozen=True)
class Segment:
    """One piecewise clamp() segment and the media condition it lives under."""

    condition: str | None
    label: str
    value: str


def max_width_condition(upper: Mode) -> str:
    return f"(max-width: {width(upper) - 1}px)"


def min_width_condition(lower: Mode) -> str:
    return f"(min-width: {width(lower)}px)"


def piecewise_segments(
    modes: Sequence[Mode], variable: Variable, desktop_first: bool
) -> list[Segment]:
    """One clamp() per adjacent breakpoint pair (``modes`` widest first).

    The first segment belongs in the default block: the widest pair when
    desktop-first, the narrowest when mobile-first. Each further segment is
    keyed to the breakpoint where it takes over.
    """
    unit = unit_for(variable)
    ordered = list(modes) if desktop_first else list(reversed(modes))
    segments: list[Segment] = []

    for index in range(len(ordered) - 1):
        start, end = ordered[index], ordered[index + 1]
        start_value = numeric_value(variable, start)
        end_value = numeric_value(variable, end)
        if start_value is None or end_value is None:
            continue

        if index == 0:
            condition = None
        elif desktop_first:
            condition = max_width_condition(start)
        else:
            condition = min_width_condition(start)

        segments.append(
            Segment(
                condition=condition,
                label=f"{start.name} → {end.name}",
                value=linear_clamp(width(start), start_value, width(end), end_value, unit),
            )
        )
    return segments


# =============================================================================
# Special treatments
# =============================================================================


def viewport_candidate_reason(variable: Variable) -> Literal["name", "description"] | None:
    if "viewport" in variable.name.lower():
        return "name"
    if "viewport" in variable.description.lower():
        return "description"
    return None


def should_use_viewport_relative(variable: Variable, options: ExportOptions) -> bool:
    """Viewport-relative output is opt-in per identifier."""
    return variable.css_name in options.viewport_relative_overrides


def proportion_column_count(variable: Variable) -> int | None:
    """Column count on a 12-column grid for "proportion" tokens."""
    name = variable.name.lower()
    if "proportion" not in name or "viewport" in name:
        return None
    for patterns, columns in PROPORTION_COLUMNS:
        if any(pattern in name for pattern in patterns):
            return columns
    return None


def proportion_declarations(css_name: str, columns: int) -> list[str]:
    return [f"{css_name}: {columns};", f"{css_name}--fr: {columns}fr;"]


def should_use_piecewise(variable: Variable, options: ExportOptions) -> bool:
    """Piecewise clamp is opt-in per identifier."""
    return variable.css_name in options.non_linear_overrides


def non_linear_deviation(
    variable: Variable, modes: Sequence[Mode]
) -> NonLinearCandidate | None:
    """Measure interior breakpoints against the end-to-end line.

    ``modes`` is widest first. Every numeric, non-alias variable whose
    values differ across at least two modes qualifies; the deviation of an
    interior mode is ``|actual - expected| / |widest - narrowest|``.
    """
    if len(modes) < 2 or variable.resolved_type != VariableType.FLOAT:
        return None

    samples: list[ModeSample] = []
    for mode in modes:
        number = numeric_value(variable, mode)
        if number is None:
            return None
        samples.append(ModeSample(name=mode.name, value=number, breakpoint_px=width(mode)))

    if all(s.value == samples[0].value for s in samples):
        return None

    widest, narrowest = samples[0], samples[-1]
    span = abs(widest.value - narrowest.value)
    interior: list[InteriorDeviation] = []

    if len(samples) >= 3 and span > 0 and widest.breakpoint_px != narrowest.breakpoint_px:
        slope = (widest.value - narrowest.value) / (
            widest.breakpoint_px - narrowest.breakpoint_px
        )
        for sample in samples[1:-1]:
            expected = narrowest.value + slope * (sample.breakpoint_px - narrowest.breakpoint_px)
            interior.append(
                InteriorDeviation(
                    name=sample.name,
                    breakpoint_px=sample.breakpoint_px,
                    actual=sample.value,
                    expected=expected,
                    deviation=abs(sample.value - expected) / span,
                )
            )

    return NonLinearCandidate(
        css_name=variable.css_name,
        original_name=variable.name,
        collection_id=variable.collection_id,
        collection_name=variable.collection_name,
        group=variable.group,
        interior=tuple(interior),
        max_deviation=max((d.deviation for d in interior), default=0.0),
        mode_values=tuple(samples),
    )
