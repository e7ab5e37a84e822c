"""
Stylesheet emission.

Walks the classified collections in a fixed order (domain, then layer)
and renders each with the strategy its mode type calls for:

- breakpoint collections: fluid clamp() or fixed per-breakpoint values,
- theme collections: a light default plus prefers-color-scheme and/or
  ``[data-theme]`` blocks,
- single-mode collections: one flat ``:root`` block.

Emission is a fold over collections. Each collection produces a
``Section`` and the running ``EmissionState`` absorbs it, so the names a
collection may declare depend only on the state handed to it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime

from .graph import TokenGraph
from .ir.options import ExportOptions, OutputMode
from .ir.report import NonLinearCandidate, ProportionCandidate, ViewportCandidate
from .ir.tokens import (
    LAYER_RANK,
    AliasValue,
    Collection,
    LayerType,
    Mode,
    ModeType,
    ProcessedValue,
    Variable,
)
from .naming import slugify
from .scaling import (
    GRID_COLUMNS,
    Segment,
    fluid_value,
    format_value,
    is_scaling_float,
    max_width_condition,
    min_width_condition,
    needs_media_queries,
    non_linear_deviation,
    piecewise_segments,
    proportion_column_count,
    proportion_declarations,
    should_use_piecewise,
    should_use_viewport_relative,
    sort_breakpoint_modes,
    viewport_candidate_reason,
)

logger = logging.getLogger(__name__)

BANNER_RULE = "=" * 74
SECTION_RULE = "-" * 74
LEGACY_GUARD = "@supports not (width: clamp(1px, 1vw, 2px))"


# =============================================================================
# Emission state
# =============================================================================


@dataclass(frozen=True)
class EmissionState:
    """Everything emitted so far: text, declared names and report lists."""

    lines: tuple[str, ...] = ()
    emitted: frozenset[str] = frozenset()
    viewport_relative_vars: tuple[str, ...] = ()
    viewport_candidates: tuple[ViewportCandidate, ...] = ()
    proportion_vars: tuple[str, ...] = ()
    proportion_candidates: tuple[ProportionCandidate, ...] = ()
    non_linear_vars: tuple[str, ...] = ()
    non_linear_candidates: tuple[NonLinearCandidate, ...] = ()

    def absorb(self, section: Section) -> EmissionState:
        return replace(
            self,
            lines=self.lines + tuple(section.lines),
            emitted=self.emitted | section.emitted,
            viewport_relative_vars=self.viewport_relative_vars
            + tuple(section.viewport_relative_vars),
            viewport_candidates=self.viewport_candidates + tuple(section.viewport_candidates),
            proportion_vars=self.proportion_vars + tuple(section.proportion_vars),
            proportion_candidates=self.proportion_candidates
            + tuple(section.proportion_candidates),
            non_linear_vars=self.non_linear_vars + tuple(section.non_linear_vars),
            non_linear_candidates=self.non_linear_candidates
            + tuple(section.non_linear_candidates),
        )

    @property
    def css(self) -> str:
        return "\n".join(self.lines)


@dataclass
class Section:
    """Output of one collection.

    ``prior`` is the set of names declared by earlier collections and
    ``reserved`` the names foundations declare anywhere in the stylesheet.
    """

    options: ExportOptions
    prior: frozenset[str] = frozenset()
    reserved: frozenset[str] = frozenset()
    lines: list[str] = field(default_factory=list)
    emitted: set[str] = field(default_factory=set)
    declared_ids: set[str] = field(default_factory=set)
    claimed: set[str] = field(default_factory=set)
    viewport_relative_vars: list[str] = field(default_factory=list)
    viewport_candidates: list[ViewportCandidate] = field(default_factory=list)
    proportion_vars: list[str] = field(default_factory=list)
    proportion_candidates: list[ProportionCandidate] = field(default_factory=list)
    non_linear_vars: list[str] = field(default_factory=list)
    non_linear_candidates: list[NonLinearCandidate] = field(default_factory=list)

    def admits(self, variable: Variable, value: ProcessedValue) -> bool:
        """Claim ``variable``'s name for this section unless it must be skipped."""
        if should_skip(variable, value, self.prior | self.claimed, self.reserved):
            logger.debug(f"Skipping {variable.css_name} from '{variable.collection_name}'")
            return False
        self.claimed.add(variable.css_name)
        return True

    def declare(self, variable: Variable, css_value: str, indent: str = "  ") -> None:
        if self.options.include_ids:
            self.lines.append(f"{indent}/* {variable.id} */")
        self.lines.append(f"{indent}{variable.css_name}: {css_value};")
        self.emitted.add(variable.css_name)
        self.declared_ids.add(variable.id)


def is_self_alias(variable: Variable, value: ProcessedValue | None) -> bool:
    return isinstance(value, AliasValue) and value.target_name == variable.css_name


def should_skip(
    variable: Variable,
    value: ProcessedValue,
    emitted: Iterable[str] | frozenset[str],
    reserved: frozenset[str] = frozenset(),
) -> bool:
    """Gate applied before a variable enters any default block.

    Skips self-referencing aliases (``--x: var(--x)``) and names already
    declared, unless the variable is a foundation: foundations always win
    a name collision.
    """
    if is_self_alias(variable, value):
        return True
    if variable.layer_type == LayerType.FOUNDATIONS:
        return False
    return variable.css_name in emitted or variable.css_name in reserved


# =============================================================================
# Block helpers
# =============================================================================


def transitions(modes: Sequence[Mode], desktop_first: bool) -> list[tuple[str, Mode]]:
    """Media condition and the mode whose values apply under it.

    ``modes`` is widest first. Desktop-first steps down with max-width at
    one pixel below the next wider breakpoint; mobile-first steps up with
    min-width at each breakpoint.
    """
    if desktop_first:
        return [
            (max_width_condition(modes[i - 1]), modes[i]) for i in range(1, len(modes))
        ]
    return [(min_width_condition(modes[i]), modes[i]) for i in range(len(modes) - 2, -1, -1)]


def media_block(
    condition: str, declarations: Sequence[str], indent: str = "", selector: str = ":root"
) -> list[str]:
    inner = indent + "  "
    lines = [f"{indent}@media {condition} {{", f"{inner}{selector} {{"]
    lines.extend(f"{inner}  {declaration}" for declaration in declarations)
    lines.extend([f"{inner}}}", f"{indent}}}"])
    return lines


def selector_block(selector: str, declarations: Sequence[str]) -> list[str]:
    return [f"{selector} {{", *(f"  {d}" for d in declarations), "}"]


def mode_declarations(
    variables: Iterable[Variable], mode: Mode, options: ExportOptions, declared_ids: set[str]
) -> list[str]:
    """Declarations for ``mode`` limited to variables already in the default block."""
    declarations: list[str] = []
    for variable in variables:
        if variable.id not in declared_ids:
            continue
        value = variable.values_by_mode.get(mode.mode_id)
        if is_self_alias(variable, value):
            continue
        css_value = format_value(value, variable, options)
        if css_value is not None:
            declarations.append(f"{variable.css_name}: {css_value};")
    return declarations


# =============================================================================
# Strategies
# =============================================================================


def emit_breakpoint_fluid(
    section: Section, modes: Sequence[Mode], variables: Sequence[Variable]
) -> None:
    """Interpolated values in ``:root``; media queries for what cannot scale."""
    options = section.options
    desktop_first = options.desktop_first
    default_mode = modes[0] if desktop_first else modes[-1]
    widest = modes[0]

    clampable: list[Variable] = []
    media_driven: list[Variable] = []

    for variable in variables:
        value = variable.values_by_mode.get(widest.mode_id)
        if value is None or not section.admits(variable, value):
            continue

        if needs_media_queries(variable, modes, options):
            media_driven.append(variable)
            continue

        clampable.append(variable)
        if is_scaling_float(variable, modes, options):
            _collect_candidates(section, variable, modes)

    piecewise: list[tuple[Variable, list[Segment]]] = []
    section.lines.append(":root {")

    for variable in clampable:
        value = variable.values_by_mode.get(default_mode.mode_id)
        css_value = format_value(value, variable, options)
        if css_value is None:
            continue

        if not is_scaling_float(variable, modes, options):
            section.declare(variable, css_value)
            continue

        columns = proportion_column_count(variable)
        if columns is not None:
            _declare_proportion(section, variable, columns)
            continue

        if should_use_piecewise(variable, options) and not should_use_viewport_relative(
            variable, options
        ):
            segments = piecewise_segments(modes, variable, desktop_first)
            if segments and segments[0].condition is None:
                section.non_linear_vars.append(variable.css_name)
                section.lines.append(
                    f"  /* Piecewise clamp: non-linear scaling ({len(segments)} segments) */"
                )
                section.declare(variable, segments[0].value)
                piecewise.append((variable, segments[1:]))
                continue

        fluid = fluid_value(modes, variable, options)
        if fluid is None:
            section.declare(variable, css_value)
        elif fluid.kind == "viewport":
            section.viewport_relative_vars.append(variable.css_name)
            section.lines.append("  /* Viewport-relative: uses min() instead of clamp() */")
            section.declare(variable, fluid.value)
        else:
            section.declare(variable, fluid.value)

    for variable in media_driven:
        css_value = format_value(
            variable.values_by_mode.get(default_mode.mode_id), variable, options
        )
        if css_value is not None:
            section.declare(variable, css_value)

    section.lines.append("}")

    # Primary mechanism for aliases and non-numeric values, not a fallback
    for condition, mode in transitions(modes, desktop_first):
        declarations = mode_declarations(media_driven, mode, options, section.declared_ids)
        if declarations:
            section.lines.append("")
            section.lines.extend(media_block(condition, declarations))

    _emit_piecewise_segments(section, piecewise)

    if options.include_legacy_fallbacks:
        _emit_legacy_fallbacks(section, modes, clampable)


def _collect_candidates(section: Section, variable: Variable, modes: Sequence[Mode]) -> None:
    reason = viewport_candidate_reason(variable)
    if reason:
        section.viewport_candidates.append(
            ViewportCandidate(css_name=variable.css_name, original_name=variable.name, reason=reason)
        )

    columns = proportion_column_count(variable)
    if columns is not None:
        section.proportion_candidates.append(
            ProportionCandidate(
                css_name=variable.css_name, original_name=variable.name, column_count=columns
            )
        )

    # Proportions and viewport tokens scale for other reasons
    if columns is None and reason is None:
        candidate = non_linear_deviation(variable, modes)
        if candidate is not None:
            logger.debug(
                f"Non-linear candidate {variable.css_name}: max deviation "
                f"{candidate.max_deviation:.3f}"
            )
            section.non_linear_candidates.append(candidate)


def _declare_proportion(section: Section, variable: Variable, columns: int) -> None:
    section.proportion_vars.append(variable.css_name)
    if section.options.include_ids:
        section.lines.append(f"  /* {variable.id} */")
    section.lines.append(
        f"  /* Proportion: {columns}/{GRID_COLUMNS} columns (flex/grid-ready) */"
    )
    section.lines.extend(f"  {d}" for d in proportion_declarations(variable.css_name, columns))
    section.emitted.add(variable.css_name)
    section.declared_ids.add(variable.id)


def _emit_piecewise_segments(
    section: Section, piecewise: Sequence[tuple[Variable, list[Segment]]]
) -> None:
    conditions: dict[str, tuple[str, list[str]]] = {}
    for variable, segments in piecewise:
        for segment in segments:
            label, declarations = conditions.setdefault(segment.condition, (segment.label, []))
            declarations.append(f"{variable.css_name}: {segment.value};")

    for condition, (label, declarations) in conditions.items():
        section.lines.append("")
        section.lines.append(f"/* Piecewise clamp: {label} segment */")
        section.lines.extend(media_block(condition, declarations))


def _emit_legacy_fallbacks(
    section: Section, modes: Sequence[Mode], clampable: Sequence[Variable]
) -> None:
    options = section.options
    scaling = [
        v
        for v in clampable
        if v.id in section.declared_ids
        and is_scaling_float(v, modes, options)
        and proportion_column_count(v) is None
        and not should_use_viewport_relative(v, options)
    ]
    if not scaling:
        return

    blocks: list[str] = []
    for condition, mode in transitions(modes, options.desktop_first):
        declarations = mode_declarations(scaling, mode, options, section.declared_ids)
        if declarations:
            blocks.extend(media_block(condition, declarations, indent="  "))

    if blocks:
        section.lines.extend(["", "/* Fallback for older browsers */", f"{LEGACY_GUARD} {{"])
        section.lines.extend(blocks)
        section.lines.append("}")


def emit_breakpoint_fixed(
    section: Section, modes: Sequence[Mode], variables: Sequence[Variable]
) -> None:
    """Literal values per breakpoint, no interpolation."""
    options = section.options
    default_mode = modes[0] if options.desktop_first else modes[-1]
    proportions: set[str] = set()

    section.lines.append(":root {")
    for variable in variables:
        value = variable.values_by_mode.get(default_mode.mode_id)
        if value is None or not section.admits(variable, value):
            continue

        # Proportions keep their grid form even without interpolation
        columns = proportion_column_count(variable)
        if columns is not None:
            _declare_proportion(section, variable, columns)
            proportions.add(variable.id)
            continue

        css_value = format_value(value, variable, options)
        if css_value is not None:
            section.declare(variable, css_value)
    section.lines.append("}")

    stepped = [v for v in variables if v.id not in proportions]
    for condition, mode in transitions(modes, options.desktop_first):
        declarations = mode_declarations(stepped, mode, options, section.declared_ids - proportions)
        if declarations:
            section.lines.append("")
            section.lines.extend(media_block(condition, declarations))


def emit_theme(section: Section, collection: Collection, variables: Sequence[Variable]) -> None:
    """Light default, then per-theme blocks re-declaring every variable.

    Each theme block repeats every name even when light and dark agree, so
    alias chains resolve whichever selector wins the cascade.
    """
    options = section.options
    light = next((m for m in collection.modes if "light" in m.name.lower()), None)
    dark = next((m for m in collection.modes if "dark" in m.name.lower()), None)
    default_mode = light or collection.modes[0]

    section.lines.append(":root {")
    for variable in variables:
        value = variable.values_by_mode.get(default_mode.mode_id)
        if value is None or not section.admits(variable, value):
            continue
        css_value = format_value(value, variable, options)
        if css_value is not None:
            section.declare(variable, css_value)
    section.lines.append("}")

    declared = set(section.declared_ids)
    if light and dark:
        if options.use_prefers_color_scheme:
            for scheme, mode in (("light", light), ("dark", dark)):
                declarations = mode_declarations(variables, mode, options, declared)
                if declarations:
                    section.lines.append("")
                    section.lines.extend(
                        media_block(f"(prefers-color-scheme: {scheme})", declarations)
                    )

        if options.use_theme_class:
            section.lines.append("")
            section.lines.append("/* Explicit theme selectors - These override system preferences")
            section.lines.append("   and enable manual theme switching via JavaScript */")
            for scheme, mode in (("light", light), ("dark", dark)):
                declarations = mode_declarations(variables, mode, options, declared)
                if declarations:
                    section.lines.extend(selector_block(f'[data-theme="{scheme}"]', declarations))
                    section.lines.append("")
            if section.lines[-1] == "":
                section.lines.pop()

    if options.use_theme_class:
        extra = [m for m in collection.modes if m not in (light, dark, default_mode)]
        for mode in extra:
            declarations = mode_declarations(variables, mode, options, declared)
            if declarations:
                section.lines.append("")
                section.lines.extend(
                    selector_block(f'[data-theme="{slugify(mode.name)}"]', declarations)
                )


def emit_single(section: Section, collection: Collection, variables: Sequence[Variable]) -> None:
    """One flat default block from the first mode."""
    mode = collection.modes[0]
    section.lines.append(":root {")
    for variable in variables:
        value = variable.values_by_mode.get(mode.mode_id)
        if value is None or not section.admits(variable, value):
            continue
        css_value = format_value(value, variable, section.options)
        if css_value is not None:
            section.declare(variable, css_value)
    section.lines.append("}")


# =============================================================================
# Driver
# =============================================================================


def sort_collections(collections: Iterable[Collection]) -> list[Collection]:
    """Domain first, then foundations < aliases < extended < mappings < other."""
    return sorted(collections, key=lambda c: (c.domain, LAYER_RANK[c.layer_type]))


def header_lines(options: ExportOptions, generated_at: datetime | None = None) -> list[str]:
    mode = "Fluid (clamp)" if options.output_mode == OutputMode.FLUID else "Fixed (per-breakpoint)"
    direction = (
        "Desktop-first (max-width)" if options.desktop_first else "Mobile-first (min-width)"
    )
    lines = [f"/* {BANNER_RULE}", "   DESIGN TOKENS — Generated from design variables"]
    if options.include_timestamp and generated_at is not None:
        lines.append(f"   Date: {generated_at.isoformat()}")
    lines.extend(
        [f"   Mode: {mode}", f"   Direction: {direction}", f"   {BANNER_RULE} */", ""]
    )
    return lines


def emit_collection(
    state: EmissionState,
    collection: Collection,
    variables: Sequence[Variable],
    options: ExportOptions,
    reserved: frozenset[str] = frozenset(),
) -> EmissionState:
    """Render one collection against the state so far and return the new state.

    A collection that declares nothing contributes no lines, not even its
    section banner.
    """
    section = Section(options=options, prior=state.emitted, reserved=reserved)
    section.lines.extend(
        [f"/* {SECTION_RULE}", f"   {collection.name.upper()}", f"   {SECTION_RULE} */", ""]
    )

    if collection.mode_type == ModeType.BREAKPOINT:
        modes = sort_breakpoint_modes(collection.modes)
        if options.output_mode == OutputMode.FLUID and len(modes) >= 2:
            logger.debug(f"'{collection.name}': fluid breakpoint output")
            emit_breakpoint_fluid(section, modes, variables)
        else:
            logger.debug(f"'{collection.name}': fixed breakpoint output")
            emit_breakpoint_fixed(section, modes, variables)
    elif collection.mode_type == ModeType.THEME:
        logger.debug(f"'{collection.name}': theme output")
        emit_theme(section, collection, variables)
    else:
        emit_single(section, collection, variables)

    if section.emitted:
        section.lines.append("")
    else:
        logger.debug(f"'{collection.name}': nothing declared")
        section.lines.clear()
    return state.absorb(section)


def foundation_names(graph: TokenGraph, options: ExportOptions) -> frozenset[str]:
    """Names the foundations collections actually declare.

    Foundations are never gated by name, so rendering them on their own
    yields the same names they declare in the full stylesheet.
    """
    state = EmissionState()
    for collection in sort_collections(graph.collections):
        if collection.layer_type != LayerType.FOUNDATIONS:
            continue
        variables = graph.variables_in(collection.id)
        if variables and collection.modes:
            state = emit_collection(state, collection, variables, options)
    return state.emitted


def emit_stylesheet(
    graph: TokenGraph,
    options: ExportOptions,
    generated_at: datetime | None = None,
) -> EmissionState:
    """Render every collection of ``graph`` in output order."""
    reserved = foundation_names(graph, options)
    state = EmissionState(lines=tuple(header_lines(options, generated_at)))

    for collection in sort_collections(graph.collections):
        variables = graph.variables_in(collection.id)
        if not variables or not collection.modes:
            continue
        state = emit_collection(state, collection, variables, options, reserved)

    return state
