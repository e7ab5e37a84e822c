"""
Generation pipeline.

Ties the stages together: read the source into a token graph, fold the
collections into a stylesheet, append composite text styles and collect
everything the caller should know into a GenerationReport.
"""

from __future__ import annotations

import logging
from datetime import datetime

from .classifier import classify_collection
from .emitter import emit_stylesheet
from .graph import build_token_graph
from .ir.options import BreakpointTable, ExportOptions
from .ir.report import (
    CollectionSummary,
    GenerationReport,
    GenerationResult,
    ModeSummary,
    ScanResult,
)
from .source import TokenSource
from .text_styles import compose_text_styles

logger = logging.getLogger(__name__)


async def generate_css(
    source: TokenSource,
    options: ExportOptions | None = None,
    breakpoints: BreakpointTable | None = None,
    generated_at: datetime | None = None,
) -> GenerationResult:
    """Generate the stylesheet and report for every local collection in ``source``.

    Args:
        source: Host token graph
        options: Export options (defaults when omitted)
        breakpoints: Breakpoint widths (defaults when omitted)
        generated_at: Timestamp for the header when ``include_timestamp`` is set

    Returns:
        GenerationResult with the CSS text and its report
    """
    options = options or ExportOptions()
    breakpoints = breakpoints or BreakpointTable()

    graph = await build_token_graph(source, options, breakpoints)
    if options.include_timestamp and generated_at is None:
        generated_at = datetime.now()
    state = emit_stylesheet(graph, options, generated_at)
    lines = list(state.lines)

    text_style_count = 0
    if options.include_text_styles:
        styles = await source.get_text_styles()
        text_style_count = len(styles)
        lines.extend(compose_text_styles(styles, options, graph.by_id))

    report = GenerationReport(
        collections=len(graph.collections),
        variables=len(graph.variables),
        errors=graph.errors,
        viewport_relative_vars=state.viewport_relative_vars,
        viewport_candidates=state.viewport_candidates,
        proportion_vars=state.proportion_vars,
        proportion_candidates=state.proportion_candidates,
        non_linear_vars=state.non_linear_vars,
        non_linear_candidates=state.non_linear_candidates,
        text_style_count=text_style_count,
    )
    logger.info(
        f"Generated {report.variables} variables from {report.collections} collections"
        f" ({len(report.errors)} diagnostics)"
    )
    return GenerationResult(css="\n".join(lines), report=report)


async def scan_collections(
    source: TokenSource, breakpoints: BreakpointTable | None = None
) -> ScanResult:
    """Summarize every local collection without reading variable values."""
    breakpoints = breakpoints or BreakpointTable()
    summaries: list[CollectionSummary] = []

    for raw in await source.get_collections():
        if raw.remote:
            continue
        collection = classify_collection(
            raw.id,
            raw.name,
            [(m.mode_id, m.name) for m in raw.modes],
            breakpoints,
            variable_ids=raw.variable_ids,
        )
        summaries.append(
            CollectionSummary(
                id=collection.id,
                name=collection.name,
                domain=collection.domain,
                layer=collection.layer,
                layer_type=collection.layer_type,
                modes=tuple(
                    ModeSummary(mode_id=m.mode_id, name=m.name, breakpoint_px=m.breakpoint_px)
                    for m in collection.modes
                ),
                mode_type=collection.mode_type,
                variable_count=collection.variable_count,
            )
        )

    summaries.sort(key=lambda s: (s.domain, s.layer))
    return ScanResult(
        collections=tuple(summaries),
        total_variables=sum(s.variable_count for s in summaries),
    )
