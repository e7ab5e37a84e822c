"""
Token CLI commands.

- generate: compile a token snapshot into a stylesheet
- scan: show how each collection is classified
- breakpoints: show breakpoint widths detected from the snapshot
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from varcss.core.breakpoints import detect_breakpoints
from varcss.core.errors import VarCSSError
from varcss.core.ir import (
    AliasMode,
    BreakpointDirection,
    BreakpointTable,
    ColorFormat,
    DarkModeOutput,
    GenerationReport,
    OutputMode,
    TextStyleFormat,
)
from varcss.core.pipeline import generate_css, scan_collections
from varcss.core.settings import find_settings, load_settings
from varcss.core.snapshot_loader import load_snapshot

console = Console(stderr=True)


def _fail(error: VarCSSError) -> typer.Exit:
    console.print(f"[red]Error:[/red] {escape(str(error))}", highlight=False)
    return typer.Exit(code=1)


def _identifiers(names: list[str] | None) -> tuple[str, ...] | None:
    """Custom-property names, with the leading "--" added when omitted."""
    if not names:
        return None
    return tuple(n if n.startswith("--") else f"--{n}" for n in names)


def _print_summary(report: GenerationReport) -> None:
    console.print(
        f"[green]✓[/green] {report.variables} variables from {report.collections} collections"
    )
    if report.text_style_count:
        console.print(f"  {report.text_style_count} text styles")
    if report.viewport_relative_vars:
        console.print(f"  {len(report.viewport_relative_vars)} viewport-relative values")
    if report.proportion_vars:
        console.print(f"  {len(report.proportion_vars)} grid proportions")
    if report.non_linear_vars:
        console.print(f"  {len(report.non_linear_vars)} piecewise values")
    if report.viewport_candidates:
        console.print(
            f"  [cyan]{len(report.viewport_candidates)} viewport-relative candidates[/cyan]"
        )
    if report.non_linear_candidates:
        console.print(f"  [cyan]{len(report.non_linear_candidates)} non-linear candidates[/cyan]")
    for error in report.errors:
        console.print(f"  [yellow]![/yellow] {escape(error)}", highlight=False)


def generate_command(
    snapshot: Path = typer.Argument(..., help="Token snapshot (JSON or YAML)"),  # noqa: B008
    config: Path | None = typer.Option(  # noqa: B008
        None, "--config", "-c", help="Settings file (default: nearest varcss.toml)"
    ),
    output: Path | None = typer.Option(  # noqa: B008
        None, "--output", "-o", help="Write CSS here instead of stdout"
    ),
    report_path: Path | None = typer.Option(  # noqa: B008
        None, "--report", help="Write the generation report as JSON"
    ),
    mode: OutputMode | None = typer.Option(None, "--mode", help="fluid or fixed"),
    direction: BreakpointDirection | None = typer.Option(
        None, "--direction", help="Which breakpoint holds the default block"
    ),
    alias_mode: AliasMode | None = typer.Option(
        None, "--alias-mode", help="Keep var() references or flatten to literals"
    ),
    dark_mode: DarkModeOutput | None = typer.Option(
        None, "--dark-mode", help="Theme selector strategy"
    ),
    color_format: ColorFormat | None = typer.Option(None, "--color-format"),
    legacy_fallbacks: bool | None = typer.Option(
        None,
        "--legacy-fallbacks/--no-legacy-fallbacks",
        help="Add stepped values for browsers without clamp()",
    ),
    ids: bool | None = typer.Option(None, "--ids/--no-ids", help="Comment variable ids"),
    timestamp: bool | None = typer.Option(
        None, "--timestamp/--no-timestamp", help="Date the header"
    ),
    text_styles: bool | None = typer.Option(
        None, "--text-styles/--no-text-styles", help="Append composite text styles"
    ),
    text_style_format: TextStyleFormat | None = typer.Option(None, "--text-style-format"),
    viewport: list[str] | None = typer.Option(  # noqa: B008
        None, "--viewport", help="Render this identifier as min(100vw, max)"
    ),
    non_linear: list[str] | None = typer.Option(  # noqa: B008
        None, "--non-linear", help="Render this identifier as piecewise clamp()"
    ),
    detect: bool = typer.Option(
        False, "--detect-breakpoints", help="Read breakpoint widths from the snapshot"
    ),
) -> None:
    """Compile a token snapshot into a CSS custom-property stylesheet."""
    overrides: dict[str, Any] = {
        "outputMode": mode,
        "breakpointDirection": direction,
        "aliasMode": alias_mode,
        "darkModeOutput": dark_mode,
        "colorFormat": color_format,
        "includeLegacyFallbacks": legacy_fallbacks,
        "includeIds": ids,
        "includeTimestamp": timestamp,
        "includeTextStyles": text_styles,
        "textStyleFormat": text_style_format,
        "viewportRelativeOverrides": _identifiers(viewport),
        "nonLinearOverrides": _identifiers(non_linear),
    }

    try:
        options, breakpoints = load_settings(config or find_settings(Path.cwd()), overrides)
        source = load_snapshot(snapshot)

        if detect:
            detected = asyncio.run(detect_breakpoints(source, breakpoints))
            if detected is None:
                console.print("[yellow]No breakpoints detected; using configured widths[/yellow]")
            else:
                console.print(f"Breakpoints from [cyan]{detected.source_name}[/cyan]")
                breakpoints = detected.apply(breakpoints)

        result = asyncio.run(generate_css(source, options, breakpoints))
    except VarCSSError as e:
        raise _fail(e) from e

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result.css, encoding="utf-8")
        console.print(f"Wrote {output}")
    else:
        typer.echo(result.css)

    if report_path:
        report_path.write_text(result.report.model_dump_json(indent=2), encoding="utf-8")
        console.print(f"Wrote {report_path}")

    _print_summary(result.report)


def scan_command(
    snapshot: Path = typer.Argument(..., help="Token snapshot (JSON or YAML)"),  # noqa: B008
    config: Path | None = typer.Option(None, "--config", "-c"),  # noqa: B008
) -> None:
    """List local collections with their layer and mode classification."""
    try:
        _, breakpoints = load_settings(config or find_settings(Path.cwd()))
        result = asyncio.run(scan_collections(load_snapshot(snapshot), breakpoints))
    except VarCSSError as e:
        raise _fail(e) from e

    table = Table(title="Collections")
    table.add_column("Collection", style="cyan")
    table.add_column("Domain")
    table.add_column("Layer")
    table.add_column("Modes")
    table.add_column("Type")
    table.add_column("Variables", justify="right")

    for summary in result.collections:
        modes = ", ".join(
            f"{m.name} ({m.breakpoint_px}px)" if m.breakpoint_px else m.name
            for m in summary.modes
        )
        table.add_row(
            summary.name,
            summary.domain,
            summary.layer_type.value,
            modes,
            summary.mode_type.value,
            str(summary.variable_count),
        )

    Console().print(table)
    console.print(f"{len(result.collections)} collections, {result.total_variables} variables")


def breakpoints_command(
    snapshot: Path = typer.Argument(..., help="Token snapshot (JSON or YAML)"),  # noqa: B008
) -> None:
    """Compare breakpoint widths detected in the snapshot with the defaults."""
    defaults = BreakpointTable()
    try:
        detected = asyncio.run(detect_breakpoints(load_snapshot(snapshot), defaults))
    except VarCSSError as e:
        raise _fail(e) from e

    if detected is None:
        console.print("[yellow]No viewport variable with breakpoint values found[/yellow]")
        raise typer.Exit(code=1)

    table = Table(title=f"Breakpoints from {detected.source_name}")
    table.add_column("Breakpoint", style="cyan")
    table.add_column("Default", justify="right")
    table.add_column("Detected", justify="right")
    for name, width in defaults.items():
        found = detected.breakpoints.get(name)
        table.add_row(name, f"{width}px", f"{found}px" if found else "-")

    Console().print(table)
