"""
varcss command line application.
"""

from __future__ import annotations

import sys

import typer

from varcss.cli.utils import configure_logging, version_callback

# =============================================================================
# Main Application
# =============================================================================

app = typer.Typer(
    help="""varcss - compile design tokens into CSS custom properties

Commands:
  • generate: write the stylesheet (and optionally a JSON report)
  • scan: list collections with their layer and mode classification
  • breakpoints: compare detected breakpoint widths with the defaults
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """varcss CLI main callback for global options."""
    configure_logging(verbose)


# =============================================================================
# Token Commands (imported from cli.tokens)
# =============================================================================
from varcss.cli.tokens import (  # noqa: E402
    breakpoints_command,
    generate_command,
    scan_command,
)

app.command(name="generate")(generate_command)
app.command(name="scan")(scan_command)
app.command(name="breakpoints")(breakpoints_command)


# =============================================================================
# Main Entry Point
# =============================================================================


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
