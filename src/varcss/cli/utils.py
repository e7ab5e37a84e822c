"""
varcss CLI Utilities.

Shared utility functions used across CLI modules.
"""

import logging
import os
import platform

import typer

LOG_LEVEL_ENV = "VARCSS_LOG_LEVEL"


def get_version() -> str:
    """Get varcss version from package metadata."""
    from varcss import __version__

    return __version__


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"varcss {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr; --verbose wins over VARCSS_LOG_LEVEL."""
    if verbose:
        level = logging.DEBUG
    else:
        name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
        level = getattr(logging, name, None)
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
