"""
varcss CLI Package.

- app.py: main typer app, global options and entry point
- tokens.py: generate, scan and breakpoints commands
- utils.py: shared utilities
"""

from varcss.cli.app import app, main
from varcss.cli.utils import get_version, version_callback

__all__ = [
    "app",
    "main",
    "get_version",
    "version_callback",
]
