"""
varcss - design-token graph to CSS custom-property compiler.

Reads collections of design variables (colors, dimensions, typography)
and writes one stylesheet of CSS custom properties, scaling breakpoint
tokens fluidly with clamp() and theming color tokens per light/dark mode.
"""

from __future__ import annotations

import re
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

from .core import ir
from .core.errors import ConfigError, SnapshotError, SourceError, VarCSSError
from .core.pipeline import generate_css, scan_collections


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    try:
        return _metadata_version("varcss")
    except Exception:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    "generate_css",
    "scan_collections",
    "VarCSSError",
    "ConfigError",
    "SnapshotError",
    "SourceError",
]
