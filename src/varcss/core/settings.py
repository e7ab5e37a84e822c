"""
Project configuration file.

``varcss.toml`` holds default export options and breakpoint widths so a
project does not have to repeat them on every run::

    [export]
    outputMode = "fluid"
    breakpointDirection = "mobile-first"
    colorFormat = "oklch"
    nonLinearOverrides = ["--typo-size-display"]

    [breakpoints]
    desktop = 1440
    mobile = 375
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .errors import ConfigError, ErrorContext
from .ir.options import BreakpointTable, ExportOptions

logger = logging.getLogger(__name__)

SETTINGS_FILE = "varcss.toml"


def find_settings(start: Path) -> Path | None:
    """Nearest varcss.toml in ``start`` or one of its parents."""
    for directory in (start, *start.parents):
        candidate = directory / SETTINGS_FILE
        if candidate.is_file():
            return candidate
    return None


def load_settings(
    path: Path | None,
    overrides: Mapping[str, Any] | None = None,
) -> tuple[ExportOptions, BreakpointTable]:
    """Options and breakpoints from a config file, with ``overrides`` on top.

    ``overrides`` uses the same keys as the ``[export]`` table; None values
    are ignored so unset command-line flags fall through to the file.
    """
    export: dict[str, Any] = {}
    breakpoints: dict[str, Any] = {}

    if path is not None:
        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Cannot read settings: {e}", ErrorContext(file=path)) from e

        export = dict(data.get("export", {}))
        breakpoints = dict(data.get("breakpoints", {}))
        logger.debug(f"Loaded settings from {path}")

    export.update({k: v for k, v in (overrides or {}).items() if v is not None})

    try:
        return ExportOptions.from_mapping(export), BreakpointTable.from_mapping(breakpoints)
    except ConfigError as e:
        if path is None:
            raise
        raise ConfigError(e.message, ErrorContext(file=path)) from e
