"""Numeric rounding and formatting shared by every emitter."""

from __future__ import annotations

import math


def round_to(value: float, decimals: int) -> float:
    """Round half up to ``decimals`` places (0.125 -> 0.13, -0.5 -> 0)."""
    factor = 10**decimals
    return math.floor(value * factor + 0.5) / factor


def format_number(value: float) -> str:
    """Shortest text for a number: integers lose the ``.0``, ``-0`` is ``0``."""
    if value == 0:
        return "0"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
