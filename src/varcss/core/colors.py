"""
Literal color conversion.

Colors arrive as sRGB channels in the 0-1 range with optional alpha and
are emitted as hex or as an oklch() string. No external color libraries
required.
"""

from __future__ import annotations

import math

from .numbers import format_number, round_to


def _channel_hex(n: float) -> str:
    return f"{int(round_to(n * 255, 0)):02x}"


def rgb_to_hex(r: float, g: float, b: float, a: float | None = None) -> str:
    """Format sRGB channels as ``#rrggbb`` or ``#rrggbbaa`` when translucent.

    Args:
        r: Red (0-1).
        g: Green (0-1).
        b: Blue (0-1).
        a: Alpha (0-1), omitted from the output when None or opaque.

    Returns:
        CSS hex color string.
    """
    hex_color = f"#{_channel_hex(r)}{_channel_hex(g)}{_channel_hex(b)}"
    if a is not None and a < 1:
        return hex_color + _channel_hex(a)
    return hex_color


def _to_linear(c: float) -> float:
    return c / 12.92 if c <= 0.04045 else ((c + 0.055) / 1.055) ** 2.4


def rgb_to_oklch(r: float, g: float, b: float, a: float | None = None) -> str:
    """Approximate an oklch() string for sRGB channels.

    sRGB is linearized and taken to CIE XYZ; lightness is the cube root of
    Y, chroma and hue come from the polar form of the X/Z plane. Lightness
    is rounded to 2 decimals, chroma to 3, hue to whole degrees. Alpha
    below 1 is appended as a percentage.
    """
    lr, lg, lb = _to_linear(r), _to_linear(g), _to_linear(b)

    x = 0.4124564 * lr + 0.3575761 * lg + 0.1804375 * lb
    y = 0.2126729 * lr + 0.7151522 * lg + 0.0721750 * lb
    z = 0.0193339 * lr + 0.1191920 * lg + 0.9503041 * lb

    lightness = round_to(math.copysign(abs(y) ** (1 / 3), y), 2)
    chroma = round_to(math.sqrt(x * x + z * z) * 0.4, 3)
    hue = round_to((math.degrees(math.atan2(z, x)) + 360) % 360, 0)

    body = f"{format_number(lightness)} {format_number(chroma)} {format_number(hue)}"
    if a is not None and a < 1:
        return f"oklch({body} / {format_number(round_to(a * 100, 0))}%)"
    return f"oklch({body})"
