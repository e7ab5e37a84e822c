"""
Composite text styles.

Each text style combines six typography properties. A property bound to a
variable becomes a bare ``var()`` reference; the rest are computed from the
style's own values. Output is a SCSS mixin, a CSS class or a set of custom
properties, depending on ``text_style_format``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from .emitter import SECTION_RULE
from .ir.options import ExportOptions, TextStyleFormat
from .ir.tokens import Variable
from .naming import text_style_slug
from .numbers import format_number, round_to
from .source import RawTextStyle

logger = logging.getLogger(__name__)

# (binding key, custom-property suffix, CSS property), in output order
TEXT_PROPERTIES: tuple[tuple[str, str, str], ...] = (
    ("fontFamily", "family", "font-family"),
    ("fontSize", "size", "font-size"),
    ("fontStyle", "style", "font-style"),
    ("fontWeight", "weight", "font-weight"),
    ("lineHeight", "line-height", "line-height"),
    ("letterSpacing", "letter-spacing", "letter-spacing"),
)

# Checked in order; compound names come before the words they contain
FONT_WEIGHTS: tuple[tuple[tuple[str, ...], int], ...] = (
    (("thin", "hairline"), 100),
    (("extralight", "ultralight"), 200),
    (("light",), 300),
    (("medium",), 500),
    (("semibold", "demibold"), 600),
    (("extrabold", "ultrabold"), 800),
    (("bold",), 700),
    (("black", "heavy"), 900),
)

FORMAT_LABELS: dict[TextStyleFormat, str] = {
    TextStyleFormat.SCSS_MIXIN: "SCSS Mixins",
    TextStyleFormat.CSS_CLASS: "CSS Classes",
    TextStyleFormat.CSS_VARS: "CSS Custom Properties",
}


def font_weight(style_name: str) -> int:
    """Numeric weight for a font style name such as "Semi Bold Italic"."""
    compact = style_name.lower().replace(" ", "").replace("-", "")
    for keywords, weight in FONT_WEIGHTS:
        if any(keyword in compact for keyword in keywords):
            return weight
    return 400


def raw_property(style: RawTextStyle, key: str) -> str:
    """The style's own value for one property."""
    match key:
        case "fontFamily":
            return f'"{style.font_family}"'
        case "fontSize":
            return f"{format_number(round_to(style.font_size, 2))}px"
        case "fontWeight":
            return str(font_weight(style.font_style))
        case "fontStyle":
            return "italic" if "italic" in style.font_style.lower() else "normal"
        case "lineHeight":
            metric = style.line_height
            if metric.unit == "PIXELS":
                return f"{format_number(round_to(metric.value, 2))}px"
            if metric.unit == "PERCENT":
                return f"{round_to(metric.value / 100, 2):.2f}"
            return "normal"
        case "letterSpacing":
            metric = style.letter_spacing
            if metric.unit == "PIXELS":
                return f"{format_number(round_to(metric.value, 2))}px"
            if metric.unit == "PERCENT":
                return f"{round_to(metric.value / 100, 3):.3f}em"
            return "0px"
    return ""


def resolve_property(
    style: RawTextStyle, key: str, variables: Mapping[str, Variable]
) -> str:
    """``var(--x)`` for a bound property, else the raw value.

    Bound variables are usually responsive, so no static fallback is
    attached to the reference.
    """
    variable_id = style.bound_variables.get(key)
    if variable_id:
        variable = variables.get(variable_id)
        if variable is not None:
            return f"var({variable.css_name})"
        logger.debug(f"Text style '{style.name}': {key} bound to unknown variable {variable_id}")
    return raw_property(style, key)


def compose_text_styles(
    styles: Sequence[RawTextStyle],
    options: ExportOptions,
    variables: Mapping[str, Variable],
) -> list[str]:
    """Lines for the text-style section, empty when there are no styles."""
    if not styles:
        return []

    fmt = options.text_style_format
    lines = [
        f"/* {SECTION_RULE}",
        "   TEXT STYLES — Composite typography tokens from text styles",
        f"   Format: {FORMAT_LABELS[fmt]}",
        f"   {SECTION_RULE} */",
        "",
    ]
    if fmt == TextStyleFormat.CSS_VARS:
        lines.append(":root {")

    for style in styles:
        name = text_style_slug(style.name)
        values = [
            (suffix, prop, resolve_property(style, key, variables))
            for key, suffix, prop in TEXT_PROPERTIES
        ]

        if fmt == TextStyleFormat.CSS_VARS:
            lines.extend(f"  --{name}-{suffix}: {value};" for suffix, _, value in values)
        else:
            opener = f"@mixin {name} {{" if fmt == TextStyleFormat.SCSS_MIXIN else f".{name} {{"
            lines.append(opener)
            lines.extend(f"  {prop}: {value};" for _, prop, value in values)
            lines.append("}")
        lines.append("")

    if fmt == TextStyleFormat.CSS_VARS:
        lines.append("}")

    return lines
