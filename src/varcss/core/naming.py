"""
Token name normalization.

Turns token path names ("Space/Fixed/1", "Stroke--Width") into CSS
custom-property identifiers and classifies names that should be emitted
without a unit. All keyword checks go through ``matches_as_segment`` so
that "order" never matches inside "border".
"""

from __future__ import annotations

import re

from .ir.tokens import LayerType

_WHITESPACE = re.compile(r"\s+")
_NON_IDENT = re.compile(r"[^a-z0-9-]")
_LONG_HYPHEN_RUN = re.compile(r"-{3,}")
_EDGE_HYPHENS = re.compile(r"^-+|-+$")

SEGMENT_BOUNDARIES = "-/. "

# Domains that already read as a prefix for collections with no layer keyword
KNOWN_DOMAINS: tuple[str, ...] = (
    "typo",
    "space",
    "color",
    "dimension",
    "static",
    "size",
    "radius",
    "border",
)

# line-height is deliberately absent: it is authored in pixels, and a
# unitless 38 would mean 38x the font size.
UNITLESS_KEYWORDS: tuple[str, ...] = (
    "weight",
    "column-count",
    "column count",
    "columncount",
    "opacity",
    "z-index",
    "zindex",
    "z index",
    "order",
    "flex-grow",
    "flex-shrink",
    "flex grow",
    "flex shrink",
    "ratio",
    "columns",
    "rows",
    "count",
)

FONT_STYLE_KEYWORDS: tuple[str, ...] = ("italic", "oblique", "normal")

_TEXT_STYLE_NAMESPACE = re.compile(r"^(?:short-form|long-form|sf|lf)\s*/\s*", re.IGNORECASE)


def slugify(name: str) -> str:
    """Lowercase a token path and reduce it to ``[a-z0-9-]``.

    Runs of three or more hyphens collapse to two, so an authored double
    hyphen ("stroke--width") survives while "a / b" style separators merge.
    """
    slug = _WHITESPACE.sub("-", name.lower())
    slug = _NON_IDENT.sub("-", slug)
    slug = _LONG_HYPHEN_RUN.sub("--", slug)
    return _EDGE_HYPHENS.sub("", slug)


def generate_css_name(var_name: str, domain: str, layer_type: LayerType) -> str:
    """Build the custom-property name (with leading ``--``) for a token.

    Mappings are the stable, component-facing API and never get a domain
    prefix. Foundations and aliases always carry their domain. Other
    collections are prefixed unless the name already starts with a known
    domain word.
    """
    css_name = slugify(var_name)
    prefix = slugify(domain)

    if layer_type == LayerType.MAPPINGS or not prefix:
        return f"--{css_name}"

    has_prefix = css_name.startswith(f"{prefix}-") or css_name == prefix

    if layer_type in (LayerType.FOUNDATIONS, LayerType.ALIASES, LayerType.ALIASES_EXTENDED):
        if not has_prefix:
            css_name = f"{prefix}-{css_name}" if css_name else prefix
        return f"--{css_name}"

    known = any(css_name.startswith(f"{d}-") for d in KNOWN_DOMAINS)
    if not known and not css_name.startswith(f"{prefix}-"):
        css_name = f"{prefix}-{css_name}" if css_name else prefix
    return f"--{css_name}"


def matches_as_segment(text: str, keyword: str) -> bool:
    """True if ``keyword`` occurs in ``text`` bounded by separators or edges."""
    if not keyword:
        return False
    start = text.find(keyword)
    while start != -1:
        end = start + len(keyword)
        before = start == 0 or text[start - 1] in SEGMENT_BOUNDARIES
        after = end == len(text) or text[end] in SEGMENT_BOUNDARIES
        if before and after:
            return True
        start = text.find(keyword, start + 1)
    return False


def contains_any_segment(text: str, keywords: tuple[str, ...]) -> bool:
    lower = text.lower()
    return any(matches_as_segment(lower, keyword) for keyword in keywords)


def is_unitless(name: str, css_name: str = "") -> bool:
    """Whether a numeric token should be emitted as a bare number."""
    return contains_any_segment(name, UNITLESS_KEYWORDS) or contains_any_segment(
        css_name, UNITLESS_KEYWORDS
    )


def is_font_style_value(value: str) -> bool:
    """CSS font-style keywords are emitted unquoted."""
    lower = value.lower().strip()
    return lower in FONT_STYLE_KEYWORDS or lower.startswith("oblique ")


def text_style_slug(style_name: str) -> str:
    """Identifier for a composite text style, minus its namespace folder."""
    return slugify(_TEXT_STYLE_NAMESPACE.sub("", style_name))
