"""
Collection classification.

Derives domain, layer and layer type from a collection's display name
("Space - 2.1 Aliases Extended") and the mode type from its mode names.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from .ir.options import BreakpointTable
from .ir.tokens import Collection, LayerType, Mode, ModeType

logger = logging.getLogger(__name__)

_COLLECTION_NAME = re.compile(r"^([A-Za-z]+)\s*-\s*(.+)$")

THEME_KEYWORDS: tuple[str, ...] = ("light", "dark")

# Checked in order; "2.1" marks an extended alias layer in numbered naming schemes
_LAYER_KEYWORDS: tuple[tuple[tuple[str, ...], LayerType], ...] = (
    (("foundation",), LayerType.FOUNDATIONS),
    (("extended", "2.1"), LayerType.ALIASES_EXTENDED),
    (("alias",), LayerType.ALIASES),
    (("mapping",), LayerType.MAPPINGS),
)


@dataclass(frozen=True)
class ParsedCollectionName:
    domain: str
    layer: str
    layer_type: LayerType


def parse_collection_name(name: str) -> ParsedCollectionName:
    """Split "Typo - 1. Foundations" into domain "typo" and layer "1. Foundations"."""
    match = _COLLECTION_NAME.match(name)
    domain = match.group(1).lower() if match else name.lower()
    layer = match.group(2).strip() if match else "default"
    return ParsedCollectionName(domain=domain, layer=layer, layer_type=detect_layer_type(name))


def detect_layer_type(name: str) -> LayerType:
    lower = name.lower()
    for keywords, layer_type in _LAYER_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return layer_type
    return LayerType.OTHER


def is_theme_mode(mode_name: str) -> bool:
    lower = mode_name.lower()
    return any(keyword in lower for keyword in THEME_KEYWORDS)


def detect_mode_type(modes: Iterable[Mode]) -> ModeType:
    """single for one mode, breakpoint when every mode has a width, theme on
    any light/dark mode name, otherwise single."""
    modes = list(modes)
    if len(modes) <= 1:
        return ModeType.SINGLE
    if all(mode.breakpoint_px is not None for mode in modes):
        return ModeType.BREAKPOINT
    if any(is_theme_mode(mode.name) for mode in modes):
        return ModeType.THEME
    return ModeType.SINGLE


def classify_modes(
    modes: Iterable[tuple[str, str]], breakpoints: BreakpointTable
) -> tuple[Mode, ...]:
    """Attach breakpoint widths to ``(mode_id, name)`` pairs."""
    return tuple(
        Mode(mode_id=mode_id, name=name, breakpoint_px=breakpoints.lookup(name))
        for mode_id, name in modes
    )


def classify_collection(
    collection_id: str,
    name: str,
    modes: Iterable[tuple[str, str]],
    breakpoints: BreakpointTable,
    *,
    variable_ids: Iterable[str] = (),
    remote: bool = False,
) -> Collection:
    """Build a classified Collection from raw collection fields."""
    parsed = parse_collection_name(name)
    classified = classify_modes(modes, breakpoints)
    mode_type = detect_mode_type(classified)

    unmatched = [m.name for m in classified if m.breakpoint_px is None]
    if unmatched and len(unmatched) < len(classified) and mode_type != ModeType.THEME:
        logger.warning(
            f"Collection '{name}': modes {unmatched} match no breakpoint keyword; "
            f"treating it as {mode_type.value}"
        )

    return Collection(
        id=collection_id,
        name=name,
        domain=parsed.domain,
        layer=parsed.layer,
        layer_type=parsed.layer_type,
        modes=classified,
        mode_type=mode_type,
        variable_ids=tuple(variable_ids),
        remote=remote,
    )
