"""
Breakpoint auto-detection.

Design files often carry their own viewport widths as a "viewport"
variable in the dimension foundations collection, one value per
breakpoint mode. Reading it lets the caller seed the breakpoint table
from the design instead of typing widths by hand.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .classifier import parse_collection_name
from .ir.options import BREAKPOINT_NAMES, BreakpointTable
from .ir.tokens import LayerType, VariableType
from .source import AliasRef, FloatValue, RawCollection, RawVariable, TokenSource, parse_raw_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetectedBreakpoints:
    breakpoints: dict[str, int]
    source_name: str

    def apply(self, table: BreakpointTable) -> BreakpointTable:
        return table.with_overrides(self.breakpoints)


def _is_breakpoint_collection(collection: RawCollection, table: BreakpointTable) -> bool:
    parsed = parse_collection_name(collection.name)
    if parsed.domain != "dimension" or parsed.layer_type != LayerType.FOUNDATIONS:
        return False
    if len(collection.modes) < 2:
        return False
    return all(table.keyword_for(mode.name) for mode in collection.modes)


async def _find_viewport_variable(
    source: TokenSource, collection: RawCollection
) -> RawVariable | None:
    """Prefer a "viewport ... min" variable, else the first "viewport" one."""
    fallback: RawVariable | None = None
    for variable_id in collection.variable_ids:
        variable = await source.get_variable(variable_id)
        if variable is None or variable.resolved_type != VariableType.FLOAT:
            continue
        name = variable.name.lower()
        if "viewport" not in name:
            continue
        if "min" in name:
            return variable
        if fallback is None:
            fallback = variable
    return fallback


async def _mode_number(
    source: TokenSource,
    variable: RawVariable,
    mode_id: str,
    collections: list[RawCollection],
) -> float | None:
    raw = parse_raw_value(variable.values_by_mode.get(mode_id))
    if isinstance(raw, AliasRef):
        target = await source.get_variable(raw.target_id)
        owner = next((c for c in collections if raw.target_id in c.variable_ids), None)
        if target is None or owner is None or not owner.modes:
            return None
        raw = parse_raw_value(target.values_by_mode.get(owner.modes[0].mode_id))
    if isinstance(raw, FloatValue):
        return raw.value
    return None


async def detect_breakpoints(
    source: TokenSource, table: BreakpointTable | None = None
) -> DetectedBreakpoints | None:
    """Read breakpoint widths from the design's viewport variable.

    Returns None unless at least two breakpoint widths were found.
    """
    table = table or BreakpointTable()
    collections = [c for c in await source.get_collections() if not c.remote]

    for collection in collections:
        if not _is_breakpoint_collection(collection, table):
            continue

        variable = await _find_viewport_variable(source, collection)
        if variable is None:
            continue

        found: dict[str, int] = {}
        for mode in collection.modes:
            number = await _mode_number(source, variable, mode.mode_id, collections)
            if number is None or number <= 0:
                continue
            lower = mode.name.lower()
            for name in BREAKPOINT_NAMES:
                if name in lower:
                    found[name] = int(round(number))

        if len(found) >= 2:
            logger.info(f"Detected breakpoints {found} from '{variable.name}'")
            return DetectedBreakpoints(breakpoints=found, source_name=variable.name)

    logger.debug("No viewport variable with breakpoint values found")
    return None
