"""
Token graph construction and alias resolution.

Pass 1 reads every local collection and variable from the source and
stores one ProcessedValue per mode. Pass 2 resolves alias targets to
their identifiers. When aliases are to be flattened, a third pass walks
each alias chain down to a literal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .classifier import classify_collection
from .colors import rgb_to_hex, rgb_to_oklch
from .errors import SourceError
from .ir.options import AliasMode, BreakpointTable, ColorFormat, ExportOptions
from .ir.tokens import (
    AliasValue,
    Collection,
    LiteralValue,
    ProcessedValue,
    Variable,
    VariableType,
)
from .naming import generate_css_name
from .source import (
    AliasRef,
    BoolValue,
    ColorValue,
    FloatValue,
    RawValue,
    RawVariable,
    StrValue,
    TokenSource,
    parse_raw_value,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenGraph:
    """Classified collections and their variables for one generation pass."""

    collections: tuple[Collection, ...]
    variables: tuple[Variable, ...]
    errors: tuple[str, ...] = ()
    by_id: dict[str, Variable] = field(init=False, repr=False, compare=False)
    collections_by_id: dict[str, Collection] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "by_id", {v.id: v for v in self.variables})
        object.__setattr__(self, "collections_by_id", {c.id: c for c in self.collections})

    def variables_in(self, collection_id: str) -> list[Variable]:
        return [v for v in self.variables if v.collection_id == collection_id]

    def replace(
        self,
        variables: tuple[Variable, ...] | None = None,
        errors: tuple[str, ...] | None = None,
    ) -> TokenGraph:
        return TokenGraph(
            collections=self.collections,
            variables=self.variables if variables is None else variables,
            errors=self.errors if errors is None else errors,
        )


# =============================================================================
# Pass 1: literal conversion and graph building
# =============================================================================


def convert_literal(
    raw: RawValue, var_type: VariableType, color_format: ColorFormat
) -> LiteralValue | None:
    """Convert a non-alias raw value for a variable of ``var_type``.

    Returns None when the value does not fit the declared type.
    """
    match var_type, raw:
        case VariableType.COLOR, ColorValue(r=r, g=g, b=b, a=a):
            if color_format == ColorFormat.OKLCH:
                return LiteralValue(value=rgb_to_oklch(r, g, b, a))
            return LiteralValue(value=rgb_to_hex(r, g, b, a))
        case VariableType.FLOAT, FloatValue(value=number):
            return LiteralValue(value=number)
        case VariableType.STRING, StrValue(value=text):
            return LiteralValue(value=text)
        case VariableType.BOOLEAN, BoolValue(value=flag):
            return LiteralValue(value=1 if flag else 0)
        case VariableType.BOOLEAN, FloatValue(value=number):
            return LiteralValue(value=1 if number else 0)
        case _:
            return None


def process_values(
    raw_variable: RawVariable, collection: Collection, options: ExportOptions
) -> dict[str, ProcessedValue]:
    """Processed value per mode; missing or malformed modes are left out."""
    values: dict[str, ProcessedValue] = {}
    for mode in collection.modes:
        raw = parse_raw_value(raw_variable.values_by_mode.get(mode.mode_id))
        if raw is None:
            logger.debug(f"{raw_variable.name}: no usable value for mode '{mode.name}'")
            continue
        if isinstance(raw, AliasRef):
            values[mode.mode_id] = AliasValue(target_id=raw.target_id)
            continue
        literal = convert_literal(raw, raw_variable.resolved_type, options.color_format)
        if literal is None:
            logger.debug(
                f"{raw_variable.name}: {type(raw).__name__} does not fit "
                f"{raw_variable.resolved_type.value} in mode '{mode.name}'"
            )
            continue
        values[mode.mode_id] = literal
    return values


async def build_token_graph(
    source: TokenSource,
    options: ExportOptions,
    breakpoints: BreakpointTable,
) -> TokenGraph:
    """Read the source and build a resolved token graph.

    Lookups run sequentially in discovery order; output order is decided
    later by the emitter.
    """
    collections: list[Collection] = []
    variables: list[Variable] = []
    errors: list[str] = []

    for raw_collection in await source.get_collections():
        if raw_collection.remote:
            logger.debug(f"Skipping remote collection '{raw_collection.name}'")
            continue

        collection = classify_collection(
            raw_collection.id,
            raw_collection.name,
            [(m.mode_id, m.name) for m in raw_collection.modes],
            breakpoints,
            variable_ids=raw_collection.variable_ids,
        )
        collections.append(collection)

        for variable_id in raw_collection.variable_ids:
            try:
                raw_variable = await source.get_variable(variable_id)
            except SourceError as e:
                errors.append(f"Variable lookup failed: {variable_id} ({e.message})")
                continue
            if raw_variable is None:
                logger.debug(f"Variable {variable_id} not found in source")
                continue

            variables.append(
                Variable(
                    id=raw_variable.id,
                    name=raw_variable.name,
                    description=raw_variable.description or "",
                    collection_id=collection.id,
                    collection_name=collection.name,
                    domain=collection.domain,
                    layer_type=collection.layer_type,
                    resolved_type=raw_variable.resolved_type,
                    values_by_mode=process_values(raw_variable, collection, options),
                    css_name=generate_css_name(
                        raw_variable.name, collection.domain, collection.layer_type
                    ),
                )
            )

    logger.debug(f"Built graph: {len(collections)} collections, {len(variables)} variables")

    resolver = AliasResolver(TokenGraph(tuple(collections), tuple(variables), tuple(errors)))
    graph = resolver.resolve_names()
    if options.alias_mode == AliasMode.RESOLVED:
        graph = AliasResolver(graph).flatten()
    return graph


# =============================================================================
# Pass 2: alias resolution
# =============================================================================


class AliasResolver:
    """Resolves alias values against a built graph.

    Every method returns a new graph; the input graph is left untouched.
    """

    def __init__(self, graph: TokenGraph):
        self.graph = graph

    def resolve_names(self) -> TokenGraph:
        """Fill each alias's target identifier, reporting broken references."""
        errors = list(self.graph.errors)
        resolved: list[Variable] = []

        for variable in self.graph.variables:
            values = dict(variable.values_by_mode)
            broken = False
            for mode_id, value in variable.values_by_mode.items():
                if not isinstance(value, AliasValue):
                    continue
                target = self.graph.by_id.get(value.target_id)
                if target is None:
                    broken = True
                    continue
                values[mode_id] = value.model_copy(update={"target_name": target.css_name})

            if broken:
                logger.warning(f"Broken alias: {variable.name} references unknown variable")
                errors.append(f"Broken alias: {variable.name} references unknown variable")
            resolved.append(variable.model_copy(update={"values_by_mode": values}))

        return self.graph.replace(variables=tuple(resolved), errors=tuple(errors))

    def resolve_literal(
        self, variable: Variable, mode_id: str
    ) -> tuple[LiteralValue | None, bool]:
        """Follow an alias chain from one mode of ``variable`` to a literal.

        Each hop reads the target in the same mode when the target has it,
        otherwise in the target collection's first mode.

        Returns:
            ``(literal, circular)``; literal is None when the chain is
            broken, circular, or a direct self-reference.
        """
        value = variable.values_by_mode.get(mode_id)
        visited = {variable.id}

        while isinstance(value, AliasValue):
            if value.target_id == variable.id and len(visited) == 1:
                return None, False
            if value.target_id in visited:
                return None, True
            target = self.graph.by_id.get(value.target_id)
            if target is None:
                return None, False
            visited.add(target.id)

            if mode_id not in target.values_by_mode:
                owner = self.graph.collections_by_id.get(target.collection_id)
                default_mode = owner.default_mode if owner else None
                mode_id = default_mode.mode_id if default_mode else mode_id
            value = target.values_by_mode.get(mode_id)

        return value, False

    def flatten(self) -> TokenGraph:
        """Replace every alias value with the literal at the end of its chain."""
        errors = list(self.graph.errors)
        flattened: list[Variable] = []

        for variable in self.graph.variables:
            if not variable.is_alias:
                flattened.append(variable)
                continue

            values: dict[str, ProcessedValue] = {}
            circular = False
            for mode_id, value in variable.values_by_mode.items():
                if isinstance(value, LiteralValue):
                    values[mode_id] = value
                    continue
                literal, is_cycle = self.resolve_literal(variable, mode_id)
                circular = circular or is_cycle
                if literal is not None:
                    values[mode_id] = literal

            if circular:
                logger.warning(f"Circular alias: {variable.name} references itself through a chain")
                errors.append(f"Circular alias: {variable.name} references itself through a chain")
            flattened.append(variable.model_copy(update={"values_by_mode": values}))

        return self.graph.replace(variables=tuple(flattened), errors=tuple(errors))
