"""
Upstream token source contract.

The host application owns the token graph; varcss only reads it through
``TokenSource``. Raw per-mode values are untyped on the wire and are
narrowed here into a closed set of variants before the graph builder
sees them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .ir.tokens import VariableType

# =============================================================================
# Raw value variants
# =============================================================================


@dataclass(frozen=True)
class AliasRef:
    target_id: str


@dataclass(frozen=True)
class ColorValue:
    r: float
    g: float
    b: float
    a: float | None = None


@dataclass(frozen=True)
class FloatValue:
    value: float


@dataclass(frozen=True)
class StrValue:
    value: str


@dataclass(frozen=True)
class BoolValue:
    value: bool


RawValue = AliasRef | ColorValue | FloatValue | StrValue | BoolValue

ALIAS_TYPE = "VARIABLE_ALIAS"


def parse_raw_value(raw: Any) -> RawValue | None:
    """Narrow a wire value into a RawValue variant, or None if unrecognized."""
    if isinstance(raw, dict):
        if raw.get("type") == ALIAS_TYPE and isinstance(raw.get("id"), str):
            return AliasRef(target_id=raw["id"])
        channels = [raw.get(k) for k in ("r", "g", "b")]
        if all(isinstance(c, (int, float)) and not isinstance(c, bool) for c in channels):
            alpha = raw.get("a")
            if not isinstance(alpha, (int, float)) or isinstance(alpha, bool):
                alpha = None
            return ColorValue(*(float(c) for c in channels), a=alpha)
        return None
    if isinstance(raw, bool):
        return BoolValue(raw)
    if isinstance(raw, (int, float)):
        return FloatValue(float(raw))
    if isinstance(raw, str):
        return StrValue(raw)
    return None


# =============================================================================
# Raw records
# =============================================================================


class RawMode(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    mode_id: str = Field(alias="modeId")
    name: str


class RawCollection(BaseModel):
    """A collection as exposed by the host."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    modes: tuple[RawMode, ...] = ()
    variable_ids: tuple[str, ...] = Field(default=(), alias="variableIds")
    remote: bool = False


class RawVariable(BaseModel):
    """A variable as exposed by the host, values still untyped."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    description: str | None = ""
    resolved_type: VariableType = Field(alias="resolvedType")
    values_by_mode: dict[str, Any] = Field(default_factory=dict, alias="valuesByMode")

    @field_validator("resolved_type", mode="before")
    @classmethod
    def _lower_type(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value


class TextMetric(BaseModel):
    """A line-height or letter-spacing value with its unit."""

    model_config = ConfigDict(frozen=True)

    unit: str = "AUTO"
    value: float = 0.0

    @field_validator("unit", mode="before")
    @classmethod
    def _upper_unit(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class RawTextStyle(BaseModel):
    """A composite text style; ``bound_variables`` maps property to variable id."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    font_family: str = Field(default="", alias="fontFamily")
    font_style: str = Field(default="Regular", alias="fontStyle")
    font_size: float = Field(default=16.0, alias="fontSize")
    line_height: TextMetric = Field(default_factory=TextMetric, alias="lineHeight")
    letter_spacing: TextMetric = Field(
        default_factory=lambda: TextMetric(unit="PIXELS", value=0.0),
        alias="letterSpacing",
    )
    bound_variables: dict[str, str] = Field(default_factory=dict, alias="boundVariables")

    @field_validator("bound_variables", mode="before")
    @classmethod
    def _binding_ids(cls, value: Any) -> Any:
        # Hosts may send {"fontSize": {"type": "VARIABLE_ALIAS", "id": ...}}
        if not isinstance(value, dict):
            return value
        return {
            prop: binding.get("id") if isinstance(binding, dict) else binding
            for prop, binding in value.items()
            if binding
        }


class TokenSnapshot(BaseModel):
    """Everything a source exposes, as one serializable document."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    collections: tuple[RawCollection, ...] = ()
    variables: tuple[RawVariable, ...] = ()
    text_styles: tuple[RawTextStyle, ...] = Field(default=(), alias="textStyles")


# =============================================================================
# Source protocol
# =============================================================================


class TokenSource(Protocol):
    """Read access to the host's token graph."""

    async def get_collections(self) -> list[RawCollection]: ...

    async def get_variable(self, variable_id: str) -> RawVariable | None: ...

    async def get_text_styles(self) -> list[RawTextStyle]: ...


class SnapshotSource:
    """TokenSource over an in-memory snapshot."""

    def __init__(self, snapshot: TokenSnapshot):
        self.snapshot = snapshot
        self._variables = {v.id: v for v in snapshot.variables}

    async def get_collections(self) -> list[RawCollection]:
        return list(self.snapshot.collections)

    async def get_variable(self, variable_id: str) -> RawVariable | None:
        return self._variables.get(variable_id)

    async def get_text_styles(self) -> list[RawTextStyle]:
        return list(self.snapshot.text_styles)
