"""
Token graph IR types.

Collections, modes and variables as seen after classification, and the
closed ProcessedValue variant stored per mode on each variable.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Enums
# =============================================================================


class LayerType(StrEnum):
    """Position of a collection in the token reference hierarchy."""

    FOUNDATIONS = "foundations"
    ALIASES = "aliases"
    ALIASES_EXTENDED = "aliases-extended"
    MAPPINGS = "mappings"
    OTHER = "other"


# Emission order inside one domain
LAYER_RANK: dict[LayerType, int] = {
    LayerType.FOUNDATIONS: 0,
    LayerType.ALIASES: 1,
    LayerType.ALIASES_EXTENDED: 2,
    LayerType.MAPPINGS: 3,
    LayerType.OTHER: 4,
}


class ModeType(StrEnum):
    """What the modes of a collection vary over."""

    BREAKPOINT = "breakpoint"
    THEME = "theme"
    SINGLE = "single"


class VariableType(StrEnum):
    """Resolved value type of a variable."""

    COLOR = "color"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"


# =============================================================================
# Collections and modes
# =============================================================================


class Mode(BaseModel):
    """A mode of a collection, with its breakpoint width when it names one."""

    model_config = ConfigDict(frozen=True)

    mode_id: str
    name: str
    breakpoint_px: int | None = None


class Collection(BaseModel):
    """A classified collection."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    domain: str
    layer: str
    layer_type: LayerType
    modes: tuple[Mode, ...]
    mode_type: ModeType
    variable_ids: tuple[str, ...] = ()
    remote: bool = False

    @property
    def variable_count(self) -> int:
        return len(self.variable_ids)

    @property
    def default_mode(self) -> Mode | None:
        return self.modes[0] if self.modes else None


# =============================================================================
# Processed values
# =============================================================================


class AliasValue(BaseModel):
    """A reference to another variable.

    ``target_name`` is filled by the alias resolver with the target's
    identifier; it stays None when the target is not in the graph.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["alias"] = "alias"
    target_id: str
    target_name: str | None = None


class LiteralValue(BaseModel):
    """A converted scalar: color string, number, plain string or 0/1."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["literal"] = "literal"
    value: int | float | str


ProcessedValue = Annotated[AliasValue | LiteralValue, Field(discriminator="kind")]


# =============================================================================
# Variables
# =============================================================================


class Variable(BaseModel):
    """A token with one processed value per mode of its collection."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    collection_id: str
    collection_name: str
    domain: str
    layer_type: LayerType
    resolved_type: VariableType
    values_by_mode: dict[str, ProcessedValue] = Field(default_factory=dict)
    css_name: str

    @property
    def is_alias(self) -> bool:
        return any(isinstance(v, AliasValue) for v in self.values_by_mode.values())

    @property
    def group(self) -> str:
        """Path prefix of the token name ("typography/size" for "typography/size/h1")."""
        head, sep, _ = self.name.rpartition("/")
        return head if sep else ""
