"""
Advisory candidate records and the structured generation report.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .tokens import LayerType, ModeType


class ViewportCandidate(BaseModel):
    """A variable that could be rendered as min(100vw, max)."""

    model_config = ConfigDict(frozen=True)

    css_name: str
    original_name: str
    reason: Literal["name", "description"]


class ProportionCandidate(BaseModel):
    """A grid-proportion variable and its column count on a 12-column grid."""

    model_config = ConfigDict(frozen=True)

    css_name: str
    original_name: str
    column_count: int


class ModeSample(BaseModel):
    """One mode's numeric value for a scaling variable."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: float
    breakpoint_px: int


class InteriorDeviation(BaseModel):
    """How far an interior mode sits from the end-to-end linear fit."""

    model_config = ConfigDict(frozen=True)

    name: str
    breakpoint_px: int
    actual: float
    expected: float
    deviation: float


class NonLinearCandidate(BaseModel):
    """A numeric variable that could use piecewise clamp() segments."""

    model_config = ConfigDict(frozen=True)

    css_name: str
    original_name: str
    collection_id: str
    collection_name: str
    group: str
    interior: tuple[InteriorDeviation, ...] = ()
    max_deviation: float = 0.0
    mode_values: tuple[ModeSample, ...] = ()


class GenerationReport(BaseModel):
    """Counts, diagnostics and candidate lists for one generation pass."""

    model_config = ConfigDict(frozen=True)

    collections: int = 0
    variables: int = 0
    errors: tuple[str, ...] = ()
    viewport_relative_vars: tuple[str, ...] = ()
    viewport_candidates: tuple[ViewportCandidate, ...] = ()
    proportion_vars: tuple[str, ...] = ()
    proportion_candidates: tuple[ProportionCandidate, ...] = ()
    non_linear_vars: tuple[str, ...] = ()
    non_linear_candidates: tuple[NonLinearCandidate, ...] = ()
    text_style_count: int = 0


class GenerationResult(BaseModel):
    """Stylesheet text plus its report."""

    model_config = ConfigDict(frozen=True)

    css: str
    report: GenerationReport = Field(default_factory=GenerationReport)


class ModeSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode_id: str
    name: str
    breakpoint_px: int | None = None


class CollectionSummary(BaseModel):
    """Scan-time view of one local collection."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    domain: str
    layer: str
    layer_type: LayerType
    modes: tuple[ModeSummary, ...]
    mode_type: ModeType
    variable_count: int


class ScanResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    collections: tuple[CollectionSummary, ...] = ()
    total_variables: int = 0
