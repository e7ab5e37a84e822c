"""
varcss Intermediate Representation (IR) types.

Options, the token graph model and the generation report. All types are
re-exported from this package.
"""

# Options
from .options import (
    BREAKPOINT_NAMES,
    AliasMode,
    BreakpointDirection,
    BreakpointTable,
    ColorFormat,
    DarkModeOutput,
    ExportOptions,
    OutputMode,
    TextStyleFormat,
)

# Report
from .report import (
    CollectionSummary,
    GenerationReport,
    GenerationResult,
    InteriorDeviation,
    ModeSample,
    ModeSummary,
    NonLinearCandidate,
    ProportionCandidate,
    ScanResult,
    ViewportCandidate,
)

# Token graph
from .tokens import (
    LAYER_RANK,
    AliasValue,
    Collection,
    LayerType,
    LiteralValue,
    Mode,
    ModeType,
    ProcessedValue,
    Variable,
    VariableType,
)

__all__ = [
    # Options
    "BREAKPOINT_NAMES",
    "AliasMode",
    "BreakpointDirection",
    "BreakpointTable",
    "ColorFormat",
    "DarkModeOutput",
    "ExportOptions",
    "OutputMode",
    "TextStyleFormat",
    # Report
    "CollectionSummary",
    "GenerationReport",
    "GenerationResult",
    "InteriorDeviation",
    "ModeSample",
    "ModeSummary",
    "NonLinearCandidate",
    "ProportionCandidate",
    "ScanResult",
    "ViewportCandidate",
    # Token graph
    "LAYER_RANK",
    "AliasValue",
    "Collection",
    "LayerType",
    "LiteralValue",
    "Mode",
    "ModeType",
    "ProcessedValue",
    "Variable",
    "VariableType",
]
