"""
varcss core: token graph, scaling, emission and the generation pipeline.
"""

from .breakpoints import DetectedBreakpoints, detect_breakpoints
from .pipeline import generate_css, scan_collections
from .settings import load_settings
from .snapshot_loader import load_snapshot

__all__ = [
    "DetectedBreakpoints",
    "detect_breakpoints",
    "generate_css",
    "load_settings",
    "load_snapshot",
    "scan_collections",
]
