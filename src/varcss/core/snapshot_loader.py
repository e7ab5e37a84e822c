"""
Token snapshot persistence.

Reads a host export (JSON or YAML) into a ``SnapshotSource`` so the
generator can run outside the host, e.g. from the command line or in CI.

Expected layout::

    collections:
      - id: c1
        name: "Space - 1. Foundations"
        modes: [{modeId: m1, name: Desktop}, {modeId: m2, name: Mobile}]
        variableIds: [v1]
    variables:
      - id: v1
        name: fixed/1
        resolvedType: FLOAT
        valuesByMode: {m1: 32, m2: 25.6}
    textStyles: []
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import ErrorContext, SnapshotError
from .source import SnapshotSource, TokenSnapshot

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


def _read_document(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SnapshotError(f"Cannot read snapshot: {e}", ErrorContext(file=path)) from e

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            return yaml.safe_load(text)
        return json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise SnapshotError(f"Malformed snapshot: {e}", ErrorContext(file=path)) from e


def parse_snapshot(data: Any, path: Path | None = None) -> TokenSnapshot:
    """Validate raw snapshot data."""
    context = ErrorContext(file=path) if path else None
    if data is None:
        return TokenSnapshot()
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot root must be a mapping", context)
    try:
        return TokenSnapshot.model_validate(data)
    except ValidationError as e:
        raise SnapshotError(f"Invalid snapshot: {e}", context) from e


def load_snapshot(path: Path) -> SnapshotSource:
    """Load a snapshot file into a token source."""
    snapshot = parse_snapshot(_read_document(path), path)
    logger.info(
        f"Loaded snapshot {path}: {len(snapshot.collections)} collections, "
        f"{len(snapshot.variables)} variables, {len(snapshot.text_styles)} text styles"
    )
    return SnapshotSource(snapshot)
