"""Shared pytest fixtures for varcss tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from varcss.core.source import SnapshotSource, TokenSnapshot


def alias(target_id: str) -> dict[str, str]:
    """Wire form of an alias value."""
    return {"type": "VARIABLE_ALIAS", "id": target_id}


def rgb(r: float, g: float, b: float, a: float | None = None) -> dict[str, float]:
    color = {"r": r, "g": g, "b": b}
    if a is not None:
        color["a"] = a
    return color


class SnapshotBuilder:
    """Builds host-shaped snapshot documents for tests.

    Mode ids are derived from the collection id and mode name, so
    ``builder.mode_id("c1", "Desktop")`` is ``"c1:Desktop"``.
    """

    def __init__(self) -> None:
        self.collections: list[dict[str, Any]] = []
        self.variables: list[dict[str, Any]] = []
        self.text_styles: list[dict[str, Any]] = []

    @staticmethod
    def mode_id(collection_id: str, mode_name: str) -> str:
        return f"{collection_id}:{mode_name}"

    def collection(
        self, collection_id: str, name: str, modes: list[str], remote: bool = False
    ) -> SnapshotBuilder:
        self.collections.append(
            {
                "id": collection_id,
                "name": name,
                "modes": [
                    {"modeId": self.mode_id(collection_id, m), "name": m} for m in modes
                ],
                "variableIds": [],
                "remote": remote,
            }
        )
        return self

    def variable(
        self,
        collection_id: str,
        variable_id: str,
        name: str,
        resolved_type: str,
        values: dict[str, Any],
        description: str = "",
    ) -> SnapshotBuilder:
        """Add a variable; ``values`` is keyed by mode name."""
        owner = next(c for c in self.collections if c["id"] == collection_id)
        owner["variableIds"].append(variable_id)
        self.variables.append(
            {
                "id": variable_id,
                "name": name,
                "description": description,
                "resolvedType": resolved_type,
                "valuesByMode": {
                    self.mode_id(collection_id, mode): value for mode, value in values.items()
                },
            }
        )
        return self

    def text_style(self, style_id: str, name: str, **fields: Any) -> SnapshotBuilder:
        self.text_styles.append({"id": style_id, "name": name, **fields})
        return self

    def data(self) -> dict[str, Any]:
        return {
            "collections": self.collections,
            "variables": self.variables,
            "textStyles": self.text_styles,
        }

    def snapshot(self) -> TokenSnapshot:
        return TokenSnapshot.model_validate(self.data())

    def source(self) -> SnapshotSource:
        return SnapshotSource(self.snapshot())

    def write(self, path: Path) -> Path:
        path.write_text(json.dumps(self.data(), indent=2))
        return path


@pytest.fixture
def builder() -> SnapshotBuilder:
    """Return an empty snapshot builder."""
    return SnapshotBuilder()


@pytest.fixture
def spacing(builder: SnapshotBuilder) -> SnapshotBuilder:
    """Space foundations scaling between desktop and mobile, plus an alias layer."""
    builder.collection("c-found", "Space - 1. Foundations", ["Desktop", "Mobile"])
    builder.variable("c-found", "v-fixed-1", "fixed/1", "FLOAT", {"Desktop": 32, "Mobile": 25.6})
    builder.variable("c-found", "v-fixed-2", "fixed/2", "FLOAT", {"Desktop": 16, "Mobile": 12})
    builder.collection("c-alias", "Space - 2. Aliases", ["Desktop", "Mobile"])
    builder.variable(
        "c-alias",
        "v-gap",
        "gap",
        "FLOAT",
        {"Desktop": alias("v-fixed-1"), "Mobile": alias("v-fixed-2")},
    )
    return builder


@pytest.fixture
def theme(builder: SnapshotBuilder) -> SnapshotBuilder:
    """Color mappings with light and dark modes."""
    builder.collection("c-theme", "Color - 3. Mappings", ["Light", "Dark"])
    builder.variable(
        "c-theme",
        "v-bg",
        "surface/bg",
        "COLOR",
        {"Light": rgb(1, 1, 1), "Dark": rgb(0, 0, 0)},
    )
    builder.variable(
        "c-theme",
        "v-muted",
        "text/muted",
        "COLOR",
        {"Light": rgb(0.5, 0.5, 0.5), "Dark": rgb(0.5, 0.5, 0.5)},
    )
    return builder


@pytest.fixture
def stepped(builder: SnapshotBuilder) -> SnapshotBuilder:
    """Typography foundations with three breakpoints and a non-linear size."""
    builder.collection("c-typo", "Typo - 1. Foundations", ["Desktop", "Tablet", "Mobile"])
    builder.variable(
        "c-typo",
        "v-display",
        "size/display",
        "FLOAT",
        {"Desktop": 48, "Tablet": 40, "Mobile": 24},
    )
    return builder
