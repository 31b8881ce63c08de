"""Shared fixtures for servicegen tests.

Declarations are built directly from the model, or as raw dump entries
for tests that go through the loader. Project trees are laid out under
``tmp_path`` in the usual ``<module>/src/commonMain/kotlin`` shape.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from servicegen.model import (
    Annotation,
    Parameter,
    ServiceDeclaration,
    ServiceMethod,
    TypeDescriptor,
)

INT = TypeDescriptor("kotlin.Int")
STRING = TypeDescriptor("kotlin.String")
UNIT = TypeDescriptor("kotlin.Unit")
WIDGET = TypeDescriptor("com.example.Widget")
ORDER = TypeDescriptor("com.example.model.Order")


def receive(element: TypeDescriptor) -> TypeDescriptor:
    return TypeDescriptor("kotlinx.coroutines.channels.ReceiveChannel", (element,))


def send(element: TypeDescriptor) -> TypeDescriptor:
    return TypeDescriptor("kotlinx.coroutines.channels.SendChannel", (element,))


def remote_data(row: TypeDescriptor) -> TypeDescriptor:
    return TypeDescriptor("io.servicegen.remote.RemoteData", (row,))


def method(
    name: str,
    params: list[tuple[str, TypeDescriptor]] | None = None,
    returns: TypeDescriptor = UNIT,
    annotations: list[Annotation] | None = None,
) -> ServiceMethod:
    """Build a ServiceMethod from (name, type) pairs."""
    return ServiceMethod(
        name=name,
        parameters=tuple(Parameter(n, t) for n, t in params or []),
        return_type=returns,
        annotations=tuple(annotations or []),
    )


def declaration(
    name: str = "IWidgetService",
    methods: list[ServiceMethod] | None = None,
    package: str = "com.example",
    source_path: Path | None = None,
) -> ServiceDeclaration:
    return ServiceDeclaration(name, package, tuple(methods or []), source_path)


def raw_declaration(name: str = "IWidgetService", **overrides: Any) -> dict[str, Any]:
    """A dump entry for ``fetch(id: Int): Widget`` with the receiver included."""
    entry: dict[str, Any] = {
        "name": name,
        "package": "com.example",
        "kind": "interface",
        "annotations": ["RemoteService"],
        "methods": [
            {
                "name": "fetch",
                "parameters": [
                    {"name": "<this>", "type": {"name": f"com.example.{name}"}, "receiver": True},
                    {"name": "id", "type": {"name": "kotlin.Int"}},
                ],
                "returnType": {"name": "com.example.Widget"},
                "annotations": [],
            }
        ],
    }
    entry.update(overrides)
    return entry


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A module directory with a common source set, and no build dir yet."""
    root = tmp_path / "app"
    (root / "src" / "commonMain" / "kotlin" / "com" / "example").mkdir(parents=True)
    return root


@pytest.fixture
def source_file(project: Path) -> Path:
    return project / "src" / "commonMain" / "kotlin" / "com" / "example" / "IWidgetService.kt"


@pytest.fixture
def write_dump(tmp_path: Path):
    """Write a dump dict to disk and return its path."""
    def _write(data: dict[str, Any]) -> Path:
        path = tmp_path / "declarations.json"
        path.write_text(json.dumps(data))
        return path
    return _write
