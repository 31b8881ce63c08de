"""Load a declaration dump produced by the host build.

The dump is JSON: the target platform, the source roots of the pass,
and every declaration the host saw, with methods, parameters, types
and routing annotations. This module turns it into the frozen model
the rest of the generator works on.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from . import config
from .model import (
    Annotation,
    Binding,
    BindingMethod,
    BindingRoute,
    HttpVerb,
    Parameter,
    ServiceDeclaration,
    ServiceMethod,
    TypeDescriptor,
)


class DeclarationError(ValueError):
    """The dump does not describe a usable declaration."""


@dataclass(frozen=True)
class SourceRoot:
    path: str
    common: bool


@dataclass(frozen=True)
class DeclarationDump:
    """Everything the host hands over for one analysis pass."""

    raw_declarations: tuple[dict[str, Any], ...]
    source_roots: tuple[SourceRoot, ...] = ()
    platform: str | None = None

    @property
    def is_common(self) -> bool:
        """True when the pass runs over platform-neutral roots only."""
        return all(root.common for root in self.source_roots)


def load_dump(path: Path) -> DeclarationDump:
    """Load the declaration dump from disk."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return parse_dump(data)


def parse_dump(data: dict[str, Any]) -> DeclarationDump:
    if not isinstance(data, dict):
        raise DeclarationError("declaration dump must be a JSON object")
    roots = tuple(
        SourceRoot(path=str(r.get("path", "")), common=bool(r.get("common", False)))
        for r in data.get("sourceRoots", [])
    )
    return DeclarationDump(
        raw_declarations=tuple(data.get("declarations", [])),
        source_roots=roots,
        platform=data.get("platform"),
    )


def _require(entry: dict[str, Any], key: str, where: str) -> Any:
    try:
        return entry[key]
    except KeyError:
        raise DeclarationError(f"{where}: missing {key!r}") from None


def parse_verb(value: str, where: str) -> HttpVerb:
    """Accept ``GET`` as well as ``HttpMethod.GET``."""
    name = str(value).rpartition(".")[2].upper()
    try:
        return HttpVerb(name)
    except ValueError:
        raise DeclarationError(f"{where}: unknown HTTP method {value!r}") from None


def parse_type(entry: dict[str, Any] | str, where: str = "type") -> TypeDescriptor:
    """Parse ``{"name": ..., "arguments": [...], "nullable": bool}`` or a bare name."""
    if isinstance(entry, str):
        return TypeDescriptor(entry)
    name = _require(entry, "name", where)
    args = tuple(parse_type(a, f"{where}<{name}>") for a in entry.get("arguments", []))
    return TypeDescriptor(name, args, bool(entry.get("nullable", False)))


def parse_annotation(entry: dict[str, Any], where: str) -> Annotation:
    kind = _require(entry, "kind", where)
    if kind == "Binding":
        return Binding(
            parse_verb(_require(entry, "method", where), where),
            str(_require(entry, "route", where)),
        )
    if kind == "BindingMethod":
        return BindingMethod(parse_verb(_require(entry, "method", where), where))
    if kind == "BindingRoute":
        return BindingRoute(str(_require(entry, "route", where)))
    raise DeclarationError(f"{where}: unknown annotation kind {kind!r}")


def parse_method(entry: dict[str, Any], owner: str) -> ServiceMethod:
    name = _require(entry, "name", owner)
    where = f"{owner}.{name}"
    params = tuple(
        Parameter(
            _require(p, "name", where),
            parse_type(_require(p, "type", where), where),
        )
        for p in entry.get("parameters", [])
        if not p.get("receiver", False)
    )
    return_type = parse_type(entry.get("returnType", "kotlin.Unit"), where)
    annotations = tuple(parse_annotation(a, where) for a in entry.get("annotations", []))
    return ServiceMethod(name, params, return_type, annotations)


def parse_declaration(entry: dict[str, Any]) -> ServiceDeclaration:
    """Turn one raw declaration into a :class:`ServiceDeclaration`."""
    name = _require(entry, "name", "declaration")
    source = entry.get("sourcePath")
    return ServiceDeclaration(
        interface_name=name,
        package_name=entry.get("package", ""),
        methods=tuple(parse_method(m, name) for m in entry.get("methods", [])),
        source_path=Path(source) if source else None,
    )


def has_marker(annotations: list[str]) -> bool:
    """Match the marker by simple name, so ``io.x.RemoteService`` counts."""
    return any(str(a).rpartition(".")[2] == config.SERVICE_MARKER for a in annotations)


def is_service_element(entry: dict[str, Any]) -> bool:
    """A class or interface carrying the remote-service marker."""
    return (
        entry.get("kind", "interface") in config.DECLARATION_KINDS
        and has_marker(entry.get("annotations", []))
    )


def iter_services(dump: DeclarationDump) -> Iterator[dict[str, Any]]:
    """Raw entries annotated as remote services, in dump order."""
    for entry in dump.raw_declarations:
        if is_service_element(entry):
            yield entry
