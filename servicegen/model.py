"""Declaration and binding data model.

Declarations arrive from the loader already stripped of host-compiler
details: a service is a named interface with an ordered list of methods,
and every type is a small tree of qualified names.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, StrEnum
from pathlib import Path

from . import naming


class HttpVerb(StrEnum):
    """HTTP methods a binding can be registered under."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"


@dataclass(frozen=True)
class TypeDescriptor:
    """A type and its generic arguments."""

    qualified_name: str
    type_arguments: tuple[TypeDescriptor, ...] = ()
    nullable: bool = False

    @property
    def namespace(self) -> str:
        return self.qualified_name.rpartition(".")[0]

    @property
    def simple_name(self) -> str:
        return self.qualified_name.rpartition(".")[2]

    def render(self) -> str:
        """Kotlin source text, using simple names: ``List<Widget>?``."""
        text = self.simple_name
        if self.type_arguments:
            text += "<" + ", ".join(arg.render() for arg in self.type_arguments) + ">"
        if self.nullable:
            text += "?"
        return text

    def has_prefix(self, prefix: str) -> bool:
        return self.qualified_name.startswith(prefix) or self.simple_name.startswith(prefix)

    def flatten(self) -> set[str]:
        """Qualified names of this type and every nested type argument."""
        names = {self.qualified_name}
        for arg in self.type_arguments:
            names |= arg.flatten()
        return names

    def with_simple_name(self, name: str) -> TypeDescriptor:
        qualified = f"{self.namespace}.{name}" if self.namespace else name
        return replace(self, qualified_name=qualified)


@dataclass(frozen=True)
class Parameter:
    name: str
    type: TypeDescriptor


# ---------------------------------------------------------------------------
# Routing annotations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Binding:
    """Explicit verb and route."""

    method: HttpVerb
    route: str


@dataclass(frozen=True)
class BindingMethod:
    """Explicit verb, no route."""

    method: HttpVerb


@dataclass(frozen=True)
class BindingRoute:
    """Explicit route, default verb."""

    route: str


Annotation = Binding | BindingMethod | BindingRoute


@dataclass(frozen=True)
class ServiceMethod:
    """One method of a service interface, receiver already dropped."""

    name: str
    parameters: tuple[Parameter, ...]
    return_type: TypeDescriptor
    annotations: tuple[Annotation, ...] = ()


@dataclass(frozen=True)
class ServiceDeclaration:
    interface_name: str
    package_name: str
    methods: tuple[ServiceMethod, ...]
    source_path: Path | None = None

    @property
    def base_name(self) -> str:
        return naming.base_name(self.interface_name)


# ---------------------------------------------------------------------------
# Binding decisions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Rpc:
    """Plain call addressed by verb and optional route."""

    verb: HttpVerb
    route: str | None = None


@dataclass(frozen=True)
class Streaming:
    """Websocket binding over a receive/send channel pair."""

    route: str | None = None


@dataclass(frozen=True)
class Tabular:
    """Paged remote data, addressed by route only."""

    route: str | None = None


BindingDecision = Rpc | Streaming | Tabular


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class ArtifactKind(Enum):
    COMMON = "common"
    CLIENT = "client"


class WriteOutcome(Enum):
    WRITTEN = "written"
    UNCHANGED = "unchanged"
    CREATED = "created"


@dataclass(frozen=True)
class GeneratedArtifact:
    path: Path
    content: str = field(repr=False)
    kind: ArtifactKind
