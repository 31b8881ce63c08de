"""Collect the qualified type names a client artifact must import."""

from __future__ import annotations

from collections.abc import Iterable

from . import config
from .model import ServiceMethod, TypeDescriptor


def is_builtin(qualified_name: str) -> bool:
    """Kotlin default imports are never written out."""
    return any(qualified_name.startswith(ns) for ns in config.BUILTIN_NAMESPACES)


def importable(qualified_name: str) -> bool:
    """Default-package names cannot be imported and built-ins need not be."""
    return "." in qualified_name and not is_builtin(qualified_name)


def method_types(method: ServiceMethod) -> set[str]:
    """Every qualified name in a method's parameter and return types."""
    names = method.return_type.flatten()
    for param in method.parameters:
        names |= param.type.flatten()
    return names


def collect(methods: Iterable[ServiceMethod]) -> set[str]:
    """Union of the methods' type names, minus built-in namespaces."""
    names: set[str] = set()
    for method in methods:
        names |= method_types(method)
    return {n for n in names if importable(n)}


def collect_types(types: Iterable[TypeDescriptor]) -> set[str]:
    names: set[str] = set()
    for t in types:
        names |= t.flatten()
    return {n for n in names if importable(n)}


def sorted_imports(names: Iterable[str]) -> list[str]:
    """Deterministic import order for emission."""
    return sorted(set(names))
