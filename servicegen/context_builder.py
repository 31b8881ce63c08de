"""Build Jinja2 template context from a service declaration.

Resolves every method's binding, renders parameter lists and types to
Kotlin text, and collects the client imports, so the templates only
have to lay lines out.
"""

from __future__ import annotations

from typing import Any

from . import bindings, config, dependencies, naming
from .model import ServiceDeclaration, ServiceMethod, Streaming, Tabular


def parameter_list(method: ServiceMethod) -> str:
    """``id: Int, name: String?``"""
    return ", ".join(f"{p.name}: {p.type.render()}" for p in method.parameters)


def parameter_names(method: ServiceMethod) -> str:
    return ", ".join(p.name for p in method.parameters)


def _binding_line(iname: str, method: ServiceMethod) -> str:
    """The registration call issued by the manager's ``init`` block."""
    ref = f"{iname}::{method.name}"
    decision = bindings.resolve(method)
    route = naming.kotlin_string(decision.route)
    if isinstance(decision, Tabular):
        return f"bindTabulatorRemote({ref}, {route})"
    if isinstance(decision, Streaming):
        # bare null is ambiguous between the streaming and verb overloads
        if decision.route is None:
            route = "null as String?"
        return f"bind({ref}, {route})"
    return f"bind({ref}, HttpMethod.{decision.verb.value}, {route})"


def _client_method(iname: str, method: ServiceMethod) -> dict[str, Any]:
    decision = bindings.resolve(method)
    entry: dict[str, Any] = {
        "name": method.name,
        "ref": f"{iname}::{method.name}",
        "params": parameter_list(method),
        "args": parameter_names(method),
        "return_type": method.return_type.render(),
        "is_streaming": isinstance(decision, Streaming),
        "is_tabular": isinstance(decision, Tabular),
    }
    if entry["is_streaming"]:
        send, receive = bindings.handler_types(method)
        entry["handler"] = f"{send.render()}, {receive.render()}"
    return entry


def client_imports(declaration: ServiceDeclaration) -> list[str]:
    """Collected type imports plus the channel types the handlers introduce."""
    names = dependencies.collect(declaration.methods)
    for method in declaration.methods:
        if isinstance(bindings.resolve(method), Streaming):
            names |= dependencies.collect_types(bindings.handler_types(method))
    return dependencies.sorted_imports(names)


def build_context(declaration: ServiceDeclaration) -> dict[str, Any]:
    """Build the shared template context for both artifacts."""
    iname = declaration.interface_name
    return {
        "banner": config.BANNER,
        "package": declaration.package_name,
        "runtime": config.RUNTIME_PACKAGE,
        "iname": iname,
        "base": naming.base_name(iname),
        "manager": naming.manager_name(iname),
        "bindings": [_binding_line(iname, m) for m in declaration.methods],
        "methods": [_client_method(iname, m) for m in declaration.methods],
        "imports": client_imports(declaration),
    }
