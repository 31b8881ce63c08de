"""Resolve each service method to a binding decision.

Two independent steps:

- Routing: the verb and route come from the method's annotations,
  ``Binding`` > ``BindingMethod`` > ``BindingRoute`` > default POST.
- Shape: the call kind comes from the signature. A ``RemoteData`` return
  type is tabular; two parameters with a leading ``ReceiveChannel`` is a
  websocket stream; anything else is a plain call.

Annotations never change the shape, so a streaming method can't be
mis-annotated into a GET.
"""

from __future__ import annotations

import logging

from . import config
from .model import (
    Annotation,
    Binding,
    BindingDecision,
    BindingMethod,
    BindingRoute,
    HttpVerb,
    Rpc,
    ServiceMethod,
    Streaming,
    Tabular,
    TypeDescriptor,
)

_logger = logging.getLogger(__name__)

DEFAULT_VERB = HttpVerb.POST

_PRECEDENCE: tuple[type, ...] = (Binding, BindingMethod, BindingRoute)


def select_routing(annotations: tuple[Annotation, ...]) -> tuple[HttpVerb, str | None]:
    """Pick verb and route from a method's routing annotations."""
    for kind in _PRECEDENCE:
        found = next((a for a in annotations if isinstance(a, kind)), None)
        if found is None:
            continue
        if isinstance(found, Binding):
            return found.method, found.route
        if isinstance(found, BindingMethod):
            return found.method, None
        return DEFAULT_VERB, found.route
    return DEFAULT_VERB, None


def is_tabular(method: ServiceMethod) -> bool:
    return method.return_type.has_prefix(config.TABULAR_PREFIX)


def channel_direction(t: TypeDescriptor) -> str | None:
    """``ReceiveChannel`` or ``SendChannel`` when the type's simple name starts with one."""
    for direction in (config.RECEIVE_CHANNEL, config.SEND_CHANNEL):
        if t.simple_name.startswith(direction):
            return direction
    return None


def is_streaming(method: ServiceMethod) -> bool:
    params = method.parameters
    return len(params) == 2 and channel_direction(params[0].type) == config.RECEIVE_CHANNEL


def resolve(method: ServiceMethod) -> BindingDecision:
    """Classify a method; never fails."""
    kinds = {type(a) for a in method.annotations}
    if len(kinds) > 1:
        _logger.debug(
            "Method %s carries %d kinds of routing annotation, using precedence order",
            method.name,
            len(kinds),
        )
    verb, route = select_routing(method.annotations)
    if is_tabular(method):
        return Tabular(route)
    if is_streaming(method):
        return Streaming(route)
    return Rpc(verb, route)


def invert_channel(t: TypeDescriptor) -> TypeDescriptor:
    """Swap ``ReceiveChannel`` and ``SendChannel``; other types pass through."""
    direction = channel_direction(t)
    if direction is None:
        return t
    opposite = config.SEND_CHANNEL if direction == config.RECEIVE_CHANNEL else config.RECEIVE_CHANNEL
    return t.with_simple_name(opposite + t.simple_name[len(direction):])


def handler_types(method: ServiceMethod) -> tuple[TypeDescriptor, TypeDescriptor]:
    """Channel types seen by the client side of a streaming method.

    The server receives what the client sends and vice versa, so both
    declared parameter types have their direction swapped.
    """
    if not is_streaming(method):
        raise ValueError(f"{method.name} is not a streaming method")
    first, second = method.parameters
    return invert_channel(first.type), invert_channel(second.type)
