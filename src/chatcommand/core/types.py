"""
Leaf typing for action registries.

An action registry mixes containers, callables, awaitables and plain values in
one tree. Every node is classified into a closed set of kinds up front so that
flattening and execution can dispatch on the kind instead of re-testing types.
"""

import inspect
from collections.abc import Callable, Mapping
from enum import Enum
from types import SimpleNamespace
from typing import Any

from attrs import frozen

ActionRegistry = Mapping[str, Any] | SimpleNamespace


class ActionKind(Enum):
    """Kind of a node in an action registry."""

    INVOCABLE = "invocable"
    PENDING_RESULT = "pending_result"
    STATIC_VALUE = "static_value"
    CONTAINER = "container"
    LAZY = "lazy"

    @property
    def is_leaf(self) -> bool:
        """Check if nodes of this kind are stored rather than traversed."""
        return self is not ActionKind.CONTAINER


@frozen
class Lazy:
    """A value computed on read.

    The getter is stored unevaluated in the flattened action map and called on
    every lookup, so side effects happen at execution time only.
    """

    getter: Callable[[], Any]

    def realize(self) -> Any:
        return self.getter()


def computed(getter: Callable[[], Any]) -> Lazy:
    """Decorator form of `Lazy`.

    Example:
        @computed
        def now():
            return datetime.now().isoformat()
    """
    return Lazy(getter)


def classify_action(value: Any) -> ActionKind:
    """
    Classify a registry node.

    Order matters: a callable or awaitable is a leaf even when it is also a
    mapping, and a `Lazy` is never unwrapped here.

    Params:
        value: Any node of an action registry

    Returns:
        The ActionKind the node belongs to
    """
    if isinstance(value, Lazy):
        return ActionKind.LAZY
    if callable(value):
        return ActionKind.INVOCABLE
    if inspect.isawaitable(value):
        return ActionKind.PENDING_RESULT
    if isinstance(value, (Mapping, SimpleNamespace)):
        return ActionKind.CONTAINER
    return ActionKind.STATIC_VALUE


def iter_container(container: ActionRegistry):
    """Yield (key, value) pairs of a container in insertion order."""
    if isinstance(container, SimpleNamespace):
        return iter(vars(container).items())
    return iter(container.items())
