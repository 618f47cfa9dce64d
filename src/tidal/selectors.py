"""Unsubscribe selectors: which subscriptions an ``unsubscribe`` call removes.

Each selector is a small frozen dataclass with a ``matches`` predicate.
``selector_from`` classifies a loosely-typed value by its runtime shape,
which is what ``Dispatcher.unsubscribe`` accepts.

Callbacks and contexts are compared by identity.  Bound methods are the one
exception: two accesses of ``obj.handler`` are distinct objects, so they match
when they share both receiver and function.  Ids are compared by value.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MethodType
from typing import Any, Callable, Union

from tidal.errors import SelectorError
from tidal.subscription import Subscription


@dataclass(frozen=True)
class ByPair:
    """Subscriptions on one channel registered with one callback."""

    name: str
    callback: Callable[..., Any]

    def matches(self, name: str, subscription: Subscription) -> bool:
        return name == self.name and _same_callback(
            subscription.callback, self.callback
        )


@dataclass(frozen=True)
class ByName:
    """Every subscription on one channel."""

    name: str

    def matches(self, name: str, subscription: Subscription) -> bool:
        return name == self.name


@dataclass(frozen=True)
class ByCallback:
    """Every subscription, on any channel, registered with one callback."""

    callback: Callable[..., Any]

    def matches(self, name: str, subscription: Subscription) -> bool:
        return _same_callback(subscription.callback, self.callback)


@dataclass(frozen=True)
class ByContext:
    """Every subscription, on any channel, owned by one context object."""

    context: Any

    def matches(self, name: str, subscription: Subscription) -> bool:
        return subscription.context is self.context


@dataclass(frozen=True)
class ById:
    """The single subscription carrying a given id."""

    id: int | float

    def matches(self, name: str, subscription: Subscription) -> bool:
        return subscription.id == self.id


Selector = Union[ByPair, ByName, ByCallback, ByContext, ById]


def _same_callback(a: Any, b: Any) -> bool:
    if isinstance(a, MethodType) and isinstance(b, MethodType):
        return a.__self__ is b.__self__ and a.__func__ is b.__func__
    return a is b


def selector_from(value: Any) -> Selector | None:
    """Classify *value* into a selector by its shape.

    Precedence: ``list``/``tuple`` pair, ``str`` name, ``int`` or ``float``
    id (``bool`` excluded; ``42.0`` selects id 42), callable, then any other
    object as a context.  ``None`` and booleans select nothing and yield
    ``None``.

    A callable object is always treated as a callback; to remove by a
    callable context build ``ByContext`` explicitly.
    """
    if isinstance(value, (list, tuple)):
        if len(value) != 2:
            raise SelectorError(
                f"pair selector must be (name, callback), got {len(value)} item(s)",
                value=value,
            )
        name, callback = value
        return ByPair(name=name, callback=callback)
    if isinstance(value, str):
        return ByName(name=value)
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return ById(id=value)
    if callable(value):
        return ByCallback(callback=value)
    return ByContext(context=value)
