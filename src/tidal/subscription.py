"""Subscription record: one registered callback on a channel."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class Subscription:
    """A callback registered against a channel.

    ``context`` is the owner the subscription is grouped under; it defaults
    to the dispatcher that created the subscription.  ``id`` is unique within
    that dispatcher and is never reused.
    """

    callback: Callable[..., Any]
    context: Any
    id: int

    def invoke(self, args: tuple[Any, ...]) -> Any:
        return self.callback(*args)
