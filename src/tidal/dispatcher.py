"""Synchronous publish/subscribe dispatcher keyed by channel name."""

from __future__ import annotations

import logging
import threading
from contextlib import nullcontext
from typing import Any, Callable, Sequence

from tidal.config import DispatcherConfig
from tidal.selectors import ByName, ByPair, Selector, selector_from
from tidal.subscription import Subscription


class Dispatcher:
    """Registry of channel subscriptions with synchronous LIFO dispatch.

    Subscriptions on a channel are invoked newest-first.  A publish call
    works from a snapshot of the channel taken when it starts: callbacks
    subscribed while it runs are not invoked by it, and subscriptions removed
    while it runs are skipped if their turn has not come yet.

    Exceptions raised by callbacks propagate to the publisher and stop the
    remaining dispatch for that call.

    With ``thread_safe`` enabled a single lock guards the registry and the id
    counter.  The lock is never held while a callback runs.
    """

    def __init__(self, config: DispatcherConfig | None = None) -> None:
        self.config = config or DispatcherConfig()
        self._lock = threading.Lock() if self.config.thread_safe else nullcontext()
        self._channels: dict[str, list[Subscription]] = {}
        self._live: set[int] = set()
        self._next_id = 0
        self._log = logging.getLogger(self.config.logger_name)

    # --- subscribe ------------------------------------------------------------

    def subscribe(
        self, name: str, callback: Callable[..., Any], context: Any = None
    ) -> int:
        """Register *callback* on channel *name* and return its id.

        *context* defaults to this dispatcher, so ``unsubscribe(dispatcher)``
        removes every subscription made without an explicit context.
        """
        with self._lock:
            subscription = Subscription(
                callback=callback,
                context=self if context is None else context,
                id=self._next_id,
            )
            self._next_id += 1
            self._channels.setdefault(name, []).append(subscription)
            self._live.add(subscription.id)
        self._log.debug("Subscribed id=%d to %r", subscription.id, name)
        return subscription.id

    # --- publish --------------------------------------------------------------

    def publish(self, name: str, *args: Any) -> Dispatcher:
        """Invoke every subscriber of *name*, newest first.

        Several trailing arguments are passed through as they are.  A single
        ``list`` or ``tuple`` is spread as the argument list, ``None`` means
        no arguments, and any other single value is passed on its own::

            dispatcher.publish("e", [1, 2, "x"])
            dispatcher.publish("e", 1, 2, "x")
        """
        if len(args) == 1:
            (value,) = args
            if value is None:
                args = ()
            elif isinstance(value, (list, tuple)):
                args = tuple(value)
        return self.publish_args(name, args)

    def publish_args(self, name: str, args: Sequence[Any] = ()) -> Dispatcher:
        """Invoke every subscriber of *name* with *args*, newest first."""
        with self._lock:
            subscriptions = self._channels.get(name)
            snapshot = list(subscriptions) if subscriptions else []
        if not snapshot:
            return self

        args = tuple(args)
        self._log.debug("Publishing %r to %d subscriber(s)", name, len(snapshot))
        for subscription in reversed(snapshot):
            if not self._is_live(subscription.id):
                continue
            try:
                subscription.invoke(args)
            except Exception:
                self._log.debug(
                    "Subscriber id=%d on %r raised; dispatch aborted",
                    subscription.id,
                    name,
                )
                raise
        return self

    # --- unsubscribe ----------------------------------------------------------

    def unsubscribe(self, selector: Any) -> Dispatcher:
        """Remove subscriptions chosen by the shape of *selector*.

        * ``(name, callback)``: that callback on that channel.
        * ``"name"``: every subscription on the channel.
        * a number: the subscription with that id (``42.0`` selects id 42).
        * a callable: that callback on every channel.
        * any other object: every subscription owned by that context.

        Selectors that match nothing are ignored.
        """
        resolved = selector_from(selector)
        if resolved is not None:
            self.remove(resolved)
        return self

    def remove(self, selector: Selector) -> int:
        """Remove the subscriptions *selector* matches and return how many."""
        removed = 0
        with self._lock:
            if isinstance(selector, (ByPair, ByName)):
                names = [selector.name] if selector.name in self._channels else []
            else:
                names = list(self._channels)
            for name in names:
                subscriptions = self._channels[name]
                kept: list[Subscription] = []
                for subscription in subscriptions:
                    if selector.matches(name, subscription):
                        self._live.discard(subscription.id)
                    else:
                        kept.append(subscription)
                removed += len(subscriptions) - len(kept)
                subscriptions[:] = kept
        self._log.debug("Removed %d subscription(s) matching %r", removed, selector)
        return removed

    # --- introspection --------------------------------------------------------

    def subscribers(self, name: str) -> tuple[Subscription, ...]:
        """Return the subscriptions of *name* in subscribe order."""
        with self._lock:
            return tuple(self._channels.get(name, ()))

    def channels(self) -> list[str]:
        """Return the names of channels that have at least one subscriber."""
        with self._lock:
            return [name for name, subs in self._channels.items() if subs]

    def has_subscribers(self, name: str) -> bool:
        with self._lock:
            return bool(self._channels.get(name))

    @property
    def subscription_count(self) -> int:
        """Total number of live subscriptions across all channels."""
        with self._lock:
            return len(self._live)

    def _is_live(self, subscription_id: int) -> bool:
        with self._lock:
            return subscription_id in self._live

    def __contains__(self, name: str) -> bool:
        return self.has_subscribers(name)

    def __repr__(self) -> str:
        with self._lock:
            return (
                f"Dispatcher(channels={len(self._channels)}, "
                f"subscriptions={len(self._live)})"
            )
