"""Tidal: synchronous in-process publish/subscribe dispatcher."""
from __future__ import annotations

from tidal.config import DispatcherConfig
from tidal.dispatcher import Dispatcher
from tidal.errors import SelectorError, TidalError
from tidal.selectors import (
    ByCallback,
    ByContext,
    ById,
    ByName,
    ByPair,
    Selector,
    selector_from,
)
from tidal.subscription import Subscription

__version__ = "0.1.0"

__all__ = [
    "Dispatcher",
    "DispatcherConfig",
    "Subscription",
    # Selectors
    "Selector",
    "ByPair",
    "ByName",
    "ByCallback",
    "ByContext",
    "ById",
    "selector_from",
    # Errors
    "TidalError",
    "SelectorError",
]
