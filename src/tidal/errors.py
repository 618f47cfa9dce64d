"""Error hierarchy for the tidal dispatcher."""
from __future__ import annotations


class TidalError(Exception):
    """Base error for all tidal errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class SelectorError(TidalError):
    """An unsubscribe selector has a shape that cannot be interpreted."""

    def __init__(self, message: str, *, value: object = None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.value = value
