from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DispatcherConfig:
    thread_safe: bool = True
    logger_name: str = "tidal"
