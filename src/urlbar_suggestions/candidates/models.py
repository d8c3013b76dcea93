"""Record types produced inside the engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class HistoryItem:
    """A history or bookmark entry as returned by a site index."""

    location: str
    title: str = ""
    count: int = 0
    last_accessed_time: float = 0
