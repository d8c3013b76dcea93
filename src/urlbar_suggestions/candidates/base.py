"""Adapter interface over the record shapes suggestion sources hand back."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Candidate(ABC):
    """Uniform read-only view of one source record.

    Ranking and aggregation only ever talk to records through this interface.
    """

    def __init__(self, raw: Any):
        self.raw = raw

    @abstractmethod
    def get_location(self) -> str | None:
        """The record's location (falls back to its url)."""
        ...

    @abstractmethod
    def get_title(self) -> str | None:
        ...

    @abstractmethod
    def get_tab_id(self) -> int | None:
        ...

    @abstractmethod
    def get_count(self) -> int:
        """Visit frequency, 0 when unknown."""
        ...

    @abstractmethod
    def get_last_accessed_time(self) -> float:
        """Epoch milliseconds of the last visit, 0 when unknown."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.get_location()!r})"
