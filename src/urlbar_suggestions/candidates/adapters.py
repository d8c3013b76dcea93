"""Concrete candidate adapters for strings, mappings and plain records."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from urlbar_suggestions.candidates.base import Candidate
from urlbar_suggestions.exceptions import CandidateShapeError

_LOCATION_KEYS = ("location", "url")
_TITLE_KEYS = ("title",)
_TAB_ID_KEYS = ("tab_id", "tabId")
_COUNT_KEYS = ("count",)
_LAST_ACCESSED_KEYS = ("last_accessed_time", "lastAccessedTime")


class LocationCandidate(Candidate):
    """A bare location string; its title is the location itself."""

    def get_location(self) -> str | None:
        return self.raw

    def get_title(self) -> str | None:
        return self.raw

    def get_tab_id(self) -> int | None:
        return None

    def get_count(self) -> int:
        return 0

    def get_last_accessed_time(self) -> float:
        return 0


class MappingCandidate(Candidate):
    """A dict-like record keyed by field name (camelCase or snake_case)."""

    def _lookup(self, keys: tuple[str, ...]) -> Any:
        for key in keys:
            value = self.raw.get(key)
            if value:
                return value
        return None

    def get_location(self) -> str | None:
        return self._lookup(_LOCATION_KEYS)

    def get_title(self) -> str | None:
        return self._lookup(_TITLE_KEYS)

    def get_tab_id(self) -> int | None:
        for key in _TAB_ID_KEYS:
            if self.raw.get(key) is not None:
                return self.raw.get(key)
        return None

    def get_count(self) -> int:
        return self._lookup(_COUNT_KEYS) or 0

    def get_last_accessed_time(self) -> float:
        return self._lookup(_LAST_ACCESSED_KEYS) or 0


class RecordCandidate(Candidate):
    """A plain object (dataclass, namedtuple, ...) exposing fields as attributes."""

    def _lookup(self, names: tuple[str, ...]) -> Any:
        for name in names:
            value = getattr(self.raw, name, None)
            if value:
                return value
        return None

    def get_location(self) -> str | None:
        return self._lookup(_LOCATION_KEYS)

    def get_title(self) -> str | None:
        return self._lookup(_TITLE_KEYS)

    def get_tab_id(self) -> int | None:
        for name in _TAB_ID_KEYS:
            if getattr(self.raw, name, None) is not None:
                return getattr(self.raw, name)
        return None

    def get_count(self) -> int:
        return self._lookup(_COUNT_KEYS) or 0

    def get_last_accessed_time(self) -> float:
        return self._lookup(_LAST_ACCESSED_KEYS) or 0


def as_candidate(raw: Any) -> Candidate:
    """Wrap a source record in the matching adapter.

    Raises:
        CandidateShapeError: the record is not a string, a mapping, or an
            object with a ``location`` or ``url`` attribute.
    """
    if isinstance(raw, Candidate):
        return raw
    if isinstance(raw, str):
        return LocationCandidate(raw)
    if isinstance(raw, Mapping):
        return MappingCandidate(raw)
    if raw is not None and any(hasattr(raw, name) for name in _LOCATION_KEYS):
        return RecordCandidate(raw)
    raise CandidateShapeError(
        f"Unsupported suggestion candidate {type(raw).__name__}: "
        "expected a string, a mapping, or a record with a location or url"
    )
