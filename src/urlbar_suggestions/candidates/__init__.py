"""Candidate records and the adapter interface over their shapes."""

from urlbar_suggestions.candidates.base import Candidate
from urlbar_suggestions.candidates.adapters import (
    LocationCandidate,
    MappingCandidate,
    RecordCandidate,
    as_candidate,
)
from urlbar_suggestions.candidates.models import HistoryItem

__all__ = [
    "Candidate",
    "LocationCandidate",
    "MappingCandidate",
    "RecordCandidate",
    "as_candidate",
    "HistoryItem",
]
