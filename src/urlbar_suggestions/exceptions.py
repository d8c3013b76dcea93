"""Unified exception hierarchy for urlbar-suggestions."""


class SuggestionError(Exception):
    """Base exception for all suggestion engine errors."""


class ConfigError(SuggestionError):
    """Invalid engine configuration value."""


# Candidates
class CandidateShapeError(SuggestionError):
    """A source record exposes neither a location nor a url."""


# Sources
class SourceQueryError(SuggestionError):
    """A suggestion source failed to produce its candidates."""


# Remote search suggestions
class SearchSuggestionFetchError(SuggestionError):
    """Failed to fetch remote search suggestions."""
