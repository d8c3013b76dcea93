"""URL parsing primitives used by ranking and aggregation."""

from urlbar_suggestions.urls.models import ParsedURL
from urlbar_suggestions.urls.parser import (
    is_url,
    normalize_location,
    parse_url,
    should_normalize_location,
)

__all__ = [
    "ParsedURL",
    "parse_url",
    "normalize_location",
    "should_normalize_location",
    "is_url",
]
