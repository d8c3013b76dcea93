"""Turn one source's raw candidates into capped, deduplicated suggestions."""

from __future__ import annotations

from typing import Any, Callable, Iterable

from urlbar_suggestions.candidates import Candidate, as_candidate
from urlbar_suggestions.suggest.models import Suggestion, SuggestionType
from urlbar_suggestions.urls import normalize_location, should_normalize_location

FilterPredicate = Callable[[Candidate], bool]

_MATCH_QUERY = object()


def matches_query(query_lower: str) -> FilterPredicate:
    """Predicate: the candidate's location contains the lower-cased query."""

    def predicate(candidate: Candidate) -> bool:
        return query_lower in (candidate.get_location() or "").lower()

    return predicate


def dedupe_key(location: str | None, normalize: bool = True) -> str:
    key = (location or "").lower()
    return normalize_location(key) if normalize else key


def aggregate(
    data: Iterable[Any],
    max_results: int,
    suggestion_type: SuggestionType,
    filter_predicate: FilterPredicate | None | object = _MATCH_QUERY,
    query_lower: str = "",
) -> list[Suggestion]:
    """Filter, dedupe, cap and normalize one source's candidates.

    Args:
        data: Raw candidates in source order (strings, mappings or records).
        max_results: Cap on the number of suggestions returned.
        suggestion_type: Type tag for every emitted suggestion. TAB results
            are exempt from deduplication; one URL may be open in many tabs.
        filter_predicate: Per-source predicate over the adapted candidate.
            Defaults to "location contains ``query_lower``"; pass ``None`` to
            keep everything.
        query_lower: The lower-cased typed input. While it spells out an
            explicit ``http://``/``https://``/``www.`` prefix, dedupe keys
            keep their prefixes.
    """
    if filter_predicate is _MATCH_QUERY:
        filter_predicate = matches_query(query_lower)
    normalize = should_normalize_location(query_lower) if query_lower else True

    suggestions: list[Suggestion] = []
    seen: set[str] = set()
    for raw in data:
        if len(suggestions) >= max_results:
            break
        candidate = as_candidate(raw)
        key = dedupe_key(candidate.get_location(), normalize)
        if suggestion_type != SuggestionType.TAB and key in seen:
            continue
        if filter_predicate is not None and not filter_predicate(candidate):
            continue
        seen.add(key)
        suggestions.append(
            Suggestion(
                title=candidate.get_title(),
                location=candidate.get_location(),
                tab_id=candidate.get_tab_id(),
                type=suggestion_type,
            )
        )
    return suggestions
