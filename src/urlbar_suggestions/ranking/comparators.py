"""Comparator chain ranking history candidates against the typed input.

Comparators follow the ``cmp`` convention: negative when the first argument
should sort first. Domain comparisons return a magnitude of 3 for a strong
signal (only one host contains the input) and 2 for a good one (only one host
starts with it); simple-URL and path comparisons return 1.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Callable, Iterable

from urlbar_suggestions.candidates import Candidate, as_candidate
from urlbar_suggestions.config import DEFAULT_CONFIG
from urlbar_suggestions.ranking.scorer import DecayScorer
from urlbar_suggestions.urls import ParsedURL, parse_url

Comparator = Callable[[Any, Any], float]

_SCHEME_PREFIX_RE = re.compile(r"^https?://")


@dataclass(frozen=True)
class RankedEntry:
    """A candidate paired with its parsed location for one ranking pass."""

    candidate: Candidate
    parsed: ParsedURL


def _entry(item: Any) -> RankedEntry:
    if isinstance(item, RankedEntry):
        return item
    candidate = as_candidate(item)
    return RankedEntry(candidate, parse_url(candidate.get_location() or ""))


def is_parsed_url_simple(parsed: ParsedURL) -> bool:
    """True for a bare root location: path ``/``, no query, empty or no hash."""
    return (
        parsed.hash in (None, "#")
        and parsed.search is None
        and parsed.query is None
        and parsed.pathname == "/"
    )


def is_simple_domain_name_value(item: Any) -> bool:
    return is_parsed_url_simple(_entry(item).parsed)


def _label_count(hostname: str) -> int:
    labels = hostname.split(".")
    return len(labels) - 1 if labels[0] == "www" else len(labels)


def sort_by_simple_url(a: Any, b: Any, scorer: Comparator | None = None) -> float:
    """Prefer simple URLs, then https among simple ones, then shallower hosts.

    Ties fall through to ``scorer`` (decay score by default).
    """
    ea, eb = _entry(a), _entry(b)
    simple1 = is_parsed_url_simple(ea.parsed)
    simple2 = is_parsed_url_simple(eb.parsed)
    if simple1 and not simple2:
        return -1
    if not simple1 and simple2:
        return 1
    if simple1 and simple2:
        secure1 = ea.parsed.protocol == "https:"
        secure2 = eb.parsed.protocol == "https:"
        if secure1 and not secure2:
            return -1
        if not secure1 and secure2:
            return 1

    # hostname is None for things like javascript: bookmarklets
    if ea.parsed.hostname and eb.parsed.hostname:
        depth1 = _label_count(ea.parsed.hostname)
        depth2 = _label_count(eb.parsed.hostname)
        if depth1 < depth2:
            return -1
        if depth1 > depth2:
            return 1

    scorer = scorer or DecayScorer()
    return scorer(ea.candidate, eb.candidate)


def _domain_text(entry: RankedEntry) -> str:
    # Partially typed locations have no host; what looks like one is in pathname.
    text = entry.parsed.host or entry.parsed.pathname or entry.candidate.get_location() or ""
    return text.replace("www.", "", 1)


def get_sort_by_domain(input_host: str, scorer: Comparator | None = None) -> Comparator:
    """Build a comparator ranking hosts that contain ``input_host`` first.

    Returns 0 when no determination can be made from the host alone.
    """

    def sort_by_domain(a: Any, b: Any) -> float:
        ea, eb = _entry(a), _entry(b)
        pos1 = _domain_text(ea).find(input_host)
        pos2 = _domain_text(eb).find(input_host)
        if pos1 != -1 and pos2 == -1:
            return -3
        if pos1 == -1 and pos2 != -1:
            return 3
        if pos1 != -1 and pos2 != -1:
            # Autocomplete matches on prefixes, so position 0 beats decay.
            if pos1 == 0 and pos2 != 0:
                return -2
            if pos1 != 0 and pos2 == 0:
                return 2
            result = sort_by_simple_url(ea, eb, scorer)
            if result != 0:
                return result
        return 0

    return sort_by_domain


def get_sort_by_path(input_lower: str) -> Callable[[str, str], int]:
    """Build a comparator over host+path+hash strings.

    A string containing the input wins; otherwise the string that is contained
    in the other one (the more general location) wins.
    """

    def sort_by_path(path1: str, path2: str) -> int:
        pos1 = path1.find(input_lower)
        pos2 = path2.find(input_lower)
        if pos1 != -1 and pos2 == -1:
            return -1
        if pos1 == -1 and pos2 != -1:
            return 1
        in1 = path1.find(path2)
        in2 = path2.find(path1)
        if in1 == -1 and in2 != -1:
            return -1
        if in1 != -1 and in2 == -1:
            return 1
        return 0

    return sort_by_path


def _path_text(parsed: ParsedURL) -> str:
    return (parsed.host or "") + (parsed.path or "") + (parsed.hash or "")


class RankingComparator:
    """The composed ranking for one typed input.

    Each instance owns a parse cache keyed by candidate identity, so use a
    fresh instance per sort.
    """

    def __init__(
        self,
        query_lower: str,
        now: float | None = None,
        age_decay_constant: float = DEFAULT_CONFIG.age_decay_constant,
    ):
        input_lower = _SCHEME_PREFIX_RE.sub("", query_lower, count=1)
        input_host, _, input_path = input_lower.partition("/")
        self.input_lower = input_lower
        self.input_host = input_host
        self.input_path = input_path
        self.scorer = DecayScorer(now=now, age_decay_constant=age_decay_constant)
        self._sort_by_domain = get_sort_by_domain(input_host, self.scorer)
        self._sort_by_path = get_sort_by_path(input_lower)
        self._entries: dict[int, tuple[Any, RankedEntry]] = {}

    def entry(self, item: Any) -> RankedEntry:
        cached = self._entries.get(id(item))
        if cached is None or cached[0] is not item:
            cached = (item, _entry(item))
            self._entries[id(item)] = cached
        return cached[1]

    def __call__(self, a: Any, b: Any) -> float:
        ea, eb = self.entry(a), self.entry(b)

        # Domain tier only while the user is still typing a bare host.
        if not self.input_path:
            result = self._sort_by_domain(ea, eb)
            if result != 0:
                return result

        result = self._sort_by_path(_path_text(ea.parsed), _path_text(eb.parsed))
        if result != 0:
            return result

        return self.scorer(ea.candidate, eb.candidate)


def rank_for_query(
    query_lower: str,
    now: float | None = None,
    age_decay_constant: float = DEFAULT_CONFIG.age_decay_constant,
) -> RankingComparator:
    return RankingComparator(query_lower, now=now, age_decay_constant=age_decay_constant)


def sort_candidates(
    items: Iterable[Any],
    query_lower: str,
    now: float | None = None,
    age_decay_constant: float = DEFAULT_CONFIG.age_decay_constant,
) -> list:
    """Stable sort of raw candidates by the ranking for ``query_lower``."""
    comparator = rank_for_query(query_lower, now=now, age_decay_constant=age_decay_constant)
    return sorted(items, key=cmp_to_key(comparator))
