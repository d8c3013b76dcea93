"""Synthesize root-domain history entries the user never visited directly."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Iterable

from urlbar_suggestions.candidates import HistoryItem, as_candidate
from urlbar_suggestions.ranking.scorer import now_ms
from urlbar_suggestions.urls import ParsedURL, parse_url

logger = logging.getLogger(__name__)

UNKNOWN_HOST = "unknown"


def _is_bare_root(parsed: ParsedURL) -> bool:
    return (
        parsed.hash is None
        and parsed.search is None
        and parsed.query is None
        and parsed.pathname == "/"
    )


def _virtual_item(group: list[ParsedURL], now: float) -> HistoryItem | None:
    """Root-domain item for a same-host group lacking a bare root member."""
    if any(_is_bare_root(parsed) for parsed in group):
        return None
    first = group[0]
    return HistoryItem(
        location=f"{first.protocol}//{first.host}",
        title=first.host,
        count=0,
        last_accessed_time=now,
    )


def synthesize_virtual_items(
    history: Iterable[Any] | None,
    query_lower: str = "",
    now: float | None = None,
) -> list[HistoryItem]:
    """Create root-domain items for hosts seen in history only with paths.

    For history holding ``b.example.com/x`` and ``b.example.com/y`` but not
    ``b.example.com/`` this yields one unvisited ``b.example.com`` item. When
    ``query_lower`` is given, only items whose location contains it are kept.
    """
    now = now_ms() if now is None else now

    grouped: dict[str, list[ParsedURL]] = defaultdict(list)
    for item in history or []:
        if item is None:
            continue
        location = as_candidate(item).get_location()
        if not location:
            continue
        parsed = parse_url(location)
        grouped[parsed.host or UNKNOWN_HOST].append(parsed)

    virtual_items = []
    for host, group in grouped.items():
        # Nothing to build a root location from without a host.
        if host == UNKNOWN_HOST:
            continue
        item = _virtual_item(group, now)
        if item is not None:
            virtual_items.append(item)

    if query_lower:
        virtual_items = [vi for vi in virtual_items if query_lower in vi.location]

    logger.debug("Synthesized %s virtual history items", len(virtual_items))
    return virtual_items
