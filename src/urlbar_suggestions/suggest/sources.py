"""The five suggestion sources queried for every typed input.

Each source returns a flat, capped list of ``Suggestion`` for its type.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from urlbar_suggestions.candidates import Candidate
from urlbar_suggestions.config import DEFAULT_CONFIG, SuggestionConfig
from urlbar_suggestions.exceptions import SourceQueryError
from urlbar_suggestions.ranking import sort_candidates, synthesize_virtual_items
from urlbar_suggestions.suggest.about import is_source_about_url, navigatable_about_pages
from urlbar_suggestions.suggest.aggregator import aggregate
from urlbar_suggestions.suggest.models import Suggestion, SuggestionType
from urlbar_suggestions.suggest.state import (
    BOOKMARK_SUGGESTIONS,
    HISTORY_SUGGESTIONS,
    OFFER_SEARCH_SUGGESTIONS,
    OPENED_TAB_SUGGESTIONS,
    AppState,
)

logger = logging.getLogger(__name__)


def _is_active(tab) -> bool:
    if isinstance(tab, Mapping):
        return bool(tab.get("active"))
    return bool(getattr(tab, "active", False))


async def get_history_suggestions(
    state: AppState,
    query_lower: str,
    config: SuggestionConfig = DEFAULT_CONFIG,
) -> list[Suggestion]:
    """History (or bookmarks, when history is off) plus virtual root domains.

    Candidates are ranked, then deduped and capped by ``aggregate``.
    """
    history_on = state.settings.get_setting(HISTORY_SUGGESTIONS)
    bookmarks_on = state.settings.get_setting(BOOKMARK_SUGGESTIONS)

    try:
        results = await state.site_index.query(
            query_lower,
            history_on=history_on,
            bookmarks_on=bookmarks_on,
        )
    except SourceQueryError:
        raise
    except Exception as e:
        raise SourceQueryError(f"History query failed: {e}") from e

    results = list(results) + synthesize_virtual_items(results, query_lower)
    results = sort_candidates(
        results,
        query_lower,
        age_decay_constant=config.age_decay_constant,
    )
    logger.debug("History source ranked %s candidates for %r", len(results), query_lower)

    return aggregate(
        results,
        config.max_history_sites,
        SuggestionType.HISTORY if history_on else SuggestionType.BOOKMARK,
        filter_predicate=None,
        query_lower=query_lower,
    )


async def get_about_suggestions(
    state: AppState,
    query_lower: str,
    config: SuggestionConfig = DEFAULT_CONFIG,
) -> list[Suggestion]:
    return aggregate(
        navigatable_about_pages(state.about_pages),
        config.max_about_pages,
        SuggestionType.ABOUT_PAGES,
        query_lower=query_lower,
    )


async def get_opened_tab_suggestions(
    state: AppState,
    window_id: int,
    query_lower: str,
    config: SuggestionConfig = DEFAULT_CONFIG,
) -> list[Suggestion]:
    """Other tabs in the window whose title or url matches the input."""
    if not state.settings.get_setting(OPENED_TAB_SUGGESTIONS):
        return []

    tabs = state.tabs.get_tabs_by_window_id(window_id)
    active = {id(tab) for tab in tabs if _is_active(tab)}

    def is_switchable(candidate: Candidate) -> bool:
        url = candidate.get_location() or ""
        title = candidate.get_title() or ""
        return (
            not is_source_about_url(url)
            and id(candidate.raw) not in active
            and (query_lower in title.lower() or query_lower in url.lower())
        )

    return aggregate(
        tabs,
        config.max_opened_frames,
        SuggestionType.TAB,
        filter_predicate=is_switchable,
        query_lower=query_lower,
    )


async def get_search_suggestions(
    state: AppState,
    tab_id: int,
    query_lower: str,
    config: SuggestionConfig = DEFAULT_CONFIG,
) -> list[Suggestion]:
    """Remote search suggestions already fetched into the app state."""
    if not state.settings.get_setting(OFFER_SEARCH_SUGGESTIONS):
        return []
    if not state.search_results:
        return []
    return aggregate(
        state.search_results,
        config.max_search,
        SuggestionType.SEARCH,
        query_lower=query_lower,
    )


async def get_top_site_suggestions(
    state: AppState,
    query_lower: str,
    config: SuggestionConfig = DEFAULT_CONFIG,
) -> list[Suggestion]:
    return aggregate(
        state.top_sites,
        config.max_top_sites,
        SuggestionType.TOP_SITE,
        query_lower=query_lower,
    )
