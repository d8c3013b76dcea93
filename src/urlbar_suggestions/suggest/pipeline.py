"""Debounced orchestration from typed input to published suggestions."""

from __future__ import annotations

import asyncio
import inspect
import logging
import re
from typing import Any, Awaitable, Callable, Optional

from urlbar_suggestions.config import DEFAULT_CONFIG, SuggestionConfig
from urlbar_suggestions.suggest.debounce import Debouncer, RunToken
from urlbar_suggestions.suggest.models import Suggestion
from urlbar_suggestions.suggest.sources import (
    get_about_suggestions,
    get_history_suggestions,
    get_opened_tab_suggestions,
    get_search_suggestions,
    get_top_site_suggestions,
)
from urlbar_suggestions.suggest.state import (
    OFFER_SEARCH_SUGGESTIONS,
    AppState,
    SuggestionDispatcher,
)
from urlbar_suggestions.urls import is_url

logger = logging.getLogger(__name__)

# Called as fetcher(window_id, tab_id, endpoint, query, token=token); it
# publishes on its own and must not publish once the token is cancelled.
SearchFetcher = Callable[..., Optional[Awaitable[None]]]


async def generate_suggestions(
    state: AppState,
    window_id: int,
    tab_id: int,
    url_location: str,
    config: SuggestionConfig = DEFAULT_CONFIG,
) -> list[Suggestion]:
    """Query every source concurrently and concatenate their lists.

    All sources must complete; the first failure propagates.
    """
    query_lower = url_location.lower()
    suggestion_lists = await asyncio.gather(
        get_history_suggestions(state, query_lower, config),
        get_about_suggestions(state, query_lower, config),
        get_opened_tab_suggestions(state, window_id, query_lower, config),
        get_search_suggestions(state, tab_id, query_lower, config),
        get_top_site_suggestions(state, query_lower, config),
    )
    return [suggestion for suggestions in suggestion_lists for suggestion in suggestions]


class ListGenerationPipeline:
    """Rebuilds the URL bar suggestion list after a short pause in typing."""

    def __init__(
        self,
        dispatcher: SuggestionDispatcher,
        config: SuggestionConfig = DEFAULT_CONFIG,
    ):
        self.dispatcher = dispatcher
        self.config = config
        self.debouncer = Debouncer(self._run, config.list_debounce_seconds, name="list-generation")

    def run(self, state: AppState, window_id: int, tab_id: int, url_location: str) -> None:
        self.debouncer(state, window_id, tab_id, url_location)

    async def _run(
        self,
        token: RunToken,
        state: AppState,
        window_id: int,
        tab_id: int,
        url_location: str,
    ) -> None:
        if not url_location:
            return
        suggestions = await generate_suggestions(state, window_id, tab_id, url_location, self.config)
        if token.cancelled:
            logger.debug("Discarding stale suggestions from run %s", token.sequence)
            return
        self.dispatcher.url_bar_suggestions_changed(window_id, suggestions)


class SearchTriggerPipeline:
    """Decides whether typed input should fetch remote search suggestions."""

    def __init__(
        self,
        dispatcher: SuggestionDispatcher,
        fetcher: SearchFetcher,
        config: SuggestionConfig = DEFAULT_CONFIG,
    ):
        self.dispatcher = dispatcher
        self.fetcher = fetcher
        self.config = config
        self.debouncer = Debouncer(self._run, config.search_debounce_seconds, name="search-trigger")

    def run(self, state: AppState, window_id: int, tab_id: int, user_input: str) -> None:
        self.debouncer(state, window_id, tab_id, user_input)

    def _clear(self, tab_id: int, token: RunToken | None) -> None:
        if token is not None and token.cancelled:
            return
        self.dispatcher.search_suggestion_results_available(tab_id, None, [])

    async def _run(
        self,
        token: RunToken,
        state: AppState,
        window_id: int,
        tab_id: int,
        user_input: str,
    ) -> None:
        await self.trigger(state, window_id, tab_id, user_input, token)

    async def trigger(
        self,
        state: AppState,
        window_id: int,
        tab_id: int,
        user_input: str,
        token: RunToken | None = None,
    ) -> None:
        """Fetch remote suggestions for ``user_input`` or clear the previous ones."""
        frame = state.tabs.get_frame_by_tab_id(tab_id)
        if frame is None:
            # Frame details can lag behind the tab being created.
            logger.debug("No frame for tab %s yet, skipping search suggestions", tab_id)
            return

        search_detail = state.search_detail
        autocomplete_url = frame.autocomplete_url or (
            search_detail.autocomplete_url if search_detail else None
        )
        if not autocomplete_url:
            self._clear(tab_id, token)
            return

        should_fetch = (
            state.settings.get_setting(OFFER_SEARCH_SUGGESTIONS)
            and bool(user_input)
            and not is_url(user_input)
        )
        if not should_fetch:
            self._clear(tab_id, token)
            return

        query = user_input
        if search_detail and search_detail.shortcut:
            query = re.sub(f"^{re.escape(search_detail.shortcut)} ", "", query)

        if token is not None and token.cancelled:
            return
        result: Any = self.fetcher(window_id, tab_id, autocomplete_url, query, token=token)
        if inspect.isawaitable(result):
            await result


class SuggestionEngine:
    """Both debounced pipelines behind one object, sharing dispatcher and config."""

    def __init__(
        self,
        dispatcher: SuggestionDispatcher,
        fetcher: SearchFetcher,
        config: SuggestionConfig | None = None,
    ):
        self.config = config or SuggestionConfig.from_env()
        self.list_pipeline = ListGenerationPipeline(dispatcher, self.config)
        self.search_pipeline = SearchTriggerPipeline(dispatcher, fetcher, self.config)

    def run_list_generation_pipeline(
        self,
        state: AppState,
        window_id: int,
        tab_id: int,
        url_location: str,
    ) -> None:
        self.list_pipeline.run(state, window_id, tab_id, url_location)

    def run_search_trigger_pipeline(
        self,
        state: AppState,
        window_id: int,
        tab_id: int,
        user_input: str,
    ) -> None:
        self.search_pipeline.run(state, window_id, tab_id, user_input)

    def on_input_changed(self, state: AppState, window_id: int, tab_id: int, user_input: str) -> None:
        """Feed one input event to both pipelines."""
        self.run_list_generation_pipeline(state, window_id, tab_id, user_input)
        self.run_search_trigger_pipeline(state, window_id, tab_id, user_input)

    async def flush(self) -> None:
        await asyncio.gather(self.list_pipeline.debouncer.flush(), self.search_pipeline.debouncer.flush())
