"""Collaborator interfaces the engine reads from and publishes to.

Settings, the tab registry and the history index are owned by the host
application; the engine only reads them. In-memory implementations are
provided for embedding and testing.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Sequence

from urlbar_suggestions.candidates import as_candidate
from urlbar_suggestions.suggest.about import ABOUT_PAGES
from urlbar_suggestions.suggest.models import Frame, SearchDetail, Suggestion, Tab
from urlbar_suggestions.suggest.top_sites import TOP_SITES

# Setting names
HISTORY_SUGGESTIONS = "urlbar.suggestions.history"
BOOKMARK_SUGGESTIONS = "urlbar.suggestions.bookmark"
OPENED_TAB_SUGGESTIONS = "urlbar.suggestions.openedTab"
OFFER_SEARCH_SUGGESTIONS = "search.offer-search-suggestions"

DEFAULT_SETTINGS = {
    HISTORY_SUGGESTIONS: True,
    BOOKMARK_SUGGESTIONS: True,
    OPENED_TAB_SUGGESTIONS: True,
    OFFER_SEARCH_SUGGESTIONS: False,
}


class SettingsProvider(ABC):
    """Read access to boolean user settings."""

    @abstractmethod
    def get_setting(self, name: str) -> bool:
        ...


class TabRegistry(ABC):
    """Lookup of open tabs and their frames."""

    @abstractmethod
    def get_frame_by_tab_id(self, tab_id: int) -> Frame | None:
        ...

    @abstractmethod
    def get_tabs_by_window_id(self, window_id: int) -> list[Tab]:
        ...


class SiteIndex(ABC):
    """History and bookmark storage queried by typed input."""

    @abstractmethod
    async def query(
        self,
        query_lower: str,
        history_on: bool = True,
        bookmarks_on: bool = True,
    ) -> list[Any]:
        """Return raw candidates matching the input, in storage order."""
        ...


class SuggestionDispatcher(ABC):
    """Receives the engine's published results."""

    @abstractmethod
    def url_bar_suggestions_changed(self, window_id: int, suggestions: list[Suggestion]) -> None:
        ...

    @abstractmethod
    def search_suggestion_results_available(
        self,
        tab_id: int,
        query: str | None,
        results: list[str],
    ) -> None:
        ...


class DictSettings(SettingsProvider):
    """Settings backed by a dict layered over ``DEFAULT_SETTINGS``."""

    def __init__(self, values: dict[str, bool] | None = None):
        self.values = {**DEFAULT_SETTINGS, **(values or {})}

    def get_setting(self, name: str) -> bool:
        return bool(self.values.get(name, False))


class InMemoryTabRegistry(TabRegistry):
    def __init__(self, tabs: Sequence[Tab] = (), frames: Sequence[Frame] = ()):
        self.tabs = list(tabs)
        self.frames = {frame.tab_id: frame for frame in frames}

    def get_frame_by_tab_id(self, tab_id: int) -> Frame | None:
        return self.frames.get(tab_id)

    def get_tabs_by_window_id(self, window_id: int) -> list[Tab]:
        return [tab for tab in self.tabs if tab.window_id == window_id]


class InMemorySiteIndex(SiteIndex):
    """Substring match over location and title of in-memory history and bookmarks."""

    def __init__(self, history: Sequence[Any] = (), bookmarks: Sequence[Any] = ()):
        self.history = list(history)
        self.bookmarks = list(bookmarks)

    async def query(
        self,
        query_lower: str,
        history_on: bool = True,
        bookmarks_on: bool = True,
    ) -> list[Any]:
        pool = []
        if history_on:
            pool.extend(self.history)
        if bookmarks_on:
            pool.extend(self.bookmarks)

        results = []
        for item in pool:
            candidate = as_candidate(item)
            location = (candidate.get_location() or "").lower()
            title = (candidate.get_title() or "").lower()
            if query_lower in location or query_lower in title:
                results.append(item)
        return results


@dataclass
class AppState:
    """Everything a pipeline run reads, plus the last results published into it."""

    settings: SettingsProvider = field(default_factory=DictSettings)
    tabs: TabRegistry = field(default_factory=InMemoryTabRegistry)
    site_index: SiteIndex = field(default_factory=InMemorySiteIndex)
    top_sites: Sequence[str] = TOP_SITES
    about_pages: Sequence[str] = ABOUT_PAGES
    search_detail: SearchDetail | None = None
    search_results: list[str] | None = None
    url_bar_suggestions: dict[int, list[Suggestion]] = field(default_factory=dict)


class StateDispatcher(SuggestionDispatcher):
    """Dispatcher that writes published results back into an ``AppState``."""

    def __init__(self, state: AppState):
        self.state = state

    def url_bar_suggestions_changed(self, window_id: int, suggestions: list[Suggestion]) -> None:
        self.state.url_bar_suggestions[window_id] = list(suggestions)

    def search_suggestion_results_available(
        self,
        tab_id: int,
        query: str | None,
        results: list[str],
    ) -> None:
        self.state.search_results = list(results)
