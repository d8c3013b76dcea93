"""Data models for the suggestion list."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SuggestionType(str, Enum):
    """Which source a suggestion came from."""

    HISTORY = "history"
    BOOKMARK = "bookmark"
    ABOUT_PAGES = "about_pages"
    TAB = "tab"
    SEARCH = "search"
    TOP_SITE = "top_site"


@dataclass(frozen=True)
class Suggestion:
    """One entry of the URL bar suggestion list."""

    title: str | None
    location: str | None
    tab_id: int | None
    type: SuggestionType


@dataclass
class Tab:
    """An open tab as seen by the tab registry."""

    tab_id: int
    window_id: int
    url: str
    title: str = ""
    active: bool = False


@dataclass
class Frame:
    """Per-tab frame details; ``autocomplete_url`` overrides the default engine."""

    tab_id: int
    autocomplete_url: str | None = None


@dataclass
class SearchDetail:
    """The default search engine's suggestion endpoint and shortcut token."""

    autocomplete_url: str | None = None
    shortcut: str | None = None
