"""URL bar suggestion sources, aggregation and debounced pipelines."""

from urlbar_suggestions.suggest.models import (
    Frame,
    SearchDetail,
    Suggestion,
    SuggestionType,
    Tab,
)
from urlbar_suggestions.suggest.aggregator import aggregate
from urlbar_suggestions.suggest.state import (
    AppState,
    DictSettings,
    InMemorySiteIndex,
    InMemoryTabRegistry,
    SettingsProvider,
    SiteIndex,
    StateDispatcher,
    SuggestionDispatcher,
    TabRegistry,
)
from urlbar_suggestions.suggest.sources import (
    get_about_suggestions,
    get_history_suggestions,
    get_opened_tab_suggestions,
    get_search_suggestions,
    get_top_site_suggestions,
)
from urlbar_suggestions.suggest.debounce import Debouncer, PipelineState, RunToken
from urlbar_suggestions.suggest.pipeline import (
    ListGenerationPipeline,
    SearchTriggerPipeline,
    SuggestionEngine,
    generate_suggestions,
)
from urlbar_suggestions.suggest.fetcher import SearchSuggestionClient
from urlbar_suggestions.suggest.top_sites import TOP_SITES

__all__ = [
    "Suggestion",
    "SuggestionType",
    "Tab",
    "Frame",
    "SearchDetail",
    "aggregate",
    "AppState",
    "SettingsProvider",
    "TabRegistry",
    "SiteIndex",
    "SuggestionDispatcher",
    "DictSettings",
    "InMemoryTabRegistry",
    "InMemorySiteIndex",
    "StateDispatcher",
    "get_history_suggestions",
    "get_about_suggestions",
    "get_opened_tab_suggestions",
    "get_search_suggestions",
    "get_top_site_suggestions",
    "Debouncer",
    "PipelineState",
    "RunToken",
    "generate_suggestions",
    "ListGenerationPipeline",
    "SearchTriggerPipeline",
    "SuggestionEngine",
    "SearchSuggestionClient",
    "TOP_SITES",
]
