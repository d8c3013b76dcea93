"""OpenSearch suggestion client feeding remote search results to the dispatcher."""

from __future__ import annotations

import logging
from urllib.parse import quote

from urlbar_suggestions.exceptions import SearchSuggestionFetchError
from urlbar_suggestions.suggest.debounce import RunToken
from urlbar_suggestions.suggest.state import SuggestionDispatcher

logger = logging.getLogger(__name__)

SEARCH_TERMS = "{searchTerms}"


def build_suggestion_url(autocomplete_url: str, query: str) -> str:
    """Substitute the encoded query into an OpenSearch URL template."""
    return autocomplete_url.replace(SEARCH_TERMS, quote(query, safe=""))


def parse_suggestions(data) -> list[str]:
    """Extract suggestion strings from an OpenSearch ``[query, [s1, ...]]`` body."""
    if not isinstance(data, list) or len(data) < 2 or not isinstance(data[1], list):
        raise SearchSuggestionFetchError(f"Unexpected suggestion response: {str(data)[:200]}")
    return [item for item in data[1] if isinstance(item, str)]


class SearchSuggestionClient:
    """Fetches remote suggestions and publishes them for the requesting tab.

    Instances are callable with the ``(window_id, tab_id, endpoint, query,
    token=None)`` signature the search trigger pipeline expects.

    Args:
        dispatcher: Receives ``(tab_id, query, suggestions)`` on success.
        timeout: Request timeout in seconds.
        transport: Optional ``httpx`` transport (used by tests).
    """

    def __init__(
        self,
        dispatcher: SuggestionDispatcher,
        timeout: float = 10.0,
        transport=None,
    ):
        try:
            import httpx  # noqa: F401
        except ImportError:
            raise ImportError(
                "httpx is required for SearchSuggestionClient. "
                "Install with: pip install urlbar-suggestions[web]"
            )
        self.dispatcher = dispatcher
        self.timeout = timeout
        self.transport = transport

    async def fetch(self, autocomplete_url: str, query: str) -> list[str]:
        """Async fetch of the suggestion list for ``query``."""
        import httpx

        url = build_suggestion_url(autocomplete_url, query)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(url, headers={"Accept": "application/json"})
                response.raise_for_status()
                data = response.json()
        except Exception as e:
            raise SearchSuggestionFetchError(f"Search suggestion fetch failed: {e}") from e
        return parse_suggestions(data)

    async def __call__(
        self,
        window_id: int,
        tab_id: int,
        autocomplete_url: str,
        query: str,
        token: RunToken | None = None,
    ) -> None:
        """Fetch and publish, unless ``token`` was superseded while fetching."""
        suggestions = await self.fetch(autocomplete_url, query)
        if token is not None and token.cancelled:
            logger.debug("Discarding stale search suggestions from run %s", token.sequence)
            return
        logger.debug("Fetched %s search suggestions for tab %s", len(suggestions), tab_id)
        self.dispatcher.search_suggestion_results_available(tab_id, query, suggestions)
