"""Tests for the list-generation and search-trigger pipelines."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from urlbar_suggestions.candidates import HistoryItem
from urlbar_suggestions.config import SuggestionConfig
from urlbar_suggestions.exceptions import SourceQueryError
from urlbar_suggestions.suggest import (
    AppState,
    DictSettings,
    Frame,
    InMemorySiteIndex,
    InMemoryTabRegistry,
    ListGenerationPipeline,
    RunToken,
    SearchDetail,
    SearchSuggestionClient,
    SearchTriggerPipeline,
    SiteIndex,
    StateDispatcher,
    SuggestionDispatcher,
    SuggestionEngine,
    SuggestionType,
    Tab,
    generate_suggestions,
)
from urlbar_suggestions.suggest.state import OFFER_SEARCH_SUGGESTIONS

FAST = SuggestionConfig(list_debounce_seconds=0.001, search_debounce_seconds=0.001)


class RecordingDispatcher(SuggestionDispatcher):
    def __init__(self):
        self.lists = []
        self.search_results = []

    def url_bar_suggestions_changed(self, window_id, suggestions):
        self.lists.append((window_id, suggestions))

    def search_suggestion_results_available(self, tab_id, query, results):
        self.search_results.append((tab_id, query, results))


class GatedSiteIndex(SiteIndex):
    """Holds queries for ``blocked`` until ``release`` is set."""

    def __init__(self, blocked):
        self.blocked = blocked
        self.release = asyncio.Event()
        self.started = []

    async def query(self, query_lower, history_on=True, bookmarks_on=True):
        self.started.append(query_lower)
        if query_lower == self.blocked:
            await self.release.wait()
        return [f"https://{query_lower}.com/"]


class FailingSiteIndex(SiteIndex):
    async def query(self, query_lower, history_on=True, bookmarks_on=True):
        raise SourceQueryError("History query failed: index locked")


def _state(**kwargs):
    defaults = dict(
        settings=DictSettings({OFFER_SEARCH_SUGGESTIONS: True}),
        tabs=InMemoryTabRegistry(
            tabs=[Tab(tab_id=2, window_id=1, url="https://example.com/inbox", title="Inbox")],
            frames=[Frame(tab_id=1)],
        ),
        site_index=InMemorySiteIndex(history=[HistoryItem("https://example.com/", "Example", count=3)]),
        top_sites=["example.org", "google.com"],
        search_results=["example search"],
        search_detail=SearchDetail(
            autocomplete_url="https://suggest.example/?q={searchTerms}",
            shortcut=":g",
        ),
    )
    defaults.update(kwargs)
    return AppState(**defaults)


async def _wait_until(predicate, timeout=1.0):
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        assert loop.time() < deadline, "condition not reached"
        await asyncio.sleep(0.001)


@pytest.mark.asyncio
async def test_generate_suggestions_concatenates_sources_in_order():
    result = await generate_suggestions(_state(), 1, 1, "Exam", FAST)
    assert [(s.type, s.location) for s in result] == [
        (SuggestionType.HISTORY, "https://example.com/"),
        (SuggestionType.TAB, "https://example.com/inbox"),
        (SuggestionType.SEARCH, "example search"),
        (SuggestionType.TOP_SITE, "example.org"),
    ]


@pytest.mark.asyncio
async def test_generate_suggestions_propagates_source_failure():
    with pytest.raises(SourceQueryError):
        await generate_suggestions(_state(site_index=FailingSiteIndex()), 1, 1, "exam", FAST)


@pytest.mark.asyncio
async def test_list_pipeline_publishes_latest_input():
    state = _state()
    dispatcher = StateDispatcher(state)
    pipeline = ListGenerationPipeline(dispatcher, FAST)
    for text in ("e", "ex", "exa"):
        pipeline.run(state, 1, 1, text)
    await pipeline.debouncer.flush()
    assert pipeline.debouncer.sequence == 1
    published = state.url_bar_suggestions[1]
    assert published[0].location == "https://example.com/"


@pytest.mark.asyncio
async def test_list_pipeline_ignores_empty_input():
    dispatcher = RecordingDispatcher()
    pipeline = ListGenerationPipeline(dispatcher, FAST)
    pipeline.run(_state(), 1, 1, "")
    await pipeline.debouncer.flush()
    assert dispatcher.lists == []


@pytest.mark.asyncio
async def test_list_pipeline_discards_stale_run():
    index = GatedSiteIndex(blocked="a")
    state = _state(site_index=index, top_sites=[], search_results=None)
    dispatcher = RecordingDispatcher()
    pipeline = ListGenerationPipeline(dispatcher, FAST)

    pipeline.run(state, 1, 1, "a")
    await _wait_until(lambda: index.started == ["a"])
    pipeline.run(state, 1, 1, "ab")
    await _wait_until(lambda: len(dispatcher.lists) == 1)

    index.release.set()
    await pipeline.debouncer.flush()
    assert len(dispatcher.lists) == 1
    window_id, suggestions = dispatcher.lists[0]
    assert window_id == 1
    assert suggestions[0].location == "https://ab.com/"


@pytest.mark.asyncio
async def test_list_pipeline_failure_publishes_nothing(caplog):
    dispatcher = RecordingDispatcher()
    pipeline = ListGenerationPipeline(dispatcher, FAST)
    pipeline.run(_state(site_index=FailingSiteIndex()), 1, 1, "exam")
    await pipeline.debouncer.flush()
    assert dispatcher.lists == []
    assert "index locked" in caplog.text


@pytest.mark.asyncio
async def test_search_trigger_fetches_with_shortcut_stripped():
    dispatcher = RecordingDispatcher()
    fetcher = AsyncMock()
    pipeline = SearchTriggerPipeline(dispatcher, fetcher, FAST)
    await pipeline.trigger(_state(), 1, 1, ":g python")
    fetcher.assert_awaited_once_with(1, 1, "https://suggest.example/?q={searchTerms}", "python", token=None)
    assert dispatcher.search_results == []


@pytest.mark.asyncio
async def test_search_trigger_prefers_frame_endpoint():
    fetcher = MagicMock(return_value=None)
    state = _state(tabs=InMemoryTabRegistry(frames=[Frame(tab_id=1, autocomplete_url="https://tab.example/{searchTerms}")]))
    pipeline = SearchTriggerPipeline(RecordingDispatcher(), fetcher, FAST)
    await pipeline.trigger(state, 1, 1, "weather")
    fetcher.assert_called_once_with(1, 1, "https://tab.example/{searchTerms}", "weather", token=None)


@pytest.mark.asyncio
async def test_search_trigger_without_frame_does_nothing():
    dispatcher = RecordingDispatcher()
    fetcher = AsyncMock()
    pipeline = SearchTriggerPipeline(dispatcher, fetcher, FAST)
    await pipeline.trigger(_state(), 1, 99, "python")
    fetcher.assert_not_awaited()
    assert dispatcher.search_results == []


@pytest.mark.asyncio
async def test_search_trigger_without_endpoint_clears():
    dispatcher = RecordingDispatcher()
    fetcher = AsyncMock()
    pipeline = SearchTriggerPipeline(dispatcher, fetcher, FAST)
    await pipeline.trigger(_state(search_detail=None), 1, 1, "python")
    fetcher.assert_not_awaited()
    assert dispatcher.search_results == [(1, None, [])]


@pytest.mark.parametrize(
    "user_input, settings",
    [
        ("example.com", {OFFER_SEARCH_SUGGESTIONS: True}),
        ("https://example.com/x", {OFFER_SEARCH_SUGGESTIONS: True}),
        ("", {OFFER_SEARCH_SUGGESTIONS: True}),
        ("python", {OFFER_SEARCH_SUGGESTIONS: False}),
    ],
)
@pytest.mark.asyncio
async def test_search_trigger_clears_when_not_searching(user_input, settings):
    dispatcher = RecordingDispatcher()
    fetcher = AsyncMock()
    pipeline = SearchTriggerPipeline(dispatcher, fetcher, FAST)
    await pipeline.trigger(_state(settings=DictSettings(settings)), 1, 1, user_input)
    fetcher.assert_not_awaited()
    assert dispatcher.search_results == [(1, None, [])]


@pytest.mark.asyncio
async def test_engine_runs_both_pipelines():
    state = _state()
    dispatcher = StateDispatcher(state)
    fetcher = AsyncMock()
    engine = SuggestionEngine(dispatcher, fetcher, FAST)
    engine.on_input_changed(state, 1, 1, "exam")
    await engine.flush()
    assert state.url_bar_suggestions[1][0].location == "https://example.com/"
    fetcher.assert_awaited_once()
    assert fetcher.await_args.args == (1, 1, "https://suggest.example/?q={searchTerms}", "exam")
    assert fetcher.await_args.kwargs["token"].sequence == 1


@pytest.mark.asyncio
async def test_superseded_search_fetch_does_not_publish():
    state = _state()
    dispatcher = StateDispatcher(state)
    gate = asyncio.Event()
    requested = []

    async def handler(request):
        requested.append(request.url.params["q"])
        await gate.wait()
        return httpx.Response(200, json=["pyth", ["pyth-result"]])

    client = SearchSuggestionClient(dispatcher, transport=httpx.MockTransport(handler))
    pipeline = SearchTriggerPipeline(dispatcher, client, FAST)

    pipeline.run(state, 1, 1, "pyth")
    await _wait_until(lambda: requested == ["pyth"])
    # A URL-looking input clears the remote results.
    pipeline.run(state, 1, 1, "python.org")
    await _wait_until(lambda: state.search_results == [])

    gate.set()
    await pipeline.debouncer.flush()
    assert state.search_results == []


@pytest.mark.asyncio
async def test_superseded_clear_does_not_publish():
    dispatcher = RecordingDispatcher()
    pipeline = SearchTriggerPipeline(dispatcher, AsyncMock(), FAST)
    token = RunToken(1)
    token.cancel()
    await pipeline.trigger(_state(), 1, 1, "example.com", token)
    assert dispatcher.search_results == []
