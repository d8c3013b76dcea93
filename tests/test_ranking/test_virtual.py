"""Tests for virtual root-domain history items."""

from urlbar_suggestions.candidates import HistoryItem
from urlbar_suggestions.ranking import synthesize_virtual_items

NOW = 1_700_000_000_000


def test_no_virtual_item_when_root_visited():
    history = [
        {"location": "https://a.example.com/"},
        {"location": "https://a.example.com/x"},
        {"location": "https://a.example.com/y"},
    ]
    assert synthesize_virtual_items(history, now=NOW) == []


def test_virtual_item_for_unvisited_root():
    history = [
        {"location": "https://b.example.com/x"},
        {"location": "https://b.example.com/y"},
    ]
    items = synthesize_virtual_items(history, now=NOW)
    assert items == [
        HistoryItem(
            location="https://b.example.com",
            title="b.example.com",
            count=0,
            last_accessed_time=NOW,
        )
    ]


def test_single_member_group_is_enough():
    items = synthesize_virtual_items(["http://c.com/page"], now=NOW)
    assert [item.location for item in items] == ["http://c.com"]


def test_one_item_per_host():
    history = [
        "https://a.example.com/x",
        "https://b.example.com/x",
        "https://a.example.com/z",
    ]
    items = synthesize_virtual_items(history, now=NOW)
    assert [item.location for item in items] == [
        "https://a.example.com",
        "https://b.example.com",
    ]


def test_query_filters_virtual_items():
    history = ["https://docs.python.org/3/", "https://pypi.org/project/httpx/"]
    items = synthesize_virtual_items(history, "pypi", now=NOW)
    assert [item.location for item in items] == ["https://pypi.org"]


def test_hostless_entries_are_skipped():
    history = ["javascript:void(0)", "about:blank", None, {"title": "no location"}]
    assert synthesize_virtual_items(history, now=NOW) == []


def test_empty_history():
    assert synthesize_virtual_items(None) == []
    assert synthesize_virtual_items([]) == []
