"""Tests for recency-frequency scoring."""

from urlbar_suggestions.ranking.scorer import (
    EPSILON,
    ONE_DAY_MS,
    DecayScorer,
    by_decay_score,
    now_ms,
    priority,
)

NOW = 1_700_000_000_000
DECAY = 50


def test_priority_decreases_with_age():
    scores = [priority(5, NOW, NOW - days * ONE_DAY_MS, DECAY) for days in (0, 1, 7, 30, 365)]
    assert scores == sorted(scores, reverse=True)
    assert len(set(scores)) == len(scores)


def test_priority_increases_with_count():
    t = NOW - 3 * ONE_DAY_MS
    assert priority(10, NOW, t, DECAY) > priority(9, NOW, t, DECAY)
    assert priority(1, NOW, t, DECAY) > priority(0, NOW, t, DECAY)


def test_priority_fresh_visit_keeps_count():
    assert abs(priority(9, NOW, NOW, DECAY) - 9) < 1e-9


def test_priority_zero_count_is_positive():
    assert priority(0, NOW, NOW, DECAY) > 0
    assert priority(0, NOW, NOW, DECAY) <= EPSILON


def test_priority_never_reaches_zero():
    assert priority(1, NOW, 1, 0.0001) > 0


def test_priority_missing_last_access_is_oldest():
    assert priority(3, NOW, 0, DECAY) == priority(3, NOW, 1, DECAY)
    assert priority(3, NOW, 0, DECAY) < priority(3, NOW, NOW - ONE_DAY_MS, DECAY)


def test_priority_larger_decay_constant_decays_slower():
    t = NOW - 10 * ONE_DAY_MS
    assert priority(5, NOW, t, 100) > priority(5, NOW, t, 10)


def test_decay_scorer_orders_descending():
    scorer = DecayScorer(now=NOW)
    popular = {"location": "https://a.com/", "count": 20, "lastAccessedTime": NOW}
    rare = {"location": "https://b.com/", "count": 1, "lastAccessedTime": NOW}
    assert scorer(popular, rare) < 0
    assert scorer(rare, popular) > 0
    assert scorer(popular, popular) == 0


def test_by_decay_score_prefers_recent():
    now = now_ms()
    recent = {"location": "https://a.com/", "count": 5, "lastAccessedTime": now}
    stale = {"location": "https://b.com/", "count": 5, "lastAccessedTime": now - 90 * ONE_DAY_MS}
    assert by_decay_score(recent, stale) < 0
