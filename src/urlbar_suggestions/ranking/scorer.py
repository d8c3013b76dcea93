"""Recency-frequency scoring for history candidates."""

from __future__ import annotations

import math
import sys
import time
from typing import Any

from urlbar_suggestions.candidates import as_candidate
from urlbar_suggestions.config import DEFAULT_CONFIG

EPSILON = sys.float_info.epsilon
ONE_DAY_MS = 1000 * 60 * 60 * 24


def _sigmoid(t: float) -> float:
    if t >= 0:
        return 1 / (1 + math.exp(-t))
    z = math.exp(t)
    return z / (1 + z)


def now_ms() -> float:
    return time.time() * 1000


def priority(
    count: float,
    now: float,
    last_accessed_time: float,
    age_decay_constant: float,
) -> float:
    """Score a candidate by visit count discounted by time since last access.

    The age factor is a sigmoid decay: ~1 for a visit just now, approaching
    (but never reaching) 0 as the visit recedes. ``age_decay_constant`` is in
    days; larger values decay more slowly. A zero count is lifted to epsilon
    so an otherwise relevant match still orders by recency.
    """
    count = max(count, EPSILON)
    age_in_days = (now - (last_accessed_time or 1)) / ONE_DAY_MS
    age_factor = 1 - (min(_sigmoid(age_in_days / age_decay_constant), 1 - EPSILON) - 0.5) * 2
    return count * age_factor


class DecayScorer:
    """Comparator by decay score, every comparison relative to one ``now``."""

    def __init__(
        self,
        now: float | None = None,
        age_decay_constant: float = DEFAULT_CONFIG.age_decay_constant,
    ):
        self.now = now_ms() if now is None else now
        self.age_decay_constant = age_decay_constant

    def score(self, item: Any) -> float:
        candidate = as_candidate(item)
        return priority(
            candidate.get_count(),
            self.now,
            candidate.get_last_accessed_time(),
            self.age_decay_constant,
        )

    def __call__(self, a: Any, b: Any) -> float:
        """Negative when ``a`` should sort first (higher priority)."""
        return self.score(b) - self.score(a)


def by_decay_score(a: Any, b: Any) -> float:
    """Descending-priority comparator; "now" is sampled once per call."""
    return DecayScorer()(a, b)
