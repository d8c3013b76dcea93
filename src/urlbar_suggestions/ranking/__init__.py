"""Recency-frequency scoring, the ranking comparator chain and virtual items."""

from urlbar_suggestions.ranking.scorer import DecayScorer, by_decay_score, priority
from urlbar_suggestions.ranking.comparators import (
    RankingComparator,
    get_sort_by_domain,
    get_sort_by_path,
    is_simple_domain_name_value,
    rank_for_query,
    sort_by_simple_url,
    sort_candidates,
)
from urlbar_suggestions.ranking.virtual import synthesize_virtual_items

__all__ = [
    "priority",
    "by_decay_score",
    "DecayScorer",
    "rank_for_query",
    "RankingComparator",
    "sort_candidates",
    "sort_by_simple_url",
    "get_sort_by_domain",
    "get_sort_by_path",
    "is_simple_domain_name_value",
    "synthesize_virtual_items",
]
