"""
Ranker

Orders scored results by the requested sort key.
Sorting is stable so equal keys keep candidate-store order, and results
missing the sort attribute always go last.
"""

from typing import Callable, Dict, List, Optional, Tuple

from .contracts import MatchResult
from .constants import MAX_MATCH_RESULTS, SortKey


# sort key -> (attribute getter, descending)
SORT_FIELDS: Dict[SortKey, Tuple[Callable[[MatchResult], object], bool]] = {
    SortKey.MATCH_PERCENTAGE: (lambda r: r.match_percentage, True),
    SortKey.TUITION_ASC: (lambda r: r.candidate.tuition_out_state, False),
    SortKey.TUITION_DESC: (lambda r: r.candidate.tuition_out_state, True),
    SortKey.RANKING_ASC: (lambda r: r.candidate.ranking, False),
    SortKey.RANKING_DESC: (lambda r: r.candidate.ranking, True),
    SortKey.ACCEPTANCE_RATE_ASC: (lambda r: r.candidate.acceptance_rate, False),
    SortKey.ACCEPTANCE_RATE_DESC: (lambda r: r.candidate.acceptance_rate, True),
    SortKey.NAME_ASC: (lambda r: r.candidate.name.lower(), False),
    SortKey.NAME_DESC: (lambda r: r.candidate.name.lower(), True),
}


def rank_results(
    results: List[MatchResult],
    sort_by: SortKey = SortKey.MATCH_PERCENTAGE
) -> List[MatchResult]:
    """
    Rank results by the given sort key.

    Args:
        results: Scored results in candidate-store order
        sort_by: One of the SortKey values; match percentage by default

    Returns:
        New sorted list; the input is left untouched
    """
    getter, descending = SORT_FIELDS[SortKey(sort_by)]

    present = [r for r in results if getter(r) is not None]
    missing = [r for r in results if getter(r) is None]

    # sorted(reverse=True) keeps equal elements in their original order
    return sorted(present, key=getter, reverse=descending) + missing


def top_matches(
    results: List[MatchResult],
    limit: Optional[int] = MAX_MATCH_RESULTS
) -> List[MatchResult]:
    """Best matches first, capped at `limit`."""
    ranked = rank_results(results, SortKey.MATCH_PERCENTAGE)
    return ranked[:limit] if limit is not None else ranked
