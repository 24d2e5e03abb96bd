"""
Score Aggregator

Combines individual category scores into a single match percentage.
Normalizes importance factors into weights and exposes per-category
contributions.
"""

import math
from typing import Dict, List, Optional

from .contracts import (
    AcademicProfileSnapshot,
    CandidateUniversity,
    CategoryScore,
    DimensionScore,
    DiscoveryWeights,
    ImportanceFactors,
    MatchBreakdown,
    MatchRequest,
    MatchResult,
    ScoreBreakdown,
)
from .dimension_scorers import SCORERS
from .constants import (
    CATEGORIES,
    DEFAULT_CATEGORY_WEIGHTS,
    IMPORTANCE_FACTOR_CATEGORY,
    MAX_SCORE,
    MIN_SCORE,
    NEUTRAL_SCORE,
)


def normalize_weights(raw: Dict[str, float]) -> Dict[str, float]:
    """
    Scale raw category weights so they sum to 1.
    Falls back to the default weights when nothing usable was supplied.
    """
    total = sum(max(0.0, float(raw.get(category, 0))) for category in CATEGORIES)
    if total <= 0:
        return dict(DEFAULT_CATEGORY_WEIGHTS)
    return {
        category: max(0.0, float(raw.get(category, 0))) / total
        for category in CATEGORIES
    }


def weights_from_importance(factors: Optional[ImportanceFactors]) -> Dict[str, float]:
    """Map importance factors (academics, cost, ...) onto category weights."""
    if factors is None:
        return dict(DEFAULT_CATEGORY_WEIGHTS)
    raw = {
        category: getattr(factors, factor)
        for factor, category in IMPORTANCE_FACTOR_CATEGORY.items()
    }
    return normalize_weights(raw)


def weights_from_discovery(weights: Optional[DiscoveryWeights]) -> Dict[str, float]:
    if weights is None:
        return dict(DEFAULT_CATEGORY_WEIGHTS)
    return normalize_weights(weights.model_dump())


def build_match_result(
    candidate: CandidateUniversity,
    dimension_scores: Dict[str, DimensionScore],
    weights: Dict[str, float]
) -> MatchResult:
    """
    Weight each category score and assemble the MatchResult.

    match_percentage = round(clamp(sum(score * weight), 0, 100))
    """
    categories: Dict[str, CategoryScore] = {}
    total = 0.0

    for category in CATEGORIES:
        score = dimension_scores[category].score
        weight = weights[category]
        contribution = score * weight
        total += contribution
        categories[category] = CategoryScore(
            score=score,
            weight=int(_round_half_up(weight * 100)),
            contribution=round(contribution, 2),
        )

    match_percentage = int(_round_half_up(max(MIN_SCORE, min(MAX_SCORE, total))))

    reasons = [
        reason
        for category in CATEGORIES
        for reason in dimension_scores[category].reasons
    ]

    return MatchResult(
        candidate=candidate,
        match_percentage=match_percentage,
        breakdown=MatchBreakdown(**{c: dimension_scores[c].score for c in CATEGORIES}),
        score_breakdown=ScoreBreakdown(total=round(total, 2), **categories),
        reasons=reasons,
    )


def aggregate_scores(
    profile: MatchRequest,
    candidate: CandidateUniversity,
    weights: Dict[str, float],
    academic_profile: Optional[AcademicProfileSnapshot] = None
) -> MatchResult:
    """
    Compute all category scores for one candidate and aggregate them.

    Args:
        profile: Student's match request
        candidate: University to score
        weights: Normalized category weights
        academic_profile: Optional enrichment for the academic scorer

    Returns:
        MatchResult with breakdown and reasons
    """
    dimension_scores = {
        category: scorer(profile, candidate, academic_profile)
        for category, scorer in SCORERS.items()
    }
    return build_match_result(candidate, dimension_scores, weights)


def neutral_result(
    candidate: CandidateUniversity,
    weights: Dict[str, float]
) -> MatchResult:
    """Result for a candidate when there is no profile to score against."""
    dimension_scores = {
        category: DimensionScore(dimension=category, score=NEUTRAL_SCORE)
        for category in CATEGORIES
    }
    return build_match_result(candidate, dimension_scores, weights)


def batch_aggregate(
    profile: Optional[MatchRequest],
    candidates: List[CandidateUniversity],
    weights: Dict[str, float],
    academic_profile: Optional[AcademicProfileSnapshot] = None
) -> List[MatchResult]:
    """
    Score multiple candidates in batch.
    Without a profile every candidate receives the neutral score.
    """
    if profile is None:
        return [neutral_result(c, weights) for c in candidates]
    return [aggregate_scores(profile, c, weights, academic_profile) for c in candidates]


def _round_half_up(value: float) -> float:
    return math.floor(value + 0.5)
