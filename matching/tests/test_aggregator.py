"""
Weight normalization and aggregation tests.
"""

import pytest
from pydantic import ValidationError

from matching.logic.aggregator import (
    aggregate_scores,
    build_match_result,
    neutral_result,
    normalize_weights,
    weights_from_discovery,
    weights_from_importance,
)
from matching.logic.constants import CATEGORIES, DEFAULT_CATEGORY_WEIGHTS
from matching.logic.contracts import (
    DimensionScore,
    DiscoveryWeights,
    ImportanceFactors,
    MatchRequest,
)

from catalog import ELITE, MID


def _scores(**values):
    return {
        c: DimensionScore(dimension=c, score=values.get(c, 50.0))
        for c in CATEGORIES
    }


def test_weights_sum_to_one():
    weights = weights_from_importance(ImportanceFactors(academics=10, cost=1, social=1, location=5, future=5))

    assert sum(weights.values()) == pytest.approx(1.0)
    assert weights["academic"] == pytest.approx(10 / 22)
    assert weights["financial"] == pytest.approx(1 / 22)


def test_equal_importance_gives_equal_weights():
    weights = weights_from_importance(ImportanceFactors())

    assert all(w == pytest.approx(0.2) for w in weights.values())


def test_missing_importance_falls_back_to_defaults():
    assert weights_from_importance(None) == DEFAULT_CATEGORY_WEIGHTS
    assert normalize_weights({c: 0 for c in DEFAULT_CATEGORY_WEIGHTS}) == DEFAULT_CATEGORY_WEIGHTS
    assert normalize_weights({}) == DEFAULT_CATEGORY_WEIGHTS


def test_importance_factors_are_one_to_ten():
    with pytest.raises(ValidationError):
        ImportanceFactors(academics=0)
    with pytest.raises(ValidationError):
        ImportanceFactors(future=11)


def test_default_weights_sum_to_one():
    assert sum(DEFAULT_CATEGORY_WEIGHTS.values()) == pytest.approx(1.0)
    assert weights_from_discovery(DiscoveryWeights()) == pytest.approx(DEFAULT_CATEGORY_WEIGHTS)


def test_breakdown_exposes_weight_percent_and_contribution():
    weights = weights_from_discovery(DiscoveryWeights())
    result = build_match_result(ELITE, _scores(academic=90.0), weights)

    academic = result.score_breakdown.academic
    assert academic.weight == 40
    assert academic.contribution == pytest.approx(36.0)
    assert result.score_breakdown.financial.weight == 30
    # 36 + 50 * 0.6
    assert result.score_breakdown.total == pytest.approx(66.0)
    assert result.match_percentage == 66


def test_match_percentage_rounds_half_up():
    weights = {c: 0.2 for c in CATEGORIES}
    result = build_match_result(ELITE, _scores(academic=52.5, financial=50, social=50, location=50, future=50), weights)

    # 10.5 + 40 = 50.5
    assert result.match_percentage == 51


def test_higher_category_score_never_lowers_match():
    weights = weights_from_importance(ImportanceFactors(academics=7, cost=3))
    previous = -1
    for academic in range(0, 101, 10):
        result = build_match_result(MID, _scores(academic=float(academic)), weights)
        assert result.match_percentage >= previous
        previous = result.match_percentage


def test_neutral_result_scores_75():
    result = neutral_result(MID, dict(DEFAULT_CATEGORY_WEIGHTS))

    assert result.match_percentage == 75
    assert result.reasons == []


def test_aggregate_scores_stays_in_bounds():
    profile = MatchRequest(gpa=1.0, sat_score=400, max_budget=0, preferred_setting="RURAL")
    result = aggregate_scores(profile, ELITE, weights_from_importance(profile.importance_factors))

    assert 0 <= result.match_percentage <= 100
    assert result.score_breakdown.total >= 0
