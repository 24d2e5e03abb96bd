"""
Initial discovery criteria from stored profiles.
"""

from matching.logic.adapter import InMemoryCandidateStore, InMemoryProfileRepository
from matching.logic.constants import AccessTier, SortKey
from matching.logic.contracts import (
    AcademicProfileSnapshot,
    FinancialProfileSnapshot,
    UserSnapshot,
)
from matching.logic.criteria import build_initial_criteria
from matching.logic.engine import MatchingEngine

from catalog import CATALOG


def test_no_profile_returns_defaults():
    criteria = build_initial_criteria()

    assert criteria.search_text == ""
    assert criteria.academics is None
    assert criteria.financials is None
    assert criteria.sort_by == SortKey.MATCH_PERCENTAGE
    assert criteria.page == 1
    assert criteria.limit == 20
    assert criteria.include_reach_schools is True
    assert criteria.strict_filtering is False


def test_gpa_range_clamped_to_scale():
    criteria = build_initial_criteria(
        UserSnapshot(id="u1"),
        AcademicProfileSnapshot(gpa=3.7),
    )

    assert criteria.academics.min_gpa == 3.4
    assert criteria.academics.max_gpa == 4.0
    assert criteria.academics.min_sat is None
    assert criteria.academics.max_sat is None


def test_gpa_range_converted_to_four_point_scale():
    criteria = build_initial_criteria(UserSnapshot(id="u1"), AcademicProfileSnapshot(gpa=90, gpa_scale=100))

    assert criteria.academics.min_gpa == 3.3
    assert criteria.academics.max_gpa == 3.9
    assert criteria.user_profile.gpa == 3.6


def test_converted_criteria_find_candidates():
    repo = InMemoryProfileRepository(
        users={"u1": UserSnapshot(id="u1")},
        academic_profiles={"u1": AcademicProfileSnapshot(gpa=90, gpa_scale=100)},
    )
    engine = MatchingEngine(InMemoryCandidateStore(CATALOG), repo)

    response = engine.search_universities(engine.get_initial_criteria("u1"), AccessTier.ADMIN, False)

    assert [r.candidate.name for r in response.results] == ["Mid-Tier Safety School"]


def test_user_without_any_profile_data_has_no_user_profile():
    criteria = build_initial_criteria(UserSnapshot(id="u1", preferred_major="Undeclared"))

    assert criteria.user_profile is None
    assert criteria.academics is None


def test_test_score_ranges_clamped():
    criteria = build_initial_criteria(None, AcademicProfileSnapshot(sat_total=1520, act_composite=2))

    assert criteria.academics.min_sat == 1370
    assert criteria.academics.max_sat == 1600
    assert criteria.academics.min_act == 1
    assert criteria.academics.max_act == 5


def test_majors_fall_back_to_legacy_field():
    user = UserSnapshot(id="u1", preferred_major="History")

    with_primary = build_initial_criteria(user, AcademicProfileSnapshot(primary_major="Physics"))
    legacy = build_initial_criteria(user, AcademicProfileSnapshot())
    undeclared = build_initial_criteria(
        UserSnapshot(id="u2", preferred_major="Undeclared"), AcademicProfileSnapshot()
    )

    assert with_primary.academics.majors == ["Physics"]
    assert legacy.academics.majors == ["History"]
    assert undeclared.academics.majors == []


def test_financial_profile_sets_tuition_and_net_cost():
    criteria = build_initial_criteria(UserSnapshot(id="u1"), None, FinancialProfileSnapshot(max_budget=30000))

    assert criteria.financials.max_tuition == 30000
    assert criteria.financials.max_net_cost == 30000
    assert criteria.user_profile.max_budget == 30000


def test_user_profile_uses_legacy_scalars():
    user = UserSnapshot(id="u1", gpa=3.1, sat_score=1250, max_budget=18000, preferred_major="Business")

    criteria = build_initial_criteria(user)

    assert criteria.academics is None
    assert criteria.user_profile.gpa == 3.1
    assert criteria.user_profile.sat == 1250
    assert criteria.user_profile.max_budget == 18000
    assert criteria.user_profile.preferred_major == "Business"


def test_engine_initial_criteria_for_unknown_user_is_default():
    engine = MatchingEngine(InMemoryCandidateStore(CATALOG), InMemoryProfileRepository())

    criteria = engine.get_initial_criteria("nobody")

    assert criteria.academics is None
    assert criteria.user_profile is None


def test_engine_initial_criteria_reads_profiles():
    repo = InMemoryProfileRepository(
        users={"u1": UserSnapshot(id="u1")},
        academic_profiles={"u1": AcademicProfileSnapshot(gpa=3.7, primary_major="Physics")},
    )
    engine = MatchingEngine(InMemoryCandidateStore(CATALOG), repo)

    criteria = engine.get_initial_criteria("u1")

    assert criteria.academics.min_gpa == 3.4
    assert criteria.academics.majors == ["Physics"]
    assert criteria.financials is None
