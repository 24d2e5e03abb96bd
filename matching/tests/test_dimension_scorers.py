"""
Unit tests for the individual category scorers.
"""

import pytest

from matching.logic.constants import CampusSetting, NEUTRAL_SCORE
from matching.logic.contracts import (
    AcademicHonor,
    AcademicProfileSnapshot,
    ApExam,
    CandidateUniversity,
    MatchRequest,
)
from matching.logic.dimension_scorers import (
    effective_tuition,
    score_academic_fit,
    score_financial_fit,
    score_future_fit,
    score_location_fit,
    score_social_fit,
)

from catalog import ELITE, LOCAL, MID


BARE = CandidateUniversity(id="bare", name="Bare College")


# -----------------------------------------------------------------------------
# Academic
# -----------------------------------------------------------------------------

def test_academic_baseline_without_signal():
    assert score_academic_fit(MatchRequest(), BARE).score == 70


def test_gpa_tiers():
    assert score_academic_fit(MatchRequest(gpa=3.6), MID).score == 95      # above average
    assert score_academic_fit(MatchRequest(gpa=3.2), MID).score == 85      # above minimum
    assert score_academic_fit(MatchRequest(gpa=3.0), ELITE).score == 50    # reach


def test_sat_and_act_windows():
    assert score_academic_fit(MatchRequest(sat_score=1210), MID).score == 75   # within 100
    assert score_academic_fit(MatchRequest(sat_score=1100), MID).score == 55   # well below
    assert score_academic_fit(MatchRequest(act_score=26), MID).score == 75     # within 2
    assert score_academic_fit(MatchRequest(act_score=30), MID).score == 85


def test_academic_score_clamped_to_100():
    profile = MatchRequest(gpa=4.0, sat_score=1600, act_score=36, preferred_major="Physics")

    assert score_academic_fit(profile, ELITE).score == 100


def test_academic_profile_extras():
    academic = AcademicProfileSnapshot(
        secondary_major="Biology",
        academic_honors=[
            AcademicHonor(name="Science Olympiad", level="National"),
            AcademicHonor(name="Honor Roll", level="School"),
        ],
        extracurriculars=["Robotics", "Debate", "Orchestra"],
        ap_exams=[ApExam(subject="Physics C", score=5), ApExam(subject="Calculus BC", score=4)],
    )

    result = score_academic_fit(MatchRequest(), MID, academic)

    # 70 + secondary 10 + honors (4 + 3) + activities 3 + AP (4 + 1)
    assert result.score == 95
    assert [r.rule for r in result.reasons] == [
        "secondary_major_match", "academic_honors", "extracurriculars", "ap_exams"
    ]


def test_honor_points_capped():
    academic = AcademicProfileSnapshot(
        academic_honors=[AcademicHonor(name=f"Award {i}") for i in range(8)],
    )

    result = score_academic_fit(MatchRequest(), BARE, academic)

    assert result.score == 80


# -----------------------------------------------------------------------------
# Financial
# -----------------------------------------------------------------------------

def test_financial_neutral_without_budget_or_tuition():
    assert score_financial_fit(MatchRequest(), MID).score == NEUTRAL_SCORE
    assert score_financial_fit(MatchRequest(max_budget=50000), BARE).score == NEUTRAL_SCORE


def test_financial_tiers():
    assert score_financial_fit(MatchRequest(max_budget=40000), MID).score == 100
    assert score_financial_fit(MatchRequest(max_budget=30000), MID).score == 85   # net cost 25000
    assert score_financial_fit(MatchRequest(max_budget=20000), MID).score == 95  # 5000 short after aid
    assert score_financial_fit(MatchRequest(max_budget=0), ELITE).score == 60


def test_financial_shortfall_floors_at_zero():
    pricey = ELITE.model_copy(update={"tuition_out_state": 300000, "average_grant_aid": 0})

    assert score_financial_fit(MatchRequest(max_budget=1000), pricey).score == 0


def test_effective_tuition_abroad():
    assert effective_tuition(LOCAL, None) == 15000
    assert effective_tuition(LOCAL, "USA") == 15000
    assert effective_tuition(LOCAL, "Canada") == 20000

    no_intl = LOCAL.model_copy(update={"tuition_international": None})
    assert effective_tuition(no_intl, "Canada") == 15000


# -----------------------------------------------------------------------------
# Social
# -----------------------------------------------------------------------------

def test_social_blends():
    # 96 +5 diversity, then 70/30 with safety 100, then 80/20 with party 20
    assert score_social_fit(MatchRequest(), ELITE).score == pytest.approx(84.56)


def test_social_diversity_preference_blend():
    result = score_social_fit(MatchRequest(preferred_diversity=0.6), LOCAL)

    # 90 -> 50/50 with 100 = 95 -> safety 60 -> 84.5 -> party 100 -> 87.6
    assert result.score == pytest.approx(87.6)


def test_social_missing_student_life_uses_50():
    assert score_social_fit(MatchRequest(), BARE).score == 50


# -----------------------------------------------------------------------------
# Location
# -----------------------------------------------------------------------------

def test_location_setting_and_climate():
    assert score_location_fit(MatchRequest(), MID).score == 80
    assert score_location_fit(MatchRequest(preferred_setting=CampusSetting.URBAN), MID).score == 100
    assert score_location_fit(MatchRequest(preferred_setting=CampusSetting.RURAL), MID).score == 60
    assert score_location_fit(MatchRequest(preferred_climate="subtropical"), MID).score == 100


# -----------------------------------------------------------------------------
# Future
# -----------------------------------------------------------------------------

def test_future_outcomes_and_visa():
    # 50 + 0.75*33 + 0.6*33 + 0.4*33 = 107.75 -> clamped
    assert score_future_fit(MatchRequest(), LOCAL).score == 100

    weak = LOCAL.model_copy(update={"employment_rate": 0.2, "alumni_network": 1, "internship_support": 1})
    # 50 + 6.6 + 6.6 + 6.6 = 69.8, 12-month visa gives nothing
    assert score_future_fit(MatchRequest(), weak).score == pytest.approx(69.8)

    long_visa = weak.model_copy(update={"visa_duration_months": 24})
    assert score_future_fit(MatchRequest(), long_visa).score == pytest.approx(79.8)

    need_met = MatchRequest(needs_visa_support=True, min_visa_months=12)
    assert score_future_fit(need_met, weak).score == pytest.approx(89.8)


def test_future_baseline_without_data():
    assert score_future_fit(MatchRequest(), BARE).score == 50
