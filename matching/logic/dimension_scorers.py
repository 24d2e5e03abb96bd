"""
Dimension Scorers

Individual scoring functions for each match category.
Each scorer starts from a baseline and walks an ordered list of named
adjustment rules; the result is clamped to 0-100. The same rules produce
the human-readable reasons attached to a match.
All logic is deterministic - no AI/ML components.
"""

from dataclasses import dataclass
from typing import Callable, List, NamedTuple, Optional, Sequence

from .contracts import (
    AcademicProfileSnapshot,
    CandidateUniversity,
    DimensionScore,
    MatchReason,
    MatchRequest,
)
from .constants import (
    ACADEMIC_BASELINE,
    ACT_BELOW_PENALTY,
    ACT_MEETS_BONUS,
    ACT_NEAR_BONUS,
    ACT_NEAR_WINDOW,
    AP_EXAM_CAP,
    AP_EXAM_POINTS,
    AP_TOP_SCORE,
    AP_TOP_SCORE_BONUS,
    AP_TOP_SCORE_BONUS_CAP,
    CLIMATE_MATCH_BONUS,
    DIVERSITY_BLEND,
    EXTRACURRICULAR_CAP,
    EXTRACURRICULAR_POINTS,
    FULL_AFFORDABILITY_SCORE,
    FUTURE_BASELINE,
    GPA_ABOVE_AVERAGE_BONUS,
    GPA_ABOVE_MINIMUM_BONUS,
    GPA_REACH_PENALTY,
    HIGH_DIVERSITY_BONUS,
    HIGH_DIVERSITY_THRESHOLD,
    HIGH_LEVEL_HONOR_BONUS,
    HIGH_LEVEL_HONORS,
    HONOR_POINTS,
    HONOR_POINTS_CAP,
    LOCATION_BASELINE,
    LONG_VISA_BONUS,
    LONG_VISA_MONTHS,
    MAJOR_MATCH_BONUS,
    MAX_SCORE,
    MIN_SCORE,
    NET_AFFORDABILITY_SCORE,
    NEUTRAL_SCORE,
    OUTCOME_SIGNAL_WEIGHT,
    PARTY_SCENE_BLEND,
    RATING_TO_SCORE,
    REACH_GPA_GAP,
    SAFETY_BLEND,
    SAT_BELOW_PENALTY,
    SAT_MEETS_BONUS,
    SAT_NEAR_BONUS,
    SAT_NEAR_WINDOW,
    SECONDARY_MAJOR_BONUS,
    SETTING_MATCH_DELTA,
    SHORTFALL_DOLLARS_PER_POINT,
    SOCIAL_MISSING_BASELINE,
    VISA_NEED_MET_BONUS,
)


# =============================================================================
# RULE MACHINERY
# =============================================================================

@dataclass(frozen=True)
class ScoringContext:
    """Everything a rule may look at. Immutable for the duration of a score."""
    candidate: CandidateUniversity
    profile: MatchRequest
    academic_profile: Optional[AcademicProfileSnapshot] = None


class Adjustment(NamedTuple):
    delta: float
    reason: str


@dataclass(frozen=True)
class AdjustmentRule:
    """
    A named scoring rule.

    `evaluate` receives the context and the running score and returns an
    Adjustment, or None when the rule has no signal for this candidate.
    """
    name: str
    evaluate: Callable[[ScoringContext, float], Optional[Adjustment]]


def run_rules(
    dimension: str,
    baseline: float,
    rules: Sequence[AdjustmentRule],
    ctx: ScoringContext
) -> DimensionScore:
    """Apply rules in order to a baseline and clamp the result."""
    score = baseline
    reasons: List[MatchReason] = []

    for rule in rules:
        adjustment = rule.evaluate(ctx, score)
        if adjustment is None:
            continue
        score += adjustment.delta
        reasons.append(MatchReason(
            category=dimension,
            rule=rule.name,
            text=adjustment.reason,
            delta=round(adjustment.delta, 2),
        ))

    return DimensionScore(
        dimension=dimension,
        score=round(_clamp(score), 2),
        reasons=reasons,
    )


def _blend(current: float, target: float, target_share: float) -> float:
    """Delta that moves `current` to a weighted blend with `target`."""
    blended = current * (1.0 - target_share) + target * target_share
    return blended - current


# =============================================================================
# ACADEMIC
# =============================================================================

def _gpa_fit(ctx: ScoringContext, score: float) -> Optional[Adjustment]:
    gpa = ctx.profile.gpa
    uni = ctx.candidate
    if gpa is None:
        return None
    if uni.avg_gpa is not None and uni.avg_gpa <= gpa:
        return Adjustment(GPA_ABOVE_AVERAGE_BONUS, "Your GPA meets or exceeds the average admit")
    if uni.min_gpa is not None and uni.min_gpa <= gpa:
        return Adjustment(GPA_ABOVE_MINIMUM_BONUS, "Your GPA clears the minimum requirement")
    if uni.avg_gpa is not None and round(uni.avg_gpa - gpa, 2) >= REACH_GPA_GAP:
        return Adjustment(GPA_REACH_PENALTY, "Reach school: average GPA is well above yours")
    return None


def _sat_fit(ctx: ScoringContext, score: float) -> Optional[Adjustment]:
    sat = ctx.profile.sat_score
    avg = ctx.candidate.avg_sat_score
    if sat is None or avg is None:
        return None
    if sat >= avg:
        return Adjustment(SAT_MEETS_BONUS, "SAT at or above the average admit")
    if avg - sat <= SAT_NEAR_WINDOW:
        return Adjustment(SAT_NEAR_BONUS, "SAT within 100 points of the average admit")
    return Adjustment(SAT_BELOW_PENALTY, "SAT well below the average admit")


def _act_fit(ctx: ScoringContext, score: float) -> Optional[Adjustment]:
    act = ctx.profile.act_score
    avg = ctx.candidate.avg_act_score
    if act is None or avg is None:
        return None
    if act >= avg:
        return Adjustment(ACT_MEETS_BONUS, "ACT at or above the average admit")
    if avg - act <= ACT_NEAR_WINDOW:
        return Adjustment(ACT_NEAR_BONUS, "ACT within 2 points of the average admit")
    return Adjustment(ACT_BELOW_PENALTY, "ACT well below the average admit")


def _major_match(ctx: ScoringContext, score: float) -> Optional[Adjustment]:
    major = ctx.profile.preferred_major
    if major and majors_overlap(major, ctx.candidate.popular_majors):
        return Adjustment(MAJOR_MATCH_BONUS, f"Strong program in {major}")
    return None


def _secondary_major_match(ctx: ScoringContext, score: float) -> Optional[Adjustment]:
    academic = ctx.academic_profile
    if academic is None or not academic.secondary_major:
        return None
    if majors_overlap(academic.secondary_major, ctx.candidate.popular_majors):
        return Adjustment(SECONDARY_MAJOR_BONUS, f"Also offers {academic.secondary_major}")
    return None


def _honors(ctx: ScoringContext, score: float) -> Optional[Adjustment]:
    academic = ctx.academic_profile
    if academic is None or not academic.academic_honors:
        return None
    points = min(HONOR_POINTS_CAP, HONOR_POINTS * len(academic.academic_honors))
    high_level = sum(
        1 for honor in academic.academic_honors
        if honor.level and honor.level.lower() in HIGH_LEVEL_HONORS
    )
    points += high_level * HIGH_LEVEL_HONOR_BONUS
    return Adjustment(points, f"{len(academic.academic_honors)} academic honor(s)")


def _extracurriculars(ctx: ScoringContext, score: float) -> Optional[Adjustment]:
    academic = ctx.academic_profile
    if academic is None or not academic.extracurriculars:
        return None
    points = min(EXTRACURRICULAR_CAP, EXTRACURRICULAR_POINTS * len(academic.extracurriculars))
    return Adjustment(points, f"{len(academic.extracurriculars)} extracurricular activities")


def _ap_exams(ctx: ScoringContext, score: float) -> Optional[Adjustment]:
    academic = ctx.academic_profile
    if academic is None or not academic.ap_exams:
        return None
    points = min(AP_EXAM_CAP, AP_EXAM_POINTS * len(academic.ap_exams))
    top_scores = sum(1 for exam in academic.ap_exams if exam.score >= AP_TOP_SCORE)
    points += min(AP_TOP_SCORE_BONUS_CAP, top_scores * AP_TOP_SCORE_BONUS)
    return Adjustment(points, f"{len(academic.ap_exams)} AP exam(s), {top_scores} scored 5")


ACADEMIC_RULES = (
    AdjustmentRule("gpa_fit", _gpa_fit),
    AdjustmentRule("sat_fit", _sat_fit),
    AdjustmentRule("act_fit", _act_fit),
    AdjustmentRule("major_match", _major_match),
    AdjustmentRule("secondary_major_match", _secondary_major_match),
    AdjustmentRule("academic_honors", _honors),
    AdjustmentRule("extracurriculars", _extracurriculars),
    AdjustmentRule("ap_exams", _ap_exams),
)


def score_academic_fit(
    profile: MatchRequest,
    candidate: CandidateUniversity,
    academic_profile: Optional[AcademicProfileSnapshot] = None
) -> DimensionScore:
    """
    Score academic alignment: GPA/SAT/ACT against the admit averages,
    major availability, and academic-profile extras (honors, activities, AP).
    """
    ctx = ScoringContext(candidate, profile, academic_profile)
    return run_rules("academic", ACADEMIC_BASELINE, ACADEMIC_RULES, ctx)


# =============================================================================
# FINANCIAL
# =============================================================================

def effective_tuition(
    candidate: CandidateUniversity,
    requested_country: Optional[str]
) -> Optional[float]:
    """
    International tuition when the student is shopping outside the
    candidate's country, otherwise out-of-state tuition.
    """
    abroad = bool(
        requested_country
        and candidate.country
        and requested_country.strip().lower() != candidate.country.strip().lower()
    )
    if abroad:
        primary, fallback = candidate.tuition_international, candidate.tuition_out_state
    else:
        primary, fallback = candidate.tuition_out_state, candidate.tuition_international
    return primary if primary is not None else fallback


def net_cost(tuition: float, candidate: CandidateUniversity) -> float:
    return max(0.0, tuition - (candidate.average_grant_aid or 0.0))


def _sticker_covered(ctx: ScoringContext, score: float) -> Optional[Adjustment]:
    tuition = effective_tuition(ctx.candidate, ctx.profile.preferred_country)
    if ctx.profile.max_budget >= tuition:
        return Adjustment(0.0, "Tuition fits within your budget")
    return None


def _net_cost_covered(ctx: ScoringContext, score: float) -> Optional[Adjustment]:
    tuition = effective_tuition(ctx.candidate, ctx.profile.preferred_country)
    budget = ctx.profile.max_budget
    if tuition > budget >= net_cost(tuition, ctx.candidate):
        return Adjustment(
            NET_AFFORDABILITY_SCORE - FULL_AFFORDABILITY_SCORE,
            "Affordable after average grant aid",
        )
    return None


def _shortfall(ctx: ScoringContext, score: float) -> Optional[Adjustment]:
    tuition = effective_tuition(ctx.candidate, ctx.profile.preferred_country)
    gap = net_cost(tuition, ctx.candidate) - ctx.profile.max_budget
    if gap <= 0:
        return None
    return Adjustment(
        -gap / SHORTFALL_DOLLARS_PER_POINT,
        f"Net cost exceeds your budget by ${gap:,.0f}",
    )


FINANCIAL_RULES = (
    AdjustmentRule("sticker_covered", _sticker_covered),
    AdjustmentRule("net_cost_covered", _net_cost_covered),
    AdjustmentRule("budget_shortfall", _shortfall),
)


def score_financial_fit(
    profile: MatchRequest,
    candidate: CandidateUniversity,
    academic_profile: Optional[AcademicProfileSnapshot] = None
) -> DimensionScore:
    """
    Score affordability of the applicable tuition against the budget.
    One point is lost per $1,000 of shortfall after average grant aid.
    """
    tuition = effective_tuition(candidate, profile.preferred_country)
    if tuition is None or profile.max_budget is None:
        return DimensionScore(dimension="financial", score=NEUTRAL_SCORE)

    ctx = ScoringContext(candidate, profile, academic_profile)
    return run_rules("financial", FULL_AFFORDABILITY_SCORE, FINANCIAL_RULES, ctx)


# =============================================================================
# SOCIAL
# =============================================================================

def _diversity(ctx: ScoringContext, score: float) -> Optional[Adjustment]:
    diversity = ctx.candidate.diversity_score
    target = ctx.profile.preferred_diversity
    if diversity is None:
        return None
    if target is not None:
        fit = MAX_SCORE - abs(diversity - target) * 100.0
        return Adjustment(_blend(score, fit, DIVERSITY_BLEND), "Diversity close to your preference")
    if diversity > HIGH_DIVERSITY_THRESHOLD:
        return Adjustment(HIGH_DIVERSITY_BONUS, "Highly diverse student body")
    return None


def _safety(ctx: ScoringContext, score: float) -> Optional[Adjustment]:
    rating = ctx.candidate.safety_rating
    if rating is None:
        return None
    return Adjustment(_blend(score, rating * RATING_TO_SCORE, SAFETY_BLEND), f"Safety rated {rating:g}/5")


def _party_scene(ctx: ScoringContext, score: float) -> Optional[Adjustment]:
    rating = ctx.candidate.party_scene_rating
    if rating is None:
        return None
    return Adjustment(
        _blend(score, rating * RATING_TO_SCORE, PARTY_SCENE_BLEND),
        f"Party scene rated {rating:g}/5",
    )


SOCIAL_RULES = (
    AdjustmentRule("diversity", _diversity),
    AdjustmentRule("safety", _safety),
    AdjustmentRule("party_scene", _party_scene),
)


def score_social_fit(
    profile: MatchRequest,
    candidate: CandidateUniversity,
    academic_profile: Optional[AcademicProfileSnapshot] = None
) -> DimensionScore:
    """Score campus life, diversity, safety and party scene."""
    if candidate.student_life_score is not None:
        baseline = candidate.student_life_score * RATING_TO_SCORE
    else:
        baseline = SOCIAL_MISSING_BASELINE

    ctx = ScoringContext(candidate, profile, academic_profile)
    return run_rules("social", baseline, SOCIAL_RULES, ctx)


# =============================================================================
# LOCATION
# =============================================================================

def _setting(ctx: ScoringContext, score: float) -> Optional[Adjustment]:
    preferred = ctx.profile.preferred_setting
    actual = ctx.candidate.setting
    if preferred is None or actual is None:
        return None
    if preferred == actual:
        return Adjustment(SETTING_MATCH_DELTA, f"{actual.value.title()} campus as preferred")
    return Adjustment(-SETTING_MATCH_DELTA, f"{actual.value.title()} campus, not {preferred.value.lower()}")


def _climate(ctx: ScoringContext, score: float) -> Optional[Adjustment]:
    preferred = ctx.profile.preferred_climate
    actual = ctx.candidate.climate_zone
    if not preferred or not actual:
        return None
    if _fuzzy_match(preferred, actual):
        return Adjustment(CLIMATE_MATCH_BONUS, f"{actual.replace('_', ' ').title()} climate")
    return None


LOCATION_RULES = (
    AdjustmentRule("setting", _setting),
    AdjustmentRule("climate", _climate),
)


def score_location_fit(
    profile: MatchRequest,
    candidate: CandidateUniversity,
    academic_profile: Optional[AcademicProfileSnapshot] = None
) -> DimensionScore:
    """Score campus setting and climate preferences."""
    ctx = ScoringContext(candidate, profile, academic_profile)
    return run_rules("location", LOCATION_BASELINE, LOCATION_RULES, ctx)


# =============================================================================
# FUTURE
# =============================================================================

def _employment(ctx: ScoringContext, score: float) -> Optional[Adjustment]:
    rate = ctx.candidate.employment_rate
    if rate is None:
        return None
    return Adjustment(rate * 100.0 * OUTCOME_SIGNAL_WEIGHT, f"{rate * 100:.0f}% employment rate")


def _alumni(ctx: ScoringContext, score: float) -> Optional[Adjustment]:
    rating = ctx.candidate.alumni_network
    if rating is None:
        return None
    return Adjustment(rating / 5.0 * 100.0 * OUTCOME_SIGNAL_WEIGHT, f"Alumni network rated {rating:g}/5")


def _internships(ctx: ScoringContext, score: float) -> Optional[Adjustment]:
    rating = ctx.candidate.internship_support
    if rating is None:
        return None
    return Adjustment(
        rating / 5.0 * 100.0 * OUTCOME_SIGNAL_WEIGHT,
        f"Internship support rated {rating:g}/5",
    )


def _visa(ctx: ScoringContext, score: float) -> Optional[Adjustment]:
    months = ctx.candidate.visa_duration_months
    if months is None:
        return None
    if ctx.profile.needs_visa_support and months >= (ctx.profile.min_visa_months or 0):
        return Adjustment(VISA_NEED_MET_BONUS, f"{months}-month post-study visa meets your need")
    if months >= LONG_VISA_MONTHS:
        return Adjustment(LONG_VISA_BONUS, f"{months}-month post-study visa")
    return None


FUTURE_RULES = (
    AdjustmentRule("employment_rate", _employment),
    AdjustmentRule("alumni_network", _alumni),
    AdjustmentRule("internship_support", _internships),
    AdjustmentRule("visa_duration", _visa),
)


def score_future_fit(
    profile: MatchRequest,
    candidate: CandidateUniversity,
    academic_profile: Optional[AcademicProfileSnapshot] = None
) -> DimensionScore:
    """Score career outcomes and post-study visa prospects."""
    ctx = ScoringContext(candidate, profile, academic_profile)
    return run_rules("future", FUTURE_BASELINE, FUTURE_RULES, ctx)


# Scorer per category, in breakdown order
SCORERS = {
    "academic": score_academic_fit,
    "financial": score_financial_fit,
    "social": score_social_fit,
    "location": score_location_fit,
    "future": score_future_fit,
}


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _clamp(score: float) -> float:
    return max(MIN_SCORE, min(MAX_SCORE, score))


def _fuzzy_match(term1: str, term2: str) -> bool:
    """Simple fuzzy matching - checks if either term contains the other."""
    t1 = term1.lower().strip()
    t2 = term2.lower().strip()
    return bool(t1) and bool(t2) and (t1 in t2 or t2 in t1)


def majors_overlap(major: str, majors: Sequence[str]) -> bool:
    return any(_fuzzy_match(major, offered) for offered in majors)
