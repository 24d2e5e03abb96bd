"""
Candidate Filter

Reduces the candidate pool before scoring:
- structural filters (CandidateQuery) handed to the Candidate Store
- strict dealbreakers, applied only under strict matching
- onboarding relevance, used only by the recommendation entry point
- reach-school exclusion for discovery searches

Filters never mutate candidates and are deterministic.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .contracts import CandidateUniversity, DiscoveryCriteria, MatchRequest
from .dimension_scorers import effective_tuition, majors_overlap, net_cost
from .constants import (
    CampusSetting,
    FOCUS_AREA_KEYWORDS,
    FocusArea,
    PersonaRole,
    REACH_GPA_GAP,
    RELEVANCE_FOCUS_POINTS,
    RELEVANCE_MAJOR_POINTS,
    RELEVANCE_PERSONA_POINTS,
)

logger = logging.getLogger(__name__)


# =============================================================================
# STRUCTURAL FILTERS
# =============================================================================

class CandidateQuery(BaseModel):
    """
    Structural predicate over candidate records.
    Unset fields do not constrain; a set bound excludes candidates that
    lack the attribute.
    """
    model_config = ConfigDict(frozen=True)

    search_text: Optional[str] = None

    countries: List[str] = Field(default_factory=list)
    states: List[str] = Field(default_factory=list)
    cities: List[str] = Field(default_factory=list)
    setting: Optional[CampusSetting] = None
    climate: Optional[str] = None

    min_gpa: Optional[float] = None
    max_gpa: Optional[float] = None
    min_sat: Optional[int] = None
    max_sat: Optional[int] = None
    min_act: Optional[int] = None
    max_act: Optional[int] = None
    majors: List[str] = Field(default_factory=list)

    min_tuition: Optional[float] = None
    max_tuition: Optional[float] = None
    max_net_cost: Optional[float] = None
    min_grant_aid: Optional[float] = None

    min_diversity: Optional[float] = None
    max_diversity: Optional[float] = None
    min_safety_rating: Optional[float] = None
    min_party_scene: Optional[float] = None
    max_party_scene: Optional[float] = None
    min_student_life: Optional[float] = None

    min_employment_rate: Optional[float] = None
    min_alumni_network: Optional[float] = None
    min_internship_support: Optional[float] = None
    min_visa_months: Optional[int] = None

    def applied_count(self) -> int:
        """Number of constraints this query actually carries."""
        count = 0
        for _, value in self:
            if isinstance(value, (list, str)):
                count += 1 if value else 0
            elif value is not None:
                count += 1
        return count

    def matches(self, candidate: CandidateUniversity) -> bool:
        c = candidate

        if self.search_text and not _matches_text(self.search_text, c):
            return False

        if self.countries and not _in_list(c.country, self.countries):
            return False
        if self.states and not _in_list(c.state, self.states):
            return False
        if self.cities and not _in_list(c.city, self.cities):
            return False
        if self.setting is not None and c.setting != self.setting:
            return False
        if self.climate and not (c.climate_zone and self.climate.lower() in c.climate_zone.lower()):
            return False

        if not _within(c.avg_gpa, self.min_gpa, self.max_gpa):
            return False
        if not _within(c.avg_sat_score, self.min_sat, self.max_sat):
            return False
        if not _within(c.avg_act_score, self.min_act, self.max_act):
            return False
        if self.majors and not any(majors_overlap(m, c.popular_majors) for m in self.majors):
            return False

        if not _within(c.tuition_out_state, self.min_tuition, self.max_tuition):
            return False
        if self.max_net_cost is not None:
            if c.tuition_out_state is None or net_cost(c.tuition_out_state, c) > self.max_net_cost:
                return False
        if not _within(c.average_grant_aid, self.min_grant_aid, None):
            return False

        if not _within(c.diversity_score, self.min_diversity, self.max_diversity):
            return False
        if not _within(c.safety_rating, self.min_safety_rating, None):
            return False
        if not _within(c.party_scene_rating, self.min_party_scene, self.max_party_scene):
            return False
        if not _within(c.student_life_score, self.min_student_life, None):
            return False

        if not _within(c.employment_rate, self.min_employment_rate, None):
            return False
        if not _within(c.alumni_network, self.min_alumni_network, None):
            return False
        if not _within(c.internship_support, self.min_internship_support, None):
            return False
        if not _within(c.visa_duration_months, self.min_visa_months, None):
            return False

        return True


def query_from_criteria(criteria: DiscoveryCriteria) -> CandidateQuery:
    """Flatten the optional filter groups of discovery criteria into one query."""
    fields: Dict[str, object] = {}

    if criteria.search_text and criteria.search_text.strip():
        fields["search_text"] = criteria.search_text.strip()

    if criteria.academics is not None:
        fields.update(criteria.academics.model_dump(exclude_none=True))
    if criteria.financials is not None:
        fields.update(criteria.financials.model_dump(exclude_none=True))
    if criteria.location is not None:
        fields.update(criteria.location.model_dump(exclude_none=True))
    if criteria.social is not None:
        fields.update(criteria.social.model_dump(exclude_none=True))
    if criteria.future is not None:
        fields.update(criteria.future.model_dump(exclude_none=True))

    return CandidateQuery(**fields)


def query_from_match_request(request: MatchRequest) -> CandidateQuery:
    """A direct match only narrows the store by country; the rest is scored."""
    if request.preferred_country:
        return CandidateQuery(countries=[request.preferred_country])
    return CandidateQuery()


# =============================================================================
# STRICT DEALBREAKERS
# =============================================================================

def dealbreaker_reason(candidate: CandidateUniversity, request: MatchRequest) -> Optional[str]:
    """
    Return why a candidate is a dealbreaker for the request, or None.
    A requirement the candidate has no data for counts as broken.
    """
    if request.max_budget is not None:
        tuition = effective_tuition(candidate, request.preferred_country)
        if tuition is None:
            return "no tuition data"
        if tuition > request.max_budget:
            return f"tuition {tuition:,.0f} over budget {request.max_budget:,.0f}"

    if request.needs_visa_support and request.min_visa_months is not None:
        months = candidate.visa_duration_months
        if months is None:
            return "no visa duration data"
        if months < request.min_visa_months:
            return f"visa {months} months below {request.min_visa_months}"

    if request.min_safety_rating is not None:
        rating = candidate.safety_rating
        if rating is None:
            return "no safety rating"
        if rating < request.min_safety_rating:
            return f"safety {rating} below {request.min_safety_rating}"

    return None


def apply_dealbreakers(
    candidates: List[CandidateUniversity],
    request: MatchRequest
) -> List[CandidateUniversity]:
    """
    Hard-exclude candidates that break budget, visa or safety requirements.
    Only meaningful under strict matching; callers decide when to apply it.
    """
    kept = []
    for candidate in candidates:
        reason = dealbreaker_reason(candidate, request)
        if reason:
            logger.debug(f"Dealbreaker excluded {candidate.name}: {reason}")
            continue
        kept.append(candidate)

    logger.info(f"Strict filters kept {len(kept)}/{len(candidates)} candidates")
    return kept


# =============================================================================
# ONBOARDING RELEVANCE
# =============================================================================

Heuristic = Callable[[CandidateUniversity], bool]

PERSONA_HEURISTICS: Dict[str, Tuple[Heuristic, ...]] = {
    PersonaRole.STUDENT: (
        lambda c: (c.student_life_score or 0) >= 4.0,
        lambda c: (c.acceptance_rate or 0) >= 0.3,
    ),
    PersonaRole.PROFESSIONAL: (
        lambda c: (c.employment_rate or 0) >= 0.85,
        lambda c: (c.internship_support or 0) >= 4.0,
    ),
    PersonaRole.PARENT: (
        lambda c: (c.safety_rating or 0) >= 4.0,
        lambda c: (c.average_grant_aid or 0) >= 10000,
    ),
    PersonaRole.RESEARCHER: (
        lambda c: c.ranking is not None and c.ranking <= 100,
        lambda c: (c.alumni_network or 0) >= 4.0,
    ),
}


def relevance_tally(
    candidate: CandidateUniversity,
    primary_major: Optional[str] = None,
    focus_area: Optional[FocusArea] = None,
    persona_role: Optional[PersonaRole] = None
) -> int:
    """Small relevance score: major +3, focus-area keyword +2, persona heuristics +1 each."""
    tally = 0

    if primary_major and majors_overlap(primary_major, candidate.popular_majors):
        tally += RELEVANCE_MAJOR_POINTS

    keywords = FOCUS_AREA_KEYWORDS.get(focus_area, ()) if focus_area else ()
    if keywords and any(
        keyword in major.lower()
        for keyword in keywords
        for major in candidate.popular_majors
    ):
        tally += RELEVANCE_FOCUS_POINTS

    for heuristic in PERSONA_HEURISTICS.get(persona_role, ()) if persona_role else ():
        if heuristic(candidate):
            tally += RELEVANCE_PERSONA_POINTS

    return tally


def has_relevance_signal(
    primary_major: Optional[str] = None,
    focus_area: Optional[FocusArea] = None,
    persona_role: Optional[PersonaRole] = None
) -> bool:
    return bool(
        primary_major
        or (focus_area and FOCUS_AREA_KEYWORDS.get(focus_area))
        or (persona_role and PERSONA_HEURISTICS.get(persona_role))
    )


def apply_onboarding_relevance(
    candidates: List[CandidateUniversity],
    primary_major: Optional[str] = None,
    focus_area: Optional[FocusArea] = None,
    persona_role: Optional[PersonaRole] = None
) -> List[CandidateUniversity]:
    """
    Keep candidates relevant to what a first-time user told us during
    onboarding. Everyone is kept when there is no signal at all.
    """
    if not has_relevance_signal(primary_major, focus_area, persona_role):
        return list(candidates)

    kept = [
        c for c in candidates
        if relevance_tally(c, primary_major, focus_area, persona_role) > 0
    ]
    logger.info(f"Onboarding relevance kept {len(kept)}/{len(candidates)} candidates")
    return kept


# =============================================================================
# REACH SCHOOLS
# =============================================================================

def is_reach_school(candidate: CandidateUniversity, gpa: Optional[float]) -> bool:
    """A candidate whose academic bar is above the student's demonstrated level."""
    if gpa is None:
        return False
    if candidate.min_gpa is not None and candidate.min_gpa > gpa:
        return True
    return candidate.avg_gpa is not None and round(candidate.avg_gpa - gpa, 2) >= REACH_GPA_GAP


def exclude_reach_schools(
    candidates: List[CandidateUniversity],
    gpa: Optional[float]
) -> List[CandidateUniversity]:
    return [c for c in candidates if not is_reach_school(c, gpa)]


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _within(value, low, high) -> bool:
    """Range check; a missing value fails any bound that is set."""
    if low is None and high is None:
        return True
    if value is None:
        return False
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True


def _in_list(value: Optional[str], options: List[str]) -> bool:
    if not value:
        return False
    wanted = {o.strip().lower() for o in options}
    return value.strip().lower() in wanted


def _matches_text(text: str, candidate: CandidateUniversity) -> bool:
    needle = text.lower()
    haystack = [candidate.name, candidate.city or "", candidate.country, *candidate.popular_majors]
    return any(needle in field.lower() for field in haystack)
