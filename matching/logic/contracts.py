"""
Data Contracts for the Matching Engine

Defines Pydantic models for the inputs (MatchRequest, DiscoveryCriteria,
profile snapshots), the candidate record, and the outputs (MatchResult,
DiscoveryResponse). These contracts are the API boundary for the engine.

Wire format is camelCase; Python attributes are snake_case.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .constants import (
    AccessTier,
    CampusSetting,
    DEFAULT_DISCOVERY_WEIGHTS,
    DEFAULT_GPA_SCALE,
    DEFAULT_IMPORTANCE,
    DEFAULT_PAGE_SIZE,
    FocusArea,
    MAX_PAGE_SIZE,
    PersonaRole,
    RestrictionReason,
    SortKey,
)


class ContractModel(BaseModel):
    """Base for every contract: camelCase aliases, snake_case attributes."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# CANDIDATE
# =============================================================================

class CandidateUniversity(ContractModel):
    """
    An institution record as returned by the Candidate Store.
    Any statistic may be missing; scorers treat missing values as no signal.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    slug: Optional[str] = None
    name: str

    # Location
    country: str = ""
    state: Optional[str] = None
    city: Optional[str] = None
    setting: Optional[CampusSetting] = None
    climate_zone: Optional[str] = None

    # Academics
    avg_gpa: Optional[float] = None
    min_gpa: Optional[float] = None
    avg_sat_score: Optional[int] = None
    avg_act_score: Optional[int] = None
    popular_majors: List[str] = Field(default_factory=list)
    acceptance_rate: Optional[float] = None
    ranking: Optional[int] = None

    # Financials
    tuition_out_state: Optional[float] = None
    tuition_international: Optional[float] = None
    average_grant_aid: Optional[float] = None

    # Social
    student_life_score: Optional[float] = None  # 0-5
    diversity_score: Optional[float] = None     # 0-1
    party_scene_rating: Optional[float] = None  # 0-5
    safety_rating: Optional[float] = None       # 0-5

    # Outcomes
    employment_rate: Optional[float] = None     # 0-1
    alumni_network: Optional[float] = None      # 0-5
    internship_support: Optional[float] = None  # 0-5
    visa_duration_months: Optional[int] = None


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

class ImportanceFactors(ContractModel):
    """Per-category importance, 1-10 each."""
    academics: int = Field(default=DEFAULT_IMPORTANCE, ge=1, le=10)
    cost: int = Field(default=DEFAULT_IMPORTANCE, ge=1, le=10)
    social: int = Field(default=DEFAULT_IMPORTANCE, ge=1, le=10)
    location: int = Field(default=DEFAULT_IMPORTANCE, ge=1, le=10)
    future: int = Field(default=DEFAULT_IMPORTANCE, ge=1, le=10)


class MatchRequest(ContractModel):
    """
    Input contract for a direct match.
    Represents a student's academic, financial and lifestyle profile.
    """
    # Academics
    gpa: Optional[float] = Field(default=None, ge=0)
    sat_score: Optional[int] = Field(default=None, ge=400, le=1600)
    act_score: Optional[int] = Field(default=None, ge=1, le=36)
    preferred_major: Optional[str] = None

    # Location & lifestyle
    preferred_country: Optional[str] = None
    preferred_setting: Optional[CampusSetting] = None
    preferred_climate: Optional[str] = None
    preferred_diversity: Optional[float] = Field(default=None, ge=0, le=1)
    min_safety_rating: Optional[float] = Field(default=None, ge=0, le=5)

    # Money & visa
    max_budget: Optional[float] = Field(default=None, ge=0)
    needs_visa_support: bool = False
    min_visa_months: Optional[int] = Field(default=None, ge=0)

    strict_match: bool = False
    importance_factors: Optional[ImportanceFactors] = None  # None uses the default category weights


class AcademicHonor(ContractModel):
    name: str
    year: Optional[int] = None
    level: Optional[str] = None  # School/District/Regional/State/National/International


class ApExam(ContractModel):
    subject: str
    score: int = Field(ge=1, le=5)
    year: Optional[int] = None


class AcademicProfileSnapshot(ContractModel):
    """Rich academic profile; enriches the academic scorer when present."""
    gpa: Optional[float] = None
    gpa_scale: float = DEFAULT_GPA_SCALE
    sat_total: Optional[int] = None
    act_composite: Optional[int] = None
    primary_major: Optional[str] = None
    secondary_major: Optional[str] = None
    extracurriculars: List[str] = Field(default_factory=list)
    academic_honors: List[AcademicHonor] = Field(default_factory=list)
    ap_exams: List[ApExam] = Field(default_factory=list)


class FinancialProfileSnapshot(ContractModel):
    max_budget: Optional[float] = None
    household_income: Optional[float] = None
    savings: Optional[float] = None


class UserSnapshot(ContractModel):
    """Basic user record with legacy scalar fields used as fallbacks."""
    id: str
    gpa: Optional[float] = None
    sat_score: Optional[int] = None
    act_score: Optional[int] = None
    preferred_major: Optional[str] = None
    max_budget: Optional[float] = None
    preferred_country: Optional[str] = None
    focus_area: Optional[FocusArea] = None
    persona_role: Optional[PersonaRole] = None
    role: AccessTier = AccessTier.FREE


# -----------------------------------------------------------------------------
# Discovery criteria (each filter group is optional as a whole)
# -----------------------------------------------------------------------------

class AcademicFilters(ContractModel):
    min_gpa: Optional[float] = None
    max_gpa: Optional[float] = None
    min_sat: Optional[int] = None
    max_sat: Optional[int] = None
    min_act: Optional[int] = None
    max_act: Optional[int] = None
    majors: List[str] = Field(default_factory=list)


class FinancialFilters(ContractModel):
    min_tuition: Optional[float] = None
    max_tuition: Optional[float] = None
    max_net_cost: Optional[float] = None
    min_grant_aid: Optional[float] = None


class LocationFilters(ContractModel):
    countries: List[str] = Field(default_factory=list)
    states: List[str] = Field(default_factory=list)
    cities: List[str] = Field(default_factory=list)
    setting: Optional[CampusSetting] = None
    climate: Optional[str] = None


class SocialFilters(ContractModel):
    min_diversity: Optional[float] = None
    max_diversity: Optional[float] = None
    min_safety_rating: Optional[float] = None
    min_party_scene: Optional[float] = None
    max_party_scene: Optional[float] = None
    min_student_life: Optional[float] = None


class FutureFilters(ContractModel):
    min_employment_rate: Optional[float] = None
    min_alumni_network: Optional[float] = None
    min_internship_support: Optional[float] = None
    min_visa_months: Optional[int] = None


class DiscoveryProfile(ContractModel):
    """Profile subset carried by discovery criteria; used for scoring only."""
    gpa: Optional[float] = None
    sat: Optional[int] = None
    act: Optional[int] = None
    preferred_major: Optional[str] = None
    max_budget: Optional[float] = None


class DiscoveryWeights(ContractModel):
    """Un-normalized, percentage-like category weights."""
    academic: int = Field(default=DEFAULT_DISCOVERY_WEIGHTS["academic"], ge=0)
    financial: int = Field(default=DEFAULT_DISCOVERY_WEIGHTS["financial"], ge=0)
    location: int = Field(default=DEFAULT_DISCOVERY_WEIGHTS["location"], ge=0)
    social: int = Field(default=DEFAULT_DISCOVERY_WEIGHTS["social"], ge=0)
    future: int = Field(default=DEFAULT_DISCOVERY_WEIGHTS["future"], ge=0)


class DiscoveryCriteria(ContractModel):
    search_text: str = ""
    academics: Optional[AcademicFilters] = None
    financials: Optional[FinancialFilters] = None
    location: Optional[LocationFilters] = None
    social: Optional[SocialFilters] = None
    future: Optional[FutureFilters] = None
    user_profile: Optional[DiscoveryProfile] = None
    weights: DiscoveryWeights = Field(default_factory=DiscoveryWeights)
    sort_by: SortKey = SortKey.MATCH_PERCENTAGE
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    include_reach_schools: bool = True
    strict_filtering: bool = False


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class MatchReason(ContractModel):
    """One applied scoring rule, for explainability."""
    category: str
    rule: str
    text: str
    delta: float


class DimensionScore(ContractModel):
    """Result of one scorer: clamped score plus the reasons behind it."""
    dimension: str
    score: float = Field(ge=0.0, le=100.0)
    reasons: List[MatchReason] = Field(default_factory=list)


class CategoryScore(ContractModel):
    score: float
    weight: int  # percentage of the total
    contribution: float


class ScoreBreakdown(ContractModel):
    academic: CategoryScore
    financial: CategoryScore
    social: CategoryScore
    location: CategoryScore
    future: CategoryScore
    total: float


class MatchBreakdown(ContractModel):
    academic: float
    financial: float
    social: float
    location: float
    future: float


class MatchResult(ContractModel):
    candidate: CandidateUniversity
    match_percentage: int = Field(ge=0, le=100)
    breakdown: MatchBreakdown
    score_breakdown: ScoreBreakdown
    reasons: List[MatchReason] = Field(default_factory=list)

    @property
    def university(self) -> CandidateUniversity:
        return self.candidate


class Pagination(ContractModel):
    current_page: int
    total_pages: int
    total_results: int
    limit: int
    has_next_page: bool
    has_previous_page: bool


class Restriction(ContractModel):
    reason: RestrictionReason
    message: str
    actual_total: int
    showing: int


class AppliedFilters(ContractModel):
    applied: int = 0


class DiscoveryResponse(ContractModel):
    results: List[MatchResult] = Field(default_factory=list)
    pagination: Pagination
    filters: AppliedFilters = Field(default_factory=AppliedFilters)
    restricted: Optional[Restriction] = None
