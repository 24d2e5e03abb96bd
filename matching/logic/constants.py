"""
Matching Engine Constants

Defines category weights, scorer deltas, score bounds, tier limits and enums
used by the matching engine. Product tuning happens here, not in the scorers.
"""

from enum import Enum
from typing import Dict, Tuple

# =============================================================================
# CATEGORY WEIGHTS
# =============================================================================

CATEGORIES: Tuple[str, ...] = ("academic", "financial", "social", "location", "future")

# Fractional weights used when the caller gives no usable importance factors
DEFAULT_CATEGORY_WEIGHTS: Dict[str, float] = {
    "academic": 0.40,
    "financial": 0.30,
    "location": 0.15,
    "social": 0.10,
    "future": 0.05,
}

# Discovery criteria carry the same defaults as un-normalized percentages
DEFAULT_DISCOVERY_WEIGHTS: Dict[str, int] = {
    "academic": 40,
    "financial": 30,
    "location": 15,
    "social": 10,
    "future": 5,
}

# Importance factor name -> category it drives
IMPORTANCE_FACTOR_CATEGORY: Dict[str, str] = {
    "academics": "academic",
    "cost": "financial",
    "social": "social",
    "location": "location",
    "future": "future",
}

DEFAULT_IMPORTANCE = 5
RECOMMENDATION_ACADEMIC_IMPORTANCE = 8  # boost when an academic profile exists

# =============================================================================
# SCORE BOUNDS
# =============================================================================

MIN_SCORE = 0.0
MAX_SCORE = 100.0
NEUTRAL_SCORE = 75.0  # every category when no profile is available

DEFAULT_GPA_SCALE = 4.0
SAT_BOUNDS: Tuple[int, int] = (400, 1600)
ACT_BOUNDS: Tuple[int, int] = (1, 36)

# Criteria normalizer spreads around the student's own numbers
GPA_RANGE_SPREAD = 0.3
SAT_RANGE_SPREAD = 150
ACT_RANGE_SPREAD = 3

UNDECLARED_MAJOR = "Undeclared"

# =============================================================================
# ACADEMIC SCORER
# =============================================================================

ACADEMIC_BASELINE = 70.0
GPA_ABOVE_AVERAGE_BONUS = 25.0
GPA_ABOVE_MINIMUM_BONUS = 15.0
GPA_REACH_PENALTY = -20.0
REACH_GPA_GAP = 0.5

SAT_MEETS_BONUS = 15.0
SAT_NEAR_BONUS = 5.0
SAT_NEAR_WINDOW = 100
SAT_BELOW_PENALTY = -15.0

ACT_MEETS_BONUS = 15.0
ACT_NEAR_BONUS = 5.0
ACT_NEAR_WINDOW = 2
ACT_BELOW_PENALTY = -15.0

MAJOR_MATCH_BONUS = 25.0
SECONDARY_MAJOR_BONUS = 10.0

HONOR_POINTS = 2.0
HONOR_POINTS_CAP = 10.0
HIGH_LEVEL_HONOR_BONUS = 3.0
HIGH_LEVEL_HONORS = ("national", "international")

EXTRACURRICULAR_POINTS = 1.0
EXTRACURRICULAR_CAP = 5.0

AP_EXAM_POINTS = 2.0
AP_EXAM_CAP = 10.0
AP_TOP_SCORE = 5
AP_TOP_SCORE_BONUS = 1.0
AP_TOP_SCORE_BONUS_CAP = 5.0

# =============================================================================
# FINANCIAL SCORER
# =============================================================================

FULL_AFFORDABILITY_SCORE = 100.0
NET_AFFORDABILITY_SCORE = 85.0
SHORTFALL_DOLLARS_PER_POINT = 1000.0

# =============================================================================
# SOCIAL SCORER
# =============================================================================

SOCIAL_MISSING_BASELINE = 50.0
RATING_TO_SCORE = 20.0  # 0-5 rating -> 0-100 score
HIGH_DIVERSITY_THRESHOLD = 0.7
HIGH_DIVERSITY_BONUS = 5.0
DIVERSITY_BLEND = 0.5
SAFETY_BLEND = 0.3
PARTY_SCENE_BLEND = 0.2

# =============================================================================
# LOCATION SCORER
# =============================================================================

LOCATION_BASELINE = 80.0
SETTING_MATCH_DELTA = 20.0
CLIMATE_MATCH_BONUS = 20.0

# =============================================================================
# FUTURE SCORER
# =============================================================================

FUTURE_BASELINE = 50.0
OUTCOME_SIGNAL_WEIGHT = 0.33
VISA_NEED_MET_BONUS = 20.0
LONG_VISA_BONUS = 10.0
LONG_VISA_MONTHS = 24

# =============================================================================
# ONBOARDING RELEVANCE
# =============================================================================

RELEVANCE_MAJOR_POINTS = 3
RELEVANCE_FOCUS_POINTS = 2
RELEVANCE_PERSONA_POINTS = 1


class FocusArea(str, Enum):
    COMPUTER_SCIENCE = "COMPUTER_SCIENCE"
    BUSINESS = "BUSINESS"
    ENGINEERING = "ENGINEERING"
    MEDICINE = "MEDICINE"
    LAW = "LAW"
    ARTS = "ARTS"
    SCIENCES = "SCIENCES"
    HUMANITIES = "HUMANITIES"
    SOCIAL_SCIENCES = "SOCIAL_SCIENCES"
    OTHER = "OTHER"


class PersonaRole(str, Enum):
    STUDENT = "STUDENT"
    PROFESSIONAL = "PROFESSIONAL"
    PARENT = "PARENT"
    COUNSELOR = "COUNSELOR"
    EDUCATOR = "EDUCATOR"
    RESEARCHER = "RESEARCHER"


# Keywords matched against a candidate's popular majors
FOCUS_AREA_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    FocusArea.COMPUTER_SCIENCE: ("computer", "software", "data", "informatics", "artificial intelligence"),
    FocusArea.BUSINESS: ("business", "finance", "economics", "management", "accounting", "marketing"),
    FocusArea.ENGINEERING: ("engineering", "mechanical", "electrical", "civil", "aerospace"),
    FocusArea.MEDICINE: ("medicine", "pre-med", "nursing", "health", "biology", "pharmacy"),
    FocusArea.LAW: ("law", "legal", "political science", "criminal justice"),
    FocusArea.ARTS: ("art", "design", "music", "film", "theater", "architecture"),
    FocusArea.SCIENCES: ("physics", "chemistry", "biology", "mathematics", "science"),
    FocusArea.HUMANITIES: ("history", "philosophy", "literature", "english", "languages", "classics"),
    FocusArea.SOCIAL_SCIENCES: ("psychology", "sociology", "anthropology", "economics", "communications"),
}

# =============================================================================
# RANKING / ACCESS
# =============================================================================

MAX_MATCH_RESULTS = 20
RESTRICTED_RESULT_COUNT = 3
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class SortKey(str, Enum):
    MATCH_PERCENTAGE = "matchPercentage"
    TUITION_ASC = "tuition_asc"
    TUITION_DESC = "tuition_desc"
    RANKING_ASC = "ranking_asc"
    RANKING_DESC = "ranking_desc"
    ACCEPTANCE_RATE_ASC = "acceptanceRate_asc"
    ACCEPTANCE_RATE_DESC = "acceptanceRate_desc"
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"


class AccessTier(str, Enum):
    """Caller plan/role as resolved by the auth layer."""
    ADMIN = "ADMIN"
    PREMIUM = "PREMIUM"
    USER = "USER"
    FREE = "FREE"


UNRESTRICTED_TIERS = frozenset({AccessTier.ADMIN, AccessTier.PREMIUM})


class RestrictionReason(str, Enum):
    ANONYMOUS_USER = "anonymous_user"
    FREE_TIER = "free_tier"


RESTRICTION_MESSAGES: Dict[str, str] = {
    RestrictionReason.ANONYMOUS_USER: "Sign in to see more than {showing} of your {total} matches.",
    RestrictionReason.FREE_TIER: "Upgrade to Premium to unlock all {total} matches.",
}


class CampusSetting(str, Enum):
    URBAN = "URBAN"
    SUBURBAN = "SUBURBAN"
    RURAL = "RURAL"
