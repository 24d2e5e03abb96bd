"""
Matching Logic Module

Provides the deterministic matching engine for university matching and
discovery search.
"""

from .contracts import (
    CandidateUniversity,
    MatchRequest,
    ImportanceFactors,
    AcademicProfileSnapshot,
    FinancialProfileSnapshot,
    UserSnapshot,
    DiscoveryCriteria,
    DiscoveryResponse,
    MatchResult,
)
from .engine import MatchingEngine
from .exceptions import MatchingError, SubjectNotFoundError
from .constants import AccessTier, SortKey

__all__ = [
    # Main engine
    "MatchingEngine",

    # Contracts
    "CandidateUniversity",
    "MatchRequest",
    "ImportanceFactors",
    "AcademicProfileSnapshot",
    "FinancialProfileSnapshot",
    "UserSnapshot",
    "DiscoveryCriteria",
    "DiscoveryResponse",
    "MatchResult",

    # Errors
    "MatchingError",
    "SubjectNotFoundError",

    # Enums
    "AccessTier",
    "SortKey",
]
