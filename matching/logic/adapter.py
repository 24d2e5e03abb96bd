"""
Data Adapter for the Matching Engine

Reads university and profile tables and transforms rows into the engine's
contracts. Two collaborator protocols are defined here:
- CandidateStore: structural candidate lookup
- ProfileRepository: user / academic / financial profile lookup

This is a pure READ + TRANSFORM layer:
- NO scoring logic
- NO ranking
- NO DB writes
"""

import logging
from enum import Enum
from typing import Dict, Iterable, List, Optional, Protocol, Type

from sqlalchemy import func
from sqlalchemy.orm import Session

from matching.models import AcademicProfile, FinancialProfile, University, User

from .access_gate import resolve_tier
from .candidate_filter import CandidateQuery
from .contracts import (
    AcademicHonor,
    AcademicProfileSnapshot,
    ApExam,
    CandidateUniversity,
    FinancialProfileSnapshot,
    UserSnapshot,
)
from .constants import CampusSetting, FocusArea, PersonaRole

logger = logging.getLogger(__name__)


# =============================================================================
# COLLABORATOR PROTOCOLS
# =============================================================================

class CandidateStore(Protocol):
    def find_candidates(self, query: CandidateQuery) -> List[CandidateUniversity]:
        """Return every candidate matching the structural query, in a stable order."""
        ...


class ProfileRepository(Protocol):
    def get_user(self, user_id: str) -> Optional[UserSnapshot]:
        ...

    def get_academic_profile(self, user_id: str) -> Optional[AcademicProfileSnapshot]:
        ...

    def get_financial_profile(self, user_id: str) -> Optional[FinancialProfileSnapshot]:
        ...


# =============================================================================
# SQLALCHEMY IMPLEMENTATIONS
# =============================================================================

class SqlCandidateStore:
    """
    Candidate store backed by the `universities` table.

    Simple bounds are pushed into SQL; the full CandidateQuery predicate is
    re-checked in Python so both stores agree exactly.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_candidates(self, query: CandidateQuery) -> List[CandidateUniversity]:
        q = self.db.query(University)

        if query.countries:
            q = q.filter(func.lower(University.country).in_([c.lower() for c in query.countries]))
        if query.setting is not None:
            q = q.filter(University.setting == query.setting.value)

        # SQL comparisons drop NULLs, matching the missing-attribute rule
        bounds = (
            (University.tuition_out_state, query.min_tuition, query.max_tuition),
            (University.avg_sat_score, query.min_sat, query.max_sat),
            (University.avg_act_score, query.min_act, query.max_act),
            (University.safety_rating, query.min_safety_rating, None),
            (University.visa_duration_months, query.min_visa_months, None),
        )
        for column, low, high in bounds:
            if low is not None:
                q = q.filter(column >= low)
            if high is not None:
                q = q.filter(column <= high)

        rows = q.order_by(University.name, University.id).all()
        candidates = [to_candidate(row) for row in rows]
        matched = [c for c in candidates if query.matches(c)]

        logger.info(f"🔍 Candidate store: {len(rows)} rows, {len(matched)} matched")
        return matched


class SqlProfileRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> Optional[UserSnapshot]:
        row = self.db.query(User).filter(User.id == user_id).first()
        if row is None:
            return None
        return UserSnapshot(
            id=row.id,
            gpa=row.gpa,
            sat_score=row.sat_score,
            act_score=row.act_score,
            preferred_major=row.preferred_major,
            max_budget=row.max_budget,
            preferred_country=row.preferred_country,
            focus_area=_enum_or_none(FocusArea, row.focus_area),
            persona_role=_enum_or_none(PersonaRole, row.persona_role),
            role=resolve_tier(row.role),
        )

    def get_academic_profile(self, user_id: str) -> Optional[AcademicProfileSnapshot]:
        row = self.db.query(AcademicProfile).filter(AcademicProfile.user_id == user_id).first()
        if row is None:
            return None
        return AcademicProfileSnapshot(
            gpa=row.gpa,
            gpa_scale=row.gpa_scale or 4.0,
            sat_total=row.sat_total,
            act_composite=row.act_composite,
            primary_major=row.primary_major,
            secondary_major=row.secondary_major,
            extracurriculars=list(row.extracurriculars or []),
            academic_honors=[AcademicHonor.model_validate(h) for h in row.academic_honors or []],
            ap_exams=[ApExam.model_validate(e) for e in row.ap_exams or []],
        )

    def get_financial_profile(self, user_id: str) -> Optional[FinancialProfileSnapshot]:
        row = self.db.query(FinancialProfile).filter(FinancialProfile.user_id == user_id).first()
        if row is None:
            return None
        return FinancialProfileSnapshot(
            max_budget=row.max_budget,
            household_income=row.household_income,
            savings=row.savings,
        )


def to_candidate(row: University) -> CandidateUniversity:
    """Transform a University row into a CandidateUniversity."""
    data = {name: getattr(row, name, None) for name in CandidateUniversity.model_fields}
    data["country"] = row.country or ""
    data["popular_majors"] = list(row.popular_majors or [])
    data["setting"] = _enum_or_none(CampusSetting, row.setting)
    return CandidateUniversity(**data)


# =============================================================================
# IN-MEMORY IMPLEMENTATIONS
# =============================================================================

class InMemoryCandidateStore:
    """Candidate store over a fixed list; keeps insertion order."""

    def __init__(self, candidates: Iterable[CandidateUniversity]):
        self.candidates = list(candidates)

    def find_candidates(self, query: CandidateQuery) -> List[CandidateUniversity]:
        return [c for c in self.candidates if query.matches(c)]


class InMemoryProfileRepository:
    def __init__(
        self,
        users: Optional[Dict[str, UserSnapshot]] = None,
        academic_profiles: Optional[Dict[str, AcademicProfileSnapshot]] = None,
        financial_profiles: Optional[Dict[str, FinancialProfileSnapshot]] = None
    ):
        self.users = users or {}
        self.academic_profiles = academic_profiles or {}
        self.financial_profiles = financial_profiles or {}

    def get_user(self, user_id: str) -> Optional[UserSnapshot]:
        return self.users.get(user_id)

    def get_academic_profile(self, user_id: str) -> Optional[AcademicProfileSnapshot]:
        return self.academic_profiles.get(user_id)

    def get_financial_profile(self, user_id: str) -> Optional[FinancialProfileSnapshot]:
        return self.financial_profiles.get(user_id)


def _enum_or_none(enum_cls: Type[Enum], value: Optional[str]):
    if not value:
        return None
    try:
        return enum_cls(value.upper())
    except ValueError:
        logger.warning(f"Unknown {enum_cls.__name__} value: {value}")
        return None
