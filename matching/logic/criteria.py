"""
Criteria Normalizer

Bootstraps DiscoveryCriteria from whatever profile data a user has.
Missing sub-profiles degrade to defaults; nothing here raises.
"""

import logging
from typing import Optional, Tuple

from .contracts import (
    AcademicFilters,
    AcademicProfileSnapshot,
    DiscoveryCriteria,
    DiscoveryProfile,
    FinancialFilters,
    FinancialProfileSnapshot,
    UserSnapshot,
)
from .constants import (
    ACT_BOUNDS,
    ACT_RANGE_SPREAD,
    DEFAULT_GPA_SCALE,
    GPA_RANGE_SPREAD,
    SAT_BOUNDS,
    SAT_RANGE_SPREAD,
    UNDECLARED_MAJOR,
)

logger = logging.getLogger(__name__)


def build_initial_criteria(
    user: Optional[UserSnapshot] = None,
    academic: Optional[AcademicProfileSnapshot] = None,
    financial: Optional[FinancialProfileSnapshot] = None
) -> DiscoveryCriteria:
    """
    Build starting discovery criteria for a user.

    Args:
        user: Basic user record (legacy scalar fields are fallbacks)
        academic: Academic profile, if the user completed one
        financial: Financial profile, if the user completed one

    Returns:
        DiscoveryCriteria; plain defaults when no profile exists at all
    """
    if user is None and academic is None and financial is None:
        return DiscoveryCriteria()

    if academic is None:
        logger.info("No academic profile; academic filters left open")
    if financial is None:
        logger.info("No financial profile; financial filters left open")

    academic_gpa = None
    if academic is not None and academic.gpa is not None:
        academic_gpa = to_four_point(academic.gpa, academic.gpa_scale)

    gpa = _first(academic_gpa, user.gpa if user else None)
    sat = _first(academic.sat_total if academic else None, user.sat_score if user else None)
    act = _first(academic.act_composite if academic else None, user.act_score if user else None)
    major = preferred_major(user, academic)
    budget = _first(
        financial.max_budget if financial else None,
        user.max_budget if user else None,
    )

    academics = None
    if academic is not None:
        min_gpa, max_gpa = _range(academic_gpa, GPA_RANGE_SPREAD, (0.0, DEFAULT_GPA_SCALE))
        min_sat, max_sat = _range(academic.sat_total, SAT_RANGE_SPREAD, SAT_BOUNDS)
        min_act, max_act = _range(academic.act_composite, ACT_RANGE_SPREAD, ACT_BOUNDS)
        academics = AcademicFilters(
            min_gpa=min_gpa,
            max_gpa=max_gpa,
            min_sat=_as_int(min_sat),
            max_sat=_as_int(max_sat),
            min_act=_as_int(min_act),
            max_act=_as_int(max_act),
            majors=[major] if major else [],
        )

    financials = None
    if financial is not None and financial.max_budget is not None:
        financials = FinancialFilters(
            max_tuition=financial.max_budget,
            max_net_cost=financial.max_budget,
        )

    user_profile = None
    if any(value is not None for value in (gpa, sat, act, major, budget)):
        user_profile = DiscoveryProfile(
            gpa=gpa,
            sat=sat,
            act=act,
            preferred_major=major,
            max_budget=budget,
        )

    return DiscoveryCriteria(
        academics=academics,
        financials=financials,
        user_profile=user_profile,
    )


def preferred_major(
    user: Optional[UserSnapshot],
    academic: Optional[AcademicProfileSnapshot]
) -> Optional[str]:
    """Primary major from the academic profile, else the legacy major unless undeclared."""
    if academic is not None and academic.primary_major:
        return academic.primary_major
    if user is not None and user.preferred_major and user.preferred_major != UNDECLARED_MAJOR:
        return user.preferred_major
    return None


def to_four_point(gpa: float, scale: Optional[float]) -> float:
    """Rescale a GPA to the 4-point scale candidate statistics use."""
    if not scale or scale == DEFAULT_GPA_SCALE:
        return gpa
    return min(DEFAULT_GPA_SCALE, round(gpa / scale * DEFAULT_GPA_SCALE, 2))


def _range(
    value: Optional[float],
    spread: float,
    bounds: Tuple[float, float]
) -> Tuple[Optional[float], Optional[float]]:
    if value is None:
        return None, None
    low, high = bounds
    return (
        round(max(low, value - spread), 2),
        round(min(high, value + spread), 2),
    )


def _as_int(value: Optional[float]) -> Optional[int]:
    return int(value) if value is not None else None


def _first(*values):
    for value in values:
        if value is not None:
            return value
    return None
