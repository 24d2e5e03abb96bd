"""
Matching Engine

Main orchestrator that combines filtering, scoring, ranking, tier gating
and pagination into the three public entry points.

Pipeline flow:
1. Candidate lookup - structural filters pushed to the Candidate Store
2. Filters - strict dealbreakers, onboarding relevance, reach exclusion
3. Scoring - five category scorers per candidate
4. Aggregation - weighted match percentage with breakdown
5. Ranking - sort key, stable
6. Tier gate + pagination (discovery only)
"""

import logging
import time
from typing import List, Optional, Union

from .adapter import CandidateStore, ProfileRepository
from .access_gate import apply_access_tier
from .aggregator import aggregate_scores, batch_aggregate, weights_from_discovery, weights_from_importance
from .candidate_filter import (
    apply_dealbreakers,
    apply_onboarding_relevance,
    exclude_reach_schools,
    query_from_criteria,
    query_from_match_request,
)
from .contracts import (
    AcademicProfileSnapshot,
    CandidateUniversity,
    DiscoveryCriteria,
    DiscoveryResponse,
    FinancialProfileSnapshot,
    ImportanceFactors,
    MatchRequest,
    MatchResult,
    UserSnapshot,
)
from .criteria import build_initial_criteria, preferred_major, to_four_point
from .exceptions import SubjectNotFoundError
from .output_assembler import assemble_discovery_response
from .ranker import rank_results, top_matches
from .constants import (
    AccessTier,
    MAX_MATCH_RESULTS,
    RECOMMENDATION_ACADEMIC_IMPORTANCE,
)

logger = logging.getLogger(__name__)


class MatchingEngine:
    """
    Stateless matching engine. All I/O goes through the two collaborators.
    """

    def __init__(
        self,
        candidate_store: CandidateStore,
        profile_repository: Optional[ProfileRepository] = None
    ):
        """
        Args:
            candidate_store: Source of candidate universities
            profile_repository: Profile lookups; required for the
                recommendation and initial-criteria entry points
        """
        self.candidate_store = candidate_store
        self.profile_repository = profile_repository

    # -------------------------------------------------------------------------
    # Direct match
    # -------------------------------------------------------------------------

    def find_matches(
        self,
        profile: MatchRequest,
        academic_profile: Optional[AcademicProfileSnapshot] = None
    ) -> List[MatchResult]:
        """
        Rank candidates for an explicit profile.

        Args:
            profile: Student's match request with importance factors
            academic_profile: Optional enrichment for academic scoring

        Returns:
            Up to 20 results, best match first. No tier gating.
        """
        start_time = time.perf_counter()
        logger.info(f"🚀 Starting match (strict={profile.strict_match})")

        candidates = self.candidate_store.find_candidates(query_from_match_request(profile))
        if profile.strict_match:
            candidates = apply_dealbreakers(candidates, profile)

        weights = weights_from_importance(profile.importance_factors)
        results = top_matches(batch_aggregate(profile, candidates, weights, academic_profile))

        elapsed = (time.perf_counter() - start_time) * 1000
        if not results:
            logger.warning("⚠️ No candidates matched the profile")
        logger.info(f"✅ Match complete: {len(results)} results in {elapsed:.1f}ms")
        return results

    # -------------------------------------------------------------------------
    # Recommendations
    # -------------------------------------------------------------------------

    def get_recommended_universities(self, user_id: str) -> List[MatchResult]:
        """
        Recommendations from stored profiles plus onboarding relevance.

        Raises:
            SubjectNotFoundError: when the user does not exist
        """
        user, academic, financial = self._load_profiles(user_id)
        if user is None:
            raise SubjectNotFoundError(user_id)

        logger.info(f"🚀 Building recommendations for user {user_id}")
        request = build_recommendation_request(user, academic, financial)

        candidates = self.candidate_store.find_candidates(query_from_match_request(request))

        has_explicit_preferences = bool(
            request.preferred_country or request.preferred_setting or request.preferred_climate
        )
        if not request.strict_match and not has_explicit_preferences:
            candidates = apply_onboarding_relevance(
                candidates,
                primary_major=request.preferred_major,
                focus_area=user.focus_area,
                persona_role=user.persona_role,
            )

        weights = weights_from_importance(request.importance_factors)
        results = top_matches(batch_aggregate(request, candidates, weights, academic))

        logger.info(f"✅ Recommendations for {user_id}: {len(results)} results")
        return results

    # -------------------------------------------------------------------------
    # Discovery search
    # -------------------------------------------------------------------------

    def search_universities(
        self,
        criteria: DiscoveryCriteria,
        access_tier: Union[AccessTier, str, None] = AccessTier.FREE,
        is_anonymous: bool = True
    ) -> DiscoveryResponse:
        """
        Filtered, sorted, tier-gated and paginated discovery search.

        Args:
            criteria: Filters, optional profile subset, weights, sort, paging
            access_tier: Caller tier resolved by the auth layer
            is_anonymous: True when no authenticated identity exists

        Returns:
            DiscoveryResponse with pagination and optional restriction
        """
        start_time = time.perf_counter()
        query = query_from_criteria(criteria)
        logger.info(f"🔎 Discovery search: {query.applied_count()} filters, sort={criteria.sort_by.value}")

        candidates = self.candidate_store.find_candidates(query)
        request = request_from_criteria(criteria)

        if criteria.strict_filtering:
            candidates = apply_dealbreakers(candidates, request)

        profile = criteria.user_profile
        if not criteria.include_reach_schools and profile is not None and profile.gpa is not None:
            before = len(candidates)
            candidates = exclude_reach_schools(candidates, profile.gpa)
            logger.info(f"Reach schools excluded: {before - len(candidates)}")

        weights = weights_from_discovery(criteria.weights)
        results = batch_aggregate(request if profile is not None else None, candidates, weights)
        ranked = rank_results(results, criteria.sort_by)

        visible, restricted = apply_access_tier(ranked, access_tier, is_anonymous)
        response = assemble_discovery_response(
            visible,
            page=criteria.page,
            limit=criteria.limit,
            applied_filters=query.applied_count(),
            restricted=restricted,
        )

        elapsed = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"✅ Discovery complete: {len(response.results)} shown of {len(ranked)} in {elapsed:.1f}ms"
        )
        return response

    # -------------------------------------------------------------------------
    # Initial criteria / single scoring
    # -------------------------------------------------------------------------

    def get_initial_criteria(self, user_id: str) -> DiscoveryCriteria:
        """Starting discovery criteria for a user; defaults when nothing is known."""
        user, academic, financial = self._load_profiles(user_id)
        if user is None:
            logger.warning(f"Unknown user {user_id}; returning default criteria")
        return build_initial_criteria(user, academic, financial)

    def score_single_university(
        self,
        profile: MatchRequest,
        candidate: CandidateUniversity,
        academic_profile: Optional[AcademicProfileSnapshot] = None
    ) -> MatchResult:
        """
        Score one university for a student.

        Useful for a detailed breakdown on a school the student is already
        looking at.
        """
        weights = weights_from_importance(profile.importance_factors)
        return aggregate_scores(profile, candidate, weights, academic_profile)

    def _load_profiles(self, user_id: str):
        if self.profile_repository is None:
            raise RuntimeError("MatchingEngine needs a profile repository for user lookups")
        repo = self.profile_repository
        user = repo.get_user(user_id)
        if user is None:
            return None, None, None
        return user, repo.get_academic_profile(user_id), repo.get_financial_profile(user_id)


# =============================================================================
# REQUEST BUILDERS
# =============================================================================

def build_recommendation_request(
    user: UserSnapshot,
    academic: Optional[AcademicProfileSnapshot] = None,
    financial: Optional[FinancialProfileSnapshot] = None
) -> MatchRequest:
    """
    Synthesize a MatchRequest from stored profiles.
    Academics get a higher importance when an academic profile exists.
    """
    gpa = user.gpa
    sat = user.sat_score
    act = user.act_score
    if academic is not None:
        if academic.gpa is not None:
            gpa = to_four_point(academic.gpa, academic.gpa_scale)
        sat = academic.sat_total if academic.sat_total is not None else sat
        act = academic.act_composite if academic.act_composite is not None else act

    budget = financial.max_budget if financial and financial.max_budget is not None else user.max_budget

    factors = None
    if academic is not None:
        factors = ImportanceFactors(academics=RECOMMENDATION_ACADEMIC_IMPORTANCE)

    return MatchRequest(
        gpa=gpa,
        sat_score=sat,
        act_score=act,
        preferred_major=preferred_major(user, academic),
        preferred_country=user.preferred_country,
        max_budget=budget,
        importance_factors=factors,
    )


def request_from_criteria(criteria: DiscoveryCriteria) -> MatchRequest:
    """Scoring profile implied by discovery criteria."""
    profile = criteria.user_profile
    location = criteria.location
    social = criteria.social
    future = criteria.future

    countries = location.countries if location is not None else []
    min_visa = future.min_visa_months if future is not None else None

    return MatchRequest(
        gpa=profile.gpa if profile else None,
        sat_score=profile.sat if profile else None,
        act_score=profile.act if profile else None,
        preferred_major=profile.preferred_major if profile else None,
        max_budget=profile.max_budget if profile else None,
        preferred_country=countries[0] if len(countries) == 1 else None,
        preferred_setting=location.setting if location is not None else None,
        preferred_climate=location.climate if location is not None else None,
        min_safety_rating=social.min_safety_rating if social is not None else None,
        needs_visa_support=min_visa is not None,
        min_visa_months=min_visa,
        strict_match=criteria.strict_filtering,
    )
