"""
Access Tier Gate

Caps what non-premium callers see of a ranked discovery result set.
Runs strictly after ranking and before pagination so the cap always keeps
the best matches.
"""

import logging
from typing import List, Optional, Tuple, Union

from .contracts import MatchResult, Restriction
from .constants import (
    AccessTier,
    RESTRICTED_RESULT_COUNT,
    RESTRICTION_MESSAGES,
    RestrictionReason,
    UNRESTRICTED_TIERS,
)

logger = logging.getLogger(__name__)


def resolve_tier(tier: Union[AccessTier, str, None]) -> AccessTier:
    """Unknown or missing tiers are treated as FREE."""
    if isinstance(tier, AccessTier):
        return tier
    try:
        return AccessTier(str(tier).upper())
    except ValueError:
        return AccessTier.FREE


def restriction_reason(
    access_tier: Union[AccessTier, str, None],
    is_anonymous: bool
) -> Optional[RestrictionReason]:
    """Why a caller is capped, or None for unrestricted callers. Anonymity wins."""
    if is_anonymous:
        return RestrictionReason.ANONYMOUS_USER
    if resolve_tier(access_tier) in UNRESTRICTED_TIERS:
        return None
    return RestrictionReason.FREE_TIER


def apply_access_tier(
    ranked: List[MatchResult],
    access_tier: Union[AccessTier, str, None],
    is_anonymous: bool
) -> Tuple[List[MatchResult], Optional[Restriction]]:
    """
    Apply the tier cap to a ranked list.

    Args:
        ranked: Results already in final order
        access_tier: Caller's tier (ADMIN, PREMIUM, USER, FREE)
        is_anonymous: True when no authenticated identity exists

    Returns:
        (visible results, restriction metadata or None)
    """
    reason = restriction_reason(access_tier, is_anonymous)
    if reason is None:
        return list(ranked), None

    visible = ranked[:RESTRICTED_RESULT_COUNT]
    restriction = Restriction(
        reason=reason,
        message=RESTRICTION_MESSAGES[reason].format(
            showing=len(visible), total=len(ranked)
        ),
        actual_total=len(ranked),
        showing=len(visible),
    )
    logger.info(f"🔒 Tier gate ({reason.value}): showing {len(visible)}/{len(ranked)}")
    return visible, restriction
