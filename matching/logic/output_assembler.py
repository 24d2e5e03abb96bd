"""
Output Assembler

Slices ranked results into pages and builds the DiscoveryResponse.
"""

import math
from typing import List, Optional, Tuple

from .contracts import (
    AppliedFilters,
    DiscoveryResponse,
    MatchResult,
    Pagination,
    Restriction,
)


def paginate(
    results: List[MatchResult],
    page: int,
    limit: int
) -> Tuple[List[MatchResult], Pagination]:
    """
    Return (page slice, Pagination) for the given page and page size.
    Empty input yields zeroed metadata.
    """
    total = len(results)
    total_pages = math.ceil(total / limit) if total else 0
    skip = (page - 1) * limit

    pagination = Pagination(
        current_page=page,
        total_pages=total_pages,
        total_results=total,
        limit=limit,
        has_next_page=page < total_pages,
        has_previous_page=page > 1,
    )
    return results[skip:skip + limit], pagination


def assemble_discovery_response(
    visible: List[MatchResult],
    page: int,
    limit: int,
    applied_filters: int = 0,
    restricted: Optional[Restriction] = None
) -> DiscoveryResponse:
    """
    Build the discovery response.

    When the tier gate capped the results, the visible set is the whole
    answer: one page, no next page, total equal to what is shown.
    """
    if restricted is not None:
        shown = visible[:limit]
        pagination = Pagination(
            current_page=1,
            total_pages=1 if shown else 0,
            total_results=restricted.showing,
            limit=limit,
            has_next_page=False,
            has_previous_page=False,
        )
        return DiscoveryResponse(
            results=shown,
            pagination=pagination,
            filters=AppliedFilters(applied=applied_filters),
            restricted=restricted,
        )

    page_items, pagination = paginate(visible, page, limit)
    return DiscoveryResponse(
        results=page_items,
        pagination=pagination,
        filters=AppliedFilters(applied=applied_filters),
    )
