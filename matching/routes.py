"""
Matching API Routes

Exposes the matching engine via REST API:
- POST /matching/match
- GET  /matching/recommendations/{user_id}
- POST /matching/search
- GET  /matching/criteria/{user_id}
"""

import logging
import traceback
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from db import get_db
from utils.auth_utils import Caller, resolve_caller
from .logic.adapter import SqlCandidateStore, SqlProfileRepository
from .logic.contracts import DiscoveryCriteria, MatchRequest
from .logic.engine import MatchingEngine
from .logic.exceptions import SubjectNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/matching", tags=["matching"])


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_matching_engine(db_session=Depends(get_db)):
    """One engine per request, bound to that request's session."""
    db: Session
    with db_session as db:
        yield MatchingEngine(SqlCandidateStore(db), SqlProfileRepository(db))


def get_caller(authorization: Optional[str] = Header(default=None)) -> Caller:
    return resolve_caller(authorization)


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("/match", summary="Match universities to a student profile")
def match(
    request: MatchRequest,
    engine: MatchingEngine = Depends(get_matching_engine)
):
    """
    Rank universities for an explicit student profile.

    **Request Body:** `MatchRequest` (camelCase accepted)

    **Response:** up to 20 results with match percentage, breakdown and reasons
    """
    try:
        results = engine.find_matches(request)
        return {
            "matches": [r.model_dump(mode="json", by_alias=True) for r in results],
            "count": len(results),
        }
    except HTTPException:
        raise
    except Exception as e:
        return _server_error(e)


@router.get("/recommendations/{user_id}", summary="Recommended universities for a user")
def recommendations(
    user_id: str,
    engine: MatchingEngine = Depends(get_matching_engine)
):
    try:
        results = engine.get_recommended_universities(user_id)
        return {
            "matches": [r.model_dump(mode="json", by_alias=True) for r in results],
            "count": len(results),
        }
    except SubjectNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        return _server_error(e)


@router.post("/search", summary="Discovery search")
def search(
    criteria: DiscoveryCriteria,
    caller: Caller = Depends(get_caller),
    engine: MatchingEngine = Depends(get_matching_engine)
):
    """
    Filtered, sorted and paginated discovery search.

    Anonymous and free-tier callers see the top 3 results only; the
    `restricted` block says how many matched in total.
    """
    try:
        response = engine.search_universities(
            criteria,
            access_tier=caller.tier,
            is_anonymous=caller.is_anonymous,
        )
        return response.model_dump(mode="json", by_alias=True)
    except HTTPException:
        raise
    except Exception as e:
        return _server_error(e)


@router.get("/criteria/{user_id}", summary="Initial discovery criteria for a user")
def initial_criteria(
    user_id: str,
    engine: MatchingEngine = Depends(get_matching_engine)
):
    try:
        criteria = engine.get_initial_criteria(user_id)
        return criteria.model_dump(mode="json", by_alias=True)
    except HTTPException:
        raise
    except Exception as e:
        return _server_error(e)


def _server_error(e: Exception) -> JSONResponse:
    logger.exception("Matching request failed")
    return JSONResponse(
        status_code=500,
        content={"error": str(e), "trace": traceback.format_exc()}
    )


# =============================================================================
# HEALTH CHECK
# =============================================================================

@router.get("/health", summary="Matching engine health check")
def health_check():
    """Check if matching engine is operational."""
    return {"status": "ok", "engine": "matching", "version": "1.0.0"}
