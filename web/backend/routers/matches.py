#!/usr/bin/env python3
"""
Match endpoints - find and list buddy matches.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from core.access import AccessContext
from ..config import get_config
from ..dependencies import get_db, get_access_context
from ..services.match_service import MatchService
from ..models.responses import FindMatchesResponse, MatchesResponse

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/api/matches", tags=["matches"])


def add_rate_limit_handlers(app):
    """Add rate limit exception handlers to the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": f"Rate limit exceeded: {exc.detail}",
            "type": "RateLimitExceeded"
        }
    )


def get_match_service(db: Session = Depends(get_db)) -> MatchService:
    """Dependency to get match service."""
    return MatchService(db, get_config().matching)


@router.post("/find", response_model=FindMatchesResponse)
@limiter.limit(get_config().matching.find_rate_limit)
def find_matches(
    request: Request,
    top_k: Optional[int] = Query(default=None, ge=1, le=50, description="Maximum matches to return"),
    access: AccessContext = Depends(get_access_context),
    match_service: MatchService = Depends(get_match_service)
):
    """
    Find potential buddies for the caller.

    Candidates the caller is already connected to, or has a match request
    with in any status, are left out. Returns at most ``top_k`` matches
    (default from configuration), best first.
    """
    return match_service.find_matches(access, top_k=top_k)


@router.get("", response_model=MatchesResponse)
def get_matches(
    access: AccessContext = Depends(get_access_context),
    match_service: MatchService = Depends(get_match_service)
):
    """
    List the caller's matches, derived from the match requests they sent
    or received, best score first.
    """
    return match_service.get_matches(access)
