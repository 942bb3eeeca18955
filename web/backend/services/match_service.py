#!/usr/bin/env python3
"""
Match service - match search and the derived matches view.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.access import AccessContext
from core.config_loader import MatchingConfig
from core.exceptions import DataStoreError
from core.matcher import MatchFinderService, MatchCandidate, exclude_engaged_candidates
from database.models import MatchRequest
from database.repositories import (
    UserRepository,
    RubricScoreRepository,
    MatchRequestRepository,
    ConnectionRepository,
)
from ..models.responses import (
    FindMatchesResponse,
    MatchCandidateResponse,
    MatchesResponse,
    MatchView,
    MatchedUser,
)
from ..utils import safe_datetime_iso, user_profile_dict

logger = logging.getLogger(__name__)


class MatchService:
    """Service for finding and listing matches."""

    def __init__(self, db: Session, config: Optional[MatchingConfig] = None):
        self.db = db
        self.config = config or MatchingConfig()
        self.users = UserRepository(db)
        self.scores = RubricScoreRepository(db)
        self.match_requests = MatchRequestRepository(db)
        self.connections = ConnectionRepository(db)
        self.finder = MatchFinderService(self.users, self.scores, self.config)

    def find_matches(self, access: AccessContext, top_k: Optional[int] = None) -> FindMatchesResponse:
        """
        Run a match search and drop users the caller is already engaged with.

        Args:
            access: Access context of the caller.
            top_k: Maximum number of matches to return.

        Returns:
            FindMatchesResponse with the best remaining candidates.
        """
        user_id = access.require_user()
        limit = top_k or self.config.top_k

        try:
            engaged = self.connections.get_connected_user_ids(user_id)
            engaged |= self.match_requests.get_counterpart_ids(user_id)
        except SQLAlchemyError as e:
            raise DataStoreError("Failed to load existing connections") from e

        # Over-fetch so that filtering still leaves up to ``limit`` candidates
        result = self.finder.find_matches(access, top_k=limit + len(engaged))
        matches = exclude_engaged_candidates(result.matches, engaged)[:limit]
        if result.matches and not matches:
            message = "No new potential matches found"
        elif matches:
            message = f"Found {len(matches)} potential matches"
        else:
            message = result.message

        return FindMatchesResponse(
            success=True,
            message=message,
            needs_analysis=result.needs_analysis,
            matches=[self._to_candidate_response(m) for m in matches]
        )

    def get_matches(self, access: AccessContext) -> MatchesResponse:
        """Matches derived from every request the caller sent or received."""
        user_id = access.require_user()
        try:
            requests = self.match_requests.list_for_user(user_id)
            counterpart_ids = [self._counterpart_id(r, user_id) for r in requests]
            users = self.users.get_many(counterpart_ids)
        except SQLAlchemyError as e:
            raise DataStoreError("Failed to load matches") from e

        views = []
        for request, counterpart_id in zip(requests, counterpart_ids):
            views.append(MatchView(
                request_id=str(request.id),
                matched_user=MatchedUser(**user_profile_dict(users.get(counterpart_id), counterpart_id)),
                compatibility_score=request.compatibility_score,
                match_reason=request.match_reason,
                match_details=request.match_details,
                status=request.status,
                direction="outgoing" if str(request.sender_id) == user_id else "incoming",
                created_at=safe_datetime_iso(request.created_at)
            ))

        views.sort(key=lambda v: v.compatibility_score, reverse=True)
        return MatchesResponse(success=True, count=len(views), matches=views)

    @staticmethod
    def _counterpart_id(request: MatchRequest, user_id: str) -> str:
        if str(request.sender_id) == user_id:
            return str(request.receiver_id)
        return str(request.sender_id)

    @staticmethod
    def _to_candidate_response(candidate: MatchCandidate) -> MatchCandidateResponse:
        return MatchCandidateResponse(**candidate.to_dict())
