#!/usr/bin/env python3
"""
Match Finder Service - rank potential buddies for a user.

For the searching user:
1. Load their rubric scores (none -> "needs analysis" result)
2. Score every other user that has rubric scores
3. Sort by compatibility and keep the top ``top_k``

The finder knows nothing about match requests or connections; callers
apply core.matcher.filters.exclude_engaged_candidates to its output.
"""
from typing import List, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError

from core.access import AccessContext
from core.config_loader import MatchingConfig
from core.exceptions import DataStoreError
from core.compatibility import calculate_compatibility, generate_match_reason
from core.matcher.dto import MatchCandidate, MatchedUserDTO, MatchSearchResult
from database.repositories import UserRepository, RubricScoreRepository

logger = logging.getLogger(__name__)


class MatchFinderService:
    """
    Ranks every other user against the searching user.

    Candidate score reads happen with service scope, since they touch
    rows owned by other users.
    """

    def __init__(
        self,
        users: UserRepository,
        scores: RubricScoreRepository,
        config: Optional[MatchingConfig] = None
    ):
        self.users = users
        self.scores = scores
        self.config = config or MatchingConfig()

    def find_matches(self, access: AccessContext, top_k: Optional[int] = None) -> MatchSearchResult:
        """
        Find the best matches for the acting user.

        Args:
            access: Context of the searching user
            top_k: Override for the configured result cap

        Returns:
            MatchSearchResult, sorted by compatibility_score descending
        """
        user_id = access.require_user()
        limit = top_k or self.config.top_k

        try:
            target_scores = self.scores.get_scores(user_id, access)
        except SQLAlchemyError as e:
            raise DataStoreError(f"Failed to load rubric scores for user {user_id}") from e

        if not target_scores:
            logger.info(f"User {user_id} has no rubric scores; analysis needed before matching")
            return MatchSearchResult(needs_analysis=True)

        try:
            candidates = self.users.list_users(exclude_user_id=user_id)
        except SQLAlchemyError as e:
            raise DataStoreError("Failed to list candidate users") from e

        service_access = access.as_service()
        matches: List[MatchCandidate] = []
        skipped = 0

        for candidate in candidates:
            candidate_id = str(candidate.id)
            try:
                with self.scores.savepoint():
                    candidate_scores = self.scores.get_scores(candidate_id, service_access)
            except SQLAlchemyError as e:
                logger.warning(f"Skipping candidate {candidate_id}: failed to load scores: {e}")
                skipped += 1
                continue

            if not candidate_scores:
                continue

            result = calculate_compatibility(target_scores, candidate_scores, self.config.weights)
            matches.append(MatchCandidate(
                match_id=candidate_id,
                matched_user=MatchedUserDTO.from_orm(candidate),
                compatibility_score=result.overall,
                match_details=result.to_dict(),
                match_reason=generate_match_reason(result)
            ))

        # list.sort is stable, so equal scores keep candidate order
        matches.sort(key=lambda m: m.compatibility_score, reverse=True)

        logger.info(
            f"Scored {len(matches)} of {len(candidates)} candidates for user {user_id} "
            f"({skipped} skipped), returning top {min(limit, len(matches))}"
        )

        return MatchSearchResult(
            matches=matches[:limit],
            candidates_considered=len(candidates),
            candidates_skipped=skipped
        )
