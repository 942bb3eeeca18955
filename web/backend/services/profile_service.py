#!/usr/bin/env python3
"""
Profile service - rubric scores and matching preferences.
"""

import logging
from typing import Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.access import AccessContext
from core.compatibility import (
    RubricScoreEntry,
    ScoreCategory,
    Skill,
    Preferences,
    build_personal_scores,
    build_technical_scores,
    parse_metadata,
)
from core.exceptions import DataStoreError, UserNotFoundError, ValidationError
from database.repositories import RubricScoreRepository, UserRepository
from ..models.requests import PreferencesUpdate, ReplaceScoresRequest, SkillsUpdate
from ..models.responses import (
    BuddyProfile,
    PreferencesResponse,
    ReplaceScoresResponse,
    RubricScoreItem,
    ScoresResponse,
    SkillsResponse,
)
from ..utils import commit_session, user_profile_dict

logger = logging.getLogger(__name__)


class ProfileService:
    """Service for a user's own rubric scores and preferences."""

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)
        self.scores = RubricScoreRepository(db)

    def get_scores(self, access: AccessContext) -> ScoresResponse:
        user_id = access.require_user()
        try:
            entries = self.scores.get_scores(user_id, access)
        except SQLAlchemyError as e:
            raise DataStoreError("Failed to load rubric scores") from e

        grouped: Dict[str, Dict[str, RubricScoreItem]] = {c.value: {} for c in ScoreCategory}
        for entry in entries:
            grouped[entry.category.value][entry.subcategory] = self._to_item(entry)
        return ScoresResponse(success=True, scores=grouped)

    def replace_scores(
        self,
        access: AccessContext,
        category: str,
        body: ReplaceScoresRequest
    ) -> ReplaceScoresResponse:
        user_id = access.require_user()
        try:
            score_category = ScoreCategory(category)
        except ValueError:
            raise ValidationError(
                f"Unknown score category: {category}",
                details={"valid_categories": [c.value for c in ScoreCategory]}
            )

        subcategories = [s.subcategory for s in body.scores]
        if len(subcategories) != len(set(subcategories)):
            raise ValidationError("Each subcategory may appear only once per category")

        entries = [
            RubricScoreEntry(
                user_id=user_id,
                category=score_category,
                subcategory=s.subcategory,
                score=s.score,
                metadata=parse_metadata(s.subcategory, s.metadata)
            )
            for s in body.scores
        ]
        saved = self._replace(access, user_id, score_category, entries)
        commit_session(self.db)

        return ReplaceScoresResponse(
            success=True,
            category=score_category.value,
            scores=[self._to_item(e) for e in saved]
        )

    def update_preferences(self, access: AccessContext, body: PreferencesUpdate) -> PreferencesResponse:
        """Update preferences, then rebuild the personal_attributes scores from them."""
        user_id = access.require_user()
        user = self._get_user(user_id)

        try:
            self.users.update_preferences(user, **body.model_dump(exclude_none=True))
        except SQLAlchemyError as e:
            raise DataStoreError("Failed to update preferences") from e

        preferences = Preferences(
            learning_style=user.learning_style,
            collaboration_preference=user.collaboration_preference,
            mentorship_type=user.mentorship_type
        )
        saved = self._replace(
            access, user_id, ScoreCategory.PERSONAL_ATTRIBUTES, build_personal_scores(preferences)
        )
        commit_session(self.db)

        logger.info(f"Updated preferences for user {user_id}")
        return PreferencesResponse(
            success=True,
            message="Preferences updated successfully",
            profile=BuddyProfile(**user_profile_dict(user, user_id, include_career_goals=True)),
            personal_scores=[self._to_item(e) for e in saved]
        )

    def update_skills(self, access: AccessContext, body: SkillsUpdate) -> SkillsResponse:
        """Replace the technical_skills scores with ones derived from ``body.skills``."""
        user_id = access.require_user()
        self._get_user(user_id)

        skills = [Skill(s.skill_name, s.skill_type, s.proficiency_level) for s in body.skills]
        saved = self._replace(access, user_id, ScoreCategory.TECHNICAL_SKILLS, build_technical_scores(skills))
        commit_session(self.db)

        return SkillsResponse(
            success=True,
            message=f"Updated technical scores from {len(skills)} skills",
            technical_scores=[self._to_item(e) for e in saved]
        )

    def _get_user(self, user_id: str):
        try:
            user = self.users.get_by_id(user_id)
        except SQLAlchemyError as e:
            raise DataStoreError("Failed to load user profile") from e
        if not user:
            raise UserNotFoundError(f"User {user_id} not found")
        return user

    def _replace(
        self,
        access: AccessContext,
        user_id: str,
        category: ScoreCategory,
        entries: List[RubricScoreEntry]
    ) -> List[RubricScoreEntry]:
        try:
            return self.scores.replace_scores(user_id, category, entries, access)
        except SQLAlchemyError as e:
            raise DataStoreError(f"Failed to save {category.value} scores") from e

    @staticmethod
    def _to_item(entry: RubricScoreEntry) -> RubricScoreItem:
        return RubricScoreItem(
            category=entry.category.value,
            subcategory=entry.subcategory,
            score=entry.score,
            metadata=entry.metadata.model_dump()
        )
