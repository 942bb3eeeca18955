import logging
from typing import Any, Iterable, List

from sqlalchemy import select, delete

from core.access import AccessContext
from core.compatibility.models import RubricScoreEntry, ScoreCategory, parse_metadata
from database.models import RubricScore
from database.repositories.base import BaseRepository, to_uuid

logger = logging.getLogger(__name__)


class RubricScoreRepository(BaseRepository):
    """Score Store accessor: rubric rows for one user at a time."""

    def get_scores(self, user_id: Any, access: AccessContext) -> List[RubricScoreEntry]:
        access.require_access(user_id)
        stmt = select(RubricScore).where(
            RubricScore.user_id == to_uuid(user_id)
        ).order_by(RubricScore.category, RubricScore.subcategory, RubricScore.created_at)
        rows = self.db.execute(stmt).scalars().all()
        return [self._to_entry(row) for row in rows]

    def replace_scores(
        self,
        user_id: Any,
        category: ScoreCategory,
        scores: Iterable[RubricScoreEntry],
        access: AccessContext
    ) -> List[RubricScoreEntry]:
        """Delete every row of ``category`` for the user, then insert ``scores``."""
        access.require_access(user_id)
        category = ScoreCategory(category)
        uid = to_uuid(user_id)

        self.db.execute(
            delete(RubricScore).where(
                RubricScore.user_id == uid,
                RubricScore.category == category.value
            )
        )

        rows = []
        for entry in scores:
            rows.append(RubricScore(
                user_id=uid,
                category=category.value,
                subcategory=entry.subcategory,
                score=entry.score,
                score_metadata=entry.metadata.model_dump()
            ))
        self.db.add_all(rows)
        self.db.flush()

        logger.info(f"Replaced {len(rows)} {category.value} scores for user {user_id}")
        return [self._to_entry(row) for row in rows]

    @staticmethod
    def _to_entry(row: RubricScore) -> RubricScoreEntry:
        return RubricScoreEntry(
            user_id=str(row.user_id),
            category=row.category,
            subcategory=row.subcategory,
            score=row.score,
            metadata=parse_metadata(row.subcategory, row.score_metadata)
        )
