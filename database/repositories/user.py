import logging
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import select

from database.models import User
from database.repositories.base import BaseRepository, to_uuid

logger = logging.getLogger(__name__)

PREFERENCE_FIELDS = ('learning_style', 'collaboration_preference', 'mentorship_type', 'career_goals')


class UserRepository(BaseRepository):
    def get_by_id(self, user_id: Any) -> Optional[User]:
        stmt = select(User).where(User.id == to_uuid(user_id))
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_many(self, user_ids: Iterable[Any]) -> Dict[str, User]:
        """Users keyed by their string id; unknown ids are simply absent."""
        ids = [to_uuid(user_id) for user_id in user_ids]
        if not ids:
            return {}
        stmt = select(User).where(User.id.in_(ids))
        return {str(user.id): user for user in self.db.execute(stmt).scalars().all()}

    def list_users(self, exclude_user_id: Any = None) -> List[User]:
        stmt = select(User).order_by(User.created_at, User.id)
        if exclude_user_id is not None:
            stmt = stmt.where(User.id != to_uuid(exclude_user_id))
        return self.db.execute(stmt).scalars().all()

    def create_user(
        self,
        email: str,
        full_name: Optional[str] = None,
        user_id: Any = None,
        **preferences
    ) -> User:
        user = User(email=email, full_name=full_name)
        if user_id is not None:
            user.id = to_uuid(user_id)
        for key, value in preferences.items():
            if key in PREFERENCE_FIELDS:
                setattr(user, key, value)
        self.db.add(user)
        self.db.flush()
        logger.info(f"Created user {user.id}")
        return user

    def update_preferences(self, user: User, **preferences) -> User:
        for key, value in preferences.items():
            if key in PREFERENCE_FIELDS and value is not None:
                setattr(user, key, value)
        self.db.flush()
        return user
