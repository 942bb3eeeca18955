import logging
from typing import Any, List, Optional

from sqlalchemy import select, update, func

from database.models import Notification
from database.repositories.base import BaseRepository, to_uuid

logger = logging.getLogger(__name__)


class NotificationRepository(BaseRepository):
    def create(
        self,
        user_id: Any,
        type: str,
        title: str,
        message: str,
        related_id: Any = None
    ) -> Notification:
        notification = Notification(
            user_id=to_uuid(user_id),
            type=type,
            title=title,
            message=message,
            related_id=to_uuid(related_id),
            is_read=False
        )
        self.db.add(notification)
        self.db.flush()
        return notification

    def get_for_user(self, notification_id: Any, user_id: Any) -> Optional[Notification]:
        stmt = select(Notification).where(
            Notification.id == to_uuid(notification_id),
            Notification.user_id == to_uuid(user_id)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_for_user(
        self,
        user_id: Any,
        limit: int = 20,
        offset: int = 0,
        unread_only: bool = False
    ) -> List[Notification]:
        stmt = select(Notification).where(Notification.user_id == to_uuid(user_id))
        if unread_only:
            stmt = stmt.where(Notification.is_read.is_(False))
        stmt = stmt.order_by(Notification.created_at.desc(), Notification.id).limit(limit).offset(offset)
        return self.db.execute(stmt).scalars().all()

    def count_for_user(self, user_id: Any, unread_only: bool = False) -> int:
        stmt = select(func.count(Notification.id)).where(Notification.user_id == to_uuid(user_id))
        if unread_only:
            stmt = stmt.where(Notification.is_read.is_(False))
        return self.db.execute(stmt).scalar_one()

    def count_unread(self, user_id: Any) -> int:
        return self.count_for_user(user_id, unread_only=True)

    def mark_read(self, notification: Notification) -> Notification:
        notification.is_read = True
        self.db.flush()
        return notification

    def mark_all_read(self, user_id: Any) -> int:
        result = self.db.execute(
            update(Notification).where(
                Notification.user_id == to_uuid(user_id),
                Notification.is_read.is_(False)
            ).values(is_read=True)
        )
        return result.rowcount or 0
