#!/usr/bin/env python3
"""
Notification service wrapper for the web application.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from core.access import AccessContext
from core.config_loader import NotificationConfig
from database.models import Notification
from database.repositories import NotificationRepository
from notification import NotificationService
from ..models.responses import (
    NotificationItem,
    NotificationsResponse,
    NotificationReadResponse,
    NotificationsReadAllResponse,
    Pagination,
)
from ..utils import commit_session, safe_datetime_iso

logger = logging.getLogger(__name__)


class NotificationServiceWrapper:
    """Wrapper for NotificationService with database session."""

    def __init__(self, db: Session, config: Optional[NotificationConfig] = None):
        self.db = db
        self.notification_service = NotificationService(NotificationRepository(db), config)

    def list_notifications(
        self,
        access: AccessContext,
        page: int = 1,
        limit: Optional[int] = None,
        unread_only: bool = False
    ) -> NotificationsResponse:
        """
        Get a page of the caller's notifications, newest first.

        Args:
            access: Access context of the caller.
            page: 1-based page number.
            limit: Page size (capped by configuration).
            unread_only: Only return unread notifications.

        Returns:
            NotificationsResponse with items, unread count and pagination.
        """
        result = self.notification_service.list_notifications(
            access, page=page, limit=limit, unread_only=unread_only
        )
        return NotificationsResponse(
            success=True,
            notifications=[self._to_item(n) for n in result.items],
            unread_count=result.unread_count,
            pagination=Pagination(
                page=result.page,
                limit=result.limit,
                total=result.total,
                has_more=result.has_more
            )
        )

    def mark_read(self, access: AccessContext, notification_id: str) -> NotificationReadResponse:
        notification = self.notification_service.mark_read(access, notification_id)
        commit_session(self.db)
        return NotificationReadResponse(
            success=True,
            message="Notification marked as read",
            notification=self._to_item(notification)
        )

    def mark_all_read(self, access: AccessContext) -> NotificationsReadAllResponse:
        count = self.notification_service.mark_all_read(access)
        commit_session(self.db)
        return NotificationsReadAllResponse(
            success=True,
            message="All notifications marked as read",
            updated=count
        )

    @staticmethod
    def _to_item(notification: Notification) -> NotificationItem:
        return NotificationItem(
            id=str(notification.id),
            type=notification.type,
            title=notification.title,
            message=notification.message,
            related_id=str(notification.related_id) if notification.related_id else None,
            is_read=notification.is_read,
            created_at=safe_datetime_iso(notification.created_at)
        )
