#!/usr/bin/env python3
"""
Notification Service - in-app notifications for match request transitions.

Notifications are side effects: ``notify`` writes inside a savepoint and
logs failures instead of raising, so a failed notification never undoes
the transition that triggered it.

Usage:
    from notification.service import NotificationService

    service = NotificationService(NotificationRepository(db))
    service.notify_match_request(access.as_service(), receiver_id, "Ada", request_id)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from core.access import AccessContext
from core.config_loader import NotificationConfig
from core.exceptions import NotificationNotFoundError, ServiceException, DataStoreError
from database.models import Notification
from database.repositories import NotificationRepository
from notification.message_builder import (
    NotificationContent,
    NotificationMessageBuilder,
    ACCEPTOR_FALLBACK_NAME,
    SENDER_FALLBACK_NAME,
)

logger = logging.getLogger(__name__)


@dataclass
class NotificationPage:
    items: List[Notification] = field(default_factory=list)
    unread_count: int = 0
    page: int = 1
    limit: int = 20
    total: int = 0

    @property
    def has_more(self) -> bool:
        return self.page * self.limit < self.total


class NotificationService:
    """Writes and reads in-app notifications."""

    def __init__(self, repo: NotificationRepository, config: Optional[NotificationConfig] = None):
        self.repo = repo
        self.config = config or NotificationConfig()

    def create_notification(
        self,
        access: AccessContext,
        user_id: Any,
        content: NotificationContent,
        related_id: Any = None
    ) -> Notification:
        access.require_access(user_id)
        notification = self.repo.create(
            user_id=user_id,
            type=content.type.value,
            title=content.title,
            message=content.message,
            related_id=related_id
        )
        logger.info(f"Created {content.type.value} notification {notification.id} for user {user_id}")
        return notification

    def notify(
        self,
        access: AccessContext,
        user_id: Any,
        content: NotificationContent,
        related_id: Any = None
    ) -> Optional[Notification]:
        """Create a notification, logging and swallowing any failure."""
        if not self.config.enabled:
            logger.debug(f"Notifications disabled, skipping {content.type.value} for user {user_id}")
            return None

        try:
            with self.repo.savepoint():
                return self.create_notification(access, user_id, content, related_id)
        except (SQLAlchemyError, ServiceException) as e:
            logger.error(
                f"Failed to create {content.type.value} notification for user {user_id}: {e}",
                exc_info=True
            )
            return None

    def notify_match_request(
        self,
        access: AccessContext,
        receiver_id: Any,
        sender_name: Optional[str],
        request_id: Any
    ) -> Optional[Notification]:
        return self.notify(
            access, receiver_id, NotificationMessageBuilder.match_request(sender_name), request_id
        )

    def notify_match_confirmed(
        self,
        access: AccessContext,
        acceptor_id: Any,
        acceptor_name: Optional[str],
        sender_id: Any,
        sender_name: Optional[str],
        connection_id: Any
    ) -> List[Notification]:
        """Tell both parties about a new connection."""
        created = [
            self.notify(
                access, acceptor_id,
                NotificationMessageBuilder.match_confirmed(sender_name or SENDER_FALLBACK_NAME),
                connection_id
            ),
            self.notify(
                access, sender_id,
                NotificationMessageBuilder.match_confirmed(acceptor_name or ACCEPTOR_FALLBACK_NAME),
                connection_id
            ),
        ]
        return [n for n in created if n is not None]

    def notify_match_rejected(
        self,
        access: AccessContext,
        sender_id: Any,
        receiver_name: Optional[str],
        request_id: Any
    ) -> Optional[Notification]:
        return self.notify(
            access, sender_id, NotificationMessageBuilder.match_rejected(receiver_name), request_id
        )

    def list_notifications(
        self,
        access: AccessContext,
        page: int = 1,
        limit: Optional[int] = None,
        unread_only: bool = False
    ) -> NotificationPage:
        user_id = access.require_user()
        page = max(1, page)
        limit = limit or self.config.default_page_size
        limit = max(1, min(limit, self.config.max_page_size))

        try:
            items = self.repo.list_for_user(
                user_id, limit=limit, offset=(page - 1) * limit, unread_only=unread_only
            )
            total = self.repo.count_for_user(user_id, unread_only=unread_only)
            unread_count = self.repo.count_unread(user_id)
        except SQLAlchemyError as e:
            raise DataStoreError(f"Failed to load notifications for user {user_id}") from e

        return NotificationPage(
            items=items, unread_count=unread_count, page=page, limit=limit, total=total
        )

    def mark_read(self, access: AccessContext, notification_id: Any) -> Notification:
        user_id = access.require_user()
        try:
            notification = self.repo.get_for_user(notification_id, user_id)
        except SQLAlchemyError as e:
            raise DataStoreError(f"Failed to load notification {notification_id}") from e

        if not notification:
            raise NotificationNotFoundError(f"Notification {notification_id} not found")

        try:
            return self.repo.mark_read(notification)
        except SQLAlchemyError as e:
            raise DataStoreError(f"Failed to mark notification {notification_id} read") from e

    def mark_all_read(self, access: AccessContext) -> int:
        user_id = access.require_user()
        try:
            count = self.repo.mark_all_read(user_id)
        except SQLAlchemyError as e:
            raise DataStoreError(f"Failed to mark notifications read for user {user_id}") from e
        logger.info(f"Marked {count} notifications read for user {user_id}")
        return count
