"""
Notification Module

In-app notifications written as side effects of match request transitions.

Usage:
    from notification import NotificationService

    service = NotificationService(NotificationRepository(db))
    service.notify_match_rejected(access.as_service(), sender_id, "Ada", request_id)
"""

from notification.message_builder import (
    NotificationType,
    NotificationContent,
    NotificationMessageBuilder,
)

from notification.service import (
    NotificationService,
    NotificationPage,
)

__all__ = [
    'NotificationType',
    'NotificationContent',
    'NotificationMessageBuilder',
    'NotificationService',
    'NotificationPage',
]
