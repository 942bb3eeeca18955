#!/usr/bin/env python3
"""
Notification endpoints - read and mark in-app notifications.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.access import AccessContext
from ..config import get_config
from ..dependencies import get_db, get_access_context
from ..services.notification_service import NotificationServiceWrapper
from ..models.responses import (
    NotificationsResponse,
    NotificationReadResponse,
    NotificationsReadAllResponse,
)
from ..utils import validate_uuid

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


def get_notification_service(db: Session = Depends(get_db)) -> NotificationServiceWrapper:
    """Dependency to get notification service."""
    return NotificationServiceWrapper(db, get_config().notifications)


@router.get("", response_model=NotificationsResponse)
def get_notifications(
    page: int = Query(default=1, ge=1),
    limit: Optional[int] = Query(default=None, ge=1),
    unread: bool = Query(default=False, description="Only unread notifications"),
    access: AccessContext = Depends(get_access_context),
    notification_service: NotificationServiceWrapper = Depends(get_notification_service)
):
    """Get the caller's notifications, newest first, with the unread count."""
    return notification_service.list_notifications(access, page=page, limit=limit, unread_only=unread)


@router.put("/read-all", response_model=NotificationsReadAllResponse)
def mark_all_notifications_read(
    access: AccessContext = Depends(get_access_context),
    notification_service: NotificationServiceWrapper = Depends(get_notification_service)
):
    """Mark every notification of the caller as read."""
    return notification_service.mark_all_read(access)


@router.put("/{notification_id}/read", response_model=NotificationReadResponse)
def mark_notification_read(
    notification_id: str,
    access: AccessContext = Depends(get_access_context),
    notification_service: NotificationServiceWrapper = Depends(get_notification_service)
):
    """Mark one of the caller's notifications as read."""
    return notification_service.mark_read(access, validate_uuid(notification_id, "notification_id"))
