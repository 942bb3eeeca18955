import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Boolean, Uuid, Index

from .base import Base, utcnow

class Notification(Base):
    """
    In-app notification written as a side effect of match request transitions.

    Only ``is_read`` ever changes after creation.
    """
    __tablename__ = 'notifications'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    type = Column(Text, nullable=False)  # match_request | match_confirmed | match_rejected
    title = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    related_id = Column(Uuid(as_uuid=True), nullable=True)  # match request or connection id

    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        # Index for querying user's notifications
        Index('idx_notification_user', 'user_id', 'created_at'),
        # Index for unread counts
        Index('idx_notification_unread', 'user_id', 'is_read'),
    )
