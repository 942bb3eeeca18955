import uuid

from sqlalchemy import Column, Text, Integer, TIMESTAMP, ForeignKey, Uuid, UniqueConstraint, Index
from sqlalchemy.orm import relationship

from .base import Base, JSONType, utcnow


def make_pair_key(user_a, user_b) -> str:
    """Canonical key for an unordered pair of user ids."""
    first, second = sorted((str(user_a), str(user_b)))
    return f"{first}:{second}"


class MatchRequest(Base):
    """
    Directional proposal from sender to receiver.

    Lifecycle: pending -> accepted | rejected. There is at most one request
    per unordered user pair, enforced by the unique ``pair_key``.
    """
    __tablename__ = 'match_requests'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    sender_id = Column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    receiver_id = Column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    pair_key = Column(Text, nullable=False)

    compatibility_score = Column(Integer, nullable=False, default=50)
    match_reason = Column(Text)
    match_details = Column(JSONType, nullable=True)  # CompatibilityResult snapshot

    status = Column(Text, nullable=False, default='pending')
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    sender = relationship("User", foreign_keys=[sender_id])
    receiver = relationship("User", foreign_keys=[receiver_id])

    __table_args__ = (
        UniqueConstraint('pair_key', name='uq_match_request_pair'),
        Index('idx_match_request_receiver_status', 'receiver_id', 'status'),
        Index('idx_match_request_sender', 'sender_id'),
    )
