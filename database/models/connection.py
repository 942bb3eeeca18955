import uuid

from sqlalchemy import Column, Integer, TIMESTAMP, ForeignKey, Uuid, UniqueConstraint, Index
from sqlalchemy.orm import relationship

from .base import Base, utcnow

class Connection(Base):
    """
    Permanent, symmetric relationship created when a match request is accepted.

    ``match_request_id`` is optional: connections synthesised outside the
    request flow have none.
    """
    __tablename__ = 'connections'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user1_id = Column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    user2_id = Column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    match_request_id = Column(Uuid(as_uuid=True), ForeignKey('match_requests.id', ondelete='SET NULL'), nullable=True)

    compatibility_score = Column(Integer, nullable=False, default=50)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    match_request = relationship("MatchRequest")

    __table_args__ = (
        # Exactly one connection per accepted request
        UniqueConstraint('match_request_id', name='uq_connection_match_request'),
        Index('idx_connection_user1', 'user1_id'),
        Index('idx_connection_user2', 'user2_id'),
    )

    def other_user_id(self, user_id):
        return self.user2_id if str(self.user1_id) == str(user_id) else self.user1_id
