import uuid

from sqlalchemy import Column, Text, Integer, TIMESTAMP, Uuid, Index

from .base import Base, utcnow

class User(Base):
    """
    Local mirror of an auth-provider account plus matching preferences.

    Authentication itself is owned by the upstream provider; this row only
    holds the public profile fields used for matching and display.
    """
    __tablename__ = 'users'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(Text, nullable=False, unique=True)
    full_name = Column(Text)

    # Matching preferences
    learning_style = Column(Text)
    collaboration_preference = Column(Integer)  # 1-5
    mentorship_type = Column(Text)  # seeking | offering | peer | mixed
    career_goals = Column(Text)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index('idx_users_email', 'email'),
    )
