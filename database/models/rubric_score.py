import uuid

from sqlalchemy import Column, Text, Integer, TIMESTAMP, ForeignKey, Uuid, Index, CheckConstraint

from .base import Base, JSONType, utcnow

class RubricScore(Base):
    """
    One 0-5 rating for a (category, subcategory) facet of a user's profile.

    Rows are replaced wholesale per (user, category) whenever a profile is
    re-analysed or preferences change.
    """
    __tablename__ = 'rubric_scores'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    category = Column(Text, nullable=False)  # technical_skills | social_blueprint | personal_attributes
    subcategory = Column(Text, nullable=False)
    score = Column(Integer, nullable=False)
    # ``metadata`` is reserved by declarative models
    score_metadata = Column('metadata', JSONType, default=dict)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint('score >= 0 AND score <= 5', name='ck_rubric_scores_range'),
        Index('idx_rubric_scores_user_category', 'user_id', 'category'),
    )
