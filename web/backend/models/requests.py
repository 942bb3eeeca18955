#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal, Optional


class SendMatchRequest(BaseModel):
    """Request to send a match request to another user."""
    receiver_id: Optional[str] = Field(None, description="User id of the receiver")
    compatibility_score: Optional[int] = Field(
        None, ge=0, le=100, description="Score shown to the receiver; defaults to 50"
    )
    match_reason: Optional[str] = Field(None, description="Reason shown to the receiver")
    match_details: Optional[Dict[str, Any]] = Field(
        None, description="Compatibility snapshot from a match search"
    )


class RubricScoreInput(BaseModel):
    """A single rubric score row for one subcategory."""
    subcategory: str = Field(..., min_length=1)
    score: int = Field(..., ge=0, le=5, description="Rating (0-5)")
    metadata: Optional[Dict[str, Any]] = Field(
        None, description="Tagged metadata; kind is inferred from the subcategory when absent"
    )


class ReplaceScoresRequest(BaseModel):
    """Request to replace every rubric score of one category."""
    scores: List[RubricScoreInput] = Field(default_factory=list)


class PreferencesUpdate(BaseModel):
    """Request to update matching preferences."""
    learning_style: Optional[str] = Field(None, description="e.g. visual, hands-on, reading")
    collaboration_preference: Optional[int] = Field(None, ge=1, le=5, description="1 (solo) - 5 (team)")
    mentorship_type: Optional[Literal["seeking", "offering", "peer", "mixed"]] = None
    career_goals: Optional[str] = None


class SkillInput(BaseModel):
    """A self-reported skill."""
    skill_name: str = Field(..., min_length=1)
    skill_type: str = Field(..., min_length=1, description="language, framework, tool or soft")
    proficiency_level: int = Field(..., ge=0, le=5)


class SkillsUpdate(BaseModel):
    """Request to derive technical scores from a skill list."""
    skills: List[SkillInput] = Field(default_factory=list)
