#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict, Any


class MatchedUser(BaseModel):
    """Public profile fields shown next to a match."""
    id: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    learning_style: Optional[str] = None
    collaboration_preference: Optional[int] = None
    mentorship_type: Optional[str] = None


class BuddyProfile(MatchedUser):
    """Public profile of a connected buddy."""
    career_goals: Optional[str] = None


class MatchCandidateResponse(BaseModel):
    """A scored potential buddy from a match search."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "match_id": "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
                "matched_user": {
                    "id": "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
                    "full_name": "Ada Lovelace",
                    "email": "ada@example.com",
                    "learning_style": "visual",
                    "collaboration_preference": 4,
                    "mentorship_type": "peer"
                },
                "compatibility_score": 78,
                "match_details": {"overall": 78, "components": {}},
                "match_reason": "You have good overall compatibility with this user.",
                "status": "pending"
            }
        }
    )

    match_id: str
    matched_user: MatchedUser
    compatibility_score: int = Field(ge=0, le=100)
    match_details: Dict[str, Any]
    match_reason: str
    status: str = "pending"


class FindMatchesResponse(BaseModel):
    """Response for a match search."""
    success: bool
    message: str
    needs_analysis: bool = False
    matches: List[MatchCandidateResponse]


class MatchView(BaseModel):
    """A match derived from a match request, seen from the caller's side."""
    request_id: str
    matched_user: MatchedUser
    compatibility_score: int
    match_reason: Optional[str] = None
    match_details: Optional[Dict[str, Any]] = None
    status: str
    direction: str  # incoming | outgoing
    created_at: Optional[str] = None


class MatchesResponse(BaseModel):
    """Response for the matches list."""
    success: bool
    count: int
    matches: List[MatchView]


class MatchRequestSummary(BaseModel):
    """A match request with both parties' public profiles."""
    id: str
    sender_id: str
    receiver_id: str
    sender: Optional[MatchedUser] = None
    receiver: Optional[MatchedUser] = None
    compatibility_score: int
    match_reason: Optional[str] = None
    match_details: Optional[Dict[str, Any]] = None
    status: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ConnectionSummary(BaseModel):
    """A connection seen from the caller's side."""
    id: str
    buddy: BuddyProfile
    compatibility_score: int
    match_request_id: Optional[str] = None
    created_at: Optional[str] = None


class MatchRequestActionResponse(BaseModel):
    """Response for send / accept / reject."""
    success: bool
    message: str
    request: MatchRequestSummary
    auto_accepted: bool = False
    connection: Optional[ConnectionSummary] = None


class MatchRequestsResponse(BaseModel):
    """Response for incoming/outgoing request lists."""
    success: bool
    count: int
    requests: List[MatchRequestSummary]


class ConnectionsResponse(BaseModel):
    """Response for the connections list."""
    success: bool
    count: int
    connections: List[ConnectionSummary]


class ConnectionDetailResponse(BaseModel):
    """Response for a single connection."""
    success: bool
    connection: ConnectionSummary
    match_reason: Optional[str] = None


class NotificationItem(BaseModel):
    """An in-app notification."""
    id: str
    type: str
    title: str
    message: str
    related_id: Optional[str] = None
    is_read: bool
    created_at: Optional[str] = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    has_more: bool


class NotificationsResponse(BaseModel):
    """Response for the notification feed."""
    success: bool
    notifications: List[NotificationItem]
    unread_count: int
    pagination: Pagination


class NotificationReadResponse(BaseModel):
    """Response for marking one notification read."""
    success: bool
    message: str
    notification: NotificationItem


class NotificationsReadAllResponse(BaseModel):
    """Response for marking every notification read."""
    success: bool
    message: str
    updated: int


class RubricScoreItem(BaseModel):
    """One stored rubric score."""
    category: str
    subcategory: str
    score: int = Field(ge=0, le=5)
    metadata: Dict[str, Any] = Field(default_factory=dict)


class ScoresResponse(BaseModel):
    """Rubric scores grouped by category, then subcategory."""
    success: bool
    scores: Dict[str, Dict[str, RubricScoreItem]]


class ReplaceScoresResponse(BaseModel):
    """Response after replacing one category's scores."""
    success: bool
    category: str
    scores: List[RubricScoreItem]


class PreferencesResponse(BaseModel):
    """Response after updating preferences."""
    success: bool
    message: str
    profile: BuddyProfile
    personal_scores: List[RubricScoreItem]


class SkillsResponse(BaseModel):
    """Response after deriving technical scores from skills."""
    success: bool
    message: str
    technical_scores: List[RubricScoreItem]
