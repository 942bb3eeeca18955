"""Data Transfer Objects for the match finder.

DTOs carry match results outside of the Unit of Work context, so
ORM objects are converted to plain Python objects that can be safely
used after the database session is closed.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class MatchedUserDTO:
    """Public profile fields of a matched user."""
    id: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    learning_style: Optional[str] = None
    collaboration_preference: Optional[int] = None
    mentorship_type: Optional[str] = None

    @classmethod
    def from_orm(cls, user) -> "MatchedUserDTO":
        return cls(
            id=str(user.id),
            full_name=user.full_name,
            email=user.email,
            learning_style=user.learning_style,
            collaboration_preference=user.collaboration_preference,
            mentorship_type=user.mentorship_type,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "full_name": self.full_name,
            "email": self.email,
            "learning_style": self.learning_style,
            "collaboration_preference": self.collaboration_preference,
            "mentorship_type": self.mentorship_type,
        }


@dataclass
class MatchCandidate:
    """A scored, not yet persisted, potential buddy.

    ``match_id`` is the candidate's user id.
    """
    match_id: str
    matched_user: MatchedUserDTO
    compatibility_score: int
    match_details: Dict[str, Any]
    match_reason: str
    status: str = "pending"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "match_id": self.match_id,
            "matched_user": self.matched_user.to_dict(),
            "compatibility_score": self.compatibility_score,
            "match_details": self.match_details,
            "match_reason": self.match_reason,
            "status": self.status,
        }


@dataclass
class MatchSearchResult:
    """Outcome of a match search.

    ``needs_analysis`` is set when the searching user has no rubric scores
    yet; ``matches`` is then empty.
    """
    matches: List[MatchCandidate] = field(default_factory=list)
    needs_analysis: bool = False
    candidates_considered: int = 0
    candidates_skipped: int = 0

    @property
    def message(self) -> str:
        if self.needs_analysis:
            return "Complete your profile analysis before finding matches"
        if not self.matches:
            return "No potential matches found"
        return f"Found {len(self.matches)} potential matches"
