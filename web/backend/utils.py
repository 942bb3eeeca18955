#!/usr/bin/env python3
"""
Utility functions for the web application.
"""

import uuid
from typing import Any, Dict, Optional
from datetime import datetime

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import DataStoreError


def validate_uuid(value: str, field_name: str = "id") -> str:
    """Validate that a path parameter is a UUID; return its canonical form."""
    try:
        return str(uuid.UUID(value))
    except (ValueError, TypeError, AttributeError):
        raise HTTPException(
            status_code=400,
            detail=f"Invalid {field_name} format: {value}. Must be a valid UUID."
        )


def safe_datetime_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Safely convert datetime to ISO format string.

    Args:
        dt: Datetime object.

    Returns:
        ISO format string or None.
    """
    if dt is None:
        return None
    return dt.isoformat()


def fallback_display_name(user_id: Any) -> str:
    """Name shown for a user whose profile row is missing."""
    return f"User {str(user_id)[:6]}"


def commit_session(db: Session) -> None:
    """Commit the request's session; a failed commit is a datastore error."""
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise DataStoreError("Failed to save changes") from e


def user_profile_dict(user: Any, user_id: Any, include_career_goals: bool = False) -> Dict[str, Any]:
    """Public profile fields for ``user``, or a placeholder when it is missing."""
    if user is None:
        data = {"id": str(user_id), "full_name": fallback_display_name(user_id)}
        return data

    data = {
        "id": str(user.id),
        "full_name": user.full_name or fallback_display_name(user.id),
        "email": user.email,
        "learning_style": user.learning_style,
        "collaboration_preference": user.collaboration_preference,
        "mentorship_type": user.mentorship_type,
    }
    if include_career_goals:
        data["career_goals"] = user.career_goals
    return data
