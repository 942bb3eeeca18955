#!/usr/bin/env python3
"""
Profile endpoints - rubric scores, preferences and skills.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.access import AccessContext
from ..dependencies import get_db, get_access_context
from ..services.profile_service import ProfileService
from ..models.requests import PreferencesUpdate, ReplaceScoresRequest, SkillsUpdate
from ..models.responses import (
    PreferencesResponse,
    ReplaceScoresResponse,
    ScoresResponse,
    SkillsResponse,
)

router = APIRouter(prefix="/api/profile", tags=["profile"])


def get_profile_service(db: Session = Depends(get_db)) -> ProfileService:
    """Dependency to get profile service."""
    return ProfileService(db)


@router.get("/scores", response_model=ScoresResponse)
def get_scores(
    access: AccessContext = Depends(get_access_context),
    service: ProfileService = Depends(get_profile_service)
):
    """The caller's rubric scores grouped by category and subcategory."""
    return service.get_scores(access)


@router.put("/scores/{category}", response_model=ReplaceScoresResponse)
def replace_scores(
    category: str,
    body: ReplaceScoresRequest,
    access: AccessContext = Depends(get_access_context),
    service: ProfileService = Depends(get_profile_service)
):
    """
    Replace every score of one category.

    Valid categories: technical_skills, social_blueprint, personal_attributes.
    """
    return service.replace_scores(access, category, body)


@router.put("/preferences", response_model=PreferencesResponse)
def update_preferences(
    body: PreferencesUpdate,
    access: AccessContext = Depends(get_access_context),
    service: ProfileService = Depends(get_profile_service)
):
    """Update matching preferences and rebuild personal attribute scores."""
    return service.update_preferences(access, body)


@router.put("/skills", response_model=SkillsResponse)
def update_skills(
    body: SkillsUpdate,
    access: AccessContext = Depends(get_access_context),
    service: ProfileService = Depends(get_profile_service)
):
    """Rebuild technical skill scores from a list of self-reported skills."""
    return service.update_skills(access, body)
