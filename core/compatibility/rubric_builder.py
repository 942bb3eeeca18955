#!/usr/bin/env python3
"""
Rubric Builders - derive rubric score rows from profile data.

Technical scores come from a user's self-reported skills, personal scores
from their preferences. Callers persist the result with
RubricScoreRepository.replace_scores() for the matching category.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from core.compatibility.models import (
    RubricScoreEntry, ScoreCategory, ChoiceMetadata, SourceMetadata, EmptyMetadata,
    LEARNING_STYLE, COLLABORATION_PREFERENCE, MENTORSHIP_TYPE,
    round_half_up
)

SKILL_TYPE_SUBCATEGORIES = {
    'language': 'programming_languages',
    'framework': 'frameworks_libraries',
    'tool': 'project_complexity',
    'soft': 'problem_solving',
}

# Categorical preferences carry no rating of their own
DEFAULT_PREFERENCE_SCORE = 3


@dataclass
class Skill:
    skill_name: str
    skill_type: str
    proficiency_level: int


@dataclass
class Preferences:
    learning_style: Optional[str] = None
    collaboration_preference: Optional[int] = None
    mentorship_type: Optional[str] = None


def _clamp_rating(value: int) -> int:
    return max(0, min(5, value))


def build_technical_scores(skills: Iterable[Skill]) -> List[RubricScoreEntry]:
    """Average proficiency per skill type, one row per type."""
    totals: Dict[str, Dict[str, int]] = {}
    for skill in skills:
        bucket = totals.setdefault(skill.skill_type, {'total': 0, 'count': 0})
        bucket['total'] += int(skill.proficiency_level or 0)
        bucket['count'] += 1

    entries = []
    for skill_type, bucket in totals.items():
        average = round_half_up(bucket['total'] / bucket['count']) if bucket['count'] else 0
        entries.append(RubricScoreEntry(
            category=ScoreCategory.TECHNICAL_SKILLS,
            subcategory=SKILL_TYPE_SUBCATEGORIES.get(skill_type, skill_type),
            score=_clamp_rating(average),
            metadata=SourceMetadata(source='skills', count=bucket['count'])
        ))
    return entries


def build_personal_scores(preferences: Preferences) -> List[RubricScoreEntry]:
    entries = []

    if preferences.learning_style:
        entries.append(RubricScoreEntry(
            category=ScoreCategory.PERSONAL_ATTRIBUTES,
            subcategory=LEARNING_STYLE,
            score=DEFAULT_PREFERENCE_SCORE,
            metadata=ChoiceMetadata(value=preferences.learning_style)
        ))

    if preferences.collaboration_preference:
        entries.append(RubricScoreEntry(
            category=ScoreCategory.PERSONAL_ATTRIBUTES,
            subcategory=COLLABORATION_PREFERENCE,
            score=_clamp_rating(int(preferences.collaboration_preference)),
            metadata=EmptyMetadata()
        ))

    if preferences.mentorship_type:
        entries.append(RubricScoreEntry(
            category=ScoreCategory.PERSONAL_ATTRIBUTES,
            subcategory=MENTORSHIP_TYPE,
            score=DEFAULT_PREFERENCE_SCORE,
            metadata=ChoiceMetadata(value=preferences.mentorship_type)
        ))

    return entries
