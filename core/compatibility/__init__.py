#!/usr/bin/env python3
"""
Compatibility Module - rubric-score based buddy compatibility.

Public API:
- calculate_compatibility: weighted compatibility between two users
- generate_match_reason: text summary of a compatibility result
- build_technical_scores / build_personal_scores: rubric rows from profile data

Module layout:
- models.py: rubric score rows, metadata variants, result dataclasses
- components.py: technical, social and personal component formulas
- engine.py: weighted combination
- reasons.py: match reason thresholds
- rubric_builder.py: skills/preferences -> rubric rows
"""

from core.compatibility.models import (
    ScoreCategory,
    RubricScoreEntry,
    ChoiceMetadata,
    SourceMetadata,
    EmptyMetadata,
    ComponentScore,
    CompatibilityResult,
    parse_metadata,
)
from core.compatibility.engine import calculate_compatibility
from core.compatibility.reasons import generate_match_reason
from core.compatibility.rubric_builder import (
    Skill,
    Preferences,
    build_technical_scores,
    build_personal_scores,
)

__all__ = [
    'ScoreCategory',
    'RubricScoreEntry',
    'ChoiceMetadata',
    'SourceMetadata',
    'EmptyMetadata',
    'ComponentScore',
    'CompatibilityResult',
    'parse_metadata',
    'calculate_compatibility',
    'generate_match_reason',
    'Skill',
    'Preferences',
    'build_technical_scores',
    'build_personal_scores',
]
