#!/usr/bin/env python3
"""
Compatibility Engine - weighted compatibility between two users.

Pure and deterministic: the result depends only on the two score lists and
the weights. Swapping the users swaps user1/user2 values inside details but
never changes any score.
"""

from typing import Optional, Sequence

from core.config_loader import CompatibilityWeights
from core.compatibility.models import CompatibilityResult, RubricScoreEntry, clamp_score
from core.compatibility.components import (
    DEFAULT_WEIGHTS,
    calculate_technical_compatibility,
    calculate_social_compatibility,
    calculate_personal_compatibility,
)


def calculate_compatibility(
    user1_scores: Sequence[RubricScoreEntry],
    user2_scores: Sequence[RubricScoreEntry],
    weights: Optional[CompatibilityWeights] = None
) -> CompatibilityResult:
    """
    Calculate compatibility between two users' rubric scores.

    Formula: round(technical * 0.4 + social * 0.4 + personal * 0.2)

    Args:
        user1_scores: First user's rubric scores (any order, any categories)
        user2_scores: Second user's rubric scores
        weights: Optional weight overrides

    Returns:
        CompatibilityResult with overall score and per-component breakdown
    """
    weights = weights or DEFAULT_WEIGHTS

    technical = calculate_technical_compatibility(user1_scores, user2_scores, weights)
    social = calculate_social_compatibility(user1_scores, user2_scores)
    personal = calculate_personal_compatibility(user1_scores, user2_scores)

    weighted = (
        technical.score * weights.technical_weight +
        social.score * weights.social_weight +
        personal.score * weights.personal_weight
    )

    return CompatibilityResult(
        overall=clamp_score(weighted),
        technical=technical,
        social=social,
        personal=personal
    )
