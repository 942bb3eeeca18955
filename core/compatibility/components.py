#!/usr/bin/env python3
"""
Component Calculations - technical, social and personal compatibility.

Each function takes both users' full rubric score lists, keeps only its own
category, and returns a ComponentScore with integer scores in [0, 100].

Formulas (scores are 1-5 ratings):
    similarity      = 1 - |s1 - s2| / 5
    complementarity = (s1 + s2) / 10
"""

from typing import Dict, List, Optional, Sequence

from core.config_loader import CompatibilityWeights
from core.compatibility.models import (
    ComponentScore, RubricScoreEntry, ScoreCategory,
    LEARNING_STYLE, COLLABORATION_PREFERENCE, MENTORSHIP_TYPE,
    round_half_up, clamp_score
)

INSUFFICIENT_DATA_SCORE = 50
NO_TECHNICAL_OVERLAP_SCORE = 40
NO_SOCIAL_OVERLAP_SCORE = 30
NO_PERSONAL_DATA_SCORE = 50

# Learning style
SAME_LEARNING_STYLE_SCORE = 100
DIFFERENT_LEARNING_STYLE_SCORE = 60

# Mentorship complementarity table
MENTORSHIP_COMPLEMENTARY_SCORE = 100
MENTORSHIP_PEER_SCORE = 90
MENTORSHIP_MIXED_SCORE = 70
MENTORSHIP_DEFAULT_SCORE = 50

MISSING_VALUE_SCORE = 50

DEFAULT_WEIGHTS = CompatibilityWeights()


def filter_scores_by_category(
    scores: Sequence[RubricScoreEntry],
    category: ScoreCategory
) -> List[RubricScoreEntry]:
    return [s for s in scores if s.category == category]


def create_score_map(scores: Sequence[RubricScoreEntry]) -> Dict[str, int]:
    """Map subcategory -> score. Later rows win when a subcategory repeats."""
    score_map: Dict[str, int] = {}
    for s in scores:
        score_map[s.subcategory] = s.score
    return score_map


def _union_keys(first: Dict[str, int], second: Dict[str, int]) -> List[str]:
    keys = list(first.keys())
    keys.extend(k for k in second.keys() if k not in first)
    return keys


def _similarity(score1: int, score2: int) -> float:
    return 1 - (abs(score1 - score2) / 5)


def _complementarity(score1: int, score2: int) -> float:
    return (score1 + score2) / 10


def calculate_technical_compatibility(
    user1_scores: Sequence[RubricScoreEntry],
    user2_scores: Sequence[RubricScoreEntry],
    weights: CompatibilityWeights = DEFAULT_WEIGHTS
) -> ComponentScore:
    user1_tech = filter_scores_by_category(user1_scores, ScoreCategory.TECHNICAL_SKILLS)
    user2_tech = filter_scores_by_category(user2_scores, ScoreCategory.TECHNICAL_SKILLS)

    if not user1_tech or not user2_tech:
        return ComponentScore(score=INSUFFICIENT_DATA_SCORE, reason="Insufficient technical data")

    user1_map = create_score_map(user1_tech)
    user2_map = create_score_map(user2_tech)

    similarity_total = 0.0
    complementarity_total = 0.0
    matched = 0
    details = {}

    for subcategory in _union_keys(user1_map, user2_map):
        score1 = user1_map.get(subcategory, 0)
        score2 = user2_map.get(subcategory, 0)
        if score1 <= 0 or score2 <= 0:
            continue

        similarity = _similarity(score1, score2)
        complementarity = _complementarity(score1, score2)

        similarity_total += similarity * 100
        complementarity_total += complementarity * 100
        matched += 1

        details[subcategory] = {
            "user1_score": score1,
            "user2_score": score2,
            "similarity": round_half_up(similarity * 100),
            "complementarity": round_half_up(complementarity * 100),
        }

    if matched == 0:
        return ComponentScore(score=NO_TECHNICAL_OVERLAP_SCORE, reason="No overlapping technical skills")

    avg_similarity = similarity_total / matched
    avg_complementarity = complementarity_total / matched
    final_score = (
        avg_similarity * weights.similarity_weight +
        avg_complementarity * weights.complementarity_weight
    )

    return ComponentScore(
        score=clamp_score(final_score),
        similarity=clamp_score(avg_similarity),
        complementarity=clamp_score(avg_complementarity),
        details=details
    )


def calculate_social_compatibility(
    user1_scores: Sequence[RubricScoreEntry],
    user2_scores: Sequence[RubricScoreEntry]
) -> ComponentScore:
    user1_social = filter_scores_by_category(user1_scores, ScoreCategory.SOCIAL_BLUEPRINT)
    user2_social = filter_scores_by_category(user2_scores, ScoreCategory.SOCIAL_BLUEPRINT)

    if not user1_social or not user2_social:
        return ComponentScore(score=INSUFFICIENT_DATA_SCORE, reason="Insufficient social data")

    user1_map = create_score_map(user1_social)
    user2_map = create_score_map(user2_social)

    similarity_total = 0.0
    matched = 0
    details = {}

    for platform in _union_keys(user1_map, user2_map):
        score1 = user1_map.get(platform, 0)
        score2 = user2_map.get(platform, 0)
        if score1 <= 0 or score2 <= 0:
            continue

        similarity = _similarity(score1, score2)
        similarity_total += similarity * 100
        matched += 1

        details[platform] = {
            "user1_score": score1,
            "user2_score": score2,
            "similarity": round_half_up(similarity * 100),
        }

    if matched == 0:
        return ComponentScore(score=NO_SOCIAL_OVERLAP_SCORE, reason="No overlapping social platforms")

    avg_similarity = similarity_total / matched
    return ComponentScore(
        score=clamp_score(avg_similarity),
        similarity=clamp_score(avg_similarity),
        details=details
    )


def _choice_value(scores: Sequence[RubricScoreEntry], subcategory: str) -> Optional[str]:
    for s in scores:
        if s.subcategory == subcategory:
            return s.choice_value
    return None


def score_learning_style(value1: Optional[str], value2: Optional[str]) -> int:
    if not value1 or not value2:
        return MISSING_VALUE_SCORE
    return SAME_LEARNING_STYLE_SCORE if value1 == value2 else DIFFERENT_LEARNING_STYLE_SCORE


def score_mentorship(value1: Optional[str], value2: Optional[str]) -> int:
    if not value1 or not value2:
        return MISSING_VALUE_SCORE
    if {value1, value2} == {"seeking", "offering"}:
        return MENTORSHIP_COMPLEMENTARY_SCORE
    if value1 == "peer" and value2 == "peer":
        return MENTORSHIP_PEER_SCORE
    if value1 == "mixed" or value2 == "mixed":
        return MENTORSHIP_MIXED_SCORE
    return MENTORSHIP_DEFAULT_SCORE


def _mentorship_reason(score: int) -> str:
    if score >= 90:
        return "Complementary mentorship styles"
    if score >= 70:
        return "Compatible mentorship styles"
    return "Different mentorship preferences"


def calculate_personal_compatibility(
    user1_scores: Sequence[RubricScoreEntry],
    user2_scores: Sequence[RubricScoreEntry]
) -> ComponentScore:
    user1_personal = filter_scores_by_category(user1_scores, ScoreCategory.PERSONAL_ATTRIBUTES)
    user2_personal = filter_scores_by_category(user2_scores, ScoreCategory.PERSONAL_ATTRIBUTES)

    if not user1_personal or not user2_personal:
        return ComponentScore(score=INSUFFICIENT_DATA_SCORE, reason="Insufficient personal data")

    user1_map = create_score_map(user1_personal)
    user2_map = create_score_map(user2_personal)

    details = {}
    total = 0.0
    attribute_count = 0

    # Same learning style is better
    if user1_map.get(LEARNING_STYLE) and user2_map.get(LEARNING_STYLE):
        value1 = _choice_value(user1_personal, LEARNING_STYLE)
        value2 = _choice_value(user2_personal, LEARNING_STYLE)
        style_score = score_learning_style(value1, value2)
        details[LEARNING_STYLE] = {
            "user1_value": value1,
            "user2_value": value2,
            "score": style_score,
            "reason": "Same learning style" if style_score == SAME_LEARNING_STYLE_SCORE else "Different learning styles",
        }
        total += style_score
        attribute_count += 1

    # Similar collaboration preference is better
    if user1_map.get(COLLABORATION_PREFERENCE) and user2_map.get(COLLABORATION_PREFERENCE):
        score1 = user1_map[COLLABORATION_PREFERENCE]
        score2 = user2_map[COLLABORATION_PREFERENCE]
        diff = abs(score1 - score2)
        collaboration_score = _similarity(score1, score2) * 100
        details[COLLABORATION_PREFERENCE] = {
            "user1_score": score1,
            "user2_score": score2,
            "score": round_half_up(collaboration_score),
            "reason": "Similar collaboration preferences" if diff <= 1 else "Different collaboration preferences",
        }
        total += collaboration_score
        attribute_count += 1

    # Complementary mentorship is better
    if user1_map.get(MENTORSHIP_TYPE) and user2_map.get(MENTORSHIP_TYPE):
        value1 = _choice_value(user1_personal, MENTORSHIP_TYPE)
        value2 = _choice_value(user2_personal, MENTORSHIP_TYPE)
        mentorship_score = score_mentorship(value1, value2)
        details[MENTORSHIP_TYPE] = {
            "user1_value": value1,
            "user2_value": value2,
            "score": mentorship_score,
            "reason": _mentorship_reason(mentorship_score),
        }
        total += mentorship_score
        attribute_count += 1

    if attribute_count == 0:
        return ComponentScore(score=NO_PERSONAL_DATA_SCORE, reason="No personal data to compare")

    return ComponentScore(score=clamp_score(total / attribute_count), details=details)
