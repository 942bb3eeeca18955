#!/usr/bin/env python3
"""
Tests for the compatibility engine: component formulas, weighting,
rounding and match reasons.
"""

import unittest

from core.compatibility import (
    RubricScoreEntry,
    ScoreCategory,
    ChoiceMetadata,
    EmptyMetadata,
    SourceMetadata,
    ComponentScore,
    CompatibilityResult,
    calculate_compatibility,
    generate_match_reason,
)
from core.compatibility.components import (
    calculate_technical_compatibility,
    calculate_social_compatibility,
    calculate_personal_compatibility,
    score_mentorship,
)
from core.compatibility.models import round_half_up, clamp_score
from core.config_loader import CompatibilityWeights

TECH = ScoreCategory.TECHNICAL_SKILLS
SOCIAL = ScoreCategory.SOCIAL_BLUEPRINT
PERSONAL = ScoreCategory.PERSONAL_ATTRIBUTES


def tech(**scores):
    return [RubricScoreEntry(category=TECH, subcategory=k, score=v, metadata=SourceMetadata(source="skills"))
            for k, v in scores.items()]


def social(**scores):
    return [RubricScoreEntry(category=SOCIAL, subcategory=k, score=v, metadata=SourceMetadata(source=k))
            for k, v in scores.items()]


def personal(learning_style=None, collaboration=None, mentorship=None):
    rows = []
    if learning_style is not None:
        rows.append(RubricScoreEntry(category=PERSONAL, subcategory="learning_style", score=3,
                                     metadata=ChoiceMetadata(value=learning_style)))
    if collaboration is not None:
        rows.append(RubricScoreEntry(category=PERSONAL, subcategory="collaboration_preference",
                                     score=collaboration, metadata=EmptyMetadata()))
    if mentorship is not None:
        rows.append(RubricScoreEntry(category=PERSONAL, subcategory="mentorship_type", score=3,
                                     metadata=ChoiceMetadata(value=mentorship)))
    return rows


class TestRounding(unittest.TestCase):

    def test_half_rounds_up(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(76.5), 77)
        self.assertEqual(round_half_up(76.49), 76)

    def test_clamp(self):
        self.assertEqual(clamp_score(120), 100)
        self.assertEqual(clamp_score(-3), 0)


class TestTechnicalCompatibility(unittest.TestCase):

    def test_equal_scores_example(self):
        result = calculate_technical_compatibility(tech(programming_languages=4), tech(programming_languages=4))
        self.assertEqual(result.score, 88)
        self.assertEqual(result.similarity, 100)
        self.assertEqual(result.complementarity, 80)
        self.assertEqual(result.details["programming_languages"]["similarity"], 100)
        self.assertEqual(result.details["programming_languages"]["complementarity"], 80)

    def test_insufficient_data(self):
        result = calculate_technical_compatibility([], tech(programming_languages=4))
        self.assertEqual(result.score, 50)
        self.assertEqual(result.reason, "Insufficient technical data")

    def test_no_overlap(self):
        result = calculate_technical_compatibility(tech(python=3), tech(java=4))
        self.assertEqual(result.score, 40)

    def test_zero_scores_do_not_overlap(self):
        result = calculate_technical_compatibility(tech(python=0), tech(python=3))
        self.assertEqual(result.score, 40)

    def test_averages_over_overlapping_subcategories(self):
        # python: sim 100, comp 100; java: sim 60, comp 40 -> avg sim 80, avg comp 70
        result = calculate_technical_compatibility(tech(python=5, java=1), tech(python=5, java=3, go=4))
        self.assertEqual(result.similarity, 80)
        self.assertEqual(result.complementarity, 70)
        self.assertEqual(result.score, 74)
        self.assertNotIn("go", result.details)

    def test_custom_weights(self):
        weights = CompatibilityWeights(similarity_weight=1.0, complementarity_weight=0.0)
        result = calculate_technical_compatibility(tech(python=4), tech(python=4), weights)
        self.assertEqual(result.score, 100)


class TestSocialCompatibility(unittest.TestCase):

    def test_similarity_only(self):
        result = calculate_social_compatibility(social(github=5), social(github=3))
        self.assertEqual(result.score, 60)

    def test_insufficient_data(self):
        self.assertEqual(calculate_social_compatibility(social(github=5), []).score, 50)

    def test_no_overlap(self):
        result = calculate_social_compatibility(social(github=5), social(linkedin=5))
        self.assertEqual(result.score, 30)


class TestPersonalCompatibility(unittest.TestCase):

    def test_all_attributes(self):
        result = calculate_personal_compatibility(
            personal("visual", 4, "seeking"),
            personal("visual", 2, "offering")
        )
        # (100 + 60 + 100) / 3
        self.assertEqual(result.score, 87)
        self.assertEqual(result.details["learning_style"]["score"], 100)
        self.assertEqual(result.details["collaboration_preference"]["score"], 60)
        self.assertEqual(result.details["mentorship_type"]["score"], 100)

    def test_different_learning_styles(self):
        result = calculate_personal_compatibility(personal("visual"), personal("auditory"))
        self.assertEqual(result.score, 60)

    def test_learning_style_without_value_scores_fifty(self):
        no_value = [RubricScoreEntry(category=PERSONAL, subcategory="learning_style", score=3,
                                     metadata=ChoiceMetadata(value=None))]
        result = calculate_personal_compatibility(no_value, personal("visual"))
        self.assertEqual(result.score, 50)

    def test_only_shared_attributes_count(self):
        result = calculate_personal_compatibility(
            personal(learning_style="visual", collaboration=3),
            personal(collaboration=3)
        )
        self.assertEqual(result.score, 100)
        self.assertNotIn("learning_style", result.details)

    def test_no_shared_attributes(self):
        result = calculate_personal_compatibility(personal("visual"), personal(collaboration=3))
        self.assertEqual(result.score, 50)
        self.assertEqual(result.reason, "No personal data to compare")

    def test_missing_personal_rows(self):
        self.assertEqual(calculate_personal_compatibility([], personal("visual")).score, 50)

    def test_mentorship_only_rows_seeking_offering(self):
        result = calculate_personal_compatibility(personal(mentorship="seeking"), personal(mentorship="offering"))

        self.assertEqual(result.score, 100)
        self.assertEqual(list(result.details), ["mentorship_type"])
        self.assertEqual(result.details["mentorship_type"]["reason"], "Complementary mentorship styles")

    def test_mentorship_table(self):
        self.assertEqual(score_mentorship("seeking", "offering"), 100)
        self.assertEqual(score_mentorship("offering", "seeking"), 100)
        self.assertEqual(score_mentorship("peer", "peer"), 90)
        self.assertEqual(score_mentorship("mixed", "seeking"), 70)
        self.assertEqual(score_mentorship("peer", "mixed"), 70)
        self.assertEqual(score_mentorship("seeking", "seeking"), 50)
        self.assertEqual(score_mentorship("offering", "peer"), 50)
        self.assertEqual(score_mentorship(None, "peer"), 50)


class TestOverallCompatibility(unittest.TestCase):

    def setUp(self):
        self.alice = tech(programming_languages=4) + social(github=5) + personal("visual", 4, "seeking")
        self.bob = tech(programming_languages=4) + social(github=3) + personal("visual", 2, "offering")

    def test_weighted_overall(self):
        result = calculate_compatibility(self.alice, self.bob)
        # 88 * 0.4 + 60 * 0.4 + 87 * 0.2 = 76.6
        self.assertEqual(result.overall, 77)
        self.assertEqual(result.technical.score, 88)
        self.assertEqual(result.social.score, 60)
        self.assertEqual(result.personal.score, 87)

    def test_no_data_is_neutral(self):
        result = calculate_compatibility([], [])
        self.assertEqual(result.overall, 50)

    def test_symmetric(self):
        forward = calculate_compatibility(self.alice, self.bob)
        backward = calculate_compatibility(self.bob, self.alice)
        self.assertEqual(forward.overall, backward.overall)
        for name in ("technical", "social", "personal"):
            self.assertEqual(forward.components[name].score, backward.components[name].score)

    def test_deterministic(self):
        first = calculate_compatibility(self.alice, self.bob).to_dict()
        second = calculate_compatibility(self.alice, self.bob).to_dict()
        self.assertEqual(first, second)

    def test_scores_within_range(self):
        extremes = tech(a=5, b=1) + social(x=5) + personal("visual", 5, "peer")
        other = tech(a=1, b=5) + social(x=1) + personal("reading", 1, "seeking")
        result = calculate_compatibility(extremes, other)
        for value in [result.overall] + [c.score for c in result.components.values()]:
            self.assertIsInstance(value, int)
            self.assertGreaterEqual(value, 0)
            self.assertLessEqual(value, 100)

    def test_to_dict_shape(self):
        data = calculate_compatibility(self.alice, self.bob).to_dict()
        self.assertEqual(set(data.keys()), {"overall", "components"})
        self.assertEqual(set(data["components"].keys()), {"technical", "social", "personal"})
        self.assertIn("similarity", data["components"]["technical"])
        self.assertNotIn("complementarity", data["components"]["social"])


class TestMatchReason(unittest.TestCase):

    def _result(self, overall, technical=50, social=50, personal=50):
        return CompatibilityResult(
            overall=overall,
            technical=ComponentScore(score=technical),
            social=ComponentScore(score=social),
            personal=ComponentScore(score=personal)
        )

    def test_thresholds(self):
        self.assertEqual(generate_match_reason(self._result(80)),
                         "You have excellent overall compatibility with this user.")
        self.assertEqual(generate_match_reason(self._result(60)),
                         "You have good overall compatibility with this user.")
        self.assertEqual(generate_match_reason(self._result(39)),
                         "This could be an interesting connection to explore.")

    def test_moderate_band_prefers_first_strong_component(self):
        self.assertEqual(generate_match_reason(self._result(45, technical=70, social=90)),
                         "You have strong technical compatibility with this user.")
        self.assertEqual(generate_match_reason(self._result(45, technical=69, social=75)),
                         "You have strong social compatibility with this user.")
        self.assertEqual(generate_match_reason(self._result(45, personal=70)),
                         "Your personal attributes align well with this user.")
        self.assertEqual(generate_match_reason(self._result(40)),
                         "You have moderate compatibility with this user.")


if __name__ == '__main__':
    unittest.main()
