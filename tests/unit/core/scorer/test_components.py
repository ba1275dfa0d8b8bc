#!/usr/bin/env python3
"""
Test suite for the relevance sub-scores.
"""

import unittest

from core.scorer import components
from tests import make_position, make_volunteer


class TestMatchPercentage(unittest.TestCase):

    def test_half_of_required_skills(self):
        self.assertEqual(
            components.calculate_match_percentage({"teaching"}, {"teaching", "fundraising"}),
            50.0,
        )

    def test_extra_offered_items_do_not_count(self):
        self.assertEqual(
            components.calculate_match_percentage({"teaching", "fundraising", "medicalAid"}, {"teaching"}),
            100.0,
        )

    def test_empty_sides_score_zero(self):
        self.assertEqual(components.calculate_match_percentage(set(), {"teaching"}), 0.0)
        self.assertEqual(components.calculate_match_percentage({"teaching"}, set()), 0.0)

    def test_one_of_three(self):
        value = components.calculate_match_percentage({"a"}, {"a", "b", "c"})
        self.assertAlmostEqual(value, 100 / 3)


class TestSubScores(unittest.TestCase):

    def test_skill_match(self):
        position = make_position(required_skills=frozenset({"teaching", "fundraising"}))
        self.assertEqual(components.skill_match(make_volunteer(), position), 50.0)

    def test_cause_match_is_all_or_nothing(self):
        self.assertEqual(components.cause_match(make_volunteer(), make_position()), 100.0)
        self.assertEqual(components.cause_match(make_volunteer(), make_position(cause="health")), 0.0)

    def test_availability_match(self):
        volunteer = make_volunteer(availability=frozenset({"weekends", "evenings"}))
        position = make_position(availability=frozenset({"weekends", "weekdays"}))
        self.assertEqual(components.availability_match(volunteer, position), 50.0)

    def test_proximity(self):
        self.assertEqual(components.proximity_match(make_volunteer(), make_position()), 100.0)
        self.assertEqual(
            components.proximity_match(make_volunteer(), make_position(location="mumbai")), 0.0
        )

    def test_missing_locations_never_match(self):
        volunteer = make_volunteer(location=None)
        position = make_position(location=None)
        self.assertEqual(components.proximity_match(volunteer, position), 0.0)

    def test_urgency_scale(self):
        for urgency, expected in [(1, 20.0), (3, 60.0), (5, 100.0)]:
            with self.subTest(urgency=urgency):
                self.assertEqual(components.urgency_score(make_position(urgency=urgency)), expected)

    def test_missing_urgency_counts_as_one(self):
        self.assertEqual(components.urgency_score(make_position(urgency=None)), 20.0)

    def test_urgency_is_clamped(self):
        self.assertEqual(components.urgency_score(make_position(urgency=9)), 100.0)


if __name__ == '__main__':
    unittest.main()
