#!/usr/bin/env python3
"""
Test suite for position expiry.
"""

import unittest

from core.clock import MS_PER_DAY
from core.expiry import days_remaining, expiry_instant, is_expired
from tests import T0, days, make_position


class TestExpiry(unittest.TestCase):

    def setUp(self):
        self.position = make_position(created_at=T0, valid_for_days=30)

    def test_open_one_day_before_deadline(self):
        now = T0 + days(29)
        self.assertFalse(is_expired(self.position, now))
        self.assertEqual(days_remaining(self.position, now), 1)

    def test_expired_after_deadline(self):
        now = T0 + days(31)
        self.assertTrue(is_expired(self.position, now))
        self.assertEqual(days_remaining(self.position, now), 0)

    def test_exact_deadline_is_still_open(self):
        now = T0 + days(30)
        self.assertFalse(is_expired(self.position, now))
        self.assertTrue(is_expired(self.position, now + 1))

    def test_partial_days_round_up(self):
        self.assertEqual(days_remaining(self.position, T0 + days(0.5)), 30)
        self.assertEqual(days_remaining(self.position, T0), 30)

    def test_expiry_is_monotonic(self):
        seen_expired = False
        for hour in range(0, 40 * 24, 7):
            expired = is_expired(self.position, T0 + hour * MS_PER_DAY // 24)
            if seen_expired:
                self.assertTrue(expired)
            seen_expired = seen_expired or expired
        self.assertTrue(seen_expired)

    def test_days_remaining_decreases_across_day_boundaries(self):
        previous = None
        for day in range(0, 30):
            remaining = days_remaining(self.position, T0 + days(day) + 1)
            if previous is not None:
                self.assertLess(remaining, previous)
            previous = remaining


class TestMissingExpiryWindow(unittest.TestCase):

    def test_missing_valid_for_days_never_expires(self):
        position = make_position(created_at=T0, valid_for_days=None)
        self.assertIsNone(expiry_instant(position))
        self.assertFalse(is_expired(position, T0 + days(10_000)))
        self.assertIsNone(days_remaining(position, T0))

    def test_missing_created_at_never_expires(self):
        position = make_position(created_at=None, valid_for_days=30)
        self.assertFalse(is_expired(position, T0 + days(10_000)))

    def test_non_positive_window_never_expires(self):
        for window in (0, -5):
            with self.subTest(window=window):
                position = make_position(created_at=T0, valid_for_days=window)
                self.assertFalse(is_expired(position, T0 + days(365)))

    def test_expiry_instant(self):
        position = make_position(created_at=T0, valid_for_days=30)
        self.assertEqual(expiry_instant(position), T0 + 30 * MS_PER_DAY)


if __name__ == '__main__':
    unittest.main()
