#!/usr/bin/env python3
"""
Tests for the volunteer and organization dashboard summaries.
"""

import unittest
from unittest.mock import Mock

from core.applications import ApplicationService
from core.clock import FixedClock
from core.dashboard import DashboardService
from core.exceptions import Unauthorized
from core.positions import PositionService
from core.profiles import ProfileService
from core.session import UserSession
from tests import T0, days, make_test_store, organization_data, position_data, volunteer_data


class TestDashboards(unittest.TestCase):

    def setUp(self):
        self.engine, _, self.uow = make_test_store()
        self.clock = FixedClock(T0)
        profiles = ProfileService(uow=self.uow, clock=self.clock)
        positions = PositionService(uow=self.uow, clock=self.clock)
        self.applications = ApplicationService(uow=self.uow, clock=self.clock, notifier=Mock())
        self.dashboard = DashboardService(uow=self.uow, clock=self.clock)

        org = profiles.register(organization_data())
        volunteer = profiles.register(volunteer_data())
        self.org_session = UserSession.organization(org.id)
        self.volunteer_session = UserSession.volunteer(volunteer.id)

        self.created = [
            positions.create_position(self.org_session, position_data(title=f"Role {i}"), now=T0 + i)
            for i in range(4)
        ]
        self.expired = positions.create_position(
            self.org_session, position_data(title="Old", validForDays=1), now=T0 + 10
        )

        now = T0 + days(2)
        self.clock.set(now)
        first = self.applications.submit_application(self.volunteer_session, self.created[0].id, now=now)
        self.applications.submit_application(self.volunteer_session, self.created[1].id, now=now + 1)
        self.applications.update_status(self.org_session, first.id, "accepted")

    def tearDown(self):
        self.engine.dispose()

    def test_volunteer_summary(self):
        summary = self.dashboard.volunteer_summary(self.volunteer_session)

        self.assertEqual(summary.available_positions, 4)
        self.assertEqual(summary.applied_positions, 2)
        self.assertEqual(summary.accepted_positions, 1)
        self.assertEqual(len(summary.recommendations), 3)
        self.assertNotIn(self.expired.id, [v.position.id for v in summary.recommendations])
        self.assertEqual(summary.recent_applications[0].position_id, self.created[1].id)

    def test_organization_summary(self):
        summary = self.dashboard.organization_summary(self.org_session)

        self.assertEqual(summary.active_positions, 4)
        self.assertEqual(summary.total_applications, 2)
        self.assertEqual(summary.positions_filled, 1)
        self.assertEqual(
            [v.position.id for v in summary.recent_positions],
            [self.created[3].id, self.created[2].id, self.created[1].id],
        )
        self.assertEqual(len(summary.recent_applications), 2)

    def test_roles_are_enforced(self):
        with self.assertRaises(Unauthorized):
            self.dashboard.volunteer_summary(self.org_session)
        with self.assertRaises(Unauthorized):
            self.dashboard.organization_summary(self.volunteer_session)


if __name__ == '__main__':
    unittest.main()
