#!/usr/bin/env python3
"""
Tests for PositionService: publishing, browsing, filtering and sorting.
"""

import unittest

from core.clock import FixedClock
from core.exceptions import NotFound, Unauthorized, ValidationError
from core.positions import PositionService
from core.profiles import ProfileService
from core.session import UserSession
from tests import T0, days, make_test_store, organization_data, position_data, volunteer_data


class PositionServiceTestCase(unittest.TestCase):

    def setUp(self):
        self.engine, _, self.uow = make_test_store()
        self.clock = FixedClock(T0)
        self.profiles = ProfileService(uow=self.uow, clock=self.clock)
        self.service = PositionService(uow=self.uow, clock=self.clock)

        self.org = self.profiles.register(organization_data())
        self.other_org = self.profiles.register(
            organization_data(email="hello@greenearth.example.org", organizationName="Green Earth")
        )
        self.volunteer = self.profiles.register(volunteer_data())

        self.org_session = UserSession.organization(self.org.id)
        self.other_session = UserSession.organization(self.other_org.id)
        self.volunteer_session = UserSession.volunteer(self.volunteer.id)

    def tearDown(self):
        self.engine.dispose()


class TestCreatePosition(PositionServiceTestCase):

    def test_create_and_get(self):
        position = self.service.create_position(self.org_session, position_data())

        self.assertEqual(position.ngo_id, self.org.id)
        self.assertEqual(position.created_at, T0)
        self.assertEqual(position.valid_for_days, 30)

        view = self.service.get_position(position.id, now=T0 + days(29))
        self.assertEqual(view.position, position)
        self.assertFalse(view.is_expired)
        self.assertEqual(view.days_remaining, 1)
        self.assertEqual(view.ngo_name, "Literacy First")

    def test_validity_defaults_to_thirty_days(self):
        data = position_data()
        del data["validForDays"]
        position = self.service.create_position(self.org_session, data)
        self.assertEqual(position.valid_for_days, 30)

    def test_validity_limits(self):
        for value, message in [(0, "greater than 0"), (400, "365")]:
            with self.subTest(value=value):
                with self.assertRaises(ValidationError) as ctx:
                    self.service.create_position(self.org_session, position_data(validForDays=value))
                self.assertIn(message, ctx.exception.errors["valid_for_days"])

    def test_volunteers_cannot_create(self):
        with self.assertRaises(Unauthorized):
            self.service.create_position(self.volunteer_session, position_data())

    def test_get_unknown_position(self):
        with self.assertRaises(NotFound):
            self.service.get_position("missing")


class TestBrowse(PositionServiceTestCase):

    def setUp(self):
        super().setUp()
        self.tutor = self.service.create_position(
            self.org_session, position_data(title="Reading tutor", validForDays=30), now=T0
        )
        self.clinic = self.service.create_position(
            self.org_session,
            position_data(
                title="Clinic helper",
                description="Support the weekend health camp",
                cause="health",
                requiredSkills=["medicalAid"],
            ),
            now=T0 + 1,
        )
        self.short = self.service.create_position(
            self.other_session,
            position_data(title="Library drive", location="mumbai", validForDays=5),
            now=T0 + 2,
        )
        self.now = T0 + days(3)

    def ids(self, views):
        return [v.position.id for v in views]

    def test_volunteer_sees_all_by_relevance(self):
        views = self.service.browse(self.volunteer_session, now=self.now)

        self.assertEqual(self.ids(views), [self.tutor.id, self.short.id, self.clinic.id])
        self.assertTrue(all(v.breakdown is not None for v in views))
        scores = [v.relevance_score for v in views]
        self.assertEqual(scores, sorted(scores, reverse=True))

    def test_organization_sees_own_newest_first(self):
        views = self.service.browse(self.org_session, now=self.now)
        self.assertEqual(self.ids(views), [self.clinic.id, self.tutor.id])
        self.assertTrue(all(v.breakdown is None for v in views))

    def test_expired_positions_hidden_by_default(self):
        later = T0 + days(10)
        self.assertNotIn(self.short.id, self.ids(self.service.browse(self.volunteer_session, now=later)))

        shown = self.service.browse(self.volunteer_session, now=later, show_expired=True)
        self.assertIn(self.short.id, self.ids(shown))

    def test_filters(self):
        by_cause = self.service.browse(self.volunteer_session, now=self.now, cause="health")
        self.assertEqual(self.ids(by_cause), [self.clinic.id])

        by_location = self.service.browse(self.volunteer_session, now=self.now, location="mumbai")
        self.assertEqual(self.ids(by_location), [self.short.id])

    def test_search_matches_title_or_description(self):
        by_title = self.service.browse(self.volunteer_session, now=self.now, search_query="LIBRARY")
        self.assertEqual(self.ids(by_title), [self.short.id])

        by_description = self.service.browse(self.volunteer_session, now=self.now, search_query="health camp")
        self.assertEqual(self.ids(by_description), [self.clinic.id])

    def test_expiring_soon(self):
        views = self.service.browse(self.volunteer_session, now=self.now, sort="expiring_soon")
        self.assertEqual(views[0].position.id, self.short.id)
        self.assertEqual(views[0].days_remaining, 3)

    def test_unknown_sort(self):
        with self.assertRaises(ValidationError):
            self.service.browse(self.volunteer_session, now=self.now, sort="alphabetical")

    def test_ngo_names_are_attached(self):
        views = {v.position.id: v for v in self.service.browse(self.volunteer_session, now=self.now)}
        self.assertEqual(views[self.short.id].ngo_name, "Green Earth")
        self.assertEqual(views[self.tutor.id].ngo_name, "Literacy First")

    def test_list_for_organization_puts_open_positions_first(self):
        views = self.service.list_for_organization(self.other_org.id, now=T0 + days(10))
        self.assertEqual(len(views), 1)
        self.assertTrue(views[0].is_expired)

        extra = self.service.create_position(self.other_session, position_data(title="Fresh"), now=T0)
        views = self.service.list_for_organization(self.other_org.id, now=T0 + days(10))
        self.assertEqual([v.position.id for v in views], [extra.id, self.short.id])


if __name__ == '__main__':
    unittest.main()
