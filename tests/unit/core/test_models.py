import unittest

from core.models import Application, ApplicationStatus, Position, Role, UserProfile


class TestRecordParsing(unittest.TestCase):

    def test_legacy_ngo_role(self):
        self.assertEqual(Role.parse("ngo"), Role.ORGANIZATION)
        self.assertEqual(Role.parse(" Volunteer "), Role.VOLUNTEER)
        with self.assertRaises(ValueError):
            Role.parse("admin")

    def test_position_record_with_string_numbers(self):
        position = Position.from_record({
            "positionId": "p1",
            "ngoId": "o1",
            "title": "Tutor",
            "description": "Reading help",
            "cause": "education",
            "location": "delhi",
            "requiredSkills": ["teaching"],
            "availability": ["weekends"],
            "urgency": "4",
            "createdAt": "1704067200000",
            "validForDays": "",
        })
        self.assertEqual(position.urgency, 4)
        self.assertEqual(position.created_at, 1704067200000)
        self.assertIsNone(position.valid_for_days)
        self.assertEqual(position.required_skills, frozenset({"teaching"}))

    def test_position_record_uses_camel_case_keys(self):
        record = Position(
            id="p1", ngo_id="o1", title="t", description="d", cause="health", location="delhi",
            required_skills=frozenset({"medicalAid", "teaching"}), created_at=5, valid_for_days=30,
        ).to_record()
        self.assertEqual(record["requiredSkills"], ["medicalAid", "teaching"])
        self.assertEqual(record["validForDays"], 30)
        self.assertNotIn("is_expired", record)

    def test_organization_record_has_no_volunteer_lists(self):
        org = UserProfile(id="o1", role=Role.ORGANIZATION, name="Meera", email="m@example.org",
                          organization_name="Literacy First")
        record = org.to_record()
        self.assertEqual(record["organizationName"], "Literacy First")
        self.assertNotIn("skills", record)
        self.assertEqual(org.display_name, "Literacy First")

    def test_application_status_is_parsed(self):
        application = Application.from_record({
            "applicationId": "a1", "volunteerId": "v1", "positionId": "p1",
            "ngoId": "o1", "status": "Accepted", "appliedAt": 10,
        })
        self.assertEqual(application.status, ApplicationStatus.ACCEPTED)
        self.assertEqual(application.with_status(ApplicationStatus.REJECTED).to_record()["status"], "rejected")


if __name__ == '__main__':
    unittest.main()
