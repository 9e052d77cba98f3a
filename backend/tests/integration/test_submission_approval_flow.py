"""
Integration tests for the approval -> matching -> digest workflow.

Drives the hooks the way the submission and partner admin flows do, then runs
the daily batch against in-memory stores.
"""

import unittest
from unittest.mock import Mock, patch

from partners.hooks import register_partner, update_submission_state
from tests.fixtures.in_memory_stores import InMemoryWorld


class TestUpdateSubmissionState(unittest.TestCase):
    """Tests for update_submission_state()"""

    def setUp(self):
        self.world = InMemoryWorld()

    def test_approval_pairs_with_all_partners(self):
        """Submitted -> approved with two partners creates two rows"""
        juliens = self.world.add_partner("Juliens Auctions", "partnerid")
        phillips = self.world.add_partner("Phillips Auctions", "phillips")
        submission = self.world.submissions.add(state="submitted")

        updated = update_submission_state(
            self.world.submissions, self.world.service, submission.id, "approved"
        )

        self.assertTrue(updated.is_approved)
        rows = self.world.partner_submissions.find_for_submission(submission.id)
        self.assertEqual(sorted(r.partner_id for r in rows), sorted([juliens.id, phillips.id]))

    def test_reapproval_does_not_regenerate(self):
        """Already-approved submissions don't trigger generation again"""
        submission = self.world.submissions.add(state="approved")
        service = Mock()

        update_submission_state(self.world.submissions, service, submission.id, "approved")

        service.generate_for_all_partners.assert_not_called()

    def test_rejection_keeps_existing_rows(self):
        """Leaving approved doesn't retract pairings"""
        self.world.add_partner("Juliens Auctions", "partnerid")
        submission = self.world.submissions.add(state="submitted")
        update_submission_state(self.world.submissions, self.world.service, submission.id, "approved")

        update_submission_state(self.world.submissions, self.world.service, submission.id, "rejected")

        rows = self.world.partner_submissions.find_for_submission(submission.id)
        self.assertEqual(len(rows), 1)
        self.assertIsNone(rows[0].notified_at)
        self.assertEqual(self.world.partner_submissions.find_pending(), [])

    def test_unknown_submission(self):
        self.assertIsNone(
            update_submission_state(self.world.submissions, self.world.service, "missing", "approved")
        )

    def test_unknown_state(self):
        submission = self.world.submissions.add(state="submitted")

        with self.assertRaises(ValueError):
            update_submission_state(self.world.submissions, self.world.service, submission.id, "published")


class TestRegisterPartner(unittest.TestCase):
    """Tests for register_partner()"""

    def test_new_partner_gets_approved_submissions(self):
        world = InMemoryWorld()
        world.submissions.add(state="approved")
        world.submissions.add(state="approved")
        world.submissions.add(state="submitted")

        partner = register_partner(world.partners, world.service, "Phillips Auctions", "phillips")

        self.assertEqual(partner.name, "Phillips Auctions")
        self.assertEqual(len(world.partner_submissions.find_for_partner(partner.id)), 2)


class TestFullWorkflow(unittest.TestCase):
    """End-to-end: approvals, a late partner, and two daily batches"""

    @patch("partners.partner_submission_service.log_notification_error", return_value="/tmp/error.txt")
    def test_digest_lifecycle(self, mock_log):
        world = InMemoryWorld()
        juliens = world.add_partner("Juliens Auctions", "partnerid", ["a@juliens.com"])
        world.submissions.add(state="submitted")
        approved = []
        for title, year in [
            ("First approved artwork", "1992"),
            ("Second approved artwork", "1993"),
            ("Third approved artwork", "1997"),
        ]:
            submission = world.submissions.add(state="submitted", title=title, year=year)
            update_submission_state(world.submissions, world.service, submission.id, "approved")
            approved.append(submission)
        world.submissions.add(state="rejected")

        self.assertEqual(len(world.partner_submissions.find_for_partner(juliens.id)), 3)

        phillips = register_partner(world.partners, world.service, "Phillips Auctions", "phillips")
        world.directory.add_partner("phillips", "Phillips Auctions", [])

        stats = world.service.daily_batch()

        self.assertEqual(stats, {"sent": 1, "failed": 0, "skipped": 1})
        self.assertEqual(len(world.notifier.sent), 1)
        self.assertEqual(world.notifier.sent[0]["partner_name"], "Juliens Auctions")
        self.assertEqual(
            world.notifier.sent[0]["titles"],
            ["First approved artwork", "Second approved artwork", "Third approved artwork"],
        )
        for submission in approved:
            self.assertEqual(len(world.partner_submissions.find_for_submission(submission.id)), 2)
        self.assertEqual(len(world.partner_submissions.find_pending(phillips.id)), 3)

        # Second run: Juliens already notified, Phillips still has no contacts
        stats = world.service.daily_batch()

        self.assertEqual(stats, {"sent": 0, "failed": 0, "skipped": 1})
        self.assertEqual(len(world.notifier.sent), 1)
        mock_log.assert_not_called()


if __name__ == "__main__":
    unittest.main()
