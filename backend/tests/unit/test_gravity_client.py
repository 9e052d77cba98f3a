"""
Unit tests for partners/gravity_client.py

Tests partner and contact lookups, retry behavior, and error mapping.
"""

import unittest
from unittest.mock import Mock, patch

import requests

from partners.gravity_client import DirectoryLookupError, GravityClient
from tests.fixtures.mock_helpers import create_mock_requests_response


def _client(session, **kwargs):
    return GravityClient(
        "https://gravity.test/api/v1/",
        app_token="app-token",
        session=session,
        **kwargs,
    )


class TestGravityClientSetup(unittest.TestCase):
    """Tests for client construction"""

    def test_sets_app_token_header(self):
        session = requests.Session()

        client = _client(session)

        self.assertEqual(client.session.headers["X-XAPP-TOKEN"], "app-token")
        self.assertEqual(client.base_url, "https://gravity.test/api/v1")

    def test_without_token(self):
        session = requests.Session()

        GravityClient("https://gravity.test/api/v1", session=session)

        self.assertNotIn("X-XAPP-TOKEN", session.headers)


class TestGetPartner(unittest.TestCase):
    """Tests for partner lookups"""

    def test_display_name(self):
        session = Mock()
        session.get.return_value = create_mock_requests_response(
            json_data={"id": "partnerid", "name": "Juliens Auctions"}
        )

        name = _client(session).get_partner_display_name("partnerid")

        self.assertEqual(name, "Juliens Auctions")
        self.assertEqual(
            session.get.call_args.args[0], "https://gravity.test/api/v1/partner/partnerid"
        )

    def test_display_name_prefers_display_name(self):
        session = Mock()
        session.get.return_value = create_mock_requests_response(
            json_data={"name": "juliens", "display_name": "Julien's Auctions"}
        )

        self.assertEqual(_client(session).get_partner_display_name("partnerid"), "Julien's Auctions")

    def test_not_found_raises_without_retry(self):
        """4xx answers are not retried"""
        session = Mock()
        session.get.return_value = create_mock_requests_response(status_code=404)

        with self.assertRaises(DirectoryLookupError):
            _client(session).get_partner("missing")

        self.assertEqual(session.get.call_count, 1)

    def test_unexpected_payload(self):
        session = Mock()
        session.get.return_value = create_mock_requests_response(json_data=["not", "a", "dict"])

        with self.assertRaises(DirectoryLookupError):
            _client(session).get_partner("partnerid")


class TestGetPartnerContacts(unittest.TestCase):
    """Tests for contact lookups"""

    def test_returns_unique_emails_in_order(self):
        session = Mock()
        session.get.return_value = create_mock_requests_response(
            json_data=[
                {"email": "contact1@juliens.com"},
                {"email": "contact2@juliens.com"},
                {"email": "contact1@juliens.com"},
                {"email": ""},
                {"name": "No Email"},
            ]
        )

        emails = _client(session, communication_id="comm1").get_partner_contacts("partnerid")

        self.assertEqual(emails, ["contact1@juliens.com", "contact2@juliens.com"])
        self.assertEqual(
            session.get.call_args.args[0],
            "https://gravity.test/api/v1/partner/partnerid/partner_contacts",
        )
        self.assertEqual(
            session.get.call_args.kwargs["params"],
            {"size": "100", "communication_id": "comm1"},
        )

    def test_empty_contacts(self):
        session = Mock()
        session.get.return_value = create_mock_requests_response(json_data=[])

        self.assertEqual(_client(session).get_partner_contacts("partnerid"), [])
        self.assertNotIn("communication_id", session.get.call_args.kwargs["params"])

    def test_unexpected_payload(self):
        session = Mock()
        session.get.return_value = create_mock_requests_response(json_data={"error": "nope"})

        with self.assertRaises(DirectoryLookupError):
            _client(session).get_partner_contacts("partnerid")


class TestRetries(unittest.TestCase):
    """Tests for transient failure handling"""

    @patch("partners.gravity_client.time.sleep")
    def test_retries_server_errors(self, mock_sleep):
        session = Mock()
        session.get.side_effect = [
            create_mock_requests_response(status_code=502),
            create_mock_requests_response(json_data={"name": "Juliens Auctions"}),
        ]

        name = _client(session).get_partner_display_name("partnerid")

        self.assertEqual(name, "Juliens Auctions")
        mock_sleep.assert_called_once_with(1)

    @patch("partners.gravity_client.time.sleep")
    def test_retries_connection_errors_then_gives_up(self, mock_sleep):
        session = Mock()
        session.get.side_effect = requests.ConnectionError("connection refused")

        with self.assertRaises(DirectoryLookupError) as ctx:
            _client(session, max_retries=3).get_partner_contacts("partnerid")

        self.assertEqual(session.get.call_count, 3)
        self.assertEqual([c.args[0] for c in mock_sleep.call_args_list], [1, 2])
        self.assertIn("connection refused", str(ctx.exception))

    @patch("partners.gravity_client.time.sleep")
    def test_single_attempt(self, mock_sleep):
        session = Mock()
        session.get.side_effect = requests.Timeout("timed out")

        with self.assertRaises(DirectoryLookupError):
            _client(session, max_retries=1).get_partner("partnerid")

        mock_sleep.assert_not_called()


if __name__ == "__main__":
    unittest.main()
