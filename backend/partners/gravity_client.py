"""
Client for the Gravity partner directory.

Resolves a partner's display name and the contacts that should receive
consignment submission digests.
"""

import time
from typing import Any, Optional

import requests

from models.types import EmailAddress, GravityPartnerID


class DirectoryLookupError(Exception):
    """Raised when the directory cannot answer a partner lookup."""


class GravityClient:
    """Looks up partners and partner contacts in Gravity"""

    def __init__(
        self,
        base_url: str,
        app_token: Optional[str] = None,
        communication_id: Optional[str] = None,
        timeout: float = 30.0,
        max_retries: int = 3,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.communication_id = communication_id
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if app_token:
            self.session.headers.update({"X-XAPP-TOKEN": app_token})

    def _get_json(self, path: str, params: Optional[dict[str, str]] = None) -> Any:
        """GET a directory resource, retrying transient failures."""
        url = f"{self.base_url}/{path.lstrip('/')}"
        last_error: Optional[Exception] = None

        for attempt in range(self.max_retries):
            try:
                response = self.session.get(url, params=params, timeout=self.timeout)
            except requests.RequestException as e:
                last_error = e
            else:
                if response.status_code < 400:
                    return response.json()
                if response.status_code < 500:
                    # Client errors will not change on retry
                    raise DirectoryLookupError(
                        f"Gravity returned {response.status_code} for {path}"
                    )
                last_error = requests.HTTPError(
                    f"{response.status_code} Server Error for {url}"
                )

            if attempt < self.max_retries - 1:
                print(f"  ⚠ Gravity request failed (attempt {attempt + 1}): {last_error}")
                time.sleep(2**attempt)

        raise DirectoryLookupError(
            f"Gravity request for {path} failed after {self.max_retries} attempts: {last_error}"
        )

    def get_partner(self, gravity_partner_id: GravityPartnerID) -> dict[str, Any]:
        partner = self._get_json(f"partner/{gravity_partner_id}")
        if not isinstance(partner, dict):
            raise DirectoryLookupError(
                f"Unexpected partner payload for {gravity_partner_id}"
            )
        return partner

    def get_partner_display_name(self, gravity_partner_id: GravityPartnerID) -> str:
        partner = self.get_partner(gravity_partner_id)
        return str(partner.get("display_name") or partner.get("name") or "")

    def get_partner_contacts(
        self, gravity_partner_id: GravityPartnerID
    ) -> list[EmailAddress]:
        """
        Get e-mail addresses of the partner's consignment contacts.

        Args:
            gravity_partner_id: Partner id in Gravity

        Returns:
            Unique addresses in directory order (possibly empty)
        """
        params = {"size": "100"}
        if self.communication_id:
            params["communication_id"] = self.communication_id

        contacts = self._get_json(
            f"partner/{gravity_partner_id}/partner_contacts", params=params
        )
        if not isinstance(contacts, list):
            raise DirectoryLookupError(
                f"Unexpected contacts payload for {gravity_partner_id}"
            )

        emails: list[EmailAddress] = []
        for contact in contacts:
            email = (contact.get("email") or "").strip() if isinstance(contact, dict) else ""
            if email and email not in emails:
                emails.append(email)
        return emails
