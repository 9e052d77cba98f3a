"""
Partner matching and daily digest batching.

Approved submissions are paired with every partner (one partner_submissions
row per pair), and once a day each partner with pending pairings gets a single
digest email listing them.
"""

import time
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Protocol

from config.settings import Settings, get_settings
from models import Partner, PendingPartnerSubmission, Submission
from models.types import EmailAddress, GravityPartnerID, PartnerID, SubmissionID
from notifications.email_sender import ResendNotifier
from notifications.error_logger import log_notification_error
from partners.gravity_client import DirectoryLookupError, GravityClient
from partners.stores import PartnerStore, PartnerSubmissionStore, SubmissionStore
from shared.db import get_supabase_client
from shared.utils import utc_now


class PartnerDirectory(Protocol):
    def get_partner_display_name(self, gravity_partner_id: GravityPartnerID) -> str: ...

    def get_partner_contacts(
        self, gravity_partner_id: GravityPartnerID
    ) -> List[EmailAddress]: ...


class DigestNotifier(Protocol):
    def send_digest(
        self,
        to_addresses: List[EmailAddress],
        partner_name: str,
        submissions: List[Submission],
    ) -> Dict[str, Any]: ...


class PartnerSubmissionService:
    """Generates partner submissions and delivers the daily partner digests."""

    def __init__(
        self,
        submissions: SubmissionStore,
        partners: PartnerStore,
        partner_submissions: PartnerSubmissionStore,
        directory: PartnerDirectory,
        notifier: DigestNotifier,
        send_interval_seconds: float = 0.0,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.submissions = submissions
        self.partners = partners
        self.partner_submissions = partner_submissions
        self.directory = directory
        self.notifier = notifier
        self.send_interval_seconds = send_interval_seconds
        self.clock = clock

    def generate_for_new_partner(self, partner: Partner) -> int:
        """
        Pair a partner with every currently approved submission.

        Pairs that already exist are skipped, so calling this repeatedly is safe.

        Returns:
            Number of partner submissions created
        """
        created = 0
        for submission in self.submissions.find_approved():
            if self.partner_submissions.create(submission.id, partner.id):
                created += 1

        print(f"✓ Generated {created} partner submissions for partner {partner.id}")
        return created

    def generate_for_all_partners(self, submission_id: SubmissionID) -> int:
        """
        Pair a newly approved submission with every partner.

        A submission that does not exist or is not approved is left alone.

        Returns:
            Number of partner submissions created
        """
        submission = self.submissions.find_by_id(submission_id)
        if submission is None or not submission.is_approved:
            return 0

        created = 0
        for partner in self.partners.find_all():
            if self.partner_submissions.create(submission.id, partner.id):
                created += 1

        print(f"✓ Generated {created} partner submissions for submission {submission_id}")
        return created

    def daily_batch(self, dry_run: bool = False) -> Dict[str, int]:
        """
        Send one digest per partner with pending approved submissions.

        Each partner is handled on its own: contacts are resolved, the digest is
        sent, and only then are the included rows marked notified. A partner
        without contacts, or whose lookup or send fails, keeps its rows pending
        for the next run.

        Args:
            dry_run: If True, resolve contacts but don't send or mark anything

        Returns:
            Dictionary with stats: sent, failed, skipped
        """
        stats = {"sent": 0, "failed": 0, "skipped": 0}

        pending_by_partner = self._group_pending_by_partner()
        if not pending_by_partner:
            print("No pending partner submissions to process.")
            return stats

        print(f"Found pending submissions for {len(pending_by_partner)} partners")

        for partner_id, pending in pending_by_partner.items():
            print(f"\nProcessing partner {partner_id} ({len(pending)} submissions)...")
            outcome = self._deliver_partner_submissions(partner_id, pending, dry_run)
            stats[outcome] += 1

        return stats

    def _group_pending_by_partner(
        self,
    ) -> Dict[PartnerID, List[PendingPartnerSubmission]]:
        # Rows arrive in creation order; dicts keep partners in first-seen order
        pending_by_partner: Dict[PartnerID, List[PendingPartnerSubmission]] = {}
        for partner_submission in self.partner_submissions.find_pending():
            pending_by_partner.setdefault(partner_submission.partner_id, []).append(
                partner_submission
            )
        return pending_by_partner

    def _deliver_partner_submissions(
        self,
        partner_id: PartnerID,
        pending: List[PendingPartnerSubmission],
        dry_run: bool,
    ) -> str:
        """Deliver one partner's digest. Returns 'sent', 'skipped' or 'failed'."""
        partner = self.partners.find_by_id(partner_id)
        if partner is None:
            print("  ⚠️  Partner not found, skipping")
            return "skipped"

        if not partner.gravity_partner_id:
            print("  ⚠️  Partner has no Gravity id, skipping")
            return "skipped"

        try:
            contacts = self.directory.get_partner_contacts(partner.gravity_partner_id)
            if not contacts:
                print("  ⚠️  No partner contacts, skipping")
                return "skipped"
            partner_name = (
                self.directory.get_partner_display_name(partner.gravity_partner_id)
                or partner.name
            )
        except DirectoryLookupError as e:
            error_file = log_notification_error(
                error_type="directory",
                error_message=str(e),
                context={
                    "partner_id": partner_id,
                    "gravity_partner_id": partner.gravity_partner_id,
                    "pending_count": len(pending),
                },
            )
            print(f"  ✗ Directory lookup failed for partner {partner_id}: {e}")
            print(f"    Error details logged to: {error_file}")
            return "failed"

        submissions = [partner_submission.submission for partner_submission in pending]

        if dry_run:
            print(f"  [DRY RUN] Would send {len(submissions)} submissions to {len(contacts)} contacts")
            return "sent"

        try:
            result = self.notifier.send_digest(contacts, partner_name, submissions)
        except Exception as e:
            result = {"success": False, "error": str(e)}

        if not result.get("success"):
            error_msg = str(result.get("error", "Unknown error"))
            error_file = log_notification_error(
                error_type="sending",
                error_message=error_msg,
                context={
                    "partner_id": partner_id,
                    "partner_name": partner_name,
                    "recipients": contacts,
                    "submission_ids": [s.id for s in submissions],
                },
            )
            print(f"  ✗ Failed to send to partner {partner_id}: {error_msg}")
            print(f"    Error details logged to: {error_file}")
            return "failed"

        self.partner_submissions.mark_notified(
            [partner_submission.id for partner_submission in pending], self.clock()
        )
        print(f"  ✓ Sent digest to {partner_name} ({len(contacts)} contacts)")

        # Rate limiting between sends
        if self.send_interval_seconds:
            time.sleep(self.send_interval_seconds)

        return "sent"


def build_partner_submission_service(
    settings: Optional[Settings] = None,
) -> PartnerSubmissionService:
    """Wire the service to Supabase, Gravity and Resend from settings."""
    settings = settings or get_settings()
    client = get_supabase_client(settings)

    directory = GravityClient(
        settings.gravity_api_url,
        app_token=settings.gravity_app_token,
        communication_id=settings.consignment_communication_id,
        timeout=settings.gravity_timeout_seconds,
        max_retries=settings.gravity_max_retries,
    )
    notifier = ResendNotifier(
        settings.resend_api_key, from_email=settings.notification_from_email
    )

    return PartnerSubmissionService(
        submissions=SubmissionStore(client),
        partners=PartnerStore(client),
        partner_submissions=PartnerSubmissionStore(client),
        directory=directory,
        notifier=notifier,
        send_interval_seconds=settings.digest_send_interval_seconds,
    )
