"""
Triggers that keep partner submissions in sync with submission and partner changes.

- A submission moving into the approved state is paired with every partner.
- A newly registered partner is paired with every approved submission.
"""

from models import SUBMISSION_STATES, Partner, Submission
from models.types import GravityPartnerID, SubmissionID, SubmissionState
from partners.partner_submission_service import PartnerSubmissionService
from partners.stores import PartnerStore, SubmissionStore


def update_submission_state(
    submissions: SubmissionStore,
    service: PartnerSubmissionService,
    submission_id: SubmissionID,
    state: SubmissionState,
) -> Submission | None:
    """
    Change a submission's state and generate partner submissions on approval.

    Leaving the approved state does not remove existing partner submissions;
    they are simply no longer included in digests.

    Returns:
        The updated submission, or None if it does not exist

    Raises:
        ValueError: If state is not a known submission state
    """
    if state not in SUBMISSION_STATES:
        raise ValueError(f"Unknown submission state: {state!r}")

    current = submissions.find_by_id(submission_id)
    if current is None:
        return None

    updated = submissions.update_state(submission_id, state)
    if updated is None:
        return None

    if updated.is_approved and not current.is_approved:
        service.generate_for_all_partners(updated.id)

    return updated


def register_partner(
    partners: PartnerStore,
    service: PartnerSubmissionService,
    name: str,
    gravity_partner_id: GravityPartnerID | None = None,
) -> Partner:
    """Create a partner and pair it with every approved submission."""
    partner = partners.create(name, gravity_partner_id)
    service.generate_for_new_partner(partner)
    return partner
