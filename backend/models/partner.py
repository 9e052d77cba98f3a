"""Pydantic models for partners and partner/submission pairings."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from models.submission import Submission
from models.types import (
    GravityPartnerID,
    PartnerID,
    PartnerSubmissionID,
    SubmissionID,
)


class Partner(BaseModel):
    """Auction house or gallery that receives matched submissions."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: PartnerID
    name: str = Field(..., min_length=1)
    gravity_partner_id: GravityPartnerID | None = None
    created_at: datetime | None = None


class PartnerSubmission(BaseModel):
    """Pairing of one submission with one partner.

    A null notified_at means the pairing has not been included in a digest yet.
    """

    id: PartnerSubmissionID
    submission_id: SubmissionID
    partner_id: PartnerID
    notified_at: datetime | None = None
    created_at: datetime | None = None

    @property
    def is_pending(self) -> bool:
        return self.notified_at is None


class PendingPartnerSubmission(PartnerSubmission):
    """Pending pairing with its submission joined in."""

    submission: Submission
