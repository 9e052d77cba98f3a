"""Pydantic models for data validation and type checking."""

from models.partner import Partner, PartnerSubmission, PendingPartnerSubmission
from models.submission import APPROVED, SUBMISSION_STATES, Submission

__all__ = [
    "Submission",
    "SUBMISSION_STATES",
    "APPROVED",
    "Partner",
    "PartnerSubmission",
    "PendingPartnerSubmission",
]
