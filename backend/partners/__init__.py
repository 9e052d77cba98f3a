"""
Partner matching for approved consignment submissions.

This module handles:
- Pairing approved submissions with partners (partner submissions)
- Looking up partner names and contacts in Gravity
- Batching pending partner submissions into daily digests
"""

from .gravity_client import DirectoryLookupError, GravityClient
from .partner_submission_service import (
    PartnerSubmissionService,
    build_partner_submission_service,
)
from .stores import PartnerStore, PartnerSubmissionStore, SubmissionStore

__all__ = [
    'PartnerSubmissionService',
    'build_partner_submission_service',
    'GravityClient',
    'DirectoryLookupError',
    'SubmissionStore',
    'PartnerStore',
    'PartnerSubmissionStore',
]
