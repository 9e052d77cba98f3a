"""
Digest email delivery for partner submissions.

This module handles:
- Building and sending partner digest emails via Resend
- Recording delivery failures for follow-up
- The daily digest CLI (process_partner_digests)
"""

from .email_sender import ResendNotifier, send_submission_digest
from .error_logger import log_notification_error

__all__ = [
    'ResendNotifier',
    'send_submission_digest',
    'log_notification_error',
]
