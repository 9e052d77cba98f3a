"""
Email sending via Resend API for partner submission digests.

Builds one digest per partner listing its newly matched submissions.
"""

import html
from typing import Any, Dict, List, Optional

import resend

from models import Submission
from models.types import EmailAddress

DEFAULT_FROM_EMAIL = "consign@artsy.net"


def _prepare_submission_data(submissions: List[Submission]) -> List[Dict[str, Any]]:
    """
    Extract the fields shown in the digest, keeping the given order.

    Args:
        submissions: Submissions to list in the email

    Returns:
        List of dicts with display-ready title and year
    """
    prepared = []
    for submission in submissions:
        prepared.append({
            'title': submission.title or 'Untitled',
            'year': submission.year or '',
        })
    return prepared


def build_digest_subject(partner_name: str) -> str:
    return f"Artsy Submission Batch for: {partner_name}"


def send_submission_digest(
    to_addresses: List[EmailAddress],
    partner_name: str,
    submissions: List[Submission],
    from_email: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Send one digest email listing submissions to a partner's contacts.

    Args:
        to_addresses: Partner contact addresses
        partner_name: Partner display name used in subject and greeting
        submissions: Submissions to list, in display order
        from_email: Sender address (defaults to DEFAULT_FROM_EMAIL)

    Returns:
        Dictionary with 'success' (bool), 'email_id' (str if success), 'error' (str if failed)
    """
    if not to_addresses:
        return {'success': False, 'error': 'No recipients'}
    if not submissions:
        return {'success': False, 'error': 'No submissions to send'}

    prepared_submissions = _prepare_submission_data(submissions)

    subject = build_digest_subject(partner_name)
    html_body = _build_digest_html(partner_name, prepared_submissions)
    text_body = _build_digest_text(partner_name, prepared_submissions)

    try:
        response = resend.Emails.send({
            "from": f"Artsy Consignments <{from_email or DEFAULT_FROM_EMAIL}>",
            "to": list(to_addresses),
            "subject": subject,
            "html": html_body,
            "text": text_body
        })

        return {
            'success': True,
            'email_id': response.get('id')
        }

    except Exception as e:
        return {
            'success': False,
            'error': str(e)
        }


class ResendNotifier:
    """Digest notifier bound to one Resend account and sender address."""

    def __init__(self, api_key: Optional[str], from_email: str = DEFAULT_FROM_EMAIL):
        self.api_key = api_key
        self.from_email = from_email

    def send_digest(
        self,
        to_addresses: List[EmailAddress],
        partner_name: str,
        submissions: List[Submission],
    ) -> Dict[str, Any]:
        if not self.api_key:
            return {'success': False, 'error': 'RESEND_API_KEY is not configured'}

        resend.api_key = self.api_key
        return send_submission_digest(
            to_addresses, partner_name, submissions, from_email=self.from_email
        )


def _build_digest_html(partner_name: str, prepared_submissions: List[Dict[str, Any]]) -> str:
    """
    Build HTML email body for a submission digest.

    Args:
        partner_name: Partner display name
        prepared_submissions: Display-ready submission fields

    Returns:
        HTML string
    """
    html_body = f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{html.escape(build_digest_subject(partner_name))}</title>
</head>
<body>
    <p>Hello {html.escape(partner_name)},</p>
    <p>The following works were recently approved for consignment:</p>
    <ul>
"""

    for submission in prepared_submissions:
        year_html = (
            f"<span>, {html.escape(submission['year'])}</span>" if submission['year'] else ""
        )
        html_body += f"        <li><i>{html.escape(submission['title'])}</i>{year_html}</li>\n"

    html_body += """    </ul>
    <p>Reply to this email if you are interested in any of these works.</p>
</body>
</html>
"""

    return html_body


def _build_digest_text(partner_name: str, prepared_submissions: List[Dict[str, Any]]) -> str:
    """Build plain text email body for a submission digest."""
    text = f"""Hello {partner_name},

The following works were recently approved for consignment:

"""

    for i, submission in enumerate(prepared_submissions, 1):
        year_text = f", {submission['year']}" if submission['year'] else ""
        text += f"{i}. {submission['title']}{year_text}\n"

    text += "\nReply to this email if you are interested in any of these works.\n"

    return text
