"""
CLI script for generating partner submissions by hand.

Usage:
    # Pair a partner with every approved submission
    uv run python -m partners.generate_partner_submissions --partner-id <uuid>

    # Pair an approved submission with every partner
    uv run python -m partners.generate_partner_submissions --submission-id <uuid>
"""

import argparse
from typing import Optional

from models.types import PartnerID, SubmissionID
from partners.partner_submission_service import (
    PartnerSubmissionService,
    build_partner_submission_service,
)


def generate(
    service: PartnerSubmissionService,
    partner_id: Optional[str] = None,
    submission_id: Optional[str] = None,
) -> int:
    """
    Run the requested generation.

    Returns:
        Number of partner submissions created

    Raises:
        ValueError: If the partner does not exist
    """
    if partner_id:
        partner = service.partners.find_by_id(PartnerID(partner_id))
        if partner is None:
            raise ValueError(f"Partner not found: {partner_id}")
        return service.generate_for_new_partner(partner)

    return service.generate_for_all_partners(SubmissionID(submission_id or ""))


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Generate partner submissions")

    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        "--partner-id", type=str, help="Pair this partner with all approved submissions"
    )
    group.add_argument(
        "--submission-id", type=str, help="Pair this approved submission with all partners"
    )

    args = parser.parse_args(argv)

    service = build_partner_submission_service()
    try:
        created = generate(
            service, partner_id=args.partner_id, submission_id=args.submission_id
        )
    except ValueError as e:
        parser.error(str(e))

    print(f"Created {created} partner submissions")


if __name__ == "__main__":
    main()
