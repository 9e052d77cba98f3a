"""
CLI script for sending the daily partner submission digests.

Usage:
    # Send one digest per partner with pending approved submissions
    uv run python -m notifications.process_partner_digests --daily-batch

    # Dry run (resolve contacts, don't send emails or mark anything notified)
    uv run python -m notifications.process_partner_digests --daily-batch --dry-run
"""

import argparse
from typing import Optional

from partners.partner_submission_service import (
    PartnerSubmissionService,
    build_partner_submission_service,
)
from shared.utils import print_summary


def process_daily_batch(
    service: Optional[PartnerSubmissionService] = None, dry_run: bool = False
) -> dict[str, int]:
    """
    Run the daily partner digest batch and print a summary.

    Args:
        service: Service to use. Built from environment settings if None.
        dry_run: If True, don't actually send emails

    Returns:
        Dictionary with stats: sent, failed, skipped
    """
    service = service or build_partner_submission_service()

    print("Processing daily partner submission digests" + (" (dry run)" if dry_run else ""))
    stats = service.daily_batch(dry_run=dry_run)

    print_summary(
        "Partner Digest Processing Complete",
        sent=stats["sent"],
        skipped=stats["skipped"],
        failed=stats["failed"],
    )
    return stats


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Send daily partner submission digest emails"
    )

    parser.add_argument(
        "--daily-batch", action="store_true", help="Send daily partner digests"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Dry run mode (don't actually send emails)",
    )

    args = parser.parse_args(argv)

    if not args.daily_batch:
        parser.error("Must specify --daily-batch")

    process_daily_batch(dry_run=args.dry_run)


if __name__ == "__main__":
    main()
