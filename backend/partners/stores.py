"""
Supabase-backed stores for submissions, partners and partner submissions.

Each store wraps one table and exposes the named queries the matching and
digest logic needs, returning plain ordered lists of pydantic models.
"""

import re
from datetime import datetime
from typing import Any, Callable, cast

from postgrest.exceptions import APIError
from supabase import Client

from models import (
    APPROVED,
    SUBMISSION_STATES,
    Partner,
    PartnerSubmission,
    PendingPartnerSubmission,
    Submission,
)
from models.types import (
    GravityPartnerID,
    PartnerID,
    PartnerSubmissionID,
    SubmissionID,
    SubmissionState,
)
from shared.utils import is_valid_uuid

SUBMISSION_COLUMNS = "id, state, user_id, artist_id, title, year, created_at"
PARTNER_COLUMNS = "id, name, gravity_partner_id, created_at"
PARTNER_SUBMISSION_COLUMNS = "id, submission_id, partner_id, notified_at, created_at"

# Postgres unique_violation
UNIQUE_VIOLATION_CODE = "23505"

# PostgREST caps a single response at this many rows by default
PAGE_SIZE = 1000

# Characters with meaning inside a PostgREST or() filter or a LIKE pattern
_SEARCH_RESERVED = re.compile(r'[,()."\\:%_*]')


def _rows(response: Any) -> list[dict[str, Any]]:
    return cast(list[dict[str, Any]], response.data or [])


def _fetch_all(build_query: Callable[[], Any], page_size: int) -> list[dict[str, Any]]:
    """
    Run a query page by page until a short page comes back.

    Args:
        build_query: Returns a fresh, ordered query builder for each page
        page_size: Rows requested per page

    Returns:
        All rows across pages, in query order
    """
    rows: list[dict[str, Any]] = []
    start = 0
    while True:
        page = _rows(build_query().range(start, start + page_size - 1).execute())
        rows.extend(page)
        if len(page) < page_size:
            return rows
        start += page_size


def is_duplicate_error(error: Exception) -> bool:
    """True if a database error is a unique-constraint violation."""
    code = error.code if isinstance(error, APIError) else getattr(error, "code", None)
    if code:
        return code == UNIQUE_VIOLATION_CODE
    # Errors without a SQLSTATE only carry the Postgres message text
    return "duplicate key value violates unique constraint" in str(error).lower()


class SubmissionStore:
    """Read access (plus state updates) for the submissions table."""

    table_name = "submissions"

    def __init__(self, client: Client, page_size: int = PAGE_SIZE):
        self.client = client
        self.page_size = page_size

    def find_approved(self) -> list[Submission]:
        rows = _fetch_all(
            lambda: self.client.table(self.table_name)
            .select(SUBMISSION_COLUMNS)
            .eq("state", APPROVED)
            .order("created_at", desc=False)
            .order("id", desc=False),
            self.page_size,
        )
        return [Submission.model_validate(row) for row in rows]

    def find_by_id(self, submission_id: SubmissionID) -> Submission | None:
        if not is_valid_uuid(submission_id):
            return None

        response = (
            self.client.table(self.table_name)
            .select(SUBMISSION_COLUMNS)
            .eq("id", submission_id)
            .limit(1)
            .execute()
        )
        rows = _rows(response)
        return Submission.model_validate(rows[0]) if rows else None

    def update_state(
        self, submission_id: SubmissionID, state: SubmissionState
    ) -> Submission | None:
        if state not in SUBMISSION_STATES:
            raise ValueError(f"Unknown submission state: {state!r}")
        if not is_valid_uuid(submission_id):
            return None

        response = (
            self.client.table(self.table_name)
            .update({"state": state})
            .eq("id", submission_id)
            .execute()
        )
        rows = _rows(response)
        return Submission.model_validate(rows[0]) if rows else None


class PartnerStore:
    """Access to the partners table."""

    table_name = "partners"

    def __init__(self, client: Client, page_size: int = PAGE_SIZE):
        self.client = client
        self.page_size = page_size

    def find_all(self) -> list[Partner]:
        rows = _fetch_all(
            lambda: self.client.table(self.table_name)
            .select(PARTNER_COLUMNS)
            .order("created_at", desc=False)
            .order("id", desc=False),
            self.page_size,
        )
        return [Partner.model_validate(row) for row in rows]

    def find_by_id(self, partner_id: PartnerID) -> Partner | None:
        if not is_valid_uuid(partner_id):
            return None

        response = (
            self.client.table(self.table_name)
            .select(PARTNER_COLUMNS)
            .eq("id", partner_id)
            .limit(1)
            .execute()
        )
        rows = _rows(response)
        return Partner.model_validate(rows[0]) if rows else None

    def search_by_name(self, prefix: str) -> list[Partner]:
        """
        Case-insensitive search for names with a word starting with prefix.

        "Auct" finds "Juliens Auctions" as well as "Auction House".
        Wildcards and filter punctuation in the prefix are treated as spaces.
        """
        term = " ".join(_SEARCH_RESERVED.sub(" ", prefix or "").split())
        if not term:
            return []

        response = (
            self.client.table(self.table_name)
            .select(PARTNER_COLUMNS)
            .or_(f"name.ilike.{term}%,name.ilike.% {term}%")
            .order("name", desc=False)
            .execute()
        )
        return [Partner.model_validate(row) for row in _rows(response)]

    def create(
        self, name: str, gravity_partner_id: GravityPartnerID | None = None
    ) -> Partner:
        response = (
            self.client.table(self.table_name)
            .insert({"name": name, "gravity_partner_id": gravity_partner_id})
            .execute()
        )
        rows = _rows(response)
        if not rows:
            raise RuntimeError(f"Partner insert returned no row for {name!r}")
        return Partner.model_validate(rows[0])


class PartnerSubmissionStore:
    """Access to the partner_submissions join table.

    The table carries a unique constraint on (submission_id, partner_id);
    create() treats a violation of it as "already exists".
    """

    table_name = "partner_submissions"

    def __init__(self, client: Client, page_size: int = PAGE_SIZE):
        self.client = client
        self.page_size = page_size

    def exists_for(self, submission_id: SubmissionID, partner_id: PartnerID) -> bool:
        response = (
            self.client.table(self.table_name)
            .select("id")
            .eq("submission_id", submission_id)
            .eq("partner_id", partner_id)
            .limit(1)
            .execute()
        )
        return len(_rows(response)) > 0

    def create(self, submission_id: SubmissionID, partner_id: PartnerID) -> bool:
        """
        Create the pairing unless it already exists.

        Returns:
            True if a row was inserted, False if the pair already existed
        """
        if self.exists_for(submission_id, partner_id):
            return False

        try:
            self.client.table(self.table_name).insert(
                {"submission_id": submission_id, "partner_id": partner_id},
                returning="minimal",
            ).execute()
        except Exception as e:
            # A concurrent run inserted the same pair between check and insert
            if is_duplicate_error(e):
                return False
            raise

        return True

    def find_for_partner(self, partner_id: PartnerID) -> list[PartnerSubmission]:
        response = (
            self.client.table(self.table_name)
            .select(PARTNER_SUBMISSION_COLUMNS)
            .eq("partner_id", partner_id)
            .order("created_at", desc=False)
            .execute()
        )
        return [PartnerSubmission.model_validate(row) for row in _rows(response)]

    def find_for_submission(
        self, submission_id: SubmissionID
    ) -> list[PartnerSubmission]:
        response = (
            self.client.table(self.table_name)
            .select(PARTNER_SUBMISSION_COLUMNS)
            .eq("submission_id", submission_id)
            .order("created_at", desc=False)
            .execute()
        )
        return [PartnerSubmission.model_validate(row) for row in _rows(response)]

    def find_pending(
        self, partner_id: PartnerID | None = None
    ) -> list[PendingPartnerSubmission]:
        """
        Get pending pairings whose submission is still approved.

        The approval filter runs in the database through an inner join, so
        rows for submissions that left the approved state never take up a page.

        Args:
            partner_id: Restrict to one partner. If None, all partners.

        Returns:
            Pending pairings in creation order, each with its submission joined
        """

        def build_query():
            query = (
                self.client.table(self.table_name)
                .select(
                    f"{PARTNER_SUBMISSION_COLUMNS}, "
                    f"submission:submissions!inner({SUBMISSION_COLUMNS})"
                )
                .is_("notified_at", "null")
                .eq("submission.state", APPROVED)
            )
            if partner_id:
                query = query.eq("partner_id", partner_id)
            return query.order("created_at", desc=False).order("id", desc=False)

        return [
            PendingPartnerSubmission.model_validate(row)
            for row in _fetch_all(build_query, self.page_size)
            if row.get("submission")
        ]

    def mark_notified(
        self, ids: list[PartnerSubmissionID], notified_at: datetime
    ) -> int:
        """
        Set notified_at on the given pairings in a single update.

        Rows that were already notified are left untouched.

        Returns:
            Number of rows updated
        """
        if not ids:
            return 0

        response = (
            self.client.table(self.table_name)
            .update({"notified_at": notified_at.isoformat()})
            .in_("id", ids)
            .is_("notified_at", "null")
            .execute()
        )
        return len(_rows(response))
