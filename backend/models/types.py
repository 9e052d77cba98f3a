"""Shared type definitions for type checking.

Uses NewType for IDs to provide compile-time type safety - prevents mixing
different ID types (e.g., passing PartnerID where SubmissionID expected).

Uses TypeAlias for types that are purely structural.
"""

from typing import NewType, TypeAlias

# ID types using NewType for type safety
SubmissionID = NewType("SubmissionID", str)
PartnerID = NewType("PartnerID", str)
PartnerSubmissionID = NewType("PartnerSubmissionID", str)
UserID = NewType("UserID", str)
ArtistID = NewType("ArtistID", str)

# Identifier of a partner in the Gravity directory (not our database id)
GravityPartnerID = NewType("GravityPartnerID", str)

# Structural aliases
EmailAddress: TypeAlias = str
SubmissionState: TypeAlias = str  # one of SUBMISSION_STATES
