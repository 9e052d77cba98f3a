"""Pydantic models for artwork submissions."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from models.types import ArtistID, SubmissionID, SubmissionState, UserID

SUBMISSION_STATES = ("draft", "submitted", "approved", "rejected")
APPROVED = "approved"


class Submission(BaseModel):
    """Artwork submitted for consignment."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: SubmissionID
    state: SubmissionState = Field(
        "draft", pattern="^(draft|submitted|approved|rejected)$"
    )
    user_id: UserID | None = None
    artist_id: ArtistID | None = None
    title: str | None = None
    year: str | None = None
    created_at: datetime | None = None

    @property
    def is_approved(self) -> bool:
        return self.state == APPROVED
