"""
Transcript data models for Transcriptorator.

Defines the Pydantic models for TranscriptSegment (one timed line of a
session transcript) and SearchResult (a segment hit returned by the
store's full-text search procedure, joined with its session).
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field, field_validator

from archive_common.models.session import Chamber


class TranscriptSegment(BaseModel):
    """A timed transcript line covering ``[start_seconds, end_seconds)``.

    Attributes:
        id: Row identifier.
        session_id: Parent session identifier.
        seq: Ordering key within the session.
        start_seconds: Offset of the first spoken word.
        end_seconds: Offset where the next segment may begin.
        text: Transcribed text.
    """

    model_config = {"from_attributes": True}

    id: int = Field(..., description="Row identifier.")
    session_id: str = Field(..., description="Parent session identifier.")
    seq: int = Field(..., description="Ordering key within the session.")
    start_seconds: float = Field(..., description="Segment start offset in seconds.")
    end_seconds: float = Field(..., description="Segment end offset in seconds.")
    text: str = Field(default="", description="Transcribed text.")

    def contains(self, seconds: float) -> bool:
        """Return ``True`` if *seconds* falls inside this segment."""
        return self.start_seconds <= seconds < self.end_seconds


class SearchResult(BaseModel):
    """A full-text search hit with enough session context to link to it."""

    model_config = {"from_attributes": True}

    session_id: str
    session_slug: str
    session_title: str
    session_date: date
    chamber: Chamber
    segment_id: int
    seq: int
    start_seconds: float
    end_seconds: float
    text: str

    @field_validator("session_id", mode="before")
    @classmethod
    def _stringify_session_id(cls, value: object) -> object:
        # Procedure rows carry native UUIDs.
        return str(value) if value is not None else value
