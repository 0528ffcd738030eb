"""
Session data models for Transcriptorator.

Defines the Pydantic model for a recorded legislative session (a House or
Senate hearing, floor session, or press conference) and the chamber enum.
"""

from __future__ import annotations

import enum
from datetime import date

from pydantic import BaseModel, Field


class Chamber(str, enum.Enum):
    """Legislative chamber a session belongs to."""

    HOUSE = "house"
    SENATE = "senate"


class Session(BaseModel):
    """A published recording of a legislative proceeding.

    Attributes:
        id: Unique identifier assigned by the store.
        slug: URL-safe identifier used in page routes.
        youtube_video_id: Video id passed to the embedded player.
        youtube_url: Canonical watch URL of the recording.
        chamber: House or Senate.
        title: Human-readable session title.
        session_date: Calendar date the session took place.
        duration_seconds: Recording length (0 when unknown).
        is_published: Whether the session appears in the catalog.
        chamber_verified: Whether the chamber was confirmed by a reviewer.
    """

    model_config = {"from_attributes": True}

    id: str = Field(..., description="Unique identifier.")
    slug: str = Field(..., min_length=1, description="URL-safe identifier.")
    youtube_video_id: str = Field(..., description="Embedded player video id.")
    youtube_url: str = Field(default="", description="Canonical watch URL.")
    chamber: Chamber = Field(..., description="House or Senate.")
    title: str = Field(..., description="Session title.")
    session_date: date = Field(..., description="Date of the session.")
    duration_seconds: int = Field(default=0, description="Recording length in seconds.")
    is_published: bool = Field(default=False, description="Listed in the catalog.")
    chamber_verified: bool = Field(default=False, description="Chamber confirmed by a reviewer.")
