"""
Session API schemas for Transcriptorator.

Pydantic response models for the session catalog listing and a single
session's metadata.
"""

from __future__ import annotations

from pydantic import BaseModel

from archive_common.models import Session


class SessionListResponse(BaseModel):
    sessions: list[Session]
    total: int
    matched: int


class SessionDetailResponse(BaseModel):
    session: Session
    segment_count: int
