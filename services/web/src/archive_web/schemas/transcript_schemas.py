"""
Transcript API schemas for Transcriptorator.

Pydantic response models for a session's full transcript and for the
point lookup of the segment covering a playback offset.
"""

from __future__ import annotations

from pydantic import BaseModel

from archive_common.models import TranscriptSegment


class TranscriptResponse(BaseModel):
    session_id: str
    segments: list[TranscriptSegment]
    total: int


class SegmentAtResponse(BaseModel):
    seconds: float
    segment: TranscriptSegment
