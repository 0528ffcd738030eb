"""
Session catalog and transcript API router for Transcriptorator.

Endpoints for listing published sessions with chamber and date filters,
fetching one session's metadata and full transcript, and looking up the
segment that covers a playback offset.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from archive_common.config import Settings, get_settings
from archive_common.db.queries import (
    count_segments,
    fetch_segments,
    get_session_by_slug,
    list_published_sessions,
)
from archive_common.models import Session
from archive_web.dependencies import SessionFilter, get_db_session, get_session_filter
from archive_web.playback import SegmentIndex
from archive_web.schemas.session_schemas import SessionDetailResponse, SessionListResponse
from archive_web.schemas.transcript_schemas import SegmentAtResponse, TranscriptResponse

router = APIRouter(prefix="/sessions", tags=["sessions"])


async def _require_session(db: Any, slug: str) -> Session:
    if db is None:
        raise HTTPException(status_code=404, detail="Session not found")
    session = await get_session_by_slug(db, slug)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.get("", response_model=SessionListResponse)
async def list_sessions(
    filters: SessionFilter = Depends(get_session_filter),
    db: Any = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> SessionListResponse:
    if db is None:
        return SessionListResponse(sessions=[], total=0, matched=0)

    sessions = await list_published_sessions(db, settings.page_size)
    matched = filters.apply(sessions)
    return SessionListResponse(sessions=matched, total=len(sessions), matched=len(matched))


@router.get("/{slug}", response_model=SessionDetailResponse)
async def get_session(slug: str, db: Any = Depends(get_db_session)) -> SessionDetailResponse:
    session = await _require_session(db, slug)
    return SessionDetailResponse(
        session=session, segment_count=await count_segments(db, session.id),
    )


@router.get("/{slug}/transcript", response_model=TranscriptResponse)
async def get_transcript(
    slug: str,
    db: Any = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> TranscriptResponse:
    session = await _require_session(db, slug)
    segments = await fetch_segments(db, session.id, settings.page_size)
    return TranscriptResponse(session_id=session.id, segments=segments, total=len(segments))


@router.get("/{slug}/segments/at", response_model=SegmentAtResponse)
async def get_segment_at(
    slug: str,
    t: float = Query(..., ge=0.0, description="Playback offset in seconds."),
    db: Any = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> SegmentAtResponse:
    session = await _require_session(db, slug)
    segments = await fetch_segments(db, session.id, settings.page_size)
    segment = SegmentIndex(segments).locate(t)
    if segment is None:
        raise HTTPException(status_code=404, detail="No segment at this offset")
    return SegmentAtResponse(seconds=t, segment=segment)
