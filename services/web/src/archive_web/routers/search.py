"""
Full-text search API router for Transcriptorator.

Runs transcript searches through the store's full-text search procedure,
with optional chamber and session-date filters.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from archive_common.config import Settings, get_settings
from archive_common.db.queries import search_segments
from archive_web.dependencies import get_db_session
from archive_web.schemas.search_schemas import SearchRequest, SearchResponse

router = APIRouter(tags=["search"])


@router.post("/search", response_model=SearchResponse)
async def search_transcripts(
    body: SearchRequest,
    db: Any = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> SearchResponse:
    query = body.query.strip()
    if not query:
        return SearchResponse(query="", searched=False, results=[], total=0)
    if db is None:
        return SearchResponse(query=query, searched=True, results=[], total=0)

    results = await search_segments(
        db,
        query,
        body.match_count or settings.search_match_count,
        chamber=body.chamber,
        date_from=body.date_from,
        date_to=body.date_to,
    )
    return SearchResponse(query=query, searched=True, results=results, total=len(results))
