"""
HTML page routes for Transcriptorator.

Server-rendered pages for the session catalog, transcript search, and the
session player.  Store failures are rendered as error states on the page
rather than propagated as JSON.
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, Depends, Query, Request
from starlette.responses import Response

from archive_common.config import Settings, get_settings
from archive_common.db.queries import (
    StoreError,
    fetch_segments,
    get_session_by_slug,
    list_published_sessions,
    search_segments,
)
from archive_common.models import Session
from archive_common.utils import parse_start_offset
from archive_web.dependencies import SessionFilter, get_db_session, get_page_session_filter
from archive_web.templating import render

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["pages"], include_in_schema=False)


@router.get("/")
async def session_list_page(
    request: Request,
    filters: SessionFilter = Depends(get_page_session_filter),
    db: Any = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> Response:
    sessions: list[Session] = []
    error: str | None = None
    if db is not None:
        try:
            sessions = await list_published_sessions(db, settings.page_size)
        except StoreError as exc:
            error = exc.message

    filtered = filters.apply(sessions)
    return render(
        request,
        "sessions.html",
        settings,
        {
            "sessions": filtered,
            "total": len(sessions),
            "filters": filters,
            "error": error,
        },
    )


async def _run_search(db: Any, q: str, settings: Settings) -> dict[str, Any]:
    query = q.strip()
    state: dict[str, Any] = {"query": q, "results": [], "searched": False, "error": None}
    if not query or db is None:
        state["searched"] = bool(query)
        return state
    try:
        state["results"] = await search_segments(db, query, settings.search_match_count)
    except StoreError as exc:
        state["error"] = exc.message
    state["searched"] = True
    return state


@router.get("/search")
async def search_page(
    request: Request,
    q: str = Query(default=""),
    db: Any = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> Response:
    state = await _run_search(db, q, settings)
    state["debounce_ms"] = settings.search_debounce_ms
    return render(request, "search.html", settings, state)


@router.get("/search/results")
async def search_results_fragment(
    request: Request,
    q: str = Query(default=""),
    db: Any = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Result list only; the search box swaps it in after a debounced keystroke."""
    state = await _run_search(db, q, settings)
    return render(request, "_search_results.html", settings, state)


@router.get("/session/{slug}")
async def session_page(
    request: Request,
    slug: str,
    t: str | None = Query(default=None),
    db: Any = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> Response:
    log = logger.bind(slug=slug)
    session = None
    try:
        if db is not None:
            session = await get_session_by_slug(db, slug)
        if session is None:
            return render(request, "not_found.html", settings, status_code=404)
        segments = await fetch_segments(db, session.id, settings.page_size)
    except StoreError as exc:
        log.error("session_page_failed", operation=exc.operation, error=exc.message)
        return render(
            request, "error.html", settings, {"error": exc.message}, status_code=500,
        )

    return render(
        request,
        "session.html",
        settings,
        {
            "session": session,
            "segments": segments,
            "initial_time": parse_start_offset(t),
            "poll_interval_ms": settings.poll_interval_ms,
            "follow_path": request.url_for("follow_session", slug=slug).path,
        },
    )
