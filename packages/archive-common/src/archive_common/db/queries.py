"""
Read queries against the managed store for Transcriptorator.

Every function takes an ``AsyncSession`` and returns Pydantic models.
The hosted query layer caps the number of rows returned per request, so
list queries drain the result in ``page_size`` windows until a short page
signals the end.  Full-text search is delegated to the store's
``search_segments_fulltext`` procedure.
"""

from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from typing import Any

import structlog
from pydantic import ValidationError
from sqlalchemy import Select, func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from archive_common.db.orm_models import SessionORM, TranscriptSegmentORM
from archive_common.metrics import (
    store_pages_fetched_total,
    store_queries_total,
    store_query_duration_seconds,
)
from archive_common.models import Chamber, SearchResult, Session, TranscriptSegment

logger = structlog.get_logger(__name__)

DEFAULT_PAGE_SIZE: int = 1000
DEFAULT_MATCH_COUNT: int = 50

_SEARCH_SQL = text(
    "SELECT * FROM search_segments_fulltext("
    ":query_text, :match_count, :filter_chamber, :filter_date_from, :filter_date_to)",
)


class StoreError(Exception):
    """Raised when the managed store fails or rejects a query."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(message)
        self.operation = operation
        self.message = message


@contextmanager
def _store_operation(operation: str, **context: Any) -> Iterator[None]:
    """Time *operation*, count its outcome, and raise failures as ``StoreError``.

    Driver errors and rows that do not convert to their model both count
    as store failures.
    """
    start = time.monotonic()
    try:
        yield
    except SQLAlchemyError as exc:
        store_queries_total.labels(operation=operation, outcome="error").inc()
        message = str(getattr(exc, "orig", None) or exc)
        logger.error("store_query_failed", operation=operation, error=message, **context)
        raise StoreError(operation, message) from exc
    except ValidationError as exc:
        store_queries_total.labels(operation=operation, outcome="error").inc()
        message = f"malformed row: {exc.errors()[0]['msg']}"
        logger.error("store_row_invalid", operation=operation, error=str(exc), **context)
        raise StoreError(operation, message) from exc
    else:
        store_queries_total.labels(operation=operation, outcome="ok").inc()
    finally:
        store_query_duration_seconds.labels(operation=operation).observe(
            time.monotonic() - start,
        )


async def fetch_all_pages(
    db: AsyncSession,
    stmt: Select[Any],
    page_size: int = DEFAULT_PAGE_SIZE,
    *,
    operation: str = "paged_select",
) -> list[Any]:
    """Run *stmt* in consecutive ``offset``/``limit`` windows and concatenate them.

    *stmt* must carry a deterministic ``ORDER BY`` so windows neither overlap
    nor skip rows.  A window shorter than *page_size* (including an empty
    one) ends the scan.
    """
    if page_size < 1:
        raise ValueError("page_size must be positive")

    rows: list[Any] = []
    pages = 0
    while True:
        result = await db.execute(stmt.offset(pages * page_size).limit(page_size))
        page = list(result.scalars().all())
        pages += 1
        store_pages_fetched_total.labels(operation=operation).inc()
        rows.extend(page)
        if len(page) < page_size:
            break
    if pages > 1:
        logger.debug("paged_select_drained", operation=operation, rows=len(rows), pages=pages)
    return rows


async def list_published_sessions(
    db: AsyncSession,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[Session]:
    """Return every published session, newest first."""
    stmt = (
        select(SessionORM)
        .where(SessionORM.is_published.is_(True))
        .order_by(SessionORM.session_date.desc(), SessionORM.id.asc())
    )
    with _store_operation("list_sessions"):
        rows = await fetch_all_pages(db, stmt, page_size, operation="list_sessions")
        return [Session.model_validate(r) for r in rows]


async def get_session_by_slug(db: AsyncSession, slug: str) -> Session | None:
    """Return the session identified by *slug*, or ``None``."""
    stmt = select(SessionORM).where(SessionORM.slug == slug)
    with _store_operation("get_session", slug=slug):
        result = await db.execute(stmt)
        row = result.scalar_one_or_none()
        return Session.model_validate(row) if row is not None else None


async def fetch_segments(
    db: AsyncSession,
    session_id: str,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[TranscriptSegment]:
    """Return all transcript segments of a session ordered by ``seq``."""
    stmt = (
        select(TranscriptSegmentORM)
        .where(TranscriptSegmentORM.session_id == session_id)
        .order_by(TranscriptSegmentORM.seq.asc())
    )
    with _store_operation("fetch_segments", session_id=session_id):
        rows = await fetch_all_pages(db, stmt, page_size, operation="fetch_segments")
        return [TranscriptSegment.model_validate(r) for r in rows]


async def count_segments(db: AsyncSession, session_id: str) -> int:
    """Return the number of transcript segments stored for a session."""
    stmt = (
        select(func.count())
        .select_from(TranscriptSegmentORM)
        .where(TranscriptSegmentORM.session_id == session_id)
    )
    with _store_operation("count_segments", session_id=session_id):
        result = await db.execute(stmt)
        return int(result.scalar_one())


async def search_segments(
    db: AsyncSession,
    query: str,
    match_count: int = DEFAULT_MATCH_COUNT,
    *,
    chamber: Chamber | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[SearchResult]:
    """Run the store's full-text search procedure.

    The query is trimmed first; a blank query returns no results without
    touching the store.
    """
    query_text = query.strip()
    if not query_text:
        return []

    params = {
        "query_text": query_text,
        "match_count": match_count,
        "filter_chamber": chamber.value if chamber is not None else None,
        "filter_date_from": date_from,
        "filter_date_to": date_to,
    }
    with _store_operation("search_segments", query=query_text):
        result = await db.execute(_SEARCH_SQL, params)
        rows = result.mappings().all()
        results = [SearchResult.model_validate(dict(r)) for r in rows]
    logger.info("search_executed", query=query_text, hits=len(results))
    return results
