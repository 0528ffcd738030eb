"""
Database access layer for Transcriptorator.

Async engine and session factory, read-only ORM mappings of the managed
store's tables, and the query functions used by the web service.
"""

from archive_common.db.connection import (
    build_engine,
    build_session_factory,
    check_database_health,
)
from archive_common.db.orm_models import Base, SessionORM, TranscriptSegmentORM
from archive_common.db.queries import (
    StoreError,
    count_segments,
    fetch_segments,
    get_session_by_slug,
    list_published_sessions,
    search_segments,
)

__all__ = [
    "Base",
    "SessionORM",
    "StoreError",
    "count_segments",
    "TranscriptSegmentORM",
    "build_engine",
    "build_session_factory",
    "check_database_health",
    "fetch_segments",
    "get_session_by_slug",
    "list_published_sessions",
    "search_segments",
]
