"""
FastAPI dependency injection providers for the Transcriptorator web service.

Defines reusable Depends() callables for database sessions and the
session-catalog filter parsed from query parameters.
"""

from __future__ import annotations

from datetime import date
from typing import Any, AsyncIterator, Literal

from fastapi import HTTPException, Query
from pydantic import BaseModel, ValidationError, field_validator
from starlette.requests import HTTPConnection

from archive_common.models import Session


async def get_db_session(conn: HTTPConnection) -> AsyncIterator[Any]:
    """Yield an ``AsyncSession`` from the app-level session factory.

    The factory is stored on ``app.state.db_session_factory`` during
    startup.  Yields ``None`` when no database is configured.  Works for
    both HTTP requests and WebSocket connections.
    """
    factory = getattr(conn.app.state, "db_session_factory", None)
    if factory is None:
        yield None
        return
    session = factory()
    try:
        yield session
    finally:
        await session.close()


class SessionFilter(BaseModel):
    """Catalog filter: chamber plus an inclusive session-date range."""

    chamber: Literal["all", "house", "senate"] = "all"
    date_from: date | None = None
    date_to: date | None = None

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: Any) -> Any:
        # Empty date inputs submit as "".
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def active(self) -> bool:
        return self.chamber != "all" or self.date_from is not None or self.date_to is not None

    def matches(self, session: Session) -> bool:
        if self.chamber != "all" and session.chamber.value != self.chamber:
            return False
        if self.date_from is not None and session.session_date < self.date_from:
            return False
        if self.date_to is not None and session.session_date > self.date_to:
            return False
        return True

    def apply(self, sessions: list[Session]) -> list[Session]:
        """Return the sessions that pass the filter, order preserved."""
        return [s for s in sessions if self.matches(s)]


def get_session_filter(
    chamber: str = Query(default="all"),
    date_from: str | None = Query(default=None),
    date_to: str | None = Query(default=None),
) -> SessionFilter:
    try:
        return SessionFilter(chamber=chamber, date_from=date_from, date_to=date_to)
    except ValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail=[{"loc": list(e["loc"]), "msg": e["msg"]} for e in exc.errors()],
        ) from exc


def get_page_session_filter(
    chamber: str = Query(default="all"),
    date_from: str | None = Query(default=None),
    date_to: str | None = Query(default=None),
) -> SessionFilter:
    """Lenient filter for the HTML catalog: invalid values fall back to unset."""
    values = {"chamber": chamber, "date_from": date_from, "date_to": date_to}
    try:
        return SessionFilter(**values)
    except ValidationError as exc:
        rejected = {e["loc"][0] for e in exc.errors() if e["loc"]}
        return SessionFilter(**{k: v for k, v in values.items() if k not in rejected})
