"""
Player follow WebSocket for Transcriptorator.

The session page opens ``/ws/sessions/{slug}/follow`` once its embedded
player is ready.  The browser reports the player's current time about
once a second and reports manual scrolling of the transcript panel; the
server answers with the segment to highlight whenever it changes and
says whether the panel should scroll to it.
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from archive_common.config import Settings, get_settings
from archive_common.db.queries import StoreError, fetch_segments, get_session_by_slug
from archive_common.metrics import follow_messages_total
from archive_web.dependencies import get_db_session
from archive_web.playback import SegmentIndex, TranscriptFollower
from archive_web.schemas.follow_schemas import (
    ActiveEvent,
    ErrorEvent,
    ReadyEvent,
    ScrollMessage,
    TimeMessage,
    follow_message_adapter,
)

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["websocket"])

# 4404 is application-defined (4000-4999); 1011 is the standard internal-error code.
CLOSE_NOT_FOUND = 4404
CLOSE_STORE_ERROR = 1011


@router.websocket("/ws/sessions/{slug}/follow")
async def follow_session(
    ws: WebSocket,
    slug: str,
    db: Any = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> None:
    await ws.accept()
    log = logger.bind(slug=slug)

    try:
        session = await get_session_by_slug(db, slug) if db is not None else None
        if session is None:
            await ws.close(code=CLOSE_NOT_FOUND, reason="Session not found")
            return
        segments = await fetch_segments(db, session.id, settings.page_size)
    except StoreError as exc:
        log.error("follow_transcript_load_failed", error=exc.message)
        await ws.close(code=CLOSE_STORE_ERROR, reason="Transcript unavailable")
        return
    finally:
        # Release the pooled connection before the long-lived loop.
        if db is not None:
            await db.close()

    follower = TranscriptFollower(
        SegmentIndex(segments),
        suppress_seconds=settings.scroll_suppress_seconds,
    )
    await ws.send_text(ReadyEvent(segments=len(segments)).model_dump_json())
    log.info("follow_opened", segments=len(segments))

    try:
        while True:
            raw = await ws.receive_text()
            try:
                message = follow_message_adapter.validate_json(raw)
            except ValidationError as exc:
                follow_messages_total.labels(type="invalid").inc()
                detail = exc.errors()[0]["msg"] if exc.errors() else "invalid message"
                await ws.send_text(ErrorEvent(detail=detail).model_dump_json())
                continue

            follow_messages_total.labels(type=message.type).inc()
            if isinstance(message, ScrollMessage):
                follower.note_user_scroll()
            elif isinstance(message, TimeMessage):
                update = follower.observe(message.t)
                if update is not None:
                    await ws.send_text(
                        ActiveEvent(
                            seq=update.seq,
                            start_seconds=update.start_seconds,
                            scroll=update.scroll,
                        ).model_dump_json(),
                    )
    except WebSocketDisconnect:
        log.info("follow_closed", active_seq=follower.active_seq)
