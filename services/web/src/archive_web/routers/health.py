"""
Health check API router for Transcriptorator.

Reports the web service status together with the reachability of the
managed store.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from pydantic import BaseModel

from archive_common.db.connection import check_database_health

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    services: dict[str, str]


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    services: dict[str, str] = {}

    engine = getattr(request.app.state, "db_engine", None)
    if engine is None:
        services["database"] = "not_configured"
    elif await check_database_health(engine):
        services["database"] = "healthy"
    else:
        services["database"] = "unhealthy"

    overall = "healthy" if all(
        v in ("healthy", "not_configured") for v in services.values()
    ) else "degraded"

    return HealthResponse(status=overall, services=services)
