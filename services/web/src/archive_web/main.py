"""
FastAPI application entry point for the Transcriptorator web service.

Creates and configures the FastAPI app, registers page, API, and
WebSocket routers, middleware, static files, startup/shutdown handlers,
and exposes the ASGI application.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from prometheus_client import make_asgi_app

from archive_common.config import get_settings
from archive_common.db.connection import build_engine, build_session_factory
from archive_common.logging import configure_logging
from archive_web.errors import install_error_handlers
from archive_web.middleware.cors import add_cors
from archive_web.middleware.logging import LoggingMiddleware
from archive_web.routers import follow, health, pages, search, sessions
from archive_web.templating import STATIC_DIR

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    # — Startup —
    settings = get_settings()
    configure_logging("archive-web", settings.log_level, settings.log_json)

    engine = build_engine()
    app.state.db_engine = engine
    app.state.db_session_factory = build_session_factory(engine)
    logger.info("web_service_starting", page_size=settings.page_size)

    yield

    # — Shutdown —
    await engine.dispose()
    logger.info("web_service_stopping")


def include_routers(app: FastAPI) -> None:
    """Register every router; shared by the service and the test suite."""
    api_prefix = "/api/v1"
    app.include_router(sessions.router, prefix=api_prefix)
    app.include_router(search.router, prefix=api_prefix)

    # Pages, health, and WS are mounted at root (no /api/v1 prefix).
    app.include_router(pages.router)
    app.include_router(health.router)
    app.include_router(follow.router)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


def create_app() -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title="Transcriptorator",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    include_routers(app)
    install_error_handlers(app)

    # Prometheus metrics endpoint
    app.mount("/metrics", make_asgi_app())

    # ── Middleware (applied outermost-first) ──
    app.add_middleware(LoggingMiddleware)
    add_cors(app, settings.cors_origins)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "archive_web.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
