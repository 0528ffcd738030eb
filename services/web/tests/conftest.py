"""Shared fixtures for web service tests."""

from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Use *append* to avoid shadowing the other package's test helpers.
sys.path.append(str(Path(__file__).resolve().parent))

from fastapi import FastAPI
from fastapi.testclient import TestClient

from archive_common.config import Settings, get_settings
from archive_web.dependencies import get_db_session
from archive_web.errors import install_error_handlers
from archive_web.main import include_routers


# ─── Core fixtures ────────────────────────────────────────────


@pytest.fixture()
def mock_db() -> AsyncMock:
    """Async mock for ``AsyncSession``."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.close = AsyncMock()
    return session


@pytest.fixture()
def settings() -> Settings:
    return Settings(_env_file=None, page_size=1000, log_json=False)


def _build_app(mock_db: AsyncMock, settings: Settings) -> FastAPI:
    """Build a FastAPI app with dependency overrides for testing."""
    app = FastAPI()

    async def _override_db():
        yield mock_db

    app.dependency_overrides[get_db_session] = _override_db
    app.dependency_overrides[get_settings] = lambda: settings

    # State (for the health router, which reads app.state directly)
    app.state.db_engine = None
    app.state.db_session_factory = None

    include_routers(app)
    install_error_handlers(app)
    return app


@pytest.fixture()
def app(mock_db: AsyncMock, settings: Settings) -> FastAPI:
    return _build_app(mock_db, settings)


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def unconfigured_client(settings: Settings) -> TestClient:
    """Client whose database dependency yields ``None``."""
    app = _build_app(MagicMock(), settings)

    async def _no_db():
        yield None

    app.dependency_overrides[get_db_session] = _no_db
    return TestClient(app)
