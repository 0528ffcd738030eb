"""Shared fixtures for archive-common tests."""

from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

sys.path.append(str(Path(__file__).resolve().parent))


@pytest.fixture()
def mock_db_session() -> AsyncMock:
    """Async mock standing in for an ``AsyncSession``."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.close = AsyncMock()
    return session
