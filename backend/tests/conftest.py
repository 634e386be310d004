"""
Works API - Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession (no real DB needed)
    ├── sample_work_data: Field values for a stored work
    ├── database: Connected Database handle on a temporary SQLite file
    └── test_client: HTTPX AsyncClient bound to an app using `database`
"""

import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

# Override settings for testing BEFORE any worksapi imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from worksapi.config import Settings
from worksapi.database import Database


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_find(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = work
            result = await work_service.find_by_id(mock_db_session, str(work.id))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_work_data():
    return {
        "id": uuid4(),
        "title": "Work 1",
        "description": "Work Description",
    }


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'works.db'}",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def database(test_settings) -> AsyncGenerator[Database, None]:
    """A connected Database on a throwaway SQLite file."""
    db = Database.from_settings(test_settings)
    await db.connect()
    yield db
    await db.disconnect()


@pytest_asyncio.fixture
async def test_client(test_settings, database) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient talking to a fresh app.

    ASGITransport does not run the lifespan, so the app is handed an
    already-connected database.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/works")
            assert response.status_code == 200
    """
    from worksapi.main import create_app

    app = create_app(settings=test_settings, database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
