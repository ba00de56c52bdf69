"""
Commander Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the test suite.

Fixtures:
    ├── mock_repository: AsyncMock with the CommanderRepository interface
    ├── sample_command: a stored-looking Command entity
    ├── app_settings: Settings pointing at a per-test SQLite file
    ├── db_session: AsyncSession on that database, schema created
    ├── test_app / test_client: the full app over the SQLite database
    └── mock_client: the full app wired to MockCommanderRepository
"""

import os

# Test settings must be in place before commander.main builds its default app.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("DB_CREATE_TABLES", "false")

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from commander.config import Settings
from commander.database import (
    build_engine,
    build_session_factory,
    create_tables,
    dispose_engine,
)
from commander.main import create_app
from commander.models.command import Command
from commander.repositories.base import CommanderRepository


@pytest.fixture
def mock_repository():
    """
    Provides a mock repository.

    Usage:
        mock_repository.get_command_by_id.return_value = sample_command
        result = await command_service.get_command(mock_repository, 1)
    """
    repository = AsyncMock(spec=CommanderRepository)
    repository.get_all_commands.return_value = []
    repository.get_command_by_id.return_value = None
    repository.save_changes.return_value = True
    return repository


@pytest.fixture
def sample_command():
    return Command(id=1, how_to="list files", line="ls -la", platform="linux")


@pytest.fixture
def app_settings(tmp_path):
    """Settings for a fresh SQLite database file per test."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'commander_test.db'}",
        repository_backend="sql",
        db_create_tables=False,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def db_session(app_settings):
    """An AsyncSession on a freshly created schema."""
    engine = build_engine(app_settings)
    await create_tables(engine)
    session_factory = build_session_factory(engine)
    async with session_factory() as session:
        yield session
    await dispose_engine(engine)


@pytest_asyncio.fixture
async def test_app(app_settings):
    """
    The application wired to the per-test SQLite database.

    ASGITransport does not run the lifespan, so the schema is created here.
    """
    app = create_app(app_settings)
    await create_tables(app.state.engine)
    yield app
    await dispose_engine(app.state.engine)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient talking to test_app in-process.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/commands")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def mock_client(app_settings):
    """HTTPX client for an app running on MockCommanderRepository."""
    app = create_app(app_settings.model_copy(update={"repository_backend": "mock"}))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    await dispose_engine(app.state.engine)
