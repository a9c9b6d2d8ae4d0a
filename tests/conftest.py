# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from typing import AsyncIterator, Iterator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.database import Database
from app.main import create_app

INDEX_HTML = "<!DOCTYPE html><html><body><div id='app'>tasks</div></body></html>"


@pytest.fixture()
def frontend_dir(tmp_path: Path) -> Path:
    """A throwaway frontend with an entry document and one asset."""
    root = tmp_path / "frontend"
    (root / "js").mkdir(parents=True)
    (root / "index.html").write_text(INDEX_HTML, encoding="utf-8")
    (root / "js" / "task-manager.js").write_text("const API_BASE = '/api/tasks';", encoding="utf-8")
    return root


@pytest.fixture()
def settings(tmp_path: Path, frontend_dir: Path) -> Settings:
    """
    Settings pointing at a per-test database file.

    The database lives in a directory that does not exist yet, so every
    test also exercises directory creation.
    """
    return Settings(
        DATABASE_PATH=str(tmp_path / "database" / "tasks.db"),
        FRONTEND_DIR=str(frontend_dir),
        ENVIRONMENT="test",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture()
def client(settings: Settings) -> Iterator[TestClient]:
    """HTTP client; entering the context runs the app lifespan."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest_asyncio.fixture()
async def database(settings: Settings) -> AsyncIterator[Database]:
    db = Database(settings.database_url)
    await db.connect()
    yield db
    await db.dispose()


@pytest_asyncio.fixture()
async def session(database: Database) -> AsyncIterator[AsyncSession]:
    async with database.session() as db_session:
        yield db_session
