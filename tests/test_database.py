# tests/test_database.py

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import text

from app.api.schemas.task import TaskCreate
from app.core.config import Settings
from app.core.database import Database
from app.services.task import TaskService


async def test_connect_creates_directory_file_and_table(settings: Settings) -> None:
    db_path = Path(settings.DATABASE_PATH)
    assert not db_path.parent.exists()

    database = Database(settings.database_url)
    await database.connect()
    try:
        assert db_path.is_file()
        async with database.session() as session:
            result = await session.execute(text("PRAGMA table_info(tasks)"))
            columns = {row[1] for row in result.all()}
    finally:
        await database.dispose()

    assert columns == {
        "id",
        "title",
        "description",
        "status",
        "priority",
        "due_date",
        "created_at",
        "updated_at",
    }


async def test_schema_bootstrap_is_idempotent(settings: Settings) -> None:
    first = Database(settings.database_url)
    await first.connect()
    async with first.session() as session:
        await TaskService.create(session, TaskCreate(title="survives restart"))
    await first.dispose()

    second = Database(settings.database_url)
    await second.connect()
    await second.connect()  # already connected: no-op
    try:
        async with second.session() as session:
            tasks = await TaskService.find_all(session)
    finally:
        await second.dispose()

    assert [t.title for t in tasks] == ["survives restart"]


async def test_ping_and_dispose(settings: Settings) -> None:
    database = Database(settings.database_url)
    assert await database.ping() is False

    await database.connect()
    assert database.is_connected
    assert await database.ping() is True

    await database.dispose()
    await database.dispose()  # second release is harmless
    assert not database.is_connected
    assert await database.ping() is False


async def test_session_requires_connection(settings: Settings) -> None:
    database = Database(settings.database_url)

    with pytest.raises(RuntimeError):
        async with database.session():
            pass


async def test_connect_failure_propagates(tmp_path: Path) -> None:
    # A directory where the database file should be cannot be opened
    blocked = tmp_path / "tasks.db"
    blocked.mkdir()
    database = Database(f"sqlite+aiosqlite:///{blocked.as_posix()}")

    with pytest.raises(Exception):
        await database.connect()
    assert not database.is_connected
