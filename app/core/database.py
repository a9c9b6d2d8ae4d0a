"""
Database connection and session management
Uses SQLAlchemy async engine on top of aiosqlite
Reference: https://docs.sqlalchemy.org/en/20/orm/extensions/asyncio.html
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


# Base class for all database models
# All models should inherit from this class
# Reference: https://docs.sqlalchemy.org/en/20/orm/declarative_styles.html
class Base(DeclarativeBase):
    """Base class for SQLAlchemy declarative models"""
    pass


class Database:
    """
    Storage handle owning the single connection to the task store

    One instance is created per application (and per test) and stored on
    app.state, so nothing here is a module-level singleton.

    Usage:
        database = Database("sqlite+aiosqlite:///database/tasks.db")
        await database.connect()
        async with database.session() as session:
            ...
        await database.dispose()
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    def _ensure_directory(self) -> None:
        """Create the directory holding a file-backed SQLite database"""
        url = make_url(self.url)
        if not url.drivername.startswith("sqlite"):
            return
        database = url.database
        if not database or database == ":memory:":
            return
        directory = Path(database).parent
        if not directory.exists():
            directory.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created database directory {directory}")

    async def connect(self) -> None:
        """
        Open the connection and bootstrap the schema

        Creates the database file and its directory if missing, then runs
        CREATE TABLE IF NOT EXISTS for every model. Errors propagate: the
        application must not serve traffic without storage.

        Reference: https://docs.sqlalchemy.org/en/20/core/metadata.html#sqlalchemy.schema.MetaData.create_all
        """
        if self.engine is not None:
            return

        # Importing the models registers their tables on Base.metadata
        from app import models  # noqa: F401

        self._ensure_directory()

        # One pooled connection: concurrent requests queue for it
        # Reference: https://docs.sqlalchemy.org/en/20/core/pooling.html#sqlalchemy.pool.QueuePool
        engine = create_async_engine(
            self.url,
            echo=self.echo,
            pool_size=1,
            max_overflow=0,
        )
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
                await conn.execute(text("SELECT 1"))
        except Exception:
            await engine.dispose()
            raise

        self.engine = engine
        self._session_maker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,  # Keep objects readable after commit
            autoflush=False,
        )
        logger.info(f"Connected to {engine.url.render_as_string(hide_password=True)}")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session bound to the connected engine"""
        if self._session_maker is None:
            raise RuntimeError("Database is not connected")
        async with self._session_maker() as session:
            yield session

    async def ping(self) -> bool:
        """Return True when a trivial query succeeds"""
        if self.engine is None:
            return False
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"Database ping failed: {type(e).__name__}: {e}")
            return False

    async def dispose(self) -> None:
        """
        Release the connection
        A no-op when the handle was never connected or is already disposed
        """
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self._session_maker = None
        logger.info("Database connection closed")


def get_database(request: Request) -> Database:
    """Dependency returning the storage handle attached to the application"""
    return request.app.state.database


# Dependency to get database session
# Used in FastAPI route handlers via dependency injection
# Reference: https://fastapi.tiangolo.com/tutorial/dependencies/
async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """
    Dependency function that provides a database session

    Writes are committed by the service layer so a commit failure is reported
    in the response. Anything left uncommitted is rolled back on error and the
    session is always closed.
    """
    database = get_database(request)
    async with database.session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
