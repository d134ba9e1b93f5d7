"""Database abstraction layer using SQLAlchemy 2.0 async.

This module provides session management and engine configuration for
SQLAlchemy with async support. It supports both SQLite (aiosqlite) and
PostgreSQL (asyncpg) drivers.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from gulita.core.config import Settings, get_settings
from gulita.core.exceptions import ServiceUnavailableError
from gulita.core.logging import get_logger
from gulita.infrastructure.persistence.errors import is_connection_error

logger = get_logger(__name__)

# Opens one unit of work, e.g. DatabaseManager.session
SessionScope = Callable[[], AbstractAsyncContextManager[AsyncSession]]


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on foreign key enforcement for every new SQLite connection.

    SQLite ignores ``ON DELETE CASCADE`` unless the pragma is set per
    connection. Does nothing for other dialects.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class DatabaseManager:
    """Database connection and session manager.

    Owns the async engine (and with it the connection pool) and the
    session factory. Both are created lazily on first use.
    """

    def __init__(self, settings: Settings | None = None, engine: AsyncEngine | None = None) -> None:
        """Initialize the database manager.

        Args:
            settings: Settings to build the engine from. Defaults to the
                      cached application settings.
            engine: Pre-built engine, used instead of creating one.
        """
        self.settings = settings or get_settings()
        self._engine = engine
        if engine is not None:
            enable_sqlite_foreign_keys(engine)
        self._session_factory = None

    @property
    def engine(self) -> AsyncEngine:
        """Get or create the database engine."""
        if self._engine is None:
            url = self.settings.database_url
            if url.startswith("sqlite"):
                options = {"connect_args": {"check_same_thread": False}}
            else:
                options = {
                    "pool_size": self.settings.db_pool_size,
                    "max_overflow": self.settings.db_max_overflow,
                    "pool_timeout": self.settings.db_pool_timeout,
                    "pool_recycle": self.settings.db_pool_recycle,
                    "pool_pre_ping": True,
                }
            self._engine = create_async_engine(url, echo=self.settings.db_echo, **options)
            enable_sqlite_foreign_keys(self._engine)
            logger.info(
                "Database engine created",
                database_url=self._engine.url.render_as_string(hide_password=True),
                pool_size=self.settings.db_pool_size,
            )
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
        return self._session_factory

    async def create_tables(self) -> None:
        """Create all database tables.

        Used in development and tests. Production databases are managed
        with Alembic migrations.
        """
        from gulita.infrastructure.persistence import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created")

    async def drop_tables(self) -> None:
        """Drop all database tables.

        WARNING: This will delete all data. Only use in testing!
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            logger.warning("Database tables dropped")

    async def disconnect(self) -> None:
        """Close the database engine and all pooled connections."""
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a transactional scope for one unit of work.

        The session is rolled back if the block raises and is always closed,
        which returns its connection to the pool. Connectivity failures are
        re-raised as ``ServiceUnavailableError``.

        Yields:
            AsyncSession: SQLAlchemy async session.

        Example:
            async with db.session() as session:
                result = await session.execute(select(UserModel))
                users = result.scalars().all()
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception as e:
                await session.rollback()
                if is_connection_error(e):
                    logger.error("Database unavailable", error=str(e))
                    raise ServiceUnavailableError() from e
                raise
            finally:
                await session.close()

    async def check_connection(self) -> bool:
        """Check if the database connection is working.

        Returns:
            bool: True if connection is successful, False otherwise.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
                return True
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database connection check failed", error=str(e))
            return False


# Global database manager instance
_db_manager: DatabaseManager | None = None


def get_db_manager() -> DatabaseManager:
    """Get the global database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


async def init_database(db: DatabaseManager | None = None) -> None:
    """Initialize the database on application startup.

    Creates the SQLite directory if needed, verifies connectivity and
    creates tables outside production (use migrations in production).

    Raises:
        RuntimeError: If the database cannot be reached.
    """
    db = db or get_db_manager()
    settings = db.settings

    if settings.database_url.startswith("sqlite") and ":memory:" not in settings.database_url:
        db_path = Path(settings.database_url.split(":///")[-1])
        db_path.parent.mkdir(parents=True, exist_ok=True)

    if not await db.check_connection():
        logger.error("Database connection failed")
        raise RuntimeError("Failed to connect to database")

    if settings.is_production:
        logger.info("Production mode: Skipping auto-create, use migrations")
    else:
        await db.create_tables()


async def close_database(db: DatabaseManager | None = None) -> None:
    """Close the database connection on application shutdown."""
    db = db or get_db_manager()
    await db.disconnect()
