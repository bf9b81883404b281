"""Async database store handle (SQLAlchemy 2.0 + asyncpg) and declarative base."""
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from catalog_admin.config import Settings
from catalog_admin.logging_config import get_logger

logger = get_logger(__name__)


def utcnow() -> datetime:
    """Timezone-aware now, used for created_at/updated_at/deleted_at stamps."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base for all models."""

    pass


def _enable_sqlite_pragmas(engine) -> None:
    """
    SQLite: enforce foreign keys and let SQLAlchemy emit BEGIN itself
    (required for SAVEPOINT / begin_nested with aiosqlite).
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


class Store:
    """
    One engine + session factory per process. Built at startup and passed to
    whoever needs sessions (FastAPI app state, CLI command); never a module global.
    """

    def __init__(self, database_url: str, pool_size: Optional[int] = None, echo: bool = False) -> None:
        self.database_url = database_url
        engine_kwargs = {"echo": echo, "future": True}
        is_sqlite = database_url.startswith("sqlite")
        if pool_size is not None and not is_sqlite:
            engine_kwargs["pool_size"] = pool_size
            engine_kwargs["max_overflow"] = 0 if pool_size == 1 else 10
        self.engine = create_async_engine(database_url, **engine_kwargs)
        if is_sqlite:
            _enable_sqlite_pragmas(self.engine)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings, pool_size: Optional[int] = None) -> "Store":
        """Build from Settings; pool_size overrides DB_POOL_SIZE (CLI passes 1)."""
        return cls(
            settings.database_url,
            pool_size=pool_size if pool_size is not None else settings.db_pool_size,
            echo=settings.db_echo,
        )

    @asynccontextmanager
    async def unit_of_work(self) -> AsyncIterator[AsyncSession]:
        """Yield a session; commit on success, rollback on any error."""
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        """Create every table from model metadata (dev databases and tests)."""
        import catalog_admin.models  # noqa: F401  registers all tables

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("store.schema_created")

    async def drop_all(self) -> None:
        import catalog_admin.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields a unit-of-work session from the app's store."""
    store: Store = request.app.state.store
    async with store.unit_of_work() as session:
        yield session
