"""Async SQLAlchemy engine and session factory."""
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from core.config import get_settings


def configure_sqlite(engine: AsyncEngine) -> None:
    """
    Turn on foreign key enforcement and let SQLAlchemy own transaction begins.

    SQLite ships with foreign keys disabled, which would silently skip every
    ON DELETE CASCADE / SET NULL rule in the schema. The driver's implicit
    BEGIN is switched off and emitted from the "begin" event instead, so
    SAVEPOINTs from `begin_nested()` nest inside a real transaction.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection: Any, _connection_record: Any) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")


def build_engine(database_url: str, **kwargs: Any) -> AsyncEngine:
    """Create an async engine for either SQLite (aiosqlite) or PostgreSQL (asyncpg)."""
    if database_url.startswith("sqlite"):
        if ":memory:" in database_url:
            # A single shared connection, otherwise each checkout sees an empty database
            kwargs.setdefault("poolclass", StaticPool)
        engine = create_async_engine(database_url, echo=False, **kwargs)
        configure_sqlite(engine)
        return engine

    return create_async_engine(database_url, echo=False, pool_pre_ping=True, **kwargs)


settings = get_settings()

if settings.is_sqlite:
    engine = build_engine(settings.database_url)
else:
    engine = build_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
    )

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


def get_session_factory() -> async_sessionmaker:
    """Return the session factory for code running outside a request."""
    return async_session_factory


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """
    Yield an async database session.

    Uses unit-of-work pattern: services use flush() for refreshing objects,
    commit happens once here at request end. This ensures atomic transactions
    per request - if anything fails, all changes are rolled back.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
