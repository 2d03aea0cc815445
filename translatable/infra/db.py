from __future__ import annotations

from typing import Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker, AsyncSession

from ..core.config import settings


engine: Optional[AsyncEngine] = None
SessionLocal: Optional[async_sessionmaker[AsyncSession]] = None


async def init_engine(dsn: Optional[str] = None) -> None:
    global engine
    if engine is None:
        engine = create_async_engine(dsn or settings.DATABASE_URL, future=True, echo=False)
        if engine.url.get_backend_name() == "sqlite":
            set_sqlite_pragmas(engine)


def init_sessionmaker() -> None:
    global SessionLocal
    if SessionLocal is None:
        assert engine is not None, "Engine not initialized"
        SessionLocal = async_sessionmaker(engine, expire_on_commit=False)


def set_sqlite_pragmas(async_engine: AsyncEngine) -> None:
    """Per-connection SQLite setup.

    The driver's own transaction handling is switched off and BEGIN is
    emitted by SQLAlchemy instead, which SAVEPOINT support depends on.
    """

    @event.listens_for(async_engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):  # type: ignore[no-untyped-def]
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(async_engine.sync_engine, "begin")
    def _on_begin(conn):  # type: ignore[no-untyped-def]
        conn.exec_driver_sql("BEGIN")


async def dispose_engine() -> None:
    global engine, SessionLocal
    if engine is not None:
        await engine.dispose()
    engine = None
    SessionLocal = None
