from __future__ import annotations

import pytest
import pytest_asyncio
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from translatable import TranslationsRepo
from translatable.infra import db
from translatable.infra.migrate import migrate

import models  # noqa: F401  registers the test tables on Base.metadata


@pytest_asyncio.fixture
async def session(tmp_path):
    await db.init_engine(f"sqlite+aiosqlite:///{tmp_path / 'translatable.db'}")
    db.init_sessionmaker()
    await migrate()
    async with db.SessionLocal() as s:  # type: ignore
        yield s
    await db.dispose_engine()


@pytest.fixture
def repo(session) -> TranslationsRepo:
    return TranslationsRepo(session)


@pytest.fixture
def fail_flush(monkeypatch):
    """Make the n-th explicit ``AsyncSession.flush()`` call raise."""

    def install(n: int) -> None:
        real_flush = AsyncSession.flush
        calls = {"n": 0}

        async def flaky_flush(self, *args, **kwargs):
            calls["n"] += 1
            if calls["n"] == n:
                raise OperationalError("UPDATE pages", {}, Exception("disk I/O error"))
            return await real_flush(self, *args, **kwargs)

        monkeypatch.setattr(AsyncSession, "flush", flaky_flush)

    return install
