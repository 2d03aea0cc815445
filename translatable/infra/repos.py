from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Mapping, Optional, TypeVar

from sqlalchemy import func, inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.errors import TranslationPersistenceError
from .linker import (
    ensure_locale_free,
    find_in_group,
    group_parent_id,
    group_query,
    is_empty,
    link_after_create,
    link_before_create,
)
from .models import TranslatableMixin, replicate

log = logging.getLogger(__name__)

T = TypeVar("T", bound=TranslatableMixin)


class TranslationsRepo:
    """Translation group operations on one session.

    Each operation runs as one unit. Inside a transaction the caller already
    has open, the unit is a SAVEPOINT and the caller keeps control of the
    commit. On an idle session the unit is a transaction of its own, committed
    on success. Any failure rolls the unit back, reads included.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.s = session

    @asynccontextmanager
    async def _unit(self) -> AsyncIterator[None]:
        # Decided before any query of the unit autobegins a transaction
        owned = not self.s.in_transaction()
        loaded = list(self.s.identity_map.values())
        tx = await (self.s.begin() if owned else self.s.begin_nested())
        try:
            yield
        except Exception:
            await tx.rollback()
            # Rollback expires loaded objects; reload them so callers can keep reading
            for obj in loaded:
                state = inspect(obj)
                if state.persistent and state.expired:
                    await self.s.refresh(obj)
            if owned and self.s.in_transaction():
                # The reloads autobegan a read; end it so the session is idle again
                await self.s.commit()
            raise
        await tx.commit()

    async def create(self, record: T) -> T:
        """Insert ``record``, linking it into the group its parent id points at."""
        async with self._unit():
            pending = await link_before_create(self.s, record)
            self.s.add(record)
            try:
                await self.s.flush()
            except SQLAlchemyError as exc:
                log.exception("Failed to create %s", type(record).__name__)
                raise TranslationPersistenceError() from exc
            await link_after_create(self.s, record, pending)

        if pending is not None:
            log.info("%s %s linked to group %s", type(record).__name__, record.get_key(), record.get_locale_parent_id())
        return record

    async def translate(self, record: T, locale: str, overrides: Optional[Mapping[str, Any]] = None) -> T:
        """Create the ``locale`` translation of ``record`` as a copy of it."""
        parent_id = group_parent_id(record)
        if parent_id is None:
            log.warning("Cannot translate unsaved %s into %r", type(record).__name__, locale)
            raise TranslationPersistenceError()

        async with self._unit():
            await ensure_locale_free(self.s, record, locale)
            first_translation = is_empty(record.get_locale_parent_id())

            item = replicate(record)
            mapper = inspect(type(record))
            for key, value in (overrides or {}).items():
                if key not in mapper.attrs:
                    raise AttributeError(f"{type(record).__name__} has no attribute {key!r}")
                setattr(item, key, value)
            item.set_locale(locale)
            item.set_locale_parent_id(parent_id)

            try:
                self.s.add(item)
                await self.s.flush()
                if first_translation:
                    record.set_locale_parent_id(parent_id)
                    await self.s.flush()
            except SQLAlchemyError as exc:
                log.exception("Failed to translate %s %s into %r", type(record).__name__, record.get_key(), locale)
                raise TranslationPersistenceError() from exc

        log.info(
            "Translated %s %s into %r as %s", type(record).__name__, parent_id, locale, item.get_key()
        )
        return item

    async def translations(self, record: T) -> list[T]:
        """All members of the record's group, parent included, ordered by key."""
        gid = group_parent_id(record)
        if gid is None:
            return [record]
        rows = (await self.s.execute(group_query(type(record), gid))).scalars().all()
        return list(rows)

    async def get_translation(self, record: T, locale: str) -> Optional[T]:
        return await find_in_group(self.s, record, locale)  # type: ignore[return-value]

    async def count_translations(self, record: T) -> int:
        gid = group_parent_id(record)
        if gid is None:
            return 1
        q = select(func.count()).select_from(group_query(type(record), gid).order_by(None).subquery())
        return int((await self.s.execute(q)).scalar_one())

    async def locales(self, record: T) -> list[str]:
        return sorted(r.get_locale() for r in await self.translations(record))
