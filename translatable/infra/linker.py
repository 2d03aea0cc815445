"""Creation-time linking of records into translation groups.

Creating a record whose parent id is already set runs in two phases around
the insert. ``link_before_create`` validates the reference and resolves the
group's canonical parent id. ``link_after_create`` re-points a parent that
was standalone until now. The value returned by the first phase is handed to
the second explicitly, so no state lives on the record between them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy import Select, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.errors import AlreadyTranslated, TranslationPersistenceError
from .models import TranslatableMixin

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingParent:
    """A standalone record that becomes a group parent once the insert lands."""

    record: TranslatableMixin


def is_empty(value: Any) -> bool:
    return value is None or value == ""


def group_parent_id(record: TranslatableMixin) -> Any:
    """Resolve the group id through one hop: own parent id, else own key."""
    parent_id = record.get_locale_parent_id()
    return record.get_key() if is_empty(parent_id) else parent_id


def group_query(cls: type[TranslatableMixin], gid: Any) -> Select:
    # The parent may still be unlinked, so match it by key as well
    return (
        select(cls)
        .where(or_(cls.locale_parent_id_attr() == gid, cls.key_attr() == gid))
        .order_by(cls.key_attr())
    )


async def find_in_group(session: AsyncSession, record: TranslatableMixin, locale: str) -> Optional[TranslatableMixin]:
    gid = group_parent_id(record)
    if gid is None:
        # Not persisted yet: the group is the record alone
        return record if record.get_locale() == locale else None
    cls = type(record)
    q = group_query(cls, gid).where(cls.locale_attr() == locale).limit(1)
    return (await session.execute(q)).scalars().first()


async def ensure_locale_free(session: AsyncSession, record: TranslatableMixin, locale: str) -> None:
    existing = await find_in_group(session, record, locale)
    if existing is not None:
        log.warning(
            "%s %s already has a %r translation (%s)",
            type(record).__name__, record.get_key(), locale, existing.get_key(),
        )
        raise AlreadyTranslated()


async def link_before_create(session: AsyncSession, record: TranslatableMixin) -> Optional[PendingParent]:
    parent_id = record.get_locale_parent_id()
    if is_empty(parent_id):
        return None

    cls = type(record)
    referenced = await session.get(cls, parent_id)
    if referenced is None:
        log.warning("%s parent %s not found, creating as standalone", cls.__name__, parent_id)
        record.set_locale_parent_id(None)
        return None

    await ensure_locale_free(session, referenced, record.get_locale())

    record.set_locale_parent_id(group_parent_id(referenced))
    if is_empty(referenced.get_locale_parent_id()):
        return PendingParent(record=referenced)
    return None


async def link_after_create(
    session: AsyncSession, record: TranslatableMixin, pending: Optional[PendingParent]
) -> None:
    if pending is None:
        return
    pending.record.set_locale_parent_id(record.get_locale_parent_id())
    try:
        await session.flush()
    except SQLAlchemyError as exc:
        log.exception("Failed to link %s %s as group parent", type(record).__name__, pending.record.get_key())
        raise TranslationPersistenceError() from exc
    log.debug("%s %s is now parent of group", type(record).__name__, pending.record.get_key())
