from __future__ import annotations

import pytest
from sqlalchemy import func, select

from translatable import AlreadyTranslated, TranslationPersistenceError

from models import Article, Page


async def count_pages(session) -> int:
    return int((await session.execute(select(func.count()).select_from(Page))).scalar_one())


async def test_translate_links_parent_and_resolves_one_hop(repo) -> None:
    p = await repo.create(Page(title="Hello", locale="en"))
    assert p.id == 1
    assert p.locale_parent_id is None

    f1 = await repo.translate(p, "fr", {"title": "Bonjour"})
    assert f1.id != p.id
    assert f1.locale == "fr"
    assert f1.title == "Bonjour"
    assert f1.locale_parent_id == 1
    assert p.locale_parent_id == 1

    d = await repo.translate(f1, "de")
    assert d.locale == "de"
    assert d.locale_parent_id == 1
    assert d.locale_parent_id != f1.id
    # copied from the source it was translated from
    assert d.title == "Bonjour"


async def test_translate_into_own_locale_is_rejected(repo, session) -> None:
    p = await repo.create(Page(title="Hello", locale="en"))

    with pytest.raises(AlreadyTranslated):
        await repo.translate(p, "en")

    assert await count_pages(session) == 1
    assert p.locale_parent_id is None


async def test_translate_into_existing_group_locale_is_rejected(repo, session) -> None:
    p = await repo.create(Page(title="Hello", locale="en"))
    f = await repo.translate(p, "fr")

    with pytest.raises(AlreadyTranslated):
        await repo.translate(p, "fr")
    with pytest.raises(AlreadyTranslated):
        await repo.translate(f, "en")

    assert await count_pages(session) == 2


async def test_translate_copies_everything_but_identity(repo) -> None:
    p = await repo.create(Page(title="Hello", body="Long text", locale="en"))

    f = await repo.translate(p, "fr")

    assert f.id is not None and f.id != p.id
    assert f.body == "Long text"
    assert f.created_at is not None


async def test_translate_rejects_unknown_override(repo, session) -> None:
    p = await repo.create(Page(title="Hello", locale="en"))

    with pytest.raises(AttributeError):
        await repo.translate(p, "fr", {"subtitle": "x"})

    assert await count_pages(session) == 1


async def test_translate_is_atomic_when_parent_update_fails(repo, session, fail_flush) -> None:
    p = await repo.create(Page(title="Hello", locale="en"))
    await session.commit()

    # first flush inserts the translation, second re-points the parent
    fail_flush(2)
    with pytest.raises(TranslationPersistenceError) as exc_info:
        await repo.translate(p, "fr")

    assert exc_info.value.__cause__ is not None
    assert await count_pages(session) == 1
    assert p.locale_parent_id is None


async def test_translate_insert_failure_raises_persistence_error(repo, session, fail_flush) -> None:
    p = await repo.create(Page(title="Hello", locale="en"))

    fail_flush(1)
    with pytest.raises(TranslationPersistenceError):
        await repo.translate(p, "fr")

    assert await count_pages(session) == 1


async def test_translate_with_configured_columns(repo) -> None:
    a = await repo.create(Article(headline="Hello", lang="en", views=42))

    b = await repo.translate(a, "it", {"headline": "Ciao"})

    assert b.lang == "it"
    assert b.translation_of == a.id
    assert a.translation_of == a.id
    # excluded from replication, so the column default applies
    assert b.views == 0
    assert b.headline == "Ciao"
