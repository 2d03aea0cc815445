"""Translation groups for SQLAlchemy models."""

from __future__ import annotations

from .core.errors import AlreadyTranslated, TranslatableException, TranslationPersistenceError
from .infra.linker import PendingParent, link_after_create, link_before_create
from .infra.models import Base, TranslatableMixin, group_locale_constraint, replicate
from .infra.repos import TranslationsRepo

__all__ = [
    "AlreadyTranslated",
    "Base",
    "PendingParent",
    "TranslatableException",
    "TranslatableMixin",
    "TranslationPersistenceError",
    "TranslationsRepo",
    "group_locale_constraint",
    "link_after_create",
    "link_before_create",
    "replicate",
]
