from __future__ import annotations

from typing import Optional

from .config import settings
from .i18n import t


class TranslatableException(Exception):
    """Base error for translation group operations."""

    key = "error_during_translation"

    def __init__(self, message: Optional[str] = None, *, lang: Optional[str] = None) -> None:
        self.lang = lang or settings.DEFAULT_LANG
        super().__init__(message if message is not None else t(self.lang, self.key))


class AlreadyTranslated(TranslatableException):
    """The target locale already has a member in the translation group."""

    key = "already_translated"


class TranslationPersistenceError(TranslatableException):
    """A required insert or parent re-point could not be written."""

    key = "error_during_translation"
