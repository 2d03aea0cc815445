from __future__ import annotations

import json
import logging
from importlib import resources
from typing import Any, Dict


log = logging.getLogger(__name__)

LANGS = ("en", "fr")


class I18N:
    _messages: Dict[str, Dict[str, str]] = {}

    @classmethod
    def load_locales(cls) -> None:
        # Load packaged message catalogues
        for lang in LANGS:
            try:
                data = json.loads(
                    resources.files("translatable.locales").joinpath(f"{lang}.json").read_text(encoding="utf-8")
                )
                cls._messages[lang] = data
            except (OSError, ValueError) as e:  # pragma: no cover
                log.warning("Failed to load locale %s: %s", lang, e)

    @classmethod
    def ensure_loaded(cls) -> None:
        if not cls._messages:
            cls.load_locales()

    @classmethod
    def available(cls) -> list[str]:
        cls.ensure_loaded()
        return sorted(cls._messages)


def t(lang: str, key: str, **kwargs: Any) -> str:
    I18N.ensure_loaded()
    msg = I18N._messages.get(lang, {}).get(key)
    if msg is None:
        # fallback to English
        msg = I18N._messages.get("en", {}).get(key, key)
    try:
        return msg.format(**kwargs)
    except (KeyError, IndexError):
        return msg
