from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file explicitly
ENV_FILE_NAME = ".env"
env_path = Path.cwd() / ENV_FILE_NAME
load_dotenv(env_path, override=False)


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/translatable.db"
    DEFAULT_LANG: str = "en"
    LOCALE_COLUMN: str = "locale"
    LOCALE_PARENT_ID_COLUMN: str = "locale_parent_id"
    LOG_LEVEL: str = "INFO"

    @field_validator("LOCALE_COLUMN", mode="before")
    @classmethod
    def default_locale_column(cls, v):  # type: ignore
        # Blank values fall back to the built-in name
        if v is None or not str(v).strip():
            return "locale"
        return str(v).strip()

    @field_validator("LOCALE_PARENT_ID_COLUMN", mode="before")
    @classmethod
    def default_locale_parent_id_column(cls, v):  # type: ignore
        if v is None or not str(v).strip():
            return "locale_parent_id"
        return str(v).strip()

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def upper_level(cls, v):  # type: ignore
        return str(v or "INFO").upper()

    model_config = SettingsConfigDict(
        env_prefix="TRANSLATABLE_",
        env_file=ENV_FILE_NAME,
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings(
    DATABASE_URL=os.getenv("TRANSLATABLE_DATABASE_URL", "sqlite+aiosqlite:///./data/translatable.db"),
    DEFAULT_LANG=os.getenv("TRANSLATABLE_DEFAULT_LANG", "en"),
    LOCALE_COLUMN=os.getenv("TRANSLATABLE_LOCALE_COLUMN", "locale"),
    LOCALE_PARENT_ID_COLUMN=os.getenv("TRANSLATABLE_LOCALE_PARENT_ID_COLUMN", "locale_parent_id"),
    LOG_LEVEL=os.getenv("TRANSLATABLE_LOG_LEVEL", "INFO"),
)
