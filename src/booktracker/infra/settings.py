"""
Application settings for booktracker.

This module defines all configuration settings for booktracker using Pydantic BaseSettings.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main application settings using Pydantic BaseSettings."""

    # Catalog files
    audit_file_name: str = Field(default="errors.log", alias="BOOKTRACKER_AUDIT_FILE")
    catalog_suffixes: str = Field(default=".txt", alias="BOOKTRACKER_CATALOG_SUFFIXES")  # Comma-separated
    catalog_encoding: str = Field(default="utf-8", alias="BOOKTRACKER_ENCODING")

    log_level: str = Field(default="WARNING", alias="LOG_LEVEL")
    env: str = Field(default="dev", alias="ENV")  # dev|prod|test

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def suffixes(self) -> tuple[str, ...]:
        """Accepted catalog suffixes, lower-cased and dot-prefixed."""
        out = []
        for raw in self.catalog_suffixes.split(","):
            raw = raw.strip().lower()
            if not raw:
                continue
            out.append(raw if raw.startswith(".") else f".{raw}")
        return tuple(out)


def _resolve_env_file() -> str | None:
    # 1) Explicit override
    explicit = os.getenv("BOOKTRACKER_ENV_FILE")
    if explicit and Path(explicit).is_file():
        return explicit

    # 2) CWD .env
    cwd_env = Path.cwd() / ".env"
    if cwd_env.is_file():
        return str(cwd_env)
    return None


_env_file = _resolve_env_file()
settings = Settings(_env_file=_env_file) if _env_file else Settings()  # type: ignore[call-arg]
