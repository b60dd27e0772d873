"""Application settings, read once per process from the environment / ``.env``.

Invalid values never block startup: each field falls back to its default.
"""
from __future__ import annotations

import os
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from takt.engine.balance import DEFAULT_TARGET_HOURS, parse_target_hours

DEFAULT_FILE = "~/takt.csv"
DEFAULT_HEAD = 10
DEFAULT_LOG_LEVEL = "WARNING"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    TAKT_FILE: str = DEFAULT_FILE
    TAKT_TARGET_HOURS: str = ""
    TAKT_EDITOR: str = ""
    TAKT_HEAD: int = DEFAULT_HEAD
    TAKT_LOG_LEVEL: str = DEFAULT_LOG_LEVEL

    @field_validator("TAKT_HEAD", mode="before")
    @classmethod
    def head_or_default(cls, v: object) -> int:
        try:
            return int(v)
        except (TypeError, ValueError):
            return DEFAULT_HEAD

    @field_validator("TAKT_LOG_LEVEL", mode="before")
    @classmethod
    def level_or_default(cls, v: object) -> str:
        level = str(v or "").strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            return DEFAULT_LOG_LEVEL
        return level

    @property
    def ledger_path(self) -> Path:
        raw = self.TAKT_FILE.strip() or DEFAULT_FILE
        return Path(os.path.expanduser(raw))

    @property
    def target_hours(self) -> float:
        return parse_target_hours(self.TAKT_TARGET_HOURS, DEFAULT_TARGET_HOURS)


def load_settings(**overrides) -> Settings:
    """Build the one Settings value for this process; keyword overrides win over the environment."""
    return Settings(**overrides)
