"""Configuration management for githist."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HISTORY_PATH = Path(".git_command_history")
DEFAULT_COLLECTION = "git_command_history"


class GitHistSettings(BaseSettings):
    """Runtime configuration sourced from environment variables and optional .env file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    git_path: str | None = Field(default=None, validation_alias="GITHIST_GIT_PATH")
    history_path: Path = Field(default=DEFAULT_HISTORY_PATH, validation_alias="GITHIST_HISTORY_PATH")
    collection_name: str = Field(default=DEFAULT_COLLECTION, validation_alias="GITHIST_COLLECTION")
    log_level: str = Field(default="WARNING", validation_alias="GITHIST_LOG_LEVEL")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(
                "GITHIST_LOG_LEVEL must be one of CRITICAL, ERROR, WARNING, INFO, DEBUG"
            )
        return normalized

    @field_validator("collection_name")
    @classmethod
    def _validate_collection_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("GITHIST_COLLECTION must not be empty")
        return normalized

    @field_validator("history_path", mode="before")
    @classmethod
    def _parse_history_path(cls, value):
        if value is None or value == "":
            return DEFAULT_HISTORY_PATH
        return Path(str(value)).expanduser()


@lru_cache(maxsize=1)
def get_settings() -> GitHistSettings:
    """Return cached settings instance."""

    return GitHistSettings()


__all__ = ["DEFAULT_COLLECTION", "DEFAULT_HISTORY_PATH", "GitHistSettings", "get_settings"]
