"""Settings for the ghactions tooling, read from ``GHACTIONS_*`` variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ActionsSettings(BaseSettings):
    """Typed runtime configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GHACTIONS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Seeds ActionDescriptor.name for freshly created descriptors.
    package_name: str = "ghactions"
    action_file: str = "action.yml"
    log_level: str = "INFO"
    log_file: Path | None = Field(default=None, description="Defaults to ~/.ghactions/log.txt")


@lru_cache
def get_settings() -> ActionsSettings:
    return ActionsSettings()


__all__ = ["ActionsSettings", "get_settings"]
