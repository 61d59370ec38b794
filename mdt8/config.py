from __future__ import annotations

import os
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

STATE_FILE_NAME = "mdt8.json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MDT8_", env_file=".env", case_sensitive=False, extra="ignore")
    """Runtime configuration for the tracker."""

    state_file: Optional[Path] = None
    default_goal_minutes: int = Field(default=30, ge=0)
    timezone: Optional[str] = None
    log_level: str = "WARNING"

    @field_validator("timezone", mode="before")
    @classmethod
    def _check_timezone(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip()
        if not text:
            return None
        try:
            ZoneInfo(text)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone '{text}'. Use IANA timezone identifiers.") from exc
        return text

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return str(value).strip().upper() or "WARNING"

    def tzinfo(self) -> Optional[ZoneInfo]:
        return ZoneInfo(self.timezone) if self.timezone else None


def default_config_dir() -> Path:
    xdg_home = os.getenv("XDG_CONFIG_HOME", "").strip()
    # Relative XDG paths are invalid and must be ignored.
    if xdg_home and Path(xdg_home).is_absolute():
        return Path(xdg_home)
    return Path.home() / ".config"


def resolve_state_path(settings: Settings, override: Optional[Path] = None) -> Path:
    """Pick the state file: explicit override, then settings, then the user config dir."""
    if override is not None:
        return Path(override).expanduser()
    if settings.state_file is not None:
        return settings.state_file.expanduser()
    return default_config_dir() / STATE_FILE_NAME


__all__ = ["Settings", "STATE_FILE_NAME", "default_config_dir", "resolve_state_path"]
