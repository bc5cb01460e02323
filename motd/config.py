"""Application configuration using Pydantic settings."""

from datetime import date, datetime
from functools import lru_cache
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Directories
    image_dir: Path = Path("images")
    asset_dir: Path = Path("assets")

    # Logging
    log_file: str = ""  # Empty disables file logging
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # Images are renewed at midnight in this timezone
    timezone: str = "CET"

    disable_background: bool = False

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Failed to load timezone '{value}': {e}") from e
        return value

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def local_now(tz: Optional[ZoneInfo] = None) -> datetime:
    """Current time in the configured timezone (DST handled by zoneinfo)."""
    return datetime.now(tz or get_settings().tz)


def local_today(tz: Optional[ZoneInfo] = None) -> date:
    """Today's date in the configured timezone."""
    return local_now(tz).date()
