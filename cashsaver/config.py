"""Application configuration using Pydantic settings."""

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "CashSaver"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development, staging, production

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./cashsaver.db"
    DB_ECHO: bool = False

    # Calendar arithmetic (deposit days, pacing day counts) happens in this zone
    TIMEZONE: str = "UTC"

    # Monitoring
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"  # 'text' or 'json' (json for production)

    # Reminders
    REMINDER_TITLE: str = "Daily Saving Reminder"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @field_validator("TIMEZONE")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject zone names the tz database does not know."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown TIMEZONE {v!r}; use an IANA name like 'Europe/Berlin'")
        return v

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v not in ("text", "json"):
            raise ValueError("LOG_FORMAT must be 'text' or 'json'")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
