"""Application settings via pydantic-settings."""

from datetime import tzinfo
from functools import lru_cache
from pathlib import Path
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables with YYC_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="YYC_",
        env_file=".env",
        case_sensitive=False,
    )

    # --- Core ---
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = "json"

    # --- Local profile storage ---
    data_dir: Path = Path.home() / ".yyc"
    database_url: str = ""  # empty: sqlite file under data_dir
    profile_id: str = "default"  # single-user mode

    # --- Streaks ---
    streak_timezone: str = "UTC"

    def resolved_database_url(self) -> str:
        """Return the configured database URL, defaulting to a sqlite file in data_dir."""
        if self.database_url:
            return self.database_url
        return f"sqlite+aiosqlite:///{self.data_dir / 'profile.db'}"

    def tzinfo(self) -> tzinfo:
        """Timezone used to decide calendar days for streaks."""
        return ZoneInfo(self.streak_timezone)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
