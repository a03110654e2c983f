"""Application configuration via pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Settings
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # CORS - comma-separated origins (env var: CORS_ORIGINS)
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Database path (DuckDB file with aggregated hero/player stats)
    database_path: str = "data/hots_fever.duckdb"

    # Draft defaults
    default_tier: Literal["low", "mid", "high"] = "mid"
    confidence_threshold: int = 30

    # Draft policy knobs (percentage points)
    role_need_bonus: float = 3.0
    secondary_role_bonus: float = 1.5
    duplicate_role_penalty: float = 15.0
    support_stack_penalty: float = 8.0
    ban_filled_role_penalty: float = 8.0
    recommendation_limit: int = 15


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
