"""Application configuration with environment validation."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, PostgresDsn
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    host: str = Field(default="0.0.0.0", alias="MATCHA_HOST")
    port: int = Field(default=3000, alias="MATCHA_PORT")
    environment: Literal["development", "production", "test"] = Field(
        default="development", alias="ENVIRONMENT"
    )

    # Database
    database_url: PostgresDsn = Field(..., alias="DATABASE_URL")
    db_pool_min: int = Field(default=2, alias="DB_POOL_MIN")
    db_pool_max: int = Field(default=10, alias="DB_POOL_MAX")
    db_command_timeout: float = Field(default=60.0, alias="DB_COMMAND_TIMEOUT")

    # Pagination links are built from this prefix when the API runs behind a proxy
    public_base_url: str | None = Field(default=None, alias="PUBLIC_BASE_URL")

    # Observability
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Likes
    max_likes_per_hour: int = Field(default=50, alias="MAX_LIKES_PER_HOUR")

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
