"""Configuration management for boothdesk."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # SQLite Configuration
    sqlite_db_path: str = Field(default="data/boothdesk.db", description="Path to the SQLite database file")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")

    # Deployment
    environment: str = Field(default="development", description="Deployment environment name")


# Application Constants
class Constants:
    """Application-wide constants."""

    # Pagination Defaults
    DEFAULT_PER_PAGE_LIMIT: int = 100  # Default pagination limit for list queries
    ACTIVITY_PAGE_SIZE: int = 500  # Page size when walking a staff member's full activity log

    # Filter batching (keeps OR-groups and bound parameter counts small)
    STAFF_ID_BATCH_SIZE: int = 100


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
