"""Application configuration using pydantic-settings."""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Channel Catalog"
    debug: bool = False

    # Database (local SQLite file, or Turso when a remote URL is set)
    database_url: str = Field(default="data/catalog.db")
    turso_database_url: str | None = Field(default=None)
    turso_auth_token: str | None = Field(default=None)

    # YouTube Data API
    youtube_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("youtube_api_key", "youtube_data_v3_api_key"),
    )
    youtube_page_size: int = Field(default=50, ge=1, le=50, description="Items per playlist page")
    youtube_request_timeout_seconds: int = Field(default=30)

    # Ingestion settings
    detailed_max_videos: int = Field(
        default=500,
        description="Number of most recent videos fetched with full details",
    )
    fetch_safety_cap: int = Field(
        default=10_000,
        description="Upper bound on a detailed fetch when no limit is given",
    )
    upsert_batch_size: int = Field(default=100, ge=1, description="Records per video write")

    # Catalog view settings
    default_page_size: int = Field(default=20, ge=1, le=500)

    @property
    def use_turso(self) -> bool:
        """Whether a remote Turso database is configured."""
        return bool(self.turso_database_url)

    @property
    def database_path(self) -> Path:
        """Get the database path as a Path object."""
        return Path(self.database_url)


settings = Settings()
