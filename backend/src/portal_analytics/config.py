"""Application configuration using pydantic-settings."""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Toolkit settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PORTAL_ANALYTICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Snapshot source
    snapshot_path: str = Field(
        default="test_ver11.json",
        description="Snapshot file read by the validator, relative to the working directory",
    )
    snapshot_url: str | None = Field(
        default=None,
        description="When set, the snapshot is fetched over HTTP instead of read from disk",
    )
    profile: str = Field(default="hackathon", description="Built-in dashboard profile to validate against")
    http_timeout_seconds: float = Field(default=10.0, gt=0, description="Timeout for snapshot HTTP fetches")

    # Application Configuration
    app_env: str = Field(default="development", description="Application environment (development/ci/production)")
    log_level: str = Field(default="WARNING", description="Logging level")


# Global settings instance
settings = Settings()
