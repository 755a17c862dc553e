"""
Application configuration management.
"""
from typing import List, Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        # Ignore .env file errors - use defaults if file is missing or invalid
        env_ignore_empty=True
    )

    # Application info
    APP_NAME: str = Field(default="Lapwatch", description="Application name")
    VERSION: str = Field(default="0.1.0", description="Application version")
    ENV: Literal["dev", "prod"] = Field(default="dev", description="Environment (dev/prod)")

    # API
    API_V1_STR: str = Field(default="/api/v1", description="API v1 prefix")
    HOST: str = Field(default="0.0.0.0", description="Host to bind")
    PORT: int = Field(default=8000, description="Port to bind")

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="List of allowed CORS origins"
    )

    # Stopwatch
    SAMPLE_INTERVAL_MS: int = Field(
        default=10,
        ge=1,
        description="Interval between elapsed-time samples while running, in milliseconds"
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Optional[str] = Field(
        default=None,
        description="Log format; unset uses the request_id aware format"
    )

    @property
    def DEBUG(self) -> bool:
        """Debug mode is enabled in dev environment."""
        return self.ENV == "dev"


settings = Settings()
