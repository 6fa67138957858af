"""Application configuration using Pydantic Settings."""

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Weather Live Gateway"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 3001

    # API
    api_prefix: str = "/api"
    cors_origins: list[str] = ["*"]

    # Upstream provider (Google Maps Platform)
    google_api_key: str | None = None
    upstream_timeout: float = 10.0
    probe_timeout: float = 5.0

    @property
    def provider_configured(self) -> bool:
        """Whether an upstream credential is present."""
        return bool(self.google_api_key)

    def validate_startup(self) -> None:
        """Log configuration problems without refusing to start."""
        if not self.provider_configured:
            logger.warning(
                "GOOGLE_API_KEY is not set; upstream weather, geocoding and "
                "air quality calls will fail until it is configured"
            )
        else:
            logger.info(f"Upstream provider configured, timeout {self.upstream_timeout}s")


settings = Settings()
