"""Configuration system for ListingBridge.

Uses pydantic-settings to load configuration from environment variables
and .env files with defaults matching a locally running listing service.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Environment variables are prefixed with LISTINGBRIDGE_
    (e.g., LISTINGBRIDGE_LISTING_SERVICE_URL).
    """

    model_config = SettingsConfigDict(
        env_prefix="LISTINGBRIDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Remote listing service
    listing_service_url: str = Field(
        default="http://localhost:8083",
        description="Base address of the remote listing service",
    )
    request_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Overall per-request timeout in seconds",
    )
    connect_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Connection establishment timeout in seconds",
    )

    # Degradation
    known_defect_status: int = Field(
        default=500,
        ge=0,
        description=(
            "HTTP status that signals the remote data-shape defect and "
            "triggers client-side fallback filtering (0 disables fallback)"
        ),
    )

    # Cache
    cache_ttl_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Optional expiry for cache entries; None keeps entries until evicted",
    )

    log_level: str = Field(
        default="INFO",
        description="Log level for the CLI entry point",
    )


# Singleton instance for easy import
config = Settings()
