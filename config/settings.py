"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Nothing is required: defaults point at the public ShipHero API.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # SHIPHERO
    # ===================
    shiphero_api_url: str = Field(
        default="https://public-api.shiphero.com/graphql",
        description="ShipHero GraphQL endpoint"
    )
    shiphero_auth_url: str = Field(
        default="https://public-api.shiphero.com/auth/refresh",
        description="ShipHero refresh-token exchange endpoint"
    )
    shiphero_request_timeout: int = Field(
        default=30,
        ge=1,
        le=300,
        description="Seconds to wait for a single ShipHero call"
    )

    # ===================
    # UPLOAD PIPELINE
    # ===================
    upload_batch_size: int = Field(
        default=10,
        ge=1,
        le=500,
        description="Products per sequential batch"
    )
    upload_row_delay_ms: int = Field(
        default=100,
        ge=0,
        le=10000,
        description="Pause after every product update (rate limit throttle)"
    )
    max_reported_errors: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="Error messages returned to the caller"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=8000,
        ge=1000,
        le=65535,
        description="API port"
    )
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"],
        description="Origins allowed to call the API from a browser"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def upload_row_delay_seconds(self) -> float:
        return self.upload_row_delay_ms / 1000


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
