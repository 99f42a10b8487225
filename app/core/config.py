"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (Supabase secrets, server, defaults)
- Reports missing store secrets without aborting startup
- Environment-specific settings
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional, Literal, Union


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    The Supabase secrets are optional: without them the data endpoints
    report a "not configured" error instead of failing at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # Supabase
    SUPABASE_URL: Optional[str] = Field(
        default=None,
        description="Supabase project URL (https://<project>.supabase.co)"
    )
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = Field(
        default=None,
        description="Supabase service role key"
    )

    # Tables
    USERS_TABLE: str = "users"
    LOANS_TABLE: str = "loans"
    NOTIFICATIONS_TABLE: str = "notifications"
    CONFIG_TABLE: str = "system_config"

    # System config defaults
    DEFAULT_BUDGET: Union[int, float] = Field(
        default=30_000_000,
        description="Budget reported when system_config has no budget row"
    )
    DEFAULT_RANK_PROFIT: Union[int, float] = Field(
        default=0,
        description="Rank profit reported when system_config has no rankProfit row"
    )

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    MAX_BODY_BYTES: int = Field(
        default=50 * 1024 * 1024,
        description="Largest accepted request body in bytes"
    )
    STATIC_DIR: str = Field(
        default="dist",
        description="Built front-end directory, served when present"
    )

    # Application
    DEBUG: bool = False
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    CORS_ORIGINS: List[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )
    SLOW_REQUEST_SECONDS: float = 5.0

    @field_validator("SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY")
    @classmethod
    def blank_as_missing(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty or whitespace-only secrets as unset."""
        if v is None:
            return None
        v = v.strip()
        return v or None

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def store_configured(self) -> bool:
        """Both Supabase secrets are present."""
        return bool(self.SUPABASE_URL and self.SUPABASE_SERVICE_ROLE_KEY)


# Global settings instance
settings = Settings()


def validate_settings() -> List[str]:
    """
    Checks settings on application startup.

    Missing store secrets are not fatal, so they come back as warnings
    for the caller to log.

    Returns:
        List of warning messages (empty when fully configured)
    """
    warnings = []

    if not settings.SUPABASE_URL:
        warnings.append("SUPABASE_URL is not set")
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        warnings.append("SUPABASE_SERVICE_ROLE_KEY is not set")

    if settings.MAX_BODY_BYTES <= 0:
        raise ValueError("MAX_BODY_BYTES must be positive")

    return warnings
