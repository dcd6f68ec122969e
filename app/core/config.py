"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (DB URI, collection names, reference date)
- Validates configuration on startup
- Environment-specific settings
"""

from datetime import date
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Validates all required configs on startup.
    """

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # MongoDB
    MONGODB_URL: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI"
    )
    MONGODB_DB_NAME: str = Field(
        default="dashboard",
        description="MongoDB database name"
    )
    MONGODB_QUERY_TIMEOUT_MS: int = Field(
        default=5000,
        description="Server-side time limit (maxTimeMS) applied to every query"
    )

    # Collections (pluralised the way the dashboard's ODM names them)
    USERS_COLLECTION: str = Field(
        default="users",
        description="Collection holding user documents"
    )
    OVERALL_STATS_COLLECTION: str = Field(
        default="overallstats",
        description="Collection holding yearly statistics documents"
    )
    TRANSACTIONS_COLLECTION: str = Field(
        default="transactions",
        description="Collection holding transaction documents"
    )

    # Dashboard
    RECENT_TRANSACTIONS_LIMIT: int = Field(
        default=50,
        description="Number of most recent transactions returned by the dashboard"
    )
    DASHBOARD_REFERENCE_DATE: Optional[date] = Field(
        default=None,
        description="Pins the dashboard's 'today' (YYYY-MM-DD). Uses the UTC clock when unset."
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    API_PREFIX: str = Field(
        default="/api/v1",
        description="API route prefix"
    )
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @field_validator("RECENT_TRANSACTIONS_LIMIT")
    @classmethod
    def validate_transactions_limit(cls, v: int) -> int:
        """Keep the recent transactions window bounded."""
        if not 1 <= v <= 1000:
            raise ValueError("RECENT_TRANSACTIONS_LIMIT must be between 1 and 1000")
        return v

    @field_validator("MONGODB_QUERY_TIMEOUT_MS")
    @classmethod
    def validate_query_timeout(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("MONGODB_QUERY_TIMEOUT_MS must be positive")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


# Global settings instance
settings = Settings()


def validate_settings():
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    errors = []

    # Validate MongoDB URI
    if not settings.MONGODB_URL:
        errors.append("MONGODB_URL is required")

    if not settings.MONGODB_DB_NAME:
        errors.append("MONGODB_DB_NAME is required")

    # Production-specific validations
    if settings.is_production:
        if "localhost" in settings.MONGODB_URL or "127.0.0.1" in settings.MONGODB_URL:
            errors.append("MONGODB_URL must point to a real cluster in production")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
