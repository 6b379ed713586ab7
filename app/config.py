# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.DATABASE_PATH)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.validation import ContactRules


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every value has a development default, so the API starts with an
    empty environment and a contacts.db file in the working directory.
    """

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    DATABASE_PATH: str = Field(
        default="./contacts.db",
        description="Path of the SQLite file holding the contacts table (':memory:' allowed)"
    )

    # -------------------------------------------------------------------------
    # Contact Validation
    # -------------------------------------------------------------------------

    AGE_MAX: int = Field(
        default=130,
        ge=2,
        description="Upper bound for a contact's age"
    )

    AGE_MAX_INCLUSIVE: bool = Field(
        default=True,
        description="Whether AGE_MAX itself is an accepted age"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Client Settings
    # -------------------------------------------------------------------------

    CONTACTS_API_URL: str = Field(
        default="http://localhost:8000",
        description="Base URL the client application talks to"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def contact_rules(self) -> ContactRules:
        """Validation rules for contact payloads, with the configured age bound."""
        return ContactRules(
            age_max=self.AGE_MAX,
            age_max_inclusive=self.AGE_MAX_INCLUSIVE,
        )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
