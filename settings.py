# settings.py
"""
FitTrack API Settings.

Pydantic settings management with environment variable support.
"""

from pydantic import Field
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # MongoDB
    DATABASE_URL: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection string"
    )
    DATABASE_NAME: str = Field(default="fittrack")

    # Environment
    ENV: str = Field(default="development")
    DEBUG: bool = Field(default=True)

    # Gemini AI (meal plans, workout plans, meal swaps, coach chat)
    GEMINI_API_KEY: Optional[str] = Field(default=None, description="Google Gemini API key")
    GEMINI_MODEL: str = Field(default="gemini-2.0-flash")

    # Unsplash (meal images); placeholder images are used when unset
    UNSPLASH_ACCESS_KEY: Optional[str] = None
    UNSPLASH_TIMEOUT_SECONDS: float = 5.0

    # Rate limiting
    RATE_LIMIT_STORAGE_URI: str = Field(
        default="memory://",
        description="limits storage URI (memory:// or redis://[:password@]host:port/db)"
    )
    AI_RATE_LIMIT: str = Field(
        default="3/minute",
        description="Per-user limit for AI suggestion endpoints"
    )
    AI_REVIEW_RATE_LIMIT: str = Field(
        default="5/minute",
        description="Per-user limit for AI meal plan reviews"
    )
    DEFAULT_RATE_LIMIT: str = Field(
        default="60/minute",
        description="Per-client limit for every endpoint"
    )

    # Shopping list category vocabulary: "generic" or "pakistan"
    SHOPPING_CATEGORY_TABLE: str = Field(default="generic")

    # CORS
    CORS_ORIGINS: List[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
        ]
    )

    # Sentry Error Tracking
    SENTRY_DSN: Optional[str] = None
    SENTRY_ENVIRONMENT: str = "production"
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    @property
    def gemini_configured(self) -> bool:
        """Check if Gemini is configured."""
        return bool(self.GEMINI_API_KEY)

    def validate_required_settings(self) -> None:
        """Validate that required settings are configured."""
        if not self.DATABASE_URL:
            raise ValueError("DATABASE_URL must be set")
        if not self.GEMINI_API_KEY:
            raise ValueError("GEMINI_API_KEY must be set in production")
        if self.RATE_LIMIT_STORAGE_URI.startswith("memory://"):
            raise ValueError("RATE_LIMIT_STORAGE_URI must point to a shared store in production")

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()

# Validate in production
if settings.ENV == "production":
    settings.validate_required_settings()
