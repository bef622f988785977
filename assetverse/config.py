"""Application configuration."""
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Environment variables take precedence over .env file.
    This makes it compatible with Docker (uses env vars) and
    local development (uses .env file).
    """

    APP_NAME: str = "AssetVerse"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # All routers are mounted under this prefix
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = ["http://localhost:5173"]

    # Database
    DATABASE_URL: str = "sqlite:///./assetverse.db"

    # Identity provider ID tokens
    AUTH_SECRET_KEY: str = "your-secret-key-change-in-production"
    AUTH_ALGORITHM: str = "HS256"
    AUTH_AUDIENCE: Optional[str] = None

    # Subscription
    DEFAULT_PACKAGE: str = "basic"
    DEFAULT_PACKAGE_LIMIT: int = 5

    # Stripe
    STRIPE_SECRET_KEY: str = ""
    CLIENT_URL: str = "http://localhost:5173"
    CURRENCY: str = "usd"

    model_config = SettingsConfigDict(
        # Only load .env file if it exists (for local dev)
        # Docker will use environment variables directly
        env_file=".env" if Path(".env").exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
