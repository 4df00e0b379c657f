"""
Application configuration using Pydantic Settings.

All configuration is loaded from environment variables, with an optional .env file
as a fallback. This keeps deployment-specific values (database URL, allowed
origins) out of source code.

Pydantic Settings automatically:
  1. Reads from environment variables (highest priority)
  2. Falls back to .env file values
  3. Uses defaults defined here (lowest priority)

Usage:
    from app.config import settings
    print(settings.DATABASE_URL)
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for the Accounts API."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # --- Application ---
    APP_NAME: str = "Accounts API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # --- Database ---
    # SQLite for local use; swap to a PostgreSQL connection string for production
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/accounts.db"

    # --- Profile codes ---
    # Generated codes look like "CLI-001": prefix + zero-padded counter
    PROFILE_CODE_PREFIX: str = "CLI-"
    PROFILE_CODE_WIDTH: int = 3
    # Upper bound on candidates tried before giving up on a unique code
    CODE_GENERATION_MAX_ATTEMPTS: int = 50

    # --- CORS ---
    # Origins allowed to make cross-origin requests (frontend URLs)
    ALLOWED_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:5173"]


# Singleton: import this instance everywhere instead of creating new Settings()
settings = Settings()
