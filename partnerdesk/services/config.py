"""Application configuration from environment variables.

Settings are read from the process environment and an optional `.env` file in
the working directory. Every field maps to an upper-case variable of the same
name (e.g. DATABASE_URL, LOG_LEVEL, TRANSACTION_MAX_ATTEMPTS).
"""

from decimal import Decimal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(
        default="sqlite:///./partnerdesk.db",
        description="SQLAlchemy connection string (sync form; async driver is derived)",
    )
    database_echo: bool = Field(default=False, description="Log SQL queries")

    # Collections
    transaction_max_attempts: int = Field(
        default=3,
        ge=1,
        description="Attempts for a read-check-write transaction before giving up on conflicts",
    )

    # Wallet
    wallet_opening_balance: Decimal = Field(
        default=Decimal("0"), description="Balance used when the wallet summary is first created"
    )
    wallet_opening_revenue: Decimal = Field(
        default=Decimal("0"), description="Revenue used when the wallet summary is first created"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: str = Field(default="logs/server.log", description="Log file path")

    # API
    api_title: str = Field(default="partnerdesk API", description="API title")
    api_version: str = Field(default="0.1.0", description="API version")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def async_database_url(self) -> str:
        """Database URL with an async driver (aiosqlite / asyncpg)."""
        url = self.database_url
        if url.startswith("sqlite:///"):
            return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url


# Global settings instance
settings = Settings()

__all__ = ["Settings", "settings"]
