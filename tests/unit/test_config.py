"""Unit tests for application settings."""

from decimal import Decimal

from partnerdesk.services.config import Settings


class TestSettings:
    """Test Settings loading and derived values."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        settings = Settings(_env_file=None)

        assert settings.database_url == "sqlite:///./partnerdesk.db"
        assert settings.transaction_max_attempts == 3
        assert settings.wallet_opening_balance == Decimal("0")
        assert settings.log_level == "INFO"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://user:pw@db:5432/partners")
        monkeypatch.setenv("TRANSACTION_MAX_ATTEMPTS", "5")
        monkeypatch.setenv("WALLET_OPENING_BALANCE", "100.50")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.transaction_max_attempts == 5
        assert settings.wallet_opening_balance == Decimal("100.50")
        assert settings.log_level == "DEBUG"

    def test_async_url_for_sqlite(self):
        settings = Settings(_env_file=None, database_url="sqlite:///./data/app.db")

        assert settings.async_database_url == "sqlite+aiosqlite:///./data/app.db"

    def test_async_url_for_postgres(self):
        settings = Settings(_env_file=None, database_url="postgresql://u:p@localhost:5432/db")

        assert settings.async_database_url == "postgresql+asyncpg://u:p@localhost:5432/db"

    def test_async_url_kept_when_driver_given(self):
        url = "postgresql+asyncpg://u:p@localhost:5432/db"
        settings = Settings(_env_file=None, database_url=url)

        assert settings.async_database_url == url
