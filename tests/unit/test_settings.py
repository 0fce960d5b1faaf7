"""Unit tests for settings and logging setup."""

import logging

import pytest

from wealthdash.config.logging_config import setup_logging
from wealthdash.config.settings import Settings, get_settings, reset_settings, set_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("DATABASE_URL", "PRICE_PROVIDER", "LOG_LEVEL", "PRICE_CACHE_TTL_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


class TestSettings:
    def test_defaults(self):
        settings = Settings()

        assert settings.price_provider == "yahoo"
        assert settings.price_cache_ttl_seconds == 300
        assert settings.http_timeout_seconds == 10.0
        assert settings.coingecko_api_key is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("PRICE_PROVIDER", " CoinGecko ")
        monkeypatch.setenv("PRICE_CACHE_TTL_SECONDS", "60")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings()

        assert settings.price_provider == "coingecko"
        assert settings.price_cache_ttl_seconds == 60
        assert settings.log_level == "DEBUG"

    def test_unknown_provider_is_rejected(self, monkeypatch):
        monkeypatch.setenv("PRICE_PROVIDER", "bloomberg")

        with pytest.raises(ValueError):
            Settings()

    def test_database_url_derived_from_data_dir(self, tmp_path):
        settings = Settings(data_dir=tmp_path / "data")

        assert settings.get_database_url() == f"sqlite:///{tmp_path / 'data' / 'wealthdash.db'}"
        assert (tmp_path / "data").is_dir()

    def test_explicit_database_url_wins(self, tmp_path):
        settings = Settings(data_dir=tmp_path, database_url="sqlite://")

        assert settings.get_database_url() == "sqlite://"

    def test_singleton(self):
        custom = Settings(app_name="Custom")
        set_settings(custom)

        assert get_settings() is custom

        reset_settings()
        assert get_settings() is not custom


class TestLogging:
    def test_third_party_loggers_are_quieted(self):
        setup_logging("DEBUG")

        assert logging.getLogger("yfinance").level == logging.CRITICAL
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
