"""Tests for settings and logging configuration."""

import logging

import pytest

from staffops_engine.config import Settings, get_settings
from staffops_engine.logging_setup import configure_logging


@pytest.fixture(autouse=True)
def clear_settings_cache():
    engine_logger = logging.getLogger("staffops_engine")
    previous_level = engine_logger.level
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    engine_logger.setLevel(previous_level)


class TestSettings:
    """Test environment-driven settings."""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
        monkeypatch.setenv("LOG_LEVEL", "warning")
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("ENGINE_VERSION", "2.1.0")

        settings = Settings.from_env()

        assert settings.database_url == "sqlite+aiosqlite:///:memory:"
        assert settings.log_level == "WARNING"
        assert settings.debug
        assert settings.DEBUG
        assert settings.engine_version == "2.1.0"

    def test_defaults(self, monkeypatch):
        for name in ("DATABASE_URL", "LOG_LEVEL", "DEBUG", "ENGINE_VERSION"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setattr("staffops_engine.config.load_dotenv", lambda: False)

        settings = Settings.from_env()

        assert settings.database_url.startswith("postgresql+asyncpg://")
        assert settings.log_level == "INFO"
        assert not settings.debug

    def test_invalid_log_level(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            Settings(
                database_url="sqlite+aiosqlite:///:memory:",
                engine_version="1.0.0",
                log_level="LOUD",
                debug=False,
            )

    def test_empty_database_url(self):
        with pytest.raises(ValueError, match="database_url"):
            Settings(database_url="", engine_version="1.0.0", log_level="INFO", debug=False)

    def test_get_settings_cached(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

        assert get_settings() is get_settings()


class TestConfigureLogging:
    """Test logging level selection."""

    def test_uses_configured_level(self):
        settings = Settings(
            database_url="sqlite+aiosqlite:///:memory:",
            engine_version="1.0.0",
            log_level="WARNING",
            debug=False,
        )

        configure_logging(settings)

        assert logging.getLogger("staffops_engine").level == logging.WARNING

    def test_debug_overrides_level(self):
        settings = Settings(
            database_url="sqlite+aiosqlite:///:memory:",
            engine_version="1.0.0",
            log_level="WARNING",
            debug=True,
        )

        configure_logging(settings)

        assert logging.getLogger("staffops_engine").level == logging.DEBUG
