"""
Unit tests for configuration module.
"""
import logging
import os
from unittest.mock import patch

import pytest

from slidesmith.core import Settings, get_settings, setup_logging
from slidesmith.core import debug


class TestSettings:
    """Tests for Settings class."""

    def test_default_values(self):
        """Test that default values are set correctly."""
        settings = Settings(_env_file=None)

        assert settings.app_name == "Slidesmith"
        assert settings.host == "0.0.0.0"
        assert settings.port == 7010
        assert settings.autosave_debounce_seconds == 1.5
        assert settings.history_limit == 100
        assert settings.require_unique_ids is False

    def test_port_validation(self):
        """Test that port validation works."""
        with pytest.raises(ValueError):
            Settings(port=0)  # Below minimum

        with pytest.raises(ValueError):
            Settings(port=70000)  # Above maximum

        settings = Settings(port=8080)
        assert settings.port == 8080

    def test_debounce_and_limit_validation(self):
        with pytest.raises(ValueError):
            Settings(autosave_debounce_seconds=-1)

        with pytest.raises(ValueError):
            Settings(history_limit=0)

        assert Settings(history_limit=None).history_limit is None

    def test_path_properties(self, tmp_path):
        """Test that path properties return correct values."""
        settings = Settings(data_dir=tmp_path / "data")

        assert settings.presentations_dir == tmp_path / "data" / "presentations"

        settings.ensure_directories()
        assert settings.presentations_dir.is_dir()

    @patch.dict(os.environ, {
        "AUTOSAVE_ENABLED": "false",
        "REQUIRE_UNIQUE_IDS": "true",
        "HISTORY_LIMIT": "25",
    })
    def test_environment_overrides(self):
        """Test values loaded from environment variables."""
        settings = Settings(_env_file=None)

        assert settings.autosave_enabled is False
        assert settings.require_unique_ids is True
        assert settings.history_limit == 25


class TestGetSettings:
    """Tests for get_settings function."""

    def test_returns_cached_settings(self, clean_environment):
        """Test that settings are cached."""
        assert get_settings() is get_settings()


class TestDebugMode:
    """Tests for debug mode state."""

    def test_init_from_environment(self, monkeypatch):
        monkeypatch.setenv("DEBUG", "yes")
        assert debug.init_debug_mode() is True
        assert debug.is_debug_mode() is True

        monkeypatch.setenv("DEBUG", "0")
        assert debug.init_debug_mode() is False

    def test_save_counter(self):
        debug.reset_save_count()

        debug.increment_save_count()
        debug.increment_save_count(2)

        assert debug.get_save_count() == 3
        assert debug.get_debug_status()["save_count"] == 3


class TestLogging:
    """Tests for logging setup."""

    def test_level_by_name(self):
        root = logging.getLogger()
        previous = root.level
        try:
            setup_logging("debug")
            assert root.level == logging.DEBUG
            assert logging.getLogger("python_multipart").level == logging.WARNING

            setup_logging("not-a-level")
            assert root.level == logging.INFO
        finally:
            root.setLevel(previous)
