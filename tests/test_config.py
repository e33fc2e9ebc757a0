"""Tests for application configuration management."""

import os
import tempfile
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from fund_growth.config import (
    Settings,
    get_global_settings,
    get_settings,
    reset_global_settings,
)


class TestSettings:
    """Test cases for Settings class."""

    def test_settings_loads_from_env_file(self):
        """Test that settings can load from a .env file."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".env", delete=False) as f:
            f.write("APP_ENV=development\n")
            f.write("SECRET_KEY=test-secret-key-123\n")
            f.write("LOG_LEVEL=DEBUG\n")
            f.write("DEFAULT_END_AGE=95\n")
            f.write("DEFAULT_INFLATION_RATE=2.0\n")
            temp_env_file = f.name

        try:
            with patch.dict(os.environ, {}, clear=True):
                settings = Settings(_env_file=temp_env_file)

                assert settings.app_env == "development"
                assert settings.secret_key == "test-secret-key-123"
                assert settings.log_level == "DEBUG"
                assert settings.default_end_age == 95
                assert settings.default_inflation_rate == 2.0
        finally:
            os.unlink(temp_env_file)

    def test_missing_secret_key_raises_exception(self):
        """Test that missing SECRET_KEY raises ValidationError."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValidationError) as exc_info:
                Settings(_env_file=None)

            assert "SECRET_KEY" in str(exc_info.value)

    def test_placeholder_secret_key_raises_exception(self):
        """Test that placeholder SECRET_KEY raises ValidationError."""
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "your-secret-key-here-change-in-production"},
            clear=True,
        ):
            with pytest.raises(ValidationError) as exc_info:
                Settings()

            assert "SECRET_KEY must be set to a secure value" in str(exc_info.value)

    def test_app_env_validation(self):
        """Test APP_ENV validation."""
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "valid-secret-key-123", "APP_ENV": "invalid-env"},
            clear=True,
        ):
            with pytest.raises(ValidationError) as exc_info:
                Settings()

            assert "APP_ENV must be one of" in str(exc_info.value)

    def test_log_level_validation(self):
        """Test LOG_LEVEL validation."""
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "valid-secret-key-123", "LOG_LEVEL": "INVALID_LEVEL"},
            clear=True,
        ):
            with pytest.raises(ValidationError) as exc_info:
                Settings()

            assert "LOG_LEVEL must be one of" in str(exc_info.value)

    def test_log_level_case_insensitive(self):
        """Test that LOG_LEVEL is case insensitive."""
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "valid-secret-key-123", "LOG_LEVEL": "debug"},
            clear=True,
        ):
            settings = Settings()
            assert settings.log_level == "DEBUG"

    def test_default_values(self):
        """Test default values when environment variables are not set."""
        with patch.dict(os.environ, {"SECRET_KEY": "valid-secret-key-123"}, clear=True):
            settings = Settings()

            assert settings.app_env == "development"
            assert settings.flask_app == "wsgi.py"
            assert settings.flask_env == "development"
            assert settings.log_level == "INFO"
            assert settings.default_end_age == 100
            assert settings.default_inflation_rate == 0.0
            assert settings.max_periods == 50

    def test_default_end_age_bounds(self):
        """Test DEFAULT_END_AGE must be a plausible age."""
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "valid-secret-key-123", "DEFAULT_END_AGE": "0"},
            clear=True,
        ):
            with pytest.raises(ValidationError):
                Settings()

    def test_get_settings_function(self):
        """Test the get_settings function."""
        with patch.dict(os.environ, {"SECRET_KEY": "valid-secret-key-123"}, clear=True):
            settings = get_settings()
            assert isinstance(settings, Settings)
            assert settings.secret_key == "valid-secret-key-123"

    def test_global_settings_cached_until_reset(self):
        """Test the global settings instance is reused until reset."""
        reset_global_settings()
        with patch.dict(os.environ, {"SECRET_KEY": "valid-secret-key-123"}, clear=True):
            first = get_global_settings()
            assert get_global_settings() is first

            reset_global_settings()
            assert get_global_settings() is not first
        reset_global_settings()

    def test_environment_variable_aliases(self):
        """Test that environment variable aliases work correctly."""
        with patch.dict(
            os.environ,
            {
                "SECRET_KEY": "valid-secret-key-123",
                "APP_ENV": "production",
                "LOG_LEVEL": "ERROR",
                "MAX_PERIODS": "10",
            },
            clear=True,
        ):
            settings = Settings()

            assert settings.app_env == "production"
            assert settings.log_level == "ERROR"
            assert settings.max_periods == 10
