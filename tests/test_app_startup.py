"""Tests for Flask application startup with configuration."""

import os
from unittest.mock import patch

import pytest

from fund_growth import create_app
from fund_growth.config import reset_global_settings


class TestAppStartup:
    """Test cases for Flask application startup."""

    def setup_method(self):
        """Reset global settings to allow environment patching."""
        reset_global_settings()

    def teardown_method(self):
        reset_global_settings()

    def test_app_creation_with_valid_config(self):
        """Test that app creates successfully with valid configuration."""
        with patch.dict(os.environ, {"SECRET_KEY": "valid-secret-key-123"}, clear=True):
            app = create_app()

            assert app is not None
            assert app.config["SECRET_KEY"] == "valid-secret-key-123"
            assert app.config["DEFAULT_END_AGE"] == 100
            assert app.config["DEFAULT_INFLATION_RATE"] == 0.0
            assert app.config["MAX_PERIODS"] == 50

    def test_app_creation_fails_with_placeholder_secret_key(self):
        """Test that app creation fails with placeholder SECRET_KEY."""
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "your-secret-key-here-change-in-production"},
            clear=True,
        ):
            with pytest.raises(Exception) as exc_info:
                create_app()

            assert "SECRET_KEY must be set to a secure value" in str(exc_info.value)

    def test_app_uses_custom_environment_variables(self):
        """Test that app uses custom environment variables."""
        with patch.dict(
            os.environ,
            {
                "SECRET_KEY": "custom-secret-key",
                "APP_ENV": "production",
                "LOG_LEVEL": "ERROR",
                "DEFAULT_END_AGE": "90",
                "DEFAULT_INFLATION_RATE": "2.5",
            },
            clear=True,
        ):
            app = create_app()

            assert app.config["SECRET_KEY"] == "custom-secret-key"
            assert app.config["DEFAULT_END_AGE"] == 90
            assert app.config["DEFAULT_INFLATION_RATE"] == 2.5
            assert app.config["ENV"] == "development"  # flask_env default
            assert app.config["DEBUG"] is False  # production env
            assert app.logger.level == 40

    def test_app_debug_mode_based_on_environment(self):
        """Test that debug mode is set based on APP_ENV."""
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "valid-secret-key-123", "APP_ENV": "development"},
            clear=True,
        ):
            app = create_app()
            assert app.config["DEBUG"] is True

        reset_global_settings()
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "valid-secret-key-123", "APP_ENV": "testing"},
            clear=True,
        ):
            app = create_app()
            assert app.config["DEBUG"] is False
            assert app.config["TESTING"] is True

    def test_config_name_overrides_app_env(self):
        """Test an explicit config name wins over APP_ENV."""
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "valid-secret-key-123", "APP_ENV": "development"},
            clear=True,
        ):
            app = create_app("production")
            assert app.config["DEBUG"] is False
