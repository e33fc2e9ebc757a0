"""
Pytest configuration and shared fixtures for the fund growth tests.
"""

import os
from unittest.mock import patch

import pytest

from fund_growth import create_app
from fund_growth.config import reset_global_settings
from fund_growth.models.period import IskTaxPolicy, Period


@pytest.fixture(scope="function")
def app_env():
    """Provide a minimal valid environment and fresh global settings."""
    reset_global_settings()
    with patch.dict(
        os.environ,
        {"SECRET_KEY": "test-secret-key-123", "APP_ENV": "testing"},
        clear=True,
    ):
        yield
    reset_global_settings()


@pytest.fixture(scope="function")
def app(app_env):
    """Create a Flask application for testing."""
    return create_app()


@pytest.fixture(scope="function")
def client(app):
    """Create a test client for the Flask application."""
    return app.test_client()


@pytest.fixture
def fire_periods():
    """Save hard until 45, coast until 55, then spend."""
    return [
        Period(start_age=30, end_age=45, monthly_contribution=2000),
        Period(start_age=45, end_age=55),
        Period(start_age=55, end_age=100, monthly_spending=3000),
    ]


@pytest.fixture
def isk_tax():
    """Presumptive tax at a 2.5% government borrowing rate."""
    return IskTaxPolicy(enabled=True, government_borrowing_rate=2.5)
