# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - Provides token service and HTTP client fixtures
# =============================================================================

import os
from datetime import timedelta

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_SECRET"] = "test-secret-do-not-use-in-production"
os.environ["JWT_EXPIRES_IN"] = "1h"
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.pop("DATABASE_URL", None)

import pytest
from fastapi.testclient import TestClient

from core.models.token import TokenConfig
from core.services.token_service import TokenService
from lib.database import DatabaseClient


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def token_config():
    """One-hour HS256 config with a test secret."""
    return TokenConfig(secret="unit-test-secret", expires_in=timedelta(hours=1))


@pytest.fixture
def token_service(token_config):
    """TokenService built from token_config."""
    return TokenService(token_config)


@pytest.fixture
def app_token_service():
    """TokenService with the same config the running app uses."""
    from app.config import settings
    return TokenService(settings.token_config)


@pytest.fixture
def client():
    """TestClient with lifespan events enabled."""
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def reset_database_client():
    """Never leak a (mock) connection between tests."""
    DatabaseClient._connection = None
    yield
    DatabaseClient._connection = None
