# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - Clears the cached Settings around every test
# - Points at the fixture apps under tests/apps
#
# Relative paths given to bootstrap() resolve against this directory, since
# the test modules are the callers.
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================

os.environ.setdefault("NODE_ENV", "test")
os.environ.setdefault("SESSION_SECRET", "test-session-secret")

import pytest
from fastapi.testclient import TestClient

from formflow.config import get_settings

TESTS_DIR = os.path.dirname(os.path.abspath(__file__))
APP_1_VIEWS = os.path.join(TESTS_DIR, "apps", "app_1", "views")
APP_2_VIEWS = os.path.join(TESTS_DIR, "apps", "app_2", "views")
APP_2_FIELDS = os.path.join(TESTS_DIR, "apps", "app_2", "fields")

COOKIE_HEADER = {"Cookie": "myCookie=1234"}


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read the environment for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def app_1_route():
    """Single-step route served from tests/apps/app_1/views."""
    return {
        "views": APP_1_VIEWS,
        "steps": {
            "/one": {},
        },
    }


@pytest.fixture
def app_2_route():
    """Two-step route with fields, served under /app_2."""
    return {
        "baseUrl": "/app_2",
        "views": APP_2_VIEWS,
        "fields": APP_2_FIELDS,
        "steps": {
            "/name": {"fields": ["name", "email", "age"], "next": "/confirm"},
            "/confirm": {},
        },
    }


@pytest.fixture
def make_client():
    """
    Wrap an app in a TestClient that already carries a cookie, so the
    cookie check lets requests through.
    """
    def _make(app):
        client = TestClient(app)
        client.cookies.set("myCookie", "1234")
        return client
    return _make
