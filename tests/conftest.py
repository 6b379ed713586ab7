# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - Builds an app per test against a temporary SQLite file
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("DATABASE_PATH", ":memory:")

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def db_path(tmp_path):
    """Path of a fresh SQLite file for one test."""
    return str(tmp_path / "contacts.db")


@pytest.fixture
def test_settings(db_path):
    """Settings pointing at the temporary database."""
    return Settings(DATABASE_PATH=db_path, ENVIRONMENT="development")


@pytest.fixture
def app(test_settings):
    """A FastAPI app with its own ContactDatabase."""
    return create_app(test_settings)


@pytest.fixture
def client(app):
    """TestClient running the app lifespan (database closed on exit)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def ada():
    """A valid contact payload."""
    return {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@x.com",
        "phoneNumber": "1234567890",
        "age": 30,
    }


@pytest.fixture
def grace():
    """A second valid contact payload."""
    return {
        "firstName": "Grace",
        "lastName": "Hopper",
        "email": "grace@navy.mil",
        "phoneNumber": "+1 555-010-9999",
        "age": 85,
    }
