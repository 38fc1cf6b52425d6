# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import os

# No background jobs while testing; must be set before settings load.
os.environ.setdefault("ENABLE_SCHEDULER", "false")

import pytest
from fastapi.testclient import TestClient
from typing import Generator

from main import create_app
from core.rate_limiter import reset_rate_limits
from core.security import create_access_token
from fakes import FakeSupabase


@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    return create_app()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def fake_db(monkeypatch) -> FakeSupabase:
    """Route every persistence helper to an in-memory database."""
    db = FakeSupabase()
    monkeypatch.setattr("core.supabase_helpers.get_supabase_client", lambda: db)
    return db


@pytest.fixture
def auth_header():
    """Build an Authorization header for a user id + role."""
    def _make(user_id: str, role: str = "tenant") -> dict:
        return {"Authorization": f"Bearer {create_access_token(user_id, role)}"}
    return _make


@pytest.fixture
def admin_headers(auth_header):
    return auth_header("admin-1", "admin")


@pytest.fixture(autouse=True)
def reset_limits():
    """Reset rate limiter state before each test."""
    reset_rate_limits()
    yield
    reset_rate_limits()
