"""Shared pytest fixtures for meterbill tests."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

TEST_JWT_SECRET = "test_secret_key_for_testing_only"


# Settings Test Fixtures
@pytest.fixture
def test_settings(monkeypatch, tmp_path):
    """Point settings at a temporary data directory.

    Parameters
    ----------
    monkeypatch : pytest.MonkeyPatch
        Pytest monkeypatch fixture
    tmp_path : pathlib.Path
        Per-test temporary directory

    Yields
    ------
    Settings
        Test settings instance
    """
    from meterbill.api.config import get_settings

    monkeypatch.setenv("METERBILL_JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setenv("METERBILL_API_RATE_LIMIT", "1000")
    monkeypatch.setenv("METERBILL_ENABLE_SCHEDULER", "false")
    monkeypatch.setenv("METERBILL_DB_PATH", str(tmp_path / "meterbill.db"))
    monkeypatch.setenv("METERBILL_CACHE_PATH", str(tmp_path))

    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


# API Test Fixtures
@pytest.fixture
def app(test_settings, monkeypatch):
    """Create FastAPI app with fresh database and cache instances.

    Returns
    -------
    FastAPI
        Test FastAPI application instance
    """
    import meterbill.api.database as database
    import meterbill.api.services.cache as cache
    from meterbill.api.main import create_app

    monkeypatch.setattr(database, "_db_instance", None)
    monkeypatch.setattr(cache, "_cache_instance", None)

    return create_app()


@pytest.fixture
def client(app):
    """Create test client with the application lifespan running.

    Yields
    ------
    TestClient
        FastAPI test client
    """
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def test_username():
    """Username of the registered test user."""
    return "ayesha"


@pytest.fixture
def test_password():
    """Password of the registered test user."""
    return "test_password_123"


def register_and_login(client, username: str, password: str) -> dict:
    """Register a user through the API and return its bearer headers."""
    response = client.post("/auth/register", json={"username": username, "password": password})
    assert response.status_code == 201

    response = client.post("/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def auth_headers(client, test_username, test_password):
    """Authentication headers of a freshly registered user.

    Returns
    -------
    dict
        Authorization headers
    """
    return register_and_login(client, test_username, test_password)


@pytest.fixture
def other_auth_headers(client):
    """Authentication headers of a second, unrelated user."""
    return register_and_login(client, "bilal", "another_password_456")


@pytest.fixture
def profile(client, auth_headers):
    """A standard-tariff profile owned by the test user.

    Returns
    -------
    dict
        Created profile as returned by the API
    """
    response = client.post(
        "/profiles",
        json={"tenant_name": "Ground floor", "meter_number": "04-12345", "initial_reading": 1000},
        headers=auth_headers,
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def expired_token(test_settings):
    """Create expired JWT token for testing.

    Returns
    -------
    str
        JWT token that expired an hour ago
    """
    from jose import jwt

    token_data = {
        "sub": "1",
        "username": "ayesha",
        "exp": datetime.now(timezone.utc) - timedelta(hours=1),
    }
    return jwt.encode(token_data, TEST_JWT_SECRET, algorithm=test_settings.JWT_ALGORITHM)


# Cache Test Fixtures
@pytest.fixture
def test_cache(tmp_path):
    """Create isolated cache instance for testing.

    Yields
    ------
    HybridCache
        Isolated cache instance with temporary disk storage
    """
    from meterbill.api.services.cache import HybridCache

    cache = HybridCache(memory_size=100, memory_ttl=60, disk_path=str(tmp_path))
    yield cache
    cache.close()


# Database Test Fixtures
@pytest.fixture
def test_db(test_settings, tmp_path):
    """Create isolated test database.

    Returns
    -------
    Database
        Database instance on a temporary file, schema not yet created
    """
    from meterbill.api.database import Database

    return Database(db_path=str(tmp_path / "unit.db"))
