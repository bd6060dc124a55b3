"""
Test configuration for the clinic records API.
"""
import os

# Settings are loaded at import time, so the signing key must exist first
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient

from src.config import Settings
from src.main import create_app

TEST_SECRET_KEY = "test-secret-key"


@pytest.fixture(scope="function")
def test_settings(tmp_path):
    """
    Settings pointing at a fresh SQLite database for each test.
    """
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        secret_key=TEST_SECRET_KEY,
    )


@pytest.fixture(scope="function")
def client(test_settings):
    """
    Create a test client; the app lifespan creates the tables.
    """
    app = create_app(test_settings)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def register(client):
    """
    Register an identity and return auth headers for it.
    """
    def _register(name="A", email="a@x.com", password="secret1"):
        response = client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password}
        )
        assert response.status_code == 201, response.text
        return {"x-auth-token": response.json()["token"]}
    return _register


@pytest.fixture
def alice(register):
    """Auth headers for the first identity."""
    return register(name="A", email="a@x.com", password="secret1")


@pytest.fixture
def bob(register):
    """Auth headers for a second, unrelated identity."""
    return register(name="B", email="b@x.com", password="secret2")
