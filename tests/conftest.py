"""
Global test fixtures for the webinar registration backend.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor)
- Settings factory pointing at a temporary static site
- Registration payloads
"""

import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

# Variables the settings resolver reads; tests start without them
RESOLVER_ENV_VARS = [
    "VCAP_SERVICES",
    "SERVICE_BINDING_LABEL",
    "MONGO_URI",
    "PORT",
    "HOST",
    "DB_NAME",
    "COLLECTION_NAME",
    "STATIC_DIR",
    "SUCCESS_PAGE",
    "AWAIT_INSERT",
    "LOG_LEVEL",
]


# =============================================================================
# Environment Fixtures
# =============================================================================

@pytest.fixture
def clean_env(monkeypatch):
    """
    Remove resolver variables from os.environ for the duration of a test.

    Each variable is set before being deleted so monkeypatch restores the
    original state, including variables a loaded .env file exported.
    """
    for name in RESOLVER_ENV_VARS:
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    return monkeypatch


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest_asyncio.fixture
async def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.
    """
    try:
        from mongomock_motor import AsyncMongoMockClient
        client = AsyncMongoMockClient()
        yield client
        client.close()
    except ImportError:
        pytest.skip("mongomock-motor not installed")


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture
def static_site(tmp_path) -> Path:
    """A minimal static site with the form and the success page."""
    site = tmp_path / "public"
    site.mkdir()
    (site / "index.html").write_text('<form action="/registration" method="post"></form>')
    (site / "registered.html").write_text("<h1>Thanks for registering!</h1>")
    return site


@pytest.fixture
def make_settings(clean_env, static_site):
    """
    Factory for Settings bound to the temporary static site.

    Usage:
        def test_something(make_settings):
            settings = make_settings(await_insert=True)
    """
    from webinar.config import Settings

    def _make(**overrides):
        values = {
            "mongo_uri": "mongodb://test:27017",
            "static_dir": static_site,
        }
        values.update(overrides)
        return Settings(**values)

    return _make


# =============================================================================
# Registration Fixtures
# =============================================================================

@pytest.fixture
def registration_data() -> dict:
    """A registration as submitted by the public form."""
    return {
        "name": "Ada",
        "email": "ada@example.com",
    }
