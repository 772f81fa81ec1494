"""
Backend-specific test fixtures and configuration.

These fixtures run the FastAPI application with its lifespan against the
mock MongoDB client and expose an async HTTP client.
"""

import sys
from contextlib import asynccontextmanager
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import PyMongoError

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "backend"))


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest.fixture
def serve_app(mock_async_mongo_client):
    """
    Start the application and yield ``(app, client)``.

    Usage in tests:
        async with serve_app(make_settings()) as (app, client):
            response = await client.post("/registration", json={...})
    """
    from httpx import AsyncClient, ASGITransport
    from webinar.main import create_app

    @asynccontextmanager
    async def _serve(settings, mongo_client=mock_async_mongo_client):
        app = create_app(settings, mongo_client=mongo_client)
        async with app.router.lifespan_context(app):
            async with AsyncClient(
                transport=ASGITransport(app=app),
                base_url="http://test",
            ) as client:
                yield app, client

    return _serve


@pytest.fixture
def reset_mongo_client(monkeypatch):
    """Start without a cached module-level MongoDB client."""
    import webinar.database.connections as conn_module
    monkeypatch.setattr(conn_module, "_mongo_client", None)
    return conn_module


# =============================================================================
# Fault Injection Fixtures
# =============================================================================

@pytest.fixture
def failing_collection():
    """A collection whose inserts fail like an unreachable server."""
    collection = MagicMock()
    collection.insert_one = AsyncMock(side_effect=PyMongoError("connection refused"))
    return collection


@pytest.fixture
def encoding_collection():
    """A collection that BSON-encodes each document the way the driver does."""
    import bson

    collection = MagicMock()
    collection.insert_one = AsyncMock(side_effect=lambda document: bson.encode(document))
    return collection
