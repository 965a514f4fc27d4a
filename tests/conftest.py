"""Shared fixtures for URL Shortener Service tests."""

from contextlib import asynccontextmanager
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from url_shortener.main import app
from url_shortener.core.database import Database
from url_shortener.api.dependencies import get_url_service
from url_shortener.services.url_service import UrlService


@pytest.fixture
def test_db():
    """Create a test database instance."""
    db = Database(":memory:", "url_maps")
    db.init_db()
    yield db
    db.close()


@pytest.fixture
def service(test_db):
    """Create a service backed by the test database."""
    return UrlService(test_db)


@pytest.fixture
def mock_db():
    """Create a mock database."""
    return MagicMock(spec=Database)


@pytest.fixture
def client(service):
    """Create a test client using the test service."""
    app.dependency_overrides[get_url_service] = lambda: service

    # Skip the default lifespan, which would open the configured database
    original_lifespan = app.router.lifespan_context

    @asynccontextmanager
    async def test_lifespan(app):
        yield

    app.router.lifespan_context = test_lifespan

    with TestClient(app, raise_server_exceptions=False) as client:
        yield client

    app.router.lifespan_context = original_lifespan
    app.dependency_overrides.clear()
