"""
Shared test fixtures for the Roamo API test suite.

Provides:
- async FastAPI test client (no network; lifespan is not run, state is injected)
- a fresh SpotImporter on app.state for every test
- httpx.AsyncClient mock factory matching how the services open clients
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

# Ensure test env vars before any app imports
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("SENTRY_DSN", "")


# ---------------------------------------------------------------------------
# FastAPI test client
# ---------------------------------------------------------------------------

@pytest.fixture
async def app():
    """The FastAPI app with a default importer in state."""
    from services.api.config import settings
    from services.api.main import app as _app
    from services.api.url_import import SpotImporter, default_registry

    _app.state.settings = settings
    _app.state.spot_importer = SpotImporter(default_registry())
    return _app


@pytest.fixture
async def client(app):
    """Async HTTP client bound to the test app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Outbound HTTP mocks
# ---------------------------------------------------------------------------

def make_async_client_mock(*, json_payload=None, get_side_effect=None, raise_for_status=None) -> MagicMock:
    """
    Mock for `async with httpx.AsyncClient(...) as client` blocks.

    Patch the module's httpx.AsyncClient with return_value=<this mock>.
    """
    response = MagicMock()
    response.json = MagicMock(return_value=json_payload)
    response.raise_for_status = MagicMock(side_effect=raise_for_status)

    client = MagicMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    client.get = AsyncMock(return_value=response, side_effect=get_side_effect)
    return client


@pytest.fixture
def async_client_mock():
    """Factory fixture wrapping make_async_client_mock."""
    return make_async_client_mock
