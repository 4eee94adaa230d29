"""Service test fixtures — FastAPI test client over a clean session registry.

Invariants:
    - Every test starts with no decomposition sessions in memory
    - Settings cache cleared so env overrides from tests take effect

Design Decisions:
    - httpx AsyncClient + ASGITransport: exercises routing and error handlers
      without a running server
"""

import pytest
from httpx import ASGITransport, AsyncClient

from decomposition_engine.api.routes import decomposition as decomposition_routes
from decomposition_engine.config import get_settings
from decomposition_engine.main import app


@pytest.fixture
async def client():
    """FastAPI test client with an empty session registry."""
    get_settings.cache_clear()
    decomposition_routes._dispatchers.clear()

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    decomposition_routes._dispatchers.clear()
    get_settings.cache_clear()
