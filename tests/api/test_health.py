"""Tests for health endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from stockledger import __version__
from stockledger.api.main import app


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def test_root_health_check(client: AsyncClient):
    """Test root health endpoint."""
    response = await client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == __version__


async def test_api_health_check(client: AsyncClient):
    response = await client.get("/api/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert data["uptime_seconds"] >= 0
    assert data["database"] is None


async def test_db_health(client: AsyncClient, migrated_db):
    response = await client.get("/api/health/db")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"]["name"] == "sqlite"
    assert data["database"]["available"] is True
    assert data["database"]["schema_version"] == "001"


async def test_unknown_route_uses_error_format(client: AsyncClient):
    response = await client.get("/api/nowhere")

    assert response.status_code == 404
    assert response.json()["error_code"] == "NOT_FOUND"
