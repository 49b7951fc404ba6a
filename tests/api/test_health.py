"""API tests for health endpoints."""

from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient

from cpg_inventory.api.main import app


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestHealthAPI:
    async def test_health(self, client: AsyncClient):
        response = await client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["uptime_seconds"] >= 0

    async def test_root_health(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_root_info(self, client: AsyncClient):
        response = await client.get("/")
        assert response.status_code == 200
        assert "name" in response.json()

    async def test_db_health_reports_failure(self, client: AsyncClient):
        async def broken_pool():
            raise RuntimeError("disk unavailable")

        with patch(
            "cpg_inventory.infrastructure.storage.sqlite.get_pool", broken_pool
        ):
            response = await client.get("/api/health/db")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["database"]["available"] is False
        assert "disk unavailable" in data["database"]["error"]
