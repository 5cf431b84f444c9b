import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    """Test basic health check."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_health_ready(client: AsyncClient):
    """Test readiness check with database connection."""
    response = await client.get("/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert data == {"status": "ready", "database": "connected"}


@pytest.mark.asyncio
async def test_request_id_header(client: AsyncClient):
    response = await client.get("/health")
    assert "x-request-id" in response.headers
