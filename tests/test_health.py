"""
Health endpoint tests using pytest-asyncio and httpx.AsyncClient.
"""

import pytest

from crm_relations.deps.di_container import get_container


@pytest.mark.asyncio
async def test_health_endpoint(test_client):
    """Test the health check endpoint returns expected structure."""
    response = await test_client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()

    assert "status" in data
    assert "uptime" in data
    assert "version" in data
    assert isinstance(data["checks"], dict)

    assert data["status"] == "ok"
    assert data["checks"]["database"] == "ok"
    assert data["checks"]["relationships"] == {"areas_of_activity": 0, "synergies": 0}


@pytest.mark.asyncio
async def test_root_health_endpoint(test_client):
    """The root-level alias answers like the versioned endpoint."""
    response = await test_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] in ["ok", "degraded"]


def test_container_shares_health_service():
    """Every health controller built by the container uses the same service."""
    container = get_container()

    first = container.health_controller()
    second = container.health_controller()

    assert first is not second
    assert first.health_service is second.health_service
    assert first.health_service is container.health_service()
