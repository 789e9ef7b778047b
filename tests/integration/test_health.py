"""Tests for the health and metrics endpoints."""

from collections.abc import Generator

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine

from src.sitt.core.health import reset_health_cache
from src.sitt.core.shutdown import request_tracker

pytestmark = pytest.mark.integration


@pytest.fixture(autouse=True)
def use_test_engine(engine: AsyncEngine, monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    reset_health_cache()
    monkeypatch.setattr("src.sitt.core.health.get_engine", lambda: engine)
    yield
    reset_health_cache()


async def test_health_checks_database(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "healthy"
    assert data["cached"] is False


async def test_health_is_cached(client: AsyncClient):
    await client.get("/health")

    response = await client.get("/health")

    assert response.json()["cached"] is True
    assert response.json()["cache_age_seconds"] < 10


async def test_health_while_draining(client: AsyncClient):
    await request_tracker.start_shutdown()

    response = await client.get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "draining"


async def test_metrics_exposed(client: AsyncClient):
    await client.get("/health")

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert "http_requests_total" in response.text


async def test_error_response_echoes_request_id(client: AsyncClient):
    response = await client.get("/api/v1/nonexistent")

    assert response.status_code == 404
    assert response.json()["request_id"] == response.headers["X-Request-ID"]
