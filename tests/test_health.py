"""Smoke tests for health, readiness and app wiring."""

from fastapi import FastAPI
from httpx import AsyncClient

from app.api.v1 import dependencies
from app.api.v1.endpoints import health
from app.core.lifespan import create_lifespan
from app.domain.exceptions import SqlNotConfiguredException


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"]


async def test_root_health_returns_ok(client: AsyncClient) -> None:
    """GET /health is the liveness probe at the root path."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


async def test_ready_without_database_is_503(client: AsyncClient, monkeypatch) -> None:
    """GET /api/v1/health/ready returns 503 when DATABASE_URL is not set."""

    def not_configured():
        raise SqlNotConfiguredException()

    monkeypatch.setattr(health, "get_session_factory", not_configured)
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "not_ready"
    assert "DATABASE_URL" in data["message"]


async def test_ready_with_database(client: AsyncClient, session_factory, monkeypatch) -> None:
    """GET /api/v1/health/ready returns 200 when SELECT 1 succeeds."""
    monkeypatch.setattr(health, "get_session_factory", lambda: session_factory)
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_lifespan_builds_and_releases_services() -> None:
    """Startup stores the workflow services on app.state; shutdown clears them."""
    app = FastAPI()
    async with create_lifespan(app):
        services = app.state.services
        assert isinstance(services, dependencies.WorkflowServices)
        assert services.rfps.gate is services.gate
        assert services.responses.award_service is services.awards
    assert app.state.services is None
