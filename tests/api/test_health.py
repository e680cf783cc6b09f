"""Tests for the health check endpoint."""
from httpx import AsyncClient


async def test_health_endpoint_returns_200(client: AsyncClient) -> None:
    """The health endpoint answers without authentication."""
    response = await client.get("/health")
    assert response.status_code == 200


async def test_health_endpoint_reports_database(client: AsyncClient) -> None:
    """A reachable database reports healthy."""
    data = (await client.get("/health")).json()
    assert data == {"status": "healthy", "database": "healthy"}


async def test_security_headers_present(client: AsyncClient) -> None:
    """Every response carries the security headers."""
    response = await client.get("/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert "max-age" in response.headers["Strict-Transport-Security"]
