"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /health returns 200 and status ok."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


async def test_root_returns_banner(client: AsyncClient) -> None:
    response = await client.get("/")
    assert response.status_code == 200
    assert "running" in response.json()["message"]


async def test_unknown_route_returns_not_found_body(client: AsyncClient) -> None:
    response = await client.get("/no-such-route")
    assert response.status_code == 404
    assert response.json() == {"error": "Not found", "code": "NOT_FOUND", "statusCode": 404}


async def test_request_id_is_echoed(client: AsyncClient) -> None:
    response = await client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


async def test_unsafe_request_id_is_replaced(client: AsyncClient) -> None:
    response = await client.get("/health", headers={"X-Request-ID": "not a safe id!"})
    assert response.headers["X-Request-ID"] != "not a safe id!"
    assert len(response.headers["X-Request-ID"]) == 36
