"""Integration tests for application wiring: health probes and error envelopes."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from gulita.core.config import get_settings
from gulita.core.exceptions import ServiceUnavailableError
from gulita.infrastructure.api.app import create_app


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("path", "expected_status"),
    [("/health", "healthy"), ("/live", "alive"), ("/ready", "ready")],
)
async def test_health_probes(client: AsyncClient, path, expected_status):
    response = await client.get(path)

    assert response.status_code == 200
    assert response.json()["status"] == expected_status


@pytest.mark.asyncio
async def test_ready_reports_unreachable_database(client: AsyncClient, services):
    with patch.object(services.db, "check_connection", AsyncMock(return_value=False)):
        response = await client.get("/ready")

    assert response.status_code == 503
    assert response.json() == {
        "status": "not_ready",
        "service": "Gulita",
        "database": "disconnected",
    }


@pytest.mark.asyncio
async def test_api_root(client: AsyncClient):
    response = await client.get("/api/v1")

    assert response.status_code == 200
    assert response.json()["api_version"] == "v1"


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(client: AsyncClient):
    response = await client.get("/api/v1/nothing-here")

    assert response.status_code == 404
    body = response.json()
    assert body["status"] == "error"
    assert body["error"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_wrong_method_uses_error_envelope(client: AsyncClient):
    response = await client.delete("/api/v1/users/login")

    assert response.status_code == 405
    assert response.json()["error"] == "METHOD_NOT_ALLOWED"


@pytest.mark.asyncio
async def test_correlation_id_is_echoed(client: AsyncClient):
    response = await client.get("/health", headers={"X-Correlation-ID": "cid_from_client"})

    assert response.headers["X-Correlation-ID"] == "cid_from_client"


@pytest.mark.asyncio
async def test_correlation_id_is_generated(client: AsyncClient):
    response = await client.get("/health")

    assert response.headers["X-Correlation-ID"].startswith("cid_")


@pytest.mark.asyncio
async def test_database_outage_maps_to_503(client: AsyncClient, services):
    with patch.object(
        services.auth,
        "login",
        AsyncMock(side_effect=ServiceUnavailableError()),
    ):
        response = await client.post(
            "/api/v1/users/login",
            json={"email": "alice@example.com", "password": "Password123!"},
        )

    assert response.status_code == 503
    assert response.json()["error"] == "SERVICE_UNAVAILABLE"


@pytest.mark.asyncio
async def test_unexpected_error_hides_details(services):
    app = create_app(services=services)
    transport = ASGITransport(app=app, raise_app_exceptions=False)

    with patch.object(services.blogs, "get_blog", AsyncMock(side_effect=RuntimeError("db password leaked"))):
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/v1/blogs/abc")

    assert response.status_code == 500
    assert response.json() == {
        "status": "error",
        "message": "An unexpected error occurred",
        "error": "INTERNAL_SERVER_ERROR",
    }


@pytest.mark.asyncio
async def test_unhandled_route_error_is_logged_with_traceback(services):
    app = create_app(services=services)

    @app.get("/explode")
    async def explode():
        raise RuntimeError("secret internals")

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    with patch("gulita.infrastructure.api.app.logger", MagicMock()) as mock_logger:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/explode")

    assert response.status_code == 500
    body = response.json()
    assert body["message"] == "An unexpected error occurred"
    assert body["error"] == "INTERNAL_SERVER_ERROR"
    assert "secret internals" not in response.text
    mock_logger.exception.assert_called_once()
    assert mock_logger.exception.call_args.kwargs["exc_type"] == "RuntimeError"


@pytest.mark.asyncio
async def test_unexpected_error_hidden_in_debug_mode(services):
    app = create_app(services=services)

    @app.get("/explode")
    async def explode():
        raise RuntimeError("secret internals")

    debug_settings = get_settings().model_copy(update={"debug": True})
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    with patch("gulita.infrastructure.api.app.get_settings", return_value=debug_settings):
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/explode")

    assert response.status_code == 500
    assert "secret internals" not in response.text
