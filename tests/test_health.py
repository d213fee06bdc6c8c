import pytest
from httpx import AsyncClient, ASGITransport
from pydantic import SecretStr


@pytest.mark.asyncio
async def test_health_ok(test_app):
    """
    Test the basic service health endpoint.

    This test verifies that:
    - The `/health` endpoint responds with HTTP 200.
    - The response body contains a `status` field with value `ok`.
    - The response reports that the upstream key is configured.
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.get("/health")

    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["service"] == "weather-edge-worker"
    assert data["upstream_configured"] is True


@pytest.mark.asyncio
async def test_worker_version(test_app):
    """
    `/worker-version` returns the configured version as plain text.
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.get("/worker-version")

    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/plain")
    assert r.text == "1.2.3"


@pytest.mark.asyncio
async def test_worker_version_missing_is_server_error(test_app, test_settings):
    test_settings.worker_version = None

    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.get("/worker-version")

    assert r.status_code == 500


@pytest.mark.asyncio
async def test_health_reports_empty_api_key_as_unconfigured(test_app, test_settings):
    test_settings.weather_open_api_key = SecretStr("")

    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.get("/health")

    assert r.status_code == 200
    assert r.json()["upstream_configured"] is False
