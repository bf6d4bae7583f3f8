"""Tests for app-level endpoints and error rendering."""


async def test_health(client):
    response = await client.get("/health")
    body = response.json()
    assert body["status"] == "ok"
    assert body["environment"] == "testing"


async def test_root(client):
    body = (await client.get("/")).json()
    assert body["message"] == "FitTrack API"
    assert body["docs"] == "/docs"


async def test_unknown_route_uses_error_shape(client):
    response = await client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


async def test_malformed_user_id_is_rejected(client):
    response = await client.get("/api/activity/logs", params={"userId": "not-a-uuid"})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"


async def test_detailed_health_reports_configuration(client):
    body = (await client.get("/health/detailed")).json()
    # Models are bound to mongomock without a Motor client to ping
    assert body["status"] == "degraded"
    assert body["database_connected"] is False
    assert body["ai_configured"] is False
    assert body["rate_limit_storage"] == "memory"
