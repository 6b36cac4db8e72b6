"""Health, readiness and liveness probes."""

from craftboard.api.handlers import health_handler


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["service"] == "craftboard"


async def test_live(client):
    response = await client.get("/live")

    assert response.json() == {"status": "alive"}


async def test_ready_reports_database_outage(client, monkeypatch):
    async def database_down():
        return False

    monkeypatch.setattr(health_handler, "ping_db", database_down)

    response = await client.get("/ready")

    assert response.status_code == 503
    assert response.json() == {"status": "unavailable"}


async def test_request_id_is_echoed(client):
    response = await client.get("/live", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


async def test_request_id_is_generated(client):
    response = await client.get("/live")

    assert response.headers["X-Request-ID"]
