import pytest


@pytest.mark.anyio
async def test_healthcheck(client):
    response = await client.get("/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["db_status"] == "ok"
    assert payload["migrations_status"] == "up_to_date"
    assert payload["features"]["self_follow_allowed"] is False


@pytest.mark.anyio
async def test_health_status_degraded_when_db_status_error(monkeypatch, client):
    from followgraph.routers import health as health_module

    monkeypatch.setattr(health_module, "_db_status", lambda: "error")

    response = await client.get("/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "degraded"
    assert payload["db_ok"] is False
    assert payload["migrations_status"] == "unknown"


@pytest.mark.anyio
async def test_metrics_exposed(client):
    response = await client.get("/metrics")
    assert response.status_code == 200
