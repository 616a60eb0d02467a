import uuid

import pytest


@pytest.mark.anyio
async def test_healthz(async_client):
    resp = await async_client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


@pytest.mark.anyio
async def test_readyz_reports_dependencies(async_client):
    resp = await async_client.get("/readyz")

    assert resp.status_code == 200
    assert resp.json() == {"ready": True, "checks": {"db": True, "redis": True}}


@pytest.mark.anyio
async def test_readyz_flags_redis_outage(async_client, mock_redis):
    mock_redis.failing.add("ping")

    resp = await async_client.get("/readyz")

    assert resp.json()["checks"]["redis"] is False
    assert resp.json()["ready"] is False


@pytest.mark.anyio
async def test_request_id_is_generated(async_client):
    resp = await async_client.get("/healthz")
    uuid.UUID(resp.headers["X-Request-ID"])


@pytest.mark.anyio
async def test_client_request_id_is_echoed(async_client):
    rid = str(uuid.uuid4())

    resp = await async_client.get("/api/actor/list", headers={"X-Request-ID": rid})

    assert resp.headers["X-Request-ID"] == rid
    assert resp.json()["request_id"] == rid


@pytest.mark.anyio
async def test_unknown_route_is_problem_json(async_client):
    resp = await async_client.get("/api/nope")

    assert resp.status_code == 404
    assert resp.headers["content-type"].startswith("application/problem+json")
