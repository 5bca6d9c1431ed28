"""Health probes — liveness and readiness with sweep status."""


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_reports_database_and_disabled_sweep(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    body = res.json()
    assert body["checks"]["database"] == "healthy"
    assert body["sweep"]["state"] == "disabled"
