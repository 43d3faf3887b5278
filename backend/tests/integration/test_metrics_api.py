"""Integration tests for the real-time metrics and polling endpoints."""
import pytest
from httpx import AsyncClient

from insights.runtime import DashboardRuntime


@pytest.mark.asyncio
async def test_refresh_returns_metrics_snapshot(async_client: AsyncClient) -> None:
    """Refresh fetches once and the snapshot is serialized in camelCase."""
    response = await async_client.post("/v1/metrics/refresh")

    assert response.status_code == 200
    body = response.json()
    assert body["isLoading"] is False
    assert body["error"] is None
    assert [m["title"] for m in body["metrics"]] == ["Revenue", "Users", "Conversions", "Growth %"]

    revenue = body["metrics"][0]
    assert set(revenue) == {"title", "value", "rawValue", "change", "changePercent", "trend"}
    assert revenue["value"].startswith("$")
    assert revenue["trend"] in ("up", "down")


@pytest.mark.asyncio
async def test_get_metrics_matches_controller(async_client: AsyncClient, runtime: DashboardRuntime) -> None:
    await async_client.post("/v1/metrics/refresh")

    response = await async_client.get("/v1/metrics")

    assert response.status_code == 200
    expected = runtime.controller.get_snapshot()
    assert response.json()["metrics"][1]["rawValue"] == expected.metrics[1].raw_value


@pytest.mark.asyncio
async def test_failed_fetch_reported_in_snapshot(async_client: AsyncClient, runtime: DashboardRuntime) -> None:
    """A failing upstream is not an HTTP error; the snapshot carries it."""
    await async_client.post("/v1/metrics/refresh")
    runtime.api.failure_rate = 1.0

    response = await async_client.post("/v1/metrics/refresh")

    assert response.status_code == 200
    body = response.json()
    assert body["error"] == "Failed to fetch metrics"
    assert len(body["metrics"]) == 4


@pytest.mark.asyncio
async def test_polling_start_stop(async_client: AsyncClient) -> None:
    response = await async_client.post("/v1/metrics/polling/stop")
    assert response.status_code == 200
    assert response.json() == {"state": "stopped", "intervalMs": 60000}

    response = await async_client.post("/v1/metrics/polling/start")
    assert response.status_code == 200
    assert response.json()["state"] == "polling"


@pytest.mark.asyncio
async def test_polling_config_updates_interval(async_client: AsyncClient, runtime: DashboardRuntime) -> None:
    response = await async_client.put("/v1/metrics/polling/config", json={"intervalMs": 30000})

    assert response.status_code == 200
    assert response.json() == {"state": "polling", "intervalMs": 30000}
    assert runtime.controller.interval_ms == 30000


@pytest.mark.asyncio
async def test_polling_config_while_stopped_stays_stopped(async_client: AsyncClient) -> None:
    await async_client.post("/v1/metrics/polling/stop")

    response = await async_client.put("/v1/metrics/polling/config", json={"interval_ms": 15000})

    assert response.json() == {"state": "stopped", "intervalMs": 15000}


@pytest.mark.asyncio
@pytest.mark.parametrize("interval", [0, -5, "fast"])
async def test_polling_config_rejects_bad_interval(async_client: AsyncClient, interval: object) -> None:
    response = await async_client.put("/v1/metrics/polling/config", json={"intervalMs": interval})

    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "ValidationError"
    assert body["details"][0]["code"] == "invalid_interval"
    assert body["request_id"].startswith("req_")


@pytest.mark.asyncio
async def test_visibility_pauses_and_resumes(async_client: AsyncClient, runtime: DashboardRuntime) -> None:
    response = await async_client.post("/v1/metrics/visibility", json={"hidden": True})
    assert response.json() == {"hidden": True, "changed": True, "state": "stopped"}

    response = await async_client.post("/v1/metrics/visibility", json={"hidden": True})
    assert response.json()["changed"] is False

    response = await async_client.post("/v1/metrics/visibility", json={"hidden": False})
    assert response.json() == {"hidden": False, "changed": True, "state": "polling"}


@pytest.mark.asyncio
async def test_disposed_controller_returns_503(async_client: AsyncClient, runtime: DashboardRuntime) -> None:
    runtime.controller.dispose()

    response = await async_client.get("/v1/metrics")

    assert response.status_code == 503
    assert response.json()["detail"]["code"] == "controller_unavailable"


@pytest.mark.asyncio
async def test_request_id_echoed(async_client: AsyncClient) -> None:
    response = await async_client.get("/v1/metrics", headers={"x-request-id": "req_test123"})

    assert response.headers["x-request-id"] == "req_test123"
