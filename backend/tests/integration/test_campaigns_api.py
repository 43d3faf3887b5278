"""Integration tests for the campaign table and its exports."""
import pytest
from httpx import AsyncClient

from insights.schemas.error import ErrorResponse

HEADER = "Campaign Name,Start Date,End Date,Spend ($),Impressions,Clicks,Conversions,Status"


@pytest.mark.asyncio
async def test_list_campaigns(async_client: AsyncClient) -> None:
    response = await async_client.get("/v1/campaigns")

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 12
    assert body["summary"]["by_status"] == {"Active": 7, "Completed": 4, "Paused": 1}

    first = body["items"][0]
    assert first["name"] == "Summer Sale 2025"
    assert first["startDate"] == "2025-06-01"
    assert first["ctr"] == 1.5


@pytest.mark.asyncio
async def test_list_campaigns_search_filter_sort(async_client: AsyncClient) -> None:
    response = await async_client.get(
        "/v1/campaigns",
        params={"status": "Active", "sort_by": "spend", "order": "desc"},
    )

    assert response.status_code == 200
    ids = [item["id"] for item in response.json()["items"]]
    assert ids == ["11", "10", "4", "8", "1", "3", "9"]

    response = await async_client.get("/v1/campaigns", params={"search": "launch"})
    assert [item["id"] for item in response.json()["items"]] == ["3", "12"]


@pytest.mark.asyncio
async def test_list_campaigns_date_range(async_client: AsyncClient) -> None:
    response = await async_client.get(
        "/v1/campaigns",
        params={"start_from": "2025-06-01", "start_to": "2025-06-30"},
    )

    assert [item["id"] for item in response.json()["items"]] == ["1", "8"]


@pytest.mark.asyncio
async def test_reversed_date_range_rejected(async_client: AsyncClient) -> None:
    response = await async_client.get(
        "/v1/campaigns",
        params={"start_from": "2025-07-01", "start_to": "2025-06-01"},
    )

    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "invalid_date_range"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params,code",
    [
        ({"status": "Archived"}, "invalid_enum_value"),
        ({"start_from": "not-a-date"}, "invalid_date"),
        ({"sort_by": "ctr"}, "invalid_enum_value"),
    ],
)
async def test_invalid_query_params(async_client: AsyncClient, params: dict, code: str) -> None:
    response = await async_client.get("/v1/campaigns", params=params)

    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "ValidationError"
    assert body["details"][0]["code"] == code


@pytest.mark.asyncio
async def test_csv_export(async_client: AsyncClient) -> None:
    response = await async_client.get("/v1/campaigns/export.csv", params={"status": "Paused"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert response.headers["content-disposition"] == 'attachment; filename="marketing-campaigns.csv"'
    assert response.text == (
        f"{HEADER}\n"
        'Video Ad Series - Gen Z,"Aug 1, 2025","Oct 31, 2025","$19,750","3,847,291","56,829","1,684",Paused'
    )


@pytest.mark.asyncio
async def test_csv_export_custom_filename(async_client: AsyncClient) -> None:
    response = await async_client.get("/v1/campaigns/export.csv", params={"filename": "q3-report"})

    assert response.headers["content-disposition"] == 'attachment; filename="q3-report.csv"'
    assert len(response.text.split("\n")) == 13


@pytest.mark.asyncio
async def test_csv_export_rejects_unsafe_filename(async_client: AsyncClient) -> None:
    response = await async_client.get("/v1/campaigns/export.csv", params={"filename": "../etc/passwd"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_export_with_no_rows_returns_404(async_client: AsyncClient) -> None:
    response = await async_client.get("/v1/campaigns/export.csv", params={"search": "zzz"})

    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "NoDataToExport"
    assert body["message"] == "No data to export"
    assert body["details"][0]["code"] == "no_data_to_export"

    parsed = ErrorResponse.model_validate(body)
    assert parsed.request_id.startswith("req_")
    assert parsed.remediation is not None
    assert body["timestamp"].endswith("Z")


@pytest.mark.asyncio
async def test_pdf_export(async_client: AsyncClient, fake_weasyprint: list[str]) -> None:
    response = await async_client.get("/v1/campaigns/export.pdf", params={"search": "summer"})

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == 'attachment; filename="marketing-campaigns.pdf"'
    assert response.content.startswith(b"%PDF")
    assert "Recent Marketing Campaigns" in fake_weasyprint[0]
    assert "Total records: 1" in fake_weasyprint[0]


@pytest.mark.asyncio
async def test_pdf_export_without_renderer(async_client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
    import sys

    monkeypatch.setitem(sys.modules, "weasyprint", None)

    response = await async_client.get("/v1/campaigns/export.pdf")

    assert response.status_code == 500
    assert response.json()["details"][0]["code"] == "export_failed"
