"""
Campaign table API endpoints.

Provides endpoints for:
- GET /v1/campaigns             - Search, filter and sort campaigns
- GET /v1/campaigns/export.csv  - Download the filtered table as CSV
- GET /v1/campaigns/export.pdf  - Download the filtered table as a PDF report
"""

from datetime import date
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import ValidationError

from insights.api.deps import get_campaign_service, get_export_service
from insights.schemas.campaign import (
    CampaignList,
    CampaignQuery,
    CampaignSortKey,
    CampaignStatus,
    SortOrder,
)
from insights.schemas.error import ErrorCode, REMEDIATION_HINTS
from insights.services.campaign_service import CampaignService
from insights.services.export_service import (
    ExportService,
    campaign_export_columns,
    campaign_formatters,
    export_filename,
    format_rows_for_export,
)

logger = structlog.get_logger(__name__)

router = APIRouter()

TABLE_TITLE = "Recent Marketing Campaigns"
DEFAULT_EXPORT_NAME = "marketing-campaigns"


def campaign_query(
    search: Optional[str] = Query(default=None, max_length=200, description="Search campaigns by name"),
    status_filter: Optional[CampaignStatus] = Query(default=None, alias="status"),
    start_from: Optional[date] = Query(default=None, description="Filter by start date (from, inclusive)"),
    start_to: Optional[date] = Query(default=None, description="Filter by start date (to, inclusive)"),
    sort_by: Optional[CampaignSortKey] = Query(default=None),
    order: SortOrder = Query(default=SortOrder.ASC),
) -> CampaignQuery:
    """Build a CampaignQuery from query parameters."""
    try:
        return CampaignQuery(
            search=search,
            status=status_filter,
            start_from=start_from,
            start_to=start_to,
            sort_by=sort_by,
            order=order,
        )
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "code": ErrorCode.INVALID_DATE_RANGE,
                "message": exc.errors()[0]["msg"],
                "remediation": REMEDIATION_HINTS[ErrorCode.INVALID_DATE_RANGE],
            },
        )


@router.get("/campaigns", response_model=CampaignList)
async def list_campaigns(
    query: CampaignQuery = Depends(campaign_query),
    service: CampaignService = Depends(get_campaign_service),
) -> CampaignList:
    return service.list_campaigns(query)


@router.get("/campaigns/export.csv")
async def export_campaigns_csv(
    query: CampaignQuery = Depends(campaign_query),
    filename: Optional[str] = Query(default=None, pattern=r"^[\w\-]+$", max_length=100),
    service: CampaignService = Depends(get_campaign_service),
    exporter: ExportService = Depends(get_export_service),
) -> Response:
    """CSV of the filtered campaigns. 404 when nothing matches."""
    rows = format_rows_for_export(service.query_campaigns(query), campaign_formatters)
    content = exporter.to_csv(rows, campaign_export_columns)
    name = export_filename(TABLE_TITLE, "csv", filename or DEFAULT_EXPORT_NAME)

    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{name}"'},
    )


@router.get("/campaigns/export.pdf")
async def export_campaigns_pdf(
    query: CampaignQuery = Depends(campaign_query),
    filename: Optional[str] = Query(default=None, pattern=r"^[\w\-]+$", max_length=100),
    service: CampaignService = Depends(get_campaign_service),
    exporter: ExportService = Depends(get_export_service),
) -> Response:
    """PDF report of the filtered campaigns. 404 when nothing matches."""
    rows = format_rows_for_export(service.query_campaigns(query), campaign_formatters)
    content = exporter.to_pdf(rows, campaign_export_columns, title=TABLE_TITLE)
    name = export_filename(TABLE_TITLE, "pdf", filename or DEFAULT_EXPORT_NAME)

    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{name}"'},
    )
