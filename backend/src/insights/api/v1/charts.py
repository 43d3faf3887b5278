"""
Chart dataset API endpoints.

Provides endpoints for:
- GET /v1/charts/revenue      - Monthly revenue vs target (line chart)
- GET /v1/charts/user-growth  - Users and growth by channel (bar chart)
- GET /v1/charts/conversions  - Conversion type shares (pie chart)
"""
from typing import Optional

from fastapi import APIRouter, Depends

from insights.api.deps import get_chart_service, get_optional_controller
from insights.schemas.chart import ChannelGrowth, ConversionSlice, RevenuePoint
from insights.schemas.metric import MetricTitle
from insights.services.chart_service import ChartService
from insights.services.polling_controller import PollingController

router = APIRouter()


@router.get("/charts/revenue", response_model=list[RevenuePoint])
async def revenue_chart(
    service: ChartService = Depends(get_chart_service),
    controller: Optional[PollingController] = Depends(get_optional_controller),
) -> list[RevenuePoint]:
    """
    Monthly revenue against target.

    The latest month tracks the live Revenue metric once one has been fetched.
    """
    live_revenue = None
    if controller is not None:
        revenue = controller.get_snapshot().metric(MetricTitle.REVENUE)
        if revenue is not None:
            live_revenue = revenue.raw_value
    return service.revenue_trend(live_revenue)


@router.get("/charts/user-growth", response_model=list[ChannelGrowth])
async def user_growth_chart(service: ChartService = Depends(get_chart_service)) -> list[ChannelGrowth]:
    return service.user_growth()


@router.get("/charts/conversions", response_model=list[ConversionSlice])
async def conversions_chart(service: ChartService = Depends(get_chart_service)) -> list[ConversionSlice]:
    return service.conversion_breakdown()
