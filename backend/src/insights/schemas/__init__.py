"""Pydantic schemas for API request/response validation."""

from insights.schemas.campaign import (
    Campaign,
    CampaignList,
    CampaignQuery,
    CampaignSortKey,
    CampaignStatus,
    CampaignSummary,
    SortOrder,
)
from insights.schemas.chart import (
    ChannelGrowth,
    ConversionSlice,
    RevenuePoint,
)
from insights.schemas.error import (
    ErrorCode,
    ErrorDetail,
    ErrorResponse,
)
from insights.schemas.metric import (
    Metric,
    MetricsSnapshot,
    MetricTitle,
    Trend,
)

__all__ = [
    # Metric schemas
    "Metric",
    "MetricsSnapshot",
    "MetricTitle",
    "Trend",
    # Campaign schemas
    "Campaign",
    "CampaignList",
    "CampaignQuery",
    "CampaignSortKey",
    "CampaignStatus",
    "CampaignSummary",
    "SortOrder",
    # Chart schemas
    "ChannelGrowth",
    "ConversionSlice",
    "RevenuePoint",
    # Error schemas
    "ErrorCode",
    "ErrorDetail",
    "ErrorResponse",
]
