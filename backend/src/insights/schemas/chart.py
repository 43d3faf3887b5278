"""Pydantic schemas for dashboard chart datasets."""
from pydantic import BaseModel, Field


class RevenuePoint(BaseModel):
    """Monthly revenue against target (line chart)."""

    month: str = Field(..., description="Short month name")
    revenue: int = Field(..., ge=0)
    target: int = Field(..., ge=0)


class ChannelGrowth(BaseModel):
    """Users acquired per campaign channel (bar chart)."""

    campaign: str
    users: int = Field(..., ge=0)
    growth: float = Field(..., description="Growth in percent")


class ConversionSlice(BaseModel):
    """Share of conversions by type (pie chart)."""

    name: str
    value: int = Field(..., ge=0, le=100, description="Share of conversions in percent")
    color: str = Field(..., description="Chart palette slot")

