"""Datasets for the dashboard's chart widgets."""
from typing import Optional

from insights.schemas.chart import ChannelGrowth, ConversionSlice, RevenuePoint

MONTHLY_REVENUE: tuple[RevenuePoint, ...] = (
    RevenuePoint(month="Jan", revenue=45000, target=50000),
    RevenuePoint(month="Feb", revenue=52000, target=50000),
    RevenuePoint(month="Mar", revenue=48000, target=50000),
    RevenuePoint(month="Apr", revenue=61000, target=55000),
    RevenuePoint(month="May", revenue=55000, target=55000),
    RevenuePoint(month="Jun", revenue=67000, target=60000),
    RevenuePoint(month="Jul", revenue=54231, target=60000),
)

CHANNEL_GROWTH: tuple[ChannelGrowth, ...] = (
    ChannelGrowth(campaign="Social Media", users=2847, growth=15.3),
    ChannelGrowth(campaign="Email Marketing", users=1923, growth=8.7),
    ChannelGrowth(campaign="Google Ads", users=3421, growth=22.1),
    ChannelGrowth(campaign="Content Marketing", users=1654, growth=12.4),
    ChannelGrowth(campaign="Influencer", users=987, growth=18.9),
    ChannelGrowth(campaign="Referral", users=1432, growth=9.8),
)

CONVERSION_BREAKDOWN: tuple[ConversionSlice, ...] = (
    ConversionSlice(name="Email Signups", value=35, color="chart-1"),
    ConversionSlice(name="Free Trials", value=28, color="chart-2"),
    ConversionSlice(name="Purchases", value=22, color="chart-3"),
    ConversionSlice(name="Subscriptions", value=15, color="chart-4"),
)


class ChartService:
    """Line, bar and pie chart datasets."""

    def revenue_trend(self, live_revenue: Optional[float] = None) -> list[RevenuePoint]:
        """
        Monthly revenue against target.

        Args:
            live_revenue: Current Revenue metric; replaces the latest month when given
        """
        points = list(MONTHLY_REVENUE)
        if live_revenue is not None:
            points[-1] = points[-1].model_copy(update={"revenue": max(0, round(live_revenue))})
        return points

    def user_growth(self) -> list[ChannelGrowth]:
        return list(CHANNEL_GROWTH)

    def conversion_breakdown(self) -> list[ConversionSlice]:
        return list(CONVERSION_BREAKDOWN)
