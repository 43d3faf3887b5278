"""Unit tests for chart datasets."""
from insights.services.chart_service import ChartService, MONTHLY_REVENUE


def test_revenue_trend_static() -> None:
    points = ChartService().revenue_trend()

    assert [p.month for p in points] == ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul"]
    assert points[-1].revenue == 54231


def test_revenue_trend_tracks_live_revenue() -> None:
    points = ChartService().revenue_trend(live_revenue=55000.6)

    assert points[-1].revenue == 55001
    assert points[-1].target == 60000
    assert points[:-1] == list(MONTHLY_REVENUE[:-1])
    # the module constant is untouched
    assert MONTHLY_REVENUE[-1].revenue == 54231


def test_user_growth_channels() -> None:
    channels = ChartService().user_growth()
    assert len(channels) == 6
    assert max(channels, key=lambda c: c.users).campaign == "Google Ads"


def test_conversion_breakdown_sums_to_hundred() -> None:
    slices = ChartService().conversion_breakdown()
    assert sum(s.value for s in slices) == 100
    assert [s.color for s in slices] == ["chart-1", "chart-2", "chart-3", "chart-4"]
