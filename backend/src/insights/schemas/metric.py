"""Pydantic schemas for real-time dashboard metrics."""
import enum
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MetricTitle(str, enum.Enum):
    """Overview card metrics, in display order."""

    REVENUE = "Revenue"
    USERS = "Users"
    CONVERSIONS = "Conversions"
    GROWTH = "Growth %"


class Trend(str, enum.Enum):
    """Direction of a metric's month-over-month change."""

    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"  # not produced by the simulated generator

    @classmethod
    def from_change(cls, change_percent: float) -> "Trend":
        return cls.UP if change_percent >= 0 else cls.DOWN


class Metric(BaseModel):
    """A single overview metric with display strings and raw numbers."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: MetricTitle = Field(..., description="Metric identifier")
    value: str = Field(..., description="Formatted display value")
    raw_value: float = Field(..., ge=0, alias="rawValue", description="Unformatted value")
    change: str = Field(..., description="Signed month-over-month change, e.g. '+12.5% from last month'")
    change_percent: float = Field(..., alias="changePercent", description="Signed change percentage")
    trend: Trend = Field(..., description="up when change_percent >= 0, otherwise down")


class MetricsSnapshot(BaseModel):
    """
    One poll result.

    Snapshots are immutable: every state change produces a new snapshot
    that replaces the previous one.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    metrics: tuple[Metric, ...] = Field(default_factory=tuple)
    is_loading: bool = Field(default=False, alias="isLoading")
    error: Optional[str] = Field(default=None)

    @classmethod
    def initial(cls) -> "MetricsSnapshot":
        """State before the first fetch completes."""
        return cls(metrics=(), is_loading=True, error=None)

    def loading(self) -> "MetricsSnapshot":
        """Copy marked as loading; metrics and error are preserved."""
        return self.model_copy(update={"is_loading": True})

    def failed(self, message: str) -> "MetricsSnapshot":
        """Copy carrying a fetch error; previous metrics are preserved."""
        return self.model_copy(update={"is_loading": False, "error": message})

    def metric(self, title: MetricTitle) -> Optional[Metric]:
        for metric in self.metrics:
            if metric.title == title:
                return metric
        return None
