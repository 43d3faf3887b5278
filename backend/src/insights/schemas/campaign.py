"""Pydantic schemas for marketing campaigns and the campaign table."""
import enum
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


class CampaignStatus(str, enum.Enum):
    """Campaign lifecycle status."""

    ACTIVE = "Active"
    COMPLETED = "Completed"
    PAUSED = "Paused"


class SortOrder(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


class CampaignSortKey(str, enum.Enum):
    """Sortable campaign table columns."""

    NAME = "name"
    START_DATE = "start_date"
    END_DATE = "end_date"
    SPEND = "spend"
    IMPRESSIONS = "impressions"
    CLICKS = "clicks"
    CONVERSIONS = "conversions"
    STATUS = "status"


class Campaign(BaseModel):
    """A marketing campaign row."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, description="Campaign display name")
    start_date: date = Field(..., alias="startDate")
    end_date: date = Field(..., alias="endDate")
    spend: int = Field(..., ge=0, description="Spend in whole dollars")
    impressions: int = Field(..., ge=0)
    clicks: int = Field(..., ge=0)
    conversions: int = Field(..., ge=0)
    status: CampaignStatus

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ctr(self) -> float:
        """Click-through rate in percent."""
        if not self.impressions:
            return 0.0
        return round(self.clicks / self.impressions * 100, 2)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cost_per_conversion(self) -> Optional[float]:
        if not self.conversions:
            return None
        return round(self.spend / self.conversions, 2)


class CampaignQuery(BaseModel):
    """Search, filter and sort options for the campaign table."""

    search: Optional[str] = Field(default=None, description="Case-insensitive substring match on name")
    status: Optional[CampaignStatus] = Field(default=None)
    start_from: Optional[date] = Field(default=None, description="Earliest start date (inclusive)")
    start_to: Optional[date] = Field(
        default=None, description="Latest start date (inclusive); defaults to start_from"
    )
    sort_by: Optional[CampaignSortKey] = Field(default=None)
    order: SortOrder = Field(default=SortOrder.ASC)

    @model_validator(mode="after")
    def _check_date_range(self) -> "CampaignQuery":
        if self.start_to is not None and self.start_from is None:
            raise ValueError("start_to requires start_from")
        if self.start_from and self.start_to and self.start_to < self.start_from:
            raise ValueError("start_to must not be before start_from")
        return self


class CampaignSummary(BaseModel):
    """Totals over a set of campaigns."""

    count: int
    total_spend: int
    total_impressions: int
    total_clicks: int
    total_conversions: int
    by_status: dict[str, int]


class CampaignList(BaseModel):
    """Campaign table payload."""

    items: list[Campaign]
    total: int
    summary: CampaignSummary
