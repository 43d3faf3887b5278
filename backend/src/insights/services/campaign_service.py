"""
Campaign table service.

Serves the "Recent Marketing Campaigns" table: case-insensitive name
search, status filter, inclusive start-date range filter, and column
sorting. Campaign records are static mock data.
"""

from collections import Counter
from datetime import date
from typing import Iterable, Optional

import structlog

from insights.schemas.campaign import (
    Campaign,
    CampaignList,
    CampaignQuery,
    CampaignSortKey,
    CampaignStatus,
    CampaignSummary,
    SortOrder,
)

logger = structlog.get_logger(__name__)


def _campaign(
    id: str,
    name: str,
    start: str,
    end: str,
    spend: int,
    impressions: int,
    clicks: int,
    conversions: int,
    status: CampaignStatus,
) -> Campaign:
    return Campaign(
        id=id,
        name=name,
        start_date=date.fromisoformat(start),
        end_date=date.fromisoformat(end),
        spend=spend,
        impressions=impressions,
        clicks=clicks,
        conversions=conversions,
        status=status,
    )


MOCK_CAMPAIGNS: tuple[Campaign, ...] = (
    _campaign("1", "Summer Sale 2025", "2025-06-01", "2025-08-31", 15420, 2847392, 42847, 1247, CampaignStatus.ACTIVE),
    _campaign("2", "Brand Awareness Q2", "2025-04-01", "2025-06-30", 28750, 5294837, 73829, 2184, CampaignStatus.COMPLETED),
    _campaign("3", "Product Launch - Mobile", "2025-07-15", "2025-09-15", 12890, 1847293, 28473, 892, CampaignStatus.ACTIVE),
    _campaign("4", "Holiday Prep Campaign", "2025-09-01", "2025-11-30", 34200, 6847392, 94738, 3247, CampaignStatus.ACTIVE),
    _campaign("5", "Retargeting - Cart Abandoners", "2025-05-01", "2025-07-31", 8950, 947382, 18473, 743, CampaignStatus.COMPLETED),
    _campaign("6", "Video Ad Series - Gen Z", "2025-08-01", "2025-10-31", 19750, 3847291, 56829, 1684, CampaignStatus.PAUSED),
    _campaign("7", "Local Market Expansion", "2025-03-15", "2025-05-15", 22100, 4293847, 67384, 2047, CampaignStatus.COMPLETED),
    _campaign("8", "Influencer Collaboration", "2025-06-15", "2025-08-15", 16800, 2947382, 41829, 1394, CampaignStatus.ACTIVE),
    _campaign("9", "Email Signup Drive", "2025-07-01", "2025-09-30", 7450, 1294738, 19847, 847, CampaignStatus.ACTIVE),
    _campaign("10", "Black Friday Preview", "2025-10-01", "2025-11-29", 45600, 8947382, 128473, 4829, CampaignStatus.ACTIVE),
    _campaign("11", "Customer Loyalty Program", "2025-01-01", "2025-12-31", 52300, 12847392, 184729, 6847, CampaignStatus.ACTIVE),
    _campaign("12", "Spring Collection Launch", "2025-02-15", "2025-04-30", 18900, 3294847, 52847, 1647, CampaignStatus.COMPLETED),
)


class CampaignRepository:
    """In-memory campaign records."""

    def __init__(self, campaigns: Iterable[Campaign] = MOCK_CAMPAIGNS):
        self._campaigns = tuple(campaigns)

    def all(self) -> list[Campaign]:
        return list(self._campaigns)

    def get(self, campaign_id: str) -> Optional[Campaign]:
        for campaign in self._campaigns:
            if campaign.id == campaign_id:
                return campaign
        return None


class CampaignService:
    """Search, filter, sort and summarize campaigns for the dashboard table."""

    def __init__(self, repository: CampaignRepository | None = None):
        """
        Initialize campaign service.

        Args:
            repository: Campaign source (defaults to the mock records)
        """
        self.repository = repository or CampaignRepository()

    @staticmethod
    def filter_campaigns(campaigns: Iterable[Campaign], query: CampaignQuery) -> list[Campaign]:
        """
        Apply the query's search, status and start-date filters.

        The date range is inclusive on both ends; a missing upper bound means
        a single-day range on ``start_from``.
        """
        rows = list(campaigns)

        if query.search:
            needle = query.search.strip().lower()
            rows = [c for c in rows if needle in c.name.lower()]

        if query.status is not None:
            rows = [c for c in rows if c.status == query.status]

        if query.start_from is not None:
            start_to = query.start_to or query.start_from
            rows = [c for c in rows if query.start_from <= c.start_date <= start_to]

        return rows

    @staticmethod
    def sort_campaigns(
        campaigns: Iterable[Campaign],
        sort_by: Optional[CampaignSortKey],
        order: SortOrder = SortOrder.ASC,
    ) -> list[Campaign]:
        """Sort by a table column. Ties keep their original order."""
        rows = list(campaigns)
        if sort_by is None:
            return rows

        def key(campaign: Campaign):
            value = getattr(campaign, sort_by.value)
            if isinstance(value, CampaignStatus):
                return value.value
            if isinstance(value, str):
                return value.lower()
            return value

        return sorted(rows, key=key, reverse=order == SortOrder.DESC)

    @staticmethod
    def summarize(campaigns: Iterable[Campaign]) -> CampaignSummary:
        """Totals and per-status counts."""
        rows = list(campaigns)
        statuses = Counter(c.status.value for c in rows)
        return CampaignSummary(
            count=len(rows),
            total_spend=sum(c.spend for c in rows),
            total_impressions=sum(c.impressions for c in rows),
            total_clicks=sum(c.clicks for c in rows),
            total_conversions=sum(c.conversions for c in rows),
            by_status={status.value: statuses.get(status.value, 0) for status in CampaignStatus},
        )

    def query_campaigns(self, query: CampaignQuery | None = None) -> list[Campaign]:
        """Filtered and sorted campaign rows."""
        query = query or CampaignQuery()
        rows = self.filter_campaigns(self.repository.all(), query)
        return self.sort_campaigns(rows, query.sort_by, query.order)

    def list_campaigns(self, query: CampaignQuery | None = None) -> CampaignList:
        """
        Build the campaign table payload.

        Args:
            query: Search/filter/sort options

        Returns:
            CampaignList with matching rows and their summary
        """
        query = query or CampaignQuery()
        rows = self.query_campaigns(query)

        logger.info(
            "campaigns_listed",
            search=query.search,
            status=query.status.value if query.status else None,
            sort_by=query.sort_by.value if query.sort_by else None,
            results=len(rows),
        )

        return CampaignList(items=rows, total=len(rows), summary=self.summarize(rows))
