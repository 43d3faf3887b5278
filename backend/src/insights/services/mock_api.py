"""
Simulated analytics API.

Stands in for a remote analytics backend: every call waits a random
network delay and then returns generated or static mock data. Failure
injection lets the dashboard exercise its error path.
"""

import asyncio
import random
from typing import Awaitable, Callable

import structlog

from insights.exceptions import FetchFailure
from insights.schemas.campaign import Campaign
from insights.schemas.metric import Metric
from insights.services.campaign_service import CampaignRepository
from insights.services.metric_generator import MetricGenerator

logger = structlog.get_logger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class MockAPI:
    """Async facade over the metric generator and campaign records."""

    def __init__(
        self,
        generator: MetricGenerator | None = None,
        rng: random.Random | None = None,
        latency_ms: tuple[int, int] = (100, 300),
        campaign_latency_ms: tuple[int, int] = (200, 500),
        failure_rate: float = 0.0,
        campaigns: CampaignRepository | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        """
        Initialize the mock API.

        Args:
            generator: Metric source
            rng: Random source for latency and failure draws
            latency_ms: Inclusive (min, max) metrics latency in milliseconds
            campaign_latency_ms: Inclusive (min, max) campaigns latency in milliseconds
            failure_rate: Probability in [0, 1] that fetch_metrics raises FetchFailure
            campaigns: Campaign record source
            sleep: Awaitable sleep, injectable for tests
        """
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError("failure_rate must be between 0 and 1")
        for low, high in (latency_ms, campaign_latency_ms):
            if low < 0 or high < low:
                raise ValueError("latency bounds must satisfy 0 <= min <= max")

        self.rng = rng or random.Random()
        self.generator = generator or MetricGenerator(rng=self.rng)
        self.latency_ms = latency_ms
        self.campaign_latency_ms = campaign_latency_ms
        self.failure_rate = failure_rate
        self.campaigns = campaigns or CampaignRepository()
        self._sleep = sleep

    async def _delay(self, bounds: tuple[int, int]) -> None:
        low, high = bounds
        await self._sleep(self.rng.uniform(low, high) / 1000)

    async def fetch_metrics(self) -> list[Metric]:
        """
        Fetch the current overview metrics.

        Raises:
            FetchFailure: When failure injection triggers
        """
        await self._delay(self.latency_ms)

        if self.failure_rate and self.rng.random() < self.failure_rate:
            logger.warning("mock_metrics_fetch_failed", failure_rate=self.failure_rate)
            raise FetchFailure()

        return self.generator.generate()

    async def fetch_campaigns(self) -> list[Campaign]:
        """Fetch the campaign records."""
        await self._delay(self.campaign_latency_ms)
        return self.campaigns.all()
