"""Test data factories and fetch doubles for the insights tests."""
import asyncio
import random
from datetime import date, timedelta
from typing import Any, Sequence

from faker import Faker

from insights.schemas.campaign import Campaign, CampaignStatus
from insights.schemas.metric import Metric
from insights.services.metric_generator import MetricGenerator

fake = Faker()


class CampaignFactory:
    """Factory for creating test campaign data."""

    _next_id = 100

    @classmethod
    def create(cls, overrides: dict[str, Any] | None = None) -> Campaign:
        """
        Create a campaign.

        Args:
            overrides: Optional field overrides

        Returns:
            Campaign: Campaign row
        """
        cls._next_id += 1
        start = fake.date_between(start_date=date(2025, 1, 1), end_date=date(2025, 12, 1))
        impressions = fake.random_int(min=10_000, max=5_000_000)
        clicks = fake.random_int(min=100, max=impressions // 10)
        data = {
            "id": str(cls._next_id),
            "name": f"{fake.catch_phrase()} Campaign",
            "start_date": start,
            "end_date": start + timedelta(days=fake.random_int(min=14, max=120)),
            "spend": fake.random_int(min=500, max=60_000),
            "impressions": impressions,
            "clicks": clicks,
            "conversions": fake.random_int(min=0, max=clicks),
            "status": fake.random_element(list(CampaignStatus)),
        }
        if overrides:
            data.update(overrides)
        return Campaign(**data)

    @classmethod
    def create_batch(cls, size: int, overrides: dict[str, Any] | None = None) -> list[Campaign]:
        return [cls.create(overrides) for _ in range(size)]


class MetricFactory:
    """Factory for overview metric sets."""

    @staticmethod
    def create_batch(seed: int | None = None) -> list[Metric]:
        """
        Create one full set of overview metrics.

        Args:
            seed: Seed for reproducible values; random when omitted
        """
        seed = seed if seed is not None else fake.random_int(min=0, max=1_000_000)
        return MetricGenerator(rng=random.Random(seed)).generate()


class CountingFetch:
    """Fetch double that returns the same metrics after ``latency`` seconds and counts calls."""

    def __init__(self, metrics: Sequence[Metric] | None = None, latency: float = 0.0):
        self.metrics = list(metrics) if metrics is not None else MetricFactory.create_batch(seed=1)
        self.latency = latency
        self.calls = 0

    async def __call__(self) -> list[Metric]:
        self.calls += 1
        if self.latency:
            await asyncio.sleep(self.latency)
        return self.metrics


class ControlledFetch:
    """Fetch double whose calls block until the test resolves or fails them."""

    def __init__(self):
        self.pending: list[asyncio.Future] = []

    @property
    def calls(self) -> int:
        return len(self.pending)

    async def __call__(self) -> list[Metric]:
        future = asyncio.get_running_loop().create_future()
        self.pending.append(future)
        return await future

    def resolve(self, metrics: Sequence[Metric], index: int = -1) -> None:
        self.pending[index].set_result(list(metrics))

    def fail(self, exc: BaseException, index: int = -1) -> None:
        self.pending[index].set_exception(exc)


async def settle(rounds: int = 10) -> None:
    """Let pending callbacks and tasks run without advancing time meaningfully."""
    for _ in range(rounds):
        await asyncio.sleep(0)
