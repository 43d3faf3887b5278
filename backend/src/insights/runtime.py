"""Wiring for the metrics simulation and poller from application settings."""
import random
from dataclasses import dataclass

import structlog

from insights.config import Settings
from insights.services.metric_generator import MetricGenerator, build_metric_specs
from insights.services.mock_api import MockAPI
from insights.services.polling_controller import PollingController
from insights.services.visibility import ManualVisibilitySource

logger = structlog.get_logger(__name__)


@dataclass
class DashboardRuntime:
    """Long-lived objects shared by the HTTP layer."""

    api: MockAPI
    visibility: ManualVisibilitySource
    controller: PollingController


def create_runtime(settings: Settings) -> DashboardRuntime:
    """
    Build generator -> mock API -> polling controller.

    A configured random_seed makes the whole simulation reproducible.
    """
    rng = random.Random(settings.random_seed)
    generator = MetricGenerator(rng=rng, specs=build_metric_specs(settings.currency))
    api = MockAPI(
        generator=generator,
        rng=rng,
        latency_ms=(settings.fetch_latency_min_ms, settings.fetch_latency_max_ms),
        failure_rate=settings.fetch_failure_rate,
    )
    visibility = ManualVisibilitySource()
    controller = PollingController(
        api.fetch_metrics,
        interval_ms=settings.poll_interval_ms,
        visibility=visibility,
    )

    logger.info(
        "dashboard_runtime_created",
        interval_ms=settings.poll_interval_ms,
        seeded=settings.random_seed is not None,
        failure_rate=settings.fetch_failure_rate,
    )
    return DashboardRuntime(api=api, visibility=visibility, controller=controller)
