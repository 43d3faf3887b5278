"""
Synthetic metric generator for the real-time overview cards.

Each call perturbs fixed baselines by a bounded uniform variation:

- Revenue:      54,231 +/- 3%   (change 12.5% +/- 20%)
- Users:        14,432 +/- 4%   (change  8.2% +/- 25%)
- Conversions:   2,847 +/- 6%   (change 15.3% +/- 30%)
- Growth %:      24.8  +/- 8%   (change  4.1% +/- 40%)

Values are clamped at zero; change percentages are not. Calls are
independent of each other: nothing accumulates between draws.
"""

import random
from dataclasses import dataclass
from functools import partial
from typing import Callable

import structlog

from insights.schemas.metric import Metric, MetricTitle, Trend
from insights.utils.formatting import (
    bounded_variation,
    format_change,
    format_currency,
    format_number,
    format_percentage,
    generate_variation,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class MetricSpec:
    """Baseline and variation bands for one overview metric."""

    title: MetricTitle
    baseline: float
    variation_percent: float
    change_baseline: float
    change_variation_percent: float
    formatter: Callable[[float], str]


def _format_count(value: float) -> str:
    return format_number(round(value))


def build_metric_specs(currency: str = "USD") -> tuple[MetricSpec, ...]:
    """Overview metric definitions with revenue shown in the given currency."""
    return (
        MetricSpec(MetricTitle.REVENUE, 54231, 3, 12.5, 20, partial(format_currency, currency=currency)),
        MetricSpec(MetricTitle.USERS, 14432, 4, 8.2, 25, _format_count),
        MetricSpec(MetricTitle.CONVERSIONS, 2847, 6, 15.3, 30, _format_count),
        MetricSpec(MetricTitle.GROWTH, 24.8, 8, 4.1, 40, format_percentage),
    )


DEFAULT_METRIC_SPECS = build_metric_specs()


class MetricGenerator:
    """Produces one snapshot's worth of overview metrics per call."""

    def __init__(
        self,
        rng: random.Random | None = None,
        specs: tuple[MetricSpec, ...] = DEFAULT_METRIC_SPECS,
    ):
        """
        Initialize the generator.

        Args:
            rng: Random source. Pass a seeded ``random.Random`` for reproducible output.
            specs: Metric definitions, in display order
        """
        self.rng = rng or random.Random()
        self.specs = specs

    def generate_metric(self, spec: MetricSpec) -> Metric:
        """Draw a value and a month-over-month change for one metric."""
        value = generate_variation(spec.baseline, spec.variation_percent, self.rng)
        change = bounded_variation(spec.change_baseline, spec.change_variation_percent, self.rng)

        return Metric(
            title=spec.title,
            value=spec.formatter(value),
            raw_value=value,
            change=format_change(change),
            change_percent=change,
            trend=Trend.from_change(change),
        )

    def generate(self) -> list[Metric]:
        """
        Generate the overview metrics.

        Returns:
            One Metric per spec, in spec order
        """
        metrics = [self.generate_metric(spec) for spec in self.specs]
        logger.debug(
            "metrics_generated",
            values={m.title.value: round(m.raw_value, 2) for m in metrics},
        )
        return metrics
