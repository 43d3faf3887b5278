"""Unit tests for display formatting and value variation helpers."""
import random
from datetime import date, datetime

import pytest

from insights.services.metric_generator import MetricGenerator
from insights.utils.formatting import (
    bounded_variation,
    format_change,
    format_currency,
    format_date,
    format_number,
    format_percentage,
    generate_variation,
)


class FixedRandom(random.Random):
    """Random source that always draws the same value."""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.mark.parametrize(
    "value,currency,expected",
    [
        (54231.4, "USD", "$54,231"),
        (54231.5, "USD", "$54,232"),
        (-1234.5, "USD", "-$1,235"),
        (0.4, "USD", "$0"),
        (-0.4, "USD", "$0"),
        (1000, "eur", "€1,000"),
        (5, "XYZ", "XYZ 5"),
    ],
)
def test_format_currency(value: float, currency: str, expected: str) -> None:
    assert format_currency(value, currency) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        (14432, "14,432"),
        (1234.5678, "1,234.568"),
        (2.5, "2.5"),
        (3.0, "3"),
        (0, "0"),
    ],
)
def test_format_number(value: float, expected: str) -> None:
    assert format_number(value) == expected


def test_format_percentage_one_decimal() -> None:
    assert format_percentage(24.8) == "24.8%"
    assert format_percentage(12.46) == "12.5%"
    assert format_percentage(-0.0) == "0.0%"


def test_format_change_sign() -> None:
    """Non-negative changes carry a leading plus sign."""
    assert format_change(12.46) == "+12.5% from last month"
    assert format_change(0) == "+0.0% from last month"
    assert format_change(-3.2) == "-3.2% from last month"


def test_format_date() -> None:
    assert format_date(date(2025, 6, 1)) == "Jun 1, 2025"
    assert format_date(datetime(2025, 11, 29, 18, 0)) == "Nov 29, 2025"
    assert format_date("2025-12-31") == "Dec 31, 2025"


def test_bounded_variation_band_edges() -> None:
    """A draw of 0 gives the lower edge, 0.5 the base value."""
    assert bounded_variation(100, 10, FixedRandom(0.0)) == pytest.approx(90.0)
    assert bounded_variation(100, 10, FixedRandom(0.5)) == pytest.approx(100.0)
    assert bounded_variation(100, 10, FixedRandom(0.999999)) < 110.0


def test_bounded_variation_is_not_clamped() -> None:
    assert bounded_variation(-10, 50, FixedRandom(0.5)) == pytest.approx(-10.0)


def test_generate_variation_clamps_at_zero() -> None:
    assert generate_variation(-10, 5, FixedRandom(0.5)) == 0.0
    assert generate_variation(100, 150, FixedRandom(0.0)) == 0.0


def test_generate_variation_seeded_is_reproducible() -> None:
    first = [generate_variation(1000, 5, random.Random(11)) for _ in range(3)]
    second = [generate_variation(1000, 5, random.Random(11)) for _ in range(3)]
    assert first == second


@pytest.mark.parametrize("seed", [0, 7, 1234])
def test_formatting_is_stable_across_calls(seed: int) -> None:
    """Formatting the same value twice yields the same string."""
    values = [0, 0.5, -0.5, 2.675, 999_999.5, -1234.5] + [
        metric.raw_value for metric in MetricGenerator(rng=random.Random(seed)).generate()
    ]
    for value in values:
        assert format_currency(value) == format_currency(value)
        assert format_number(value) == format_number(value)
        assert format_percentage(value) == format_percentage(value)
        assert format_change(value) == format_change(value)
