"""Display formatting and value-variation helpers for dashboard figures."""
import random
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

# Currency symbols for the display currencies the dashboard supports
currency_symbols = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CAD": "CA$",
    "AUD": "A$",
    "INR": "₹",
}

_default_rng = random.Random()


def _group_thousands(value: Decimal, places: int) -> str:
    quantum = Decimal(1).scaleb(-places)
    rounded = value.quantize(quantum, rounding=ROUND_HALF_UP)
    if rounded == 0:
        # avoid "-0" for values that round to zero
        rounded = abs(rounded)
    return f"{rounded:,f}"


def format_currency(value: float, currency: str = "USD") -> str:
    """
    Format a value as whole currency units.

    Args:
        value: Amount in major currency units (dollars, euros, ...)
        currency: ISO 4217 currency code

    Returns:
        Formatted string with symbol and thousands separators

    Examples:
        >>> format_currency(54231.4)
        '$54,231'
        >>> format_currency(-1234.5)
        '-$1,235'
    """
    code = currency.upper()
    symbol = currency_symbols.get(code, code + " ")
    amount = _group_thousands(Decimal(str(value)), 0)
    if amount.startswith("-"):
        return f"-{symbol}{amount[1:]}"
    return f"{symbol}{amount}"


def format_number(value: float) -> str:
    """
    Format a number with thousands separators.

    Integers keep no decimals; floats keep at most three decimal places with
    trailing zeros dropped.

    Examples:
        >>> format_number(14432)
        '14,432'
        >>> format_number(1234.5678)
        '1,234.568'
    """
    if isinstance(value, int):
        return f"{value:,}"
    text = _group_thousands(Decimal(str(value)), 3)
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_percentage(value: float) -> str:
    """
    Format a number as a one-decimal percentage (12.5 -> "12.5%").
    """
    # + 0.0 folds negative zero into zero
    return f"{value + 0.0:.1f}%"


def format_change(change_percent: float) -> str:
    """
    Format a month-over-month change with an explicit sign.

    Examples:
        >>> format_change(12.46)
        '+12.5% from last month'
        >>> format_change(-3.2)
        '-3.2% from last month'
    """
    sign = "+" if change_percent >= 0 else ""
    return f"{sign}{format_percentage(change_percent)} from last month"


def format_date(value: date | datetime | str) -> str:
    """
    Format a date the way the campaign table shows it ("Jun 1, 2025").

    ISO strings are parsed first.
    """
    if isinstance(value, str):
        value = date.fromisoformat(value[:10])
    return f"{value:%b} {value.day}, {value.year}"


def bounded_variation(base: float, variation_percent: float, rng: random.Random | None = None) -> float:
    """
    Perturb a value by a uniform draw within +/- variation_percent of itself.

    The result is not clamped and may be negative.
    """
    rng = rng or _default_rng
    variation = (rng.random() - 0.5) * 2 * (variation_percent / 100)
    return base * (1 + variation)


def generate_variation(base: float, variation_percent: float = 5, rng: random.Random | None = None) -> float:
    """
    Generate a random variation of a base value, clamped at zero.

    Args:
        base: The baseline value to vary
        variation_percent: Half-width of the uniform band as a percentage of base
        rng: Random source; pass a seeded ``random.Random`` for reproducible draws

    Returns:
        ``max(0, base * (1 + u))`` with ``u`` uniform in ``[-p/100, p/100)``
    """
    return max(0.0, bounded_variation(base, variation_percent, rng))
