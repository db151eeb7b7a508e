"""
Money helpers shared by time entries, invoices and reports.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_currency(amount: Any) -> float:
    """Round to cents, half up."""
    return float(_to_decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def calculate_amount(rate: float, duration: float, billable: bool) -> float:
    """
    Billed amount for a time entry.
    Non-billable time is worth nothing; billable time is rate * hours in cents.
    """
    if not billable:
        return 0.0
    return float(
        (_to_decimal(rate) * _to_decimal(duration)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    )


def sum_amounts(amounts: Iterable[Any]) -> float:
    """Exact cent sum of already rounded amounts."""
    total = sum((_to_decimal(amount) for amount in amounts), Decimal("0"))
    return round_currency(total)


def format_currency(amount: float, symbol: str = "$") -> str:
    """Format an amount as US dollars, e.g. ``$1,234.50``."""
    value = round_currency(amount)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"
