"""Number formatting shared by reports, insights and the assistant."""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional


def _round_half_up(value: float, decimals: int) -> Decimal:
    """Round the exact value of ``value`` with ties away from zero."""
    return Decimal(value).quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)


def format_currency(value: Optional[float], symbol: str = "$") -> str:
    """Format a value as currency: symbol, thousands separator, 2 decimals.

    Negative values put the minus sign before the symbol (``-$12.50``).
    """
    if value is None:
        return "N/A"
    amount = _round_half_up(float(value), 2)
    # No "-$0.00" for tiny negative float residue.
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_percent(value: Optional[float], decimals: int = 1) -> str:
    """Format a numeric value as a percentage, rounding ties up."""
    if value is None:
        return "N/A"
    return f"{_round_half_up(float(value), decimals):.{decimals}f}%"


def format_date(value: date, template: str = "{d.month}/{d.day}/{d.year}") -> str:
    """Render ``value`` with a ``str.format`` template bound to ``d``.

    The default gives ``3/9/2026``; strftime codes work too (``{d:%Y-%m-%d}``).
    """
    return template.format(d=value)
