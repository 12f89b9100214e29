"""Conversions between a target sale price and an annual appreciation rate.

The UI lets the user edit either the expected sale price at the target year
or the annual appreciation rate; these helpers keep the two consistent.
"""

from __future__ import annotations

from .models import round_half_up

SALE_PRICE_MIN_COEFFICIENT = 0.7
SALE_PRICE_MAX_COEFFICIENT = 1.6


def appreciation_rate_from_prices(current_price: float, future_price: float, years: float) -> float:
    """Compound annual growth rate (percent) turning ``current_price`` into ``future_price``.

    Returns 0.0 when ``years <= 0`` or ``current_price <= 0``.
    """
    if years <= 0 or current_price <= 0:
        return 0.0
    ratio = future_price / current_price
    return (ratio ** (1.0 / years) - 1.0) * 100.0


def future_price_from_rate(current_price: float, rate_pct: float, years: float) -> int:
    """Price after ``years`` of compounding at ``rate_pct``, rounded to a whole unit."""
    return round_half_up(current_price * (1.0 + rate_pct / 100.0) ** years)


def monthly_appreciation_rate(annual_pct: float) -> float:
    """Annual effective rate (percent) -> equivalent monthly effective rate (decimal)."""
    return (1.0 + annual_pct / 100.0) ** (1.0 / 12.0) - 1.0


def sale_price_bounds(property_price: float) -> tuple[int, int]:
    """Editable range for the target sale price (70 %..160 % of the purchase price)."""
    return (
        round_half_up(property_price * SALE_PRICE_MIN_COEFFICIENT),
        round_half_up(property_price * SALE_PRICE_MAX_COEFFICIENT),
    )
