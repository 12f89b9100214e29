"""Simulator constants and the default scenario.

Kept free of Streamlit imports so the CLI and QA suites share the same
first-load defaults as the UI (single source of truth).
"""

from __future__ import annotations

import datetime as _dt

from .models import Loan, SimulationParams

MAX_SIMULATION_MONTHS = 300
MONTHS_PER_YEAR = 12

# Notary fees as a percent of the price: existing ("ancien") vs new build ("neuf").
NOTARY_FEES_PERCENT_OLD = 7.5
NOTARY_FEES_PERCENT_NEW = 2.5

MIN_HOLDING_YEARS = 1
MAX_HOLDING_YEARS = 25
DEFAULT_TARGET_YEAR = 4

PRICE_RANGE_MIN = 100_000
PRICE_RANGE_MAX = 500_000
RATE_MAX = 10.0

DEFAULT_PTZ_LOAN = Loan(
    id="ptz",
    name="PTZ (État)",
    amount=75_600.0,
    rate=0.0,
    duration_months=240,
    insurance_rate=0.36,
    deferred_months=60,
)

DEFAULT_BOOST_LOAN = Loan(
    id="boost",
    name="Prêt Boost",
    amount=15_000.0,
    rate=0.0,
    duration_months=240,
    insurance_rate=0.36,
    deferred_months=0,
)

DEFAULT_STANDARD_LOAN = Loan(
    id="standard",
    name="Prêt Standard",
    amount=169_950.0,
    rate=1.18,
    duration_months=300,
    insurance_rate=0.36,
    deferred_months=0,
)


def default_params(today: _dt.date | None = None) -> SimulationParams:
    """Default scenario; the purchase date defaults to today."""
    today = today or _dt.date.today()
    return SimulationParams(
        purchase_date=today.isoformat(),
        property_price=286_000.0,
        property_type="ancien",
        notary_fees=21_450.0,
        notary_fees_percent=NOTARY_FEES_PERCENT_OLD,
        renovation_cost=8_000.0,
        property_appreciation=0.0,
        agency_fees_percent=5.0,
        sale_diagnostics=400.0,
        personal_contribution=25_000.0,
        loans=(DEFAULT_PTZ_LOAN, DEFAULT_BOOST_LOAN, DEFAULT_STANDARD_LOAN),
        property_tax=1_200.0,
        condo_fees=180.0,
        maintenance_cost=0.0,
        monthly_extra_costs=0.0,
        yearly_extra_costs=0.0,
        monthly_rent=902.0,
        savings_rate=3.0,
        rent_inflation=1.5,
    )
