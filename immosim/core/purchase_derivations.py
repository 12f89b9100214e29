"""Purchase-time derivations shared by the UI and the CLI.

Several inputs are coupled: the notary fees follow the price and the property
type, and the ``standard`` loan covers whatever the personal contribution and
the subsidised loans (``ptz``, ``boost``) leave uncovered. The UI edits one
field at a time; the helpers below return a new :class:`SimulationParams`
with the dependent fields re-derived, so UI and headless callers agree on the
economics.
"""

from __future__ import annotations

import datetime as _dt
from dataclasses import replace

from .appreciation import appreciation_rate_from_prices
from .defaults import (
    MAX_HOLDING_YEARS,
    MIN_HOLDING_YEARS,
    NOTARY_FEES_PERCENT_NEW,
    NOTARY_FEES_PERCENT_OLD,
)
from .models import SimulationParams, round_half_up

STANDARD_LOAN_ID = "standard"
PTZ_LOAN_ID = "ptz"
BOOST_LOAN_ID = "boost"


def _parse_date(x) -> _dt.date | None:
    """Parse a purchase date.

    Accepts ``datetime.date``, ``datetime.datetime`` or ISO strings
    (YYYY-MM-DD...). Returns None when the value cannot be parsed.
    """
    if isinstance(x, _dt.datetime):
        return x.date()
    if isinstance(x, _dt.date):
        return x
    try:
        return _dt.date.fromisoformat(str(x)[:10])
    except ValueError:
        return None


def notary_fees(property_price: float, notary_fees_percent: float) -> int:
    return round_half_up(property_price * (notary_fees_percent / 100.0))


def standard_loan_amount(price: float, contribution: float, ptz_amount: float, boost_amount: float) -> float:
    """Amount the standard loan must cover; never negative."""
    return max(0.0, price - contribution - ptz_amount - boost_amount)


def _loan_amount(params: SimulationParams, loan_id: str) -> float:
    ln = params.loan(loan_id)
    return ln.amount if ln is not None else 0.0


def _with_standard_amount(params: SimulationParams, amount: float) -> tuple:
    return tuple(replace(ln, amount=amount) if ln.id == STANDARD_LOAN_ID else ln for ln in params.loans)


def with_property_price(params: SimulationParams, price: float) -> SimulationParams:
    """New price: re-derive notary fees (same percent) and the standard loan."""
    std = standard_loan_amount(
        price,
        params.personal_contribution,
        _loan_amount(params, PTZ_LOAN_ID),
        _loan_amount(params, BOOST_LOAN_ID),
    )
    return replace(
        params,
        property_price=float(price),
        notary_fees=float(notary_fees(price, params.notary_fees_percent)),
        loans=_with_standard_amount(params, std),
    )


def with_personal_contribution(params: SimulationParams, contribution: float) -> SimulationParams:
    std = standard_loan_amount(
        params.property_price,
        contribution,
        _loan_amount(params, PTZ_LOAN_ID),
        _loan_amount(params, BOOST_LOAN_ID),
    )
    return replace(
        params,
        personal_contribution=float(contribution),
        loans=_with_standard_amount(params, std),
    )


def with_property_type(params: SimulationParams, property_type: str) -> SimulationParams:
    """Existing property (``ancien``) pays 7.5 % notary fees, a new build 2.5 %."""
    pct = NOTARY_FEES_PERCENT_OLD if property_type == "ancien" else NOTARY_FEES_PERCENT_NEW
    return replace(
        params,
        property_type=property_type,  # type: ignore[arg-type]
        notary_fees_percent=pct,
        notary_fees=float(notary_fees(params.property_price, pct)),
    )


def with_notary_amount(params: SimulationParams, amount: float) -> SimulationParams:
    # Precondition: property_price > 0.
    pct = amount / params.property_price * 100.0
    return replace(params, notary_fees=float(amount), notary_fees_percent=round(pct, 2))


def with_notary_percent(params: SimulationParams, percent: float) -> SimulationParams:
    return replace(
        params,
        notary_fees_percent=float(percent),
        notary_fees=float(notary_fees(params.property_price, percent)),
    )


def with_standard_rate(params: SimulationParams, rate: float) -> SimulationParams:
    loans = tuple(replace(ln, rate=float(rate)) if ln.id == STANDARD_LOAN_ID else ln for ln in params.loans)
    return replace(params, loans=loans)


def with_target_price(params: SimulationParams, target_price: float, years: int) -> SimulationParams:
    """Re-derive the appreciation rate so the property is worth ``target_price`` after ``years``."""
    if years <= 0:
        return params
    rate = appreciation_rate_from_prices(params.property_price, target_price, years)
    return replace(params, property_appreciation=rate)


def holding_years_since(purchase_date, today: _dt.date | None = None) -> int | None:
    """Whole years elapsed since the purchase, when it is a valid target year.

    Returns None for future/unparseable dates or when the rounded duration
    falls outside the simulated 1..25 year range.
    """
    purchased = _parse_date(purchase_date)
    if purchased is None:
        return None
    today = today or _dt.date.today()
    days = (today - purchased).days
    if days <= 0:
        return None
    years = round_half_up(days / 365.25)
    if MIN_HOLDING_YEARS <= years <= MAX_HOLDING_YEARS:
        return years
    return None
