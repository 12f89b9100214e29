"""Buy-vs-rent simulation engine.

Pure, synchronous and deterministic: the same inputs always produce the same
:class:`SimulationResult`. No Streamlit calls and no caching; callers that need
memoization wrap :func:`run_simulation` themselves (the Streamlit app uses
``st.cache_data``).

All accumulators keep full float precision over the whole horizon; rounding
happens only when a :class:`SimulationDataPoint` is built.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from .appreciation import monthly_appreciation_rate
from .defaults import MAX_SIMULATION_MONTHS, MONTHS_PER_YEAR
from .expenses import aggregate_expenses
from .models import (
    CustomExpense,
    SimulationDataPoint,
    SimulationParams,
    SimulationResult,
    round_half_up,
)
from .mortgage import initialize_loan_states, monthly_rate


def _year_label(m: int) -> float:
    # One decimal, halves rounded up (m=3 -> 0.3).
    return round_half_up(m / MONTHS_PER_YEAR * 10.0) / 10.0


def run_simulation(
    params: SimulationParams,
    total_initial_expenses: float,
    total_monthly_expenses: float,
    total_yearly_expenses: float,
) -> SimulationResult:
    """Project owner vs tenant outcomes month by month over 300 months.

    The tenant starts with the cash the owner put into the purchase (personal
    contribution, notary fees and initial expenses) and invests each month the
    difference between the owner's outflow and the rent.

    Args:
        params: Scenario parameters.
        total_initial_expenses: Renovation + one-off custom expenses.
        total_monthly_expenses: Monthly extra costs + monthly custom expenses.
        total_yearly_expenses: Yearly extra costs + yearly custom expenses.

    Returns:
        300 monthly points (months 1..300) and 25 yearly points (months 12, 24, ..., 300).
    """
    monthly_data: list[SimulationDataPoint] = []
    yearly_data: list[SimulationDataPoint] = []

    c_value = float(params.property_price)
    c_rent = float(params.monthly_rent)

    tenant_savings = params.personal_contribution + params.notary_fees + total_initial_expenses
    cum_tenant_interest = 0.0
    cum_owner_cost = params.notary_fees + total_initial_expenses
    cum_running_cost = 0.0
    cum_rent = 0.0

    loans = initialize_loan_states(params.loans)

    apprec_mo = monthly_appreciation_rate(params.property_appreciation)
    savings_mo = params.savings_rate / 100.0 / MONTHS_PER_YEAR
    total_acquisition = params.property_price + params.notary_fees + total_initial_expenses
    fixed_monthly_charges = (
        params.property_tax / MONTHS_PER_YEAR
        + params.condo_fees
        + total_monthly_expenses
        + total_yearly_expenses / MONTHS_PER_YEAR
    )

    for m in range(1, MAX_SIMULATION_MONTHS + 1):
        c_value *= 1.0 + apprec_mo

        # Rent is indexed once a year, starting with month 13.
        if m > 1 and (m - 1) % MONTHS_PER_YEAR == 0:
            c_rent *= 1.0 + params.rent_inflation / 100.0
        cum_rent += c_rent

        princ = 0.0
        inte = 0.0
        ins = 0.0
        for ln in loans:
            # Insurance is charged on the original amount every month, even once
            # the loan is repaid or past its duration.
            ins += ln.amount * (ln.insurance_rate / 100.0) / MONTHS_PER_YEAR

            if m > ln.duration_months:
                continue
            mr = monthly_rate(ln.rate)
            if m <= ln.deferred_months:
                # Deferment: interim interest only, capital untouched.
                if ln.rate > 0 and ln.deferred_months > 0:
                    inte += ln.remaining_capital * mr
            elif ln.remaining_capital > 0:
                interest = ln.remaining_capital * mr
                principal = ln.monthly_payment - interest
                ln.remaining_capital = max(ln.remaining_capital - principal, 0.0)
                inte += interest
                princ += principal

        debt = sum(ln.remaining_capital for ln in loans)

        sunk = inte + ins + fixed_monthly_charges
        cum_running_cost += sunk
        cum_owner_cost += sunk

        owner_out = sunk + princ
        tenant_out = c_rent
        gap = owner_out - tenant_out

        # Interest on the existing balance first, then this month's contribution.
        if tenant_savings > 0:
            earned = tenant_savings * savings_mo
            cum_tenant_interest += earned
            tenant_savings += earned
        tenant_savings += gap

        sell_cost = c_value * params.agency_fees_percent / 100.0 + params.sale_diagnostics
        owner_nw = c_value - sell_cost - debt

        total_cost_abs = total_acquisition + cum_running_cost + sell_cost - c_value

        point = SimulationDataPoint(
            month=m,
            year=_year_label(m),
            owner_wealth=round_half_up(owner_nw),
            tenant_wealth=round_half_up(tenant_savings),
            monthly_cost_owner=round_half_up(total_cost_abs / m),
            monthly_cost_tenant=round_half_up(cum_rent / m),
            monthly_interests_earned=round_half_up(cum_tenant_interest / m),
            property_value=round_half_up(c_value),
            net_sale_price=round_half_up(c_value - sell_cost),
            selling_costs=round_half_up(sell_cost),
            debt_remaining=round_half_up(debt),
            sunk_costs=round_half_up(cum_owner_cost),
        )
        monthly_data.append(point)

        if m % MONTHS_PER_YEAR == 0:
            yearly_data.append(replace(point, year=m // MONTHS_PER_YEAR))

    return SimulationResult(monthly_data=monthly_data, yearly_data=yearly_data)


def simulate(params: SimulationParams, custom_expenses: Iterable[CustomExpense] = ()) -> SimulationResult:
    """Aggregate expenses for ``params`` and run the simulation."""
    totals = aggregate_expenses(params, custom_expenses)
    return run_simulation(
        params,
        total_initial_expenses=totals.initial,
        total_monthly_expenses=totals.monthly,
        total_yearly_expenses=totals.yearly,
    )
