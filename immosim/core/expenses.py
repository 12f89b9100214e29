"""Expense aggregation: base figures merged with user-defined custom expenses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .defaults import MONTHS_PER_YEAR
from .models import CustomExpense, SimulationParams


def _sum_of_type(custom_expenses: Iterable[CustomExpense], expense_type: str) -> float:
    return sum((e.amount for e in custom_expenses if e.type == expense_type), 0.0)


def total_initial_expenses(renovation_cost: float, custom_expenses: Iterable[CustomExpense]) -> float:
    return renovation_cost + _sum_of_type(custom_expenses, "initial")


def total_monthly_expenses(monthly_extra_costs: float, custom_expenses: Iterable[CustomExpense]) -> float:
    return monthly_extra_costs + _sum_of_type(custom_expenses, "monthly")


def total_yearly_expenses(yearly_extra_costs: float, custom_expenses: Iterable[CustomExpense]) -> float:
    return yearly_extra_costs + _sum_of_type(custom_expenses, "yearly")


def total_annualized_charges(
    condo_fees: float,
    total_monthly: float,
    property_tax: float,
    total_yearly: float,
) -> float:
    """All recurring charges over one year (monthly ones x12, plus yearly ones)."""
    return (condo_fees + total_monthly) * MONTHS_PER_YEAR + (property_tax + total_yearly)


@dataclass(frozen=True)
class ExpenseTotals:
    """Pre-aggregated totals fed to the simulation engine."""

    initial: float
    monthly: float
    yearly: float
    annualized: float


def aggregate_expenses(params: SimulationParams, custom_expenses: Iterable[CustomExpense] = ()) -> ExpenseTotals:
    expenses = tuple(custom_expenses)
    initial = total_initial_expenses(params.renovation_cost, expenses)
    monthly = total_monthly_expenses(params.monthly_extra_costs, expenses)
    yearly = total_yearly_expenses(params.yearly_extra_costs, expenses)
    return ExpenseTotals(
        initial=initial,
        monthly=monthly,
        yearly=yearly,
        annualized=total_annualized_charges(params.condo_fees, monthly, params.property_tax, yearly),
    )
