"""Outcome of a simulation at the user's target holding year."""

from __future__ import annotations

from dataclasses import dataclass

from .break_even import find_break_even_monthly, find_break_even_wealth
from .defaults import MONTHS_PER_YEAR
from .models import SimulationDataPoint, SimulationResult


def target_point(result: SimulationResult, target_year: int) -> SimulationDataPoint:
    """Monthly point at the end of ``target_year``; the last point when out of range."""
    idx = int(target_year) * MONTHS_PER_YEAR - 1
    data = result.monthly_data
    if 0 <= idx < len(data):
        return data[idx]
    return data[-1]


@dataclass(frozen=True)
class Outcome:
    """Buy-vs-rent verdict at the target year."""

    target_year: int
    point: SimulationDataPoint
    is_winner_wealth: bool
    is_winner_monthly: bool
    break_even_wealth: SimulationDataPoint | None
    break_even_monthly: SimulationDataPoint | None

    @property
    def wealth_difference(self) -> int:
        return self.point.owner_wealth - self.point.tenant_wealth

    @property
    def monthly_cost_difference(self) -> int:
        return abs(self.point.monthly_cost_owner - self.point.monthly_cost_tenant)


def summarize(result: SimulationResult, target_year: int) -> Outcome:
    point = target_point(result, target_year)
    return Outcome(
        target_year=int(target_year),
        point=point,
        is_winner_wealth=point.owner_wealth > point.tenant_wealth,
        is_winner_monthly=point.monthly_cost_owner < point.monthly_cost_tenant,
        break_even_wealth=find_break_even_wealth(result.monthly_data),
        break_even_monthly=find_break_even_monthly(result.monthly_data),
    )
