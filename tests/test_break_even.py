"""Break-even detection and target-year outcome."""

from __future__ import annotations

import pytest

from immosim.core.break_even import (
    find_break_even_monthly,
    find_break_even_wealth,
    format_break_even_delay,
)
from immosim.core.engine import run_simulation
from immosim.core.models import Loan, SimulationDataPoint, SimulationParams, SimulationResult
from immosim.core.outcome import summarize, target_point


def _point(month: int, owner: int = 0, tenant: int = 0, cost_owner: int = 0, cost_tenant: int = 0) -> SimulationDataPoint:
    return SimulationDataPoint(
        month=month,
        year=month / 12,
        owner_wealth=owner,
        tenant_wealth=tenant,
        monthly_cost_owner=cost_owner,
        monthly_cost_tenant=cost_tenant,
        monthly_interests_earned=0,
        property_value=0,
        net_sale_price=0,
        selling_costs=0,
        debt_remaining=0,
        sunk_costs=0,
    )


@pytest.fixture(scope="module")
def leveraged_result() -> SimulationResult:
    # Owner repays 1 000/month at 0 % with 10 % agency fees; rent is 1 000.
    params = SimulationParams(
        property_price=120_000.0,
        agency_fees_percent=10.0,
        monthly_rent=1_000.0,
        loans=(Loan("std", "Std", 120_000.0, 0.0, 120),),
    )
    return run_simulation(params, 0.0, 0.0, 0.0)


class TestFindBreakEven:
    def test_wealth_first_month_reaching_tenant(self) -> None:
        data = [_point(1, owner=5, tenant=10), _point(2, owner=10, tenant=10), _point(3, owner=20, tenant=10)]
        assert find_break_even_wealth(data).month == 2

    def test_monthly_first_month_at_or_below_rent(self) -> None:
        data = [_point(1, cost_owner=900, cost_tenant=800), _point(2, cost_owner=800, cost_tenant=800)]
        assert find_break_even_monthly(data).month == 2

    def test_never(self) -> None:
        data = [_point(m, owner=0, tenant=1, cost_owner=2, cost_tenant=1) for m in range(1, 301)]
        assert find_break_even_wealth(data) is None
        assert find_break_even_monthly(data) is None

    def test_empty(self) -> None:
        assert find_break_even_wealth([]) is None

    def test_engine_scenario(self, leveraged_result) -> None:
        assert find_break_even_wealth(leveraged_result.monthly_data).month == 12
        assert find_break_even_monthly(leveraged_result.monthly_data).month == 12


class TestFormatDelay:
    def test_years_and_months(self) -> None:
        assert format_break_even_delay(_point(87)) == "7 ans et 3 mois"

    def test_whole_years(self) -> None:
        assert format_break_even_delay(_point(24)) == "2 ans et 0 mois"

    def test_never(self) -> None:
        assert format_break_even_delay(None) == "Jamais"


class TestTargetPoint:
    def test_end_of_target_year(self, leveraged_result) -> None:
        assert target_point(leveraged_result, 4).month == 48

    @pytest.mark.parametrize("year", [0, 26, 100])
    def test_out_of_range_falls_back_to_last(self, leveraged_result, year: int) -> None:
        assert target_point(leveraged_result, year).month == 300


class TestSummarize:
    def test_before_break_even(self, leveraged_result) -> None:
        outcome = summarize(leveraged_result, 0)
        assert outcome.point.month == 300

        early = summarize(SimulationResult(monthly_data=leveraged_result.monthly_data[:11]), 1)
        assert early.point.month == 11
        assert early.is_winner_wealth is False
        assert early.wealth_difference == -1_000
        assert early.break_even_wealth is None

    def test_after_break_even(self, leveraged_result) -> None:
        outcome = summarize(leveraged_result, 4)
        # 48 000 repaid minus 12 000 of selling costs; tenant has 0.
        assert outcome.point.owner_wealth == 36_000
        assert outcome.is_winner_wealth is True
        assert outcome.wealth_difference == 36_000
        assert outcome.break_even_wealth.month == 12

    def test_monthly_comparison(self, leveraged_result) -> None:
        outcome = summarize(leveraged_result, 4)
        # 12 000 / 48 = 250 vs 1 000 of rent.
        assert outcome.point.monthly_cost_owner == 250
        assert outcome.is_winner_monthly is True
        assert outcome.monthly_cost_difference == 750
