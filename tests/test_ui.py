"""UI helpers: formatters, chart builders and verdict texts."""

from __future__ import annotations

import math

import pytest

from immosim.core.defaults import default_params
from immosim.core.engine import simulate
from immosim.core.models import Loan, SimulationParams
from immosim.core.outcome import summarize
from immosim.ui.charts import build_simulation_figure, render_simulation_chart
from immosim.ui.formatters import (
    format_axis_value,
    format_currency,
    format_percent_with_sign,
    parse_number_input,
)
from immosim.ui.verdict import monthly_verdict, render_verdict, wealth_verdict

NNBSP = "\u202f"


class _FakeStreamlit:
    """Records calls made on the Streamlit module."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def __getattr__(self, name):
        def _record(*args, **kwargs):
            self.calls.append((name, args, kwargs))

        return _record

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]


@pytest.fixture(scope="module")
def default_result():
    return simulate(default_params())


@pytest.fixture(scope="module")
def leveraged_result():
    params = SimulationParams(
        property_price=120_000.0,
        agency_fees_percent=10.0,
        monthly_rent=1_000.0,
        loans=(Loan("std", "Std", 120_000.0, 0.0, 120),),
    )
    return simulate(params)


class TestFormatters:
    def test_currency_groups_thousands(self) -> None:
        assert format_currency(1_234_567) == f"1{NNBSP}234{NNBSP}567"

    def test_currency_small_and_negative(self) -> None:
        assert format_currency(0) == "0"
        assert format_currency(-4_500) == f"-4{NNBSP}500"

    def test_currency_decimals(self) -> None:
        assert format_currency(1_234.5) == f"1{NNBSP}234,5"

    @pytest.mark.parametrize("value, text", [(12_000, "12k"), (1_500, "2k"), (1_000, "1000"), (250.0, "250"), (0.5, "0.5")])
    def test_axis_value(self, value: float, text: str) -> None:
        assert format_axis_value(value) == text

    def test_percent_with_sign(self) -> None:
        assert format_percent_with_sign(2.5) == "+2.50%"
        assert format_percent_with_sign(-1.234, 1) == "-1.2%"
        assert format_percent_with_sign(0.0) == "0.00%"

    @pytest.mark.parametrize("raw, value", [("250 000", 250_000.0), (" 1 200.5 ", 1_200.5), ("", 0.0), ("abc", 0.0), ("nan", 0.0)])
    def test_parse_number_input(self, raw: str, value: float) -> None:
        assert parse_number_input(raw) == value


class TestCharts:
    def test_wealth_years(self, default_result) -> None:
        fig = build_simulation_figure(default_result, view="wealth", scale="years")
        assert [t.name for t in fig.data] == ["Propriétaire", "Locataire"]
        assert len(fig.data[0].x) == 25
        assert list(fig.data[0].y) == [p.owner_wealth for p in default_result.yearly_data]

    def test_monthly_view_in_months(self, default_result) -> None:
        fig = build_simulation_figure(default_result, view="monthly", scale="months")
        assert [t.name for t in fig.data] == ["Coût Propriétaire", "Coût Locataire"]
        assert len(fig.data[1].x) == 300

    def test_log_scale_masks_non_positive(self, leveraged_result) -> None:
        fig = build_simulation_figure(leveraged_result, view="wealth", scale="months", log_y=True)
        assert fig.layout.yaxis.type == "log"
        owner = list(fig.data[0].y)
        # Owner wealth is negative before month 12.
        assert all(math.isnan(v) for v in owner[:11])
        assert owner[20] == pytest.approx(9_000)

    def test_target_year_marker(self, default_result) -> None:
        fig = build_simulation_figure(default_result, scale="months", target_year=4)
        assert any(getattr(s, "x0", None) == 48 for s in fig.layout.shapes)

    def test_render_hands_figure_to_streamlit(self, default_result) -> None:
        st = _FakeStreamlit()
        fig = render_simulation_chart(default_result, st, view="wealth")
        assert st.names() == ["plotly_chart"]
        assert st.calls[0][1][0] is fig


class TestVerdict:
    def test_wealth_owner_wins(self, leveraged_result) -> None:
        texts = wealth_verdict(summarize(leveraged_result, 4))
        assert texts["headline"] == f"+36{NNBSP}000 €"
        assert texts["break_even"] == "Rentabilité atteinte"

    def test_wealth_tenant_wins_with_later_break_even(self, leveraged_result) -> None:
        from immosim.core.break_even import find_break_even_monthly, find_break_even_wealth
        from immosim.core.outcome import Outcome

        monthly = leveraged_result.monthly_data
        outcome = Outcome(
            target_year=1,
            point=monthly[5],
            is_winner_wealth=False,
            is_winner_monthly=False,
            break_even_wealth=find_break_even_wealth(monthly),
            break_even_monthly=find_break_even_monthly(monthly),
        )
        texts = wealth_verdict(outcome)
        assert texts["headline"] == f"-6{NNBSP}000 €"
        assert texts["break_even"] == "Rentable à partir de l'année 1 (Mois 12)"

    def test_wealth_never(self) -> None:
        result = simulate(
            SimulationParams(property_price=100_000.0, personal_contribution=100_000.0, agency_fees_percent=10.0)
        )
        texts = wealth_verdict(summarize(result, 4))
        assert texts["break_even"] == "Jamais rentable sur 25 ans"

    def test_monthly(self, leveraged_result) -> None:
        texts = monthly_verdict(summarize(leveraged_result, 4))
        assert texts["headline"] == "250 €"
        assert texts["gap"] == "+750 €"
        assert texts["break_even"] == "1 ans et 0 mois"
        assert texts["detail"] == f"Basé sur un loyer de 1{NNBSP}000 €"

    def test_render_uses_success_or_error(self, leveraged_result) -> None:
        st = _FakeStreamlit()
        render_verdict(summarize(leveraged_result, 4), st, view="monthly")
        assert st.names() == ["metric", "caption", "success"]

        st = _FakeStreamlit()
        render_verdict(summarize(leveraged_result, 1), st, view="wealth")
        assert st.names() == ["metric", "caption", "error"]
