"""Sidebar state handling, driven through a stand-in Streamlit module."""

from __future__ import annotations

from dataclasses import replace

import pytest

from immosim.core.appreciation import appreciation_rate_from_prices, future_price_from_rate
from immosim.core.defaults import default_params
from immosim.ui.sidebar_inputs import render_sidebar


class _StreamlitStub:
    """Widgets return their initial value unless ``picks`` overrides them by label."""

    def __init__(self, session_state: dict, picks: dict | None = None) -> None:
        self.session_state = session_state
        self.picks = picks or {}

    @property
    def sidebar(self) -> "_StreamlitStub":
        return self

    def _pick(self, label: str, default):
        return self.picks.get(label, default)

    def title(self, *args, **kwargs) -> None:
        pass

    header = caption = write = title

    def button(self, label: str, **kwargs) -> bool:
        return self._pick(label, False)

    def form_submit_button(self, label: str, **kwargs) -> bool:
        return False

    def date_input(self, label: str, value):
        return self._pick(label, value)

    def radio(self, label: str, options, index: int = 0, **kwargs):
        return self._pick(label, options[index])

    def selectbox(self, label: str, options, **kwargs):
        return self._pick(label, options[0])

    def checkbox(self, label: str, value: bool = False):
        return self._pick(label, value)

    def text_input(self, label: str, **kwargs) -> str:
        return self._pick(label, "")

    def slider(self, label: str, *args, **kwargs):
        return self._pick(label, kwargs.get("value", args[2] if len(args) > 2 else None))

    def number_input(self, label: str, *args, **kwargs):
        return self._pick(label, kwargs.get("value", args[2] if len(args) > 2 else None))

    def expander(self, *args, **kwargs) -> "_StreamlitStub":
        return self

    form = expander

    def columns(self, spec) -> list:
        return [self for _ in spec]


def _state(params, target_year: int, target_price: int | None = None) -> dict:
    state = {"immosim_params": params, "immosim_target_year": target_year}
    if target_price is not None:
        state["immosim_target_price"] = target_price
    return state


class TestUntouchedRerun:
    def test_default_scenario_unchanged(self) -> None:
        params = default_params()
        ui = render_sidebar(_StreamlitStub(_state(params, 4)))
        assert ui["params"] == params
        assert ui["target_year"] == 4

    def test_target_price_beyond_slider_range_keeps_rate(self) -> None:
        # 3 %/year over 25 years ends above 1.6x the price, outside the slider range.
        params = replace(default_params(), property_appreciation=3.0)
        state = _state(params, 25)
        for _ in range(2):
            ui = render_sidebar(_StreamlitStub(state))
            assert ui["params"].property_appreciation == 3.0
        assert state["immosim_target_price"] == future_price_from_rate(286_000, 3.0, 25)


class TestSaleTarget:
    def test_year_change_keeps_target_price(self) -> None:
        params = replace(default_params(), property_appreciation=2.0)
        target = future_price_from_rate(286_000, 2.0, 10)
        state = _state(params, 10, target)

        ui = render_sidebar(_StreamlitStub(state, {"Durée de détention (années)": 20}))

        assert ui["target_year"] == 20
        assert state["immosim_target_price"] == target
        assert ui["params"].property_appreciation == pytest.approx(appreciation_rate_from_prices(286_000, target, 20))
        assert ui["params"].property_appreciation < 2.0

    def test_moving_price_slider_rederives_rate(self) -> None:
        state = _state(default_params(), 4)

        ui = render_sidebar(_StreamlitStub(state, {"Prix de revente visé (€)": 400_000}))

        assert state["immosim_target_price"] == 400_000
        assert ui["params"].property_appreciation == pytest.approx(appreciation_rate_from_prices(286_000, 400_000, 4))

    def test_reset_clears_target_price(self) -> None:
        state = _state(replace(default_params(), property_appreciation=5.0), 12, 500_000)

        ui = render_sidebar(_StreamlitStub(state, {"Réinitialiser": True}))

        assert ui["params"].property_appreciation == 0.0
        assert state["immosim_target_price"] == 286_000


def test_subsidised_loan_edit_updates_standard_loan() -> None:
    state = _state(default_params(), 4)

    ui = render_sidebar(_StreamlitStub(state, {"Montant PTZ (État) (€)": 50_000.0}))

    loans = {ln.id: ln.amount for ln in ui["params"].loans}
    assert loans["ptz"] == 50_000.0
    assert loans["standard"] == pytest.approx(286_000 - 25_000 - 50_000 - 15_000)
