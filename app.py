"""Streamlit front-end for the buy-vs-rent property simulator.

Run:
  streamlit run app.py
"""

from __future__ import annotations

import json

import streamlit as st

from immosim.core.engine import simulate
from immosim.core.models import CustomExpense, SimulationParams
from immosim.core.outcome import summarize
from immosim.ui.charts import render_simulation_chart
from immosim.ui.formatters import format_currency
from immosim.ui.sidebar_inputs import render_sidebar
from immosim.ui.verdict import render_verdict


# Streamlit reruns the script on every interaction; the engine is pure, so runs
# are shared across sessions keyed on the serialized scenario.
@st.cache_data(show_spinner=False, max_entries=128)
def _cached_simulate(params_json: str, expenses_json: str):
    params = SimulationParams.from_dict(json.loads(params_json))
    expenses = [CustomExpense.from_dict(e) for e in json.loads(expenses_json)]
    return simulate(params, expenses)


st.set_page_config(page_title="Achat vs Location", layout="wide", page_icon="🏠")

ui = render_sidebar(st)
params: SimulationParams = ui["params"]

result = _cached_simulate(
    json.dumps(params.to_dict(), sort_keys=True),
    json.dumps([e.to_dict() for e in ui["custom_expenses"]], sort_keys=True),
)
outcome = summarize(result, ui["target_year"])

st.title("Acheter ou louer ?")
st.caption(f"Horizon de revente : {ui['target_year']} an(s)")

col_card, col_chart = st.columns([1, 2])
with col_card:
    render_verdict(outcome, st, view=ui["view"])
    point = outcome.point
    st.write(f"Valeur du bien : {format_currency(point.property_value)} €")
    st.write(f"Frais de vente : {format_currency(point.selling_costs)} €")
    st.write(f"Capital restant dû : {format_currency(point.debt_remaining)} €")
    st.write(f"Coûts à fonds perdus : {format_currency(point.sunk_costs)} €")
    st.write(f"Intérêts épargne (moy./mois) : {format_currency(point.monthly_interests_earned)} €")

with col_chart:
    render_simulation_chart(
        result,
        st,
        view=ui["view"],
        scale=ui["graph_scale"],
        log_y=ui["log_y"],
        target_year=ui["target_year"],
    )

with st.expander("Détail annuel"):
    st.dataframe(result.to_frame(yearly=True), use_container_width=True, hide_index=True)
