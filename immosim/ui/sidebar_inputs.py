"""Sidebar input module for the buy-vs-rent simulator.

Functions
---------
render_sidebar(st_module)
    Render the sidebar widgets and return the scenario (params, custom
    expenses) and view options used by ``app.py``.

Scenario state lives in ``st.session_state`` for the browser session only;
nothing is written to disk. Coupled fields (notary fees, standard loan amount,
appreciation vs target sale price) are re-derived through
``immosim.core.purchase_derivations`` each time the user edits one of them.
"""

from __future__ import annotations

import datetime
import uuid
from dataclasses import replace
from typing import Any, Dict, List

from immosim.core import purchase_derivations as pdv
from immosim.core.appreciation import future_price_from_rate, sale_price_bounds
from immosim.core.defaults import (
    DEFAULT_TARGET_YEAR,
    MAX_HOLDING_YEARS,
    MIN_HOLDING_YEARS,
    PRICE_RANGE_MAX,
    PRICE_RANGE_MIN,
    RATE_MAX,
    default_params,
)
from immosim.core.expenses import aggregate_expenses
from immosim.core.models import EXPENSE_TYPES, CustomExpense, SimulationParams

from .formatters import format_currency

_PARAMS_KEY = "immosim_params"
_EXPENSES_KEY = "immosim_custom_expenses"
_TARGET_YEAR_KEY = "immosim_target_year"
_TARGET_PRICE_KEY = "immosim_target_price"

_EXPENSE_LABELS = {"initial": "Ponctuelle", "monthly": "Mensuelle", "yearly": "Annuelle"}


def _money(sb: Any, label: str, value: float, *, step: float = 100.0, max_value: float = 10_000_000.0) -> float:
    return float(
        sb.number_input(label, min_value=0.0, max_value=max_value, value=float(value), step=step, format="%.0f")
    )


def _render_loans(sb: Any, params: SimulationParams) -> SimulationParams:
    sb.header("Financement")
    contribution = _money(sb, "Apport personnel (€)", params.personal_contribution, step=1_000.0)
    if contribution != params.personal_contribution:
        params = pdv.with_personal_contribution(params, contribution)

    loans = []
    for ln in params.loans:
        box = sb.expander(ln.name, expanded=(ln.id == pdv.STANDARD_LOAN_ID))
        if ln.id == pdv.STANDARD_LOAN_ID:
            box.caption(f"Montant calculé : {format_currency(ln.amount)} €")
            amount = ln.amount
        else:
            amount = _money(box, f"Montant {ln.name} (€)", ln.amount, step=500.0)
        rate = float(
            box.number_input(
                f"Taux {ln.name} (%)", min_value=0.0, max_value=RATE_MAX, value=float(ln.rate), step=0.01, format="%.2f"
            )
        )
        duration = int(
            box.number_input(f"Durée {ln.name} (mois)", min_value=1, max_value=420, value=int(ln.duration_months), step=12)
        )
        deferred = int(
            box.number_input(
                f"Différé {ln.name} (mois)", min_value=0, max_value=duration - 1, value=min(int(ln.deferred_months), duration - 1), step=12
            )
        )
        insurance = float(
            box.number_input(
                f"Assurance {ln.name} (%/an)", min_value=0.0, max_value=2.0, value=float(ln.insurance_rate), step=0.01, format="%.2f"
            )
        )
        loans.append(
            replace(ln, amount=amount, rate=rate, duration_months=duration, deferred_months=deferred, insurance_rate=insurance)
        )

    subsidised_changed = any(new.amount != old.amount for new, old in zip(loans, params.loans))
    params = replace(params, loans=tuple(loans))
    if subsidised_changed:
        # Subsidised loan amounts feed the standard loan.
        params = pdv.with_personal_contribution(params, params.personal_contribution)
    return params


def _render_expenses(sb: Any, params: SimulationParams, expenses: List[CustomExpense]) -> tuple[SimulationParams, List[CustomExpense]]:
    sb.header("Charges")
    params = replace(
        params,
        renovation_cost=_money(sb, "Travaux (€)", params.renovation_cost, step=500.0),
        property_tax=_money(sb, "Taxe foncière (€/an)", params.property_tax, step=50.0),
        condo_fees=_money(sb, "Charges de copropriété (€/mois)", params.condo_fees, step=10.0),
        monthly_extra_costs=_money(sb, "Autres charges mensuelles (€)", params.monthly_extra_costs, step=10.0),
        yearly_extra_costs=_money(sb, "Autres charges annuelles (€)", params.yearly_extra_costs, step=50.0),
    )

    form = sb.form("add_custom_expense", clear_on_submit=True)
    name = form.text_input("Nouvelle dépense")
    amount = _money(form, "Montant (€)", 0.0, step=10.0)
    etype = form.selectbox("Type", options=list(EXPENSE_TYPES), format_func=lambda t: _EXPENSE_LABELS[t])
    if form.form_submit_button("Ajouter") and name and amount > 0:
        expenses = expenses + [CustomExpense(id=uuid.uuid4().hex, name=name, amount=amount, type=etype)]

    for e in list(expenses):
        col_a, col_b = sb.columns([4, 1])
        col_a.write(f"{e.name} · {format_currency(e.amount)} € ({_EXPENSE_LABELS.get(e.type, e.type)})")
        if col_b.button("✕", key=f"rm_{e.id}"):
            expenses = [x for x in expenses if x.id != e.id]

    totals = aggregate_expenses(params, expenses)
    sb.caption(f"Total charges annualisées : {format_currency(round(totals.annualized))} €")
    return params, expenses


def _render_sale_target(sb: Any, params: SimulationParams, target_year: int, target_price: int) -> tuple[SimulationParams, int, int]:
    """Holding years and target sale price.

    The target sale price is what the user pins: a new holding duration keeps
    it and re-derives the appreciation rate, and so does moving the price
    slider. Nothing is re-derived on a rerun where neither widget moved.
    """
    new_year = int(sb.slider("Durée de détention (années)", MIN_HOLDING_YEARS, MAX_HOLDING_YEARS, target_year))
    if new_year != target_year:
        params = pdv.with_target_price(params, target_price, new_year)
        target_year = new_year

    lo, hi = sale_price_bounds(params.property_price)
    start = min(max(int(target_price), lo), hi)
    picked = int(sb.slider("Prix de revente visé (€)", lo, hi, start, step=1_000))
    if picked != start:
        target_price = picked
        params = pdv.with_target_price(params, target_price, target_year)
    return params, target_year, target_price


def render_sidebar(st_module: Any) -> Dict[str, Any]:
    """Render all sidebar controls.

    Returns
    -------
    Dict[str, Any]
        ``params`` (SimulationParams), ``custom_expenses`` (list),
        ``target_year`` (int), ``graph_scale`` ("years"/"months"),
        ``log_y`` (bool) and ``view`` ("wealth"/"monthly").
    """
    state = st_module.session_state
    params: SimulationParams = state.get(_PARAMS_KEY) or default_params()
    expenses: List[CustomExpense] = list(state.get(_EXPENSES_KEY) or [])
    target_year = int(state.get(_TARGET_YEAR_KEY) or DEFAULT_TARGET_YEAR)
    target_price = state.get(_TARGET_PRICE_KEY)

    sb = st_module.sidebar
    sb.title("Simulateur Achat vs Location")
    if sb.button("Réinitialiser"):
        params, expenses, target_year = default_params(), [], DEFAULT_TARGET_YEAR
        target_price = None
    if target_price is None:
        target_price = future_price_from_rate(params.property_price, params.property_appreciation, target_year)

    # ── Acquisition ─────────────────────────────────────────────────────────
    sb.header("Acquisition")
    purchase_date = sb.date_input("Date d'achat", value=pdv._parse_date(params.purchase_date) or datetime.date.today())
    if purchase_date.isoformat() != params.purchase_date:
        params = replace(params, purchase_date=purchase_date.isoformat())
        held = pdv.holding_years_since(purchase_date)
        if held is not None:
            target_year = held

    ptype = sb.radio(
        "Type de bien",
        options=["ancien", "neuf"],
        index=0 if params.property_type == "ancien" else 1,
        format_func=lambda t: "Ancien" if t == "ancien" else "Neuf",
        horizontal=True,
    )
    if ptype != params.property_type:
        params = pdv.with_property_type(params, ptype)

    price = float(
        sb.slider("Prix du bien (€)", min_value=PRICE_RANGE_MIN, max_value=PRICE_RANGE_MAX, value=int(params.property_price), step=1_000)
    )
    if price != params.property_price:
        params = pdv.with_property_price(params, price)

    notary_pct = float(
        sb.number_input("Frais de notaire (%)", min_value=0.0, max_value=15.0, value=float(params.notary_fees_percent), step=0.1, format="%.2f")
    )
    if notary_pct != params.notary_fees_percent:
        params = pdv.with_notary_percent(params, notary_pct)
    sb.caption(f"Frais de notaire : {format_currency(params.notary_fees)} €")

    params = _render_loans(sb, params)
    params, expenses = _render_expenses(sb, params, expenses)

    # ── Location ────────────────────────────────────────────────────────────
    sb.header("Scénario location")
    params = replace(
        params,
        monthly_rent=_money(sb, "Loyer mensuel évité (€)", params.monthly_rent, step=10.0),
        savings_rate=float(sb.number_input("Rendement épargne (%/an)", 0.0, 15.0, float(params.savings_rate), 0.1, format="%.1f")),
        rent_inflation=float(sb.number_input("Inflation des loyers (%/an)", 0.0, 10.0, float(params.rent_inflation), 0.1, format="%.1f")),
    )

    # ── Revente ─────────────────────────────────────────────────────────────
    sb.header("Revente")
    params, target_year, target_price = _render_sale_target(sb, params, target_year, target_price)
    sb.caption(f"Appréciation annuelle : {params.property_appreciation:+.2f} %")
    params = replace(
        params,
        agency_fees_percent=float(sb.number_input("Frais d'agence (%)", 0.0, 10.0, float(params.agency_fees_percent), 0.5, format="%.1f")),
        sale_diagnostics=_money(sb, "Diagnostics de vente (€)", params.sale_diagnostics, step=50.0),
    )

    # ── Affichage ───────────────────────────────────────────────────────────
    sb.header("Affichage")
    view = sb.radio("Vue", options=["wealth", "monthly"], format_func=lambda v: "Patrimoine" if v == "wealth" else "Coût mensuel")
    graph_scale = sb.radio("Échelle", options=["years", "months"], format_func=lambda s: "Années" if s == "years" else "Mois")
    log_y = bool(sb.checkbox("Échelle logarithmique", value=False))

    state[_PARAMS_KEY] = params
    state[_EXPENSES_KEY] = expenses
    state[_TARGET_YEAR_KEY] = target_year
    state[_TARGET_PRICE_KEY] = target_price

    return {
        "params": params,
        "custom_expenses": expenses,
        "target_year": target_year,
        "graph_scale": graph_scale,
        "log_y": log_y,
        "view": view,
    }
