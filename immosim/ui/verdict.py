"""Verdict texts for the buy-vs-rent result card.

Text building is kept separate from rendering so it can be tested without
Streamlit; :func:`render_verdict` only pushes the texts to the page.
"""

from __future__ import annotations

from typing import Any, Dict

from immosim.core.break_even import format_break_even_delay
from immosim.core.outcome import Outcome

from .formatters import format_currency


def wealth_verdict(outcome: Outcome) -> Dict[str, str]:
    """Headline, explanation and break-even line for the wealth view."""
    diff = outcome.wealth_difference
    headline = f"{'+' if diff > 0 else ''}{format_currency(diff)} €"
    if outcome.is_winner_wealth:
        detail = "Vous êtes plus riche que si vous étiez resté locataire."
        be_line = "Rentabilité atteinte"
    else:
        detail = "Votre patrimoine serait plus élevé en restant locataire."
        be = outcome.break_even_wealth
        if be is not None:
            be_line = f"Rentable à partir de l'année {be.year:g} (Mois {be.month})"
        else:
            be_line = "Jamais rentable sur 25 ans"
    return {"headline": headline, "detail": detail, "break_even": be_line}


def monthly_verdict(outcome: Outcome) -> Dict[str, str]:
    """Headline, gap and break-even delay for the monthly-cost view."""
    point = outcome.point
    sign = "+" if outcome.is_winner_monthly else "-"
    return {
        "headline": f"{format_currency(point.monthly_cost_owner)} €",
        "gap": f"{sign}{format_currency(outcome.monthly_cost_difference)} €",
        "break_even": format_break_even_delay(outcome.break_even_monthly),
        "detail": f"Basé sur un loyer de {format_currency(point.monthly_cost_tenant)} €",
    }


def render_verdict(outcome: Outcome, st_module: Any, view: str = "wealth") -> None:
    """Render the verdict card for ``view`` (``"wealth"`` or ``"monthly"``)."""
    if view == "monthly":
        texts = monthly_verdict(outcome)
        winner = outcome.is_winner_monthly
        st_module.metric("Coût mensuel propriétaire", texts["headline"], texts["gap"])
        st_module.caption(f"Rentable : {texts['break_even']}")
    else:
        texts = wealth_verdict(outcome)
        winner = outcome.is_winner_wealth
        st_module.metric("Gain net / location", texts["headline"])
        st_module.caption(texts["break_even"])

    if winner:
        st_module.success(texts["detail"])
    else:
        st_module.error(texts["detail"])
