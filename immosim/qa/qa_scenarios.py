#!/usr/bin/env python3
"""Lightweight QA harness for the buy-vs-rent simulator.

Goal: catch regressions early (crashes, NaNs, broken series shape) across the
main scenario toggles (deferred loans, appreciation, rent inflation, custom
expenses, cash purchase, ...).

Run:
  python -m immosim.qa.qa_scenarios

This is NOT a proof of correctness; it is a guardrail for release stability.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure repo root is on sys.path regardless of where this script is invoked from.
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

import numpy as np


def _check_series(name: str, result) -> None:
    from dataclasses import replace

    monthly = result.monthly_data
    yearly = result.yearly_data
    if len(monthly) != 300 or len(yearly) != 25:
        raise RuntimeError(f"Scenario '{name}' produced {len(monthly)} monthly / {len(yearly)} yearly points")

    months = [p.month for p in monthly]
    if months != list(range(1, 301)):
        raise RuntimeError(f"Scenario '{name}' months are not 1..300 in order")

    for i, yp in enumerate(yearly):
        src = monthly[(i + 1) * 12 - 1]
        if yp.year != i + 1 or not isinstance(yp.year, int) or yp != replace(src, year=i + 1):
            raise RuntimeError(f"Scenario '{name}' yearly point {i} does not mirror month {src.month}")

    df = result.to_frame()
    values = df.to_numpy(dtype=float)
    if not np.isfinite(values).all():
        raise RuntimeError(f"Scenario '{name}' produced non-finite values")

    debt = df["Debt Remaining"].to_numpy()
    if (debt < 0).any():
        raise RuntimeError(f"Scenario '{name}' produced negative remaining debt")
    if (np.diff(debt) > 0).any():
        raise RuntimeError(f"Scenario '{name}' remaining debt increased over time")

    sunk = df["Sunk Costs"].to_numpy()
    if (np.diff(sunk) < 0).any():
        raise RuntimeError(f"Scenario '{name}' sunk costs decreased over time")


def main(argv: list[str] | None = None) -> None:
    from dataclasses import replace

    from immosim.core import purchase_derivations as pdv
    from immosim.core.defaults import default_params
    from immosim.core.engine import simulate
    from immosim.core.models import CustomExpense, Loan
    from immosim.core.outcome import summarize

    base = default_params()

    scenarios = [
        ("Default scenario", base, ()),
        ("Zero appreciation", replace(base, property_appreciation=0.0), ()),
        ("Strong appreciation", replace(base, property_appreciation=3.0), ()),
        ("Negative appreciation", replace(base, property_appreciation=-2.0), ()),
        ("New build", pdv.with_property_type(base, "neuf"), ()),
        ("High standard rate", pdv.with_standard_rate(base, 4.5), ()),
        ("No rent inflation", replace(base, rent_inflation=0.0), ()),
        ("High savings yield", replace(base, savings_rate=8.0), ()),
        (
            "Deferred loan with interest",
            replace(base, loans=base.loans + (Loan("bridge", "Prêt relais", 20_000.0, 3.0, 120, 0.2, 24),)),
            (),
        ),
        ("Cash purchase", replace(pdv.with_personal_contribution(base, base.property_price), loans=()), ()),
        (
            "Custom expenses",
            base,
            (
                CustomExpense("kitchen", "Cuisine", 6_000.0, "initial"),
                CustomExpense("parking", "Parking", 80.0, "monthly"),
                CustomExpense("cfe", "Taxe ordures", 150.0, "yearly"),
            ),
        ),
        ("Target price 350k over 10y", pdv.with_target_price(base, 350_000.0, 10), ()),
    ]

    print("[QA] Running scenarios...")

    for name, params, expenses in scenarios:
        result = simulate(params, expenses)
        _check_series(name, result)

        if params.property_appreciation == 0.0:
            values = {p.property_value for p in result.monthly_data}
            if values != {round(params.property_price)}:
                raise RuntimeError(f"Scenario '{name}' property value drifted with zero appreciation: {sorted(values)[:3]}")

        outcome = summarize(result, 10)
        print(f"  OK: {name} (wealth gap y10={outcome.wealth_difference:,}, owner wins={outcome.is_winner_wealth})")

    print("\n[QA OK] All scenarios completed without exceptions.")


if __name__ == "__main__":
    main()
