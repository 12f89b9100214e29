#!/usr/bin/env python3
"""Quick smoke checks for the buy-vs-rent simulator.

Run:
  python -m immosim.qa.smoke_check
"""

from __future__ import annotations
import sys
from pathlib import Path

# Ensure repo root is on sys.path regardless of where this script is invoked from.
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

import os
import compileall


def die(msg: str, code: int = 1) -> None:
    print(f"\n[SMOKE CHECK FAILED] {msg}\n")
    raise SystemExit(code)


def main(argv: list[str] | None = None) -> None:
    root = str(_REPO_ROOT)

    app_py = os.path.join(root, "app.py")
    pkg_dir = os.path.join(root, "immosim")

    if not os.path.exists(app_py):
        die("app.py not found (run from the repository root).")

    if not compileall.compile_file(app_py, quiet=1):
        die("app.py failed to compile.")
    if not compileall.compile_dir(pkg_dir, quiet=1):
        die("immosim/ package failed to compile.")

    try:
        from immosim.core.defaults import default_params
        from immosim.core.engine import simulate
        from immosim.core.models import CustomExpense
        from immosim.core.outcome import summarize
    except Exception as e:
        die(f"Import failure: {e}")

    params = default_params()
    expenses = [
        CustomExpense(id="furniture", name="Meubles", amount=3_000.0, type="initial"),
        CustomExpense(id="insurance", name="Assurance habitation", amount=15.0, type="monthly"),
    ]

    try:
        result = simulate(params, expenses)
    except Exception as e:
        die(f"Simulation failed: {e}")

    if len(result.monthly_data) != 300 or len(result.yearly_data) != 25:
        die(f"Unexpected series lengths: {len(result.monthly_data)} monthly, {len(result.yearly_data)} yearly.")

    df = result.to_frame(yearly=True)
    if df.empty or df.isna().any().any():
        die("Yearly frame is empty or contains NaN.")

    outcome = summarize(result, 4)

    print("\n[SMOKE CHECK OK]")
    print(f"Monthly rows: {len(result.monthly_data)}")
    print(f"Wealth gap at year 4: {outcome.wealth_difference:,}")
    be = outcome.break_even_wealth
    print(f"Wealth break-even month: {be.month if be is not None else 'never'}\n")


if __name__ == "__main__":
    main()
