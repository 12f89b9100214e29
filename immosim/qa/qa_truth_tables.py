#!/usr/bin/env python3
"""Truth-table QA: small, exact, model-level invariants.

These checks are intentionally numeric and explicit. They exist to prove that:
- Loan payments follow the annuity formula (and the linear zero-rate case).
- Deferment freezes capital and only charges interim interest.
- The tenant's savings compound only while positive.
- Break-even months land exactly where hand arithmetic puts them.

Run:
  python -m immosim.qa.qa_truth_tables
"""

from __future__ import annotations

import math
import sys
from pathlib import Path


# Ensure repo root is on sys.path regardless of where this script is invoked from.
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))


def _die(msg: str, code: int = 1) -> None:
    print(f"\n[TRUTH TABLES FAILED] {msg}\n")
    raise SystemExit(code)


def _assert_close(name: str, got: float, exp: float, *, atol: float = 1e-9, rtol: float = 0.0) -> None:
    try:
        g = float(got)
        e = float(exp)
    except (TypeError, ValueError):
        _die(f"{name}: non-numeric (got={got}, exp={exp})")
    if not (math.isfinite(g) and math.isfinite(e)):
        _die(f"{name}: non-finite (got={g}, exp={e})")
    if abs(g - e) > (atol + rtol * abs(e)):
        _die(f"{name}: got {g:.12g} expected {e:.12g} (atol={atol}, rtol={rtol})")


def _assert_eq(name: str, got, exp) -> None:
    if got != exp:
        _die(f"{name}: got {got!r} expected {exp!r}")


def _pmt(principal: float, mr: float, n: int) -> float:
    if mr <= 0:
        return principal / float(n)
    return principal * (mr * (1.0 + mr) ** n) / ((1.0 + mr) ** n - 1.0)


def _bare(**overrides):
    from immosim.core.models import SimulationParams

    return SimulationParams(property_price=overrides.pop("property_price", 100_000.0), **overrides)


def _run(params):
    from immosim.core.engine import run_simulation

    return run_simulation(params, 0.0, 0.0, 0.0)


def _tt_loan_payments() -> None:
    from immosim.core.mortgage import initialize_loan_states, monthly_payment
    from immosim.core.models import Loan

    _assert_close("TT-L1 zero-rate payment", monthly_payment(200_000.0, 0.0, 240), 200_000.0 / 240.0)
    _assert_close("TT-L2 annuity payment", monthly_payment(200_000.0, 3.0, 240), _pmt(200_000.0, 0.0025, 240), atol=1e-9)
    _assert_close("TT-L2 annuity payment (rounded)", monthly_payment(200_000.0, 3.0, 240), 1109.2, atol=0.15)

    (state,) = initialize_loan_states([Loan("ptz", "PTZ", 75_600.0, 0.0, 240, 0.36, 60)])
    _assert_close("TT-L3 deferred PTZ payment", state.monthly_payment, 420.0)
    _assert_close("TT-L3 initial capital", state.remaining_capital, 75_600.0)


def _tt_deferment() -> None:
    from immosim.core.models import Loan

    # 12 000 at 12 %: interim interest of 120/month during 12 deferred months.
    params = _bare(loans=(Loan("std", "Std", 12_000.0, 12.0, 24, 0.0, 12),))
    monthly = _run(params).monthly_data
    for p in monthly[:12]:
        _assert_eq(f"TT-D1 debt frozen at month {p.month}", p.debt_remaining, 12_000)
    _assert_eq("TT-D2 sunk after deferment", monthly[11].sunk_costs, 1_440)
    _assert_eq("TT-D3 debt repaid at end of duration", monthly[23].debt_remaining, 0)
    _assert_eq("TT-D3 debt stays repaid", monthly[-1].debt_remaining, 0)


def _tt_cash_purchase() -> None:
    # Cash buyer, no costs: owner keeps 100k, tenant drains 500/month of rent.
    params = _bare(personal_contribution=100_000.0, monthly_rent=500.0)
    monthly = _run(params).monthly_data
    _assert_eq("TT-C1 owner wealth", {p.owner_wealth for p in monthly}, {100_000})
    _assert_eq("TT-C2 tenant wealth m1", monthly[0].tenant_wealth, 99_500)
    _assert_eq("TT-C2 tenant wealth m200", monthly[199].tenant_wealth, 0)
    _assert_eq("TT-C2 tenant wealth m300", monthly[299].tenant_wealth, -50_000)
    _assert_eq("TT-C3 owner monthly cost", monthly[0].monthly_cost_owner, 0)


def _tt_break_even() -> None:
    from immosim.core.break_even import find_break_even_monthly, find_break_even_wealth
    from immosim.core.models import Loan

    # Full loan repaid 1 000/month at 0 %, rent 1 000, 10 % agency fees.
    params = _bare(
        property_price=120_000.0,
        agency_fees_percent=10.0,
        monthly_rent=1_000.0,
        loans=(Loan("std", "Std", 120_000.0, 0.0, 120),),
    )
    monthly = _run(params).monthly_data
    _assert_eq("TT-B1 tenant wealth flat", {p.tenant_wealth for p in monthly[:120]}, {0})
    _assert_eq("TT-B2 owner wealth m11", monthly[10].owner_wealth, -1_000)
    be_w = find_break_even_wealth(monthly)
    be_m = find_break_even_monthly(monthly)
    _assert_eq("TT-B3 wealth break-even month", be_w.month if be_w else None, 12)
    _assert_eq("TT-B4 monthly break-even month", be_m.month if be_m else None, 12)


def _tt_savings_compounding() -> None:
    # 12 000 of savings at 12 %/year: 1 % per month, nothing added.
    params = _bare(property_price=12_000.0, personal_contribution=12_000.0, savings_rate=12.0)
    monthly = _run(params).monthly_data
    _assert_eq("TT-S1 interest m1", monthly[0].monthly_interests_earned, 120)
    _assert_eq("TT-S2 tenant wealth m12", monthly[11].tenant_wealth, round(12_000.0 * 1.01**12))

    # Negative balances never earn interest.
    params = _bare(monthly_rent=1_000.0, savings_rate=12.0)
    monthly = _run(params).monthly_data
    _assert_eq("TT-S3 no interest on debt", {p.monthly_interests_earned for p in monthly}, {0})
    _assert_eq("TT-S3 tenant wealth m300", monthly[-1].tenant_wealth, -300_000)


def _tt_rent_inflation_cadence() -> None:
    params = _bare(monthly_rent=1_000.0, rent_inflation=10.0)
    monthly = _run(params).monthly_data
    _assert_eq("TT-R1 average rent m12", monthly[11].monthly_cost_tenant, 1_000)
    _assert_eq("TT-R2 average rent m13", monthly[12].monthly_cost_tenant, 1_008)
    _assert_eq("TT-R3 average rent m24", monthly[23].monthly_cost_tenant, 1_050)


def _tt_insurance_after_payoff() -> None:
    from immosim.core.models import Loan

    # 1 % insurance on 12 000 is 10/month, charged for the whole horizon.
    params = _bare(loans=(Loan("std", "Std", 12_000.0, 0.0, 12, 1.0),))
    monthly = _run(params).monthly_data
    _assert_eq("TT-I1 debt repaid", monthly[11].debt_remaining, 0)
    for p in (monthly[11], monthly[12], monthly[299]):
        _assert_eq(f"TT-I2 sunk costs m{p.month}", p.sunk_costs, 10 * p.month)


def main(argv: list[str] | None = None) -> None:
    _tt_loan_payments()
    _tt_deferment()
    _tt_cash_purchase()
    _tt_break_even()
    _tt_savings_compounding()
    _tt_rent_inflation_cadence()
    _tt_insurance_after_payoff()

    print("\n[TRUTH TABLES OK]\n")


if __name__ == "__main__":
    main()
