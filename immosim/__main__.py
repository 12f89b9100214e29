"""CLI / headless entry point for the buy-vs-rent simulator.

Usage
-----
Run with a JSON scenario file:
    python -m immosim --config scenario.json --output results.csv

Dump an example scenario file:
    python -m immosim --example

Override individual parameters on the command line:
    python -m immosim --config scenario.json --set propertyPrice=300000 --set standard.rate=3.2

The JSON file mirrors the web front-end's stored blob: ``params`` (camelCase
keys), ``customExpenses`` and ``targetYear``. Missing keys fall back to the
built-in default scenario; see --example for all supported keys.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from immosim.core.defaults import DEFAULT_TARGET_YEAR, default_params


def _build_example() -> dict:
    """Return a complete example scenario dict."""
    return {
        "_comment": (
            "immosim scenario file. 'params' feed the engine; 'customExpenses' are tagged "
            "initial/monthly/yearly; 'targetYear' is the resale horizon (1-25)."
        ),
        "params": default_params().to_dict(),
        "customExpenses": [],
        "targetYear": DEFAULT_TARGET_YEAR,
    }


def _coerce(raw: str) -> bool | int | float | str:
    """Coerce a --set value: bool, then int, then float, else str."""
    if raw.lower() in ("true", "false"):
        return raw.lower() == "true"
    try:
        return int(raw)
    except ValueError:
        try:
            return float(raw)
        except ValueError:
            return raw


def _apply_overrides(scenario: dict, overrides: list[str]) -> dict:
    """Apply --set key=value overrides.

    ``targetYear`` targets the scenario itself, ``<loanId>.<field>`` a loan
    (e.g. ``standard.rate``), anything else a ``params`` key.
    """
    for kv in overrides or []:
        if "=" not in kv:
            print(f"Warning: ignoring malformed --set argument (expected key=value): {kv!r}", file=sys.stderr)
            continue
        key, _, raw = kv.partition("=")
        key = key.strip()
        value = _coerce(raw.strip())

        if key == "targetYear":
            scenario["targetYear"] = value
        elif "." in key:
            loan_id, _, field = key.partition(".")
            loans = scenario["params"].setdefault("loans", [])
            loan = next((ln for ln in loans if ln.get("id") == loan_id), None)
            if loan is None:
                print(f"Warning: no loan with id {loan_id!r}; ignoring {kv!r}", file=sys.stderr)
                continue
            loan[field] = value
        else:
            scenario["params"][key] = value
    return scenario


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m immosim",
        description="Buy vs Rent property simulator (headless/CLI mode).",
    )
    parser.add_argument(
        "--config", "-c",
        metavar="FILE",
        help="Path to a JSON scenario file. Use --example to generate a template.",
    )
    parser.add_argument(
        "--output", "-o",
        metavar="FILE",
        default="-",
        help="Output file path. Use '-' (default) to print to stdout.",
    )
    parser.add_argument(
        "--set", "-s",
        dest="overrides",
        metavar="key=value",
        action="append",
        help="Override a parameter (params key, <loanId>.<field> or targetYear). Repeatable.",
    )
    parser.add_argument(
        "--target-year", "-t",
        type=int,
        default=None,
        help="Resale horizon in years used by the --json summary.",
    )
    parser.add_argument(
        "--yearly",
        action="store_true",
        help="Write the 25 yearly points instead of the 300 monthly points.",
    )
    parser.add_argument(
        "--example",
        action="store_true",
        help="Print an example JSON scenario file and exit.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output a summary as JSON instead of a CSV time-series.",
    )

    args = parser.parse_args(argv)

    if args.example:
        print(json.dumps(_build_example(), indent=2, ensure_ascii=False))
        return 0

    scenario = _build_example()
    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: config file not found: {config_path}", file=sys.stderr)
            return 1
        try:
            with config_path.open(encoding="utf-8") as fh:
                user_scenario = json.load(fh)
        except json.JSONDecodeError as exc:
            print(f"Error: invalid JSON in {config_path}: {exc}", file=sys.stderr)
            return 1
        scenario["params"].update(user_scenario.get("params", {}))
        if "customExpenses" in user_scenario:
            scenario["customExpenses"] = list(user_scenario["customExpenses"])
        if "targetYear" in user_scenario:
            scenario["targetYear"] = user_scenario["targetYear"]

    _apply_overrides(scenario, args.overrides)
    if args.target_year is not None:
        scenario["targetYear"] = args.target_year

    from immosim.core.engine import run_simulation
    from immosim.core.expenses import aggregate_expenses
    from immosim.core.models import CustomExpense, SimulationParams
    from immosim.core.outcome import summarize

    params = SimulationParams.from_dict(scenario["params"])
    expenses = [CustomExpense.from_dict(e) for e in scenario.get("customExpenses") or []]
    totals = aggregate_expenses(params, expenses)
    try:
        target_year = int(scenario.get("targetYear", DEFAULT_TARGET_YEAR))
    except (TypeError, ValueError):
        print(f"Config error: targetYear must be an integer, got {scenario.get('targetYear')!r}", file=sys.stderr)
        return 1

    print(
        f"Running simulation: price={params.property_price:,.0f} €, loans={len(params.loans)}, "
        f"rent={params.monthly_rent:,.0f} €/month, appreciation={params.property_appreciation}%",
        file=sys.stderr,
    )

    result = run_simulation(
        params,
        total_initial_expenses=totals.initial,
        total_monthly_expenses=totals.monthly,
        total_yearly_expenses=totals.yearly,
    )

    if args.json:
        from immosim.core.mortgage import initialize_loan_states

        outcome = summarize(result, target_year)
        be_w = outcome.break_even_wealth
        be_m = outcome.break_even_monthly
        summary = {
            "target_year": outcome.target_year,
            "monthly_payments": {s.id: round(s.monthly_payment, 2) for s in initialize_loan_states(params.loans)},
            "total_initial_expenses": round(totals.initial, 2),
            "total_monthly_expenses": round(totals.monthly, 2),
            "total_yearly_expenses": round(totals.yearly, 2),
            "total_annualized_charges": round(totals.annualized, 2),
            "target": outcome.point.to_dict(),
            "wealth_difference": outcome.wealth_difference,
            "owner_wins_wealth": outcome.is_winner_wealth,
            "owner_wins_monthly": outcome.is_winner_monthly,
            "break_even_wealth_month": be_w.month if be_w is not None else None,
            "break_even_monthly_month": be_m.month if be_m is not None else None,
        }
        output = json.dumps(summary, indent=2)
        if args.output == "-":
            print(output)
        else:
            Path(args.output).write_text(output + "\n")
        return 0

    # Default: CSV output
    csv_str = result.to_frame(yearly=args.yearly).to_csv(index=False)
    if args.output == "-":
        print(csv_str, end="")
    else:
        out_path = Path(args.output)
        out_path.write_text(csv_str)
        print(f"Results written to {out_path}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
