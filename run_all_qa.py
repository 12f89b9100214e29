#!/usr/bin/env python3
"""Run the simulator QA gates (smoke + scenarios + truth tables).

Usage:
  python run_all_qa.py
  python run_all_qa.py --only smoke,truth_tables
  python run_all_qa.py --skip scenarios
  python run_all_qa.py --list

Exit codes:
  0 = all selected suites passed
  1 = at least one selected suite failed
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

# suite name -> module exposing main(argv)
SUITES: dict[str, str] = {
    "smoke": "immosim.qa.smoke_check",
    "scenarios": "immosim.qa.qa_scenarios",
    "truth_tables": "immosim.qa.qa_truth_tables",
}


def _ensure_repo_root_on_syspath() -> Path:
    repo_root = Path(__file__).resolve().parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))
    return repo_root


def _run_suite(name: str) -> int:
    """Run a suite by name. Returns exit code."""
    module = importlib.import_module(SUITES[name])
    try:
        module.main([])  # keep run_all_qa flags away from suite parsers
        return 0
    except SystemExit as e:
        code = e.code
        if code is None:
            return 0
        return code if isinstance(code, int) else 1
    except Exception as e:
        print(f"\n[RUN_ALL_QA] Unhandled exception in '{name}': {e}\n")
        return 1


def _parse_names(raw: str) -> set[str]:
    return {x.strip() for x in raw.split(",") if x.strip()}


def main(argv: list[str] | None = None) -> int:
    _ensure_repo_root_on_syspath()

    ap = argparse.ArgumentParser(add_help=True)
    ap.add_argument("--list", action="store_true", help="List available suites and exit.")
    ap.add_argument("--only", type=str, default="", help="Comma-separated suites to run (subset).")
    ap.add_argument("--skip", type=str, default="", help="Comma-separated suites to skip.")
    args = ap.parse_args(argv)

    if args.list:
        print("Available suites:")
        for s in SUITES:
            print(f" - {s}")
        return 0

    only, skip = _parse_names(args.only), _parse_names(args.skip)
    unknown = sorted((only | skip).difference(SUITES))
    if unknown:
        print(f"[RUN_ALL_QA] Unknown suite(s): {unknown}")
        return 1

    ordered = [s for s in SUITES if (not only or s in only) and s not in skip]
    if not ordered:
        print("[RUN_ALL_QA] Nothing to run (selection is empty).")
        return 0

    print("\n[RUN_ALL_QA] Running suites:", ", ".join(ordered), "\n")

    failures: list[tuple[str, int]] = []
    for s in ordered:
        print(f"--- {s.upper()} ---")
        code = _run_suite(s)
        if code != 0:
            failures.append((s, code))
            print(f"[RUN_ALL_QA] Suite '{s}' failed with exit code {code}.\n")
        else:
            print(f"[RUN_ALL_QA] Suite '{s}' passed.\n")

    if failures:
        print("=== RUN_ALL_QA FAILED ===")
        for s, code in failures:
            print(f" - {s}: exit code {code}")
        return 1

    print("=== RUN_ALL_QA PASS ===\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
