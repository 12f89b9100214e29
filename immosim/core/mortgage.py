"""Loan amortization utilities."""

from __future__ import annotations

from typing import Iterable

from .defaults import MONTHS_PER_YEAR
from .models import Loan, LoanState


def monthly_rate(annual_rate_pct: float) -> float:
    """Annual nominal rate in percent -> monthly rate (decimal), compounded monthly."""
    return float(annual_rate_pct) / 100.0 / MONTHS_PER_YEAR


# Loan Payment


def monthly_payment(amount: float, annual_rate_pct: float, amort_months: int) -> float:
    """Fixed monthly payment for a loan.

    Args:
        amount: Borrowed amount.
        annual_rate_pct: Annual nominal rate in percent (e.g. 1.18).
        amort_months: Number of amortizing months. Must be > 0; no guard is applied.

    Returns:
        ``amount / amort_months`` for a zero-rate loan (linear repayment),
        otherwise the standard annuity payment.
    """
    if annual_rate_pct == 0:
        return amount / amort_months

    mr = monthly_rate(annual_rate_pct)
    return (amount * mr) / (1.0 - (1.0 + mr) ** (-amort_months))


def initialize_loan_states(loans: Iterable[Loan]) -> list[LoanState]:
    """Fresh per-run state for each loan.

    The payment is amortized over the months left once the deferment ends.
    """
    return [
        LoanState(
            loan=loan,
            remaining_capital=float(loan.amount),
            monthly_payment=monthly_payment(
                loan.amount, loan.rate, loan.duration_months - loan.deferred_months
            ),
        )
        for loan in loans
    ]
