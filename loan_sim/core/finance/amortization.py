# loan_sim/core/finance/amortization.py

from __future__ import annotations

MONTHS_PER_YEAR = 12


def amortization_payment(rate: float, principal: float, num_payments: int) -> float:
    """
    Constant per-period payment for a fully amortizing fixed-rate loan.

    Formula (standard annuity):
        PMT = (r * P) / (1 - (1 + r)^(-n))

    Where:
        r = per-period interest rate (annual_rate / 12 for monthly payments)
        P = principal outstanding at the start of the schedule
        n = number of remaining payments

    Always recompute from the current principal and remaining term; never adjust a
    previous payment incrementally.

    Notes:
        - If rate == 0, the formula is 0/0 and reduces to principal / n.
        - A zero principal needs no payment.
    """
    if principal < 0:
        raise ValueError("principal must be >= 0")
    if rate < 0:
        raise ValueError("rate must be >= 0")
    if num_payments <= 0:
        raise ValueError("num_payments must be > 0 for a fully amortizing schedule")
    if principal == 0:
        return 0.0
    if rate == 0:
        return principal / num_payments
    return (rate * principal) / (1.0 - (1.0 + rate) ** (-num_payments))


def monthly_rate(annual_rate: float) -> float:
    """Nominal monthly rate from an annual fraction (no compounding adjustment)."""
    return annual_rate / MONTHS_PER_YEAR
