# loan_sim/core/finance/errors.py
"""
Typed errors for the amortization simulator.

Exports
-------
- LoanSimulationError, InvalidLoanConfiguration
- SIMULATION_ERRORS
"""

from __future__ import annotations

# =========================
# Exception types
# =========================


class LoanSimulationError(RuntimeError):
    """Base class for failures while simulating a single loan offer."""


class InvalidLoanConfiguration(LoanSimulationError):
    """
    A month's payment did not cover the interest due, so the balance would not amortize.

    Raised instead of clamping so callers can skip or report the offer without
    corrupting a comparison across offers.
    """

    def __init__(
        self,
        offer_name: str,
        *,
        year: int,
        month: int,
        principal_reduction: float,
    ) -> None:
        self.offer_name = offer_name
        self.year = year
        self.month = month
        self.principal_reduction = principal_reduction
        super().__init__(
            f"loan '{offer_name}' does not amortize: principal reduction {principal_reduction:.6f} "
            f"at year {year}, month {month} (0-indexed) must be > 0"
        )


# Selector tuple for grouped exception handling
SIMULATION_ERRORS = (InvalidLoanConfiguration,)


__all__ = [
    "LoanSimulationError",
    "InvalidLoanConfiguration",
    "SIMULATION_ERRORS",
]
