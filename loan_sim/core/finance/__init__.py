# loan_sim/core/finance/__init__.py

from .amortization import amortization_payment, monthly_rate
from .comparison import compare_offers
from .errors import SIMULATION_ERRORS, InvalidLoanConfiguration, LoanSimulationError
from .simulator import simulate_loan

__all__ = [
    "simulate_loan",
    "compare_offers",
    "amortization_payment",
    "monthly_rate",
    "InvalidLoanConfiguration",
    "LoanSimulationError",
    "SIMULATION_ERRORS",
]
