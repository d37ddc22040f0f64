"""Mortgage offer comparison: amortization, PMI removal/recast, and opportunity cost.

Common imports:
    from loan_sim import GlobalAssumptions, LoanOffer, simulate_loan, compare_offers
"""

from .core.finance import InvalidLoanConfiguration, compare_offers, simulate_loan
from .schemas.models import (
    ComparisonResult,
    GlobalAssumptions,
    LoanOffer,
    MonthRecord,
    OfferOutcome,
    PMIRemoved,
    Recast,
    SimulationReport,
)

__all__ = [
    "GlobalAssumptions",
    "LoanOffer",
    "PMIRemoved",
    "Recast",
    "MonthRecord",
    "SimulationReport",
    "OfferOutcome",
    "ComparisonResult",
    "InvalidLoanConfiguration",
    "simulate_loan",
    "compare_offers",
]
