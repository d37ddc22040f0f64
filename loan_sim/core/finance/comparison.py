# loan_sim/core/finance/comparison.py
from __future__ import annotations

import logging
from collections.abc import Iterable

from loan_sim.schemas.models import ComparisonResult, GlobalAssumptions, LoanOffer, OfferOutcome

from .errors import SIMULATION_ERRORS
from .simulator import simulate_loan

logger = logging.getLogger(__name__)


def compare_offers(assumptions: GlobalAssumptions, offers: Iterable[LoanOffer]) -> ComparisonResult:
    """
    Simulate every offer independently, keeping input order.

    An offer that fails to simulate is recorded with its error message instead of
    aborting the whole comparison.
    """
    outcomes: list[OfferOutcome] = []
    for offer in offers:
        try:
            report = simulate_loan(assumptions, offer)
        except SIMULATION_ERRORS as exc:
            logger.warning("skipping offer '%s': %s", offer.name, exc)
            outcomes.append(OfferOutcome(name=offer.name, error=str(exc)))
            continue
        outcomes.append(OfferOutcome(name=offer.name, report=report))

    return ComparisonResult(assumptions=assumptions, outcomes=outcomes)
