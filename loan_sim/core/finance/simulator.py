# loan_sim/core/finance/simulator.py
"""
Month-by-month amortization and opportunity-cost simulation for one loan offer.

Timeline
--------
- Closing: cash to close (down payment + origination fees) seeds both running
  totals (cash paid and cash-paid-plus-opportunity-cost).
- Each month (years 0..term-1, months 0..11):
    1) pay `monthly_payment` (base payment + PMI while it applies)
    2) grow the opportunity-cost total: (total + payment) × (1 + op_rate / 12)
    3) split the base payment into interest and principal
    4) drop PMI the first month the balance falls below 80% of purchase price
       (wait-it-out strategy only)
- End of year 0 (recast strategy only, while PMI is still charged):
    pay the balance down to exactly 80% LTV, add lump sum + recast fee to both
    totals, and re-amortize the rest over the remaining term at the same rate.

The opportunity-cost total compounds the *entire* accumulated balance every
month, not each contribution from its own date.
"""

from __future__ import annotations

import logging

from loan_sim.schemas.models import (
    PMI_LTV_CUTOFF,
    GlobalAssumptions,
    LoanEvent,
    LoanOffer,
    MonthRecord,
    PMIRemoved,
    Recast,
    SimulationReport,
)

from .amortization import MONTHS_PER_YEAR, amortization_payment, monthly_rate
from .errors import InvalidLoanConfiguration

logger = logging.getLogger(__name__)


def simulate_loan(assumptions: GlobalAssumptions, offer: LoanOffer) -> SimulationReport:
    """
    Simulate one offer over its full term and return the report.

    Raises:
        InvalidLoanConfiguration: a month's base payment does not exceed the interest due.
    """
    price = assumptions.purchase_price
    ltv_cap = price * PMI_LTV_CUTOFF

    # Closing
    down_payment = price * offer.fraction_down
    principal = price - down_payment
    loan_amount = principal
    cash_to_close = down_payment + offer.origination_fees
    rate = monthly_rate(offer.interest_rate)
    yearly_pmi = assumptions.pmi_rate * principal if offer.has_pmi else 0.0
    monthly_pmi = yearly_pmi / MONTHS_PER_YEAR

    base_payment = amortization_payment(rate, principal, MONTHS_PER_YEAR * offer.term_years)
    monthly_payment = base_payment + monthly_pmi
    initial_base_payment = base_payment
    initial_pmi = monthly_pmi
    initial_payment = monthly_payment

    total_cash_paid = cash_to_close
    op_cost_value = cash_to_close
    op_growth = 1.0 + (assumptions.opportunity_cost_rate / MONTHS_PER_YEAR)
    interest_and_pmi_paid = 0.0

    events: list[LoanEvent] = []
    months: list[MonthRecord] = []

    logger.debug(
        "simulating '%s': loan=%.2f base=%.2f pmi=%.2f term=%dy",
        offer.name,
        loan_amount,
        base_payment,
        monthly_pmi,
        offer.term_years,
    )

    for year in range(offer.term_years):
        for month in range(MONTHS_PER_YEAR):
            total_cash_paid += monthly_payment
            op_cost_value = (op_cost_value + monthly_payment) * op_growth

            interest_due = principal * rate
            interest_and_pmi_paid += interest_due + monthly_pmi
            principal_reduction = base_payment - interest_due
            if not principal_reduction > 0:
                raise InvalidLoanConfiguration(
                    offer.name,
                    year=year,
                    month=month,
                    principal_reduction=principal_reduction,
                )
            principal -= principal_reduction

            months.append(
                MonthRecord(
                    year=year,
                    month=month,
                    payment=monthly_payment,
                    interest=interest_due,
                    pmi=monthly_pmi,
                    principal_paid=principal_reduction,
                    balance=principal,
                    total_cash_paid=total_cash_paid,
                    opportunity_cost_value=op_cost_value,
                )
            )

            # Wait-it-out: PMI drops the first month LTV goes under 80%
            if not offer.pay_off_pmi_after_year1 and monthly_pmi > 0 and principal < ltv_cap:
                events.append(PMIRemoved(year=year, month=month))
                logger.debug("'%s': PMI removed at year %d, month %d", offer.name, year, month)
                monthly_payment = base_payment
                monthly_pmi = 0.0

        if year == 0 and offer.pay_off_pmi_after_year1 and monthly_pmi > 0:
            remaining_payments = (offer.term_years - 1) * MONTHS_PER_YEAR
            if remaining_payments <= 0:
                logger.debug("'%s': no term left after year 0; recast skipped", offer.name)
                continue

            lump_sum = principal - ltv_cap
            if lump_sum <= 0:
                # Already at or under 80% LTV: PMI can go without a paydown
                events.append(PMIRemoved(year=year, month=MONTHS_PER_YEAR - 1))
                logger.debug("'%s': balance already under 80%% LTV after year 0; PMI removed", offer.name)
                monthly_payment = base_payment
                monthly_pmi = 0.0
                continue

            rate = monthly_rate(offer.interest_rate)
            principal = ltv_cap
            op_cost_value += lump_sum + offer.recast_fee
            total_cash_paid += lump_sum + offer.recast_fee
            base_payment = amortization_payment(rate, principal, remaining_payments)
            monthly_payment = base_payment
            monthly_pmi = 0.0

            events.append(Recast(lump_sum=lump_sum, fee=offer.recast_fee, new_payment=monthly_payment))
            logger.debug(
                "'%s': recast with lump sum %.2f (fee %.2f); new payment %.2f over %d months",
                offer.name,
                lump_sum,
                offer.recast_fee,
                monthly_payment,
                remaining_payments,
            )

    return SimulationReport(
        name=offer.name,
        down_payment=down_payment,
        loan_amount=loan_amount,
        cash_to_close=cash_to_close,
        monthly_rate=monthly_rate(offer.interest_rate),
        base_monthly_payment=initial_base_payment,
        monthly_pmi=initial_pmi,
        monthly_payment_with_pmi=initial_payment,
        events=events,
        final_monthly_payment=monthly_payment,
        total_cash_paid=total_cash_paid,
        total_interest_and_pmi_paid=interest_and_pmi_paid,
        total_with_opportunity_cost=op_cost_value,
        final_balance=principal,
        months=months,
    )
