# tests/utils.py
"""
Single source of truth for test data, factories, and canonical payloads.
Update values here to cascade across the test suite.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loan_sim.schemas.models import GlobalAssumptions, LoanOffer

# -----------------------------
# Global defaults (edit once)
# -----------------------------

DEFAULT_PURCHASE_PRICE = 273_000.0
DEFAULT_OP_COST_RATE = 0.022
DEFAULT_PMI_RATE = 0.005
DEFAULT_INTEREST_RATE = 0.04375
DEFAULT_TERM_YEARS = 30

# 80% of the default purchase price
LTV_80_BALANCE = 218_400.0

# -----------------------------
# Financial factories
# -----------------------------


def make_assumptions(
    purchase_price: float = DEFAULT_PURCHASE_PRICE,
    opportunity_cost_rate: float = DEFAULT_OP_COST_RATE,
    pmi_rate: float = DEFAULT_PMI_RATE,
) -> GlobalAssumptions:
    return GlobalAssumptions(
        purchase_price=purchase_price,
        opportunity_cost_rate=opportunity_cost_rate,
        pmi_rate=pmi_rate,
    )


def make_offer(
    name: str = "Test offer",
    fraction_down: float = 0.1,
    interest_rate: float = DEFAULT_INTEREST_RATE,
    origination_fees: float = 0.0,
    pay_off_pmi_after_year1: bool = False,
    recast_fee: float = 0.0,
    term_years: int = DEFAULT_TERM_YEARS,
) -> LoanOffer:
    return LoanOffer(
        name=name,
        fraction_down=fraction_down,
        interest_rate=interest_rate,
        origination_fees=origination_fees,
        pay_off_pmi_after_year1=pay_off_pmi_after_year1,
        recast_fee=recast_fee,
        term_years=term_years,
    )


def make_offer_set() -> list[LoanOffer]:
    """The four demo offers: wait-out PMI, free recast, paid recast, 20% down."""
    return [
        make_offer(name="10% down, no recast"),
        make_offer(name="10% down, recast", pay_off_pmi_after_year1=True),
        make_offer(name="10% down, recast w/ fees", origination_fees=500.0, pay_off_pmi_after_year1=True, recast_fee=250.0),
        make_offer(name="20% down", fraction_down=0.2, interest_rate=0.045),
    ]


# -----------------------------
# Config payloads
# -----------------------------


def make_config_payload(
    offers: list[LoanOffer] | None = None,
    *,
    out: str = "loan_comparison.md",
    schedule: bool = False,
    **assumption_overrides: Any,
) -> dict[str, Any]:
    offers = offers if offers is not None else make_offer_set()
    return {
        "assumptions": make_assumptions(**assumption_overrides).model_dump(),
        "offers": [o.model_dump() for o in offers],
        "run": {"out": out, "schedule": schedule},
    }


def write_config(path: Path, payload: dict[str, Any] | None = None) -> Path:
    path.write_text(json.dumps(payload if payload is not None else make_config_payload()), encoding="utf-8")
    return path
