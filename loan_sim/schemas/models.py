# loan_sim/schemas/models.py

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

# Down payment at or above this fraction never carries PMI.
PMI_FREE_FRACTION_DOWN = 0.20
PMI_LTV_CUTOFF = 0.80

# =========================
# Core inputs
# =========================


class GlobalAssumptions(BaseModel):
    """
    Assumptions shared by every offer in a comparison run. All money amounts are assumed to use the same currency.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", allow_inf_nan=False)

    purchase_price: float = Field(..., gt=0, description="Contract price of the property (currency units).")
    opportunity_cost_rate: float = Field(
        0.0,
        ge=0,
        description=(
            "Annual return forgone by spending cash instead of investing it, as a fraction "
            "(e.g., 0.022 for a savings account, ~0.06 for an index fund)."
        ),
    )
    pmi_rate: float = Field(
        0.0,
        ge=0,
        description="Annual PMI rate applied to the financed principal while the down payment is below 20%.",
    )

    def summary(self) -> str:
        return (
            f"[GlobalAssumptions] price=${self.purchase_price:,.0f} | "
            f"op cost: {self.opportunity_cost_rate:.2%} | PMI: {self.pmi_rate:.3%}"
        )

    def __str__(self) -> str:
        return self.summary()


class LoanOffer(BaseModel):
    """One fixed-rate mortgage offer under comparison."""

    model_config = ConfigDict(frozen=True, extra="ignore", allow_inf_nan=False)

    name: str = Field(..., min_length=1, description="Display label for the offer.")
    fraction_down: float = Field(..., ge=0, lt=1, description="Down payment as a fraction of purchase price (e.g., 0.1 = 10%).")
    interest_rate: float = Field(..., ge=0, description="Annual nominal interest rate as a fraction (e.g., 0.04375).")
    origination_fees: float = Field(0.0, ge=0, description="One-time lender fees paid at closing, on top of the down payment.")
    pay_off_pmi_after_year1: bool = Field(
        False,
        description=(
            "If True, pay a lump sum after the first year to bring LTV to 80% and recast the loan. "
            "If False, PMI drops once scheduled amortization takes the balance below 80% LTV."
        ),
    )
    recast_fee: float = Field(0.0, ge=0, description="Lender fee charged only when a recast happens.")
    term_years: int = Field(30, gt=0, description="Loan term in years.")

    @property
    def has_pmi(self) -> bool:
        return self.fraction_down < PMI_FREE_FRACTION_DOWN

    def summary(self) -> str:
        strategy = "recast after Y1" if self.pay_off_pmi_after_year1 else "wait out PMI"
        return (
            f"[LoanOffer] {self.name} | down: {self.fraction_down:.1%} | rate: {self.interest_rate:.3%} | "
            f"{self.term_years}y | fees: ${self.origination_fees:,.0f} | {strategy}"
        )

    def __str__(self) -> str:
        return self.summary()


# =========================
# Lifecycle events
# =========================


class PMIRemoved(BaseModel):
    """PMI dropped because scheduled amortization took the balance below 80% LTV."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["pmi_removed"] = "pmi_removed"
    year: int = Field(..., ge=0, description="0-indexed loan year in which PMI was removed.")
    month: int = Field(..., ge=0, le=11, description="0-indexed month within that year.")

    def describe(self) -> str:
        return f"paid off PMI at year {self.year}, month {self.month} (0-indexed)"


class Recast(BaseModel):
    """Lump-sum paydown to 80% LTV at the end of year 0, followed by re-amortization."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["recast"] = "recast"
    lump_sum: float = Field(..., description="Principal paid down to reach exactly 80% LTV.")
    fee: float = Field(0.0, ge=0, description="Recast fee charged by the lender.")
    new_payment: float = Field(..., description="Re-amortized monthly payment over the remaining term.")


LoanEvent = Annotated[PMIRemoved | Recast, Field(discriminator="kind")]


# =========================
# Computed outputs
# =========================


class MonthRecord(BaseModel):
    """One simulated month, after that month's payment has been applied."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(..., description="0-indexed loan year.")
    month: int = Field(..., description="0-indexed month within the year.")
    payment: float = Field(..., description="Cash paid this month (base payment plus any PMI).")
    interest: float = Field(..., description="Interest due on the opening balance.")
    pmi: float = Field(..., description="PMI charged this month.")
    principal_paid: float = Field(..., description="Reduction of the loan balance this month.")
    balance: float = Field(..., description="Outstanding principal after this month.")
    total_cash_paid: float = Field(..., description="Cumulative cash paid, including cash to close.")
    opportunity_cost_value: float = Field(..., description="Running total of cash paid compounded at the opportunity-cost rate.")


class SimulationReport(BaseModel):
    """Full month-by-month outcome for a single offer."""

    name: str
    down_payment: float = Field(..., description="purchase_price × fraction_down.")
    loan_amount: float = Field(..., description="Initial financed principal.")
    cash_to_close: float = Field(..., description="Down payment plus origination fees.")
    monthly_rate: float = Field(..., description="Nominal monthly interest rate (annual / 12).")
    base_monthly_payment: float = Field(..., description="Initial amortized payment excluding PMI.")
    monthly_pmi: float = Field(0.0, description="Initial monthly PMI; 0 when the offer carries none.")
    monthly_payment_with_pmi: float = Field(..., description="Initial monthly payment including PMI.")
    events: list[LoanEvent] = Field(default_factory=list, description="PMI removal / recast events in chronological order.")
    final_monthly_payment: float = Field(..., description="Monthly payment in effect at the end of the term.")
    total_cash_paid: float = Field(..., description="Cash to close + all payments + any recast lump sum and fee.")
    total_interest_and_pmi_paid: float = Field(..., description="Sum of interest and PMI over the term.")
    total_with_opportunity_cost: float = Field(..., description="Cash paid grown by the opportunity-cost rate.")
    final_balance: float = Field(..., description="Principal remaining after the last payment (≈ 0).")
    months: list[MonthRecord] = Field(default_factory=list, description="Month-by-month trace.")

    @property
    def has_pmi(self) -> bool:
        return self.monthly_pmi > 0

    @property
    def opportunity_cost(self) -> float:
        return self.total_with_opportunity_cost - self.total_cash_paid

    def summary(self) -> str:
        return (
            f"[SimulationReport] {self.name} | payment: ${self.final_monthly_payment:,.2f} | "
            f"paid: ${self.total_cash_paid:,.2f} | interest+PMI: ${self.total_interest_and_pmi_paid:,.2f} | "
            f"with op cost: ${self.total_with_opportunity_cost:,.2f}"
        )

    def __str__(self) -> str:
        return self.summary()


class OfferOutcome(BaseModel):
    """Result slot for one offer: a report, or the reason the offer could not be simulated."""

    name: str
    report: SimulationReport | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.report is not None


class ComparisonResult(BaseModel):
    """Outcomes for every offer, kept in input order."""

    assumptions: GlobalAssumptions
    outcomes: list[OfferOutcome] = Field(default_factory=list)

    @property
    def reports(self) -> list[SimulationReport]:
        return [o.report for o in self.outcomes if o.report is not None]

    @property
    def failures(self) -> list[OfferOutcome]:
        return [o for o in self.outcomes if o.report is None]

    def best(self) -> SimulationReport | None:
        """Cheapest offer once opportunity cost is included; first wins on ties."""
        reports = self.reports
        if not reports:
            return None
        return min(reports, key=lambda r: r.total_with_opportunity_cost)
