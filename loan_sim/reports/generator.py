# loan_sim/reports/generator.py
from __future__ import annotations

import locale
from dataclasses import dataclass
from pathlib import Path

from loan_sim.schemas.models import (
    PMI_LTV_CUTOFF,
    ComparisonResult,
    GlobalAssumptions,
    MonthRecord,
    OfferOutcome,
    PMIRemoved,
    Recast,
    SimulationReport,
)


def _fmt_currency(x: float) -> str:
    """
    Format an amount with the active locale's currency conventions.

    Falls back to USD-style formatting when the locale defines none (C/POSIX):
        123456.789 -> $123,456.79
        -2000 -> -$2,000.00
    """
    try:
        return locale.currency(x, grouping=True)
    except ValueError:
        sign = "-" if x < 0 else ""
        return f"{sign}${abs(x):,.2f}"


def _fmt_pct(x: float, digits: int = 2) -> str:
    """
    Format a fraction as a percentage.

    Example:
        0.04375 -> 4.38%
    """
    return f"{x * 100:.{digits}f}%"


def _section(title: str, level: int = 2) -> str:
    """
    Render a Markdown heading for report sections.
    """
    return f"\n{'#' * level} {title}\n"


def _describe_event(event: PMIRemoved | Recast) -> str:
    if isinstance(event, PMIRemoved):
        return event.describe()
    text = f"lump sum payment for recast: {_fmt_currency(event.lump_sum)}"
    if event.fee:
        text += f" (+ {_fmt_currency(event.fee)} fee)"
    return text + f"; new monthly payment {_fmt_currency(event.new_payment)}"


# -----------------------
# Yearly roll-up of the month trace
# -----------------------


@dataclass(frozen=True)
class YearSummary:
    year: int
    paid: float
    interest: float
    pmi: float
    principal: float
    ending_balance: float
    total_cash_paid: float
    opportunity_cost_value: float


def summarize_years(months: list[MonthRecord]) -> list[YearSummary]:
    """Aggregate month records into one row per loan year (0-indexed)."""
    by_year: dict[int, list[MonthRecord]] = {}
    for m in months:
        by_year.setdefault(m.year, []).append(m)

    out: list[YearSummary] = []
    for year in sorted(by_year):
        rows = by_year[year]
        last = rows[-1]
        out.append(
            YearSummary(
                year=year,
                paid=sum(r.payment for r in rows),
                interest=sum(r.interest for r in rows),
                pmi=sum(r.pmi for r in rows),
                principal=sum(r.principal_paid for r in rows),
                ending_balance=last.balance,
                total_cash_paid=last.total_cash_paid,
                opportunity_cost_value=last.opportunity_cost_value,
            )
        )
    return out


# -----------------------
# Sections
# -----------------------


def _render_header(assumptions: GlobalAssumptions) -> str:
    lines = [
        "# Mortgage Offer Comparison",
        "",
        f"- **Purchase Price:** {_fmt_currency(assumptions.purchase_price)}",
        f"- **Opportunity Cost Rate:** {_fmt_pct(assumptions.opportunity_cost_rate)}",
        f"- **PMI Rate:** {_fmt_pct(assumptions.pmi_rate, 3)}",
        f"- **80% LTV Threshold:** {_fmt_currency(assumptions.purchase_price * PMI_LTV_CUTOFF)}",
    ]
    return "\n".join(lines) + "\n"


def _render_comparison_table(result: ComparisonResult) -> str:
    """
    Columns:
      Offer | Cash to Close | Payment w/ PMI | Final Payment | Total Paid | Interest + PMI | Total + Op Cost
    """
    reports = result.reports
    if not reports:
        return ""

    best = result.best()
    header = [
        _section("Summary"),
        "| Offer | Cash to Close | Payment w/ PMI | Final Payment | Total Paid | Interest + PMI | Total + Op Cost |",
        "| :--- | ---: | ---: | ---: | ---: | ---: | ---: |",
    ]
    rows = []
    for r in reports:
        marker = " ★" if r is best else ""
        rows.append(
            f"| {r.name}{marker} "
            f"| {_fmt_currency(r.cash_to_close)} "
            f"| {_fmt_currency(r.monthly_payment_with_pmi)} "
            f"| {_fmt_currency(r.final_monthly_payment)} "
            f"| {_fmt_currency(r.total_cash_paid)} "
            f"| {_fmt_currency(r.total_interest_and_pmi_paid)} "
            f"| {_fmt_currency(r.total_with_opportunity_cost)} |"
        )
    footer = []
    if best is not None:
        footer = ["", f"★ Lowest total cost including opportunity cost: **{best.name}**"]
    return "\n".join(header + rows + footer) + "\n"


def _render_schedule(report: SimulationReport) -> str:
    rows = summarize_years(report.months)
    if not rows:
        return ""
    header = [
        "",
        "| Year | Paid | Interest | PMI | Principal | Ending Balance | Total Paid | Total + Op Cost |",
        "| ---: | ---: | ---: | ---: | ---: | ---: | ---: | ---: |",
    ]
    body = [
        f"| {y.year} "
        f"| {_fmt_currency(y.paid)} "
        f"| {_fmt_currency(y.interest)} "
        f"| {_fmt_currency(y.pmi)} "
        f"| {_fmt_currency(y.principal)} "
        f"| {_fmt_currency(y.ending_balance)} "
        f"| {_fmt_currency(y.total_cash_paid)} "
        f"| {_fmt_currency(y.opportunity_cost_value)} |"
        for y in rows
    ]
    return "\n".join(header + body)


def _render_offer(report: SimulationReport, *, schedule: bool = False) -> str:
    """
    Render one offer's detail card: closing figures, PMI, lifecycle events and totals.
    """
    lines = [
        _section(f"Loan '{report.name}'", level=3),
        f"- **Down Payment:** {_fmt_currency(report.down_payment)}",
        f"- **Loan Amount:** {_fmt_currency(report.loan_amount)}",
        f"- **Cash to Close:** {_fmt_currency(report.cash_to_close)}",
    ]
    if report.has_pmi:
        lines.append(f"- **Monthly PMI:** {_fmt_currency(report.monthly_pmi)}")
        lines.append(f"- **Monthly Payment with PMI:** {_fmt_currency(report.monthly_payment_with_pmi)}")
    if report.events:
        lines.append("- **Events:**")
        for event in report.events:
            lines.append(f"  - {_describe_event(event)}")
    lines.extend(
        [
            f"- **Monthly Payment:** {_fmt_currency(report.final_monthly_payment)}",
            f"- **Total Paid:** {_fmt_currency(report.total_cash_paid)}",
            f"- **Total Interest + PMI Paid:** {_fmt_currency(report.total_interest_and_pmi_paid)}",
            f"- **Total Paid + Opportunity Cost:** {_fmt_currency(report.total_with_opportunity_cost)}",
        ]
    )
    if schedule:
        lines.append(_render_schedule(report))
    return "\n".join(lines) + "\n"


def _render_failures(failures: list[OfferOutcome]) -> str:
    if not failures:
        return ""
    lines = [_section("Skipped Offers")]
    for f in failures:
        lines.append(f"- **{f.name}:** {f.error}")
    return "\n".join(lines) + "\n"


# -----------------------
# Orchestration
# -----------------------


def generate_report(result: ComparisonResult, *, schedule: bool = False, title_override: str | None = None) -> str:
    """
    Generate a Markdown report comparing all simulated offers.

    Sections:
      - Header: purchase price, opportunity-cost and PMI rates
      - Summary: one row per offer (input order), best offer marked
      - Offer Details: closing figures, PMI, events, totals (+ yearly schedule if requested)
      - Skipped Offers: offers whose configuration does not amortize
    """
    header = _render_header(result.assumptions)
    if title_override:
        header_lines = header.splitlines()
        header_lines[0] = f"# {title_override}"
        header = "\n".join(header_lines) + "\n"

    details = [_render_offer(r, schedule=schedule) for r in result.reports]
    parts = [
        header,
        _render_comparison_table(result),
        _section("Offer Details") if details else "",
        *details,
        _render_failures(result.failures),
    ]
    return "\n".join(part for part in parts if part).strip() + "\n"


def write_report(path: str | Path, result: ComparisonResult, *, schedule: bool = False) -> None:
    """
    Convenience helper to write the generated report to disk.
    """
    md = generate_report(result, schedule=schedule)
    with open(path, "w", encoding="utf-8") as f:
        f.write(md)


def render_console_summary(result: ComparisonResult) -> str:
    """Plain-text, per-offer printout for terminal output."""
    lines: list[str] = []
    for outcome in result.outcomes:
        lines.append(f"loan '{outcome.name}':")
        r = outcome.report
        if r is None:
            lines.append(f"  skipped: {outcome.error}")
            lines.append("")
            continue
        if r.has_pmi:
            lines.append(f"  monthly PMI: {_fmt_currency(r.monthly_pmi)}")
            lines.append(f"  monthly payment with PMI: {_fmt_currency(r.monthly_payment_with_pmi)}")
        for event in r.events:
            if isinstance(event, Recast):
                lines.append(f"  lump sum payment for recast: {_fmt_currency(event.lump_sum)}")
            else:
                lines.append(f"  {event.describe()}")
        lines.append(f"  monthly payment: {_fmt_currency(r.final_monthly_payment)}")
        lines.append(f"  total $ paid: {_fmt_currency(r.total_cash_paid)}")
        lines.append(f"  total interest + fees paid: {_fmt_currency(r.total_interest_and_pmi_paid)}")
        lines.append(f"  total paid + op cost: {_fmt_currency(r.total_with_opportunity_cost)}")
        lines.append("")
    return "\n".join(lines)
