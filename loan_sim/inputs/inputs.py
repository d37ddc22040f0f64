# loan_sim/inputs/inputs.py
"""
Inputs loader for the mortgage offer comparison.

Goals
-----
- Deterministic, file-first inputs with validation via Pydantic.
- One JSON document holds the global assumptions, the ordered list of offers,
  and run options (report path, schedule table toggle).
- Minimal environment-variable overrides for CI/CLI convenience.

JSON shape
----------
    {
      "assumptions": {"purchase_price": 273000, "opportunity_cost_rate": 0.022, "pmi_rate": 0.005},
      "offers": [
        {"name": "Better, 10% down", "fraction_down": 0.1, "interest_rate": 0.04375,
         "origination_fees": 0, "pay_off_pmi_after_year1": false, "recast_fee": 0, "term_years": 30}
      ],
      "run": {"out": "loan_comparison.md", "schedule": false}
    }

Environment overrides (optional)
--------------------------------
- LOANSIM_OUT                    -> AppInputs.run.out
- LOANSIM_SCHEDULE               -> AppInputs.run.schedule (1/true/yes/on)
- LOANSIM_OPPORTUNITY_COST_RATE  -> AppInputs.assumptions.opportunity_cost_rate (float)

Public API
----------
- class InputsLoader:
    - load(path: str | Path | None) -> AppInputs
    - load_json(text: str) -> AppInputs
    - with_overrides(cfg, **kwargs) -> AppInputs (non-destructive copies)
- function load_inputs(path: str | Path | None) -> AppInputs  (convenience)
- function build_sample_inputs() -> AppInputs  (demo offers)
"""

from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

from pydantic import BaseModel, Field, ValidationError, field_validator

from loan_sim.schemas.models import GlobalAssumptions, LoanOffer

_TRUTHY = {"1", "true", "yes", "on"}

# ----------------------------
# Pydantic models for structured inputs
# ----------------------------


class RunOptions(BaseModel):
    """Runtime (non-financial) options controlling the comparison run."""

    out: str = Field("loan_comparison.md", description="Path to write the Markdown report.")
    schedule: bool = Field(False, description="Include a yearly amortization table per offer in the report.")


class AppInputs(BaseModel):
    """
    Full input payload.

    Attributes:
        assumptions: Purchase price and the opportunity-cost / PMI rates shared by all offers.
        offers:      Offers to compare, in presentation order.
        run:         Non-financial, runtime options for the current execution.
    """

    assumptions: GlobalAssumptions
    offers: list[LoanOffer] = Field(..., min_length=1)
    run: RunOptions = RunOptions()

    @field_validator("offers")
    @classmethod
    def _unique_names(cls, v: list[LoanOffer]) -> list[LoanOffer]:
        seen: set[str] = set()
        for offer in v:
            if offer.name in seen:
                raise ValueError(f"duplicate offer name: {offer.name!r}")
            seen.add(offer.name)
        return v


# ----------------------------
# Loader
# ----------------------------


@dataclass(frozen=True)
class InputsLoader:
    """
    File-first inputs loader with light env overrides.

    Default search (when path=None):
        1) ./data/sample/loans.json
        2) ./loans.json
    """

    env_prefix: str = "LOANSIM_"

    # ---------- Public API ----------

    def load(self, path: str | Path | None = None) -> AppInputs:
        """
        Load inputs from a JSON file (path). If path is None, try defaults.

        Returns:
            AppInputs (validated, env overrides applied).
        """
        p = self._resolve_path(path)
        raw = self._read_json_file(p)
        cfg = self._parse_root(raw)
        return self._apply_env_overrides(cfg)

    def load_json(self, text: str) -> AppInputs:
        """Load inputs from a JSON string."""
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON payload: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError("Inputs JSON root must be an object.")
        cfg = self._parse_root(raw)
        return self._apply_env_overrides(cfg)

    def with_overrides(
        self,
        cfg: AppInputs,
        *,
        out: str | None = None,
        schedule: bool | None = None,
        opportunity_cost_rate: float | None = None,
    ) -> AppInputs:
        """
        Return a *new* AppInputs with provided non-null overrides applied.
        Does not mutate the original instance.
        """
        run_updates: dict[str, Any] = {}
        if out is not None:
            run_updates["out"] = out
        if schedule is not None:
            run_updates["schedule"] = schedule

        updates: dict[str, Any] = {}
        if run_updates:
            updates["run"] = cfg.run.model_copy(update=run_updates)
        if opportunity_cost_rate is not None:
            if not (math.isfinite(opportunity_cost_rate) and opportunity_cost_rate >= 0):
                raise ValueError("opportunity_cost_rate must be a finite value >= 0")
            updates["assumptions"] = cfg.assumptions.model_copy(update={"opportunity_cost_rate": opportunity_cost_rate})

        if not updates:
            return cfg
        return cfg.model_copy(update=updates)

    # ---------- Internals ----------

    def _resolve_path(self, path: str | Path | None) -> Path:
        if path is not None:
            p = Path(path)
            if not p.exists():
                raise FileNotFoundError(f"Inputs file not found: {p}")
            return p

        for candidate in (Path("data/sample/loans.json"), Path("loans.json")):
            if candidate.exists():
                return candidate
        raise FileNotFoundError(
            "No inputs path provided and no default inputs found. Looked for ./data/sample/loans.json and ./loans.json."
        )

    def _read_json_file(self, p: Path) -> dict[str, Any]:
        if p.suffix.lower() != ".json":
            raise ValueError(f"Unsupported inputs format for {p.name}; only .json is supported.")
        try:
            raw = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {p}: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError(f"Inputs JSON root must be an object in {p}.")
        return cast(dict[str, Any], raw)

    def _parse_root(self, data: dict[str, Any]) -> AppInputs:
        try:
            return AppInputs.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Inputs validation failed:\n{e}") from e

    def _apply_env_overrides(self, cfg: AppInputs) -> AppInputs:
        """
        Apply light, optional overrides from environment variables.
        """
        prefix = self.env_prefix
        out: str | None = None
        schedule: bool | None = None
        op_rate: float | None = None

        env_out = os.getenv(f"{prefix}OUT")
        if env_out:
            out = env_out

        env_schedule = os.getenv(f"{prefix}SCHEDULE")
        if env_schedule:
            schedule = env_schedule.strip().lower() in _TRUTHY

        env_rate = os.getenv(f"{prefix}OPPORTUNITY_COST_RATE")
        if env_rate:
            try:
                parsed: float | None = float(env_rate)
            except ValueError:
                # Ignore bad value; keep validated rate
                parsed = None
            if parsed is not None and math.isfinite(parsed) and parsed >= 0:
                op_rate = parsed

        return self.with_overrides(cfg, out=out, schedule=schedule, opportunity_cost_rate=op_rate)


# ----------------------------
# Convenience functions
# ----------------------------


def load_inputs(path: str | Path | None = None) -> AppInputs:
    """Convenience wrapper for one-shot callers."""
    return InputsLoader().load(path)


def build_sample_inputs() -> AppInputs:
    """Return the demo comparison: one $273k purchase, four offers."""
    return AppInputs(
        assumptions=GlobalAssumptions(
            purchase_price=273_000.0,
            opportunity_cost_rate=0.022,  # e.g. 2.2% savings account; ~6% for an S&P 500 index average case
            pmi_rate=0.005,
        ),
        offers=[
            LoanOffer(
                name="Better, 10% down, no pts, no recast",
                fraction_down=0.1,
                interest_rate=0.04375,
                origination_fees=0.0,
                pay_off_pmi_after_year1=False,
                recast_fee=0.0,
                term_years=30,
            ),
            LoanOffer(
                name="Better, 10% down, no pts",
                fraction_down=0.1,
                interest_rate=0.04375,
                origination_fees=0.0,
                pay_off_pmi_after_year1=True,
                recast_fee=0.0,
                term_years=30,
            ),
            LoanOffer(
                name="US Bank, 10% down, no pts",
                fraction_down=0.1,
                interest_rate=0.04375,
                origination_fees=500.0,
                pay_off_pmi_after_year1=True,
                recast_fee=250.0,
                term_years=30,
            ),
            LoanOffer(
                name="Better, 20% down, no pts",
                fraction_down=0.2,
                interest_rate=0.045,
                origination_fees=0.0,
                pay_off_pmi_after_year1=False,
                recast_fee=0.0,
                term_years=30,
            ),
        ],
    )
