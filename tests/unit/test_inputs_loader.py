# tests/unit/test_inputs_loader.py
from __future__ import annotations

import json
from pathlib import Path

import pytest

from loan_sim.inputs.inputs import AppInputs, InputsLoader, build_sample_inputs, load_inputs
from tests.utils import make_config_payload, make_offer, write_config


def test_load_valid_file(tmp_path: Path) -> None:
    p = write_config(tmp_path / "loans.json", make_config_payload(out="cmp.md", schedule=True))
    cfg = InputsLoader().load(p)

    assert isinstance(cfg, AppInputs)
    assert cfg.assumptions.purchase_price == 273_000.0
    assert [o.name for o in cfg.offers] == [
        "10% down, no recast",
        "10% down, recast",
        "10% down, recast w/ fees",
        "20% down",
    ]
    assert cfg.run.out == "cmp.md"
    assert cfg.run.schedule is True


def test_run_options_default_when_omitted() -> None:
    payload = make_config_payload()
    del payload["run"]
    cfg = InputsLoader().load_json(json.dumps(payload))
    assert cfg.run.out == "loan_comparison.md"
    assert cfg.run.schedule is False


def test_offer_defaults_fill_optional_fields() -> None:
    payload = make_config_payload()
    payload["offers"] = [{"name": "minimal", "fraction_down": 0.1, "interest_rate": 0.05}]
    cfg = InputsLoader().load_json(json.dumps(payload))
    offer = cfg.offers[0]
    assert offer.term_years == 30
    assert offer.origination_fees == 0.0
    assert offer.pay_off_pmi_after_year1 is False


def test_default_search_path(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "data" / "sample").mkdir(parents=True)
    write_config(tmp_path / "data" / "sample" / "loans.json")
    assert len(load_inputs().offers) == 4


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        InputsLoader().load(tmp_path / "nope.json")


def test_no_default_file_raises(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        InputsLoader().load()


def test_non_json_suffix_rejected(tmp_path: Path) -> None:
    p = tmp_path / "loans.yaml"
    p.write_text("assumptions: {}", encoding="utf-8")
    with pytest.raises(ValueError, match="only .json"):
        InputsLoader().load(p)


def test_invalid_json_raises_value_error(tmp_path: Path) -> None:
    p = tmp_path / "loans.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid JSON"):
        InputsLoader().load(p)
    with pytest.raises(ValueError, match="Invalid JSON"):
        InputsLoader().load_json("{not json")


@pytest.mark.parametrize(
    "field, value",
    [
        ("fraction_down", 1.0),
        ("fraction_down", -0.1),
        ("term_years", 0),
        ("interest_rate", -0.01),
        ("origination_fees", -5.0),
        ("recast_fee", -1.0),
    ],
)
def test_offer_domain_validation(field: str, value: float) -> None:
    payload = make_config_payload()
    payload["offers"][0][field] = value
    with pytest.raises(ValueError, match="Inputs validation failed"):
        InputsLoader().load_json(json.dumps(payload))


@pytest.mark.parametrize(
    "field, value",
    [("purchase_price", 0.0), ("opportunity_cost_rate", -0.01), ("pmi_rate", -0.001)],
)
def test_assumption_domain_validation(field: str, value: float) -> None:
    payload = make_config_payload()
    payload["assumptions"][field] = value
    with pytest.raises(ValueError, match="Inputs validation failed"):
        InputsLoader().load_json(json.dumps(payload))


def test_empty_offer_list_rejected() -> None:
    payload = make_config_payload(offers=[])
    with pytest.raises(ValueError):
        InputsLoader().load_json(json.dumps(payload))


def test_duplicate_offer_names_rejected() -> None:
    payload = make_config_payload(offers=[make_offer(name="same"), make_offer(name="same", fraction_down=0.2)])
    with pytest.raises(ValueError, match="duplicate offer name"):
        InputsLoader().load_json(json.dumps(payload))


def test_env_overrides(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("LOANSIM_OUT", "from_env.md")
    monkeypatch.setenv("LOANSIM_SCHEDULE", "yes")
    monkeypatch.setenv("LOANSIM_OPPORTUNITY_COST_RATE", "0.06")
    cfg = InputsLoader().load(write_config(tmp_path / "loans.json"))
    assert cfg.run.out == "from_env.md"
    assert cfg.run.schedule is True
    assert cfg.assumptions.opportunity_cost_rate == pytest.approx(0.06)


@pytest.mark.parametrize("bad", ["abc", "-0.5"])
def test_bad_env_rate_is_ignored(tmp_path: Path, monkeypatch, bad: str) -> None:
    monkeypatch.setenv("LOANSIM_OPPORTUNITY_COST_RATE", bad)
    cfg = InputsLoader().load(write_config(tmp_path / "loans.json"))
    assert cfg.assumptions.opportunity_cost_rate == pytest.approx(0.022)


def test_custom_env_prefix(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("CMP_OUT", "custom.md")
    cfg = InputsLoader(env_prefix="CMP_").load(write_config(tmp_path / "loans.json"))
    assert cfg.run.out == "custom.md"


def test_with_overrides_is_non_destructive() -> None:
    loader = InputsLoader()
    cfg = build_sample_inputs()
    new = loader.with_overrides(cfg, out="x.md", schedule=True, opportunity_cost_rate=0.06)

    assert new.run.out == "x.md" and new.run.schedule is True
    assert new.assumptions.opportunity_cost_rate == 0.06
    assert cfg.run.out == "loan_comparison.md" and cfg.run.schedule is False
    assert cfg.assumptions.opportunity_cost_rate == 0.022
    assert loader.with_overrides(cfg) is cfg


def test_with_overrides_rejects_negative_rate() -> None:
    with pytest.raises(ValueError):
        InputsLoader().with_overrides(build_sample_inputs(), opportunity_cost_rate=-0.01)


def test_sample_inputs_cover_both_strategies() -> None:
    cfg = build_sample_inputs()
    assert len(cfg.offers) == 4
    assert any(o.pay_off_pmi_after_year1 for o in cfg.offers)
    assert any(not o.pay_off_pmi_after_year1 and o.has_pmi for o in cfg.offers)
    assert any(not o.has_pmi for o in cfg.offers)


def test_bundled_sample_file_matches_demo_inputs() -> None:
    sample = Path(__file__).resolve().parents[2] / "data" / "sample" / "loans.json"
    cfg = InputsLoader().load(sample)
    demo = build_sample_inputs()
    assert cfg.assumptions == demo.assumptions
    assert cfg.offers == demo.offers


def test_infinity_literal_in_config_rejected() -> None:
    payload = make_config_payload()
    payload["offers"][0]["interest_rate"] = float("inf")
    text = json.dumps(payload)
    assert "Infinity" in text
    with pytest.raises(ValueError, match="Inputs validation failed"):
        InputsLoader().load_json(text)


@pytest.mark.parametrize("value", [float("nan"), float("inf")])
def test_with_overrides_rejects_non_finite_rate(value: float) -> None:
    with pytest.raises(ValueError, match="finite"):
        InputsLoader().with_overrides(build_sample_inputs(), opportunity_cost_rate=value)


@pytest.mark.parametrize("bad", ["inf", "nan"])
def test_non_finite_env_rate_is_ignored(tmp_path: Path, monkeypatch, bad: str) -> None:
    monkeypatch.setenv("LOANSIM_OPPORTUNITY_COST_RATE", bad)
    cfg = InputsLoader().load(write_config(tmp_path / "loans.json"))
    assert cfg.assumptions.opportunity_cost_rate == pytest.approx(0.022)
