# tests/conftest.py
from __future__ import annotations

import pytest

from loan_sim.core.finance import simulate_loan
from tests.utils import make_assumptions, make_offer, make_offer_set


# -------- Isolation from the caller's environment --------
@pytest.fixture(autouse=True)
def _clear_loansim_env(monkeypatch):
    for key in ("LOANSIM_OUT", "LOANSIM_SCHEDULE", "LOANSIM_OPPORTUNITY_COST_RATE", "LOANSIM_DEBUG"):
        monkeypatch.delenv(key, raising=False)
    yield


# -------- Financial fixtures --------
@pytest.fixture
def assumptions():
    """Baseline assumptions: $273k purchase, 2.2% opportunity cost, 0.5% PMI."""
    return make_assumptions()


@pytest.fixture
def offer_factory():
    """Factory for offers with overridable fields."""

    def _factory(**overrides):
        return make_offer(**overrides)

    return _factory


@pytest.fixture
def offer_set():
    return make_offer_set()


@pytest.fixture
def simulate(assumptions):
    """Factory to simulate an offer (built from overrides) against the baseline assumptions."""

    def _factory(offer=None, *, assumptions_override=None, **offer_overrides):
        if offer is None:
            offer = make_offer(**offer_overrides)
        return simulate_loan(assumptions_override or assumptions, offer)

    return _factory


# -------- Pytest markers --------
def pytest_configure(config):
    config.addinivalue_line("markers", "integration: marks integration tests")
