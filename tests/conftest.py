import os
import sys

import pytest

# Ensure project root is on sys.path before imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from retention_model.config.models import CompanyInputs, SimulationSettings  # noqa: E402
from retention_model.logging_config import reset_logging  # noqa: E402


# Define pytest markers for test categories
def pytest_configure(config):
    """
    Register custom markers to avoid pytest warnings.
    """
    config.addinivalue_line("markers", "unit: mark a test as a unit test")
    config.addinivalue_line("markers", "integration: mark a test as an integration test")
    config.addinivalue_line("markers", "slow: mark a test as a slow test")
    config.addinivalue_line("markers", "config: mark a test as a config test")
    config.addinivalue_line("markers", "dynamics: mark a test as a dynamics test")
    config.addinivalue_line("markers", "engines: mark a test as an engines test")


REFERENCE_INPUTS = {
    "number_of_stores": 100,
    "annual_growth_rate": 0.20,
    "associates_per_store": 10,
    "hours_per_week": 25,
    "hourly_wage_cost": 26,
    "current_retention_rate": 0.45,
    "training_weeks": 8,
    "recruiting_cost_per_hire": 2000,
    "retention_improvement": 0.10,
    "average_transaction_value": 50,
    "customer_satisfaction_score": 75,
    "customer_loyalty_rate": 0.3,
    "market_share": 0.15,
    "tenure_service_impact": 0.3,
    "service_transaction_impact": 0.15,
}


@pytest.fixture
def reference_payload():
    """Reference scenario as a plain snake_case mapping."""
    return dict(REFERENCE_INPUTS)


@pytest.fixture
def reference_inputs():
    """Reference scenario: 100 stores x 10 associates, 45% retention improved by 10 points."""
    return CompanyInputs(**REFERENCE_INPUTS)


@pytest.fixture
def small_simulation():
    """Seeded, reduced-size Monte Carlo settings for fast deterministic runs."""
    return SimulationSettings(iterations=2_000, seed=42, batch_size=500)


@pytest.fixture
def clean_logging():
    """Detach handlers installed by setup_logging after the test."""
    yield
    reset_logging()
