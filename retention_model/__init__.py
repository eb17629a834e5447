"""
retention_model: estimate the financial impact of improved associate retention.

Example Usage:
    >>> from retention_model import CompanyInputs, compute_cost_savings
    >>> result = compute_cost_savings(inputs)
    >>> result.total_savings
"""

__version__ = "0.1.0"

from .config import (
    DEFAULT_ESTIMATIONS,
    CompanyInputs,
    ScenarioConfig,
    SimulationSettings,
    UserEstimations,
)
from .schema import (
    CalculationResults,
    ConfidenceInterval,
    CostOnlyResult,
    RevenueAndCostResult,
)
from .engines import compute_cost_savings, compute_revenue_impact

__all__ = [
    "__version__",
    "DEFAULT_ESTIMATIONS",
    "CompanyInputs",
    "ScenarioConfig",
    "SimulationSettings",
    "UserEstimations",
    "CalculationResults",
    "ConfidenceInterval",
    "CostOnlyResult",
    "RevenueAndCostResult",
    "compute_cost_savings",
    "compute_revenue_impact",
]
