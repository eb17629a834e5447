# retention_model/engines/calculation.py
"""
Entry points of the estimation engine.

    compute_cost_savings(inputs)                          -> CostOnlyResult
    compute_revenue_impact(inputs, estimations, simulation) -> RevenueAndCostResult

Both are single-shot and keep no state between calls. Neither re-checks input
ranges or consistency; callers run ``retention_model.config.validation`` first.
"""

import logging
import threading
from typing import Optional

from retention_model.config.models import CompanyInputs, SimulationSettings, UserEstimations
from retention_model.dynamics.cost_savings import calculate_cost_savings
from retention_model.logging_config import ESTIMATION_LOGGER
from retention_model.schema.results import CostOnlyResult, RevenueAndCostResult

from .revenue import calculate_revenue_impact

logger = logging.getLogger(__name__)
est_logger = logging.getLogger(ESTIMATION_LOGGER)


def compute_cost_savings(inputs: CompanyInputs) -> CostOnlyResult:
    """Cost-savings projection only; never populates revenue figures."""
    result = CostOnlyResult(cost_savings=calculate_cost_savings(inputs))
    est_logger.info(
        f"Cost run: stores={inputs.number_of_stores}, savings={result.total_savings:,.0f}"
    )
    return result


def compute_revenue_impact(
    inputs: CompanyInputs,
    estimations: Optional[UserEstimations] = None,
    simulation: Optional[SimulationSettings] = None,
    cancel_event: Optional[threading.Event] = None,
) -> RevenueAndCostResult:
    """Full revenue-impact run; the result always includes the cost-savings fields."""
    result = calculate_revenue_impact(inputs, estimations, simulation, cancel_event)
    interval = result.revenue_impact.statistics.revenue_impact
    est_logger.info(
        f"Revenue run: stores={inputs.number_of_stores}, savings={result.total_savings:,.0f}, "
        f"total impact={result.revenue_impact.total_annual_impact:,.0f}, "
        f"simulated range=[{interval.lower:,.0f}, {interval.upper:,.0f}]"
    )
    return result
