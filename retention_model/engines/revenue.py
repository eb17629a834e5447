# retention_model/engines/revenue.py
"""
Engine composing the cost, service, transaction and repeat-customer models
into a full revenue-impact result with uncertainty bands.

Channels:
  - customer experience: better service lifts the average ticket
    (service quality -> transaction value), scaled by store count
  - team expertise: a fixed share of each associate's projected ticket
  - customer loyalty: extra repeat visits, derived from retention directly
"""

import logging
import threading
from typing import Optional, Tuple

from retention_model.config.models import (
    DEFAULT_ESTIMATIONS,
    CompanyInputs,
    SimulationSettings,
    UserEstimations,
)
from retention_model.config.params import PRODUCTIVITY_ATTRIBUTION
from retention_model.dynamics.cost_savings import calculate_cost_savings
from retention_model.dynamics.repeat_customers import calculate_repeat_customer_impact
from retention_model.dynamics.service_quality import (
    calculate_service_quality,
    calculate_transaction_impact,
)
from retention_model.logging_config import DEBUG_LOGGER
from retention_model.mc import MonteCarloSimulator
from retention_model.reporting.metrics import (
    PERCENT_BOUNDS,
    RATE_BOUNDS,
    ConfidenceIntervalEstimator,
    run_sensitivity_analysis,
)
from retention_model.rules.validators import EstimateValidator
from retention_model.schema.results import (
    RevenueAndCostResult,
    RevenueImpact,
    StatisticalMetrics,
)

logger = logging.getLogger(__name__)
debug_logger = logging.getLogger(DEBUG_LOGGER)


def _domain_for(value: float, bounds: Tuple[float, float]) -> Tuple[float, float]:
    """Widen ``bounds`` to include ``value`` so out-of-range inputs still yield an interval."""
    lo, hi = bounds
    if lo <= value <= hi:
        return bounds
    logger.warning(f"Estimate {value} outside expected domain {bounds}; widening interval bounds")
    return min(lo, value), max(hi, value)


def calculate_revenue_impact(
    inputs: CompanyInputs,
    estimations: Optional[UserEstimations] = None,
    simulation: Optional[SimulationSettings] = None,
    cancel_event: Optional[threading.Event] = None,
) -> RevenueAndCostResult:
    """
    Run every model for ``inputs`` and attach statistics and validation.

    Args:
        inputs: Company operating parameters.
        estimations: Assumption set; defaults to ``DEFAULT_ESTIMATIONS``.
        simulation: Monte Carlo settings; defaults to ``SimulationSettings()``.
        cancel_event: Optional event checked between Monte Carlo batches.

    Raises:
        DegenerateInputError: if the current satisfaction score is zero.
    """
    estimations = estimations or DEFAULT_ESTIMATIONS
    simulation = simulation or SimulationSettings()

    cost_savings = calculate_cost_savings(inputs)
    total_associates = inputs.number_of_stores * inputs.associates_per_store

    service_quality = calculate_service_quality(
        inputs.customer_satisfaction_score,
        inputs.retention_improvement,
        inputs.tenure_service_impact,
        estimations,
    )
    transaction_metrics = calculate_transaction_impact(
        inputs.average_transaction_value,
        service_quality.improvement_percent / 100,
        inputs.service_transaction_impact,
        estimations,
    )
    repeat_customers = calculate_repeat_customer_impact(
        inputs.average_transaction_value,
        estimations.base_transactions_per_day,
        inputs.customer_loyalty_rate,
        inputs.retention_improvement,
    )

    customer_experience = transaction_metrics.annual_increase * inputs.number_of_stores
    team_expertise = total_associates * transaction_metrics.projected_value * PRODUCTIVITY_ATTRIBUTION
    customer_loyalty = repeat_customers.revenue_impact * inputs.number_of_stores

    estimator = ConfidenceIntervalEstimator()
    statistics = StatisticalMetrics(
        revenue_impact=MonteCarloSimulator.from_settings(simulation).simulate(
            inputs, estimations, cancel_event=cancel_event
        ),
        service_quality=estimator.estimate(
            service_quality.improvement_percent,
            total_associates,
            bounds=_domain_for(service_quality.improvement_percent, PERCENT_BOUNDS),
        ),
        customer_retention=estimator.estimate(
            inputs.retention_improvement,
            inputs.number_of_stores,
            bounds=_domain_for(inputs.retention_improvement, RATE_BOUNDS),
        ),
        sensitivity_analysis=run_sensitivity_analysis(inputs, estimations),
        validation_results=EstimateValidator().validate(estimations),
    )

    revenue_impact = RevenueImpact(
        customer_experience=customer_experience,
        team_expertise=team_expertise,
        customer_loyalty=customer_loyalty,
        statistics=statistics,
        service_quality=service_quality,
        transaction_metrics=transaction_metrics,
        repeat_customers=repeat_customers,
    )
    logger.info(
        f"Revenue impact: experience={customer_experience:,.0f}, expertise={team_expertise:,.0f}, "
        f"loyalty={customer_loyalty:,.0f}"
    )
    debug_logger.debug(f"Revenue statistics for {inputs.number_of_stores} stores: {statistics}")
    return RevenueAndCostResult(cost_savings=cost_savings, revenue_impact=revenue_impact)
