# retention_model/dynamics/service_quality.py
"""
Service quality and transaction value models.

Longer associate tenure is assumed to lift customer satisfaction, and better
service to lift the average ticket:

    projected CSAT   = min(100, CSAT * (1 + retention_improvement * tenure_service_impact))
    projected ticket = ticket * (1 + service_improvement * service_transaction_impact)

Example:
    CSAT 75, tenure impact 0.3, retention improvement 0.15
    -> 75 * (1 + 0.045) = 78.375, a 4.5% service improvement.
"""

import logging

from retention_model.config.models import DEFAULT_ESTIMATIONS, UserEstimations
from retention_model.config.params import DAYS_PER_YEAR
from retention_model.schema.results import ServiceQuality, TransactionMetrics

logger = logging.getLogger(__name__)

MAX_SATISFACTION_SCORE = 100.0


class DegenerateInputError(ValueError):
    """Raised when an input makes a ratio undefined (e.g. a zero baseline score)."""

    pass


def calculate_service_quality(
    current_score: float,
    retention_improvement: float,
    tenure_service_impact: float,
    estimations: UserEstimations = DEFAULT_ESTIMATIONS,
) -> ServiceQuality:
    """
    Project customer satisfaction after the retention improvement.

    A zero or unset ``tenure_service_impact`` falls back to the assumption set.

    Raises:
        DegenerateInputError: if ``current_score`` is zero.
    """
    if current_score == 0:
        raise DegenerateInputError(
            "Current customer satisfaction score is 0; service improvement percent is undefined"
        )

    elasticity = tenure_service_impact or estimations.tenure_service_impact
    service_improvement = retention_improvement * elasticity
    projected = min(MAX_SATISFACTION_SCORE, current_score * (1 + service_improvement))

    return ServiceQuality(
        current=current_score,
        projected=projected,
        improvement_percent=(projected - current_score) / current_score * 100,
    )


def calculate_transaction_impact(
    average_transaction_value: float,
    service_improvement: float,
    service_transaction_impact: float,
    estimations: UserEstimations = DEFAULT_ESTIMATIONS,
) -> TransactionMetrics:
    """
    Project the average transaction value from a service improvement.

    Args:
        average_transaction_value: Current average ticket.
        service_improvement: Service quality improvement as a fraction (4.5% -> 0.045).
        service_transaction_impact: Elasticity; zero falls back to the assumption set.
        estimations: Supplies daily transaction volume and seasonality.
    """
    elasticity = service_transaction_impact or estimations.service_transaction_impact
    projected_value = average_transaction_value * (1 + service_improvement * elasticity)
    annual_transactions = (
        estimations.base_transactions_per_day * DAYS_PER_YEAR * (1 + estimations.seasonality_factor)
    )

    logger.debug(
        f"Transaction impact: {average_transaction_value:.2f} -> {projected_value:.2f} "
        f"over {annual_transactions:,.0f} transactions/yr"
    )

    return TransactionMetrics(
        average_value=average_transaction_value,
        projected_value=projected_value,
        annual_increase=(projected_value - average_transaction_value) * annual_transactions,
    )
