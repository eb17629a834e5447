"""
rules/validators.py
Benchmark checks for the elasticity assumption set.

Advisory only: the validator never blocks a run and never mutates the
assumptions; it reports warnings and the benchmark values it would use.
"""

import logging
from typing import Dict, List

from retention_model.config.models import UserEstimations
from retention_model.config.params import INDUSTRY_BENCHMARKS
from retention_model.schema.results import ValidationResults

logger = logging.getLogger(__name__)

CONSERVATIVE_TENURE_WARNING = "Tenure impact estimate appears conservative based on industry data"
AGGRESSIVE_TENURE_WARNING = "Tenure impact estimate appears aggressive based on industry data"
SERVICE_ELASTICITY_WARNING = "Service impact on transaction value may be overestimated"


class EstimateValidator:
    """Compares a ``UserEstimations`` against industry benchmark bounds."""

    def __init__(self, benchmarks=INDUSTRY_BENCHMARKS):
        self.benchmarks = benchmarks

    def validate(self, estimates: UserEstimations) -> ValidationResults:
        warnings: List[str] = []
        adjusted: Dict[str, float] = {}
        b = self.benchmarks

        if estimates.tenure_service_impact < b.MIN_TENURE_IMPACT:
            warnings.append(CONSERVATIVE_TENURE_WARNING)
            adjusted["tenure_service_impact"] = b.MIN_TENURE_IMPACT

        if estimates.tenure_service_impact > b.MAX_TENURE_IMPACT:
            warnings.append(AGGRESSIVE_TENURE_WARNING)
            adjusted["tenure_service_impact"] = b.MAX_TENURE_IMPACT

        implied_elasticity = estimates.service_transaction_impact / b.SERVICE_ELASTICITY
        if implied_elasticity > b.MAX_ELASTICITY_RATIO:
            warnings.append(SERVICE_ELASTICITY_WARNING)
            adjusted["service_transaction_impact"] = b.SERVICE_ELASTICITY * b.MAX_ELASTICITY_RATIO

        for message in warnings:
            logger.warning(message)

        return ValidationResults(
            is_valid=not warnings,
            warnings=warnings,
            adjusted_estimates=adjusted or None,
        )


def validate_estimates(estimates: UserEstimations) -> ValidationResults:
    return EstimateValidator().validate(estimates)


def apply_adjustments(estimates: UserEstimations, results: ValidationResults) -> UserEstimations:
    """Return a new assumption set with the validator's suggested values applied."""
    if not results.adjusted_estimates:
        return estimates
    return estimates.with_overrides(**results.adjusted_estimates)


__all__ = [
    "EstimateValidator",
    "validate_estimates",
    "apply_adjustments",
    "CONSERVATIVE_TENURE_WARNING",
    "AGGRESSIVE_TENURE_WARNING",
    "SERVICE_ELASTICITY_WARNING",
]
