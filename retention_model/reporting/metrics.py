# retention_model/reporting/metrics.py
"""
Closed-form confidence intervals and elasticity sensitivity sweeps.
"""

import logging
import math
from typing import Dict, Iterable, Optional, Tuple

from scipy.stats import norm

from retention_model.config.models import DEFAULT_ESTIMATIONS, CompanyInputs, UserEstimations
from retention_model.config.params import (
    CONFIDENCE_LEVEL,
    DEFAULT_VARIANCE_COEFFICIENT,
    SENSITIVITY_STEPS,
    Z_SCORE_95,
)
from retention_model.mc import trial_revenue
from retention_model.schema.results import ConfidenceInterval, SensitivityAnalysis

logger = logging.getLogger(__name__)

RATE_BOUNDS: Tuple[float, float] = (0.0, 1.0)
PERCENT_BOUNDS: Tuple[float, float] = (0.0, 100.0)


def z_score(confidence_level: Optional[float] = None) -> float:
    """Two-tailed z-score; the 95% level uses the fixed 1.96."""
    if confidence_level is None or math.isclose(confidence_level, CONFIDENCE_LEVEL):
        return Z_SCORE_95
    if not 0 < confidence_level < 1:
        raise ValueError(f"confidence_level must be in (0, 1), got {confidence_level}")
    return float(norm.ppf(1 - (1 - confidence_level) / 2))


class ConfidenceIntervalEstimator:
    """
    Normal-approximation interval for a scalar estimate.

        SE    = |estimate| * variance_coefficient / sqrt(sample_size)
        lower = max(lo, estimate - z * SE)
        upper = min(hi, estimate + z * SE)

    ``bounds`` default to [0, 1] for rates. Pass the valid domain for any
    other magnitude, e.g. ``PERCENT_BOUNDS`` for improvement percentages.
    """

    def __init__(self, variance_coefficient: float = DEFAULT_VARIANCE_COEFFICIENT):
        self.variance_coefficient = variance_coefficient

    def estimate(
        self,
        point_estimate: float,
        sample_size: int,
        variance_coefficient: Optional[float] = None,
        bounds: Tuple[float, float] = RATE_BOUNDS,
        confidence_level: Optional[float] = None,
    ) -> ConfidenceInterval:
        if sample_size < 1:
            raise ValueError(f"sample_size must be >= 1, got {sample_size}")
        lo, hi = bounds
        if lo > hi:
            raise ValueError(f"Invalid bounds {bounds}")
        if not lo <= point_estimate <= hi:
            raise ValueError(f"Estimate {point_estimate} lies outside bounds {bounds}")

        coefficient = self.variance_coefficient if variance_coefficient is None else variance_coefficient
        standard_error = abs(point_estimate) * coefficient / math.sqrt(sample_size)
        margin = z_score(confidence_level) * standard_error

        return ConfidenceInterval(
            lower=max(lo, point_estimate - margin),
            upper=min(hi, point_estimate + margin),
            mean=point_estimate,
        )


def calculate_confidence_interval(
    estimate: float,
    sample_size: int,
    variance_coefficient: float = DEFAULT_VARIANCE_COEFFICIENT,
    bounds: Tuple[float, float] = RATE_BOUNDS,
) -> ConfidenceInterval:
    return ConfidenceIntervalEstimator(variance_coefficient).estimate(estimate, sample_size, bounds=bounds)


def _step_label(step: float) -> str:
    return f"{step:+.0%}" if step else "0%"


def run_sensitivity_analysis(
    inputs: CompanyInputs,
    estimations: UserEstimations = DEFAULT_ESTIMATIONS,
    steps: Iterable[float] = SENSITIVITY_STEPS,
) -> SensitivityAnalysis:
    """
    One-at-a-time sweep of the two elasticity assumptions.

    For each relative shift in ``steps`` one elasticity is scaled by
    ``1 + shift`` (clipped to [0, 1]) with the other held at its base value,
    and the unperturbed revenue impact is recorded under a label such as
    ``"-10%"``.
    """
    base_tenure = estimations.tenure_service_impact
    base_service = estimations.service_transaction_impact
    tenure_impact: Dict[str, float] = {}
    service_impact: Dict[str, float] = {}

    for step in steps:
        label = _step_label(step)
        shifted_tenure = min(1.0, max(0.0, base_tenure * (1 + step)))
        shifted_service = min(1.0, max(0.0, base_service * (1 + step)))
        tenure_impact[label] = float(trial_revenue(shifted_tenure, base_service, inputs, estimations))
        service_impact[label] = float(trial_revenue(base_tenure, shifted_service, inputs, estimations))

    logger.debug(f"Sensitivity sweep over {len(tenure_impact)} steps complete")
    return SensitivityAnalysis(tenure_impact=tenure_impact, service_impact=service_impact)
