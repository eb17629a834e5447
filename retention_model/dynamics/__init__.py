"""
Deterministic workforce and customer models.
"""

from .cost_savings import calculate_cost_savings
from .service_quality import (
    DegenerateInputError,
    calculate_service_quality,
    calculate_transaction_impact,
)
from .repeat_customers import calculate_repeat_customer_impact, repeat_metric_explanation

__all__ = [
    "calculate_cost_savings",
    "DegenerateInputError",
    "calculate_service_quality",
    "calculate_transaction_impact",
    "calculate_repeat_customer_impact",
    "repeat_metric_explanation",
]
