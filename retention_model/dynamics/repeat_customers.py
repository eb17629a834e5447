# retention_model/dynamics/repeat_customers.py
"""
Repeat-visit revenue attributable to better retention.

Modelled as its own channel: it derives from the retention improvement
directly, not from the service-quality chain.
"""

import logging

from retention_model.config.params import DAYS_PER_YEAR, REPEAT_VISIT_ATTRIBUTION
from retention_model.schema.results import RepeatCustomerMetrics

logger = logging.getLogger(__name__)


def calculate_repeat_customer_impact(
    average_transaction_value: float,
    transactions_per_day: float,
    current_repeat_rate: float,
    retention_improvement: float,
) -> RepeatCustomerMetrics:
    """
    Calculate the repeat-customer impact of improved retention.

    Args:
        average_transaction_value: Average purchase amount per transaction.
        transactions_per_day: Baseline daily transactions per store.
        current_repeat_rate: Share of customers who return (0-1).
        retention_improvement: Expected improvement in retention rate (0-1).

    Returns:
        RepeatCustomerMetrics for a single store.
    """
    repeat_increase = retention_improvement * REPEAT_VISIT_ATTRIBUTION
    additional_visits = transactions_per_day * DAYS_PER_YEAR * repeat_increase

    return RepeatCustomerMetrics(
        current_rate=current_repeat_rate,
        projected_rate=min(1.0, current_repeat_rate * (1 + repeat_increase)),
        additional_visits=additional_visits,
        revenue_impact=additional_visits * average_transaction_value,
    )


def repeat_metric_explanation() -> str:
    """Plain-language explanation of the repeat customer metric, for reports."""
    return (
        "The percentage of repeat customers measures how many customers return to make "
        "additional purchases. For example, if your business serves 1,000 customers and 300 "
        "of them make additional purchases, your repeat customer percentage would be 30%. "
        "This metric is a key indicator of customer satisfaction and business sustainability."
    )
