"""
Result types for the retention model.

Example Usage:
    >>> from retention_model.schema import RevenueAndCostResult
    >>> isinstance(result, RevenueAndCostResult)
"""

from .results import (
    COST_KIND,
    REVENUE_KIND,
    CalculationResults,
    ConfidenceInterval,
    CostOnlyResult,
    CostSavings,
    RepeatCustomerMetrics,
    RevenueAndCostResult,
    RevenueImpact,
    SensitivityAnalysis,
    ServiceQuality,
    StatisticalMetrics,
    TransactionMetrics,
    ValidationResults,
)

__all__ = [
    'COST_KIND',
    'REVENUE_KIND',
    'CalculationResults',
    'ConfidenceInterval',
    'CostOnlyResult',
    'CostSavings',
    'RepeatCustomerMetrics',
    'RevenueAndCostResult',
    'RevenueImpact',
    'SensitivityAnalysis',
    'ServiceQuality',
    'StatisticalMetrics',
    'TransactionMetrics',
    'ValidationResults',
]
