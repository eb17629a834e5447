"""
Engines package for the retention model.

This package contains the entry points that compose the deterministic models,
the Monte Carlo simulator and the estimate validator.
"""

from .calculation import compute_cost_savings, compute_revenue_impact
from .revenue import calculate_revenue_impact

__all__ = ["compute_cost_savings", "compute_revenue_impact", "calculate_revenue_impact"]
