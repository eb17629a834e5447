# retention_model/dynamics/cost_savings.py
"""
Headcount and hiring-cost projection for a retention improvement.

The model answers two questions for one year of operation:
  1. How many associates must be hired (growth plus attrition replacement)?
  2. How much recruiting and paid-training cost disappears when retention
     improves by ``retention_improvement``?

All figures are pure arithmetic on the inputs; nothing is clamped. An
improved retention rate above 1 yields negative attrition hires and savings
larger than the attrition they replace, which callers flag with ``retention_model.config.validation.consistency_warnings``.
"""

import logging

from retention_model.config.models import CompanyInputs
from retention_model.schema.results import CostSavings

logger = logging.getLogger(__name__)


def calculate_cost_savings(inputs: CompanyInputs) -> CostSavings:
    """
    Compute the talent summary and financial impact for ``inputs``.

    Args:
        inputs: Company operating parameters, already range-checked by the caller.

    Returns:
        CostSavings with headcount, hiring and savings figures.
    """
    stores = inputs.number_of_stores
    total_store_managers = stores
    total_store_associates = stores * inputs.associates_per_store
    new_managers_needed = stores * inputs.annual_growth_rate
    new_associates_growth = inputs.associates_per_store * (stores * inputs.annual_growth_rate)
    new_associates_attrition = total_store_associates * (1 - inputs.current_retention_rate)
    total_new_associates = new_associates_growth + new_associates_attrition

    improved_retention_rate = inputs.current_retention_rate + inputs.retention_improvement
    new_attrition_hires = total_store_associates * (1 - improved_retention_rate)
    reduced_hiring_needs = new_associates_attrition - new_attrition_hires

    recruiting_savings = reduced_hiring_needs * inputs.recruiting_cost_per_hire
    training_cost_savings = (
        reduced_hiring_needs
        * inputs.hourly_wage_cost
        * inputs.hours_per_week
        * inputs.training_weeks
    )
    total_savings = recruiting_savings + training_cost_savings

    logger.debug(
        f"Cost savings: associates={total_store_associates}, hires={total_new_associates:.1f}, "
        f"reduced={reduced_hiring_needs:.1f}, savings={total_savings:,.0f}"
    )

    return CostSavings(
        total_store_managers=total_store_managers,
        total_store_associates=total_store_associates,
        new_managers_needed=new_managers_needed,
        new_associates_growth=new_associates_growth,
        new_associates_attrition=new_associates_attrition,
        total_new_associates=total_new_associates,
        improved_retention_rate=improved_retention_rate,
        new_attrition_hires=new_attrition_hires,
        reduced_hiring_needs=reduced_hiring_needs,
        total_savings=total_savings,
        current_recruiting_cost=total_new_associates * inputs.recruiting_cost_per_hire,
    )
