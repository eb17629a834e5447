# retention_model/reporting/summary.py
"""
Flat summaries of an estimation result for reports and data sinks.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd

from retention_model.config.models import CompanyInputs
from retention_model.schema.results import CalculationResults, RevenueAndCostResult

logger = logging.getLogger(__name__)


class DataWriteError(Exception):
    """Custom exception for errors during result writing."""

    pass


def format_currency(amount: float) -> str:
    """Format as whole US dollars, e.g. ``$720,000`` or ``-$1,500``."""
    rounded = round(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,.0f}"


def format_percentage(value: float) -> str:
    """Format a fraction with one decimal, e.g. ``0.125`` -> ``12.5%``."""
    return f"{value * 100:.1f}%"


def build_summary_record(inputs: CompanyInputs, result: CalculationResults) -> Dict[str, Any]:
    """
    Labelled record of the headline figures, as handed to CRM / report sinks.

    Revenue figures are zero for cost-only results.
    """
    record: Dict[str, Any] = {
        "Number of Stores": inputs.number_of_stores,
        "Associates per Store": inputs.associates_per_store,
        "Current Retention Rate": inputs.current_retention_rate * 100,
        "Average Transaction Value": inputs.average_transaction_value,
        "Customer Satisfaction Score": inputs.customer_satisfaction_score,
        "Annual Hiring Needs": result.total_new_associates,
        "Current Recruiting Costs": result.current_recruiting_cost,
        "Projected Savings": result.total_savings,
        "Customer Experience Impact": 0.0,
        "Team Expertise Value": 0.0,
        "Customer Loyalty Benefit": 0.0,
    }
    if isinstance(result, RevenueAndCostResult):
        revenue = result.revenue_impact
        interval = revenue.statistics.revenue_impact
        record.update(
            {
                "Customer Experience Impact": revenue.customer_experience,
                "Team Expertise Value": revenue.team_expertise,
                "Customer Loyalty Benefit": revenue.customer_loyalty,
                "Total Annual Impact": revenue.total_annual_impact,
                "Simulated Impact Lower": interval.lower,
                "Simulated Impact Upper": interval.upper,
                "Estimates Valid": revenue.statistics.validation_results.is_valid,
            }
        )
    return record


def results_to_frame(result: CalculationResults) -> pd.DataFrame:
    """
    Long-format DataFrame with one row per metric.

    Columns: ``section``, ``metric``, ``value``.
    """
    rows = [
        {"section": "talent", "metric": name, "value": value}
        for name, value in result.to_dict().items()
        if name not in ("kind", "revenue_impact")
    ]
    if isinstance(result, RevenueAndCostResult):
        revenue = result.revenue_impact
        stats = revenue.statistics
        for metric in ("customer_experience", "team_expertise", "customer_loyalty", "total_annual_impact"):
            rows.append({"section": "revenue", "metric": metric, "value": getattr(revenue, metric)})
        for block_name in ("service_quality", "transaction_metrics", "repeat_customers"):
            block = getattr(revenue, block_name)
            for key, value in vars(block).items():
                rows.append({"section": block_name, "metric": key, "value": value})
        for ci_name in ("revenue_impact", "service_quality", "customer_retention"):
            interval = getattr(stats, ci_name)
            for bound in ("lower", "mean", "upper"):
                rows.append(
                    {"section": f"interval.{ci_name}", "metric": bound, "value": getattr(interval, bound)}
                )
        for channel, sweep in (
            ("tenure_impact", stats.sensitivity_analysis.tenure_impact),
            ("service_impact", stats.sensitivity_analysis.service_impact),
        ):
            for step, value in sweep.items():
                rows.append({"section": f"sensitivity.{channel}", "metric": step, "value": value})

    return pd.DataFrame(rows, columns=["section", "metric", "value"])


def write_results(
    result: CalculationResults,
    output_dir: Path,
    inputs: Optional[CompanyInputs] = None,
    file_prefix: str = "retention_impact",
) -> Dict[str, Path]:
    """
    Writes the metric table as CSV and the full result as JSON.

    Raises:
        DataWriteError: If writing fails.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    csv_path = output_dir / f"{file_prefix}_metrics.csv"
    json_path = output_dir / f"{file_prefix}.json"

    payload: Dict[str, Any] = {"result": result.to_dict()}
    if inputs is not None:
        payload["inputs"] = inputs.model_dump()
        payload["summary"] = build_summary_record(inputs, result)

    try:
        results_to_frame(result).to_csv(csv_path, index=False)
        with open(json_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, default=float)
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Failed to write results to {output_dir}: {e}")
        raise DataWriteError(f"Failed to write results to {output_dir}") from e

    logger.info(f"Results written to {csv_path} and {json_path}")
    return {"csv": csv_path, "json": json_path}
