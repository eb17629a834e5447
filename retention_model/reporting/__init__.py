from .metrics import (
    PERCENT_BOUNDS,
    RATE_BOUNDS,
    ConfidenceIntervalEstimator,
    calculate_confidence_interval,
    run_sensitivity_analysis,
    z_score,
)
from .summary import (
    DataWriteError,
    build_summary_record,
    format_currency,
    format_percentage,
    results_to_frame,
    write_results,
)

__all__ = [
    "PERCENT_BOUNDS",
    "RATE_BOUNDS",
    "ConfidenceIntervalEstimator",
    "calculate_confidence_interval",
    "run_sensitivity_analysis",
    "z_score",
    "DataWriteError",
    "build_summary_record",
    "format_currency",
    "format_percentage",
    "results_to_frame",
    "write_results",
]
