# retention_model/config/params.py
"""
Named model coefficients and industry benchmarks.

Every fixed number the estimation engine relies on lives here so that it can
be referenced, tested and tuned from one place.
"""

from types import SimpleNamespace

# --- Calendar ---
DAYS_PER_YEAR = 365

# --- Revenue attribution coefficients ---
# Share of each associate's projected transaction value credited to team expertise.
PRODUCTIVITY_ATTRIBUTION = 0.03
# Share of the retention improvement that carries over into repeat-visit behaviour.
REPEAT_VISIT_ATTRIBUTION = 0.5

# --- Statistics ---
CONFIDENCE_LEVEL = 0.95
Z_SCORE_95 = 1.96
DEFAULT_VARIANCE_COEFFICIENT = 0.2
LOWER_PERCENTILE = 0.025
UPPER_PERCENTILE = 0.975

# --- Monte Carlo defaults ---
DEFAULT_ITERATIONS = 10_000
DEFAULT_PERTURBATION = 0.1
DEFAULT_BATCH_SIZE = 2_500
DEFAULT_MAX_RETRIES = 1

# --- Sensitivity sweep ---
SENSITIVITY_STEPS = (-0.2, -0.1, 0.0, 0.1, 0.2)

# --- Industry benchmarks used by the estimate validator ---
INDUSTRY_BENCHMARKS = SimpleNamespace(
    MIN_TENURE_IMPACT=0.2,
    MAX_TENURE_IMPACT=0.8,
    SERVICE_ELASTICITY=0.4,
    MAX_ELASTICITY_RATIO=2.0,
    CONFIDENCE_LEVEL=CONFIDENCE_LEVEL,
)

