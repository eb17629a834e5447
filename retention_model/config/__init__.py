"""
Configuration for the retention model: input models, named coefficients,
input bounds and scenario loading.
"""

from .models import (
    CompanyInputs,
    UserEstimations,
    SimulationSettings,
    ScenarioConfig,
    DEFAULT_ESTIMATIONS,
)
from .validation import (
    VALIDATION_RULES,
    InvalidInputRangeError,
    clamp_inputs,
    clamp_value,
    check_input_ranges,
    consistency_warnings,
    inputs_from_form,
)
from .loaders import ConfigLoadError, load_scenario_config, load_scenario_directory, parse_scenario

__all__ = [
    "CompanyInputs",
    "UserEstimations",
    "SimulationSettings",
    "ScenarioConfig",
    "DEFAULT_ESTIMATIONS",
    "VALIDATION_RULES",
    "InvalidInputRangeError",
    "clamp_inputs",
    "clamp_value",
    "check_input_ranges",
    "consistency_warnings",
    "inputs_from_form",
    "ConfigLoadError",
    "load_scenario_config",
    "load_scenario_directory",
    "parse_scenario",
]
