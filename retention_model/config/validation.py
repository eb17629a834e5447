# retention_model/config/validation.py
"""
Input bounds enforced by the form layer before values reach the engine.

The engine trusts its inputs. These helpers are what callers use to keep
them inside the declared ranges, and to surface inputs that are in range
individually but inconsistent together.
"""

import logging
from typing import Any, Dict, List, Mapping, Union

from pydantic.alias_generators import to_camel

from .models import CompanyInputs

logger = logging.getLogger(__name__)

# Keyed by the camelCase names the form layer uses.
VALIDATION_RULES: Dict[str, Dict[str, float]] = {
    "numberOfStores": {"min": 1, "max": 10000},
    "annualGrowthRate": {"min": 0, "max": 1.0},
    "associatesPerStore": {"min": 1, "max": 100},
    "hoursPerWeek": {"min": 1, "max": 168},
    "hourlyWageCost": {"min": 1, "max": 1000},
    "currentRetentionRate": {"min": 0, "max": 1.0},
    "trainingWeeks": {"min": 0, "max": 52},
    "recruitingCostPerHire": {"min": 0, "max": 100000},
    "retentionImprovement": {"min": 0, "max": 1.0},
    "averageTransactionValue": {"min": 0, "max": 10000},
    "customerSatisfactionScore": {"min": 0, "max": 100},
    "customerLoyaltyRate": {"min": 0, "max": 1.0},
    "marketShare": {"min": 0, "max": 1.0},
}


class InvalidInputRangeError(ValueError):
    """Raised by the strict range check when inputs fall outside their bounds."""

    def __init__(self, violations: Dict[str, Any]):
        self.violations = violations
        details = ", ".join(
            f"{name}={value!r} (allowed {VALIDATION_RULES[name]['min']}-{VALIDATION_RULES[name]['max']})"
            for name, value in violations.items()
        )
        super().__init__(f"Inputs out of range: {details}")


def _rule_key(field: str) -> str:
    key = field if field in VALIDATION_RULES else to_camel(field)
    if key not in VALIDATION_RULES:
        raise KeyError(f"No validation rule for field '{field}'")
    return key


def clamp_value(field: str, value: float) -> float:
    """Clamp a single value to the bounds of ``field`` (camelCase or snake_case)."""
    rule = VALIDATION_RULES[_rule_key(field)]
    return max(rule["min"], min(rule["max"], value))


def clamp_inputs(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of ``raw`` with every ruled field clamped to its bounds.

    Keys are preserved as given; fields without a rule pass through untouched.
    """
    clamped: Dict[str, Any] = {}
    for key, value in raw.items():
        rule_key = key if key in VALIDATION_RULES else to_camel(key)
        if rule_key in VALIDATION_RULES and value is not None:
            new_value = clamp_value(rule_key, value)
            if new_value != value:
                logger.info(f"Clamped {key} from {value} to {new_value}")
            clamped[key] = new_value
        else:
            clamped[key] = value
    return clamped


def check_input_ranges(raw: Union[Mapping[str, Any], CompanyInputs]) -> None:
    """
    Strict alternative to clamping.

    Raises:
        InvalidInputRangeError: listing every field outside its bounds.
    """
    if isinstance(raw, CompanyInputs):
        raw = raw.model_dump(by_alias=True)
    violations = {}
    for key, value in raw.items():
        rule_key = key if key in VALIDATION_RULES else to_camel(key)
        rule = VALIDATION_RULES.get(rule_key)
        if rule is None or value is None:
            continue
        if value < rule["min"] or value > rule["max"]:
            violations[rule_key] = value
    if violations:
        raise InvalidInputRangeError(violations)


def consistency_warnings(inputs: CompanyInputs) -> List[str]:
    """
    Warnings for combinations the engine computes but does not reject.

    Currently flags an improved retention rate above 100%, which makes
    new attrition hires negative and lets reduced hiring needs exceed the
    attrition they replace.
    """
    warnings: List[str] = []
    improved = inputs.improved_retention_rate
    if improved > 1.0:
        warnings.append(
            f"Current retention ({inputs.current_retention_rate:.0%}) plus improvement "
            f"({inputs.retention_improvement:.0%}) exceeds 100% ({improved:.0%}); "
            "attrition hires go negative and projected savings are overstated"
        )
    for message in warnings:
        logger.warning(message)
    return warnings


def inputs_from_form(raw: Mapping[str, Any], clamp: bool = True) -> CompanyInputs:
    """Build ``CompanyInputs`` from a form payload, clamping values first by default."""
    payload = clamp_inputs(raw) if clamp else dict(raw)
    return CompanyInputs(**payload)


__all__ = [
    "VALIDATION_RULES",
    "InvalidInputRangeError",
    "clamp_value",
    "clamp_inputs",
    "check_input_ranges",
    "consistency_warnings",
    "inputs_from_form",
]
