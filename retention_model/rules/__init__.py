from .validators import EstimateValidator, apply_adjustments, validate_estimates

__all__ = ["EstimateValidator", "apply_adjustments", "validate_estimates"]
