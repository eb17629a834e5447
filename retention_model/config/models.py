# retention_model/config/models.py
"""
Pydantic models for the inputs of an estimation run and for scenario files
loaded from YAML.
"""

import logging
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .params import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_ITERATIONS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_PERTURBATION,
)

logger = logging.getLogger(__name__)


class _FrozenModel(BaseModel):
    """Immutable model accepting both snake_case names and camelCase aliases."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class CompanyInputs(_FrozenModel):
    """
    Operating parameters for one estimation run.

    Types are checked here; value ranges are the caller's concern
    (see ``retention_model.config.validation``).
    """

    number_of_stores: int = Field(..., description="Number of store locations")
    annual_growth_rate: float = Field(..., description="Annual store growth (fraction)")
    associates_per_store: int = Field(..., description="Hourly associates per store")
    hours_per_week: float = Field(..., description="Weekly hours per associate")
    hourly_wage_cost: float = Field(..., description="Loaded hourly wage")
    current_retention_rate: float = Field(..., description="Current retention (fraction)")
    training_weeks: float = Field(..., description="Weeks of paid training per hire")
    recruiting_cost_per_hire: float = Field(..., description="Recruiting cost per hire")
    retention_improvement: float = Field(..., description="Expected retention gain (fraction)")

    # Revenue-mode fields; the form layer leaves them at zero until the revenue screen.
    average_transaction_value: float = 0.0
    customer_satisfaction_score: float = Field(0.0, description="CSAT on a 0-100 scale")
    customer_loyalty_rate: float = Field(0.0, description="Repeat customer rate (fraction)")
    market_share: float = 0.0
    tenure_service_impact: float = Field(
        0.0, description="Tenure -> service elasticity; 0 falls back to the estimations"
    )
    service_transaction_impact: float = Field(
        0.0, description="Service -> transaction elasticity; 0 falls back to the estimations"
    )

    @property
    def improved_retention_rate(self) -> float:
        return self.current_retention_rate + self.retention_improvement


class UserEstimations(_FrozenModel):
    """Benchmark and elasticity assumptions used by the statistical layer."""

    tenure_service_impact: float = 0.3
    service_transaction_impact: float = 0.15
    service_repeat_impact: float = 0.25
    base_transactions_per_day: float = 100
    seasonality_factor: float = 0.2
    competitor_strength: float = 0.5
    market_growth_rate: float = 0.03

    @classmethod
    def from_overrides(cls, overrides: Optional[Mapping[str, Any]] = None) -> "UserEstimations":
        """Build an assumption set where any field not in ``overrides`` keeps its default."""
        return cls(**dict(overrides or {}))

    def with_overrides(self, **overrides: Any) -> "UserEstimations":
        data = self.model_dump()
        data.update(
            {self._field_name(k): v for k, v in overrides.items()}
        )
        return type(self)(**data)

    @classmethod
    def _field_name(cls, key: str) -> str:
        if key in cls.model_fields:
            return key
        for name, info in cls.model_fields.items():
            if info.alias == key:
                return name
        raise KeyError(f"Unknown estimation field: {key}")


DEFAULT_ESTIMATIONS = UserEstimations()


class SimulationSettings(_FrozenModel):
    """Knobs for the Monte Carlo simulator."""

    iterations: int = Field(DEFAULT_ITERATIONS, ge=1)
    perturbation: float = Field(DEFAULT_PERTURBATION, ge=0.0)
    seed: Optional[int] = None
    batch_size: int = Field(DEFAULT_BATCH_SIZE, ge=1)
    workers: int = Field(1, ge=1)
    max_retries: int = Field(DEFAULT_MAX_RETRIES, ge=0)


class ScenarioConfig(_FrozenModel):
    """A complete scenario: company inputs, assumption overrides and simulation settings."""

    name: str = "scenario"
    mode: str = "revenue"
    company_inputs: CompanyInputs
    estimations: UserEstimations = Field(default_factory=UserEstimations)
    simulation: SimulationSettings = Field(default_factory=SimulationSettings)

    @model_validator(mode="after")
    def check_mode(self) -> "ScenarioConfig":
        if self.mode not in ("cost", "revenue"):
            raise ValueError(f"Invalid mode '{self.mode}'; expected 'cost' or 'revenue'")
        return self
