# retention_model/schema/results.py
"""
Result types produced by the estimation engine.

Every result is a frozen dataclass created fresh per call. A run's output is
one of two variants, ``CostOnlyResult`` or ``RevenueAndCostResult``; use the
``kind`` tag (or ``isinstance``) to tell them apart.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Union

COST_KIND = "cost"
REVENUE_KIND = "revenue"


@dataclass(frozen=True)
class ConfidenceInterval:
    """Interval estimate; ``lower <= mean <= upper`` always holds."""

    lower: float
    upper: float
    mean: float

    def __post_init__(self):
        if not (self.lower <= self.mean <= self.upper):
            raise ValueError(
                f"Interval bounds out of order: lower={self.lower}, mean={self.mean}, upper={self.upper}"
            )

    @property
    def width(self) -> float:
        return self.upper - self.lower


@dataclass(frozen=True)
class CostSavings:
    """Talent summary and financial impact of the retention improvement."""

    total_store_managers: int
    total_store_associates: int
    new_managers_needed: float
    new_associates_growth: float
    new_associates_attrition: float
    total_new_associates: float
    improved_retention_rate: float
    new_attrition_hires: float
    reduced_hiring_needs: float
    total_savings: float
    current_recruiting_cost: float


@dataclass(frozen=True)
class ServiceQuality:
    current: float
    projected: float
    improvement_percent: float


@dataclass(frozen=True)
class TransactionMetrics:
    average_value: float
    projected_value: float
    annual_increase: float


@dataclass(frozen=True)
class RepeatCustomerMetrics:
    current_rate: float
    projected_rate: float
    additional_visits: float
    revenue_impact: float


@dataclass(frozen=True)
class ValidationResults:
    is_valid: bool
    warnings: List[str] = field(default_factory=list)
    adjusted_estimates: Optional[Dict[str, float]] = None


@dataclass(frozen=True)
class SensitivityAnalysis:
    """Revenue point estimates keyed by the signed shift applied to one elasticity."""

    tenure_impact: Dict[str, float] = field(default_factory=dict)
    service_impact: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class StatisticalMetrics:
    revenue_impact: ConfidenceInterval
    service_quality: ConfidenceInterval
    customer_retention: ConfidenceInterval
    sensitivity_analysis: SensitivityAnalysis
    validation_results: ValidationResults


@dataclass(frozen=True)
class RevenueImpact:
    customer_experience: float
    team_expertise: float
    customer_loyalty: float
    statistics: StatisticalMetrics
    service_quality: ServiceQuality
    transaction_metrics: TransactionMetrics
    repeat_customers: RepeatCustomerMetrics

    @property
    def total_annual_impact(self) -> float:
        return self.customer_experience + self.team_expertise + self.customer_loyalty


@dataclass(frozen=True)
class _ResultBase:
    cost_savings: CostSavings
    kind: ClassVar[str] = ""

    def __getattr__(self, name: str) -> Any:
        # Talent and financial fields read straight through to cost_savings.
        if name != "cost_savings" and name in CostSavings.__dataclass_fields__:
            return getattr(self.cost_savings, name)
        raise AttributeError(f"{type(self).__name__} has no attribute {name!r}")

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, **asdict(self.cost_savings)}


@dataclass(frozen=True)
class CostOnlyResult(_ResultBase):
    """Output of a cost-savings run."""

    kind: ClassVar[str] = COST_KIND


@dataclass(frozen=True)
class RevenueAndCostResult(_ResultBase):
    """Output of a revenue-impact run; always carries the cost-savings fields too."""

    revenue_impact: RevenueImpact
    kind: ClassVar[str] = REVENUE_KIND

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        revenue = asdict(self.revenue_impact)
        revenue["total_annual_impact"] = self.revenue_impact.total_annual_impact
        data["revenue_impact"] = revenue
        return data


CalculationResults = Union[CostOnlyResult, RevenueAndCostResult]
