"""Scenario definitions and result contracts."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, model_validator

from scenario_engine.models.axis import Axis

# Continuous variables without a declared range are bounded to this.
DEFAULT_RANGE = (-100.0, 100.0)


class VariableKind(str, Enum):
    continuous = "continuous"
    boolean = "boolean"
    categorical = "categorical"


class EffectKind(str, Enum):
    """Advisory label only; the engine applies the literal magnitude."""
    synergy = "synergy"
    conflict = "conflict"
    amplifying = "amplifying"
    diminishing = "diminishing"


class ScenarioVariable(BaseModel):
    """An adjustable lever with a declared per-axis impact coefficient."""
    key: str
    label: str = ""
    kind: VariableKind
    value: Union[bool, float, str] = 0.0
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    categories: list[str] = []
    impact: dict[Axis, float] = {}
    dependencies: list[str] = []  # UI ordering metadata, not enforced

    @model_validator(mode="after")
    def _check_kind_fields(self) -> "ScenarioVariable":
        if self.kind == VariableKind.continuous:
            if self.min is not None and self.max is not None and self.min > self.max:
                raise ValueError(f"{self.key}: min {self.min} exceeds max {self.max}")
        elif self.kind == VariableKind.categorical and not self.categories:
            raise ValueError(f"{self.key}: categorical variable needs at least one category")
        return self

    @property
    def lower(self) -> float:
        return self.min if self.min is not None else DEFAULT_RANGE[0]

    @property
    def upper(self) -> float:
        return self.max if self.max is not None else DEFAULT_RANGE[1]


ActivationPredicate = Callable[[dict[str, Any]], bool]


@dataclass(frozen=True)
class InteractionEffect:
    """Conditional multiplier on one or more axes.

    The activation predicate sees the full value assignment, not only the
    variables listed in ``variables``. No predicate means always active.
    """
    variables: tuple[str, ...]
    kind: EffectKind
    magnitude: float
    affected_axes: tuple[Axis, ...]
    activation: Optional[ActivationPredicate] = None
    description: str = ""

    def __post_init__(self) -> None:
        if len(set(self.variables)) < 2:
            raise ValueError("an interaction effect must reference at least two variables")

    def is_active(self, values: dict[str, Any]) -> bool:
        if self.activation is None:
            return True
        return bool(self.activation(values))


class MonteCarloConfig(BaseModel):
    """Configuration for one Monte Carlo run."""
    iterations: int = 1000
    confidence_interval: float = 95.0  # percent, exclusive (0, 100)
    risk_threshold: float = 0.1
    variability_factor: float = 0.15
    seed: Optional[int] = None
    workers: int = 1


class ConfidenceBounds(BaseModel):
    model_config = ConfigDict(frozen=True)

    lower: float
    upper: float


class RiskMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    volatility: dict[Axis, float]
    worst_case: dict[Axis, float]
    best_case: dict[Axis, float]
    probability: dict[Axis, float]


class MonteCarloResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    iterations: int
    confidence_interval: dict[Axis, ConfidenceBounds]
    risk_metrics: RiskMetrics


class EffectDescriptor(BaseModel):
    """Serializable view of an interaction effect (predicate omitted)."""
    variables: list[str]
    kind: EffectKind
    magnitude: float
    affected_axes: list[Axis]
    description: str = ""

    @classmethod
    def from_effect(cls, effect: InteractionEffect) -> "EffectDescriptor":
        return cls(
            variables=list(effect.variables),
            kind=effect.kind,
            magnitude=effect.magnitude,
            affected_axes=list(effect.affected_axes),
            description=effect.description,
        )


class InteractionSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    detected: list[EffectDescriptor]
    impact: dict[Axis, float]


class RecommendationType(str, Enum):
    optimization = "optimization"
    risk_mitigation = "risk-mitigation"
    opportunity = "opportunity"
    warning = "warning"


class Priority(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"


class Timeframe(str, Enum):
    immediate = "immediate"
    short = "short"
    medium = "medium"
    long = "long"


class Recommendation(BaseModel):
    type: RecommendationType
    priority: Priority
    title: str
    description: str
    suggested_actions: list[str]
    expected_impact: dict[Axis, float]
    timeframe: Timeframe


class ValueAdjustment(BaseModel):
    """Records a supplied value the engine clamped or dropped."""
    key: str
    requested: Any
    applied: Any = None
    reason: str


class ScenarioResult(BaseModel):
    """Output of a full scenario run.

    Fields and nested models are frozen. The score, interval and sensitivity
    dicts are fresh copies built for this result: editing them changes only
    this object, never the engine or any other result.
    """
    model_config = ConfigDict(frozen=True)

    baseline_scores: dict[Axis, float]
    projected_scores: dict[Axis, float]
    confidence_interval: dict[Axis, ConfidenceBounds]
    risk_metrics: RiskMetrics
    interaction_effects: InteractionSummary
    sensitivity: dict[str, dict[Axis, float]]
    recommendations: list[Recommendation]
    adjustments: list[ValueAdjustment] = []
    simulation_config: MonteCarloConfig
    computed_at: datetime
