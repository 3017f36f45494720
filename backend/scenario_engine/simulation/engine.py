"""Scenario engine. One run of an assignment produces a ScenarioResult.

Definitions and baseline scores are instance state. Nothing is shared
between engines and nothing is mutated during a run.
"""
from __future__ import annotations

import logging
import random
import threading
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional

from scenario_engine.config import settings
from scenario_engine.models.axis import Axis, clamp_scores, zero_scores
from scenario_engine.models.scenario import (
    InteractionEffect,
    MonteCarloConfig,
    MonteCarloResult,
    ScenarioResult,
    ScenarioVariable,
)
from scenario_engine.simulation.catalog import default_effects, default_variables
from scenario_engine.simulation.impact import compute_base_impact, normalize_values
from scenario_engine.simulation.interactions import (
    apply_effects,
    resolve_effects,
    summarize_effects,
)
from scenario_engine.simulation.monte_carlo import run_monte_carlo, validate_config
from scenario_engine.simulation.recommendations import generate_recommendations
from scenario_engine.simulation.registry import InteractionRuleSet, VariableRegistry
from scenario_engine.simulation.sensitivity import analyze_sensitivity

logger = logging.getLogger(__name__)


class ScenarioEngine:
    """Runs what-if scenarios over one set of variable and effect definitions."""

    def __init__(
        self,
        variables: Optional[Iterable[ScenarioVariable]] = None,
        effects: Optional[Iterable[InteractionEffect]] = None,
        baseline_scores: Optional[Mapping[Axis, float]] = None,
        strict: Optional[bool] = None,
        max_iterations: Optional[int] = None,
    ) -> None:
        self.variables = VariableRegistry(
            default_variables() if variables is None else variables
        )
        self.rules = InteractionRuleSet(
            self.variables, default_effects() if effects is None else effects
        )
        self.strict = settings.STRICT_VARIABLE_RANGES if strict is None else strict
        self.max_iterations = (
            settings.MC_MAX_ITERATIONS if max_iterations is None else max_iterations
        )
        self._baseline = clamp_scores(baseline_scores or zero_scores())

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    @property
    def baseline_scores(self) -> dict[Axis, float]:
        return dict(self._baseline)

    def set_baseline_scores(self, scores: Mapping[Axis, float]) -> None:
        self._baseline = clamp_scores(scores)

    def update_variable(self, key: str, **changes: Any) -> Optional[ScenarioVariable]:
        return self.variables.update_variable(key, **changes)

    def with_baseline(self, scores: Mapping[Axis, float]) -> "ScenarioEngine":
        """Independent engine with the same definitions and new baseline scores."""
        return ScenarioEngine(
            variables=self.variables.list(),
            effects=list(self.rules),
            baseline_scores=scores,
            strict=self.strict,
            max_iterations=self.max_iterations,
        )

    # ------------------------------------------------------------------
    # Single evaluations
    # ------------------------------------------------------------------
    def compute_base_impact(self, values: Mapping[str, Any]) -> dict[Axis, float]:
        return compute_base_impact(self._baseline, self.variables, values)

    def active_effects(self, values: Mapping[str, Any]) -> list[InteractionEffect]:
        return resolve_effects(self.rules, values)

    def evaluate(self, values: Mapping[str, Any]) -> dict[Axis, float]:
        """Base impact, then interaction multipliers, then clamp to [0, 100]."""
        scores = apply_effects(self.compute_base_impact(values), self.active_effects(values))
        return clamp_scores(scores)

    def analyze_sensitivity(self, values: Mapping[str, Any]) -> dict[str, dict[Axis, float]]:
        return analyze_sensitivity(self._baseline, self.variables, values)

    # ------------------------------------------------------------------
    # Stochastic runs
    # ------------------------------------------------------------------
    def simulate(
        self,
        values: Mapping[str, Any],
        config: Optional[MonteCarloConfig] = None,
        rng: Optional[random.Random] = None,
        cancel_event: Optional[threading.Event] = None,
        deadline: Optional[float] = None,
    ) -> MonteCarloResult:
        """Monte Carlo run around the projection of the normalized ``values``."""
        config = config or MonteCarloConfig(iterations=settings.MC_DEFAULT_ITERATIONS)
        normalized, _ = normalize_values(self.variables, values, strict=self.strict)
        return run_monte_carlo(
            normalized,
            self.evaluate(normalized),
            config,
            self.variables,
            self.evaluate,
            rng=rng,
            cancel_event=cancel_event,
            deadline=deadline,
            max_iterations=self.max_iterations,
        )

    def run_scenario(
        self,
        values: Mapping[str, Any],
        config: Optional[MonteCarloConfig] = None,
        rng: Optional[random.Random] = None,
        cancel_event: Optional[threading.Event] = None,
        deadline: Optional[float] = None,
    ) -> ScenarioResult:
        """Full run: projection, Monte Carlo, sensitivity and recommendations."""
        config = config or MonteCarloConfig(iterations=settings.MC_DEFAULT_ITERATIONS)
        validate_config(config, self.max_iterations)
        normalized, adjustments = normalize_values(self.variables, values, strict=self.strict)

        logger.info(
            "Running scenario: %d values, %d iterations, seed=%s",
            len(normalized), config.iterations, config.seed,
        )
        active = self.active_effects(normalized)
        projected = clamp_scores(apply_effects(self.compute_base_impact(normalized), active))

        monte_carlo = run_monte_carlo(
            normalized,
            projected,
            config,
            self.variables,
            self.evaluate,
            rng=rng,
            cancel_event=cancel_event,
            deadline=deadline,
            max_iterations=self.max_iterations,
        )
        sensitivity = self.analyze_sensitivity(normalized)
        recommendations = generate_recommendations(projected, monte_carlo, sensitivity)

        return ScenarioResult(
            baseline_scores=self.baseline_scores,
            projected_scores=projected,
            confidence_interval=monte_carlo.confidence_interval,
            risk_metrics=monte_carlo.risk_metrics,
            interaction_effects=summarize_effects(active),
            sensitivity=sensitivity,
            recommendations=recommendations,
            adjustments=adjustments,
            simulation_config=config,
            computed_at=datetime.now(timezone.utc),
        )
