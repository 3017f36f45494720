"""Scenario orchestration service.

Owns construction of the application's scenario engine and runs requests
against it without mutating its baseline.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Mapping, Optional

from scenario_engine.config import settings
from scenario_engine.models.axis import Axis
from scenario_engine.models.scenario import (
    EffectDescriptor,
    MonteCarloConfig,
    ScenarioResult,
    ScenarioVariable,
)
from scenario_engine.simulation.engine import ScenarioEngine

logger = logging.getLogger(__name__)


def build_engine() -> ScenarioEngine:
    """Engine over the default catalog, configured from settings."""
    engine = ScenarioEngine()
    logger.info(
        "Scenario engine ready: %d variables, %d interaction effects",
        len(engine.variables), len(engine.rules),
    )
    return engine


def default_config() -> MonteCarloConfig:
    return MonteCarloConfig(
        iterations=settings.MC_DEFAULT_ITERATIONS,
        workers=settings.MC_WORKERS,
    )


def run_scenario(
    engine: ScenarioEngine,
    values: Mapping[str, Any],
    baseline_scores: Optional[Mapping[Axis, float]] = None,
    config: Optional[MonteCarloConfig] = None,
) -> ScenarioResult:
    """Run one scenario with the configured deadline.

    A request-supplied baseline runs on a copy of the engine.
    """
    target = engine.with_baseline(baseline_scores) if baseline_scores is not None else engine
    deadline = time.monotonic() + settings.MC_TIMEOUT_SECONDS
    return target.run_scenario(values, config or default_config(), deadline=deadline)


def list_variables(engine: ScenarioEngine) -> list[ScenarioVariable]:
    return engine.variables.list()


def list_effects(engine: ScenarioEngine) -> list[EffectDescriptor]:
    return [EffectDescriptor.from_effect(effect) for effect in engine.rules]
