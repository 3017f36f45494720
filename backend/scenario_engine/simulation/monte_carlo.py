"""Monte Carlo simulator.

Perturbs continuous variables with uniform noise, re-evaluates the full
scenario for each trial, and reduces the per-axis samples to confidence
intervals and risk metrics.

Trials run in fixed-size chunks. Each chunk gets its own seed drawn from the
master generator before anything is dispatched, so the samples are the same
whether chunks run sequentially or on a thread pool.
"""
from __future__ import annotations

import logging
import math
import random
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Mapping, Optional

import numpy as np

from scenario_engine.errors import InvalidConfigError, SimulationCancelledError
from scenario_engine.models.axis import AXES, Axis
from scenario_engine.models.scenario import (
    ConfidenceBounds,
    MonteCarloConfig,
    MonteCarloResult,
    RiskMetrics,
    VariableKind,
)
from scenario_engine.simulation.registry import VariableRegistry

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 250

Evaluator = Callable[[dict[str, Any]], dict[Axis, float]]


def validate_config(config: MonteCarloConfig, max_iterations: Optional[int] = None) -> None:
    if config.iterations < 1:
        raise InvalidConfigError(f"iterations must be at least 1, got {config.iterations}")
    if max_iterations is not None and config.iterations > max_iterations:
        raise InvalidConfigError(
            f"iterations {config.iterations} exceeds the ceiling of {max_iterations}"
        )
    if not 0 < config.confidence_interval < 100:
        raise InvalidConfigError(
            f"confidence_interval must be in (0, 100), got {config.confidence_interval}"
        )
    if config.variability_factor < 0:
        raise InvalidConfigError("variability_factor must be non-negative")
    if not 0 <= config.risk_threshold <= 1:
        raise InvalidConfigError("risk_threshold must be in [0, 1]")
    if config.workers < 1:
        raise InvalidConfigError("workers must be at least 1")


def perturb_values(
    registry: VariableRegistry,
    values: Mapping[str, Any],
    variability_factor: float,
    rng: random.Random,
) -> dict[str, Any]:
    """Add U(-f*100, +f*100) noise to each continuous value, clamped to its range.

    Boolean and categorical values are left as they are.
    """
    perturbed = dict(values)
    spread = variability_factor * 100
    for key, value in values.items():
        variable = registry.get(key)
        if variable is None or variable.kind != VariableKind.continuous:
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        noisy = value + rng.uniform(-spread, spread)
        perturbed[key] = max(variable.lower, min(variable.upper, noisy))
    return perturbed


def _run_chunk(
    seed: int,
    n_trials: int,
    values: Mapping[str, Any],
    registry: VariableRegistry,
    evaluate: Evaluator,
    variability_factor: float,
    should_stop: Callable[[], bool],
) -> dict[Axis, list[float]]:
    rng = random.Random(seed)
    samples: dict[Axis, list[float]] = {axis: [] for axis in AXES}
    for _ in range(n_trials):
        if should_stop():
            raise SimulationCancelledError("Monte Carlo run cancelled before completion")
        scores = evaluate(perturb_values(registry, values, variability_factor, rng))
        for axis in AXES:
            samples[axis].append(scores[axis])
    return samples


def _percentile_index(percentile: float, n: int) -> int:
    return min(max(math.floor(percentile / 100 * n), 0), n - 1)


def summarize_samples(
    samples: Mapping[Axis, list[float]],
    point_scores: Mapping[Axis, float],
    confidence_interval: float,
) -> tuple[dict[Axis, ConfidenceBounds], RiskMetrics]:
    """Percentile interval plus volatility / worst / best / exceedance per axis.

    The interval is widened to contain the point projection when the sample
    percentiles fall entirely on one side of it.
    """
    bounds: dict[Axis, ConfidenceBounds] = {}
    volatility: dict[Axis, float] = {}
    worst_case: dict[Axis, float] = {}
    best_case: dict[Axis, float] = {}
    probability: dict[Axis, float] = {}

    for axis in AXES:
        arr = np.sort(np.asarray(samples[axis], dtype=float))
        n = arr.size
        point = float(point_scores[axis])
        lower = float(arr[_percentile_index((100 - confidence_interval) / 2, n)])
        upper = float(arr[_percentile_index((100 + confidence_interval) / 2, n)])

        bounds[axis] = ConfidenceBounds(lower=min(lower, point), upper=max(upper, point))
        volatility[axis] = float(arr.std())
        worst_case[axis] = float(arr[0])
        best_case[axis] = float(arr[-1])
        probability[axis] = float(np.count_nonzero(arr > point)) / n

    return bounds, RiskMetrics(
        volatility=volatility,
        worst_case=worst_case,
        best_case=best_case,
        probability=probability,
    )


def run_monte_carlo(
    values: Mapping[str, Any],
    point_scores: Mapping[Axis, float],
    config: MonteCarloConfig,
    registry: VariableRegistry,
    evaluate: Evaluator,
    rng: Optional[random.Random] = None,
    cancel_event: Optional[threading.Event] = None,
    deadline: Optional[float] = None,
    max_iterations: Optional[int] = None,
) -> MonteCarloResult:
    """Run ``config.iterations`` perturbed trials of ``evaluate``.

    ``rng`` overrides ``config.seed``. ``deadline`` is a ``time.monotonic()``
    timestamp; passing it, or setting ``cancel_event``, raises
    SimulationCancelledError and discards all samples.
    """
    validate_config(config, max_iterations)
    if rng is None:
        rng = random.Random(config.seed)

    chunk_sizes = [
        min(_CHUNK_SIZE, config.iterations - start)
        for start in range(0, config.iterations, _CHUNK_SIZE)
    ]
    seeds = [rng.getrandbits(32) for _ in chunk_sizes]

    def should_stop() -> bool:
        if cancel_event is not None and cancel_event.is_set():
            return True
        return deadline is not None and time.monotonic() > deadline

    args = (values, registry, evaluate, config.variability_factor, should_stop)
    workers = min(config.workers, len(chunk_sizes))
    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(_run_chunk, seed, size, *args)
                for seed, size in zip(seeds, chunk_sizes)
            ]
            chunks = [future.result() for future in futures]
    else:
        chunks = [_run_chunk(seed, size, *args) for seed, size in zip(seeds, chunk_sizes)]

    samples: dict[Axis, list[float]] = {axis: [] for axis in AXES}
    for chunk in chunks:
        for axis in AXES:
            samples[axis].extend(chunk[axis])

    bounds, risk = summarize_samples(samples, point_scores, config.confidence_interval)
    logger.info(
        "Monte Carlo complete: %d iterations, %d chunks, %d workers",
        config.iterations, len(chunk_sizes), workers,
    )
    return MonteCarloResult(
        iterations=config.iterations,
        confidence_interval=bounds,
        risk_metrics=risk,
    )
