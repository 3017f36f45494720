"""Recommendation generator — deterministic rules over simulation output.

Rules, evaluated in this order:
  1. risk-mitigation  one high-priority item per axis with volatility > 15
  2. optimization     one high-priority item for the most sensitive variable
  3. opportunity      one medium-priority item per axis with best case > projected + 20

The result is stably sorted high > medium > low, so ties keep rule order.
Degenerate input yields an empty list, never an error.
"""
from __future__ import annotations

from typing import Callable, Mapping, Optional

from scenario_engine.models.axis import AXIS_NAMES, Axis
from scenario_engine.models.scenario import (
    MonteCarloResult,
    Priority,
    Recommendation,
    RecommendationType,
    Timeframe,
)

VOLATILITY_THRESHOLD = 15.0
UPSIDE_THRESHOLD = 20.0

_PRIORITY_RANK = {Priority.high: 0, Priority.medium: 1, Priority.low: 2}

Rule = Callable[
    [Mapping[Axis, float], MonteCarloResult, Mapping[str, Mapping[Axis, float]]],
    list[Recommendation],
]


def _risk_mitigation(
    projected: Mapping[Axis, float],
    monte_carlo: MonteCarloResult,
    sensitivity: Mapping[str, Mapping[Axis, float]],
) -> list[Recommendation]:
    items: list[Recommendation] = []
    for axis, volatility in monte_carlo.risk_metrics.volatility.items():
        if volatility <= VOLATILITY_THRESHOLD:
            continue
        name = AXIS_NAMES[axis]
        items.append(Recommendation(
            type=RecommendationType.risk_mitigation,
            priority=Priority.high,
            title=f"Reduce {name} volatility",
            description=(
                f"{name} is unstable across simulated outcomes "
                f"(volatility {volatility:.1f}). Stabilise it before scaling changes."
            ),
            suggested_actions=[
                "Diversify revenue sources",
                "Put a risk-hedging plan in place",
                "Roll changes out in stages",
            ],
            expected_impact={axis: -volatility * 0.3},
            timeframe=Timeframe.medium,
        ))
    return items


def most_sensitive_variable(
    sensitivity: Mapping[str, Mapping[Axis, float]],
) -> Optional[str]:
    """Variable with the largest summed absolute sensitivity; None if all zero."""
    best_key, best_total = None, 0.0
    for key, row in sensitivity.items():
        total = sum(abs(v) for v in row.values())
        if total > best_total:
            best_key, best_total = key, total
    return best_key


def _optimization(
    projected: Mapping[Axis, float],
    monte_carlo: MonteCarloResult,
    sensitivity: Mapping[str, Mapping[Axis, float]],
) -> list[Recommendation]:
    key = most_sensitive_variable(sensitivity)
    if key is None:
        return []
    return [Recommendation(
        type=RecommendationType.optimization,
        priority=Priority.high,
        title=f"Optimise {key}",
        description=f"{key} moves the scores more than any other lever. Tune it first.",
        suggested_actions=[
            "Review the current setting",
            "Run an A/B test",
            "Adjust gradually and monitor",
        ],
        expected_impact=dict(sensitivity[key]),
        timeframe=Timeframe.short,
    )]


def _opportunity(
    projected: Mapping[Axis, float],
    monte_carlo: MonteCarloResult,
    sensitivity: Mapping[str, Mapping[Axis, float]],
) -> list[Recommendation]:
    items: list[Recommendation] = []
    best_case = monte_carlo.risk_metrics.best_case
    for axis, score in projected.items():
        if axis not in best_case:
            continue
        upside = best_case[axis] - score
        if upside <= UPSIDE_THRESHOLD:
            continue
        name = AXIS_NAMES[axis]
        items.append(Recommendation(
            type=RecommendationType.opportunity,
            priority=Priority.medium,
            title=f"Capture {name} upside",
            description=f"{name} can gain up to {upside:.1f} more points in favourable outcomes.",
            suggested_actions=[
                "Study the best-case trials",
                "Concentrate resources on the drivers",
                "Tighten KPI monitoring",
            ],
            expected_impact={axis: upside * 0.6},
            timeframe=Timeframe.medium,
        ))
    return items


_RULES: tuple[Rule, ...] = (_risk_mitigation, _optimization, _opportunity)


def generate_recommendations(
    projected: Mapping[Axis, float],
    monte_carlo: MonteCarloResult,
    sensitivity: Mapping[str, Mapping[Axis, float]],
) -> list[Recommendation]:
    items: list[Recommendation] = []
    for rule in _RULES:
        items.extend(rule(projected, monte_carlo, sensitivity))
    return sorted(items, key=lambda r: _PRIORITY_RANK[r.priority])
