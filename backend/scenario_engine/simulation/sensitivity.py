"""Sensitivity analyzer — finite-difference marginal effects.

Only continuous variables are analysed; boolean and categorical levers have
no meaningful unit step and are left out of the output entirely.
"""
from __future__ import annotations

from typing import Any, Mapping

from scenario_engine.models.axis import AXES, Axis
from scenario_engine.simulation.impact import compute_base_impact
from scenario_engine.simulation.registry import VariableRegistry

_STEP = 10.0  # absolute units on the 0-100 input scale


def analyze_sensitivity(
    baseline: Mapping[Axis, float],
    registry: VariableRegistry,
    values: Mapping[str, Any],
) -> dict[str, dict[Axis, float]]:
    """Per-unit change in each axis for a +10 bump of each continuous variable.

    Variables missing from ``values`` are evaluated at their default value.
    """
    sensitivity: dict[str, dict[Axis, float]] = {}

    for variable in registry.continuous():
        current = dict(values)
        current.setdefault(variable.key, variable.value)
        base_value = current[variable.key]
        if isinstance(base_value, bool) or not isinstance(base_value, (int, float)):
            continue

        base = compute_base_impact(baseline, registry, current)
        bumped = compute_base_impact(
            baseline, registry, {**current, variable.key: base_value + _STEP},
        )
        sensitivity[variable.key] = {
            axis: (bumped[axis] - base[axis]) / _STEP for axis in AXES
        }

    return sensitivity
