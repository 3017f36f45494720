"""Impact calculator — variable values to per-axis scores.

Contribution of one variable to each axis in its impact map:

    continuous   coefficient * value / 100
    boolean      coefficient if value else 0
    categorical  coefficient * position, position in [-1, +1]

Pure and deterministic. Keys with no registered variable are skipped.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from scenario_engine.errors import OutOfRangeValueError
from scenario_engine.models.axis import Axis, zero_scores
from scenario_engine.models.scenario import ScenarioVariable, ValueAdjustment, VariableKind
from scenario_engine.simulation.registry import VariableRegistry

logger = logging.getLogger(__name__)


def category_position(value: Any, categories: list[str]) -> Optional[float]:
    """Map a category onto [-1, +1]: first -> -1, last -> +1, middle -> 0.

    A single-category list maps to 1. Unknown categories return None.
    """
    if value not in categories:
        return None
    last = len(categories) - 1
    if last == 0:
        return 1.0
    return categories.index(value) / last * 2 - 1


def variable_factor(variable: ScenarioVariable, value: Any) -> float:
    """Scale applied to each of the variable's impact coefficients."""
    if variable.kind == VariableKind.continuous:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return 0.0
        return value / 100
    if variable.kind == VariableKind.boolean:
        return 1.0 if value else 0.0
    position = category_position(value, variable.categories)
    return position if position is not None else 0.0


def compute_base_impact(
    baseline: Mapping[Axis, float],
    registry: VariableRegistry,
    values: Mapping[str, Any],
) -> dict[Axis, float]:
    """Baseline scores plus the summed contribution of every supplied value."""
    scores = zero_scores()
    scores.update(baseline)

    for key, value in values.items():
        variable = registry.get(key)
        if variable is None:
            logger.debug("No variable registered for %s, skipped", key)
            continue
        factor = variable_factor(variable, value)
        if factor == 0.0:
            continue
        for axis, coefficient in variable.impact.items():
            scores[axis] += coefficient * factor

    return scores


def normalize_values(
    registry: VariableRegistry,
    values: Mapping[str, Any],
    strict: bool = False,
) -> tuple[dict[str, Any], list[ValueAdjustment]]:
    """Clamp continuous values into their declared range.

    Non-numeric continuous values and unknown categories are dropped. Every
    change is returned as a ValueAdjustment; with ``strict`` the first one
    raises OutOfRangeValueError instead. Unknown keys pass through untouched.
    """
    normalized: dict[str, Any] = {}
    adjustments: list[ValueAdjustment] = []

    for key, value in values.items():
        variable = registry.get(key)
        if variable is None:
            normalized[key] = value
            continue

        adjustment: Optional[ValueAdjustment] = None
        if variable.kind == VariableKind.continuous:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                adjustment = ValueAdjustment(
                    key=key, requested=value, reason="non-numeric value dropped",
                )
            else:
                clamped = max(variable.lower, min(variable.upper, float(value)))
                if clamped != value:
                    adjustment = ValueAdjustment(
                        key=key,
                        requested=value,
                        applied=clamped,
                        reason=f"clamped into [{variable.lower:g}, {variable.upper:g}]",
                    )
                normalized[key] = clamped
        elif variable.kind == VariableKind.categorical:
            if value in variable.categories:
                normalized[key] = value
            else:
                adjustment = ValueAdjustment(
                    key=key, requested=value, reason="unknown category dropped",
                )
        else:
            normalized[key] = value

        if adjustment is not None:
            if strict:
                raise OutOfRangeValueError(f"{key}: {adjustment.reason} (got {value!r})")
            logger.warning(
                "Value for %s adjusted: %r -> %r (%s)",
                key, adjustment.requested, adjustment.applied, adjustment.reason,
            )
            adjustments.append(adjustment)

    return normalized, adjustments
