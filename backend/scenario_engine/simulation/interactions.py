"""Interaction resolver: activates conditional multipliers and applies them to scores."""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from scenario_engine.models.axis import Axis, zero_scores
from scenario_engine.models.scenario import (
    EffectDescriptor,
    InteractionEffect,
    InteractionSummary,
)


def resolve_effects(
    effects: Iterable[InteractionEffect],
    values: Mapping[str, Any],
) -> list[InteractionEffect]:
    """Effects whose predicate holds for ``values``, in declaration order."""
    assignment = dict(values)
    return [effect for effect in effects if effect.is_active(assignment)]


def apply_effects(
    scores: Mapping[Axis, float],
    active: Iterable[InteractionEffect],
) -> dict[Axis, float]:
    """Multiply each affected axis by the effect magnitude.

    Effects on the same axis compound. No clamping here.
    """
    adjusted = dict(scores)
    for effect in active:
        for axis in effect.affected_axes:
            adjusted[axis] *= effect.magnitude
    return adjusted


def summarize_effects(active: Iterable[InteractionEffect]) -> InteractionSummary:
    """Report effects that change anything plus (magnitude - 1) * 10 per axis."""
    active = list(active)
    impact = zero_scores()
    for effect in active:
        for axis in effect.affected_axes:
            impact[axis] += (effect.magnitude - 1) * 10
    return InteractionSummary(
        detected=[EffectDescriptor.from_effect(e) for e in active if e.magnitude != 1],
        impact=impact,
    )
