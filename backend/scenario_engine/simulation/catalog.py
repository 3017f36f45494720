"""Default variable catalog and interaction rules.

Used when an engine is built without explicit definitions. Factories return
fresh objects so callers can never share or mutate the defaults.
"""
from __future__ import annotations

from scenario_engine.models.axis import Axis
from scenario_engine.models.scenario import (
    EffectKind,
    InteractionEffect,
    ScenarioVariable,
    VariableKind,
)


def default_variables() -> list[ScenarioVariable]:
    return [
        ScenarioVariable(
            key="pricing_strategy",
            label="Pricing strategy",
            kind=VariableKind.categorical,
            value="current",
            categories=["aggressive_low", "competitive", "current", "premium", "value_based"],
            impact={Axis.EC: 0.3, Axis.GO: 0.2, Axis.PT: -0.1},
            dependencies=["market_position", "competitor_response"],
        ),
        ScenarioVariable(
            key="team_expansion",
            label="Team expansion rate",
            kind=VariableKind.continuous,
            value=0.0,
            min=-30,
            max=100,
            step=5,
            impact={Axis.PT: 0.4, Axis.TO: 0.3, Axis.EC: -0.1},
            dependencies=["funding_level", "market_growth"],
        ),
        ScenarioVariable(
            key="marketing_budget",
            label="Marketing budget change",
            kind=VariableKind.continuous,
            value=0.0,
            min=-50,
            max=200,
            step=10,
            impact={Axis.GO: 0.5, Axis.EC: -0.2, Axis.PF: 0.1},
            dependencies=["pricing_strategy", "market_conditions"],
        ),
        ScenarioVariable(
            key="product_features",
            label="Product feature investment",
            kind=VariableKind.continuous,
            value=0.0,
            min=0,
            max=100,
            step=5,
            impact={Axis.PT: 0.6, Axis.GO: 0.3, Axis.PF: 0.4},
            dependencies=["team_expansion", "rd_budget"],
        ),
        ScenarioVariable(
            key="market_conditions",
            label="Market conditions",
            kind=VariableKind.categorical,
            value="stable",
            categories=["recession", "slow", "stable", "growth", "boom"],
            impact={Axis.EC: 0.4, Axis.GO: 0.3, Axis.PF: 0.2},
        ),
        ScenarioVariable(
            key="automation_level",
            label="Automation level",
            kind=VariableKind.continuous,
            value=0.0,
            min=0,
            max=100,
            step=10,
            impact={Axis.TO: 0.5, Axis.EC: 0.3, Axis.PT: -0.1},
            dependencies=["team_expansion", "funding_level"],
        ),
    ]


def _number(values: dict, key: str) -> float:
    value = values.get(key, 0)
    return value if isinstance(value, (int, float)) else 0


def default_effects() -> list[InteractionEffect]:
    return [
        InteractionEffect(
            variables=("pricing_strategy", "marketing_budget"),
            kind=EffectKind.synergy,
            magnitude=1.3,
            affected_axes=(Axis.GO, Axis.EC),
            activation=lambda v: v.get("pricing_strategy") == "premium"
            and _number(v, "marketing_budget") > 50,
            description="Premium pricing backed by heavy marketing",
        ),
        InteractionEffect(
            variables=("team_expansion", "automation_level"),
            kind=EffectKind.conflict,
            magnitude=0.7,
            affected_axes=(Axis.TO, Axis.PT),
            activation=lambda v: _number(v, "team_expansion") > 30
            and _number(v, "automation_level") > 60,
            description="Hiring and automating aggressively at the same time",
        ),
        InteractionEffect(
            variables=("product_features", "team_expansion"),
            kind=EffectKind.amplifying,
            magnitude=1.2,
            affected_axes=(Axis.PT, Axis.PF),
            activation=lambda v: _number(v, "product_features") > 40
            and _number(v, "team_expansion") > 20,
            description="Feature investment staffed by a growing team",
        ),
        InteractionEffect(
            variables=("market_conditions", "pricing_strategy"),
            kind=EffectKind.diminishing,
            magnitude=0.8,
            affected_axes=(Axis.EC, Axis.GO),
            activation=lambda v: v.get("market_conditions") == "recession"
            and v.get("pricing_strategy") == "premium",
            description="Premium pricing during a recession",
        ),
    ]
