"""Scenario simulation package."""
from scenario_engine.simulation.catalog import default_effects, default_variables
from scenario_engine.simulation.registry import InteractionRuleSet, VariableRegistry
from scenario_engine.simulation.impact import compute_base_impact, normalize_values
from scenario_engine.simulation.interactions import apply_effects, resolve_effects
from scenario_engine.simulation.monte_carlo import run_monte_carlo
from scenario_engine.simulation.sensitivity import analyze_sensitivity
from scenario_engine.simulation.recommendations import generate_recommendations
from scenario_engine.simulation.engine import ScenarioEngine

__all__ = [
    "default_variables",
    "default_effects",
    "VariableRegistry",
    "InteractionRuleSet",
    "compute_base_impact",
    "normalize_values",
    "resolve_effects",
    "apply_effects",
    "run_monte_carlo",
    "analyze_sensitivity",
    "generate_recommendations",
    "ScenarioEngine",
]
