from fastapi import Request

from scenario_engine.services.scenario_service import build_engine
from scenario_engine.simulation.engine import ScenarioEngine


def get_scenario_engine(request: Request) -> ScenarioEngine:
    """FastAPI dependency returning the app's engine, built on first use."""
    engine = getattr(request.app.state, "scenario_engine", None)
    if engine is None:
        engine = build_engine()
        request.app.state.scenario_engine = engine
    return engine
