from fastapi import APIRouter, Depends

from scenario_engine.api.deps import get_scenario_engine
from scenario_engine.ml.forecast_models import list_models
from scenario_engine.simulation.engine import ScenarioEngine

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(engine: ScenarioEngine = Depends(get_scenario_engine)):
    return {
        "status": "ok",
        "scenario_engine": {
            "variables": len(engine.variables),
            "interaction_effects": len(engine.rules),
        },
        "forecast_models": [model.id for model in list_models()],
    }
