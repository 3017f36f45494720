from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from scenario_engine.api.deps import get_scenario_engine
from scenario_engine.errors import (
    InvalidConfigError,
    OutOfRangeValueError,
    SimulationCancelledError,
)
from scenario_engine.models.axis import Axis
from scenario_engine.models.scenario import (
    EffectDescriptor,
    MonteCarloConfig,
    ScenarioResult,
    ScenarioVariable,
)
from scenario_engine.services.scenario_service import list_effects, list_variables, run_scenario
from scenario_engine.simulation.engine import ScenarioEngine

router = APIRouter(tags=["scenarios"])


class ScenarioRequest(BaseModel):
    """Chosen variable values plus optional baseline and Monte Carlo overrides."""
    values: dict[str, Any] = {}
    baseline_scores: Optional[dict[Axis, float]] = None
    config: Optional[MonteCarloConfig] = None


@router.get("/scenarios/variables", response_model=list[ScenarioVariable])
def get_variables(engine: ScenarioEngine = Depends(get_scenario_engine)):
    return list_variables(engine)


@router.get("/scenarios/effects", response_model=list[EffectDescriptor])
def get_effects(engine: ScenarioEngine = Depends(get_scenario_engine)):
    return list_effects(engine)


@router.post("/scenarios/run", response_model=ScenarioResult)
def run_scenario_endpoint(
    request: ScenarioRequest,
    engine: ScenarioEngine = Depends(get_scenario_engine),
):
    """Run projection, Monte Carlo, sensitivity and recommendations for one assignment."""
    try:
        return run_scenario(engine, request.values, request.baseline_scores, request.config)
    except (InvalidConfigError, OutOfRangeValueError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    except SimulationCancelledError as e:
        raise HTTPException(status_code=504, detail=str(e))
