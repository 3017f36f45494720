from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict

from scenario_engine.errors import (
    InsufficientHistoryError,
    InvalidConfigError,
    ModelNotFoundError,
    SimulationCancelledError,
)
from scenario_engine.forecasting.engine import evaluate_accuracy
from scenario_engine.models.axis import Axis
from scenario_engine.models.forecast import (
    AccuracyMetrics,
    ExternalFactors,
    PredictionModel,
    PredictionResult,
    TimeSeriesPoint,
)
from scenario_engine.services.forecast_service import get_forecast_models, run_forecast

router = APIRouter(tags=["forecasts"])


class ForecastRequest(BaseModel):
    """Historical series per axis; ``axis`` limits the forecast to one of them."""
    model_config = ConfigDict(protected_namespaces=())

    history: dict[Axis, list[TimeSeriesPoint]]
    axis: Optional[Axis] = None
    periods: Optional[int] = None
    model_id: Optional[str] = None
    external_factors: Optional[ExternalFactors] = None


class AccuracyRequest(BaseModel):
    actual: list[float]
    predicted: list[float]


@router.get("/forecasts/models", response_model=list[PredictionModel])
def get_models():
    return get_forecast_models()


@router.post("/forecasts/run", response_model=dict[Axis, PredictionResult])
def run_forecast_endpoint(request: ForecastRequest):
    try:
        return run_forecast(
            request.history,
            axis=request.axis,
            periods=request.periods,
            model_id=request.model_id,
            external_factors=request.external_factors,
        )
    except ModelNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (InsufficientHistoryError, InvalidConfigError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    except SimulationCancelledError as e:
        raise HTTPException(status_code=504, detail=str(e))


@router.post("/forecasts/accuracy", response_model=AccuracyMetrics)
def evaluate_accuracy_endpoint(request: AccuracyRequest):
    try:
        return evaluate_accuracy(request.actual, request.predicted)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
