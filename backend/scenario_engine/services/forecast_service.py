"""Forecast orchestration service."""
from __future__ import annotations

import time
from typing import Mapping, Optional, Sequence

from scenario_engine.config import settings
from scenario_engine.forecasting.engine import predict_all_axes, predict_single_axis
from scenario_engine.ml.forecast_models import list_models
from scenario_engine.models.axis import Axis
from scenario_engine.models.forecast import (
    ExternalFactors,
    PredictionModel,
    PredictionResult,
    TimeSeriesPoint,
)


def run_forecast(
    history: Mapping[Axis, Sequence[TimeSeriesPoint]],
    axis: Optional[Axis] = None,
    periods: Optional[int] = None,
    model_id: Optional[str] = None,
    external_factors: Optional[ExternalFactors] = None,
) -> dict[Axis, PredictionResult]:
    """Forecast one axis when ``axis`` is given, otherwise all five.

    All-axis forecasts stop with SimulationCancelledError once
    ``FORECAST_TIMEOUT_SECONDS`` has passed.
    """
    periods = periods if periods is not None else settings.FORECAST_DEFAULT_PERIODS
    model_id = model_id or settings.FORECAST_DEFAULT_MODEL
    if axis is not None:
        return {
            axis: predict_single_axis(
                axis, history.get(axis, []), periods, model_id, external_factors,
            )
        }
    deadline = time.monotonic() + settings.FORECAST_TIMEOUT_SECONDS
    return predict_all_axes(
        history, periods, model_id, external_factors, deadline=deadline,
    )


def get_forecast_models() -> list[PredictionModel]:
    return list_models()
