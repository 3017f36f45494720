"""Forecast engine: per-axis analysis and projection.

Stateless: every call receives the history it works on.
"""
from __future__ import annotations

import logging
import math
import threading
import time
from typing import Mapping, Optional, Sequence

from scenario_engine.errors import (
    InsufficientHistoryError,
    InvalidConfigError,
    SimulationCancelledError,
)
from scenario_engine.forecasting.analysis import (
    MIN_TREND_POINTS,
    detect_anomalies,
    detect_seasonality,
    detect_trend,
)
from scenario_engine.forecasting.projection import project
from scenario_engine.ml.forecast_models import DEFAULT_MODEL_ID, get_model
from scenario_engine.models.axis import AXES, Axis
from scenario_engine.models.forecast import (
    AccuracyMetrics,
    ExternalFactors,
    PredictionResult,
    TimeSeriesPoint,
)

logger = logging.getLogger(__name__)


def predict_single_axis(
    axis: Axis,
    history: Sequence[TimeSeriesPoint],
    periods: int = 6,
    model_id: str = DEFAULT_MODEL_ID,
    external_factors: Optional[ExternalFactors] = None,
) -> PredictionResult:
    """Detect seasonality, trend and anomalies, then project ``periods`` steps."""
    model = get_model(model_id)
    if periods < 1:
        raise InvalidConfigError(f"periods must be at least 1, got {periods}")
    if len(history) < MIN_TREND_POINTS:
        raise InsufficientHistoryError(
            f"Axis {axis.value} needs at least {MIN_TREND_POINTS} points, got {len(history)}"
        )

    points = sorted(history, key=lambda p: p.timestamp)
    seasonality = detect_seasonality(points)
    trend = detect_trend(points)
    anomalies = detect_anomalies(points)
    predictions = project(points, periods, model, axis, seasonality, trend, external_factors)

    logger.info(
        "Forecast %s: %d points, model=%s, trend=%s, seasonal=%s, anomalies=%d",
        axis.value, len(points), model.id, trend.direction.value,
        seasonality.detected, len(anomalies),
    )
    return PredictionResult(
        axis=axis,
        model=model,
        predictions=predictions,
        seasonality=seasonality,
        trend=trend,
        anomalies=anomalies,
    )


def predict_all_axes(
    history: Mapping[Axis, Sequence[TimeSeriesPoint]],
    periods: int = 6,
    model_id: str = DEFAULT_MODEL_ID,
    external_factors: Optional[ExternalFactors] = None,
    cancel_event: Optional[threading.Event] = None,
    deadline: Optional[float] = None,
) -> dict[Axis, PredictionResult]:
    """Forecast every axis. Any failing axis fails the whole call.

    ``deadline`` is a ``time.monotonic()`` timestamp checked before each axis.
    """
    results: dict[Axis, PredictionResult] = {}
    for axis in AXES:
        if cancel_event is not None and cancel_event.is_set():
            raise SimulationCancelledError("Forecast cancelled before completion")
        if deadline is not None and time.monotonic() > deadline:
            raise SimulationCancelledError("Forecast exceeded its deadline")
        results[axis] = predict_single_axis(
            axis, history.get(axis, []), periods, model_id, external_factors,
        )
    return results


def merge_history(
    existing: Sequence[TimeSeriesPoint],
    incoming: Sequence[TimeSeriesPoint],
) -> list[TimeSeriesPoint]:
    """Combine two series, sorted by timestamp, first point per timestamp wins.

    Timestamps must be all timezone-aware or all naive.
    """
    combined = [*existing, *incoming]
    aware = {p.timestamp.tzinfo is not None for p in combined}
    if len(aware) > 1:
        raise ValueError("Cannot merge timezone-aware and naive timestamps")
    merged = sorted(combined, key=lambda p: p.timestamp)
    unique: list[TimeSeriesPoint] = []
    for point in merged:
        if unique and unique[-1].timestamp == point.timestamp:
            continue
        unique.append(point)
    return unique


def evaluate_accuracy(actual: Sequence[float], predicted: Sequence[float]) -> AccuracyMetrics:
    """MAE, MSE, RMSE and MAPE (percent; zero actuals contribute nothing)."""
    if len(actual) != len(predicted):
        raise ValueError("Actual and predicted series must have the same length")
    n = len(actual)
    if n == 0:
        return AccuracyMetrics(mae=0.0, mse=0.0, rmse=0.0, mape=0.0)

    mae = mse = mape = 0.0
    for a, p in zip(actual, predicted):
        error = abs(a - p)
        mae += error
        mse += error * error
        if a != 0:
            mape += abs(error / a)

    mae /= n
    mse /= n
    mape /= n
    return AccuracyMetrics(mae=mae, mse=mse, rmse=math.sqrt(mse), mape=mape * 100)
