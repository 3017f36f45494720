"""Tests for the forecast engine, model catalog and accuracy metrics."""
import threading
import time
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from scenario_engine.errors import (
    InsufficientHistoryError,
    InvalidConfigError,
    ModelNotFoundError,
    SimulationCancelledError,
)
from scenario_engine.forecasting.engine import (
    evaluate_accuracy,
    merge_history,
    predict_all_axes,
    predict_single_axis,
)
from scenario_engine.ml.forecast_models import get_model, list_models, model_correction
from scenario_engine.ml.seasonal_profiles import seasonal_factor
from scenario_engine.models.axis import AXES, Axis
from scenario_engine.models.forecast import (
    ExternalFactors,
    MarketCondition,
    ModelType,
    TimeSeriesPoint,
)

_START = datetime(2024, 1, 1)


def _series(values, start=_START):
    return [
        TimeSeriesPoint(timestamp=start + timedelta(days=30 * i), value=v)
        for i, v in enumerate(values)
    ]


# --- Model catalog ---


def test_catalog_has_four_models():
    ids = {m.id for m in list_models()}
    assert ids == {
        "linear_regression", "polynomial_regression", "exponential_smoothing", "arima_model",
    }


def test_unknown_model_raises():
    with pytest.raises(ModelNotFoundError, match="prophet"):
        get_model("prophet")


def test_model_corrections():
    assert model_correction(get_model("linear_regression"), 70, 3) == 0.0
    assert model_correction(get_model("exponential_smoothing"), 70, 2) == pytest.approx(0.8)
    assert get_model("arima_model").type == ModelType.arima


def test_seasonal_profiles_cover_every_axis():
    for axis in AXES:
        factors = [seasonal_factor(axis, month) for month in range(1, 13)]
        assert len(factors) == 12


# --- Single axis ---


def test_flat_history_projects_flat_with_linear_model():
    result = predict_single_axis(Axis.GO, _series([60] * 6), 3, "linear_regression")
    assert [p.value for p in result.predictions] == [60, 60, 60]
    assert result.trend.strength == 0.0
    assert result.seasonality.detected is False
    assert result.anomalies == []


def test_bull_market_lifts_projection():
    factors = ExternalFactors(market_condition=MarketCondition.bull)
    result = predict_single_axis(
        Axis.EC, _series([60] * 6), 3, "linear_regression", external_factors=factors,
    )
    assert [p.value for p in result.predictions] == pytest.approx([61.0, 62.0, 63.0])


def test_prediction_timestamps_step_thirty_days():
    history = _series([50, 52, 54, 56])
    result = predict_single_axis(Axis.PT, history, 2, "linear_regression")
    assert result.predictions[0].timestamp == history[-1].timestamp + timedelta(days=30)
    assert result.predictions[1].timestamp == history[-1].timestamp + timedelta(days=60)


def test_uptrend_projects_upward():
    result = predict_single_axis(Axis.GO, _series([40, 45, 50, 55, 60]), 4, "linear_regression")
    values = [p.value for p in result.predictions]
    assert values == sorted(values)
    assert values[0] > 60


def test_values_stay_in_score_range():
    result = predict_single_axis(
        Axis.GO, _series([95, 96, 97, 98, 99, 100]), 12, "exponential_smoothing",
        external_factors=ExternalFactors(market_condition=MarketCondition.bull, industry_growth=20),
    )
    assert all(0 <= p.value <= 100 for p in result.predictions)


@pytest.mark.parametrize("model_id", [m.id for m in list_models()])
def test_uncertainty_band_widens(model_id):
    result = predict_single_axis(Axis.TO, _series([50, 55, 52, 58, 54, 57]), 8, model_id)
    widths = [p.upper_bound - p.lower_bound for p in result.predictions]
    assert all(b > a for a, b in zip(widths, widths[1:]))
    for point in result.predictions:
        assert point.lower_bound <= point.value <= point.upper_bound


def test_confidence_decays_to_floor():
    result = predict_single_axis(Axis.PF, _series([50, 51, 52]), 20, "arima_model")
    confidences = [p.confidence for p in result.predictions]
    assert confidences[0] == pytest.approx(0.83)
    assert confidences[-1] == 0.1
    assert all(b <= a for a, b in zip(confidences, confidences[1:]))


def test_unsorted_history_is_sorted():
    history = _series([10, 20, 30, 40, 50])
    result = predict_single_axis(Axis.GO, list(reversed(history)), 1, "linear_regression")
    assert result.trend.slope == pytest.approx(10.0)
    assert result.predictions[0].timestamp == history[-1].timestamp + timedelta(days=30)


def test_insufficient_history_raises():
    with pytest.raises(InsufficientHistoryError, match="at least 3"):
        predict_single_axis(Axis.GO, _series([50, 60]))


def test_invalid_periods_raises():
    with pytest.raises(InvalidConfigError, match="periods"):
        predict_single_axis(Axis.GO, _series([50, 60, 70]), periods=0)


def test_result_is_read_only():
    result = predict_single_axis(Axis.GO, _series([50, 60, 70]), 1)
    with pytest.raises(ValidationError):
        result.predictions = []


# --- All axes ---


def test_predict_all_axes():
    history = {axis: _series([50, 55, 60, 58]) for axis in AXES}
    results = predict_all_axes(history, periods=2)
    assert set(results) == set(AXES)
    assert all(len(r.predictions) == 2 for r in results.values())
    assert results[Axis.EC].model.id == "arima_model"


def test_missing_axis_fails_whole_call():
    history = {axis: _series([50, 55, 60]) for axis in AXES if axis != Axis.TO}
    with pytest.raises(InsufficientHistoryError):
        predict_all_axes(history)


def test_cancelled_forecast_raises():
    event = threading.Event()
    event.set()
    history = {axis: _series([50, 55, 60]) for axis in AXES}
    with pytest.raises(SimulationCancelledError):
        predict_all_axes(history, cancel_event=event)


def test_expired_deadline_stops_forecast():
    history = {axis: _series([50, 55, 60]) for axis in AXES}
    with pytest.raises(SimulationCancelledError, match="deadline"):
        predict_all_axes(history, deadline=time.monotonic() - 1)


# --- History merge ---


def test_merge_history_sorts_and_dedupes():
    existing = _series([10, 20, 30])
    incoming = [
        TimeSeriesPoint(timestamp=existing[1].timestamp, value=99),
        TimeSeriesPoint(timestamp=_START - timedelta(days=30), value=5),
    ]
    merged = merge_history(existing, incoming)
    assert [p.value for p in merged] == [5, 10, 20, 30]


def test_merge_history_rejects_mixed_timezones():
    naive = _series([10, 20])
    aware = _series([30], start=datetime(2025, 1, 1, tzinfo=timezone.utc))
    with pytest.raises(ValueError, match="timezone-aware and naive"):
        merge_history(naive, aware)


def test_merge_history_accepts_aware_series():
    start = datetime(2025, 1, 1, tzinfo=timezone.utc)
    earlier = _series([3], start=start - timedelta(days=30))
    merged = merge_history(_series([1, 2], start=start), earlier)
    assert [p.value for p in merged] == [3, 1, 2]


# --- Accuracy ---


def test_accuracy_metrics():
    metrics = evaluate_accuracy([100, 0, 50], [90, 10, 50])
    assert metrics.mae == pytest.approx(20 / 3)
    assert metrics.mse == pytest.approx(200 / 3)
    assert metrics.rmse == pytest.approx((200 / 3) ** 0.5)
    assert metrics.mape == pytest.approx(10 / 3)


def test_accuracy_empty_is_zero():
    metrics = evaluate_accuracy([], [])
    assert (metrics.mae, metrics.mse, metrics.rmse, metrics.mape) == (0, 0, 0, 0)


def test_accuracy_length_mismatch():
    with pytest.raises(ValueError):
        evaluate_accuracy([1, 2], [1])
