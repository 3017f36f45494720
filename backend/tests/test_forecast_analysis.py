"""Tests for seasonality, trend and anomaly detection."""
from datetime import datetime, timedelta

import numpy as np
import pytest

from scenario_engine.forecasting.analysis import (
    detect_anomalies,
    detect_seasonality,
    detect_trend,
)
from scenario_engine.models.forecast import TimeSeriesPoint, TrendDirection

_START = datetime(2024, 1, 1)


def _series(values, days=30):
    return [
        TimeSeriesPoint(timestamp=_START + timedelta(days=days * i), value=v)
        for i, v in enumerate(values)
    ]


def _monthly(values):
    return [
        TimeSeriesPoint(timestamp=datetime(2024, i + 1, 1), value=v)
        for i, v in enumerate(values)
    ]


# --- Seasonality ---


def test_short_series_not_seasonal():
    result = detect_seasonality(_monthly([50, 60, 40] * 3))
    assert result.detected is False
    assert result.strength == 0.0


def test_month_pattern_detected_without_trend():
    values = [50, 65, 35, 50, 65, 35, 35, 65, 50, 35, 65, 50]
    points = _monthly(values)

    seasonality = detect_seasonality(points)
    assert seasonality.detected is True
    assert seasonality.period == 12
    assert seasonality.strength == pytest.approx(1.0)

    trend = detect_trend(points)
    assert trend.direction == TrendDirection.stable
    assert trend.slope == pytest.approx(0.0)


def test_constant_series_has_no_seasonality():
    result = detect_seasonality(_monthly([40.0] * 12))
    assert result.detected is False
    assert result.strength == 0.0


def test_repeated_months_average_out():
    # Two years where January and July swap roles: monthly means are flat.
    first = [60, 50, 50, 50, 50, 50, 40, 50, 50, 50, 50, 50]
    second = [40, 50, 50, 50, 50, 50, 60, 50, 50, 50, 50, 50]
    points = [
        TimeSeriesPoint(timestamp=datetime(2022 + i // 12, i % 12 + 1, 1), value=v)
        for i, v in enumerate(first + second)
    ]
    result = detect_seasonality(points)
    assert result.strength == pytest.approx(0.0)
    assert result.detected is False


# --- Trend ---


def test_too_few_points_is_stable():
    trend = detect_trend(_series([10, 90]))
    assert trend.direction == TrendDirection.stable
    assert trend.strength == 0.0


@pytest.mark.parametrize("values,direction", [
    ([10, 20, 30, 40, 50], TrendDirection.up),
    ([50, 40, 30, 20, 10], TrendDirection.down),
    ([50, 50.01, 50, 50.02, 50], TrendDirection.stable),
])
def test_trend_direction(values, direction):
    assert detect_trend(_series(values)).direction == direction


def test_trend_strength_is_slope_over_range():
    trend = detect_trend(_series([10, 20, 30, 40, 50]))
    assert trend.slope == pytest.approx(10.0)
    assert trend.strength == pytest.approx(0.25)


def test_flat_series_has_zero_strength():
    trend = detect_trend(_series([70] * 6))
    assert trend.strength == 0.0
    assert trend.direction == TrendDirection.stable


def test_single_spike_is_a_change_point():
    points = _series([50, 50, 50, 80, 50, 50, 50])
    trend = detect_trend(points)
    assert trend.change_points == [points[3].timestamp]


def test_smooth_series_has_no_change_points():
    assert detect_trend(_series([10, 12, 14, 16, 18, 20])).change_points == []


# --- Anomalies ---


def test_outlier_flagged_with_severity():
    values = [46] * 9 + [54] * 9 + [50, 64]
    points = _series(values, days=1)
    anomalies = detect_anomalies(points)

    assert len(anomalies) == 1
    anomaly = anomalies[0]
    assert anomaly.value == 64
    assert anomaly.timestamp == points[-1].timestamp

    arr = np.array(values, dtype=float)
    z = abs(64 - arr.mean()) / arr.std()
    assert anomaly.z_score == pytest.approx(z)
    assert anomaly.severity == pytest.approx(min(1.0, z / 3))
    assert 0 < anomaly.severity < 1


def test_constant_series_has_no_anomalies():
    assert detect_anomalies(_series([30] * 10)) == []


def test_short_series_has_no_anomalies():
    assert detect_anomalies(_series([1, 100, 1, 100])) == []


def test_severity_capped_at_one():
    points = _series([50] * 40 + [100], days=1)
    anomalies = detect_anomalies(points)
    assert len(anomalies) == 1
    assert anomalies[0].severity == 1.0
