"""Seasonality, trend and anomaly detection over a single axis series.

All functions take a list of TimeSeriesPoint ordered by timestamp and never
raise on short series: below each analysis' minimum length they return a
neutral result.
"""
from __future__ import annotations

import numpy as np
import pandas as pd

from scenario_engine.models.forecast import (
    Anomaly,
    Seasonality,
    TimeSeriesPoint,
    Trend,
    TrendDirection,
)

MIN_SEASONAL_POINTS = 12
MIN_TREND_POINTS = 3
MIN_ANOMALY_POINTS = 5

SEASONAL_PERIOD = 12
SEASONALITY_THRESHOLD = 0.1
TREND_SLOPE_THRESHOLD = 0.1
CHANGE_POINT_DELTA = 10.0
ANOMALY_Z_THRESHOLD = 2.5


def _values(points: list[TimeSeriesPoint]) -> np.ndarray:
    return np.array([p.value for p in points], dtype=float)


def detect_seasonality(points: list[TimeSeriesPoint]) -> Seasonality:
    """Variance of calendar-month means relative to total variance.

    Months absent from the series do not contribute a mean.
    """
    if len(points) < MIN_SEASONAL_POINTS:
        return Seasonality(detected=False, period=0, strength=0.0)

    series = pd.Series(
        _values(points),
        index=pd.DatetimeIndex([p.timestamp for p in points]),
    )
    overall_mean = series.mean()
    monthly_means = series.groupby(series.index.month).mean()

    seasonal_variance = float(((monthly_means - overall_mean) ** 2).mean())
    total_variance = float(((series - overall_mean) ** 2).mean())
    strength = min(1.0, seasonal_variance / total_variance) if total_variance > 0 else 0.0

    return Seasonality(
        detected=strength > SEASONALITY_THRESHOLD,
        period=SEASONAL_PERIOD,
        strength=strength,
    )


def _ols_slope(values: np.ndarray) -> float:
    n = values.size
    x = np.arange(n, dtype=float)
    denominator = n * np.sum(x * x) - np.sum(x) ** 2
    return float((n * np.sum(x * values) - np.sum(x) * np.sum(values)) / denominator)


def detect_trend(points: list[TimeSeriesPoint]) -> Trend:
    """Least-squares slope against index plus simple change-point detection."""
    if len(points) < MIN_TREND_POINTS:
        return Trend(direction=TrendDirection.stable, strength=0.0)

    values = _values(points)
    slope = _ols_slope(values)
    value_range = float(values.max() - values.min())
    strength = min(1.0, abs(slope) / value_range) if value_range > 0 else 0.0

    if slope > TREND_SLOPE_THRESHOLD:
        direction = TrendDirection.up
    elif slope < -TREND_SLOPE_THRESHOLD:
        direction = TrendDirection.down
    else:
        direction = TrendDirection.stable

    # A change point stands apart from both its 2-point neighbourhoods.
    change_points = []
    for i in range(2, len(values) - 2):
        before = (values[i - 2] + values[i - 1]) / 2
        after = (values[i + 1] + values[i + 2]) / 2
        if (abs(values[i] - before) > CHANGE_POINT_DELTA
                and abs(values[i] - after) > CHANGE_POINT_DELTA):
            change_points.append(points[i].timestamp)

    return Trend(
        direction=direction,
        strength=strength,
        slope=slope,
        change_points=change_points,
    )


def detect_anomalies(points: list[TimeSeriesPoint]) -> list[Anomaly]:
    """Points whose population z-score exceeds 2.5; severity = min(1, z / 3)."""
    if len(points) < MIN_ANOMALY_POINTS:
        return []

    values = _values(points)
    mean = float(values.mean())
    std = float(values.std())
    if std == 0:
        return []

    anomalies = []
    for point in points:
        z = abs(point.value - mean) / std
        if z > ANOMALY_Z_THRESHOLD:
            anomalies.append(Anomaly(
                timestamp=point.timestamp,
                value=point.value,
                z_score=z,
                severity=min(1.0, z / 3),
                description=f"Outlier {point.value:.1f} ({z:.1f} sigma from mean {mean:.1f})",
            ))
    return anomalies
