"""Forward projection of an axis series.

For step k = 1..periods, starting from the last observed value:

    value = last
          + direction * trend_strength * k * 2
          + seasonal_factor(month_k) * seasonality_strength * 3   (if detected)
          + external_impact * k * 0.5                             (if supplied)
          + model_correction(value, k)

clamped to [0, 100]. Uncertainty half-width is 5 + 2*sqrt(k) +
(1 - model confidence) * 20 around the clamped value, so band width never
shrinks with k.
"""
from __future__ import annotations

import math
from datetime import timedelta
from typing import Optional

from scenario_engine.ml.forecast_models import model_correction
from scenario_engine.ml.seasonal_profiles import seasonal_factor
from scenario_engine.models.axis import Axis, clamp_score
from scenario_engine.models.forecast import (
    ExternalFactors,
    MarketCondition,
    PredictionModel,
    PredictionPoint,
    Seasonality,
    TimeSeriesPoint,
    Trend,
    TrendDirection,
)

STEP_DAYS = 30
BASE_UNCERTAINTY = 5.0
MIN_CONFIDENCE = 0.1
CONFIDENCE_DECAY = 0.05

_DIRECTION_SIGN = {TrendDirection.up: 1, TrendDirection.down: -1, TrendDirection.stable: 0}
_MARKET_IMPACT = {MarketCondition.bull: 2.0, MarketCondition.bear: -2.0, MarketCondition.neutral: 0.0}


def external_factor_impact(factors: ExternalFactors) -> float:
    """Per-step score impact of the supplied external factors."""
    impact = _MARKET_IMPACT[factors.market_condition]
    impact -= (factors.competitor_activity - 50) * 0.02
    impact += (factors.seasonal_factor - 50) * 0.01
    impact += (factors.economic_index - 50) * 0.015
    impact += factors.industry_growth * 0.1
    return impact


def uncertainty(model: PredictionModel, step: int) -> float:
    return BASE_UNCERTAINTY + math.sqrt(step) * 2 + (1 - model.confidence) * 20


def project(
    history: list[TimeSeriesPoint],
    periods: int,
    model: PredictionModel,
    axis: Axis,
    seasonality: Seasonality,
    trend: Trend,
    external_factors: Optional[ExternalFactors] = None,
) -> list[PredictionPoint]:
    last = history[-1]
    sign = _DIRECTION_SIGN[trend.direction]
    external = external_factor_impact(external_factors) if external_factors else 0.0

    predictions = []
    for step in range(1, periods + 1):
        timestamp = last.timestamp + timedelta(days=STEP_DAYS * step)

        value = last.value + sign * trend.strength * step * 2
        if seasonality.detected:
            value += seasonal_factor(axis, timestamp.month) * seasonality.strength * 3
        if external_factors is not None:
            value += external * step * 0.5
        value += model_correction(model, value, step)

        value = clamp_score(value)
        width = uncertainty(model, step)
        predictions.append(PredictionPoint(
            timestamp=timestamp,
            value=value,
            confidence=max(MIN_CONFIDENCE, model.confidence - step * CONFIDENCE_DECAY),
            upper_bound=value + width,
            lower_bound=value - width,
        ))

    return predictions
