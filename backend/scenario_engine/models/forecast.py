"""Time-series and forecast contracts."""
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from scenario_engine.models.axis import Axis


class ModelType(str, Enum):
    """Named projection strategies. None of them learn from data."""
    linear = "linear"
    polynomial = "polynomial"
    exponential = "exponential"
    arima = "arima"


class PredictionModel(BaseModel):
    id: str
    name: str
    type: ModelType
    accuracy: float
    confidence: float


class TimeSeriesPoint(BaseModel):
    timestamp: datetime
    value: float
    metadata: Optional[dict[str, Any]] = None


class MarketCondition(str, Enum):
    bull = "bull"
    bear = "bear"
    neutral = "neutral"


class ExternalFactors(BaseModel):
    """Exogenous adjustments applied on top of a projection."""
    market_condition: MarketCondition = MarketCondition.neutral
    competitor_activity: float = 50.0  # 0-100
    seasonal_factor: float = 50.0      # 0-100
    economic_index: float = 50.0       # 0-100
    industry_growth: float = 0.0       # percent


class PredictionPoint(BaseModel):
    timestamp: datetime
    value: float
    confidence: float
    upper_bound: float
    lower_bound: float


class Seasonality(BaseModel):
    detected: bool
    period: int
    strength: float


class TrendDirection(str, Enum):
    up = "up"
    down = "down"
    stable = "stable"


class Trend(BaseModel):
    direction: TrendDirection
    strength: float
    slope: float = 0.0
    change_points: list[datetime] = []


class Anomaly(BaseModel):
    timestamp: datetime
    value: float
    z_score: float
    severity: float
    description: str


class PredictionResult(BaseModel):
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    axis: Axis
    model: PredictionModel
    predictions: list[PredictionPoint]
    seasonality: Seasonality
    trend: Trend
    anomalies: list[Anomaly]


class AccuracyMetrics(BaseModel):
    mae: float
    mse: float
    rmse: float
    mape: float  # percent
