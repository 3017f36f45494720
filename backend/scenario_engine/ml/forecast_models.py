"""Forecast model catalog — formula-based correction strategies, no trained artifact.

Each model type maps to a deterministic correction term added to the
projected value at a given step:

    linear       0
    polynomial   sin(step * 0.5) * 2
    exponential  (value - 50) * 0.02 * step
    arima        cos(step * 0.3) * 1.5
"""
from __future__ import annotations

import math
from typing import Callable

from scenario_engine.errors import ModelNotFoundError
from scenario_engine.models.forecast import ModelType, PredictionModel

CorrectionStrategy = Callable[[float, int], float]

DEFAULT_MODEL_ID = "arima_model"

_MODELS: dict[str, PredictionModel] = {
    "linear_regression": PredictionModel(
        id="linear_regression",
        name="Linear regression",
        type=ModelType.linear,
        accuracy=0.75,
        confidence=0.80,
    ),
    "polynomial_regression": PredictionModel(
        id="polynomial_regression",
        name="Polynomial regression",
        type=ModelType.polynomial,
        accuracy=0.82,
        confidence=0.85,
    ),
    "exponential_smoothing": PredictionModel(
        id="exponential_smoothing",
        name="Exponential smoothing",
        type=ModelType.exponential,
        accuracy=0.78,
        confidence=0.82,
    ),
    "arima_model": PredictionModel(
        id="arima_model",
        name="ARIMA",
        type=ModelType.arima,
        accuracy=0.85,
        confidence=0.88,
    ),
}


def _linear(value: float, step: int) -> float:
    return 0.0


def _polynomial(value: float, step: int) -> float:
    return math.sin(step * 0.5) * 2


def _exponential(value: float, step: int) -> float:
    return (value - 50) * 0.02 * step


def _arima(value: float, step: int) -> float:
    return math.cos(step * 0.3) * 1.5


_CORRECTIONS: dict[ModelType, CorrectionStrategy] = {
    ModelType.linear: _linear,
    ModelType.polynomial: _polynomial,
    ModelType.exponential: _exponential,
    ModelType.arima: _arima,
}


def get_model(model_id: str) -> PredictionModel:
    """Return a model by id. Raises ModelNotFoundError if unknown."""
    model = _MODELS.get(model_id)
    if model is None:
        raise ModelNotFoundError(f"Model {model_id} not found")
    return model


def list_models() -> list[PredictionModel]:
    return list(_MODELS.values())


def model_correction(model: PredictionModel, value: float, step: int) -> float:
    """Correction term for ``model`` at projection step ``step`` (1-based)."""
    return _CORRECTIONS[model.type](value, step)
