"""Per-axis forecasting: trend, seasonality, anomalies and projection."""
from scenario_engine.forecasting.analysis import detect_anomalies, detect_seasonality, detect_trend
from scenario_engine.forecasting.projection import project
from scenario_engine.forecasting.engine import (
    evaluate_accuracy,
    merge_history,
    predict_all_axes,
    predict_single_axis,
)

__all__ = [
    "detect_seasonality",
    "detect_trend",
    "detect_anomalies",
    "project",
    "predict_single_axis",
    "predict_all_axes",
    "merge_history",
    "evaluate_accuracy",
]
