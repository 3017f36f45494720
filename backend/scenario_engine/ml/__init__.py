"""Formula-based forecast models and seasonal profiles."""
from scenario_engine.ml.forecast_models import get_model, list_models, model_correction
from scenario_engine.ml.seasonal_profiles import seasonal_factor
