"""Tests for the health, scenario and forecast endpoints."""
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from scenario_engine.config import settings
from scenario_engine.main import app

client = TestClient(app)

_BASELINE = {"GO": 75, "EC": 45, "PT": 85, "PF": 60, "TO": 65}


def _history(values):
    start = datetime(2024, 1, 1)
    return [
        {"timestamp": (start + timedelta(days=30 * i)).isoformat(), "value": v}
        for i, v in enumerate(values)
    ]


# --- Health ---


def test_health_returns_200():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["scenario_engine"] == {"variables": 6, "interaction_effects": 4}
    assert "arima_model" in data["forecast_models"]


# --- Scenarios ---


def test_list_variables():
    response = client.get("/api/scenarios/variables")
    assert response.status_code == 200
    keys = [v["key"] for v in response.json()]
    assert "team_expansion" in keys
    assert len(keys) == 6


def test_list_effects():
    response = client.get("/api/scenarios/effects")
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 4
    assert {"synergy", "conflict", "amplifying", "diminishing"} == {e["kind"] for e in data}
    assert "activation" not in data[0]


def test_run_scenario_response_structure():
    response = client.post("/api/scenarios/run", json={
        "values": {"team_expansion": 50},
        "baseline_scores": _BASELINE,
        "config": {"iterations": 100, "seed": 7},
    })
    assert response.status_code == 200
    data = response.json()
    assert data["projected_scores"]["PT"] == pytest.approx(85.2)
    for key in ("confidence_interval", "risk_metrics", "interaction_effects",
                "sensitivity", "recommendations", "adjustments", "simulation_config"):
        assert key in data
    assert set(data["confidence_interval"]) == set(_BASELINE)


def test_request_baseline_does_not_leak():
    client.post("/api/scenarios/run", json={
        "baseline_scores": _BASELINE,
        "config": {"iterations": 10, "seed": 1},
    })
    response = client.post("/api/scenarios/run", json={"config": {"iterations": 10, "seed": 1}})
    assert response.status_code == 200
    assert response.json()["baseline_scores"]["GO"] == 0


def test_run_scenario_reports_clamped_values():
    response = client.post("/api/scenarios/run", json={
        "values": {"marketing_budget": 900},
        "config": {"iterations": 10, "seed": 1},
    })
    assert response.status_code == 200
    adjustments = response.json()["adjustments"]
    assert adjustments[0]["key"] == "marketing_budget"
    assert adjustments[0]["applied"] == 200


def test_run_scenario_invalid_config_returns_422():
    response = client.post("/api/scenarios/run", json={
        "config": {"iterations": 0},
    })
    assert response.status_code == 422


def test_run_scenario_bad_axis_returns_422():
    response = client.post("/api/scenarios/run", json={
        "baseline_scores": {"XX": 50},
    })
    assert response.status_code == 422


# --- Forecasts ---


def test_list_forecast_models():
    response = client.get("/api/forecasts/models")
    assert response.status_code == 200
    assert len(response.json()) == 4


def test_forecast_single_axis():
    response = client.post("/api/forecasts/run", json={
        "history": {"GO": _history([60] * 6)},
        "axis": "GO",
        "periods": 3,
        "model_id": "linear_regression",
    })
    assert response.status_code == 200
    data = response.json()
    assert list(data) == ["GO"]
    assert [p["value"] for p in data["GO"]["predictions"]] == [60, 60, 60]


def test_forecast_all_axes():
    response = client.post("/api/forecasts/run", json={
        "history": {axis: _history([50, 55, 60, 58]) for axis in _BASELINE},
        "periods": 2,
    })
    assert response.status_code == 200
    assert set(response.json()) == set(_BASELINE)


def test_forecast_timeout_returns_504(monkeypatch):
    monkeypatch.setattr(settings, "FORECAST_TIMEOUT_SECONDS", -1.0)
    response = client.post("/api/forecasts/run", json={
        "history": {axis: _history([50, 55, 60]) for axis in _BASELINE},
    })
    assert response.status_code == 504


def test_forecast_unknown_model_returns_404():
    response = client.post("/api/forecasts/run", json={
        "history": {"GO": _history([50, 55, 60])},
        "axis": "GO",
        "model_id": "prophet",
    })
    assert response.status_code == 404


def test_forecast_short_history_returns_422():
    response = client.post("/api/forecasts/run", json={
        "history": {"GO": _history([50, 55])},
        "axis": "GO",
    })
    assert response.status_code == 422


def test_accuracy_endpoint():
    response = client.post("/api/forecasts/accuracy", json={
        "actual": [10, 20], "predicted": [12, 18],
    })
    assert response.status_code == 200
    assert response.json()["mae"] == 2.0


def test_accuracy_length_mismatch_returns_422():
    response = client.post("/api/forecasts/accuracy", json={
        "actual": [10, 20], "predicted": [12],
    })
    assert response.status_code == 422
