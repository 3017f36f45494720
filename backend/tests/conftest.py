import pytest

from scenario_engine.models.axis import Axis
from scenario_engine.simulation.engine import ScenarioEngine

BASELINE = {Axis.GO: 75.0, Axis.EC: 45.0, Axis.PT: 85.0, Axis.PF: 60.0, Axis.TO: 65.0}


@pytest.fixture
def engine() -> ScenarioEngine:
    """Default-catalog engine with a mid-range baseline; fresh per test."""
    return ScenarioEngine(baseline_scores=BASELINE, strict=False)
