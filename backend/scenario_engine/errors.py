"""Engine exceptions.

All failures are local and synchronous. Nothing here is worth retrying:
the same inputs always fail the same way.
"""


class ScenarioEngineError(Exception):
    """Base class for scenario and forecast engine failures."""


class InvalidConfigError(ScenarioEngineError):
    """Simulation or forecast configuration is outside its valid domain."""


class ModelNotFoundError(ScenarioEngineError):
    """Unknown forecast model id."""


class InsufficientHistoryError(ScenarioEngineError):
    """Too few historical points for the requested analysis."""


class OutOfRangeValueError(ScenarioEngineError):
    """A variable value falls outside its declared range (strict mode only)."""


class SimulationCancelledError(ScenarioEngineError):
    """A run was cancelled or exceeded its deadline before finishing."""
