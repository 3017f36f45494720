"""Fixed month-indexed factors per axis.

Index 0 is January. Values are score points before scaling by the detected
seasonality strength.
"""
from __future__ import annotations

from scenario_engine.models.axis import Axis

_PROFILES: dict[Axis, tuple[float, ...]] = {
    Axis.GO: (0, 2, 1, 3, 2, 1, -1, -2, 0, 1, 2, 1),     # spring peak
    Axis.EC: (3, 2, 1, -1, -2, -2, -1, 0, 1, 2, 3, 3),   # year-end peak
    Axis.PT: (-1, 0, 1, 2, 1, 0, -1, -1, 0, 1, 1, 0),    # summer dip
    Axis.PF: (2, 1, 0, 0, 1, 1, 0, 0, 1, 2, 2, 2),       # quarter-end highs
    Axis.TO: (1, 0, -1, -1, 0, 1, 2, 1, 0, 0, 1, 1),     # summer high
}


def seasonal_factor(axis: Axis, month: int) -> float:
    """Seasonal factor for ``axis`` in calendar ``month`` (1-12)."""
    return float(_PROFILES[axis][(month - 1) % 12])
