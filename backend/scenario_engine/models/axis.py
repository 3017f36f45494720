from enum import Enum
from typing import Mapping


class Axis(str, Enum):
    """The five fixed outcome dimensions, each scored 0-100."""
    GO = "GO"
    EC = "EC"
    PT = "PT"
    PF = "PF"
    TO = "TO"


AXES: tuple[Axis, ...] = tuple(Axis)

AXIS_NAMES: dict[Axis, str] = {
    Axis.GO: "Go-to-Market",
    Axis.EC: "Economics",
    Axis.PT: "Product & Technology",
    Axis.PF: "People & Process",
    Axis.TO: "Team & Operations",
}

SCORE_MIN = 0.0
SCORE_MAX = 100.0


def clamp_score(value: float) -> float:
    return max(SCORE_MIN, min(SCORE_MAX, value))


def zero_scores() -> dict[Axis, float]:
    return {axis: 0.0 for axis in AXES}


def clamp_scores(scores: Mapping[Axis, float]) -> dict[Axis, float]:
    """Return a full five-axis score map clamped into [0, 100].

    Missing axes are filled with 0.
    """
    result = zero_scores()
    for axis, value in scores.items():
        result[Axis(axis)] = clamp_score(float(value))
    return result
