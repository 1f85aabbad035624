"""Net vertical force and the elevation-trend decision."""

from __future__ import annotations

from enum import Enum

from ..stats.distribution import Operand, mean_of
from .constants import G


class ElevationTrend(Enum):
    """Direction the aircraft's elevation moves under the net lift."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    LEVEL = "level"

    @property
    def message(self) -> str:
        if self is ElevationTrend.INCREASING:
            return "Elevation level is increasing"
        if self is ElevationTrend.DECREASING:
            return "Elevation level is decreasing"
        return "Airplane is not changing elevation level"


def adjusted_lift(f_lift: Operand, mass: Operand) -> Operand:
    """Lift of both wings minus the aircraft weight: ``2 F_lift - m g`` (N)."""
    return 2 * f_lift - mass * G


def elevation_trend(net_force: Operand) -> ElevationTrend:
    """
    Classify the net vertical force by the sign of its mean.

    The decision compares means rather than thresholding P(F > 0); the
    probability of climbing is reported separately by the analysis layer.
    """
    mean = mean_of(net_force)
    if mean > 0:
        return ElevationTrend.INCREASING
    if mean < 0:
        return ElevationTrend.DECREASING
    return ElevationTrend.LEVEL
