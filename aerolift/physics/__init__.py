"""
Aerodynamic lift models built on uncertain values.

This subpackage evaluates the lift on an airfoil with two alternative
formulas. Inputs are drawn from hand-specified distributions and the
uncertainty is propagated through the closed-form expressions.

Modules:
    constants:
        Gravitational acceleration, input distribution parameters and the
        empirical wing-area and lift-coefficient tables.

    bernoulli:
        Pressure-difference model, F_lift = A * (P1 - P2).

    lift_equation:
        Lift-coefficient model, F_lift = 0.5 * Cl * rho * v^2 * A.

    flight:
        Net vertical force of both wings minus the weight, and the
        elevation-trend decision on its sign.

Design Principle:
    This subpackage has no dependencies on pandas, plotting or I/O.
    Inputs may be uncertain values or plain numbers.
"""

from . import bernoulli, lift_equation
from .constants import G
from .flight import ElevationTrend, adjusted_lift, elevation_trend

__all__ = [
    "bernoulli",
    "lift_equation",
    "G",
    "ElevationTrend",
    "adjusted_lift",
    "elevation_trend",
]
