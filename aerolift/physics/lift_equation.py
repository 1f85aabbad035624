"""Lift on an airfoil from the lift equation.

Model:
    F_lift = 0.5 * Cl * rho * v^2 * A
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass

from ..stats.distribution import Operand, from_samples, gaussian, uniform
from .constants import (
    EMPIRICAL_LIFT_COEFFICIENT,
    EMPIRICAL_WING_AREA,
    GAUSSIAN_INPUTS,
    UNIFORM_INPUTS,
)
from .flight import adjusted_lift

TITLE = "Model using Plane Method (Lift equation)"


@dataclass(frozen=True)
class LiftEquationInputs:
    air_density: Operand  # kg/m^3
    velocity: Operand  # m/s
    lift_coefficient: Operand  # dimensionless
    wing_area: Operand  # m^2
    aircraft_mass: Operand  # kg


INPUT_LABELS = (
    ("air_density", "rho", "kg/m³"),
    ("velocity", "v", "m/s"),
    ("lift_coefficient", "Cl", ""),
    ("wing_area", "A", "m^2"),
    ("aircraft_mass", "m", "kg"),
)

OUTPUT_UNITS = OrderedDict([("F_lift", "N"), ("F_lift_adjusted", "N")])


def load_inputs() -> LiftEquationInputs:
    """Build the input distributions from the constant tables."""
    return LiftEquationInputs(
        air_density=gaussian(*GAUSSIAN_INPUTS["air_density"]),
        velocity=gaussian(*GAUSSIAN_INPUTS["velocity_upper"]),
        lift_coefficient=from_samples(EMPIRICAL_LIFT_COEFFICIENT),
        wing_area=from_samples(EMPIRICAL_WING_AREA),
        aircraft_mass=uniform(*UNIFORM_INPUTS["aircraft_mass"]),
    )


def lift_force(inputs: LiftEquationInputs) -> Operand:
    """Lift on a single airfoil (N)."""
    return (
        0.5
        * inputs.lift_coefficient
        * inputs.air_density
        * inputs.velocity**2
        * inputs.wing_area
    )


def evaluate(inputs: LiftEquationInputs) -> dict[str, Operand]:
    f_lift = lift_force(inputs)
    return OrderedDict(
        [
            ("F_lift", f_lift),
            ("F_lift_adjusted", adjusted_lift(f_lift, inputs.aircraft_mass)),
        ]
    )
