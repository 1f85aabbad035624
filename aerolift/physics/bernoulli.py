"""Lift on an airfoil from Bernoulli's equation.

Model:
    P1 - P2 = (rho / 2) * (v2^2 - v1^2) + (rho * g) * (h2 - h1)
    F_lift  = A * (P1 - P2)

where P1 and P2 are the static pressures below and above the airfoil, v1 and
v2 the flow velocities there, and h2 - h1 the airfoil thickness. The
hydrostatic term is negligible next to the dynamic term at flight speeds but
is kept so the model is complete.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass

from ..stats.distribution import Operand, from_samples, gaussian, uniform
from .constants import (
    EMPIRICAL_WING_AREA,
    G,
    GAUSSIAN_INPUTS,
    UNIFORM_INPUTS,
)
from .flight import adjusted_lift

TITLE = "Model using bernoulli's principle"


@dataclass(frozen=True)
class BernoulliInputs:
    """Inputs of the Bernoulli model; each may be uncertain or a plain number."""

    air_density: Operand  # kg/m^3
    velocity_lower: Operand  # m/s
    velocity_upper: Operand  # m/s
    airfoil_thickness: Operand  # m
    wing_area: Operand  # m^2
    aircraft_mass: Operand  # kg


INPUT_LABELS = (
    ("air_density", "rho", "kg/m³"),
    ("velocity_lower", "v1", "m/s"),
    ("velocity_upper", "v2", "m/s"),
    ("airfoil_thickness", "h2-h1", "m"),
    ("wing_area", "A", "m^2"),
    ("aircraft_mass", "m", "kg"),
)

OUTPUT_UNITS = OrderedDict(
    [("P1 - P2", "N/m^2"), ("F_lift", "N"), ("F_lift_adjusted", "N")]
)


def load_inputs() -> BernoulliInputs:
    """Build the input distributions from the constant tables.

    Air density and both velocities cluster around a central value, so they
    are Gaussian; thickness and mass vary widely and are uniform; wing area
    follows the empirical distribution of in-service aircraft.
    """
    return BernoulliInputs(
        air_density=gaussian(*GAUSSIAN_INPUTS["air_density"]),
        velocity_lower=gaussian(*GAUSSIAN_INPUTS["velocity_lower"]),
        velocity_upper=gaussian(*GAUSSIAN_INPUTS["velocity_upper"]),
        airfoil_thickness=uniform(*UNIFORM_INPUTS["airfoil_thickness"]),
        wing_area=from_samples(EMPIRICAL_WING_AREA),
        aircraft_mass=uniform(*UNIFORM_INPUTS["aircraft_mass"]),
    )


def pressure_difference(inputs: BernoulliInputs) -> Operand:
    """Pressure difference P1 - P2 across the airfoil (N/m^2)."""
    rho = inputs.air_density
    dynamic = (rho / 2) * (inputs.velocity_upper**2 - inputs.velocity_lower**2)
    hydrostatic = (rho * G) * inputs.airfoil_thickness
    return dynamic + hydrostatic


def evaluate(inputs: BernoulliInputs) -> dict[str, Operand]:
    """Evaluate the model and return its outputs in reporting order."""
    dp = pressure_difference(inputs)
    f_lift = inputs.wing_area * dp
    return OrderedDict(
        [
            ("P1 - P2", dp),
            ("F_lift", f_lift),
            ("F_lift_adjusted", adjusted_lift(f_lift, inputs.aircraft_mass)),
        ]
    )
