"""Physical constants and input distribution tables for the lift models.

Value ranges observed for commercial aircraft:

    Symbol   Meaning                              Range
    rho      Air density                          0.0316 - 1.2256 kg/m^3
    g        Gravitational acceleration           9.80665 m/s^2 (constant)
    v1       Velocity below the airfoil           0 - 265 m/s
    v2, v    Velocity on the upper surface        0 - 330 m/s
    h2 - h1  Airfoil thickness                    0.84 - 1.8 m
    Cl       Lift coefficient                     1.2 - 3.3
    A        Wing area                            51.18 - 817 m^2
    m        Aircraft mass                        85000 - 220100 kg
"""

from __future__ import annotations


G: float = 9.80665  # m/s^2

# (mean, stddev)
GAUSSIAN_INPUTS: dict[str, tuple[float, float]] = {
    "air_density": (0.597, 0.199),
    "velocity_lower": (132.5, 44.16666),
    "velocity_upper": (165.0, 55.0),
}

# (low, high)
UNIFORM_INPUTS: dict[str, tuple[float, float]] = {
    "airfoil_thickness": (0.84, 1.8),
    "aircraft_mass": (85000.0, 220100.0),
}

# Wing areas (m^2) of in-service aircraft types.
EMPIRICAL_WING_AREA: tuple[float, ...] = (
    51.18, 54.54, 77.3, 91.04, 92.97, 92.97, 93.5, 112.3, 122.4,
    124.6, 157.9, 185.25, 219.0, 260.0, 271.9, 283.3, 283.4, 338.9,
    363.1, 367.7, 427.8, 437.3, 511.0, 525.0, 543.0, 817.0,
)

# Maximum lift coefficients with high-lift devices deployed.
EMPIRICAL_LIFT_COEFFICIENT: tuple[float, ...] = (
    1.2, 1.8, 1.4, 2.0, 1.6, 2.5, 1.5, 1.9, 1.7, 2.1, 1.9, 3.3,
    1.4, 1.8, 1.6, 2.2, 1.6, 2.6, 1.2, 1.8, 1.6, 2.2, 1.8, 3.2,
    1.2, 1.8, 1.4, 2.0, 1.6, 2.2, 1.2, 1.8, 1.4, 2.0, 1.6, 2.6,
)
