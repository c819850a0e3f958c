"""Keplerian orbital mechanics functions.

This sub-module provides functions for:

- **Shape of the conic**: semi-major axis, apoapsis distance and specific
  angular momentum from a periapsis-based element set.
- **Period and mean motion** of elliptic orbits.
- **Velocities at apsides** from the vis-viva equation.
- **Anomaly conversions**: mean, eccentric, hyperbolic and true anomalies,
  including a bounded Newton-Raphson Kepler equation solver.
- **Universal-variable propagation**: two-body propagation valid for
  elliptic, parabolic and hyperbolic orbits.
- **Classification**: orbit type with the derived quantities it defines.
"""

from .classification import (
    OrbitClassification,
    OrbitType,
    classify_orbit,
    orbit_type,
)
from .keplerian import (
    KeplerSolution,
    angular_momentum_from_periapsis,
    anomaly_eccentric_to_mean,
    anomaly_eccentric_to_true,
    anomaly_hyperbolic_to_true,
    anomaly_mean_to_eccentric,
    anomaly_mean_to_true,
    anomaly_true_to_eccentric,
    anomaly_true_to_hyperbolic,
    apoapsis_distance,
    apoapsis_velocity,
    mean_motion,
    orbital_period,
    periapsis_velocity,
    semimajor_axis_from_periapsis,
    solve_kepler,
)
from .universal import (
    OrbitRegime,
    PropagationResult,
    orbit_regime,
    propagate_state,
    propagate_universal,
    stumpff_c2c3,
)

__all__ = [
    "semimajor_axis_from_periapsis",
    "apoapsis_distance",
    "angular_momentum_from_periapsis",
    "orbital_period",
    "mean_motion",
    "periapsis_velocity",
    "apoapsis_velocity",
    "KeplerSolution",
    "solve_kepler",
    "anomaly_eccentric_to_mean",
    "anomaly_mean_to_eccentric",
    "anomaly_true_to_eccentric",
    "anomaly_eccentric_to_true",
    "anomaly_mean_to_true",
    "anomaly_hyperbolic_to_true",
    "anomaly_true_to_hyperbolic",
    "OrbitRegime",
    "PropagationResult",
    "orbit_regime",
    "stumpff_c2c3",
    "propagate_universal",
    "propagate_state",
    "OrbitType",
    "OrbitClassification",
    "orbit_type",
    "classify_orbit",
]
