"""
orbitjax is a small heliocentric two-body orbit engine implemented in JAX, for drawing
orbit diagrams of comets, asteroids and planets.
"""

from .config import set_dtype, get_dtype

from .constants import (
    DEG2RAD,
    RAD2DEG,
    JD_MJD_OFFSET,
    MJD2000,
    DAY_S,
    AU_KM,
    GM_SUN_AU,
    MAX_RANGE,
    MAX_DISPLAY_RANGE,
)

from ._types import OrbitalElements, ConicElements

from .orbits import (
    semimajor_axis_from_periapsis,
    apoapsis_distance,
    angular_momentum_from_periapsis,
    orbital_period,
    mean_motion,
    periapsis_velocity,
    apoapsis_velocity,
    KeplerSolution,
    solve_kepler,
    anomaly_eccentric_to_mean,
    anomaly_mean_to_eccentric,
    anomaly_true_to_eccentric,
    anomaly_eccentric_to_true,
    anomaly_mean_to_true,
    anomaly_hyperbolic_to_true,
    anomaly_true_to_hyperbolic,
    OrbitRegime,
    PropagationResult,
    orbit_regime,
    stumpff_c2c3,
    propagate_universal,
    propagate_state,
    OrbitType,
    OrbitClassification,
    orbit_type,
    classify_orbit,
)

from .coordinates import (
    conic_elements,
    state_conic_to_cartesian,
    state_elements_to_cartesian,
    state_cartesian_to_elements,
)

from .geometry import (
    LineOfNodes,
    OrbitGeometry,
    line_of_nodes,
    angular_momentum_direction,
    eccentricity_vector,
    orbit_geometry,
)

from .trajectory import (
    TrajectoryConfig,
    Trajectory,
    true_anomaly_bounds,
    reference_state,
    sample_orbit,
)

from .time import (
    CalendarDate,
    caldate_to_mjd,
    caldate_to_jd,
    jd_to_mjd,
    mjd_to_jd,
    jd_to_caldate,
    mjd_to_caldate,
    julian_day_from_calendar,
    calendar_from_julian_day,
)

from .planets import (
    PLANET_ELEMENTS,
    planet_elements,
    planet_state,
    planet_display_radius,
    planet_visible,
)

__all__ = [
    # Config
    "set_dtype",
    "get_dtype",
    # Constants
    "DEG2RAD",
    "RAD2DEG",
    "JD_MJD_OFFSET",
    "MJD2000",
    "DAY_S",
    "AU_KM",
    "GM_SUN_AU",
    "MAX_RANGE",
    "MAX_DISPLAY_RANGE",
    # Element sets
    "OrbitalElements",
    "ConicElements",
    # Orbits
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
    # Coordinates
    "conic_elements",
    "state_conic_to_cartesian",
    "state_elements_to_cartesian",
    "state_cartesian_to_elements",
    # Geometry
    "LineOfNodes",
    "OrbitGeometry",
    "line_of_nodes",
    "angular_momentum_direction",
    "eccentricity_vector",
    "orbit_geometry",
    # Trajectory
    "TrajectoryConfig",
    "Trajectory",
    "true_anomaly_bounds",
    "reference_state",
    "sample_orbit",
    # Time
    "CalendarDate",
    "caldate_to_mjd",
    "caldate_to_jd",
    "jd_to_mjd",
    "mjd_to_jd",
    "jd_to_caldate",
    "mjd_to_caldate",
    "julian_day_from_calendar",
    "calendar_from_julian_day",
    # Planets
    "PLANET_ELEMENTS",
    "planet_elements",
    "planet_state",
    "planet_display_radius",
    "planet_visible",
]
