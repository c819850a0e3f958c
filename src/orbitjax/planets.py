"""Osculating heliocentric elements of the major planets.

Element sets are JPL Horizons osculating elements (ecliptic and mean
equinox of J2000) at JD 2459024.5 (2020-06-24). They are used as
reference orbits when drawing a diagram, so positions are obtained by
two-body propagation from the listed periapsis epoch; accuracy degrades
slowly away from the osculation date.
"""

from __future__ import annotations

import logging

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitjax._types import OrbitalElements
from orbitjax.config import get_dtype
from orbitjax.constants import GM_SUN_AU
from orbitjax.coordinates import state_elements_to_cartesian
from orbitjax.orbits import anomaly_mean_to_true, mean_motion, semimajor_axis_from_periapsis

logger = logging.getLogger(__name__)

"""
Julian day at which the planetary elements osculate. Units: *days*
"""
PLANET_ELEMENTS_EPOCH = 2459024.5

"""
Osculating elements keyed by planet name.
"""
PLANET_ELEMENTS: dict[str, OrbitalElements] = {
    "Mercury": OrbitalElements(
        periapsis_distance=3.074958016246215e-01,
        eccentricity=2.056408220896557e-01,
        inclination=7.003733902930839e00,
        raan=4.830597718083336e01,
        arg_periapsis=2.918348714438387e01,
        periapsis_epoch=2459067.650840002578,
    ),
    "Venus": OrbitalElements(
        periapsis_distance=7.184498538218194e-01,
        eccentricity=6.762399503226460e-03,
        inclination=3.394576883214484e00,
        raan=7.662382745452284e01,
        arg_periapsis=5.508424062115083e01,
        periapsis_epoch=2458928.746738597285,
    ),
    "Earth": OrbitalElements(
        periapsis_distance=9.847638666827956e-01,
        eccentricity=1.596622548529253e-02,
        inclination=3.251531504436147e-03,
        raan=1.444234845362845e02,
        arg_periapsis=3.181651506357810e02,
        periapsis_epoch=2458852.059663722757,
    ),
    "Mars": OrbitalElements(
        periapsis_distance=1.381380519592450e00,
        eccentricity=9.345385724812259e-02,
        inclination=1.847890654037755e00,
        raan=4.949761968250743e01,
        arg_periapsis=2.865976300648143e02,
        periapsis_epoch=2459064.867384146899,
    ),
    "Jupiter": OrbitalElements(
        periapsis_distance=4.950293643194364e00,
        eccentricity=4.859977273897987e-02,
        inclination=1.303874556209337e00,
        raan=1.005188687941560e02,
        arg_periapsis=2.735384345047322e02,
        periapsis_epoch=2459965.784028965980,
    ),
    "Saturn": OrbitalElements(
        periapsis_distance=9.092964078253944e00,
        eccentricity=5.111420347186896e-02,
        inclination=2.489627626792582e00,
        raan=1.136005677953501e02,
        arg_periapsis=3.370669187238602e02,
        periapsis_epoch=2463550.111982490402,
    ),
    "Uranus": OrbitalElements(
        periapsis_distance=1.830882300588441e01,
        eccentricity=4.590222901851362e-02,
        inclination=7.705441985590336e-01,
        raan=7.408400460182800e01,
        arg_periapsis=9.832413508468296e01,
        periapsis_epoch=2470253.757045442238,
    ),
    "Neptune": OrbitalElements(
        periapsis_distance=2.989413845714193e01,
        eccentricity=1.098118165219995e-02,
        inclination=1.775000722400165e00,
        raan=1.318922210631964e02,
        arg_periapsis=2.440980588412000e02,
        periapsis_epoch=2463514.590601669159,
    ),
    "Pluto": OrbitalElements(
        periapsis_distance=2.991037668682205e01,
        eccentricity=2.571893642274664e-01,
        inclination=1.723293551253252e01,
        raan=1.103222267937496e02,
        arg_periapsis=1.169758522861960e02,
        periapsis_epoch=2448287.417436909862,
    ),
}


def planet_elements(name: str) -> OrbitalElements:
    """Look up the osculating elements of a planet.

    Args:
        name: Planet name, e.g. ``"Mars"``. Case-insensitive.

    Returns:
        OrbitalElements: Osculating elements (angles in degrees).

    Raises:
        KeyError: If the planet is not in :data:`PLANET_ELEMENTS`.
    """
    key = name.strip().capitalize()
    if key not in PLANET_ELEMENTS:
        raise KeyError(f"Unknown planet '{name}'. Known bodies: {', '.join(PLANET_ELEMENTS)}")
    logger.debug("Using osculating elements for %s", key)
    return PLANET_ELEMENTS[key]


def planet_state(name: str, jd: ArrayLike, gm: ArrayLike = GM_SUN_AU) -> Array:
    """Heliocentric state of a planet at a Julian day.

    The mean anomaly is advanced from the periapsis epoch with the mean
    motion of the true semi-major axis ``qr / (1 - e)`` and converted to
    the true anomaly with the Kepler solver.

    Args:
        name: Planet name.
        jd: Julian day, scalar or array.
        gm: Gravitational parameter. Units: *AU^3/day^2*

    Returns:
        State ``[x, y, z, vx, vy, vz]`` with shape ``(..., 6)``.
            Units: *AU* and *AU/day*

    Examples:
        ```python
        from orbitjax.planets import planet_state
        planet_state("Earth", 2459024.5)[:3]
        ```
    """
    elements = planet_elements(name)
    jd = jnp.asarray(jd, dtype=get_dtype())

    a = semimajor_axis_from_periapsis(elements.periapsis_distance, elements.eccentricity)
    anm_mean = mean_motion(a, gm) * (jd - elements.periapsis_epoch)
    nu = anomaly_mean_to_true(anm_mean, elements.eccentricity)
    return state_elements_to_cartesian(elements, jnp.rad2deg(nu), gm)


def planet_display_radius(name: str) -> float:
    """Representative radius of a planet's orbit for display culling.

    Radius at ``cos(nu) = sqrt(2) / 2``, a compromise between periapsis
    and apoapsis. Units: *AU*
    """
    elements = planet_elements(name)
    qr = float(elements.periapsis_distance)
    e = float(elements.eccentricity)
    return qr * (1.0 + e) / (1.0 + 0.5 * 2.0**0.5 * e)


def planet_visible(name: str, limit: float) -> bool:
    """Whether a planet's orbit fits in a display cube of half-width ``limit``.

    The orbit is drawn when its display radius is inside the cube's
    diagonal in the ecliptic plane, ``r^2 < 2 * limit^2``.

    Args:
        name: Planet name.
        limit: Half-width of the display cube. Units: *AU*

    Returns:
        bool: ``True`` if the planet should be drawn.
    """
    r = planet_display_radius(name)
    return 2.0 * limit * limit > r * r
