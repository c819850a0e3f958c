"""Orbit type and derived quantities for a periapsis-based element set.

:func:`classify_orbit` is an eager helper: it branches on the eccentricity
in Python and returns plain floats, with ``None`` marking quantities that
are undefined for the orbit type (period of a hyperbola, apoapsis speed of
a parabola, ...). It is therefore not traceable by ``jax.jit``; the
underlying formulas are available as JAX functions in
:mod:`orbitjax.orbits.keplerian`.
"""

from __future__ import annotations

import enum
import logging
from typing import NamedTuple

from orbitjax._types import OrbitalElements
from orbitjax.constants import GM_SUN_AU
from orbitjax.orbits.keplerian import (
    apoapsis_velocity,
    mean_motion,
    orbital_period,
    periapsis_velocity,
    semimajor_axis_from_periapsis,
)

logger = logging.getLogger(__name__)


class OrbitType(enum.StrEnum):
    """Conic section described by an eccentricity."""

    CIRCULAR = "Circular"
    ELLIPTIC = "Elliptic"
    PARABOLIC = "Parabolic"
    HYPERBOLIC = "Hyperbolic"


class OrbitClassification(NamedTuple):
    """Derived quantities of an orbit.

    Attributes:
        orbit_type: Conic section type.
        semi_major_axis: Semi-major axis, negative for hyperbolas. Units: *AU*
        period: Orbital period. Units: *days*
        mean_motion: Mean motion. Units: *rad/day*
        periapsis_speed: Speed at periapsis. Units: *AU/day*
        apoapsis_speed: Speed at apoapsis. Units: *AU/day*

    Fields that are undefined for the orbit type are ``None``.
    """

    orbit_type: OrbitType
    semi_major_axis: float | None
    period: float | None
    mean_motion: float | None
    periapsis_speed: float | None
    apoapsis_speed: float | None


def orbit_type(e: float) -> OrbitType:
    """Classify a conic from its eccentricity.

    Args:
        e: Eccentricity. Dimensionless.

    Returns:
        OrbitType: ``CIRCULAR`` for exactly 0, ``ELLIPTIC`` below 1,
            ``PARABOLIC`` for exactly 1 and ``HYPERBOLIC`` above.
    """
    e = float(e)
    if e == 0.0:
        return OrbitType.CIRCULAR
    if e < 1.0:
        return OrbitType.ELLIPTIC
    if e == 1.0:
        return OrbitType.PARABOLIC
    return OrbitType.HYPERBOLIC


def classify_orbit(elements: OrbitalElements, gm: float = GM_SUN_AU) -> OrbitClassification:
    """Compute the orbit type and the quantities defined for it.

    Args:
        elements: Orbital elements. Only the periapsis distance and
            eccentricity are used.
        gm: Gravitational parameter. Units: *AU^3/day^2*

    Returns:
        OrbitClassification: Orbit type and derived quantities, with
            ``None`` for those that do not exist for this orbit type.

    Examples:
        ```python
        from orbitjax import OrbitalElements
        from orbitjax.orbits import classify_orbit
        info = classify_orbit(OrbitalElements(0.983, 0.0167, 0.0, 174.9, 288.1, 2451547.5))
        info.period  # ~365 days
        ```
    """
    qr = float(elements.periapsis_distance)
    e = float(elements.eccentricity)
    kind = orbit_type(e)
    logger.debug("Classified orbit qr=%s e=%s as %s", qr, e, kind)

    v_peri = float(periapsis_velocity(qr, e, gm))

    if kind is OrbitType.PARABOLIC:
        return OrbitClassification(kind, None, None, None, v_peri, None)

    a = float(semimajor_axis_from_periapsis(qr, e))

    if kind is OrbitType.HYPERBOLIC:
        return OrbitClassification(kind, a, None, None, v_peri, None)

    return OrbitClassification(
        kind,
        a,
        float(orbital_period(a, gm)),
        float(mean_motion(a, gm)),
        v_peri,
        float(apoapsis_velocity(qr, e, gm)),
    )
