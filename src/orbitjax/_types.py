"""Orbital element containers shared across orbitjax.

- :class:`OrbitalElements`: periapsis-based element set exchanged with
  callers, angles in degrees, epoch as a Julian day.
- :class:`ConicElements`: the internal form consumed by the state
  conversions, carrying the specific angular momentum in place of the
  periapsis distance and angles in radians.

Both are :class:`~typing.NamedTuple` instances, so JAX treats them as
pytrees and they pass through ``jax.jit`` and ``jax.vmap`` unchanged.
Element sets are never modified in place: :func:`orbitjax.coordinates.conic_elements`
builds a new :class:`ConicElements` from an :class:`OrbitalElements`.

Using angular momentum instead of the semi-major axis keeps parabolic
orbits (``e = 1``, semi-major axis undefined) representable.
"""

from __future__ import annotations

from typing import NamedTuple

from jax.typing import ArrayLike


class OrbitalElements(NamedTuple):
    """Heliocentric osculating elements referenced to the periapsis passage.

    Attributes:
        periapsis_distance: Periapsis distance *qr*. Units: *AU*
        eccentricity: Eccentricity. Dimensionless, ``>= 0``.
        inclination: Inclination to the ecliptic. Units: *deg*
        raan: Longitude of the ascending node. Units: *deg*
        arg_periapsis: Argument of periapsis. Units: *deg*
        periapsis_epoch: Time of periapsis passage *tp*. Units: *Julian day*
    """

    periapsis_distance: ArrayLike
    eccentricity: ArrayLike
    inclination: ArrayLike
    raan: ArrayLike
    arg_periapsis: ArrayLike
    periapsis_epoch: ArrayLike = 0.0


class ConicElements(NamedTuple):
    """Orientation and shape of a conic section, angles in radians.

    Attributes:
        angular_momentum: Specific angular momentum *h*. Units: *AU^2/day*
        eccentricity: Eccentricity. Dimensionless.
        inclination: Inclination. Units: *rad*
        raan: Longitude of the ascending node. Units: *rad*
        arg_periapsis: Argument of periapsis. Units: *rad*
    """

    angular_momentum: ArrayLike
    eccentricity: ArrayLike
    inclination: ArrayLike
    raan: ArrayLike
    arg_periapsis: ArrayLike
