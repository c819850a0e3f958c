"""Orbital element ↔ Cartesian state vector conversions.

Converts between a periapsis-based element set and heliocentric ecliptic
Cartesian state vectors ``[x, y, z, vx, vy, vz]``.

The forward transform works from the specific angular momentum *h* rather
than the semi-major axis, so parabolic orbits are handled by the same
closed-form expressions:

| Quantity                     | Expression                          |
|------------------------------|-------------------------------------|
| radius                       | ``r = h^2 / mu / (1 + e cos(nu))``  |
| radial velocity              | ``vr = mu / h * e sin(nu)``         |
| transverse velocity          | ``vt = mu / h * (1 + e cos(nu))``   |

The radial and transverse unit vectors are built from the RAAN, the
inclination and the argument of latitude ``u = omega + nu``.

Units are *AU*, *AU/day* and *days*; angles are radians unless
``use_degrees=True``. :class:`~orbitjax.OrbitalElements` always carries
degrees.

References:
    1. H. Curtis, *Orbital Mechanics for Engineering Students*, 2014,
       Sec. 4.6.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitjax._types import ConicElements, OrbitalElements
from orbitjax.config import get_dtype
from orbitjax.constants import GM_SUN_AU
from orbitjax.linalg import cross, dot, norm
from orbitjax.orbits import (
    anomaly_eccentric_to_mean,
    anomaly_true_to_eccentric,
    anomaly_true_to_hyperbolic,
    angular_momentum_from_periapsis,
)
from orbitjax.utils import from_radians, to_radians, wrap_angle

# |e - 1| below this value uses Barker's equation for the periapsis epoch
PARABOLIC_ECC_TOL = 1e-10

# Node and eccentricity vectors shorter than this (relative) are treated as zero
_DEGENERATE_TOL = 1e-12


def conic_elements(elements: OrbitalElements, gm: ArrayLike = GM_SUN_AU) -> ConicElements:
    """Build the angular-momentum form of an element set.

    Returns a new :class:`ConicElements`; the input is left untouched.

    Args:
        elements: Orbital elements (angles in degrees).
        gm: Gravitational parameter. Units: *AU^3/day^2*

    Returns:
        ConicElements: ``h``, eccentricity and angles in radians.
    """
    dtype = get_dtype()
    e = jnp.asarray(elements.eccentricity, dtype=dtype)
    h = angular_momentum_from_periapsis(elements.periapsis_distance, e, gm)
    return ConicElements(
        angular_momentum=h,
        eccentricity=e,
        inclination=jnp.deg2rad(jnp.asarray(elements.inclination, dtype=dtype)),
        raan=jnp.deg2rad(jnp.asarray(elements.raan, dtype=dtype)),
        arg_periapsis=jnp.deg2rad(jnp.asarray(elements.arg_periapsis, dtype=dtype)),
    )


def state_conic_to_cartesian(
    conic: ConicElements,
    anm_true: ArrayLike,
    gm: ArrayLike = GM_SUN_AU,
    use_degrees: bool = False,
) -> Array:
    """Convert conic elements and a true anomaly to a Cartesian state.

    Closed form, no iteration. ``anm_true`` may be an array, in which case
    one state per anomaly is returned.

    Args:
        conic: Conic elements (radians).
        anm_true: True anomaly, scalar or array. Units: *rad* or *deg*
        gm: Gravitational parameter. Units: *AU^3/day^2*
        use_degrees: If ``True``, interpret ``anm_true`` as degrees.

    Returns:
        State ``[x, y, z, vx, vy, vz]`` with shape ``(..., 6)``.
            Units: *AU* and *AU/day*

    Examples:
        ```python
        import jax.numpy as jnp
        from orbitjax import OrbitalElements
        from orbitjax.coordinates import conic_elements, state_conic_to_cartesian
        conic = conic_elements(OrbitalElements(1.0, 0.1, 10.0, 30.0, 60.0))
        states = state_conic_to_cartesian(conic, jnp.linspace(0.0, 360.0, 8), use_degrees=True)
        states.shape
        ```
    """
    anm_true = jnp.asarray(anm_true, dtype=get_dtype())
    nu = to_radians(anm_true, use_degrees)

    h = conic.angular_momentum
    e = conic.eccentricity
    inc = conic.inclination
    raan = conic.raan
    u = nu + conic.arg_periapsis

    # Radius and velocity components in the orbital plane
    one_e_cos = 1.0 + e * jnp.cos(nu)
    r = h * h / gm / one_e_cos
    vr = gm / h * e * jnp.sin(nu)
    vt = gm / h * one_e_cos

    cos_R = jnp.cos(raan)
    sin_R = jnp.sin(raan)
    cos_i = jnp.cos(inc)
    sin_i = jnp.sin(inc)
    cos_u = jnp.cos(u)
    sin_u = jnp.sin(u)

    # Radial and transverse unit vectors in the inertial frame
    u_r = jnp.stack(
        [
            cos_R * cos_u - sin_R * cos_i * sin_u,
            sin_R * cos_u + cos_R * cos_i * sin_u,
            sin_i * sin_u,
        ],
        axis=-1,
    )
    u_t = jnp.stack(
        [
            -cos_R * sin_u - sin_R * cos_i * cos_u,
            -sin_R * sin_u + cos_R * cos_i * cos_u,
            sin_i * cos_u,
        ],
        axis=-1,
    )

    r_vec = r[..., None] * u_r
    v_vec = vr[..., None] * u_r + vt[..., None] * u_t
    return jnp.concatenate([r_vec, v_vec], axis=-1)


def state_elements_to_cartesian(
    elements: OrbitalElements,
    anm_true: ArrayLike,
    gm: ArrayLike = GM_SUN_AU,
) -> Array:
    """Convert orbital elements and a true anomaly to a Cartesian state.

    Args:
        elements: Orbital elements (angles in degrees).
        anm_true: True anomaly, scalar or array. Units: *deg*
        gm: Gravitational parameter. Units: *AU^3/day^2*

    Returns:
        State ``[x, y, z, vx, vy, vz]`` with shape ``(..., 6)``.
    """
    return state_conic_to_cartesian(conic_elements(elements, gm), anm_true, gm, use_degrees=True)


def state_cartesian_to_elements(
    state: ArrayLike,
    epoch: ArrayLike,
    gm: ArrayLike = GM_SUN_AU,
) -> tuple[OrbitalElements, Array]:
    """Convert a Cartesian state to orbital elements.

    Derives the element set from the angular momentum, node and
    eccentricity vectors, and the periapsis epoch from the anomaly at
    ``epoch`` (Kepler's equation for ellipses, its hyperbolic form for
    hyperbolas and Barker's equation for parabolas).

    Degenerate angles follow the usual conventions: equatorial orbits have
    ``raan = 0`` with the argument of periapsis measured from the x axis,
    and circular orbits have ``arg_periapsis = 0`` with the true anomaly
    measured from the ascending node.

    Args:
        state: State ``[x, y, z, vx, vy, vz]``. Units: *AU* and *AU/day*
        epoch: Julian day of the state.
        gm: Gravitational parameter. Units: *AU^3/day^2*

    Returns:
        tuple: ``(elements, anm_true)`` with the true anomaly at ``epoch``
            in degrees, wrapped to ``[0, 360)``.
    """
    dtype = get_dtype()
    state = jnp.asarray(state, dtype=dtype)
    epoch = jnp.asarray(epoch, dtype=dtype)

    r_vec = state[:3]
    v_vec = state[3:6]
    r = norm(r_vec)
    v = norm(v_vec)

    h_vec = cross(r_vec, v_vec)
    h = norm(h_vec)
    w_hat = h_vec / h

    e_vec = ((v * v - gm / r) * r_vec - dot(r_vec, v_vec) * v_vec) / gm
    e = norm(e_vec)

    inc = jnp.arccos(jnp.clip(w_hat[2], -1.0, 1.0))

    # Ascending node direction, x axis for equatorial orbits
    n_vec = jnp.array([-h_vec[1], h_vec[0], 0.0], dtype=dtype)
    n = norm(n_vec)
    equatorial = n <= _DEGENERATE_TOL * h
    n_hat = jnp.where(equatorial, jnp.array([1.0, 0.0, 0.0], dtype=dtype), n_vec / jnp.where(equatorial, 1.0, n))
    raan = jnp.where(equatorial, 0.0, jnp.arctan2(n_hat[1], n_hat[0]))

    # Periapsis direction, node direction for circular orbits
    circular = e <= _DEGENERATE_TOL
    p_hat = jnp.where(circular, n_hat, e_vec / jnp.where(circular, 1.0, e))

    def signed_angle(a, b):
        return jnp.arctan2(dot(cross(a, b), w_hat), dot(a, b))

    argp = signed_angle(n_hat, p_hat)
    nu = signed_angle(p_hat, r_vec)

    p = h * h / gm
    qr = p / (1.0 + e)

    # Time since periapsis in each regime, with safe eccentricities for the
    # branches that are not selected
    parabolic = jnp.abs(e - 1.0) < PARABOLIC_ECC_TOL
    elliptic = (e < 1.0) & ~parabolic
    hyperbolic = (e > 1.0) & ~parabolic

    e_ell = jnp.where(elliptic, e, 0.5)
    a_ell = qr / (1.0 - e_ell)
    M_ell = anomaly_eccentric_to_mean(anomaly_true_to_eccentric(nu, e_ell), e_ell)
    dt_ell = M_ell / jnp.sqrt(gm / a_ell**3)

    e_hyp = jnp.where(hyperbolic, e, 1.5)
    a_hyp = qr / (e_hyp - 1.0)
    F = anomaly_true_to_hyperbolic(nu, e_hyp)
    M_hyp = e_hyp * jnp.sinh(F) - F
    dt_hyp = M_hyp / jnp.sqrt(gm / a_hyp**3)

    D = jnp.tan(nu / 2.0)
    dt_par = 0.5 * jnp.sqrt(p**3 / gm) * (D + D**3 / 3.0)

    dt = jnp.where(elliptic, dt_ell, jnp.where(hyperbolic, dt_hyp, dt_par))

    elements = OrbitalElements(
        periapsis_distance=qr,
        eccentricity=e,
        inclination=from_radians(inc, True),
        raan=from_radians(wrap_angle(raan), True),
        arg_periapsis=from_radians(wrap_angle(argp), True),
        periapsis_epoch=epoch - dt,
    )
    return elements, from_radians(wrap_angle(nu), True)
