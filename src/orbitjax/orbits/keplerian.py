"""Keplerian orbital mechanics functions for heliocentric orbits.

This module provides functions for computing orbital parameters from a
periapsis-based element set, including semi-major axis, specific angular
momentum, orbital period, mean motion, velocities at the apsides and
anomaly conversions.

All functions use JAX operations and are compatible with ``jax.jit`` and
``jax.vmap``. Inputs are coerced to the configured float dtype (see
:func:`orbitjax.config.set_dtype`). Distances are in *AU*, times in
*days* and the gravitational parameter defaults to ``GM_SUN_AU``.

The mean-to-eccentric anomaly conversion is a Newton-Raphson Kepler
equation solver implemented with ``jax.lax.while_loop``: it stops on
convergence or after ``KEPLER_MAX_ITER`` iterations and reports which of
the two happened.
"""

from __future__ import annotations

from typing import NamedTuple

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitjax.config import get_dtype
from orbitjax.constants import GM_SUN_AU
from orbitjax.utils import from_radians, to_radians

# Newton-Raphson limits for Kepler's equation
KEPLER_MAX_ITER = 50
KEPLER_TOL = 1e-10


class KeplerSolution(NamedTuple):
    """Result of solving Kepler's equation.

    Attributes:
        anomaly: Final eccentric anomaly estimate. Units: *rad* or *deg*
        iterations: Number of Newton steps taken.
        converged: ``True`` if both the residual and the relative step fell
            below the tolerance before the iteration cap. When ``False`` the
            anomaly is the last (approximate) estimate.
    """

    anomaly: Array
    iterations: Array
    converged: Array


# ──────────────────────────────────────────────
# Shape of the conic
# ──────────────────────────────────────────────


def semimajor_axis_from_periapsis(qr: ArrayLike, e: ArrayLike) -> Array:
    """Compute the semi-major axis from periapsis distance and eccentricity.

    The result is negative for hyperbolic orbits and infinite for ``e = 1``.

    Args:
        qr: Periapsis distance. Units: *AU*
        e: Eccentricity. Dimensionless.

    Returns:
        Semi-major axis. Units: *AU*

    Examples:
        ```python
        from orbitjax.orbits import semimajor_axis_from_periapsis
        a = semimajor_axis_from_periapsis(0.983, 0.0167)
        ```
    """
    qr = jnp.asarray(qr, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())
    return qr / (1.0 - e)


def apoapsis_distance(qr: ArrayLike, e: ArrayLike) -> Array:
    """Compute the apoapsis distance of an elliptic orbit.

    Args:
        qr: Periapsis distance. Units: *AU*
        e: Eccentricity. Dimensionless, ``< 1``.

    Returns:
        Apoapsis distance. Units: *AU*
    """
    qr = jnp.asarray(qr, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())
    return qr * (1.0 + e) / (1.0 - e)


def angular_momentum_from_periapsis(qr: ArrayLike, e: ArrayLike, gm: ArrayLike = GM_SUN_AU) -> Array:
    """Compute the specific angular momentum of a conic.

    Uses ``h = sqrt(qr * gm * (1 + e))``, which is finite and positive for
    every conic including the parabola.

    Args:
        qr: Periapsis distance. Units: *AU*
        e: Eccentricity. Dimensionless.
        gm: Gravitational parameter of the central body. Units: *AU^3/day^2*

    Returns:
        Specific angular momentum. Units: *AU^2/day*
    """
    qr = jnp.asarray(qr, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())
    return jnp.sqrt(qr * gm * (1.0 + e))


# ──────────────────────────────────────────────
# Orbital period and mean motion
# ──────────────────────────────────────────────


def orbital_period(a: ArrayLike, gm: ArrayLike = GM_SUN_AU) -> Array:
    """Compute the orbital period of an elliptic orbit.

    Args:
        a: Semi-major axis. Units: *AU*
        gm: Gravitational parameter. Units: *AU^3/day^2*

    Returns:
        Orbital period. Units: *days*

    Examples:
        ```python
        from orbitjax.orbits import orbital_period
        T = orbital_period(1.0)  # ~365.25 days
        ```
    """
    a = jnp.asarray(a, dtype=get_dtype())
    return 2.0 * jnp.pi * jnp.sqrt(a**3 / gm)


def mean_motion(a: ArrayLike, gm: ArrayLike = GM_SUN_AU, use_degrees: bool = False) -> Array:
    """Compute the mean motion of an elliptic orbit.

    Args:
        a: Semi-major axis. Units: *AU*
        gm: Gravitational parameter. Units: *AU^3/day^2*
        use_degrees: If ``True``, return mean motion in degrees per day.

    Returns:
        Mean motion. Units: *rad/day* or *deg/day*
    """
    a = jnp.asarray(a, dtype=get_dtype())
    n = jnp.sqrt(gm / a**3)
    return from_radians(n, use_degrees)


# ──────────────────────────────────────────────
# Velocities at apsides
# ──────────────────────────────────────────────


def periapsis_velocity(qr: ArrayLike, e: ArrayLike, gm: ArrayLike = GM_SUN_AU) -> Array:
    """Compute the speed at periapsis from the vis-viva equation.

    Written in terms of ``1/a = (1 - e) / qr`` so that it stays valid for
    parabolic and hyperbolic orbits.

    Args:
        qr: Periapsis distance. Units: *AU*
        e: Eccentricity. Dimensionless.
        gm: Gravitational parameter. Units: *AU^3/day^2*

    Returns:
        Periapsis speed. Units: *AU/day*
    """
    qr = jnp.asarray(qr, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())
    inv_a = (1.0 - e) / qr
    return jnp.sqrt(2.0 * gm / qr - gm * inv_a)


def apoapsis_velocity(qr: ArrayLike, e: ArrayLike, gm: ArrayLike = GM_SUN_AU) -> Array:
    """Compute the speed at apoapsis of an elliptic orbit (vis-viva).

    Args:
        qr: Periapsis distance. Units: *AU*
        e: Eccentricity. Dimensionless, ``< 1``.
        gm: Gravitational parameter. Units: *AU^3/day^2*

    Returns:
        Apoapsis speed. Units: *AU/day*
    """
    qr = jnp.asarray(qr, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())
    a = semimajor_axis_from_periapsis(qr, e)
    return jnp.sqrt(2.0 * gm / (a * (1.0 + e)) - gm / a)


# ──────────────────────────────────────────────
# Anomaly conversions
# ──────────────────────────────────────────────


def anomaly_eccentric_to_mean(anm_ecc: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert eccentric anomaly to mean anomaly.

    Applies Kepler's equation: ``M = E - e * sin(E)``.

    Args:
        anm_ecc: Eccentric anomaly. Units: *rad* or *deg*
        e: Eccentricity. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Mean anomaly. Units: *rad* or *deg*
    """
    anm_ecc = jnp.asarray(anm_ecc, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())

    E = to_radians(anm_ecc, use_degrees)
    M = E - e * jnp.sin(E)
    return from_radians(M, use_degrees)


def solve_kepler(
    anm_mean: ArrayLike,
    e: ArrayLike,
    use_degrees: bool = False,
    tol: float = KEPLER_TOL,
    max_iter: int = KEPLER_MAX_ITER,
) -> KeplerSolution:
    """Solve Kepler's equation ``E - e * sin(E) = M`` for an elliptic orbit.

    Newton-Raphson iteration seeded with ``E0 = M``. The loop stops when
    both the residual ``|f(E)|`` and the relative step ``|dE| / |E|`` are
    below ``tol``, or after ``max_iter`` steps. The mean anomaly is not
    wrapped, so the result stays on the same revolution as the input.

    Valid for ``0 <= e < 1`` only.

    Args:
        anm_mean: Mean anomaly. Units: *rad* or *deg*
        e: Eccentricity. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.
        tol: Convergence tolerance for the residual and relative step.
        max_iter: Hard cap on the number of Newton steps.

    Returns:
        KeplerSolution: Eccentric anomaly, iteration count and
            convergence flag.

    Examples:
        ```python
        from orbitjax.orbits import solve_kepler
        sol = solve_kepler(84.27, 0.1, use_degrees=True)
        sol.anomaly, sol.converged
        ```
    """
    anm_mean = jnp.asarray(anm_mean, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())

    M = to_radians(anm_mean, use_degrees)

    def residual(E):
        return E - e * jnp.sin(E) - M

    def cond(carry):
        i, _, converged = carry
        return (i < max_iter) & ~jnp.all(converged)

    def body(carry):
        i, E, _ = carry
        dE = -residual(E) / (1.0 - e * jnp.cos(E))
        E = E + dE
        # Relative step written multiplicatively so that E = M = 0 converges
        converged = (jnp.abs(residual(E)) < tol) & (jnp.abs(dE) <= tol * jnp.abs(E))
        return i + 1, E, converged

    init = (jnp.int32(0), M, jnp.zeros_like(M, dtype=bool))
    iterations, E, converged = jax.lax.while_loop(cond, body, init)
    return KeplerSolution(from_radians(E, use_degrees), iterations, converged)


def anomaly_mean_to_eccentric(anm_mean: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert mean anomaly to eccentric anomaly.

    Returns the estimate of :func:`solve_kepler`; use that function directly
    when the convergence flag is needed.

    Args:
        anm_mean: Mean anomaly. Units: *rad* or *deg*
        e: Eccentricity. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Eccentric anomaly. Units: *rad* or *deg*
    """
    return solve_kepler(anm_mean, e, use_degrees).anomaly


def anomaly_true_to_eccentric(anm_true: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert true anomaly to eccentric anomaly.

    Args:
        anm_true: True anomaly. Units: *rad* or *deg*
        e: Eccentricity. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Eccentric anomaly in ``(-pi, pi]``. Units: *rad* or *deg*

    References:
        D. Vallado, *Fundamentals of Astrodynamics and Applications
        (4th Ed.)*, pp. 47, eq. 2-9, 2010.
    """
    anm_true = jnp.asarray(anm_true, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())

    nu = to_radians(anm_true, use_degrees)
    E = jnp.arctan2(jnp.sqrt(1.0 - e**2) * jnp.sin(nu), jnp.cos(nu) + e)
    return from_radians(E, use_degrees)


def anomaly_eccentric_to_true(anm_ecc: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert eccentric anomaly to true anomaly.

    Args:
        anm_ecc: Eccentric anomaly. Units: *rad* or *deg*
        e: Eccentricity. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        True anomaly in ``(-pi, pi]``. Units: *rad* or *deg*

    References:
        D. Vallado, *Fundamentals of Astrodynamics and Applications
        (4th Ed.)*, pp. 47, eq. 2-9, 2010.
    """
    anm_ecc = jnp.asarray(anm_ecc, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())

    E = to_radians(anm_ecc, use_degrees)
    nu = jnp.arctan2(jnp.sqrt(1.0 - e**2) * jnp.sin(E), jnp.cos(E) - e)
    return from_radians(nu, use_degrees)


def anomaly_mean_to_true(anm_mean: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert mean anomaly to true anomaly.

    Composite conversion: mean -> eccentric -> true.

    Args:
        anm_mean: Mean anomaly. Units: *rad* or *deg*
        e: Eccentricity. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        True anomaly. Units: *rad* or *deg*

    Examples:
        ```python
        from orbitjax.orbits import anomaly_mean_to_true
        nu = anomaly_mean_to_true(90.0, 0.1, use_degrees=True)
        ```
    """
    return anomaly_eccentric_to_true(
        anomaly_mean_to_eccentric(anm_mean, e, use_degrees),
        e,
        use_degrees,
    )


def anomaly_hyperbolic_to_true(anm_hyp: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert hyperbolic anomaly to true anomaly.

    Uses ``nu = 2 * atan(tanh(F / 2) / sqrt((e - 1) / (e + 1)))``.

    Args:
        anm_hyp: Hyperbolic anomaly *F*. Units: *rad* or *deg*
        e: Eccentricity. Dimensionless, ``> 1``.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        True anomaly. Units: *rad* or *deg*
    """
    anm_hyp = jnp.asarray(anm_hyp, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())

    F = to_radians(anm_hyp, use_degrees)
    nu = 2.0 * jnp.arctan(jnp.tanh(F / 2.0) / jnp.sqrt((e - 1.0) / (e + 1.0)))
    return from_radians(nu, use_degrees)


def anomaly_true_to_hyperbolic(anm_true: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert true anomaly to hyperbolic anomaly.

    Inverse of :func:`anomaly_hyperbolic_to_true`. Only defined for true
    anomalies inside the asymptotes, ``|nu| < acos(-1/e)``.

    Args:
        anm_true: True anomaly. Units: *rad* or *deg*
        e: Eccentricity. Dimensionless, ``> 1``.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Hyperbolic anomaly *F*. Units: *rad* or *deg*
    """
    anm_true = jnp.asarray(anm_true, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())

    nu = to_radians(anm_true, use_degrees)
    F = 2.0 * jnp.arctanh(jnp.sqrt((e - 1.0) / (e + 1.0)) * jnp.tan(nu / 2.0))
    return from_radians(F, use_degrees)
