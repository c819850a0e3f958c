"""Two-body propagation with the universal-variable Kepler equation.

Advances a Cartesian state ``[x, y, z, vx, vy, vz]`` by an arbitrary time
of flight (positive or negative) under point-mass gravity. A single
formulation covers elliptic, parabolic and hyperbolic orbits; the only
regime-dependent step is the initial guess for the universal variable
*chi*, selected once per call from the reciprocal semi-major axis and
dispatched with ``jax.lax.switch``.

The Newton iteration runs inside ``jax.lax.while_loop`` with a hard cap of
``UNIVERSAL_MAX_ITER`` steps, so the propagator terminates for every input;
:class:`PropagationResult` reports whether the tolerance was met.

All functions are compatible with ``jax.jit`` and ``jax.vmap``.

References:
    1. D. Vallado, *Fundamentals of Astrodynamics and Applications
       (4th Ed.)*, 2010, Algorithms 1 (c2/c3) and 8 (KEPLER).
"""

from __future__ import annotations

import enum
from typing import NamedTuple

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitjax.config import get_dtype
from orbitjax.constants import GM_SUN_AU
from orbitjax.linalg import cross, dot, norm

# |alpha| below this value (1/AU) selects the parabolic initial guess
REGIME_ALPHA_TOL = 1e-6

# |psi| at or below this value uses the series limits of c2 and c3
STUMPFF_TOL = 1e-12

UNIVERSAL_TOL = 1e-12
UNIVERSAL_MAX_ITER = 500


class OrbitRegime(enum.IntEnum):
    """Conic regime used to seed the universal-variable iteration."""

    ELLIPTIC = 0
    HYPERBOLIC = 1
    PARABOLIC = 2


class PropagationResult(NamedTuple):
    """Result of a universal-variable propagation.

    Attributes:
        state: Propagated state ``[x, y, z, vx, vy, vz]``.
            Units: *AU* and *AU/day*
        regime: :class:`OrbitRegime` value that selected the initial guess.
        iterations: Number of Newton steps taken.
        converged: ``True`` if ``|chi_{k+1} - chi_k|`` dropped below the
            tolerance before the iteration cap. When ``False`` the state is
            computed from the last iterate and is approximate.
    """

    state: Array
    regime: Array
    iterations: Array
    converged: Array


def orbit_regime(alpha: ArrayLike, tol: float = REGIME_ALPHA_TOL) -> Array:
    """Classify an orbit from its reciprocal semi-major axis.

    Args:
        alpha: Reciprocal semi-major axis ``1/a``. Units: *1/AU*
        tol: Half-width of the band around zero treated as parabolic.

    Returns:
        Integer :class:`OrbitRegime` value.
    """
    alpha = jnp.asarray(alpha, dtype=get_dtype())
    return jnp.where(
        alpha > tol,
        int(OrbitRegime.ELLIPTIC),
        jnp.where(alpha < -tol, int(OrbitRegime.HYPERBOLIC), int(OrbitRegime.PARABOLIC)),
    ).astype(jnp.int32)


def stumpff_c2c3(psi: ArrayLike, tol: float = STUMPFF_TOL) -> tuple[Array, Array]:
    """Evaluate the universal functions c2 and c3.

    ``psi > tol`` uses the trigonometric forms, ``psi < -tol`` the
    hyperbolic forms and anything in between the series limits
    ``c2 = 1/2``, ``c3 = 1/6``.

    Args:
        psi: ``chi^2 * alpha``. Dimensionless.
        tol: Threshold below which ``psi`` is treated as zero.

    Returns:
        tuple: ``(c2, c3)``.

    Examples:
        ```python
        from orbitjax.orbits import stumpff_c2c3
        c2, c3 = stumpff_c2c3(0.0)  # (0.5, 1/6)
        ```
    """
    psi = jnp.asarray(psi, dtype=get_dtype())

    positive = psi > tol
    negative = psi < -tol

    # Substitute harmless values in the branches that are not selected
    psi_pos = jnp.where(positive, psi, 1.0)
    psi_neg = jnp.where(negative, psi, -1.0)
    sp = jnp.sqrt(psi_pos)
    sn = jnp.sqrt(-psi_neg)

    c2 = jnp.where(
        positive,
        (1.0 - jnp.cos(sp)) / psi_pos,
        jnp.where(negative, (1.0 - jnp.cosh(sn)) / psi_neg, 0.5),
    )
    c3 = jnp.where(
        positive,
        (sp - jnp.sin(sp)) / (psi_pos * sp),
        jnp.where(negative, (jnp.sinh(sn) - sn) / (sn * sn * sn), 1.0 / 6.0),
    )
    return c2, c3


# ──────────────────────────────────────────────
# Initial guesses for chi
# ──────────────────────────────────────────────


def _seed_elliptic(r0_vec, v0_vec, dt, alpha, gm):
    return jnp.sqrt(gm) * dt * alpha


def _seed_hyperbolic(r0_vec, v0_vec, dt, alpha, gm):
    r0 = norm(r0_vec)
    sma = 1.0 / alpha
    sign = jnp.sign(dt)
    denom = dot(r0_vec, v0_vec) + sign * jnp.sqrt(-gm * sma) * (1.0 - r0 * alpha)
    chi = sign * jnp.sqrt(-sma) * jnp.log(-2.0 * gm * alpha * dt / denom)
    return jnp.where(dt == 0.0, 0.0, chi)


def _seed_parabolic(r0_vec, v0_vec, dt, alpha, gm):
    # Barker's equation
    p = norm(cross(r0_vec, v0_vec)) ** 2 / gm
    safe_dt = jnp.where(dt == 0.0, 1.0, dt)
    s = 0.5 * jnp.arctan(1.0 / (3.0 * jnp.sqrt(gm / (p * p * p)) * safe_dt))
    w = jnp.arctan(jnp.cbrt(jnp.tan(s)))
    chi = jnp.sqrt(p) * 2.0 / jnp.tan(2.0 * w)
    return jnp.where(dt == 0.0, 0.0, chi)


_SEEDS = (_seed_elliptic, _seed_hyperbolic, _seed_parabolic)


# ──────────────────────────────────────────────
# Propagation
# ──────────────────────────────────────────────


def propagate_universal(
    state: ArrayLike,
    dt: ArrayLike,
    gm: ArrayLike = GM_SUN_AU,
    tol: float = UNIVERSAL_TOL,
    max_iter: int = UNIVERSAL_MAX_ITER,
) -> PropagationResult:
    """Propagate a two-body state by ``dt`` with the universal variable.

    Solves the universal Kepler equation for *chi* by Newton iteration and
    maps the initial state through the Lagrange ``f``, ``g``, ``fdot`` and
    ``gdot`` coefficients. Works for any sign of ``dt`` and any conic.

    Within about 1e-8 of ``e = 1`` the Stumpff ``c3`` term loses digits to
    cancellation and *chi* can bounce at round-off level until ``max_iter``.
    The returned state is still accurate there, but ``converged`` is
    expected to be ``False``.

    Args:
        state: Initial state ``[x, y, z, vx, vy, vz]``. Units: *AU*, *AU/day*
        dt: Time of flight. Units: *days*
        gm: Gravitational parameter. Units: *AU^3/day^2*
        tol: Convergence tolerance on successive *chi* iterates.
        max_iter: Hard cap on the number of Newton steps.

    Returns:
        PropagationResult: Propagated state with regime and convergence
            diagnostics.

    Examples:
        ```python
        import jax.numpy as jnp
        from orbitjax.constants import GM_SUN_AU
        from orbitjax.orbits import propagate_universal
        v = jnp.sqrt(GM_SUN_AU)
        result = propagate_universal(jnp.array([1.0, 0.0, 0.0, 0.0, v, 0.0]), 100.0)
        result.state, result.converged
        ```
    """
    state = jnp.asarray(state, dtype=get_dtype())
    dt = jnp.asarray(dt, dtype=get_dtype())
    gm = jnp.asarray(gm, dtype=get_dtype())

    r0_vec = state[:3]
    v0_vec = state[3:6]
    r0 = norm(r0_vec)
    v0 = norm(v0_vec)
    rv = dot(r0_vec, v0_vec)
    sqrt_mu = jnp.sqrt(gm)

    # Specific energy and reciprocal semi-major axis
    xi = 0.5 * v0 * v0 - gm / r0
    sma = -gm / (2.0 * xi)
    alpha = 1.0 / sma

    regime = orbit_regime(alpha)
    chi_seed = jax.lax.switch(regime, _SEEDS, r0_vec, v0_vec, dt, alpha, gm)

    def cond(carry):
        i, *_, converged = carry
        return (i < max_iter) & ~converged

    def body(carry):
        i, chi0, _, _, _, _, _, _ = carry
        psi = chi0 * chi0 * alpha
        c2, c3 = stumpff_c2c3(psi)
        r = chi0 * chi0 * c2 + rv / sqrt_mu * chi0 * (1.0 - psi * c3) + r0 * (1.0 - psi * c2)
        chi = chi0 + (
            sqrt_mu * dt
            - chi0 * chi0 * chi0 * c3
            - rv / sqrt_mu * chi0 * chi0 * c2
            - r0 * chi0 * (1.0 - psi * c3)
        ) / r
        converged = jnp.abs(chi - chi0) < tol
        return i + 1, chi, chi, psi, c2, c3, r, converged

    zero = jnp.zeros_like(r0)
    init = (jnp.int32(0), chi_seed, chi_seed, zero, zero, zero, r0, jnp.array(False))
    iterations, _, chi, psi, c2, c3, r, converged = jax.lax.while_loop(cond, body, init)

    # Lagrange coefficients; psi, c2, c3 and r belong to the last Newton step
    f = 1.0 - chi * chi / r0 * c2
    g = dt - chi * chi * chi / sqrt_mu * c3
    gdot = 1.0 - chi * chi / r * c2
    fdot = sqrt_mu / (r * r0) * chi * (psi * c3 - 1.0)

    r_vec = f * r0_vec + g * v0_vec
    v_vec = fdot * r0_vec + gdot * v0_vec

    return PropagationResult(jnp.concatenate([r_vec, v_vec]), regime, iterations, converged)


def propagate_state(state: ArrayLike, dt: ArrayLike, gm: ArrayLike = GM_SUN_AU) -> Array:
    """Propagate a two-body state by ``dt`` and return only the new state.

    Convenience wrapper around :func:`propagate_universal` for callers that
    do not inspect the convergence diagnostics.

    Args:
        state: Initial state ``[x, y, z, vx, vy, vz]``. Units: *AU*, *AU/day*
        dt: Time of flight. Units: *days*
        gm: Gravitational parameter. Units: *AU^3/day^2*

    Returns:
        Propagated state ``[x, y, z, vx, vy, vz]``.
    """
    return propagate_universal(state, dt, gm).state
