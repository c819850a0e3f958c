"""Trajectory sampling for display.

Builds a discretised orbit (states evenly spaced in true anomaly) together
with the body's state at a requested epoch. Open orbits, and ellipses
whose apoapsis lies beyond the sampling radius, are clipped to the arc
inside that radius; the clipping is reported through
:attr:`Trajectory.truncated` so the caller can annotate a partial orbit.

Sampler settings are held in the frozen :class:`TrajectoryConfig`.
Python-level settings (number of points, ranges) are resolved at trace
time, so :func:`sample_orbit` is compatible with ``jax.jit`` when the
config is passed as a static argument.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitjax._types import ConicElements, OrbitalElements
from orbitjax.config import get_dtype
from orbitjax.constants import GM_SUN_AU, MAX_RANGE
from orbitjax.coordinates import conic_elements, state_conic_to_cartesian
from orbitjax.orbits import PropagationResult, propagate_universal


@dataclass(frozen=True)
class TrajectoryConfig:
    """Configuration for :func:`sample_orbit`.

    Args:
        max_range: Maximum heliocentric range [AU]. Caps the display bound
            ``maxc`` and, scaled by *sampling_range_factor*, limits the
            sampled arc.
        sampling_range_factor: Ratio between the sampling radius and
            *max_range*.  The default 1.74 (slightly above sqrt(3)) keeps
            points that reach the corners of the display cube.
        n_points: Number of samples along the orbit.

    Raises:
        ValueError: If a range is not positive or fewer than two points
            are requested.

    Examples:
        ```python
        from orbitjax.trajectory import TrajectoryConfig
        config = TrajectoryConfig(max_range=50.0)
        config.sampling_radius
        ```
    """

    max_range: float = MAX_RANGE
    sampling_range_factor: float = 1.74
    n_points: int = 360

    def __post_init__(self):
        if self.max_range <= 0.0:
            raise ValueError(f"max_range must be positive, got {self.max_range}")
        if self.sampling_range_factor <= 0.0:
            raise ValueError(
                f"sampling_range_factor must be positive, got {self.sampling_range_factor}"
            )
        if self.n_points < 2:
            raise ValueError(f"n_points must be at least 2, got {self.n_points}")

    @property
    def sampling_radius(self) -> float:
        """Radius [AU] beyond which the orbit is not sampled."""
        return self.max_range * self.sampling_range_factor


class Trajectory(NamedTuple):
    """Sampled orbit and reference state.

    Attributes:
        states: Sampled states, shape ``(n_points, 6)``. Units: *AU*, *AU/day*
        true_anomaly: True anomaly of each sample. Units: *deg*
        true_anomaly_bounds: ``[lower, upper]`` sampled range. Units: *deg*
        truncated: ``True`` if the orbit was clipped to the sampling radius.
        max_coordinates: Largest absolute value of each state component.
        reference_state: State at the requested epoch.
        reference_converged: Convergence flag of the reference propagation.
        maxc: Display bound ``ceil(1.1 * max |x|, |y|, |z|)`` capped at the
            maximum range. Units: *AU*
    """

    states: Array
    true_anomaly: Array
    true_anomaly_bounds: Array
    truncated: Array
    max_coordinates: Array
    reference_state: Array
    reference_converged: Array
    maxc: Array


def true_anomaly_bounds(
    conic: ConicElements,
    sampling_radius: ArrayLike,
    gm: ArrayLike = GM_SUN_AU,
) -> tuple[Array, Array, Array]:
    """Range of true anomaly to sample.

    The full ellipse ``[0, 360]`` is used unless the orbit is open
    (``e >= 1``) or its apoapsis lies beyond ``sampling_radius``. In that
    case the range is ``[-nu_max, nu_max]`` with ``nu_max`` the true anomaly
    at which the radius equals ``sampling_radius``.

    Args:
        conic: Conic elements (radians).
        sampling_radius: Radius limiting the sampled arc. Units: *AU*
        gm: Gravitational parameter. Units: *AU^3/day^2*

    Returns:
        tuple: ``(lower, upper, truncated)`` with the bounds in degrees.
    """
    h = conic.angular_momentum
    e = jnp.asarray(conic.eccentricity, dtype=get_dtype())
    p = h * h / gm

    is_open = e >= 1.0
    e_closed = jnp.where(is_open, 0.0, e)
    apoapsis = p / (1.0 - e_closed)
    truncated = is_open | (apoapsis > sampling_radius)

    # Radius equation solved for cos(nu); a circle beyond the radius collapses to nu = 0
    e_safe = jnp.where(e > 0.0, e, 1.0)
    cos_nu = jnp.where(e > 0.0, (p / sampling_radius - 1.0) / e_safe, 1.0)
    nu_max = jnp.rad2deg(jnp.arccos(jnp.clip(cos_nu, -1.0, 1.0)))

    lower = jnp.where(truncated, -nu_max, 0.0)
    upper = jnp.where(truncated, nu_max, 360.0)
    return lower, upper, truncated


def reference_state(
    elements: OrbitalElements,
    epoch: ArrayLike,
    gm: ArrayLike = GM_SUN_AU,
) -> PropagationResult:
    """State of the body at ``epoch``.

    Builds the periapsis state and propagates it by ``epoch - tp`` with the
    universal-variable propagator.

    Args:
        elements: Orbital elements (angles in degrees).
        epoch: Requested Julian day.
        gm: Gravitational parameter. Units: *AU^3/day^2*

    Returns:
        PropagationResult: State at ``epoch`` with convergence diagnostics.
    """
    conic = conic_elements(elements, gm)
    periapsis = state_conic_to_cartesian(conic, 0.0, gm)
    dt = jnp.asarray(epoch, dtype=get_dtype()) - jnp.asarray(elements.periapsis_epoch, dtype=get_dtype())
    return propagate_universal(periapsis, dt, gm)


def sample_orbit(
    elements: OrbitalElements,
    epoch: ArrayLike,
    config: TrajectoryConfig | None = None,
    gm: ArrayLike = GM_SUN_AU,
) -> Trajectory:
    """Sample an orbit for display and locate the body at ``epoch``.

    The input elements are not modified.

    Args:
        elements: Orbital elements (angles in degrees).
        epoch: Julian day of the reference state.
        config: Sampler settings. Uses default :class:`TrajectoryConfig`
            if ``None``.
        gm: Gravitational parameter. Units: *AU^3/day^2*

    Returns:
        Trajectory: Sampled states, truncation flag, reference state and
            display bound.

    Examples:
        ```python
        from orbitjax import OrbitalElements, sample_orbit
        earth = OrbitalElements(0.983, 0.0167, 0.00005, 174.9, 288.1, 2451547.5)
        traj = sample_orbit(earth, 2451547.5 + 100.0)
        traj.states.shape, traj.maxc
        ```
    """
    if config is None:
        config = TrajectoryConfig()

    conic = conic_elements(elements, gm)
    lower, upper, truncated = true_anomaly_bounds(conic, config.sampling_radius, gm)

    nu = jnp.linspace(lower, upper, config.n_points)
    states = state_conic_to_cartesian(conic, nu, gm, use_degrees=True)
    max_coordinates = jnp.max(jnp.abs(states), axis=0)

    ref = reference_state(elements, epoch, gm)

    maxc = jnp.minimum(jnp.ceil(1.1 * jnp.max(max_coordinates[:3])), config.max_range)

    return Trajectory(
        states=states,
        true_anomaly=nu,
        true_anomaly_bounds=jnp.stack([lower, upper]),
        truncated=truncated,
        max_coordinates=max_coordinates,
        reference_state=ref.state,
        reference_converged=ref.converged,
        maxc=maxc,
    )
