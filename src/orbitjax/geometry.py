"""Geometric features of an orbit derived from its elements.

- **Line of nodes**: endpoints of the ascending and descending nodes in
  the ecliptic plane. A node whose conic radius is negative (not reached
  by an open orbit) or larger than the display range is collapsed to the
  origin, and its direction is set to the other node's. Collapsing is a
  display truncation, reported through validity flags rather than errors.
- **Angular-momentum direction**: unit normal of the orbital plane.
- **Eccentricity vector**: points to periapsis with length equal to the
  periapsis distance.

All functions are compatible with ``jax.jit`` and ``jax.vmap``.
"""

from __future__ import annotations

from typing import NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitjax._types import ConicElements, OrbitalElements
from orbitjax.constants import GM_SUN_AU, MAX_DISPLAY_RANGE
from orbitjax.coordinates import conic_elements


class LineOfNodes(NamedTuple):
    """Endpoints of the line of nodes.

    Attributes:
        ascending_node: Ascending node position ``[x, y, 0]``. Units: *AU*
        descending_node: Descending node position ``[x, y, 0]``. Units: *AU*
        ascending_valid: ``False`` if the ascending node was collapsed.
        descending_valid: ``False`` if the descending node was collapsed.
    """

    ascending_node: Array
    descending_node: Array
    ascending_valid: Array
    descending_valid: Array


class OrbitGeometry(NamedTuple):
    """Geometric features of an orbit.

    Attributes:
        line_of_nodes: Node endpoints and validity flags.
        angular_momentum_direction: Unit normal ``[x, y, z]`` of the orbital plane.
        eccentricity_vector: Periapsis direction scaled by the periapsis
            distance. Units: *AU*
    """

    line_of_nodes: LineOfNodes
    angular_momentum_direction: Array
    eccentricity_vector: Array


def line_of_nodes(
    conic: ConicElements,
    max_range: ArrayLike = MAX_DISPLAY_RANGE,
    gm: ArrayLike = GM_SUN_AU,
) -> LineOfNodes:
    """Compute the endpoints of the line of nodes.

    The node radii come from the conic equation at ``nu = -omega``
    (ascending) and ``nu = pi - omega`` (descending). Negative radii are
    handled first (ascending, then descending), then radii beyond
    ``max_range`` (ascending, then descending); at most one node is
    collapsed by each check.

    Args:
        conic: Conic elements (radians).
        max_range: Display range beyond which a node is collapsed. Units: *AU*
        gm: Gravitational parameter. Units: *AU^3/day^2*

    Returns:
        LineOfNodes: Node endpoints and validity flags.
    """
    h = conic.angular_momentum
    e = conic.eccentricity
    omega = conic.arg_periapsis
    p = h * h / gm

    r_asc = p / (1.0 + e * jnp.cos(-omega))
    r_desc = p / (1.0 + e * jnp.cos(jnp.pi - omega))
    th_asc = jnp.asarray(conic.raan)
    th_desc = jnp.pi + th_asc

    # Nodes an open orbit never reaches
    asc_behind = r_asc < 0.0
    desc_behind = ~asc_behind & (r_desc < 0.0)
    r_asc = jnp.where(asc_behind, 0.0, r_asc)
    r_desc = jnp.where(desc_behind, 0.0, r_desc)
    th_asc, th_desc = (
        jnp.where(asc_behind, th_desc, th_asc),
        jnp.where(desc_behind, th_asc, th_desc),
    )

    # Nodes beyond the display range
    asc_far = r_asc > max_range
    desc_far = ~asc_far & (r_desc > max_range)
    r_asc = jnp.where(asc_far, 0.0, r_asc)
    r_desc = jnp.where(desc_far, 0.0, r_desc)
    th_asc, th_desc = (
        jnp.where(asc_far, th_desc, th_asc),
        jnp.where(desc_far, th_asc, th_desc),
    )

    zero = jnp.zeros_like(r_asc)
    ascending = jnp.stack([r_asc * jnp.cos(th_asc), r_asc * jnp.sin(th_asc), zero], axis=-1)
    descending = jnp.stack([r_desc * jnp.cos(th_desc), r_desc * jnp.sin(th_desc), zero], axis=-1)

    return LineOfNodes(
        ascending,
        descending,
        ~(asc_behind | asc_far),
        ~(desc_behind | desc_far),
    )


def angular_momentum_direction(conic: ConicElements) -> Array:
    """Unit vector along the orbital angular momentum.

    Args:
        conic: Conic elements (radians).

    Returns:
        ``[sin(raan) sin(i), -cos(raan) sin(i), cos(i)]``
    """
    inc = conic.inclination
    raan = conic.raan
    return jnp.stack(
        [
            jnp.sin(raan) * jnp.sin(inc),
            -jnp.cos(raan) * jnp.sin(inc),
            jnp.cos(inc),
        ],
        axis=-1,
    )


def eccentricity_vector(conic: ConicElements, gm: ArrayLike = GM_SUN_AU) -> Array:
    """Vector from the central body to periapsis.

    Its direction is that of the eccentricity vector; its length is the
    periapsis distance ``h^2 / mu / (1 + e)``.

    Args:
        conic: Conic elements (radians).
        gm: Gravitational parameter. Units: *AU^3/day^2*

    Returns:
        Periapsis vector ``[x, y, z]``. Units: *AU*
    """
    h = conic.angular_momentum
    e = conic.eccentricity
    inc = conic.inclination
    raan = conic.raan
    omega = conic.arg_periapsis

    rp = h * h / gm / (1.0 + e)
    return rp * jnp.stack(
        [
            jnp.cos(raan) * jnp.cos(omega) - jnp.sin(raan) * jnp.cos(inc) * jnp.sin(omega),
            jnp.sin(raan) * jnp.cos(omega) + jnp.cos(raan) * jnp.cos(inc) * jnp.sin(omega),
            jnp.sin(omega) * jnp.sin(inc),
        ],
        axis=-1,
    )


def orbit_geometry(
    elements: OrbitalElements,
    max_range: ArrayLike = MAX_DISPLAY_RANGE,
    gm: ArrayLike = GM_SUN_AU,
) -> OrbitGeometry:
    """Compute the line of nodes, orbit normal and eccentricity vector.

    Args:
        elements: Orbital elements (angles in degrees).
        max_range: Display range used to collapse far nodes. Units: *AU*
        gm: Gravitational parameter. Units: *AU^3/day^2*

    Returns:
        OrbitGeometry: The three geometric features.

    Examples:
        ```python
        from orbitjax import OrbitalElements, orbit_geometry
        geom = orbit_geometry(OrbitalElements(1.0, 0.2, 30.0, 45.0, 90.0))
        geom.angular_momentum_direction
        ```
    """
    conic = conic_elements(elements, gm)
    return OrbitGeometry(
        line_of_nodes(conic, max_range, gm),
        angular_momentum_direction(conic),
        eccentricity_vector(conic, gm),
    )
