"""Coordinate transformations.

This sub-module converts between the periapsis-based orbital element set
and heliocentric ecliptic Cartesian state vectors ``[x, y, z, vx, vy, vz]``:

- :func:`conic_elements`: element set → angular-momentum form
- :func:`state_conic_to_cartesian` / :func:`state_elements_to_cartesian`:
  elements and true anomaly → state
- :func:`state_cartesian_to_elements`: state → elements and true anomaly
"""

from .keplerian import (
    conic_elements,
    state_cartesian_to_elements,
    state_conic_to_cartesian,
    state_elements_to_cartesian,
)

__all__ = [
    "conic_elements",
    "state_conic_to_cartesian",
    "state_elements_to_cartesian",
    "state_cartesian_to_elements",
]
