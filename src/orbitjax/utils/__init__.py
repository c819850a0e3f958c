"""Shared utility functions for orbitjax.

Provides the degree/radian helpers behind the ``use_degrees`` flag and
angle wrapping.
"""

from orbitjax.utils._angle import from_radians, to_radians, wrap_angle

__all__ = [
    "from_radians",
    "to_radians",
    "wrap_angle",
]
