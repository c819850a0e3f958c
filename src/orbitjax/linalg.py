"""Small 3-vector helpers used by the orbit kernels.

Thin wrappers over ``jax.numpy`` that coerce inputs to the configured
float dtype and operate on the last axis, so they accept a single vector
or a stack of vectors.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitjax.config import get_dtype


def norm(v: ArrayLike) -> Array:
    """Euclidean length of a vector.

    Args:
        v: Vector ``[x, y, z]`` (or a stack with vectors on the last axis).

    Returns:
        Vector magnitude.

    Examples:
        ```python
        from orbitjax.linalg import norm
        norm([3.0, 4.0, 0.0])
        ```
    """
    v = jnp.asarray(v, dtype=get_dtype())
    return jnp.sqrt(jnp.sum(v * v, axis=-1))


def dot(u: ArrayLike, v: ArrayLike) -> Array:
    """Scalar product of two vectors.

    Args:
        u: First vector.
        v: Second vector.

    Returns:
        ``u . v``
    """
    u = jnp.asarray(u, dtype=get_dtype())
    v = jnp.asarray(v, dtype=get_dtype())
    return jnp.sum(u * v, axis=-1)


def cross(u: ArrayLike, v: ArrayLike) -> Array:
    """Vector product of two 3-vectors.

    Args:
        u: First vector.
        v: Second vector.

    Returns:
        ``u x v``
    """
    u = jnp.asarray(u, dtype=get_dtype())
    v = jnp.asarray(v, dtype=get_dtype())
    return jnp.cross(u, v)
