import jax.numpy as jnp
import pytest

from orbitjax.config import set_dtype


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision before every test.

    The iterative solvers are tuned for double precision. Tests that need a
    different dtype (e.g. test_config.py) override this with their own
    autouse fixture.
    """
    set_dtype(jnp.float64)
