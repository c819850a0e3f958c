import jax
import jax.numpy as jnp
import pytest

from orbitjax import OrbitalElements
from orbitjax.constants import GM_SUN_AU
from orbitjax.coordinates import (
    conic_elements,
    state_cartesian_to_elements,
    state_conic_to_cartesian,
    state_elements_to_cartesian,
)
from orbitjax.linalg import cross, dot, norm
from orbitjax.orbits import periapsis_velocity
from orbitjax.trajectory import reference_state

_DISTANCE_TOL = 1e-12  # AU
_ANGLE_TOL = 1e-8      # degrees
_EPOCH_TOL = 1e-6      # days


# ──────────────────────────────────────────────
# Conic elements
# ──────────────────────────────────────────────

class TestConicElements:
    def test_radians_and_angular_momentum(self):
        conic = conic_elements(OrbitalElements(1.0, 0.5, 90.0, 180.0, 45.0))
        assert jnp.abs(conic.angular_momentum - jnp.sqrt(1.5 * GM_SUN_AU)) < 1e-15
        assert jnp.abs(conic.inclination - jnp.pi / 2.0) < 1e-15
        assert jnp.abs(conic.raan - jnp.pi) < 1e-15
        assert jnp.abs(conic.arg_periapsis - jnp.pi / 4.0) < 1e-15

    def test_input_not_modified(self):
        elements = OrbitalElements(1.0, 0.5, 90.0, 180.0, 45.0, 2451545.0)
        conic_elements(elements)
        assert elements == OrbitalElements(1.0, 0.5, 90.0, 180.0, 45.0, 2451545.0)


# ──────────────────────────────────────────────
# Elements -> Cartesian
# ──────────────────────────────────────────────

class TestElementsToCartesian:
    @pytest.mark.parametrize(
        "nu, radius",
        [(0.0, 1.0), (90.0, 1.5), (180.0, 3.0), (270.0, 1.5)],
    )
    def test_conic_radius(self, nu, radius):
        # qr = 1, e = 0.5 -> p = 1.5, ra = 3
        state = state_elements_to_cartesian(OrbitalElements(1.0, 0.5, 25.0, 60.0, 110.0), nu)
        assert jnp.abs(norm(state[:3]) - radius) < _DISTANCE_TOL

    def test_periapsis_speed(self):
        state = state_elements_to_cartesian(OrbitalElements(0.8, 0.3, 10.0, 20.0, 30.0), 0.0)
        assert jnp.abs(norm(state[3:]) - periapsis_velocity(0.8, 0.3)) < 1e-14
        # Velocity is perpendicular to position at periapsis
        assert jnp.abs(dot(state[:3], state[3:])) < 1e-16

    def test_equatorial_periapsis_direction(self):
        # raan + argp = 90 deg puts periapsis on +y
        state = state_elements_to_cartesian(OrbitalElements(2.0, 0.1, 0.0, 30.0, 60.0), 0.0)
        assert jnp.max(jnp.abs(state[:3] - jnp.array([0.0, 2.0, 0.0]))) < _DISTANCE_TOL

    def test_angular_momentum_magnitude(self):
        elements = OrbitalElements(1.2, 0.4, 50.0, 10.0, 200.0)
        state = state_elements_to_cartesian(elements, 77.0)
        h = norm(cross(state[:3], state[3:]))
        assert jnp.abs(h - conic_elements(elements).angular_momentum) < 1e-15

    def test_parabolic(self):
        state = state_elements_to_cartesian(OrbitalElements(1.0, 1.0, 5.0, 0.0, 0.0), 90.0)
        # p = 2 qr for a parabola
        assert jnp.abs(norm(state[:3]) - 2.0) < _DISTANCE_TOL

    def test_vectorized_anomaly(self):
        conic = conic_elements(OrbitalElements(1.0, 0.2, 10.0, 30.0, 60.0))
        nu = jnp.linspace(0.0, 360.0, 13)
        states = state_conic_to_cartesian(conic, nu, use_degrees=True)
        assert states.shape == (13, 6)
        single = state_conic_to_cartesian(conic, nu[5], use_degrees=True)
        assert jnp.max(jnp.abs(states[5] - single)) < 1e-15

    def test_jit(self):
        conic = conic_elements(OrbitalElements(1.0, 0.2, 10.0, 30.0, 60.0))
        f = jax.jit(state_conic_to_cartesian, static_argnames=("use_degrees",))
        assert jnp.max(jnp.abs(f(conic, 1.0) - state_conic_to_cartesian(conic, 1.0))) < 1e-15


# ──────────────────────────────────────────────
# Cartesian -> elements
# ──────────────────────────────────────────────

class TestCartesianToElements:
    @pytest.mark.parametrize("e", [0.3, 1.7])
    def test_roundtrip(self, e):
        elements = OrbitalElements(1.1, e, 30.0, 45.0, 60.0)
        state = state_elements_to_cartesian(elements, 40.0)
        out, nu = state_cartesian_to_elements(state, 2451545.0)
        assert jnp.abs(out.periapsis_distance - 1.1) < 1e-10
        assert jnp.abs(out.eccentricity - e) < 1e-10
        assert jnp.abs(out.inclination - 30.0) < _ANGLE_TOL
        assert jnp.abs(out.raan - 45.0) < _ANGLE_TOL
        assert jnp.abs(out.arg_periapsis - 60.0) < _ANGLE_TOL
        assert jnp.abs(nu - 40.0) < _ANGLE_TOL

    def test_negative_true_anomaly_wrapped(self):
        state = state_elements_to_cartesian(OrbitalElements(1.0, 0.2, 30.0, 45.0, 60.0), -30.0)
        _, nu = state_cartesian_to_elements(state, 0.0)
        assert jnp.abs(nu - 330.0) < _ANGLE_TOL

    @pytest.mark.parametrize(
        "elements, nu",
        [
            (OrbitalElements(1.0, 0.0, 30.0, 45.0, 0.0), 100.0),
            (OrbitalElements(1.0, 0.3, 0.0, 0.0, 75.0), 20.0),
            (OrbitalElements(1.0, 0.0, 0.0, 0.0, 0.0), 200.0),
        ],
        ids=["circular", "equatorial", "circular-equatorial"],
    )
    def test_degenerate_state_recovered(self, elements, nu):
        state = state_elements_to_cartesian(elements, nu)
        out, nu_out = state_cartesian_to_elements(state, 0.0)
        rebuilt = state_elements_to_cartesian(out, nu_out)
        assert jnp.all(jnp.isfinite(rebuilt))
        assert jnp.max(jnp.abs(rebuilt[:3] - state[:3])) < 1e-10
        assert jnp.max(jnp.abs(rebuilt[3:] - state[3:])) < 1e-12

    def test_equatorial_conventions(self):
        state = state_elements_to_cartesian(OrbitalElements(1.0, 0.3, 0.0, 0.0, 75.0), 20.0)
        out, _ = state_cartesian_to_elements(state, 0.0)
        assert jnp.abs(out.raan) < _ANGLE_TOL
        assert jnp.abs(out.arg_periapsis - 75.0) < _ANGLE_TOL

    @pytest.mark.parametrize("e", [0.4, 1.0, 1.6])
    def test_periapsis_epoch_recovered(self, e):
        tp = 2460000.5
        elements = OrbitalElements(1.0, e, 12.0, 80.0, 150.0, tp)
        epoch = tp + 50.0
        state = reference_state(elements, epoch).state
        out, _ = state_cartesian_to_elements(state, epoch)
        assert jnp.abs(out.periapsis_epoch - tp) < _EPOCH_TOL

    def test_periapsis_epoch_before_periapsis(self):
        tp = 2460000.5
        elements = OrbitalElements(1.0, 0.4, 12.0, 80.0, 150.0, tp)
        epoch = tp - 30.0
        state = reference_state(elements, epoch).state
        out, nu = state_cartesian_to_elements(state, epoch)
        assert jnp.abs(out.periapsis_epoch - tp) < _EPOCH_TOL
        assert nu > 180.0
