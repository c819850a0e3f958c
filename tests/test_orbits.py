import jax
import jax.numpy as jnp
import pytest

from orbitjax.constants import GM_SUN_AU
from orbitjax.orbits import (
    angular_momentum_from_periapsis,
    anomaly_eccentric_to_mean,
    anomaly_eccentric_to_true,
    anomaly_hyperbolic_to_true,
    anomaly_mean_to_eccentric,
    anomaly_mean_to_true,
    anomaly_true_to_eccentric,
    anomaly_true_to_hyperbolic,
    apoapsis_distance,
    apoapsis_velocity,
    mean_motion,
    orbital_period,
    periapsis_velocity,
    semimajor_axis_from_periapsis,
    solve_kepler,
)

_PERIOD_TOL = 1e-3     # days
_DISTANCE_TOL = 1e-12  # AU
_VELOCITY_TOL = 1e-12  # AU/day
_ANOMALY_TOL = 1e-10   # radians
_KEPLER_RESIDUAL_TOL = 1e-10
_ROUNDTRIP_TOL = 1e-9  # radians, compared modulo 2*pi

# Sidereal year of a massless body at 1 AU from the Sun
_YEAR_AT_1AU = 365.2568983


def _wrap_pi(x):
    """Wrap an angle difference to (-pi, pi]."""
    return -((-x + jnp.pi) % (2.0 * jnp.pi) - jnp.pi)


# ──────────────────────────────────────────────
# Shape of the conic
# ──────────────────────────────────────────────

class TestConicShape:
    def test_semimajor_axis(self):
        assert jnp.abs(semimajor_axis_from_periapsis(0.5, 0.5) - 1.0) < _DISTANCE_TOL

    def test_semimajor_axis_circular(self):
        assert jnp.abs(semimajor_axis_from_periapsis(2.0, 0.0) - 2.0) < _DISTANCE_TOL

    def test_semimajor_axis_hyperbolic_negative(self):
        assert semimajor_axis_from_periapsis(1.0, 1.5) < 0.0

    def test_apoapsis_distance(self):
        assert jnp.abs(apoapsis_distance(0.5, 0.5) - 1.5) < _DISTANCE_TOL

    def test_angular_momentum(self):
        h = angular_momentum_from_periapsis(1.0, 0.5)
        assert jnp.abs(h - jnp.sqrt(1.5 * GM_SUN_AU)) < 1e-15

    def test_angular_momentum_parabolic_finite(self):
        h = angular_momentum_from_periapsis(2.0, 1.0)
        assert jnp.isfinite(h)
        assert jnp.abs(h - jnp.sqrt(4.0 * GM_SUN_AU)) < 1e-15


# ──────────────────────────────────────────────
# Period and mean motion
# ──────────────────────────────────────────────

class TestPeriodAndMeanMotion:
    def test_orbital_period_1au(self):
        assert jnp.abs(orbital_period(1.0) - _YEAR_AT_1AU) < _PERIOD_TOL

    def test_kepler_third_law(self):
        ratio = orbital_period(4.0) / orbital_period(1.0)
        assert jnp.abs(ratio - 8.0) < 1e-12

    def test_mean_motion_radians(self):
        n = mean_motion(1.0)
        assert jnp.abs(n - jnp.sqrt(GM_SUN_AU)) < 1e-15

    def test_mean_motion_degrees(self):
        n = mean_motion(1.0, use_degrees=True)
        assert jnp.abs(n - 360.0 / _YEAR_AT_1AU) < 1e-6

    def test_period_mean_motion_consistent(self):
        a = 2.7
        assert jnp.abs(orbital_period(a) * mean_motion(a) - 2.0 * jnp.pi) < 1e-12


# ──────────────────────────────────────────────
# Apsis velocities
# ──────────────────────────────────────────────

class TestApsisVelocities:
    def test_circular_speeds_equal(self):
        vp = periapsis_velocity(1.0, 0.0)
        va = apoapsis_velocity(1.0, 0.0)
        assert jnp.abs(vp - jnp.sqrt(GM_SUN_AU)) < _VELOCITY_TOL
        assert jnp.abs(vp - va) < _VELOCITY_TOL

    def test_parabolic_escape_speed(self):
        vp = periapsis_velocity(0.5, 1.0)
        assert jnp.abs(vp - jnp.sqrt(2.0 * GM_SUN_AU / 0.5)) < _VELOCITY_TOL

    def test_hyperbolic_exceeds_escape(self):
        assert periapsis_velocity(1.0, 1.5) > jnp.sqrt(2.0 * GM_SUN_AU)

    def test_apoapsis_speed(self):
        # qr = 0.5, e = 0.5 -> a = 1, ra = 1.5
        va = apoapsis_velocity(0.5, 0.5)
        assert jnp.abs(va - jnp.sqrt(GM_SUN_AU / 3.0)) < _VELOCITY_TOL

    def test_angular_momentum_conserved_at_apsides(self):
        qr, e = 0.8, 0.6
        vp = periapsis_velocity(qr, e)
        va = apoapsis_velocity(qr, e)
        assert jnp.abs(vp * qr - va * apoapsis_distance(qr, e)) < 1e-14


# ──────────────────────────────────────────────
# Kepler's equation
# ──────────────────────────────────────────────

class TestSolveKepler:
    @pytest.mark.parametrize("e", [0.0, 0.1, 0.3, 0.5, 0.7, 0.9, 0.99])
    @pytest.mark.parametrize("M", [0.3, 1.0, 2.0, 3.0, -1.5])
    def test_fixed_point(self, e, M):
        sol = solve_kepler(M, e)
        assert bool(sol.converged)
        residual = sol.anomaly - e * jnp.sin(sol.anomaly) - M
        assert jnp.abs(residual) < _KEPLER_RESIDUAL_TOL

    def test_high_eccentricity(self):
        sol = solve_kepler(2.0, 0.99)
        assert bool(sol.converged)
        assert jnp.abs(sol.anomaly - 0.99 * jnp.sin(sol.anomaly) - 2.0) < _KEPLER_RESIDUAL_TOL

    def test_circular_is_identity(self):
        sol = solve_kepler(1.234, 0.0)
        assert jnp.abs(sol.anomaly - 1.234) < _ANOMALY_TOL
        assert int(sol.iterations) == 1

    def test_zero_mean_anomaly(self):
        sol = solve_kepler(0.0, 0.5)
        assert bool(sol.converged)
        assert jnp.abs(sol.anomaly) < _ANOMALY_TOL

    def test_mean_anomaly_not_wrapped(self):
        M = 2.0 * jnp.pi + 1.0
        E = solve_kepler(M, 0.2).anomaly
        assert E > 2.0 * jnp.pi

    def test_iteration_cap(self):
        sol = solve_kepler(2.0, 0.5, max_iter=1)
        assert int(sol.iterations) == 1
        assert not bool(sol.converged)

    def test_degrees(self):
        E_deg = solve_kepler(84.27, 0.1, use_degrees=True).anomaly
        E_rad = solve_kepler(jnp.deg2rad(84.27), 0.1).anomaly
        assert jnp.abs(jnp.deg2rad(E_deg) - E_rad) < _ANOMALY_TOL

    def test_jit(self):
        sol = jax.jit(solve_kepler)(1.0, 0.4)
        assert jnp.abs(sol.anomaly - solve_kepler(1.0, 0.4).anomaly) < 1e-14

    def test_vmap(self):
        M = jnp.linspace(0.1, 3.0, 7)
        E = jax.vmap(lambda m: solve_kepler(m, 0.6).anomaly)(M)
        assert E.shape == (7,)
        assert jnp.max(jnp.abs(E - 0.6 * jnp.sin(E) - M)) < _KEPLER_RESIDUAL_TOL

    def test_array_input(self):
        M = jnp.array([0.5, 1.5, 2.5])
        sol = solve_kepler(M, 0.3)
        assert bool(jnp.all(sol.converged))
        assert jnp.max(jnp.abs(sol.anomaly - 0.3 * jnp.sin(sol.anomaly) - M)) < _KEPLER_RESIDUAL_TOL


# ──────────────────────────────────────────────
# Anomaly conversions
# ──────────────────────────────────────────────

class TestAnomalyConversions:
    def test_eccentric_to_mean(self):
        M = anomaly_eccentric_to_mean(jnp.pi / 2.0, 0.1)
        assert jnp.abs(M - (jnp.pi / 2.0 - 0.1)) < _ANOMALY_TOL

    def test_mean_eccentric_roundtrip(self):
        E = anomaly_mean_to_eccentric(1.1, 0.45)
        assert jnp.abs(anomaly_eccentric_to_mean(E, 0.45) - 1.1) < _ANOMALY_TOL

    def test_true_eccentric_roundtrip(self):
        nu = 2.3
        E = anomaly_true_to_eccentric(nu, 0.3)
        assert jnp.abs(anomaly_eccentric_to_true(E, 0.3) - nu) < _ANOMALY_TOL

    def test_eccentric_true_roundtrip_random(self):
        k_e, k_E = jax.random.split(jax.random.PRNGKey(42))
        e = jax.random.uniform(k_e, (300,), minval=0.0, maxval=0.999)
        E = jax.random.uniform(k_E, (300,), minval=-10.0, maxval=10.0)
        back = anomaly_true_to_eccentric(anomaly_eccentric_to_true(E, e), e)
        assert jnp.max(jnp.abs(_wrap_pi(back - E))) < _ROUNDTRIP_TOL

    def test_mean_true_eccentric_grid(self):
        e, M = jnp.meshgrid(jnp.linspace(0.0, 0.99, 34), jnp.linspace(-6.0, 6.0, 61))
        e, M = e.ravel(), M.ravel()

        def mean_to_eccentric(m, ecc):
            return anomaly_true_to_eccentric(anomaly_mean_to_true(m, ecc), ecc)

        E = jax.vmap(mean_to_eccentric)(M, e)
        residual = anomaly_eccentric_to_mean(E, e) - M
        assert jnp.max(jnp.abs(_wrap_pi(residual))) < _ROUNDTRIP_TOL

    def test_true_eccentric_roundtrip_degrees(self):
        E = anomaly_true_to_eccentric(135.0, 0.7, use_degrees=True)
        assert jnp.abs(anomaly_eccentric_to_true(E, 0.7, use_degrees=True) - 135.0) < 1e-8

    def test_mean_to_true_circular(self):
        assert jnp.abs(anomaly_mean_to_true(0.8, 0.0) - 0.8) < _ANOMALY_TOL

    def test_mean_to_true_ahead_of_mean_before_apoapsis(self):
        nu = anomaly_mean_to_true(90.0, 0.1, use_degrees=True)
        assert 90.0 < nu < 180.0

    def test_apsides_fixed(self):
        assert jnp.abs(anomaly_mean_to_true(0.0, 0.5)) < _ANOMALY_TOL
        assert jnp.abs(anomaly_mean_to_true(jnp.pi, 0.5) - jnp.pi) < _ANOMALY_TOL

    def test_hyperbolic_roundtrip(self):
        F = 0.7
        nu = anomaly_hyperbolic_to_true(F, 1.5)
        assert jnp.abs(anomaly_true_to_hyperbolic(nu, 1.5) - F) < _ANOMALY_TOL

    def test_hyperbolic_inside_asymptotes(self):
        e = 2.0
        nu = anomaly_hyperbolic_to_true(10.0, e)
        assert jnp.abs(nu) < jnp.arccos(-1.0 / e)
