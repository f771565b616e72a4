"""Tests for the RK4 integrator."""
from __future__ import annotations

import numpy as np
import pytest

from chaos_lab.simulation.integrators import RK4Integrator, rk4_step


class TestRK4:
    def test_zero_derivative_leaves_state(self):
        state = np.array([1.5, -2.0, 3.25, 0.0])
        out = rk4_step(lambda s: np.zeros_like(s), state, 0.01)
        np.testing.assert_array_equal(out, state)

    def test_zero_dt_leaves_state(self):
        state = np.array([1.0, 2.0])
        out = rk4_step(lambda s: s * 3.0, state, 0.0)
        np.testing.assert_array_equal(out, state)

    def test_exponential_growth(self):
        """x' = x over one step matches the 4th-order Taylor polynomial of e^dt."""
        dt = 0.1
        out = rk4_step(lambda s: s, np.array([1.0]), dt)
        taylor = 1 + dt + dt**2 / 2 + dt**3 / 6 + dt**4 / 24
        assert out[0] == pytest.approx(taylor, rel=1e-14)

    def test_negative_dt_steps_backwards(self):
        forward = rk4_step(lambda s: -s, np.array([1.0]), 0.1)
        back = rk4_step(lambda s: -s, forward, -0.1)
        assert back[0] == pytest.approx(1.0, abs=1e-6)

    def test_does_not_mutate_input(self):
        state = np.array([1.0, 1.0])
        rk4_step(lambda s: s, state, 0.5)
        np.testing.assert_array_equal(state, [1.0, 1.0])

    def test_harmonic_oscillator_period(self):
        """x'' = -x returns to its start after 2*pi."""
        dt = 2 * np.pi / 1000
        state = np.array([1.0, 0.0])
        for _ in range(1000):
            state = RK4Integrator.step(lambda s: np.array([s[1], -s[0]]), state, dt)
        np.testing.assert_allclose(state, [1.0, 0.0], atol=1e-8)
