"""Fixed-step Runge-Kutta integration over an arbitrary state vector."""

from __future__ import annotations

from typing import Callable

import numpy as np

# Autonomous right-hand side: state -> d(state)/dt
Derivative = Callable[[np.ndarray], np.ndarray]


def rk4_step(f: Derivative, state: np.ndarray, dt: float) -> np.ndarray:
    """Runge-Kutta 4, order 4.

    dt is not validated: zero gives back the state, a negative value steps
    backwards in time.
    """
    k1 = f(state)
    k2 = f(state + 0.5 * dt * k1)
    k3 = f(state + 0.5 * dt * k2)
    k4 = f(state + dt * k3)
    return state + (dt / 6.0) * (k1 + 2 * k2 + 2 * k3 + k4)


class RK4Integrator:
    """Runge-Kutta 4 integrator, order 4."""

    order = 4

    @staticmethod
    def step(f: Derivative, state: np.ndarray, dt: float) -> np.ndarray:
        return rk4_step(f, np.asarray(state, dtype=np.float64), dt)
