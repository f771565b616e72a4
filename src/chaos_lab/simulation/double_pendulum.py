"""Double pendulum engine -- coupled 4D ODE with energy accounting.

State vector: [theta1, theta2, omega1, omega2], angles measured from the
downward vertical. Positions use screen orientation: y grows downward, so a
hanging bob has positive y.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

import numpy as np

from chaos_lab.simulation.base import ODEEngine
from chaos_lab.types.params import PendulumFormulation, PendulumParams
from chaos_lab.types.values import PendulumPositions, PendulumState

logger = logging.getLogger(__name__)

# Half-width of the uniform jitter applied to the default starting angles
ANGLE_JITTER = 0.05


class DoublePendulumEngine(ODEEngine):
    """Double pendulum with point masses on massless rods.

    The default starting angles are pi/2 plus a small random perturbation,
    drawn from a generator seeded by ``seed``: two engines built with the same
    seed are identical, different seeds show sensitivity to initial
    conditions.

    ``formulation="reference"`` integrates the historical acceleration
    formula of this engine. Its second-bob equation repeats the (m1 + m2)
    pattern of the first and does not conserve energy.
    ``formulation="lagrangian"`` uses the Euler-Lagrange accelerations.
    """

    params_type = PendulumParams
    preset_group = "pendulum"
    trail_dim = 2

    def __init__(
        self,
        params: PendulumParams | None = None,
        initial_state: PendulumState | Mapping[str, float] | None = None,
        seed: int | None = None,
    ) -> None:
        super().__init__(params)
        self.seed = seed
        self.reset(initial_state, seed=seed)

    def reset(
        self,
        initial_state: PendulumState | Mapping[str, float] | None = None,
        seed: int | None = None,
    ) -> np.ndarray:
        """Reinitialize the state and clear the trail.

        Fields missing from ``initial_state`` take their defaults: jittered
        pi/2 for the angles, zero for the angular velocities.
        """
        if isinstance(initial_state, PendulumState):
            self._state = initial_state.to_array()
        else:
            given: Mapping[str, Any] = initial_state or {}
            rng = np.random.default_rng(self.seed if seed is None else seed)
            jitter = (rng.random(2) - 0.5) * (2 * ANGLE_JITTER)
            self._state = np.array(
                [
                    given.get("theta1", np.pi / 2 + jitter[0]),
                    given.get("theta2", np.pi / 2 + jitter[1]),
                    given.get("omega1", 0.0),
                    given.get("omega2", 0.0),
                ],
                dtype=np.float64,
            )
        self._step_count = 0
        self._trail.clear()
        logger.debug("Double pendulum reset to %s", self._state)
        return self._state.copy()

    def get_state(self) -> PendulumState:
        th1, th2, w1, w2 = (float(v) for v in self._state)
        return PendulumState(theta1=th1, theta2=th2, omega1=w1, omega2=w2)

    def _derivatives(self, state: np.ndarray) -> np.ndarray:
        th1, th2, w1, w2 = state
        p = self.params
        g, m1, m2, L1, L2 = p.gravity, p.mass1, p.mass2, p.length1, p.length2
        m12 = m1 + m2

        delta = th1 - th2
        sin_d = np.sin(delta)
        cos_d = np.cos(delta)

        den1 = m12 * L1 - m2 * L1 * cos_d * cos_d
        den2 = (L2 / L1) * den1

        if p.formulation == PendulumFormulation.LAGRANGIAN:
            num1 = (
                -m2 * L1 * w1 * w1 * sin_d * cos_d
                + m2 * g * np.sin(th2) * cos_d
                - m2 * L2 * w2 * w2 * sin_d
                - m12 * g * np.sin(th1)
            )
            num2 = (
                m2 * L2 * w2 * w2 * sin_d * cos_d
                + m12 * g * np.sin(th1) * cos_d
                + m12 * L1 * w1 * w1 * sin_d
                - m12 * g * np.sin(th2)
            )
        else:
            num1 = (
                -m2 * L1 * w1 * w1 * sin_d * cos_d
                + m2 * g * np.sin(th2) * cos_d
                + m2 * L2 * w2 * w2 * sin_d
                - m12 * g * np.sin(th1)
            )
            num2 = (
                -m2 * L2 * w2 * w2 * sin_d * cos_d
                - m12 * g * np.sin(th1) * cos_d
                - m12 * L1 * w1 * w1 * sin_d
                + m12 * g * np.sin(th2)
            )

        return np.array([w1, w2, num1 / den1 * p.damping, num2 / den2 * p.damping])

    def _trail_point(self, state: np.ndarray) -> np.ndarray:
        pos = self._positions(state)
        return np.array([pos.x2, pos.y2])

    def _positions(self, state: np.ndarray) -> PendulumPositions:
        th1, th2 = state[0], state[1]
        L1, L2 = self.params.length1, self.params.length2
        x1 = L1 * np.sin(th1)
        y1 = L1 * np.cos(th1)
        x2 = x1 + L2 * np.sin(th2)
        y2 = y1 + L2 * np.cos(th2)
        return PendulumPositions(float(x1), float(y1), float(x2), float(y2))

    def get_pendulum_positions(self) -> PendulumPositions:
        """Forward kinematics for both bobs."""
        return self._positions(self._state)

    def get_total_energy(self) -> float:
        """Kinetic plus potential energy, potential zero at the pivot.

        Exactly conserved by the lagrangian formulation with damping=1, up to
        integration error.
        """
        th1, th2, w1, w2 = self._state
        p = self.params
        g, m1, m2, L1, L2 = p.gravity, p.mass1, p.mass2, p.length1, p.length2

        T1 = 0.5 * m1 * L1 * L1 * w1 * w1
        T2 = 0.5 * m2 * (
            L1 * L1 * w1 * w1
            + L2 * L2 * w2 * w2
            + 2 * L1 * L2 * w1 * w2 * np.cos(th1 - th2)
        )
        V1 = -m1 * g * L1 * np.cos(th1)
        V2 = -m2 * g * (L1 * np.cos(th1) + L2 * np.cos(th2))

        return float(T1 + T2 + V1 + V2)
