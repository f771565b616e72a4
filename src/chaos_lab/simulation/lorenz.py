"""Lorenz system engine -- strange attractor with a bounded trail.

x' = sigma*(y - x), y' = x*(rho - z) - y, z' = x*y - beta*z
"""
from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from chaos_lab.errors import InvalidParameter
from chaos_lab.simulation.base import ODEEngine
from chaos_lab.types.params import LorenzParams

logger = logging.getLogger(__name__)

# Onset of chaos for sigma=10, beta=8/3 (subcritical Hopf bifurcation)
CHAOS_RHO = 24.74

DEFAULT_INITIAL = (1.0, 1.0, 1.0)


class LorenzEngine(ODEEngine):
    """Lorenz system: the canonical example of deterministic chaos.

    State vector: [x, y, z]. Each step appends the new position to the trail.
    """

    params_type = LorenzParams
    preset_group = "lorenz"
    trail_dim = 3

    def __init__(
        self,
        params: LorenzParams | None = None,
        initial: Sequence[float] | None = None,
    ) -> None:
        super().__init__(params)
        self.reset(initial)

    def reset(self, initial: Sequence[float] | None = None) -> np.ndarray:
        """Reinitialize the state (default (1, 1, 1)) and clear the trail."""
        if initial is None:
            initial = DEFAULT_INITIAL
        state = np.asarray(initial, dtype=np.float64)
        if state.shape != (3,):
            raise InvalidParameter(
                f"initial must hold 3 values (x, y, z), got shape {state.shape}", field="initial"
            )
        self._state = state.copy()
        self._step_count = 0
        self._trail.clear()
        logger.debug("Lorenz reset to %s", self._state)
        return self._state.copy()

    def _derivatives(self, state: np.ndarray) -> np.ndarray:
        x, y, z = state
        p = self.params
        dx = p.sigma * (y - x)
        dy = x * (p.rho - z) - y
        dz = x * y - p.beta * z
        return np.array([dx, dy, dz])

    def _trail_point(self, state: np.ndarray) -> np.ndarray:
        return state

    @property
    def current_position(self) -> np.ndarray:
        return self.state

    def is_chaotic(self) -> bool:
        """Parameter-threshold heuristic (rho > 24.74), not a Lyapunov test."""
        return self.params.rho > CHAOS_RHO

    @property
    def fixed_points(self) -> list[np.ndarray]:
        """The origin, plus the two symmetric points C+/C- when rho > 1."""
        points = [np.array([0.0, 0.0, 0.0])]
        rho, beta = self.params.rho, self.params.beta
        if rho > 1 and beta > 0:
            c = np.sqrt(beta * (rho - 1))
            points.append(np.array([c, c, rho - 1]))
            points.append(np.array([-c, -c, rho - 1]))
        return points
