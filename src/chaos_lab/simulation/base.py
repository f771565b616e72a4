"""Abstract base class for the trail-keeping ODE engines."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from chaos_lab.errors import InvalidParameter
from chaos_lab.presets import get_preset
from chaos_lab.simulation.integrators import RK4Integrator
from chaos_lab.simulation.trail import TrailBuffer
from chaos_lab.types.params import EngineParams

logger = logging.getLogger(__name__)


class ODEEngine(ABC):
    """Base class for the continuous-time engines.

    Subclasses provide the derivative and the point recorded in the trail;
    the base class owns the RK4 stepping, the bounded trail and parameter
    management. One instance must only be advanced from one thread at a time.
    """

    params_type: type[EngineParams]
    preset_group: str = ""
    trail_dim: int = 3

    def __init__(self, params: EngineParams | None = None) -> None:
        self.params = params if params is not None else self.params_type()
        self.integrator = RK4Integrator()
        self._trail = TrailBuffer(self.params.trail_length, self.trail_dim)
        self._state: np.ndarray = np.zeros(0)
        self._step_count = 0

    @abstractmethod
    def _derivatives(self, state: np.ndarray) -> np.ndarray:
        """Time derivative of the state vector."""

    @abstractmethod
    def _trail_point(self, state: np.ndarray) -> np.ndarray:
        """Position recorded in the trail for a given state."""

    @property
    def state(self) -> np.ndarray:
        return self._state.copy()

    @property
    def step_count(self) -> int:
        return self._step_count

    @property
    def trail(self) -> np.ndarray:
        """Trail points, oldest first."""
        return self._trail.to_array()

    @property
    def trail_size(self) -> int:
        return len(self._trail)

    def step(self) -> np.ndarray:
        """Advance one RK4 step and record the new trail point."""
        self._state = self.integrator.step(self._derivatives, self._state, self.params.dt)
        self._step_count += 1
        self._trail.push(self._trail_point(self._state))
        return self._state.copy()

    def calculate_steps(self, n_steps: int) -> np.ndarray:
        """Run ``n_steps`` steps and return the new states in order."""
        if n_steps < 0:
            raise InvalidParameter(f"n_steps must be >= 0, got {n_steps}", field="n_steps")
        out = np.empty((n_steps, self._state.shape[0]), dtype=np.float64)
        for i in range(n_steps):
            out[i] = self.step()
        return out

    def recent_points(self, count: int) -> np.ndarray:
        return self._trail.recent(count)

    def limit_trail_length(self, max_length: int) -> None:
        """Drop all but the newest ``max_length`` trail points."""
        self._trail.truncate(max_length)

    def update_params(self, **changes: Any) -> None:
        """Merge ``changes`` into the parameters. State is left untouched."""
        self.params = self.params.merged(**changes)
        if self.params.trail_length != self._trail.capacity:
            self._trail.resize(self.params.trail_length)
        logger.debug("%s params updated: %s", type(self).__name__, changes)

    def apply_preset(self, name: str) -> bool:
        """Apply a named preset; unknown names leave the engine unchanged."""
        preset = get_preset(self.preset_group, name)
        if preset is None:
            logger.debug("Unknown %s preset %r ignored", self.preset_group, name)
            return False
        self.update_params(**preset)
        return True
