"""Logistic map engine (discrete-time chaos).

x_{n+1} = r * x_n * (1 - x_n)

Every computation is a pure function of its arguments; the parameter record
only supplies defaults.
"""
from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Any

import numpy as np

from chaos_lab.errors import InvalidParameter
from chaos_lab.presets import get_preset
from chaos_lab.types.params import LogisticParams
from chaos_lab.types.values import BifurcationRaster

logger = logging.getLogger(__name__)

# Start of the period-4 window: the period-2 orbit loses stability at 1 + sqrt(6)
PERIOD_DOUBLING_R = 1.0 + math.sqrt(6.0)
# Accumulation point of the period-doubling cascade, rounded
CHAOS_ONSET_R = 3.57


class LogisticRegime(str, Enum):
    EXTINCT = "extinct"
    STABLE = "stable"
    OSCILLATING = "oscillating"
    PERIODIC = "periodic"
    CHAOTIC = "chaotic"


def logistic(r: float, x: float) -> float:
    return r * x * (1 - x)


def classify(r: float) -> LogisticRegime:
    """Long-run regime of the map for growth rate ``r``.

    r < 1 extinct, [1, 3) stable fixed point, [3, 1+sqrt(6)) period-2
    oscillation, [1+sqrt(6), 3.57) higher periods, >= 3.57 chaotic.
    """
    if r < 1:
        return LogisticRegime.EXTINCT
    if r < 3:
        return LogisticRegime.STABLE
    if r < PERIOD_DOUBLING_R:
        return LogisticRegime.OSCILLATING
    if r < CHAOS_ONSET_R:
        return LogisticRegime.PERIODIC
    return LogisticRegime.CHAOTIC


class LogisticMapEngine:
    """Time series and bifurcation data for the logistic map."""

    preset_group = "logistic"

    def __init__(self, params: LogisticParams | None = None) -> None:
        self.params = params if params is not None else LogisticParams()

    def update_params(self, **changes: Any) -> None:
        self.params = self.params.merged(**changes)
        logger.debug("LogisticMapEngine params updated: %s", changes)

    def apply_preset(self, name: str) -> bool:
        preset = get_preset(self.preset_group, name)
        if preset is None:
            logger.debug("Unknown logistic preset %r ignored", name)
            return False
        self.update_params(**preset)
        return True

    def time_series(
        self,
        r: float | None = None,
        x0: float | None = None,
        steps: int | None = None,
    ) -> np.ndarray:
        """The ``steps`` successive iterates x_1 .. x_steps."""
        r = self.params.r if r is None else r
        x = self.params.x0 if x0 is None else x0
        steps = self.params.iterations if steps is None else steps
        if steps < 0:
            raise InvalidParameter(f"steps must be >= 0, got {steps}", field="steps")

        series = np.empty(steps, dtype=np.float64)
        for i in range(steps):
            x = logistic(r, x)
            series[i] = x
        return series

    def bifurcation_raster(
        self,
        r_min: float | None = None,
        r_max: float | None = None,
        columns: int = 800,
        transient: int = 1000,
        plotted: int = 100,
        x0: float | None = None,
    ) -> BifurcationRaster:
        """Sample the long-run orbit for ``columns`` evenly spaced r values.

        Column i uses r = r_min + (r_max - r_min) * i / columns. All columns
        are iterated together as one numpy vector, each starting from x0
        (default: the current params).
        """
        r_min = self.params.r_min if r_min is None else r_min
        r_max = self.params.r_max if r_max is None else r_max
        x0 = self.params.x0 if x0 is None else x0
        if columns < 1:
            raise InvalidParameter(f"columns must be >= 1, got {columns}", field="columns")
        if transient < 0 or plotted < 0:
            raise InvalidParameter(
                f"transient and plotted must be >= 0, got {transient}, {plotted}"
            )

        r = r_min + (r_max - r_min) * np.arange(columns) / columns
        x = np.full(columns, x0, dtype=np.float64)
        with np.errstate(over="ignore", invalid="ignore"):
            for _ in range(transient):
                x = r * x * (1 - x)
            samples = np.empty((columns, plotted), dtype=np.float64)
            for j in range(plotted):
                x = r * x * (1 - x)
                samples[:, j] = x

        return BifurcationRaster(r_values=r, x_values=samples)

    def classify(self, r: float | None = None) -> LogisticRegime:
        return classify(self.params.r if r is None else r)

    @staticmethod
    def fixed_point(r: float) -> float:
        """Nontrivial fixed point x* = (r - 1) / r, attracting for 1 < r < 3."""
        return (r - 1) / r
