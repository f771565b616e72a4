"""Small value types passed between the engines and their renderers."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Complex:
    re: float
    im: float

    def magnitude_squared(self) -> float:
        return self.re * self.re + self.im * self.im


@dataclass(frozen=True)
class IterationResult:
    """Outcome of one escape-time evaluation.

    ``escaped=False`` always comes with ``iterations == max_iterations``.
    """

    iterations: int
    escaped: bool


@dataclass(frozen=True)
class ColorRGB:
    r: int
    g: int
    b: int

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


@dataclass(frozen=True)
class PendulumState:
    theta1: float
    theta2: float
    omega1: float
    omega2: float

    def to_array(self) -> np.ndarray:
        return np.array(
            [self.theta1, self.theta2, self.omega1, self.omega2], dtype=np.float64
        )


@dataclass(frozen=True)
class PendulumPositions:
    """Cartesian bob positions, pivot at the origin, y pointing down."""

    x1: float
    y1: float
    x2: float
    y2: float


@dataclass
class BifurcationRaster:
    """Long-run samples of the logistic map, one row per r column."""

    r_values: np.ndarray
    x_values: np.ndarray

    @property
    def columns(self) -> int:
        return len(self.r_values)

    def points(self) -> tuple[np.ndarray, np.ndarray]:
        """Flatten to matching (r, x) arrays for scatter-style drawing."""
        r = np.repeat(self.r_values, self.x_values.shape[1])
        return r, self.x_values.reshape(-1)
