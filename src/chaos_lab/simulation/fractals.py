"""Escape-time fractals: one evaluator, two ways of seeding the orbit.

Both sets iterate z -> z^2 + c and report the first iteration at which
|z|^2 exceeds the squared escape radius. They differ only in where the
queried point goes: Mandelbrot uses it as c, Julia as the starting z.
"""
from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Iterable

import numpy as np

from chaos_lab.errors import InvalidParameter
from chaos_lab.presets import get_preset
from chaos_lab.simulation.color import Palette, escape_color, escape_colors
from chaos_lab.types.params import FractalParams, JuliaParams, MandelbrotParams
from chaos_lab.types.values import ColorRGB, Complex, IterationResult

logger = logging.getLogger(__name__)

# Width of the view at zoom 1, in complex-plane units
BASE_SPAN = 4.0


def check_raster_size(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise InvalidParameter(f"raster size must be positive, got {width}x{height}")


class EscapeTimeFractal(ABC):
    """Generic escape-time evaluator.

    Subclasses decide how a query point seeds the orbit (``_orbit_start``)
    and which escape radius applies. Evaluation touches no mutable state, so
    disjoint pixel regions can be computed from any number of threads.

    ``revision`` increases on every parameter change; long renders compare it
    to detect that their parameters went stale.
    """

    params_type: type[FractalParams]
    preset_group: str = ""
    palette: Palette = Palette.HSV

    def __init__(self, params: FractalParams | None = None) -> None:
        self.params = params if params is not None else self.params_type()
        self._revision = 0

    @property
    def revision(self) -> int:
        return self._revision

    @property
    @abstractmethod
    def escape_radius(self) -> float:
        """Orbits with |z| beyond this radius have escaped."""

    @abstractmethod
    def _orbit_start(self, re: Any, im: Any) -> tuple[Any, Any, Any, Any]:
        """(z_re, z_im, c_re, c_im) for a query point; works on floats and arrays."""

    def get_params(self) -> FractalParams:
        return self.params

    def update_params(self, **changes: Any) -> None:
        self.params = self.params.merged(**changes)
        self._revision += 1
        logger.debug("%s params updated: %s", type(self).__name__, changes)

    def apply_preset(self, name: str) -> bool:
        """Apply a named preset; unknown names leave the engine unchanged."""
        preset = get_preset(self.preset_group, name)
        if preset is None:
            logger.debug("Unknown %s preset %r ignored", self.preset_group, name)
            return False
        self.update_params(**preset)
        return True

    # -- single points -------------------------------------------------

    def calculate_point(self, point: Complex) -> IterationResult:
        """Escape-time of one point.

        The magnitude test runs before each squaring, so a starting value
        already outside the radius escapes at iteration 0. NaN never compares
        greater than the radius; the loop is bounded by max_iterations either way.
        """
        max_iterations = self.params.max_iterations
        radius_sq = self.escape_radius * self.escape_radius
        zr, zi, cr, ci = self._orbit_start(point.re, point.im)

        for n in range(max_iterations):
            if zr * zr + zi * zi > radius_sq:
                return IterationResult(iterations=n, escaped=True)
            zr, zi = zr * zr - zi * zi + cr, 2 * zr * zi + ci

        return IterationResult(iterations=max_iterations, escaped=False)

    def calculate_batch(self, points: Iterable[Complex]) -> list[IterationResult]:
        return [self.calculate_point(p) for p in points]

    # -- arrays ----------------------------------------------------------

    def escape_counts(self, re: np.ndarray, im: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Vectorised ``calculate_point`` over arrays of real and imaginary parts.

        Returns (iterations, escaped) arrays of the input shape.
        """
        max_iterations = self.params.max_iterations
        radius_sq = self.escape_radius * self.escape_radius
        zr, zi, cr, ci = self._orbit_start(
            np.asarray(re, dtype=np.float64), np.asarray(im, dtype=np.float64)
        )
        zr = np.array(zr, dtype=np.float64)
        zi = np.array(zi, dtype=np.float64)
        cr = np.broadcast_to(cr, zr.shape)
        ci = np.broadcast_to(ci, zr.shape)

        iterations = np.full(zr.shape, max_iterations, dtype=np.int64)
        escaped = np.zeros(zr.shape, dtype=bool)

        with np.errstate(over="ignore", invalid="ignore"):
            for n in range(max_iterations):
                newly = ~escaped & (zr * zr + zi * zi > radius_sq)
                iterations[newly] = n
                escaped |= newly
                if escaped.all():
                    break
                zr, zi = zr * zr - zi * zi + cr, 2 * zr * zi + ci

        return iterations, escaped

    # -- coordinates -----------------------------------------------------

    def _ranges(self, width: int, height: int) -> tuple[float, float]:
        scale = BASE_SPAN / self.params.zoom
        return scale * (width / height), scale

    def screen_to_complex(self, x: float, y: float, width: int, height: int) -> Complex:
        """Map a pixel to the complex plane; the view center sits mid-raster."""
        check_raster_size(width, height)
        range_x, range_y = self._ranges(width, height)
        re = self.params.center_x + (x / width - 0.5) * range_x
        im = self.params.center_y + (y / height - 0.5) * range_y
        return Complex(re, im)

    def complex_to_screen(self, point: Complex, width: int, height: int) -> tuple[float, float]:
        """Inverse of ``screen_to_complex``."""
        check_raster_size(width, height)
        range_x, range_y = self._ranges(width, height)
        x = ((point.re - self.params.center_x) / range_x + 0.5) * width
        y = ((point.im - self.params.center_y) / range_y + 0.5) * height
        return x, y

    def pixel_grid(
        self, x: int, y: int, w: int, h: int, width: int, height: int
    ) -> tuple[np.ndarray, np.ndarray]:
        """Complex coordinates of the pixel block [x, x+w) x [y, y+h), shape (h, w)."""
        check_raster_size(width, height)
        range_x, range_y = self._ranges(width, height)
        xs = np.arange(x, x + w, dtype=np.float64)
        ys = np.arange(y, y + h, dtype=np.float64)
        re = self.params.center_x + (xs / width - 0.5) * range_x
        im = self.params.center_y + (ys / height - 0.5) * range_y
        return np.meshgrid(re, im)

    # -- color -----------------------------------------------------------

    def iterations_to_color(self, iterations: int, escaped: bool) -> ColorRGB:
        p = self.params
        return escape_color(iterations, escaped, p.max_iterations, p.color_intensity, self.palette)

    def colorize(self, iterations: np.ndarray, escaped: np.ndarray) -> np.ndarray:
        p = self.params
        return escape_colors(iterations, escaped, p.max_iterations, p.color_intensity, self.palette)


class MandelbrotEngine(EscapeTimeFractal):
    """Mandelbrot set: c is the queried point, z starts at 0.

    z0 = 0 always squares to z1 = c, so the orbit is entered at z1 = c. The
    first magnitude test is therefore on c itself, and c = 2 (|c|^2 = 4, not
    beyond the radius) escapes on the next iteration.
    """

    params_type = MandelbrotParams
    preset_group = "mandelbrot"
    palette = Palette.HSV

    @property
    def escape_radius(self) -> float:
        return 2.0

    def _orbit_start(self, re: Any, im: Any) -> tuple[Any, Any, Any, Any]:
        return re, im, re, im


class JuliaSetKind(str, Enum):
    SIMPLE_CONNECTED = "simple connected"
    COMPLEX_BOUNDARY = "connected with complex boundary"
    DUST = "dust-type"


# |c| below which a connected Julia set is reported as a simple closed shape
SIMPLE_SET_MAGNITUDE = 0.5


class JuliaEngine(EscapeTimeFractal):
    """Julia set for a fixed c: the queried point is the starting z."""

    params_type = JuliaParams
    preset_group = "julia"
    palette = Palette.HSL

    @property
    def escape_radius(self) -> float:
        return self.params.escape_radius

    @property
    def c(self) -> Complex:
        return Complex(self.params.c_real, self.params.c_imag)

    def _orbit_start(self, re: Any, im: Any) -> tuple[Any, Any, Any, Any]:
        return re, im, self.params.c_real, self.params.c_imag

    def is_connected(self) -> bool:
        """Connectedness via the critical orbit: bounded orbit of 0 means connected."""
        return not self.calculate_point(Complex(0.0, 0.0)).escaped

    def get_set_description(self) -> JuliaSetKind:
        if not self.is_connected():
            return JuliaSetKind.DUST
        magnitude = math.hypot(self.params.c_real, self.params.c_imag)
        if magnitude < SIMPLE_SET_MAGNITUDE:
            return JuliaSetKind.SIMPLE_CONNECTED
        return JuliaSetKind.COMPLEX_BOUNDARY
