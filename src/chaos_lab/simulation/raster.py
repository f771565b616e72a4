"""RGBA pixel fields for the escape-time fractals, computed in chunks.

The engine never schedules work itself. Callers compute row ranges or tiles
when they choose to, interleave them with other work, and cancel by simply
not asking for more; ``RenderJob`` packages that pattern together with
stale-parameter detection.
"""
from __future__ import annotations

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from chaos_lab.errors import InvalidParameter
from chaos_lab.simulation.fractals import EscapeTimeFractal, check_raster_size

logger = logging.getLogger(__name__)

CHANNELS = 4
OPAQUE = 255


class FractalRaster:
    """Row-major RGBA8888 buffer of shape (height, width, 4), alpha fixed at 255.

    ``compute_rows`` and ``compute_tile`` each write only their own region,
    so calls on disjoint regions may run concurrently.
    """

    def __init__(self, engine: EscapeTimeFractal, width: int, height: int) -> None:
        check_raster_size(width, height)
        self.engine = engine
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, CHANNELS), dtype=np.uint8)
        self.pixels[..., 3] = OPAQUE

    @property
    def stride(self) -> int:
        """Bytes per row."""
        return self.width * CHANNELS

    def compute_tile(self, x: int, y: int, w: int, h: int) -> np.ndarray:
        """Evaluate the pixel block [x, x+w) x [y, y+h) and return its view."""
        if w < 0 or h < 0 or x < 0 or y < 0 or x + w > self.width or y + h > self.height:
            raise InvalidParameter(
                f"tile ({x}, {y}, {w}, {h}) outside {self.width}x{self.height} raster"
            )
        region = self.pixels[y:y + h, x:x + w]
        if w == 0 or h == 0:
            return region
        re, im = self.engine.pixel_grid(x, y, w, h, self.width, self.height)
        iterations, escaped = self.engine.escape_counts(re, im)
        region[..., :3] = self.engine.colorize(iterations, escaped)
        return region

    def compute_rows(self, start_row: int, count: int) -> np.ndarray:
        """Evaluate ``count`` full rows from ``start_row``, clipped at the bottom edge."""
        if start_row < 0 or start_row > self.height or count < 0:
            raise InvalidParameter(
                f"rows ({start_row}, {count}) outside raster of height {self.height}"
            )
        count = min(count, self.height - start_row)
        return self.compute_tile(0, start_row, self.width, count)

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        r, g, b, a = (int(v) for v in self.pixels[y, x])
        return r, g, b, a

    def to_bytes(self) -> bytes:
        return self.pixels.tobytes()


class RenderJob:
    """Cooperative, cancellable generation of a full raster.

    Each ``advance()`` computes the next band of ``rows_per_chunk`` rows. If
    the engine's parameters change between chunks the job cancels itself and
    drops its partial buffer; ``result()`` only ever returns a finished
    raster computed with a single parameter set.
    """

    def __init__(
        self,
        engine: EscapeTimeFractal,
        width: int,
        height: int,
        rows_per_chunk: int = 10,
    ) -> None:
        if rows_per_chunk < 1:
            raise InvalidParameter(
                f"rows_per_chunk must be >= 1, got {rows_per_chunk}", field="rows_per_chunk"
            )
        self.engine = engine
        self.rows_per_chunk = rows_per_chunk
        self._raster: FractalRaster | None = FractalRaster(engine, width, height)
        self._height = height
        self._revision = engine.revision
        self._next_row = 0
        self._cancelled = False
        self._started = time.perf_counter()

    @property
    def rows_done(self) -> int:
        return self._next_row

    @property
    def progress(self) -> float:
        return self._next_row / self._height

    @property
    def done(self) -> bool:
        return not self._cancelled and self._next_row >= self._height

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if not self._cancelled:
            logger.debug("Render cancelled at row %d/%d", self._next_row, self._height)
        self._cancelled = True
        self._raster = None

    def advance(self) -> bool:
        """Compute one chunk. Returns True while more chunks remain."""
        if self._cancelled or self._raster is None:
            return False
        if self.engine.revision != self._revision:
            self.cancel()
            return False
        if self._next_row < self._height:
            self._raster.compute_rows(self._next_row, self.rows_per_chunk)
            self._next_row = min(self._height, self._next_row + self.rows_per_chunk)
            if self._next_row >= self._height:
                logger.info(
                    "Rendered %s %dx%d in %.3fs",
                    type(self.engine).__name__,
                    self._raster.width,
                    self._height,
                    time.perf_counter() - self._started,
                )
        return self._next_row < self._height

    def run(self) -> FractalRaster | None:
        """Advance until finished or cancelled."""
        while self.advance():
            pass
        return self.result()

    def result(self) -> FractalRaster | None:
        if not self.done:
            return None
        return self._raster


def render(engine: EscapeTimeFractal, width: int, height: int) -> FractalRaster:
    """Compute a full raster in one call."""
    raster = FractalRaster(engine, width, height)
    raster.compute_rows(0, height)
    return raster


def render_parallel(
    engine: EscapeTimeFractal,
    width: int,
    height: int,
    workers: int | None = None,
    rows_per_chunk: int = 32,
) -> FractalRaster:
    """Compute a raster with row bands spread over a thread pool.

    Bands are disjoint, so workers write to the shared buffer without locking.
    """
    if rows_per_chunk < 1:
        raise InvalidParameter(
            f"rows_per_chunk must be >= 1, got {rows_per_chunk}", field="rows_per_chunk"
        )
    if workers is None:
        workers = min(8, os.cpu_count() or 1)
    if workers < 1:
        raise InvalidParameter(f"workers must be >= 1, got {workers}", field="workers")
    raster = FractalRaster(engine, width, height)
    starts = range(0, height, rows_per_chunk)
    started = time.perf_counter()
    with ThreadPoolExecutor(max_workers=workers) as executor:
        # list() re-raises any worker exception here
        list(executor.map(lambda row: raster.compute_rows(row, rows_per_chunk), starts))
    logger.info(
        "Rendered %s %dx%d on %d workers in %.3fs",
        type(engine).__name__, width, height, workers, time.perf_counter() - started,
    )
    return raster
