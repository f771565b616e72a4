"""Tests for chunked raster generation."""
from __future__ import annotations

import numpy as np
import pytest

from chaos_lab.errors import InvalidParameter
from chaos_lab.simulation.raster import FractalRaster, RenderJob, render, render_parallel


class TestFractalRaster:
    def test_buffer_layout(self, mandelbrot):
        raster = FractalRaster(mandelbrot, 12, 7)
        assert raster.pixels.shape == (7, 12, 4)
        assert raster.pixels.dtype == np.uint8
        assert raster.stride == 48
        assert len(raster.to_bytes()) == 12 * 7 * 4
        assert np.all(raster.pixels[..., 3] == 255)

    def test_rows_match_per_pixel_evaluation(self, julia):
        width, height = 16, 10
        raster = FractalRaster(julia, width, height)
        raster.compute_rows(0, height)
        for y in range(height):
            for x in range(width):
                result = julia.calculate_point(julia.screen_to_complex(x, y, width, height))
                color = julia.iterations_to_color(result.iterations, result.escaped)
                assert raster.pixel(x, y) == (*color.as_tuple(), 255)

    def test_compute_rows_touches_only_its_rows(self, mandelbrot):
        raster = FractalRaster(mandelbrot, 20, 10)
        raster.compute_rows(3, 2)
        untouched = np.concatenate([raster.pixels[:3], raster.pixels[5:]])
        assert np.all(untouched[..., :3] == 0)
        assert np.any(raster.pixels[3:5, :, :3] != 0)

    def test_compute_rows_clipped(self, mandelbrot):
        raster = FractalRaster(mandelbrot, 8, 6)
        assert raster.compute_rows(4, 100).shape == (2, 8, 4)

    def test_tiles_assemble_full_image(self, mandelbrot):
        full = render(mandelbrot, 18, 12)
        tiled = FractalRaster(mandelbrot, 18, 12)
        for y in range(0, 12, 5):
            for x in range(0, 18, 7):
                tiled.compute_tile(x, y, min(7, 18 - x), min(5, 12 - y))
        np.testing.assert_array_equal(tiled.pixels, full.pixels)

    def test_tile_outside_raster(self, mandelbrot):
        raster = FractalRaster(mandelbrot, 8, 8)
        with pytest.raises(InvalidParameter):
            raster.compute_tile(4, 4, 5, 1)
        with pytest.raises(InvalidParameter):
            raster.compute_rows(-1, 2)

    def test_zero_size_rejected(self, mandelbrot):
        with pytest.raises(InvalidParameter):
            FractalRaster(mandelbrot, 0, 10)
        with pytest.raises(InvalidParameter):
            FractalRaster(mandelbrot, 10, 0)

    def test_origin_pixel_is_black(self, mandelbrot):
        # default view centered on -0.5: pixel (25, 20) of a 40x40 raster is 0 + 0i
        raster = render(mandelbrot, 40, 40)
        assert raster.pixel(25, 20)[:3] == (0, 0, 0)


class TestRenderJob:
    def test_runs_to_completion(self, mandelbrot):
        job = RenderJob(mandelbrot, 20, 13, rows_per_chunk=4)
        chunks = 0
        while job.advance():
            chunks += 1
        assert job.done
        assert job.progress == 1.0
        assert chunks == 3
        np.testing.assert_array_equal(job.result().pixels, render(mandelbrot, 20, 13).pixels)

    def test_result_none_until_done(self, mandelbrot):
        job = RenderJob(mandelbrot, 10, 10, rows_per_chunk=3)
        job.advance()
        assert job.rows_done == 3
        assert job.result() is None

    def test_parameter_change_cancels(self, mandelbrot):
        job = RenderJob(mandelbrot, 10, 10, rows_per_chunk=2)
        job.advance()
        mandelbrot.update_params(zoom=3.0)
        assert not job.advance()
        assert job.cancelled
        assert not job.done
        assert job.result() is None

    def test_explicit_cancel(self, julia):
        job = RenderJob(julia, 10, 10)
        job.cancel()
        assert not job.advance()
        assert job.run() is None

    def test_run(self, julia):
        raster = RenderJob(julia, 9, 9, rows_per_chunk=2).run()
        assert raster is not None
        assert raster.pixels.shape == (9, 9, 4)

    def test_invalid_chunk(self, julia):
        with pytest.raises(InvalidParameter):
            RenderJob(julia, 10, 10, rows_per_chunk=0)


class TestRenderParallel:
    def test_matches_serial(self, julia):
        serial = render(julia, 33, 21)
        parallel = render_parallel(julia, 33, 21, workers=4, rows_per_chunk=5)
        np.testing.assert_array_equal(parallel.pixels, serial.pixels)

    def test_single_worker(self, mandelbrot):
        raster = render_parallel(mandelbrot, 10, 10, workers=1)
        np.testing.assert_array_equal(raster.pixels, render(mandelbrot, 10, 10).pixels)

    @pytest.mark.parametrize("workers", [0, -2])
    def test_invalid_workers(self, mandelbrot, workers):
        with pytest.raises(InvalidParameter) as exc:
            render_parallel(mandelbrot, 10, 10, workers=workers)
        assert exc.value.field == "workers"
