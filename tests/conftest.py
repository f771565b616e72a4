"""Shared test fixtures for chaos-lab."""

import pytest

from chaos_lab.simulation.fractals import JuliaEngine, MandelbrotEngine
from chaos_lab.types.params import JuliaParams, MandelbrotParams


@pytest.fixture
def tmp_output_dir(tmp_path):
    """Temporary directory for test outputs."""
    out = tmp_path / "output"
    out.mkdir()
    return out


@pytest.fixture
def mandelbrot():
    """Mandelbrot engine with a small iteration limit."""
    return MandelbrotEngine(MandelbrotParams(max_iterations=50))


@pytest.fixture
def julia():
    """Julia engine for c = -1 (the period-2 basin, a connected set)."""
    return JuliaEngine(JuliaParams(c_real=-1.0, c_imag=0.0, max_iterations=50))
