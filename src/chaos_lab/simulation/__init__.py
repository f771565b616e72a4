"""Simulation engines: ODE integrators, iterated maps and escape-time fractals."""

from __future__ import annotations

from chaos_lab.simulation.double_pendulum import DoublePendulumEngine
from chaos_lab.simulation.fractals import (
    EscapeTimeFractal,
    JuliaEngine,
    JuliaSetKind,
    MandelbrotEngine,
)
from chaos_lab.simulation.integrators import RK4Integrator, rk4_step
from chaos_lab.simulation.logistic_map import LogisticMapEngine, LogisticRegime, classify
from chaos_lab.simulation.lorenz import LorenzEngine
from chaos_lab.simulation.raster import FractalRaster, RenderJob, render, render_parallel
from chaos_lab.simulation.trail import TrailBuffer

__all__ = [
    "rk4_step",
    "RK4Integrator",
    "TrailBuffer",
    "LorenzEngine",
    "DoublePendulumEngine",
    "LogisticMapEngine",
    "LogisticRegime",
    "classify",
    "EscapeTimeFractal",
    "MandelbrotEngine",
    "JuliaEngine",
    "JuliaSetKind",
    "FractalRaster",
    "RenderJob",
    "render",
    "render_parallel",
]
