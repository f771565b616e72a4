"""CLI entry point for chaos-lab.

Usage:
    chaos-lab lorenz [STEPS]        Integrate the Lorenz system and summarize the trail
    chaos-lab pendulum [STEPS]      Integrate the double pendulum and report energy
    chaos-lab logistic [R]          Classify r and print the tail of its time series
    chaos-lab mandelbrot [PRESET]   Render the Mandelbrot set and report coverage
    chaos-lab julia [PRESET]        Render a Julia set and describe it
    chaos-lab presets               List the named presets of every engine
    chaos-lab version               Show version
"""
from __future__ import annotations

import logging
import sys

import numpy as np

from chaos_lab.utils.config import ChaosLabConfig, load_config

logger = logging.getLogger(__name__)


def main() -> None:
    """Main CLI entry point."""
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(0)

    command = sys.argv[1].lower()
    args = sys.argv[2:]

    if command in ("version", "--version", "-v"):
        from chaos_lab import __version__
        print(f"chaos-lab {__version__}")
        return
    if command in ("help", "--help", "-h"):
        print(__doc__)
        return

    commands = {
        "lorenz": _run_lorenz,
        "pendulum": _run_pendulum,
        "logistic": _run_logistic,
        "mandelbrot": _run_mandelbrot,
        "julia": _run_julia,
        "presets": _run_presets,
    }
    if command not in commands:
        print(f"Unknown command: {command}")
        print(__doc__)
        sys.exit(1)

    config = load_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    commands[command](config, args)


def _int_arg(args: list[str], default: int) -> int:
    return int(args[0]) if args else default


def _run_lorenz(config: ChaosLabConfig, args: list[str]) -> None:
    from chaos_lab.simulation.lorenz import LorenzEngine

    engine = LorenzEngine(config.engine_params("lorenz"))
    steps = _int_arg(args, 5000)
    engine.calculate_steps(steps)
    trail = engine.trail
    x, y, z = engine.current_position
    print(f"Lorenz: {steps} steps, trail {len(trail)}/{engine.params.trail_length}")
    print(f"  position  ({x:.4f}, {y:.4f}, {z:.4f})")
    print(f"  extent    x [{trail[:, 0].min():.2f}, {trail[:, 0].max():.2f}]"
          f"  z [{trail[:, 2].min():.2f}, {trail[:, 2].max():.2f}]")
    print(f"  chaotic   {engine.is_chaotic()} (rho={engine.params.rho})")


def _run_pendulum(config: ChaosLabConfig, args: list[str]) -> None:
    from chaos_lab.simulation.double_pendulum import DoublePendulumEngine

    engine = DoublePendulumEngine(config.engine_params("pendulum"), seed=config.seed)
    steps = _int_arg(args, 2000)
    e0 = engine.get_total_energy()
    engine.calculate_steps(steps)
    pos = engine.get_pendulum_positions()
    print(f"Double pendulum ({engine.params.formulation.value}): {steps} steps")
    print(f"  bob 2     ({pos.x2:.3f}, {pos.y2:.3f}), trail {engine.trail_size}")
    print(f"  energy    {e0:.6g} -> {engine.get_total_energy():.6g}")


def _run_logistic(config: ChaosLabConfig, args: list[str]) -> None:
    from chaos_lab.simulation.logistic_map import LogisticMapEngine

    engine = LogisticMapEngine(config.engine_params("logistic"))
    r = float(args[0]) if args else engine.params.r
    series = engine.time_series(r=r)
    raster = engine.bifurcation_raster(columns=200, plotted=50)
    print(f"Logistic map r={r}: {engine.classify(r).value}")
    print("  tail      " + " ".join(f"{v:.4f}" for v in series[-8:]))
    print(f"  raster    {raster.columns} columns over "
          f"[{raster.r_values[0]:.3f}, {raster.r_values[-1]:.3f}]")


def _render_summary(engine, config: ChaosLabConfig) -> None:
    from chaos_lab.simulation.raster import render_parallel

    r = config.render
    raster = render_parallel(
        engine, r.width, r.height, workers=r.workers, rows_per_chunk=r.rows_per_chunk
    )
    inside = np.all(raster.pixels[..., :3] == 0, axis=-1).mean()
    print(f"  raster    {raster.width}x{raster.height}, stride {raster.stride} bytes")
    print(f"  inside    {inside:.1%} of pixels")


def _run_mandelbrot(config: ChaosLabConfig, args: list[str]) -> None:
    from chaos_lab.simulation.fractals import MandelbrotEngine

    engine = MandelbrotEngine(config.engine_params("mandelbrot"))
    if args and not engine.apply_preset(args[0]):
        logger.warning("Unknown preset %r, using configured view", args[0])
    p = engine.params
    print(f"Mandelbrot: center ({p.center_x}, {p.center_y}), zoom {p.zoom}")
    _render_summary(engine, config)


def _run_julia(config: ChaosLabConfig, args: list[str]) -> None:
    from chaos_lab.simulation.fractals import JuliaEngine

    engine = JuliaEngine(config.engine_params("julia"))
    if args and not engine.apply_preset(args[0]):
        logger.warning("Unknown preset %r, using configured c", args[0])
    p = engine.params
    print(f"Julia: c = {p.c_real} + {p.c_imag}i, {engine.get_set_description().value}")
    _render_summary(engine, config)


def _run_presets(config: ChaosLabConfig, args: list[str]) -> None:
    from chaos_lab.presets import PRESETS

    for group, presets in PRESETS.items():
        print(f"{group:<11} {', '.join(presets)}")


if __name__ == "__main__":
    main()
