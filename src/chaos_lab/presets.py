"""Named parameter bundles for each engine.

Each preset is a partial parameter update; applying one merges it into the
engine's current parameters and leaves the dynamical state alone.
"""

from __future__ import annotations

from typing import Any

LORENZ_PRESETS: dict[str, dict[str, Any]] = {
    "classic": {"sigma": 10.0, "rho": 28.0, "beta": 8.0 / 3.0},
    "butterfly": {"sigma": 10.0, "rho": 28.0, "beta": 8.0 / 3.0, "trail_length": 4000},
    "chaotic": {"sigma": 10.0, "rho": 99.96, "beta": 8.0 / 3.0},
}

PENDULUM_PRESETS: dict[str, dict[str, Any]] = {
    "classic": {"gravity": 1.0, "damping": 0.999, "length1": 100.0, "length2": 100.0},
    "asymmetric": {"gravity": 1.0, "damping": 0.999, "length1": 80.0, "length2": 120.0},
    "heavy": {"gravity": 1.5, "damping": 0.995, "mass1": 2.0, "mass2": 1.0},
}

LOGISTIC_PRESETS: dict[str, dict[str, Any]] = {
    "stable": {"r": 2.5, "x0": 0.5},
    "period": {"r": 3.2, "x0": 0.5},
    "chaos": {"r": 3.8, "x0": 0.5},
}

MANDELBROT_PRESETS: dict[str, dict[str, Any]] = {
    "classic": {"max_iterations": 100, "zoom": 1.0, "center_x": -0.5, "center_y": 0.0, "color_intensity": 1.0},
    "seahorse": {"max_iterations": 150, "zoom": 50.0, "center_x": -0.75, "center_y": 0.1, "color_intensity": 2.0},
    "spiral": {"max_iterations": 200, "zoom": 100.0, "center_x": -0.235125, "center_y": 0.827215, "color_intensity": 3.0},
    "elephant": {"max_iterations": 120, "zoom": 20.0, "center_x": 0.25, "center_y": 0.0, "color_intensity": 1.5},
}

JULIA_PRESETS: dict[str, dict[str, Any]] = {
    "dragon": {"c_real": -0.8, "c_imag": 0.156, "max_iterations": 100, "zoom": 1.0, "center_x": 0.0, "center_y": 0.0, "color_intensity": 1.5},
    "spiral": {"c_real": -0.7269, "c_imag": 0.1889, "max_iterations": 150, "zoom": 1.2, "center_x": 0.0, "center_y": 0.0, "color_intensity": 2.0},
    "dendrite": {"c_real": -0.75, "c_imag": 0.11, "max_iterations": 80, "zoom": 1.0, "center_x": 0.0, "center_y": 0.0, "color_intensity": 1.0},
    "lightning": {"c_real": -0.1, "c_imag": 0.8, "max_iterations": 120, "zoom": 1.0, "center_x": 0.0, "center_y": 0.0, "color_intensity": 1.8},
    "classic": {"c_real": -0.4, "c_imag": 0.6, "max_iterations": 100, "zoom": 1.0, "center_x": 0.0, "center_y": 0.0, "color_intensity": 1.0},
    "connected": {"c_real": 0.285, "c_imag": 0.01, "max_iterations": 100, "zoom": 1.0, "center_x": 0.0, "center_y": 0.0, "color_intensity": 1.2},
}

PRESETS: dict[str, dict[str, dict[str, Any]]] = {
    "lorenz": LORENZ_PRESETS,
    "pendulum": PENDULUM_PRESETS,
    "logistic": LOGISTIC_PRESETS,
    "mandelbrot": MANDELBROT_PRESETS,
    "julia": JULIA_PRESETS,
}


def get_preset(group: str, name: str) -> dict[str, Any] | None:
    """Look up a preset; ``None`` when the group or name is unknown."""
    preset = PRESETS.get(group, {}).get(name)
    if preset is None:
        return None
    return dict(preset)


def preset_names(group: str) -> list[str]:
    return list(PRESETS.get(group, {}))
