"""Configuration loading and validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from chaos_lab.types.params import (
    EngineParams,
    JuliaParams,
    LogisticParams,
    LorenzParams,
    MandelbrotParams,
    PendulumParams,
)

# Default config directory relative to package root
_PACKAGE_ROOT = Path(__file__).resolve().parent.parent.parent.parent
_CONFIGS_DIR = _PACKAGE_ROOT / "configs"

ENGINE_PARAMS: dict[str, type[EngineParams]] = {
    "lorenz": LorenzParams,
    "pendulum": PendulumParams,
    "logistic": LogisticParams,
    "mandelbrot": MandelbrotParams,
    "julia": JuliaParams,
}


class RenderConfig(BaseModel):
    """Raster generation defaults."""

    width: int = Field(default=320, gt=0)
    height: int = Field(default=240, gt=0)
    rows_per_chunk: int = Field(default=10, gt=0)
    workers: int = Field(default=4, gt=0)


class ChaosLabConfig(BaseModel):
    """Top-level configuration: logging, rendering and per-engine parameters."""

    log_level: str = "INFO"
    seed: int | None = None
    render: RenderConfig = Field(default_factory=RenderConfig)
    lorenz: dict[str, Any] = Field(default_factory=dict)
    pendulum: dict[str, Any] = Field(default_factory=dict)
    logistic: dict[str, Any] = Field(default_factory=dict)
    mandelbrot: dict[str, Any] = Field(default_factory=dict)
    julia: dict[str, Any] = Field(default_factory=dict)

    def engine_params(self, name: str) -> EngineParams:
        """Validated parameter record for engine ``name``."""
        if name not in ENGINE_PARAMS:
            raise KeyError(f"Unknown engine: {name}. Use one of {sorted(ENGINE_PARAMS)}.")
        return ENGINE_PARAMS[name](**getattr(self, name))


def load_config(path: str | Path | None = None) -> ChaosLabConfig:
    """Load config from a YAML file.

    Falls back to configs/default.yaml if no path is given, and to the model
    defaults if that file does not exist.
    """
    if path is None:
        path = _CONFIGS_DIR / "default.yaml"
    path = Path(path)

    if not path.exists():
        return ChaosLabConfig()

    with open(path) as f:
        raw: dict[str, Any] = yaml.safe_load(f) or {}

    return ChaosLabConfig(**raw)


def load_engine_params(name: str, path: str | Path | None = None) -> EngineParams:
    """Shortcut for ``load_config(path).engine_params(name)``."""
    return load_config(path).engine_params(name)
