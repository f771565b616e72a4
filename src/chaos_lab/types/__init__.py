"""Core data types for chaos-lab."""

from chaos_lab.types.params import (
    EngineParams,
    FractalParams,
    JuliaParams,
    LogisticParams,
    LorenzParams,
    MandelbrotParams,
    PendulumFormulation,
    PendulumParams,
)
from chaos_lab.types.values import (
    BifurcationRaster,
    ColorRGB,
    Complex,
    IterationResult,
    PendulumPositions,
    PendulumState,
)

__all__ = [
    # params
    "EngineParams",
    "LorenzParams",
    "PendulumFormulation",
    "PendulumParams",
    "LogisticParams",
    "FractalParams",
    "MandelbrotParams",
    "JuliaParams",
    # values
    "Complex",
    "IterationResult",
    "ColorRGB",
    "PendulumState",
    "PendulumPositions",
    "BifurcationRaster",
]
