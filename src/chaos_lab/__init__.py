"""chaos-lab: numerical core for classic chaotic systems and escape-time fractals."""

__version__ = "0.1.0"

from chaos_lab.errors import InvalidParameter
from chaos_lab.simulation import (
    DoublePendulumEngine,
    JuliaEngine,
    LogisticMapEngine,
    LorenzEngine,
    MandelbrotEngine,
)

__all__ = [
    "InvalidParameter",
    "LorenzEngine",
    "DoublePendulumEngine",
    "LogisticMapEngine",
    "MandelbrotEngine",
    "JuliaEngine",
    "__version__",
]
