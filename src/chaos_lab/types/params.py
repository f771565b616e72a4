"""Parameter records for every engine.

Records are frozen pydantic models. A partial update goes through
``merged()``, which re-validates the whole record and raises
``InvalidParameter`` for structurally invalid values.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from chaos_lab.errors import InvalidParameter


class EngineParams(BaseModel):
    """Base for all parameter records."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            error = exc.errors()[0]
            field = ".".join(str(part) for part in error["loc"]) or None
            raise InvalidParameter(
                f"{type(self).__name__}: {field}: {error['msg']}", field=field
            ) from exc

    def merged(self, **changes: Any) -> "EngineParams":
        """Return a new validated record with ``changes`` applied."""
        return type(self)(**{**self.model_dump(), **changes})


class PendulumFormulation(str, Enum):
    REFERENCE = "reference"
    LAGRANGIAN = "lagrangian"


class LorenzParams(EngineParams):
    """Lorenz system constants.

    sigma: Prandtl number, rho: Rayleigh number, beta: geometric factor.
    """

    sigma: float = 10.0
    rho: float = 28.0
    beta: float = 8.0 / 3.0
    dt: float = Field(default=0.01, gt=0)
    trail_length: int = Field(default=2000, ge=1)


class PendulumParams(EngineParams):
    """Double pendulum constants.

    ``damping`` scales the angular accelerations (1.0 means undamped).
    Lengths are in the same units the trail is reported in.
    """

    gravity: float = 1.0
    damping: float = 0.999
    length1: float = Field(default=100.0, gt=0)
    length2: float = Field(default=100.0, gt=0)
    mass1: float = Field(default=1.0, gt=0)
    mass2: float = Field(default=1.0, gt=0)
    trail_length: int = Field(default=500, ge=1)
    dt: float = Field(default=0.01, gt=0)
    formulation: PendulumFormulation = PendulumFormulation.REFERENCE


class LogisticParams(EngineParams):
    r: float = 3.5
    x0: float = 0.5
    r_min: float = 2.5
    r_max: float = 4.0
    iterations: int = Field(default=200, ge=0)


class FractalParams(EngineParams):
    """View and palette shared by the escape-time fractals."""

    max_iterations: int = Field(default=100, ge=1)
    zoom: float = Field(default=1.0, gt=0)
    center_x: float = 0.0
    center_y: float = 0.0
    color_intensity: float = Field(default=1.0, gt=0)


class MandelbrotParams(FractalParams):
    center_x: float = -0.5


class JuliaParams(FractalParams):
    c_real: float = -0.8
    c_imag: float = 0.156
    escape_radius: float = Field(default=2.0, gt=0)
    color_intensity: float = Field(default=1.5, gt=0)
