"""Error types raised by the simulation engines."""

from __future__ import annotations


class InvalidParameter(ValueError):
    """A parameter is structurally invalid (non-positive length, mass, dt, size...).

    Values that are merely extreme (a very large rho, a huge zoom) are accepted
    and produce whatever the numerics produce; only values that make the
    computation meaningless are rejected.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field
