"""Exception types raised by the raster engine and its collaborators."""

from __future__ import annotations

from typing import Any


class RotoscaleError(Exception):
    """Base class for all rotoscale failures."""


class InvalidArgumentError(RotoscaleError, ValueError):
    """Raised when a parameter is outside its accepted domain (e.g. scale < 1)."""

    def __init__(self, parameter: str, value: Any, reason: str = "must be >= 1") -> None:
        self.parameter = parameter
        self.value = value
        super().__init__(f"{parameter} {reason}, got {value!r}")


class DimensionOverflowError(RotoscaleError, OverflowError):
    """Raised when a computed dimension or buffer size exceeds its limit."""

    def __init__(self, dimension: str, value: int, limit: int, message: str = "") -> None:
        self.dimension = dimension
        self.value = value
        self.limit = limit
        detail = message or f"{dimension} exceeds maximum allowed size"
        super().__init__(f"{detail}: {value} > {limit}")
