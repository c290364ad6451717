"""Shared configuration and data models used across the raster pipeline."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Optional, Union

MAX_DIMENSION = 65535
"""Largest width or height a texture may have (unsigned 16-bit)."""

MAX_ALLOCATION_BYTES = 2**31 - 1
"""Largest single output buffer the engine will allocate."""

BYTES_PER_PIXEL = 4

DEBUG_BOUNDS_ENV = "ROTOSCALE_DEBUG_BOUNDS"
MAX_WORKERS_ENV = "ROTOSCALE_MAX_WORKERS"

_TRUTHY = {"1", "true", "yes", "on"}

Buffer = Union[bytes, bytearray, memoryview]


def infer_width(byte_length: int) -> int:
    """Side length of a square texture occupying ``byte_length`` bytes."""
    return math.isqrt(byte_length // BYTES_PER_PIXEL)


def infer_height(byte_length: int, width: int = 0) -> int:
    """Number of rows in a texture of ``byte_length`` bytes.

    With ``width`` 0 the texture is assumed square.
    """
    if width > 0:
        return (byte_length // width) // BYTES_PER_PIXEL
    return infer_width(byte_length)


@dataclass(frozen=True)
class TextureSpec:
    """Dimensions of a row-major RGBA8888 texture.

    Attributes:
        width: Pixels per row.
        height: Number of rows.
    """

    width: int
    height: int

    @classmethod
    def from_buffer(cls, buffer: Buffer, width: int = 0) -> "TextureSpec":
        """Build a spec from a buffer, inferring a square image when width is 0."""
        length = len(buffer)
        if width < 1:
            width = infer_width(length)
        return cls(width=width, height=infer_height(length, width))

    @property
    def byte_length(self) -> int:
        return self.width * self.height * BYTES_PER_PIXEL

    @property
    def row_stride(self) -> int:
        return self.width * BYTES_PER_PIXEL


@dataclass(frozen=True)
class RenderConfig:
    """Runtime toggles for rendering.

    ``debug_bounds`` paints the per-scanline start/end columns chosen by the
    rotate engine so the bound narrowing can be inspected. It must stay off
    for production output. ``max_workers`` caps the parallel map pool; None
    lets :mod:`concurrent.futures` pick.
    """

    debug_bounds: bool = False
    max_workers: Optional[int] = None

    @staticmethod
    def debug_from_env() -> bool:
        """Read only the debug overlay toggle, ignoring the worker setting."""
        return os.getenv(DEBUG_BOUNDS_ENV, "").strip().lower() in _TRUTHY

    @classmethod
    def from_env(cls) -> "RenderConfig":
        debug = cls.debug_from_env()
        workers_raw = os.getenv(MAX_WORKERS_ENV, "").strip()
        max_workers: Optional[int] = None
        if workers_raw:
            try:
                max_workers = int(workers_raw)
            except ValueError as exc:
                raise ValueError(
                    f"{MAX_WORKERS_ENV} must be an integer, got {workers_raw!r}"
                ) from exc
            if max_workers < 1:
                raise ValueError(f"{MAX_WORKERS_ENV} must be >= 1, got {max_workers}")
        return cls(debug_bounds=debug, max_workers=max_workers)
