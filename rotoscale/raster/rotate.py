"""Rotate-and-upscale for RGBA8888 textures.

The engine rotates a texture by an arbitrary angle after an optional integer
magnification on each axis, in one pass. The magnified texture is never
built: every output pixel is inverse-mapped (rotation by ``-radians`` then
unscaling) back into the source and sampled nearest-neighbor.

The output is the axis-aligned bounding box of the rotated, magnified
rectangle, so its leftmost silhouette pixel sits on x=0 and its highest on
y=0. Pixels outside the silhouette stay transparent black.

For each output row only the columns between the rotated rectangle's left
and right edges are visited. The interval is derived from the four rotated
corners and the points where the rectangle's edges cross the row.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple

from rotoscale.config import (
    BYTES_PER_PIXEL,
    MAX_ALLOCATION_BYTES,
    MAX_DIMENSION,
    Buffer,
    RenderConfig,
    infer_height,
    infer_width,
)
from rotoscale.errors import DimensionOverflowError, InvalidArgumentError
from rotoscale.raster.pixels import ORANGE, PURPLE, write_pixel

log = logging.getLogger(__name__)

NEAR_ZERO = 1e-10
SCANLINE_TOLERANCE = 0.5

Point = Tuple[float, float]


class RotatedTexture(NamedTuple):
    """Result of :func:`rotate`; unpacks as ``(buffer, width, height)``."""

    buffer: bytearray
    width: int
    height: int


def _check_scales(scale_x: int, scale_y: int) -> None:
    if scale_x < 1:
        raise InvalidArgumentError("scale_x", scale_x)
    if scale_y < 1:
        raise InvalidArgumentError("scale_y", scale_y)


def _scaled_dimensions(width: int, height: int, scale_x: int, scale_y: int) -> Tuple[int, int]:
    scaled_width = width * scale_x
    if scaled_width > MAX_DIMENSION:
        raise DimensionOverflowError(
            "scaled width", scaled_width, MAX_DIMENSION,
            f"Scaled width ({width} x {scale_x}) exceeds addressable range",
        )
    scaled_height = height * scale_y
    if scaled_height > MAX_DIMENSION:
        raise DimensionOverflowError(
            "scaled height", scaled_height, MAX_DIMENSION,
            f"Scaled height ({height} x {scale_y}) exceeds addressable range",
        )
    return scaled_width, scaled_height


def _bounding_box(scaled_width: int, scaled_height: int, abs_cos: float, abs_sin: float) -> Tuple[int, int]:
    rotated_width = math.floor(scaled_width * abs_cos + scaled_height * abs_sin)
    if rotated_width > MAX_DIMENSION:
        raise DimensionOverflowError("rotated width", rotated_width, MAX_DIMENSION)
    rotated_height = math.floor(scaled_width * abs_sin + scaled_height * abs_cos)
    if rotated_height > MAX_DIMENSION:
        raise DimensionOverflowError("rotated height", rotated_height, MAX_DIMENSION)
    return rotated_width, rotated_height


def _trig(radians: float) -> Tuple[float, float]:
    radians = math.fmod(radians, math.tau)
    return math.cos(radians), math.sin(radians)


@dataclass(frozen=True)
class _Geometry:
    """Everything the rasterizer needs, computed and validated up front."""

    width: int
    height: int
    scale_x: int
    scale_y: int
    cos: float
    sin: float
    out_width: int
    out_height: int
    offset_x: float
    offset_y: float
    near_axis: bool
    corners: Tuple[Point, ...]

    def row_bounds(self, y: int) -> Optional[Tuple[int, int]]:
        """Inclusive column range of row ``y`` that can hold silhouette pixels.

        Returns None when nothing on the row can map inside the source.
        """
        if self.near_axis:
            return 0, self.out_width - 1
        min_x: Optional[float] = None
        max_x: Optional[float] = None
        corners = self.corners
        for index in range(4):
            corner_x, corner_y = corners[index]
            if abs(corner_y - y) <= SCANLINE_TOLERANCE:
                min_x = corner_x if min_x is None else min(min_x, corner_x)
                max_x = corner_x if max_x is None else max(max_x, corner_x)
            next_x, next_y = corners[(index + 1) % 4]
            if corner_y <= y <= next_y or corner_y >= y >= next_y:
                if abs(next_y - corner_y) > NEAR_ZERO:
                    t = (y - corner_y) / (next_y - corner_y)
                    cross_x = corner_x + t * (next_x - corner_x)
                    min_x = cross_x if min_x is None else min(min_x, cross_x)
                    max_x = cross_x if max_x is None else max(max_x, cross_x)
        if min_x is None or max_x is None:
            return None
        return max(0, math.floor(min_x)), min(self.out_width - 1, math.ceil(max_x))


def _plan(width: int, height: int, radians: float, scale_x: int, scale_y: int) -> _Geometry:
    _check_scales(scale_x, scale_y)
    scaled_width, scaled_height = _scaled_dimensions(width, height, scale_x, scale_y)
    cos, sin = _trig(radians)
    abs_cos, abs_sin = abs(cos), abs(sin)
    out_width, out_height = _bounding_box(scaled_width, scaled_height, abs_cos, abs_sin)
    if out_width * out_height > MAX_ALLOCATION_BYTES >> 2:
        raise DimensionOverflowError(
            "rotated area", out_width * out_height * BYTES_PER_PIXEL, MAX_ALLOCATION_BYTES,
            f"Result too large to allocate ({out_width} x {out_height} pixels)",
        )

    half_scaled_width = scaled_width >> 1
    half_scaled_height = scaled_height >> 1
    half_out_width = out_width >> 1
    half_out_height = out_height >> 1
    offset_x = half_scaled_width - cos * half_out_width - sin * half_out_height
    offset_y = half_scaled_height - cos * half_out_height + sin * half_out_width

    near_axis = abs_cos < NEAR_ZERO or abs_sin < NEAR_ZERO
    corners: Tuple[Point, ...] = ()
    if not near_axis:
        # Clockwise from top-left, centered on the integer half extents.
        left, right = -half_scaled_width, scaled_width - half_scaled_width
        top, bottom = -half_scaled_height, scaled_height - half_scaled_height
        corners = tuple(
            (cx * cos - cy * sin + half_out_width, cx * sin + cy * cos + half_out_height)
            for cx, cy in ((left, top), (right, top), (right, bottom), (left, bottom))
        )

    return _Geometry(
        width=width,
        height=height,
        scale_x=scale_x,
        scale_y=scale_y,
        cos=cos,
        sin=sin,
        out_width=out_width,
        out_height=out_height,
        offset_x=offset_x,
        offset_y=offset_y,
        near_axis=near_axis,
        corners=corners,
    )


def rotated_size(
    width: int, height: int, radians: float = 0.0, scale_x: int = 1, scale_y: int = 1
) -> Tuple[int, int]:
    """Return the (width, height) :func:`rotate` would produce, without rendering."""
    _check_scales(scale_x, scale_y)
    scaled_width, scaled_height = _scaled_dimensions(width, height, scale_x, scale_y)
    cos, sin = _trig(radians)
    return _bounding_box(scaled_width, scaled_height, abs(cos), abs(sin))


def rotated_locate(
    width: int,
    height: int,
    x: int,
    y: int,
    radians: float = 0.0,
    scale_x: int = 1,
    scale_y: int = 1,
) -> Tuple[int, int]:
    """Map source pixel (x, y) to its position in the rotated output.

    This is the forward counterpart of the engine's inverse mapping; the
    result is truncated toward zero.
    """
    _check_scales(scale_x, scale_y)
    scaled_width, scaled_height = _scaled_dimensions(width, height, scale_x, scale_y)
    cos, sin = _trig(radians)
    out_width = math.floor(scaled_width * abs(cos) + scaled_height * abs(sin))
    out_height = math.floor(scaled_width * abs(sin) + scaled_height * abs(cos))
    half_out_width = out_width >> 1
    half_out_height = out_height >> 1
    offset_x = (scaled_width >> 1) - cos * half_out_width - sin * half_out_height
    offset_y = (scaled_height >> 1) - cos * half_out_height + sin * half_out_width
    dx = x * scale_x - offset_x
    dy = y * scale_y - offset_y
    return int(cos * dx - sin * dy), int(sin * dx + cos * dy)


def rotate(
    source: Buffer,
    width: int = 0,
    radians: float = 0.0,
    scale_x: int = 1,
    scale_y: int = 1,
    *,
    narrow: bool = True,
    debug_bounds: Optional[bool] = None,
    config: Optional[RenderConfig] = None,
) -> RotatedTexture:
    """Rotate a texture after magnifying it by integer factors.

    Args:
        source: RGBA8888 pixels, row-major. Never modified.
        width: Source width in pixels; 0 assumes a square texture.
        radians: Rotation angle. Reduced modulo 2*pi.
        scale_x: Horizontal magnification, >= 1.
        scale_y: Vertical magnification, >= 1.
        narrow: Limit each output row to the rotated rectangle's span. With
            False every row is scanned in full; the pixels are identical.
        debug_bounds: Paint each row's scanned start (purple) and end
            (orange) columns. None defers to ``config``.
        config: Render settings. When omitted and ``debug_bounds`` is None,
            only the debug toggle is read from the environment.

    Returns:
        RotatedTexture with a new zero-initialized buffer and its dimensions.

    Raises:
        InvalidArgumentError: if a scale factor is below 1.
        DimensionOverflowError: if a scaled or rotated dimension exceeds
            65535, or the output would exceed 2**31 - 1 bytes.
    """
    if width < 1:
        width = infer_width(len(source))
    height = infer_height(len(source), width)
    geometry = _plan(width, height, radians, scale_x, scale_y)
    if debug_bounds is None:
        debug_bounds = config.debug_bounds if config is not None else RenderConfig.debug_from_env()

    out_width, out_height = geometry.out_width, geometry.out_height
    log.debug(
        "rotate %dx%d by %.6f rad at scale %dx%d -> %dx%d",
        width, height, radians, scale_x, scale_y, out_width, out_height,
    )
    rotated = bytearray(out_width * out_height * BYTES_PER_PIXEL)

    cos, sin = geometry.cos, geometry.sin
    offset_x, offset_y = geometry.offset_x, geometry.offset_y
    in_stride = width * BYTES_PER_PIXEL
    out_stride = out_width * BYTES_PER_PIXEL
    for y in range(out_height):
        bounds = geometry.row_bounds(y) if narrow else (0, out_width - 1)
        if bounds is None:
            continue
        start_x, end_x = bounds
        row_offset = y * out_stride
        for x in range(start_x, end_x + 1):
            source_x = (x * cos + y * sin + offset_x) / scale_x
            source_y = (y * cos - x * sin + offset_y) / scale_y
            if 0.0 <= source_x < width and 0.0 <= source_y < height:
                src = math.floor(source_y) * in_stride + math.floor(source_x) * BYTES_PER_PIXEL
                dst = row_offset + x * BYTES_PER_PIXEL
                rotated[dst:dst + BYTES_PER_PIXEL] = source[src:src + BYTES_PER_PIXEL]
        if debug_bounds:
            write_pixel(rotated, start_x, y, PURPLE, out_width)
            write_pixel(rotated, end_x, y, ORANGE, out_width)

    return RotatedTexture(rotated, out_width, out_height)
