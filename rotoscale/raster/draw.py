"""Drawing helpers for building synthetic textures (mostly for tests)."""

from __future__ import annotations

from rotoscale.config import BYTES_PER_PIXEL, infer_height, infer_width
from rotoscale.raster.pixels import BLUE, GREEN, RED, YELLOW, write_pixel


def draw_rectangle(
    buffer: bytearray,
    color: int,
    x: int,
    y: int,
    rect_width: int = 1,
    rect_height: int = 1,
    width: int = 0,
) -> bytearray:
    """Fill a rectangle with ``color`` and return the same buffer.

    The rectangle is clipped to the texture: a negative origin shrinks it, and
    anything past the right or bottom edge is dropped. A ``rect_height`` below
    1 draws a square of side ``rect_width``.
    """
    if rect_width == 1 and rect_height == 1:
        return write_pixel(buffer, x, y, color, width)
    if rect_height < 1:
        rect_height = rect_width
    if x < 0:
        rect_width += x
        x = 0
    if y < 0:
        rect_height += y
        y = 0
    if width < 1:
        width = infer_width(len(buffer))
    height = infer_height(len(buffer), width)
    if rect_width < 1 or rect_height < 1 or x >= width or y >= height:
        return buffer
    rect_width = min(rect_width, width - x)
    rect_height = min(rect_height, height - y)

    stride = width * BYTES_PER_PIXEL
    row = (color & 0xFFFFFFFF).to_bytes(BYTES_PER_PIXEL, "big") * rect_width
    for row_y in range(y, y + rect_height):
        offset = row_y * stride + x * BYTES_PER_PIXEL
        buffer[offset:offset + len(row)] = row
    return buffer


def draw_bounding_box(buffer: bytearray, width: int = 0) -> bytearray:
    """Outline the texture: yellow top, red bottom, blue left, green right.

    Each side owns one corner so every edge pixel has exactly one color,
    which makes it easy to tell orientation apart after a rotation.
    """
    if width < 1:
        width = infer_width(len(buffer))
    height = infer_height(len(buffer), width)
    draw_rectangle(buffer, YELLOW, 0, 0, rect_width=width - 1, width=width)
    draw_rectangle(buffer, RED, 1, height - 1, rect_width=width - 1, width=width)
    draw_rectangle(buffer, BLUE, 0, 1, rect_height=height - 1, width=width)
    draw_rectangle(buffer, GREEN, width - 1, 0, rect_height=height - 1, width=width)
    return buffer
