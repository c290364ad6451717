"""Pixel addressing for flat RGBA8888 textures.

Textures are row-major byte buffers, four bytes per pixel in R,G,B,A order.
Colors are handled as unsigned 32-bit integers packed the same way
(``0xRRGGBBAA``), independent of platform byte order.

A ``width`` of 0 everywhere in this module means "assume a square texture"
and infers the side from the buffer length.
"""

from __future__ import annotations

from rotoscale.config import BYTES_PER_PIXEL, Buffer, infer_height, infer_width

TRANSPARENT = 0x00000000
RED = 0xFF0000FF
YELLOW = 0xFFFF00FF
WHITE = 0xFFFFFFFF
GREEN = 0x00FF00FF
BLUE = 0x0000FFFF
ORANGE = 0xFFA500FF
PURPLE = 0xFF00FFFF


def pack_color(r: int, g: int, b: int, a: int = 0xFF) -> int:
    """Pack four 8-bit channels into a ``0xRRGGBBAA`` integer."""
    return ((r & 0xFF) << 24) | ((g & 0xFF) << 16) | ((b & 0xFF) << 8) | (a & 0xFF)


def row_stride(buffer: Buffer, width: int = 0) -> int:
    """Bytes per row, inferring a square texture when width is 0."""
    if width < 1:
        width = infer_width(len(buffer))
    return width * BYTES_PER_PIXEL


def read_pixel(buffer: Buffer, x: int, y: int, width: int = 0) -> int:
    """Return the packed color at (x, y).

    No bounds checking is done: coordinates outside the texture are a caller
    error and may read another row's bytes or raise.
    """
    offset = y * row_stride(buffer, width) + x * BYTES_PER_PIXEL
    return int.from_bytes(buffer[offset:offset + BYTES_PER_PIXEL], "big")


def write_pixel(buffer: bytearray, x: int, y: int, color: int = WHITE, width: int = 0) -> bytearray:
    """Write one packed color at (x, y) and return the same buffer.

    Coordinates outside the texture are silently ignored so drawing code can
    run up to (and past) the edges without checking each call.
    """
    stride = row_stride(buffer, width)
    x_offset = x * BYTES_PER_PIXEL
    if x < 0 or y < 0 or x_offset >= stride or y >= infer_height(len(buffer), width):
        return buffer
    offset = y * stride + x_offset
    buffer[offset:offset + BYTES_PER_PIXEL] = (color & 0xFFFFFFFF).to_bytes(BYTES_PER_PIXEL, "big")
    return buffer
