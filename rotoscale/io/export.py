"""Encode textures to image files and read images back into textures.

Textures are plain RGBA8888 byte buffers; numpy gives them an ``H x W x 4``
view and Pillow does the encoding (PNG for single frames, GIF for spin
animations).
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, Tuple

import numpy as np
from PIL import Image

from rotoscale.config import BYTES_PER_PIXEL, Buffer, TextureSpec
from rotoscale.errors import InvalidArgumentError

DEFAULT_FRAME_DELAY_MS = 100


def to_array(buffer: Buffer, width: int = 0) -> np.ndarray:
    """Return an ``(height, width, 4)`` uint8 array copied from the texture."""
    spec = TextureSpec.from_buffer(buffer, width)
    flat = np.frombuffer(bytes(buffer[:spec.byte_length]), dtype=np.uint8)
    return flat.reshape((spec.height, spec.width, BYTES_PER_PIXEL)).copy()


def from_array(array: np.ndarray) -> Tuple[bytearray, int]:
    """Convert an ``(height, width, 4)`` array back into ``(buffer, width)``."""
    if array.ndim != 3 or array.shape[2] != BYTES_PER_PIXEL:
        raise InvalidArgumentError("array", array.shape, "must have shape (height, width, 4)")
    return bytearray(np.ascontiguousarray(array, dtype=np.uint8).tobytes()), int(array.shape[1])


def to_image(buffer: Buffer, width: int = 0) -> Image.Image:
    """Wrap a texture in a Pillow RGBA image."""
    return Image.fromarray(to_array(buffer, width))


def load_texture(path: str | Path) -> Tuple[bytearray, int]:
    """Read any Pillow-supported image as ``(buffer, width)``."""
    with Image.open(path) as img:
        rgba = img.convert("RGBA")
    return from_array(np.asarray(rgba))


def save_png(path: str | Path, buffer: Buffer, width: int = 0) -> Path:
    """Write a texture as a PNG file."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    to_image(buffer, width).save(out_path, format="PNG")
    return out_path


def save_gif(
    path: str | Path,
    frames: Sequence[Buffer],
    width: int,
    *,
    frame_delay: int = DEFAULT_FRAME_DELAY_MS,
    loop: int = 0,
) -> Path:
    """Write equally sized frames as an animated GIF.

    Args:
        path: Destination file.
        frames: Textures sharing ``width`` and height (see ``same_size``).
        width: Frame width in pixels.
        frame_delay: Per-frame display time in milliseconds.
        loop: Repeat count; 0 loops forever.
    """
    if not frames:
        raise InvalidArgumentError("frames", len(frames), "must not be empty")
    images = [to_image(frame, width) for frame in frames]
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    images[0].save(
        out_path,
        format="GIF",
        save_all=True,
        append_images=images[1:],
        duration=frame_delay,
        loop=loop,
        disposal=2,
    )
    return out_path
