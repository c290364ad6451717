"""Canvas helpers: copy textures onto new canvases so frames share a size."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from rotoscale.config import BYTES_PER_PIXEL, Buffer, TextureSpec
from rotoscale.errors import InvalidArgumentError
from rotoscale.parallel import parallel_map
from rotoscale.raster.pixels import row_stride

log = logging.getLogger(__name__)

Frame = Tuple[Buffer, int]


def resize(buffer: Buffer, new_width: int, new_height: int, width: int = 0) -> bytearray:
    """Copy ``buffer`` into the top-left corner of a new zeroed canvas.

    Rows and columns that do not fit are cropped; extra space stays
    transparent. The source is never scaled.
    """
    if new_width < 1:
        raise InvalidArgumentError("new_width", new_width)
    if new_height < 1:
        raise InvalidArgumentError("new_height", new_height)
    new_stride = new_width * BYTES_PER_PIXEL
    stride = row_stride(buffer, width)
    resized = bytearray(new_stride * new_height)
    if stride == 0:
        return resized
    if new_stride == stride:
        length = min(len(buffer), len(resized))
        resized[:length] = buffer[:length]
        return resized

    copy_length = min(stride, new_stride)
    for src, dst in zip(range(0, len(buffer), stride), range(0, len(resized), new_stride)):
        chunk = buffer[src:src + copy_length]
        resized[dst:dst + len(chunk)] = chunk
    return resized


def same_size(
    frames: Sequence[Frame], *, max_workers: Optional[int] = None
) -> Tuple[List[bytearray], int, int]:
    """Pad every ``(buffer, width)`` frame to the largest width and height.

    Returns:
        (buffers, width, height) with buffers in the same order as ``frames``.
    """
    if not frames:
        raise InvalidArgumentError("frames", len(frames), "must not be empty")
    specs = [TextureSpec.from_buffer(buffer, frame_width) for buffer, frame_width in frames]
    width = max(spec.width for spec in specs)
    height = max(spec.height for spec in specs)
    log.debug("same_size: padding %d frame(s) to %dx%d", len(frames), width, height)

    jobs = [(buffer, spec.width) for (buffer, _), spec in zip(frames, specs)]
    buffers = parallel_map(
        jobs, lambda job: resize(job[0], width, height, job[1]), max_workers=max_workers
    )
    return buffers, width, height
