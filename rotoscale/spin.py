"""Render a full-turn spin animation from one source texture.

Frames are rotated in parallel at evenly spaced angles over ``[0, 2*pi)``
and then padded onto a shared canvas so an encoder can stack them.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from functools import partial
from typing import List, Optional

from rotoscale.config import Buffer, RenderConfig
from rotoscale.errors import InvalidArgumentError
from rotoscale.parallel import parallel_map
from rotoscale.raster.canvas import same_size
from rotoscale.raster.rotate import RotatedTexture, rotate

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpinAnimation:
    """Frames of equal size, in rotation order."""

    frames: List[bytearray]
    width: int
    height: int

    def __len__(self) -> int:
        return len(self.frames)


def spin_angles(frame_count: int) -> List[float]:
    """Angles (radians) for ``frame_count`` evenly spaced frames of one turn."""
    if frame_count < 1:
        raise InvalidArgumentError("frame_count", frame_count)
    return [math.tau * (index / frame_count) for index in range(frame_count)]


def _rotate_at(
    source: Buffer, width: int, scale_x: int, scale_y: int, debug_bounds: bool, radians: float
) -> RotatedTexture:
    return rotate(source, width, radians, scale_x, scale_y, debug_bounds=debug_bounds)


def spin_frames(
    source: Buffer,
    width: int,
    frame_count: int,
    scale_x: int = 1,
    scale_y: int = 1,
    *,
    max_workers: Optional[int] = None,
    processes: bool = False,
    config: Optional[RenderConfig] = None,
) -> SpinAnimation:
    """Rotate ``source`` through a full turn and return same-size frames.

    Any frame failing (e.g. a scale that overflows) fails the whole
    animation.
    """
    config = config or RenderConfig.from_env()
    if max_workers is None:
        max_workers = config.max_workers
    angles = spin_angles(frame_count)
    log.info("Rendering %d spin frame(s) at scale %dx%d", frame_count, scale_x, scale_y)

    render = partial(_rotate_at, bytes(source), width, scale_x, scale_y, config.debug_bounds)
    rotated = parallel_map(angles, render, max_workers=max_workers, processes=processes)
    buffers, out_width, out_height = same_size(
        [(texture.buffer, texture.width) for texture in rotated], max_workers=max_workers
    )
    return SpinAnimation(frames=buffers, width=out_width, height=out_height)
