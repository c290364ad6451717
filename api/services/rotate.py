"""
Service helpers for running the rotate engine off the event loop.

Engine errors (``DimensionOverflowError``, ``InvalidArgumentError``) propagate
unchanged; the app maps them onto 413 and 422 responses.
"""

from __future__ import annotations

import asyncio
import logging

from fastapi import HTTPException, UploadFile

from api.schemas import RotateRequest, SizeRequest, SizeResponse
from rotoscale.errors import RotoscaleError
from rotoscale.raster.rotate import RotatedTexture, rotate, rotated_size

log = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024  # 1 MiB


async def read_texture(upload: UploadFile) -> bytes:
    """
    Read an uploaded texture using chunked reads.
    """
    chunks = []
    while True:
        chunk = await upload.read(CHUNK_SIZE)
        if not chunk:
            break
        chunks.append(chunk)
    await upload.close()
    return b"".join(chunks)


async def rotate_texture(payload: RotateRequest, texture: bytes) -> RotatedTexture:
    """
    Rotate a texture in a worker thread.
    """
    log.debug("rotate request: %d bytes, %s", len(texture), payload.model_dump())
    try:
        return await asyncio.to_thread(
            rotate, texture, payload.width, payload.radians, payload.scale_x, payload.scale_y
        )
    except RotoscaleError:
        raise
    except Exception as exc:  # noqa: BLE001 - surface underlying engine error
        log.exception("rotate failed")
        raise HTTPException(status_code=500, detail=f"Rotation failed: {exc}") from exc


def plan_size(payload: SizeRequest) -> SizeResponse:
    """
    Compute the output size of a rotation without rendering it.
    """
    width, height = rotated_size(
        payload.width, payload.height, payload.radians, payload.scale_x, payload.scale_y
    )
    return SizeResponse(width=width, height=height)
