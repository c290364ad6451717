from __future__ import annotations

from fastapi import APIRouter, File, Form, HTTPException, Response, UploadFile
from pydantic import ValidationError

from api.schemas import RotateRequest, SizeRequest, SizeResponse
from api.services.rotate import plan_size, read_texture, rotate_texture

router = APIRouter(prefix="/rotate", tags=["rotate"])

WIDTH_HEADER = "X-Texture-Width"
HEIGHT_HEADER = "X-Texture-Height"


@router.post("", response_class=Response)
async def create_rotation(
    metadata: str = Form(..., description="RotateRequest as JSON string."),
    texture: UploadFile = File(..., description="Raw RGBA8888 texture bytes, row-major."),
) -> Response:
    """
    Rotate an uploaded texture. Metadata is provided as a JSON string in the `metadata` form
    field; the response body is the rotated RGBA buffer with its size in response headers.
    """
    try:
        payload = RotateRequest.model_validate_json(metadata)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    source = await read_texture(texture)
    rotated = await rotate_texture(payload, source)
    return Response(
        content=bytes(rotated.buffer),
        media_type="application/octet-stream",
        headers={WIDTH_HEADER: str(rotated.width), HEIGHT_HEADER: str(rotated.height)},
    )


@router.post("/size", response_model=SizeResponse)
async def rotation_size(payload: SizeRequest) -> SizeResponse:
    """
    Report the dimensions a rotation would produce, without uploading a texture.
    """
    return plan_size(payload)
