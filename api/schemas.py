import math

from pydantic import BaseModel, Field, field_validator

from rotoscale.config import MAX_DIMENSION


class RotateRequest(BaseModel):
    """
    Rotation parameters sent alongside the raw texture upload.
    Scale factors are validated by the engine so errors carry its messages.
    """
    width: int = Field(0, ge=0, le=MAX_DIMENSION, description="Texture width in pixels; 0 assumes a square texture.")
    radians: float = Field(0.0, description="Rotation angle in radians.")
    scale_x: int = Field(1, description="Horizontal magnification (integer >= 1).")
    scale_y: int = Field(1, description="Vertical magnification (integer >= 1).")

    @field_validator("radians")
    @classmethod
    def radians_finite(cls, v: float) -> float:
        if math.isnan(v) or math.isinf(v):
            raise ValueError("radians must be a finite number")
        return v


class SizeRequest(RotateRequest):
    height: int = Field(..., ge=0, le=MAX_DIMENSION, description="Texture height in pixels.")


class SizeResponse(BaseModel):
    width: int = Field(..., description="Rotated texture width in pixels.")
    height: int = Field(..., description="Rotated texture height in pixels.")


class LimitsResponse(BaseModel):
    max_dimension: int = Field(..., description="Largest width or height, before or after rotation.")
    max_result_bytes: int = Field(..., description="Largest rotated buffer the engine will allocate.")
    bytes_per_pixel: int = Field(..., description="Bytes per RGBA8888 pixel.")
