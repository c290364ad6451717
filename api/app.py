from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse

from api.routes import rotate as rotate_routes
from api.schemas import LimitsResponse
from rotoscale import __version__
from rotoscale.config import BYTES_PER_PIXEL, MAX_ALLOCATION_BYTES, MAX_DIMENSION
from rotoscale.errors import DimensionOverflowError, InvalidArgumentError


async def _overflow_handler(request: Request, exc: DimensionOverflowError) -> JSONResponse:
    # The request was well formed but the result cannot be represented.
    return JSONResponse(
        status_code=413,
        content={"detail": str(exc), "dimension": exc.dimension, "value": exc.value, "limit": exc.limit},
    )


async def _invalid_argument_handler(request: Request, exc: InvalidArgumentError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "parameter": exc.parameter, "value": exc.value},
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="Rotoscale API",
        description="Rotate and upscale raw RGBA8888 textures.",
        version=__version__,
    )
    app.add_exception_handler(DimensionOverflowError, _overflow_handler)
    app.add_exception_handler(InvalidArgumentError, _invalid_argument_handler)
    app.include_router(rotate_routes.router)

    @app.get("/", include_in_schema=False)
    async def redirect_to_docs() -> RedirectResponse:
        return RedirectResponse(url="/docs")

    @app.get("/limits", response_model=LimitsResponse)
    async def limits() -> LimitsResponse:
        """
        Engine limits a client can check before uploading a texture.
        """
        return LimitsResponse(
            max_dimension=MAX_DIMENSION,
            max_result_bytes=MAX_ALLOCATION_BYTES,
            bytes_per_pixel=BYTES_PER_PIXEL,
        )

    return app


app = create_app()
