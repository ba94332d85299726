from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from palettelab import __version__
from palettelab.api.v1 import router as v1_router
from palettelab.config import config
from palettelab.errors import PaletteError
from palettelab.schemas import ErrorResponse, HealthResponse
from palettelab.utils.logging import get_logger

log = get_logger()

app = FastAPI(
    title="palettelab",
    description="Dominant-color extraction and palette harmony analysis",
    version=__version__
)

allowed_origins = [origin.strip() for origin in config.ALLOWED_ORIGINS.split(",") if origin.strip()]
if allowed_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"]
    )

app.include_router(v1_router)


@app.exception_handler(PaletteError)
async def palette_error_handler(request: Request, exc: PaletteError) -> JSONResponse:
    """Engine input-contract violations are client errors."""
    log.warning(f"Palette request rejected: {str(exc)}", extra={"error": exc.kind, "path": request.url.path})
    body = ErrorResponse(detail=str(exc), error=exc.kind)
    return JSONResponse(status_code=422, content=body.model_dump())


@app.get("/healthz", response_model=HealthResponse)
async def healthz() -> HealthResponse:
    """Health check."""
    return HealthResponse(ok=True, version=__version__, service="palettelab")
