"""
palettelab v1 API Routes
Implements /v1/palette and /v1/describe.
"""
import asyncio
import base64
import binascii

from fastapi import APIRouter, HTTPException
from fastapi.concurrency import run_in_threadpool

from palettelab.config import config
from palettelab.errors import PaletteError
from palettelab.schemas import (
    DescribeRequest, DescribeResponse, ErrorResponse, PaletteRequest, PaletteResponse
)
from palettelab.services.colors import (
    ImageBuffer, describe, extract_palette, hex_to_rgb, luminance,
    rgb_to_hex, rgb_to_hsl, text_color_for
)
from palettelab.utils.logging import get_logger

router = APIRouter(prefix="/v1", tags=["Palette extraction"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Malformed pixel payload"},
    422: {"model": ErrorResponse, "description": "Invalid request or engine input rejected"},
    504: {"model": ErrorResponse, "description": "Extraction deadline exceeded"},
}

log = get_logger()


def decode_pixel_buffer(pixels_b64: str) -> bytes:
    """Decode the base64 pixel payload, rejecting malformed input with 400."""
    try:
        return base64.b64decode(pixels_b64, validate=True)
    except (binascii.Error, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid base64 pixel data: {str(e)}")


@router.post("/palette",
             response_model=PaletteResponse,
             responses=ERROR_RESPONSES,
             summary="Extract Dominant Colors",
             description="Cluster raw decoded pixels into a palette and analyze its harmony")
async def create_palette(request: PaletteRequest) -> PaletteResponse:
    """
    Extract a palette from a raw pixel buffer.

    The whole extraction runs as one unit of work in a worker thread under
    the configured deadline.
    """
    raw = decode_pixel_buffer(request.pixels_b64)
    image = ImageBuffer(
        data=raw,
        width=request.width,
        height=request.height,
        channels=request.channels
    )

    timeout_s = config.TIMEOUT_EXTRACTION / 1000
    try:
        report = await asyncio.wait_for(
            run_in_threadpool(
                extract_palette,
                image,
                k=request.k,
                iterations=request.iterations,
                seed=request.seed
            ),
            timeout=timeout_s
        )
    except asyncio.TimeoutError:
        log.error("Palette extraction timed out", extra={"timeout_ms": config.TIMEOUT_EXTRACTION})
        raise HTTPException(status_code=504, detail="Palette extraction timed out")
    except PaletteError:
        raise
    except ValueError as e:
        log.warning(f"Rejected pixel buffer: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))

    return PaletteResponse(**report.to_dict())


@router.post("/describe",
             response_model=DescribeResponse,
             responses={422: ERROR_RESPONSES[422]},
             summary="Describe Color",
             description="Name a single color and compute its luminance and text color")
async def describe_color(request: DescribeRequest) -> DescribeResponse:
    rgb = hex_to_rgb(request.hex)
    hsl = rgb_to_hsl(*rgb)
    lum = luminance(*rgb)

    return DescribeResponse(
        hex=rgb_to_hex(*rgb),
        rgb=list(rgb),
        hsl=list(hsl),
        luminance=lum,
        description=describe(hsl),
        text_color=text_color_for(lum, config.TEXT_LUMINANCE_THRESHOLD)
    )
