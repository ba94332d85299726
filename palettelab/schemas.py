"""
palettelab API Schemas
Pydantic models for palette extraction request/response validation.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from palettelab.config import config

HEX_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("palettelab", description="Service name")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str = Field(..., description="Error message")
    error: Optional[str] = Field(None, description="Error kind, e.g. empty_image or invalid_k")


# ============================================================================
# PALETTE EXTRACTION SCHEMAS
# ============================================================================

class PaletteRequest(BaseModel):
    """Raw decoded pixels plus extraction parameters."""
    pixels_b64: str = Field(
        ...,
        description="Base64-encoded raw pixel buffer, row-major RGB or RGBA bytes"
    )
    width: int = Field(..., ge=0, description="Image width in pixels")
    height: int = Field(..., ge=0, description="Image height in pixels")
    channels: int = Field(4, ge=3, le=4, description="Bytes per pixel: 3 (RGB) or 4 (RGBA)")
    k: int = Field(
        config.DEFAULT_K,
        ge=config.MIN_K,
        le=config.MAX_K,
        description="Number of palette colors"
    )
    iterations: int = Field(
        config.ITERATIONS,
        ge=1,
        le=config.MAX_ITERATIONS,
        description="K-means iterations"
    )
    seed: Optional[int] = Field(None, ge=0, description="Seed for reproducible centroid initialization")


class PaletteColor(BaseModel):
    """Single annotated palette color."""
    hex: str = Field(..., pattern=HEX_PATTERN, description="Hex color code in format #RRGGBB")
    rgb: List[int] = Field(..., min_length=3, max_length=3, description="RGB channels 0-255")
    hsl: List[int] = Field(..., min_length=3, max_length=3, description="Hue 0-360, saturation and lightness 0-100")
    frequency: float = Field(..., ge=0.0, le=100.0, description="Percent of samples in this cluster")
    luminance: float = Field(..., ge=0.0, description="WCAG relative luminance")
    description: str = Field(..., description="Color name, e.g. 'Dark Vibrant Blue-Purple'")
    text_color: str = Field(..., pattern=HEX_PATTERN, description="Recommended text color on this swatch")
    contrast_ratio: float = Field(..., ge=1.0, description="WCAG contrast ratio against text_color")


class HarmonyAnalysis(BaseModel):
    """Hue relationship summary."""
    average_hue_distance: float = Field(..., ge=0.0, le=180.0, description="Mean hue step in degrees")
    classification: str = Field(..., description="Harmony classification")
    temperature: str = Field(..., description="Warm-leaning or Cool-leaning")
    contrast_level: str = Field(..., description="High or Medium")
    relationship: str = Field(..., description="Explanation of the classification")


class UsageRecommendationsModel(BaseModel):
    """Suggested roles for palette colors."""
    primary: str = Field(..., pattern=HEX_PATTERN, description="Most dominant color")
    accents: List[str] = Field(default_factory=list, description="Next most dominant colors")
    backgrounds: List[str] = Field(default_factory=list, description="Light colors suited to backgrounds")
    text_colors: List[str] = Field(default_factory=list, description="Dark colors suited to text")


class PaletteResponse(BaseModel):
    """Main palette extraction response."""
    palette: List[PaletteColor] = Field(..., description="Colors ordered by frequency, most frequent first")
    harmony: Optional[HarmonyAnalysis] = Field(None, description="Harmony analysis of the palette")
    usage: UsageRecommendationsModel = Field(..., description="Usage recommendations")
    metadata: Dict[str, Any] = Field(..., description="Sizes, sample count and parameters used")


# ============================================================================
# SINGLE COLOR SCHEMAS
# ============================================================================

class DescribeRequest(BaseModel):
    """Single color lookup."""
    hex: str = Field(..., pattern=HEX_PATTERN, description="Color in format #RRGGBB")


class DescribeResponse(BaseModel):
    """Annotations for a single color."""
    hex: str = Field(..., description="Normalized uppercase hex")
    rgb: List[int] = Field(..., min_length=3, max_length=3)
    hsl: List[int] = Field(..., min_length=3, max_length=3)
    luminance: float = Field(..., ge=0.0)
    description: str
    text_color: str
