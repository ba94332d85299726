"""
palettelab Colors Module

Dominant-color extraction: pixel sampling, k-means clustering, color-space
conversion, color naming and palette harmony analysis.
"""

from .clustering import Centroid, cluster
from .conversion import (
    contrast_ratio, hex_to_rgb, luminance, rgb_to_hex, rgb_to_hsl, text_color_for
)
from .describe import describe
from .harmony import HarmonyReport, analyze, hue_distance
from .palette import (
    PaletteEntry, PaletteReport, UsageRecommendations,
    build_entry, extract_palette, recommend_usage
)
from .sampling import ImageBuffer, SampleSet, sample_pixels

__all__ = [
    "Centroid", "cluster",
    "contrast_ratio", "hex_to_rgb", "luminance", "rgb_to_hex", "rgb_to_hsl", "text_color_for",
    "describe",
    "HarmonyReport", "analyze", "hue_distance",
    "PaletteEntry", "PaletteReport", "UsageRecommendations",
    "build_entry", "extract_palette", "recommend_usage",
    "ImageBuffer", "SampleSet", "sample_pixels",
]
