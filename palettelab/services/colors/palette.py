"""
Palette extraction pipeline.

Runs sampling and clustering, annotates each centroid and analyzes the
resulting palette. Output is plain data; formatting it for display is left
to the caller.
"""

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from palettelab.config import config
from palettelab.services.observability import performance_monitor, log_memory_usage
from palettelab.utils.ids import generate_request_id
from .clustering import Centroid, cluster
from .conversion import (
    contrast_ratio, hex_to_rgb, luminance, rgb_to_hex, rgb_to_hsl, text_color_for
)
from .describe import describe
from .harmony import HarmonyReport, analyze
from .sampling import ImageBuffer, sample_pixels

BACKGROUND_LUMINANCE_GT = 0.8
TEXT_LUMINANCE_LT = 0.3
ACCENT_COUNT = 2


@dataclass(frozen=True)
class PaletteEntry:
    """One annotated palette color."""
    hex: str
    rgb: Tuple[int, int, int]
    hsl: Tuple[int, int, int]
    frequency: float  # percent of samples
    luminance: float
    description: str
    text_color: str
    contrast_ratio: float  # against text_color

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["rgb"] = list(self.rgb)
        data["hsl"] = list(self.hsl)
        return data


@dataclass(frozen=True)
class UsageRecommendations:
    """Suggested roles for palette colors."""
    primary: str
    accents: List[str] = field(default_factory=list)
    backgrounds: List[str] = field(default_factory=list)
    text_colors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PaletteReport:
    """Ordered palette plus its harmony analysis."""
    entries: List[PaletteEntry]
    harmony: Optional[HarmonyReport]
    usage: UsageRecommendations
    metadata: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "palette": [entry.to_dict() for entry in self.entries],
            "harmony": self.harmony.to_dict() if self.harmony else None,
            "usage": self.usage.to_dict(),
            "metadata": dict(self.metadata),
        }


def build_entry(centroid: Centroid, text_threshold: Optional[float] = None) -> PaletteEntry:
    """Annotate a centroid with hex, HSL, luminance, description and text color."""
    if text_threshold is None:
        text_threshold = config.TEXT_LUMINANCE_THRESHOLD

    rgb = centroid.rgb
    hsl = rgb_to_hsl(*rgb)
    lum = luminance(*rgb)
    text_color = text_color_for(lum, text_threshold)

    return PaletteEntry(
        hex=rgb_to_hex(*rgb),
        rgb=rgb,
        hsl=hsl,
        frequency=centroid.frequency,
        luminance=lum,
        description=describe(hsl),
        text_color=text_color,
        contrast_ratio=contrast_ratio(rgb, hex_to_rgb(text_color))
    )


def recommend_usage(entries: Sequence[PaletteEntry]) -> UsageRecommendations:
    """
    Suggest roles for palette colors.

    The most frequent color is the primary, the next two are accents, light
    colors are background candidates and dark ones text candidates.
    """
    if not entries:
        raise ValueError("Cannot recommend usage for an empty palette")

    return UsageRecommendations(
        primary=entries[0].hex,
        accents=[entry.hex for entry in entries[1:1 + ACCENT_COUNT]],
        backgrounds=[entry.hex for entry in entries if entry.luminance > BACKGROUND_LUMINANCE_GT],
        text_colors=[entry.hex for entry in entries if entry.luminance < TEXT_LUMINANCE_LT]
    )


def extract_palette(
    image: ImageBuffer,
    k: Optional[int] = None,
    iterations: Optional[int] = None,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
    max_edge: Optional[int] = None,
    stride: Optional[int] = None,
    max_samples: Optional[int] = None,
    text_threshold: Optional[float] = None
) -> PaletteReport:
    """
    Extract the dominant colors of an image.

    Args:
        image: Decoded RGB/RGBA pixel buffer
        k: Palette size (defaults to config.DEFAULT_K)
        iterations: K-means rounds (defaults to config.ITERATIONS)
        seed: Seed for centroid initialization; ignored when rng is given
        rng: Random source for centroid initialization
        max_edge: Longest side of the analysis canvas
        stride: Sampling stride for large canvases
        max_samples: Upper bound on sample count
        text_threshold: Luminance above which black text is recommended

    Returns:
        PaletteReport with entries ordered by frequency. Harmony is None for
        single-color palettes.

    Raises:
        EmptyImage: No usable pixels in the image
        InvalidK: k outside [1, sample_count]
    """
    k = config.DEFAULT_K if k is None else k
    iterations = config.ITERATIONS if iterations is None else iterations
    if rng is None:
        rng = np.random.default_rng(seed)

    request_id = generate_request_id("pal")
    logger.info(f"Starting palette extraction {request_id}: "
                f"{image.width}×{image.height}, k={k}, iterations={iterations}")

    with performance_monitor("pixel_sampling") as sampling_metrics:
        samples = sample_pixels(image, max_edge=max_edge, stride=stride, max_samples=max_samples)

    with performance_monitor("kmeans_clustering", sample_count=len(samples), cluster_count=k) as clustering_metrics:
        centroids = cluster(samples, k, iterations=iterations, rng=rng)
    log_memory_usage("clustering_complete")

    entries = [build_entry(centroid, text_threshold) for centroid in centroids]
    harmony = analyze(entries) if len(entries) >= 2 else None
    if harmony is None:
        logger.warning(f"Extraction {request_id}: single-color palette, harmony analysis skipped")

    report = PaletteReport(
        entries=entries,
        harmony=harmony,
        usage=recommend_usage(entries),
        metadata={
            "request_id": request_id,
            "image_size": [image.width, image.height],
            "analysis_size": list(samples.analysis_size),
            "sample_count": len(samples),
            "sample_stride": samples.stride,
            "k": k,
            "iterations": iterations,
            "seed": seed,
            "performance": {
                "sampling_ms": sampling_metrics.get("duration_ms"),
                "clustering_ms": clustering_metrics.get("duration_ms"),
            },
        }
    )

    logger.info(f"Palette extraction {request_id} completed: {[e.hex for e in entries]}")
    return report
