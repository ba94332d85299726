"""
Pixel sampling for palette extraction.

Turns an already-decoded pixel buffer into a bounded, read-only set of RGB
samples: the image is downscaled to the analysis resolution, read in
row-major order at a fixed stride, and fully transparent pixels are dropped.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import cv2
import numpy as np
from loguru import logger

from palettelab.config import config
from palettelab.errors import EmptyImage

SUPPORTED_CHANNELS = (3, 4)


@dataclass(frozen=True)
class ImageBuffer:
    """Raw RGB or RGBA bytes in row-major order plus their dimensions."""
    data: Union[bytes, bytearray, memoryview, np.ndarray]
    width: int
    height: int
    channels: int = 3

    @classmethod
    def from_array(cls, array: np.ndarray) -> "ImageBuffer":
        """Wrap an (H, W, 3) or (H, W, 4) uint8 array."""
        if array.ndim != 3 or array.shape[2] not in SUPPORTED_CHANNELS:
            raise ValueError(f"Expected an (H, W, 3|4) array, got shape {array.shape}")
        height, width, channels = array.shape
        return cls(
            data=np.ascontiguousarray(array, dtype=np.uint8),
            width=int(width),
            height=int(height),
            channels=int(channels)
        )

    @property
    def pixel_count(self) -> int:
        return max(self.width, 0) * max(self.height, 0)

    def to_array(self) -> np.ndarray:
        """
        Reshape the buffer to (H, W, C).

        Raises:
            ValueError: If the channel count is unsupported or the buffer
                length does not match width * height * channels
        """
        if self.channels not in SUPPORTED_CHANNELS:
            raise ValueError(f"Unsupported channel count: {self.channels}")

        if isinstance(self.data, np.ndarray):
            flat = np.asarray(self.data, dtype=np.uint8).reshape(-1)
        else:
            flat = np.frombuffer(self.data, dtype=np.uint8)

        expected = self.width * self.height * self.channels
        if flat.size != expected:
            raise ValueError(
                f"Pixel buffer length mismatch: got {flat.size} bytes, "
                f"expected {self.width}×{self.height}×{self.channels} = {expected}"
            )
        return flat.reshape(self.height, self.width, self.channels)


@dataclass(frozen=True)
class SampleSet:
    """Immutable (N, 3) uint8 sample array with its provenance."""
    pixels: np.ndarray
    source_size: Tuple[int, int]
    analysis_size: Tuple[int, int]
    stride: int

    def __len__(self) -> int:
        return int(self.pixels.shape[0])


def analysis_dimensions(width: int, height: int, max_edge: int) -> Tuple[int, int]:
    """Size of the analysis canvas: downscaled to max_edge on the longest side, never upscaled."""
    longest = max(width, height)
    if longest <= max_edge:
        return width, height
    return max(1, width * max_edge // longest), max(1, height * max_edge // longest)


def sample_stride(pixel_count: int, stride: int, max_samples: int) -> int:
    """Read every pixel of small canvases, every Nth pixel otherwise."""
    if pixel_count <= max_samples:
        return 1
    return max(stride, math.ceil(pixel_count / max_samples))


def resize_pixels(pixels: np.ndarray, size: Tuple[int, int]) -> np.ndarray:
    """
    Area-resample an (H, W, 3|4) uint8 array to size (width, height).

    RGBA input is averaged with premultiplied alpha, so fully transparent
    pixels add no color to their neighbors. Output alpha is the area mean.
    """
    if pixels.shape[2] == 3:
        return cv2.resize(pixels, size, interpolation=cv2.INTER_AREA)

    alpha = pixels[:, :, 3].astype(np.float32)
    premultiplied = pixels[:, :, :3].astype(np.float32) * alpha[:, :, np.newaxis]

    color = cv2.resize(premultiplied, size, interpolation=cv2.INTER_AREA)
    alpha = cv2.resize(alpha, size, interpolation=cv2.INTER_AREA)

    out_alpha = np.clip(np.floor(alpha + 0.5), 0, 255)
    covered = out_alpha > 0
    rgb = np.zeros(color.shape, dtype=np.float32)
    rgb[covered] = color[covered] / alpha[covered][:, np.newaxis]
    rgb = np.clip(np.floor(rgb + 0.5), 0, 255)

    return np.dstack([rgb, out_alpha]).astype(np.uint8)


def sample_pixels(image: ImageBuffer,
                  max_edge: Optional[int] = None,
                  stride: Optional[int] = None,
                  max_samples: Optional[int] = None) -> SampleSet:
    """
    Build the working sample set for clustering.

    Args:
        image: Decoded pixel buffer (RGB or RGBA)
        max_edge: Longest side of the analysis canvas
        stride: Pixel stride used once the canvas exceeds max_samples
        max_samples: Upper bound on the number of samples

    Returns:
        SampleSet with a read-only (N, 3) uint8 pixel array

    Raises:
        EmptyImage: If the image has no pixels or every pixel is transparent
        ValueError: If the buffer does not match its declared dimensions
    """
    max_edge = max_edge or config.MAX_EDGE
    stride = stride or config.SAMPLE_STRIDE
    max_samples = max_samples or config.MAX_SAMPLES

    if image.pixel_count == 0:
        raise EmptyImage(f"Image has no pixels ({image.width}×{image.height})")

    pixels = image.to_array()
    width, height = image.width, image.height

    # 1) Downscale to the analysis canvas
    target_w, target_h = analysis_dimensions(width, height, max_edge)
    if (target_w, target_h) != (width, height):
        pixels = resize_pixels(pixels, (target_w, target_h))
        logger.debug(f"Resized {width}×{height} to analysis canvas {target_w}×{target_h}")

    # 2) Row-major read at a fixed stride
    flat = pixels.reshape(-1, image.channels)
    step = sample_stride(flat.shape[0], stride, max_samples)
    flat = flat[::step]

    # 3) Drop fully transparent pixels
    if image.channels == 4:
        opaque = flat[:, 3] > 0
        logger.debug(f"Alpha filter: kept {int(np.sum(opaque))}/{len(opaque)} pixels")
        flat = flat[opaque]

    # Copy so the samples never alias the caller's buffer
    samples = np.array(flat[:, :3], dtype=np.uint8)
    if samples.shape[0] == 0:
        raise EmptyImage("Image has no opaque pixels")

    samples.setflags(write=False)
    logger.info(f"Sampled {samples.shape[0]} pixels from {width}×{height} image (stride={step})")

    return SampleSet(
        pixels=samples,
        source_size=(width, height),
        analysis_size=(target_w, target_h),
        stride=step
    )
