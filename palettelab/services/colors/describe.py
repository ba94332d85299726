"""
Human-readable color names from HSL.

The thresholds below are a fixed lookup table; changing any of them changes
every expected description.
"""

from typing import Sequence

GRAY_SATURATION_LT = 10

# (upper bound exclusive, label)
LIGHTNESS_BUCKETS = (
    (20, "Very Dark"),
    (40, "Dark"),
    (60, "Medium"),
    (80, "Light"),
)
LIGHTNESS_TOP = "Very Light"

SATURATION_BUCKETS = (
    (20, "Muted"),
    (60, "Moderate"),
)
SATURATION_TOP = "Vibrant"

# Red wraps around 0°: hue < 15 or hue >= 345
HUE_SECTORS = (
    (15, "Red"),
    (45, "Orange"),
    (75, "Yellow"),
    (105, "Yellow-Green"),
    (135, "Green"),
    (165, "Blue-Green"),
    (195, "Cyan"),
    (225, "Blue"),
    (255, "Blue-Purple"),
    (285, "Purple"),
    (315, "Magenta"),
    (345, "Pink"),
)
HUE_WRAP = "Red"


def _bucket(value: float, buckets, top: str) -> str:
    for upper, label in buckets:
        if value < upper:
            return label
    return top


def lightness_name(l: float) -> str:
    return _bucket(l, LIGHTNESS_BUCKETS, LIGHTNESS_TOP)


def saturation_name(s: float) -> str:
    return _bucket(s, SATURATION_BUCKETS, SATURATION_TOP)


def hue_name(h: float) -> str:
    return _bucket(h, HUE_SECTORS, HUE_WRAP)


def describe(hsl: Sequence[float]) -> str:
    """
    Describe an HSL color, e.g. "Dark Vibrant Blue-Purple" or "Medium Gray".

    Args:
        hsl: (H, S, L) with H in degrees and S, L in percent
    """
    h, s, l = hsl
    lightness = lightness_name(l)

    if s < GRAY_SATURATION_LT:
        return f"{lightness} Gray"

    return f"{lightness} {saturation_name(s)} {hue_name(h)}"
