"""
Color-space conversions used to annotate palette entries.

All functions are pure: no state, no randomness, identical output for
identical input.
"""

import math
import re
from typing import Tuple

RGB = Tuple[int, int, int]
HSL = Tuple[int, int, int]

HEX_COLOR_RE = re.compile(r"#?[0-9A-Fa-f]{6}")

BLACK_HEX = "#000000"
WHITE_HEX = "#FFFFFF"


def _clamp_channel(value) -> int:
    return max(0, min(255, int(value)))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Convert RGB channels to a #RRGGBB string, clamping each to [0, 255]."""
    return f"#{_clamp_channel(r):02X}{_clamp_channel(g):02X}{_clamp_channel(b):02X}"


def hex_to_rgb(hex_color: str) -> RGB:
    """
    Convert hex color string to RGB tuple.

    Args:
        hex_color: Color as #RRGGBB or RRGGBB (case insensitive)

    Raises:
        ValueError: If the string is not a six digit hex color
    """
    if not HEX_COLOR_RE.fullmatch(hex_color):
        raise ValueError(f"Invalid hex color format: {hex_color}")

    hex_clean = hex_color.lstrip('#')
    return tuple(int(hex_clean[i:i+2], 16) for i in (0, 2, 4))


def rgb_to_hsl(r: int, g: int, b: int) -> HSL:
    """
    Convert RGB to HSL.

    Returns:
        Tuple of (H, S, L) rounded to integers, H in [0, 360], S and L in [0, 100].
        Grays (max == min) have H = S = 0.
    """
    r_n, g_n, b_n = r / 255.0, g / 255.0, b / 255.0
    c_max = max(r_n, g_n, b_n)
    c_min = min(r_n, g_n, b_n)
    l = (c_max + c_min) / 2

    if c_max == c_min:
        h = s = 0.0
    else:
        d = c_max - c_min
        s = d / (2 - c_max - c_min) if l > 0.5 else d / (c_max + c_min)
        if c_max == r_n:
            h = (g_n - b_n) / d + (6 if g_n < b_n else 0)
        elif c_max == g_n:
            h = (b_n - r_n) / d + 2
        else:
            h = (r_n - g_n) / d + 4
        h /= 6

    return _round_half_up(h * 360), _round_half_up(s * 100), _round_half_up(l * 100)


def _linearize(channel: int) -> float:
    c = channel / 255
    return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4


def luminance(r: int, g: int, b: int) -> float:
    """WCAG relative luminance in [0.0, 1.0]."""
    return 0.2126 * _linearize(r) + 0.7152 * _linearize(g) + 0.0722 * _linearize(b)


def contrast_ratio(rgb1: RGB, rgb2: RGB) -> float:
    """WCAG contrast ratio between two colors, from 1.0 up to 21.0."""
    lum1 = luminance(*rgb1)
    lum2 = luminance(*rgb2)
    brightest = max(lum1, lum2)
    darkest = min(lum1, lum2)
    return (brightest + 0.05) / (darkest + 0.05)


def text_color_for(lum: float, threshold: float = 0.5) -> str:
    """Black text on light colors, white text on dark ones."""
    return BLACK_HEX if lum > threshold else WHITE_HEX
