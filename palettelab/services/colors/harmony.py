"""
Palette harmony analysis.

Classifies a palette from the hue steps between consecutive entries, in the
order the entries are given. Nothing is re-sorted here: the same colors in a
different order can classify differently.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any, List, Sequence

from loguru import logger

from palettelab.errors import InsufficientPalette

MONOCHROMATIC_LT = 30.0
ANALOGOUS_LT = 60.0
COMPLEMENTARY_GT = 150.0
WARM_MEAN_HUE_LT = 180.0
HIGH_LUMINANCE_GT = 0.7
LOW_LUMINANCE_LT = 0.3

RELATIONSHIPS = {
    "Monochromatic/Analogous": "Colors are closely related, creating harmony",
    "Analogous": "Pleasant, natural color relationship",
    "Complementary": "High contrast, vibrant combination",
    "Triadic/Split-Complementary": "Balanced, dynamic palette",
}


@dataclass(frozen=True)
class HarmonyReport:
    """Hue relationship summary of a palette."""
    average_hue_distance: float  # degrees
    classification: str
    temperature: str
    contrast_level: str
    relationship: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def hue_distance(h1: float, h2: float) -> float:
    """Circular distance between two hues in degrees, in [0, 180]."""
    diff = abs(h1 - h2)
    return min(diff, 360 - diff)


def consecutive_hue_distances(hues: Sequence[float]) -> List[float]:
    return [hue_distance(hues[i], hues[i + 1]) for i in range(len(hues) - 1)]


def classify_hue_distance(avg: float) -> str:
    """Map an average hue step to a harmony label."""
    if avg < MONOCHROMATIC_LT:
        return "Monochromatic/Analogous"
    if avg < ANALOGOUS_LT:
        return "Analogous"
    if avg > COMPLEMENTARY_GT:
        return "Complementary"
    return "Triadic/Split-Complementary"


def classify_temperature(hues: Sequence[float]) -> str:
    mean_hue = sum(hues) / len(hues)
    return "Warm-leaning" if mean_hue < WARM_MEAN_HUE_LT else "Cool-leaning"


def classify_contrast(luminances: Sequence[float]) -> str:
    has_light = any(lum > HIGH_LUMINANCE_GT for lum in luminances)
    has_dark = any(lum < LOW_LUMINANCE_LT for lum in luminances)
    return "High" if has_light and has_dark else "Medium"


def analyze(palette: Sequence) -> HarmonyReport:
    """
    Analyze hue relationships across a palette.

    Args:
        palette: Palette entries in the order to analyze; each needs `hsl`
            and `luminance` attributes

    Returns:
        HarmonyReport for the given order

    Raises:
        InsufficientPalette: If fewer than two entries are given
    """
    if len(palette) < 2:
        raise InsufficientPalette(
            f"Harmony analysis needs at least 2 colors, got {len(palette)}"
        )

    hues = [entry.hsl[0] for entry in palette]
    distances = consecutive_hue_distances(hues)
    avg = sum(distances) / len(distances)

    classification = classify_hue_distance(avg)
    report = HarmonyReport(
        average_hue_distance=avg,
        classification=classification,
        temperature=classify_temperature(hues),
        contrast_level=classify_contrast([entry.luminance for entry in palette]),
        relationship=RELATIONSHIPS[classification]
    )

    logger.debug(f"Harmony: {classification} (avg hue step {avg:.1f}°), "
                 f"{report.temperature}, contrast {report.contrast_level}")
    return report
