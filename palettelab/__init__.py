"""
palettelab

Dominant-color extraction: pixel sampling, k-means clustering in RGB space,
perceptual descriptions and palette harmony analysis.
"""

__version__ = "1.0.0"
