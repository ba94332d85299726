"""
Error kinds raised by the extraction engine.

All of them are caller-input contract violations: they are raised as soon as
the bad input is seen and are never retried or recovered internally.
"""


class PaletteError(ValueError):
    """Base class for palette extraction errors."""

    kind = "palette_error"


class EmptyImage(PaletteError):
    """The decoded image holds no usable pixels."""

    kind = "empty_image"


class InvalidK(PaletteError):
    """Requested palette size is outside [1, sample_count]."""

    kind = "invalid_k"


class InsufficientPalette(PaletteError):
    """Harmony analysis needs at least two palette entries."""

    kind = "insufficient_palette"
