"""
palettelab Configuration
Manages environment variables and defaults for the extraction engine and API.
"""
import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Configuration class for palettelab services."""

    # Sampling
    MAX_EDGE: int = int(os.environ.get("PALETTELAB_MAX_EDGE", "200"))
    SAMPLE_STRIDE: int = int(os.environ.get("PALETTELAB_SAMPLE_STRIDE", "4"))
    MAX_SAMPLES: int = int(os.environ.get("PALETTELAB_MAX_SAMPLES", "12500"))

    # Clustering
    DEFAULT_K: int = int(os.environ.get("PALETTELAB_DEFAULT_K", "5"))
    MIN_K: int = int(os.environ.get("PALETTELAB_MIN_K", "3"))
    MAX_K: int = int(os.environ.get("PALETTELAB_MAX_K", "20"))
    ITERATIONS: int = int(os.environ.get("PALETTELAB_ITERATIONS", "10"))
    MAX_ITERATIONS: int = int(os.environ.get("PALETTELAB_MAX_ITERATIONS", "100"))

    # Palette annotation
    TEXT_LUMINANCE_THRESHOLD: float = float(
        os.environ.get("PALETTELAB_TEXT_LUMINANCE_THRESHOLD", "0.5")
    )

    # Timeouts (milliseconds)
    TIMEOUT_EXTRACTION: int = int(os.environ.get("PALETTELAB_TIMEOUT_EXTRACTION_MS", "2000"))

    # Logging
    LOG_LEVEL: str = os.environ.get("PALETTELAB_LOG_LEVEL", "INFO")
    LOG_JSON: bool = bool(int(os.environ.get("PALETTELAB_LOG_JSON", "0")))

    # CORS settings
    ALLOWED_ORIGINS: str = os.environ.get("PALETTELAB_ALLOWED_ORIGINS", "")


# Global config instance
config = Config()
