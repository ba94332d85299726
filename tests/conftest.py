"""
Test configuration and fixtures for palettelab tests.
"""
import numpy as np
import pytest
from fastapi.testclient import TestClient

from palettelab.main import app


class FixedIndices:
    """Random source stand-in that seeds centroids from known sample indices."""

    def __init__(self, indices):
        self.indices = list(indices)

    def integers(self, low, high, size=None):
        assert size is not None and size <= len(self.indices)
        picked = np.array(self.indices[:size], dtype=np.int64)
        assert np.all((picked >= low) & (picked < high))
        return picked


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def fixed_rng():
    """Factory for a random source that returns the given seed indices."""
    def _make(*indices):
        return FixedIndices(indices)
    return _make


@pytest.fixture
def red_blue_pixels():
    """2×2 image: two red pixels on top, two blue pixels below."""
    return np.array([
        [[255, 0, 0], [255, 0, 0]],
        [[0, 0, 255], [0, 0, 255]],
    ], dtype=np.uint8)
