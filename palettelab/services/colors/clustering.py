"""
K-means clustering of sampled pixels in RGB space.

Plain Lloyd iterations with a fixed budget:
- centroids are seeded from k random samples (with replacement)
- each sample goes to the nearest centroid by Euclidean RGB distance,
  ties to the lowest centroid index
- each centroid moves to the rounded mean of its samples; a centroid that
  receives no samples keeps its position for that round
- there is no early exit, the loop always runs `iterations` rounds
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

import numpy as np
from loguru import logger

from palettelab.errors import InvalidK
from .sampling import SampleSet

DEFAULT_ITERATIONS = 10


@dataclass
class Centroid:
    """Cluster center plus the share of samples it owned in the last assignment."""
    r: int
    g: int
    b: int
    frequency: float = 0.0

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b


def _as_pixel_array(samples: Union[SampleSet, np.ndarray]) -> np.ndarray:
    pixels = samples.pixels if isinstance(samples, SampleSet) else np.asarray(samples)
    return pixels.reshape(-1, 3).astype(np.int64)


def assign_labels(pixels: np.ndarray, centers: np.ndarray) -> np.ndarray:
    """
    Index of the nearest center for every pixel.

    Squared distances are compared directly; they order the same way as the
    Euclidean ones and are exact in integer arithmetic. argmin returns the
    first minimum, so ties go to the lowest center index.
    """
    diff = pixels[:, None, :] - centers[None, :, :]
    distances = np.einsum("nkc,nkc->nk", diff, diff)
    return np.argmin(distances, axis=1)


def update_centers(pixels: np.ndarray, labels: np.ndarray, centers: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Move every non-empty center to the rounded mean of its pixels.

    Returns:
        Tuple of (new centers, per-center counts)
    """
    k = centers.shape[0]
    counts = np.bincount(labels, minlength=k)
    sums = np.zeros((k, 3), dtype=np.int64)
    np.add.at(sums, labels, pixels)

    updated = centers.copy()
    owned = counts > 0
    means = sums[owned] / counts[owned, None]
    # Round half up on the channel means
    updated[owned] = np.floor(means + 0.5).astype(np.int64)
    return updated, counts


def cluster(samples: Union[SampleSet, np.ndarray], k: int,
            iterations: int = DEFAULT_ITERATIONS,
            rng: Optional[np.random.Generator] = None) -> List[Centroid]:
    """
    Partition samples into k color clusters.

    Args:
        samples: SampleSet or (N, 3) array of RGB values
        k: Number of clusters, 1 <= k <= N
        iterations: Fixed number of assignment/update rounds
        rng: Random source used to pick the initial centroids; any object
            with a numpy Generator compatible `integers(low, high, size)`.
            An unseeded generator is used when omitted.

    Returns:
        k centroids sorted by frequency (percent of samples), descending

    Raises:
        InvalidK: If k is outside [1, N]
        ValueError: If iterations < 1
    """
    pixels = _as_pixel_array(samples)
    n = pixels.shape[0]

    if k < 1 or k > n:
        raise InvalidK(f"k must be between 1 and the sample count ({n}), got {k}")
    if iterations < 1:
        raise ValueError(f"iterations must be at least 1, got {iterations}")

    if rng is None:
        rng = np.random.default_rng()

    seed_indices = np.asarray(rng.integers(0, n, size=k), dtype=np.int64)
    centers = pixels[seed_indices].copy()
    logger.debug(f"Seeded {k} centroids from sample indices {seed_indices.tolist()}")

    counts = np.zeros(k, dtype=np.int64)
    for iteration in range(iterations):
        labels = assign_labels(pixels, centers)
        centers, counts = update_centers(pixels, labels, centers)

        empty = int(np.sum(counts == 0))
        if empty:
            logger.debug(f"Iteration {iteration + 1}: {empty} empty cluster(s) left in place")

    frequencies = counts / n * 100
    order = np.argsort(-frequencies, kind="stable")

    centroids = [
        Centroid(
            r=int(centers[i, 0]),
            g=int(centers[i, 1]),
            b=int(centers[i, 2]),
            frequency=float(frequencies[i])
        )
        for i in order
    ]

    freq_str = [f"{c.frequency:.1f}%" for c in centroids]
    logger.info(f"Clustering finished: k={k}, n={n}, iterations={iterations}, frequencies={freq_str}")

    return centroids
