from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from astroprof.errors import DegenerateNormalizationError, InvalidInputError
from astroprof.features.base import RadialProfile
from astroprof.utils.common import ImageLike, as_image_array, sanitize_nans

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RadialPowerConfig:
    # Fraction of the smaller half-extent covered by the largest aperture.
    aperture_fraction: float = 0.7
    radius_step: float = 1.0

    def __post_init__(self) -> None:
        if not self.aperture_fraction > 0:
            raise InvalidInputError("aperture_fraction must be positive")
        if not self.radius_step > 0:
            raise InvalidInputError("radius_step must be positive")


def find_peak(image: np.ndarray) -> Tuple[int, int]:
    """Return ``(x, y)`` of the first maximum in row-major order."""
    flat_idx = int(np.argmax(image))
    y, x = np.unravel_index(flat_idx, image.shape)
    return int(x), int(y)


def distance_field(shape: Tuple[int, int], peak: Tuple[int, int]) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Squared offsets and Euclidean distance of every cell from ``peak``.

    Returns ``(dx2, dy2, dist)``, each with the given ``(height, width)`` shape.
    """
    x_max, y_max = peak
    yy, xx = np.indices(shape)
    dx2 = (xx - x_max) ** 2
    dy2 = (yy - y_max) ** 2
    dist = np.sqrt((dx2 + dy2).astype(float))
    return dx2, dy2, dist


def radius_sequence(dx2: np.ndarray, dy2: np.ndarray, config: RadialPowerConfig = RadialPowerConfig()) -> np.ndarray:
    max_sq = min(int(np.max(dx2)), int(np.max(dy2)))
    limit = math.floor(math.sqrt(max_sq) * config.aperture_fraction)
    n_steps = math.floor(limit / config.radius_step + 1e-9)
    return np.round(np.arange(n_steps + 1, dtype=float) * config.radius_step, 12)


def integrate_power(image: np.ndarray, dist: np.ndarray, radii: np.ndarray) -> np.ndarray:
    """Sum of the samples within each radius, one full re-scan per radius."""
    sums = np.zeros(radii.shape[0], dtype=float)
    for i, r in enumerate(radii):
        sums[i] = float(np.sum(image[dist <= r]))
    return sums


def normalize_power(sums: np.ndarray) -> np.ndarray:
    total = float(sums[-1])
    if total == 0.0:
        raise DegenerateNormalizationError(
            "full-aperture sum is zero; the radial profile cannot be normalised"
        )
    return sums / total


def compute_radial_profile(image: ImageLike, config: Optional[RadialPowerConfig] = None) -> RadialProfile:
    """
    Cumulative radial power profile around the brightest sample of an image.

    NaN samples count as zero. The caller's image is not modified.

    Args:
        image: 2D grid of real values, rows indexed by y and columns by x
        config: Aperture settings; defaults to ``RadialPowerConfig()``

    Returns:
        ``RadialProfile(radius, integrated)`` with ``integrated[-1] == 1``

    Raises:
        InvalidInputError: the image is empty, jagged, not 2D or not numeric
        DegenerateNormalizationError: every sample inside the aperture sums to zero
    """
    if config is None:
        config = RadialPowerConfig()

    work = sanitize_nans(as_image_array(image))

    peak = find_peak(work)
    dx2, dy2, dist = distance_field(work.shape, peak)
    radii = radius_sequence(dx2, dy2, config)
    logger.debug("peak=%s shape=%s n_radii=%d", peak, work.shape, radii.shape[0])

    sums = integrate_power(work, dist, radii)
    return RadialProfile(radius=radii, integrated=normalize_power(sums))


class RadialPowerExtractor:
    def __init__(self, config: RadialPowerConfig = RadialPowerConfig(), n_jobs: int = 1):
        if n_jobs == 0 or n_jobs < -1:
            raise ValueError("n_jobs must be a positive integer or -1")
        self.config = config
        self.n_jobs = n_jobs

    @property
    def name(self) -> str:
        return "radial_power"

    def extract_batch(self, images: np.ndarray) -> Dict[str, object]:
        if not isinstance(images, np.ndarray):
            raise TypeError("images must be a numpy array")
        if images.ndim != 3:
            raise ValueError("images must have shape (n_images, height, width)")

        n = images.shape[0]
        if self.n_jobs == 1 or n <= 1:
            results = [self._profile_one(images[i]) for i in range(n)]
        else:
            workers = None if self.n_jobs == -1 else self.n_jobs
            with ThreadPoolExecutor(max_workers=workers) as pool:
                results = list(pool.map(self._profile_one, [images[i] for i in range(n)]))

        radius: List[np.ndarray] = [r[0].radius for r in results]
        integrated: List[np.ndarray] = [r[0].integrated for r in results]
        peaks = np.array([r[1] for r in results], dtype=int).reshape(n, 2)

        return {"radius": radius, "integrated": integrated, "peak": peaks}

    def _profile_one(self, image: np.ndarray) -> Tuple[RadialProfile, Tuple[int, int]]:
        profile = compute_radial_profile(image, self.config)
        peak = find_peak(sanitize_nans(as_image_array(image)))
        return profile, peak
