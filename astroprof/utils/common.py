"""
Common utility functions for the astroprof tools.
"""

import logging
from typing import Sequence, Union

import numpy as np

from astroprof.errors import InvalidInputError

ImageLike = Union[np.ndarray, Sequence[Sequence[float]]]


def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%H:%M:%S",
    )


def as_image_array(image: ImageLike) -> np.ndarray:
    """
    Validate an image and return it as a new float64 array.

    The result never shares memory with the input, so callers may modify
    it freely.

    Args:
        image: 2D numpy array or a sequence of equal-length rows

    Returns:
        2D float64 array of shape (height, width)
    """
    if not isinstance(image, np.ndarray):
        image = _rows_to_array(image)

    if image.size == 0:
        raise InvalidInputError("image must contain at least one sample")
    if image.ndim != 2:
        raise InvalidInputError(f"image must be 2D, got {image.ndim}D")
    if image.dtype == object or not np.issubdtype(image.dtype, np.number):
        raise InvalidInputError(f"image must be numeric, got dtype {image.dtype}")
    if np.iscomplexobj(image):
        raise InvalidInputError("image must be real-valued")
    if np.ma.isMaskedArray(image):
        # masked pixels are missing data, like NaN
        image = np.ma.filled(image.astype(np.float64), np.nan)

    out = np.array(image, dtype=np.float64, copy=True)
    if np.isinf(out).any():
        raise InvalidInputError("image contains infinite values")
    return out


def _rows_to_array(rows: Sequence[Sequence[float]]) -> np.ndarray:
    try:
        rows = list(rows)
    except TypeError:
        raise InvalidInputError("image must be a 2D array or a sequence of rows") from None

    widths = set()
    for row in rows:
        if isinstance(row, (str, bytes)):
            raise InvalidInputError("image rows must be numeric sequences")
        try:
            widths.add(len(row))
        except TypeError:
            raise InvalidInputError("image rows must be sequences") from None
    if len(widths) > 1:
        raise InvalidInputError(f"image rows have different lengths: {sorted(widths)}")

    try:
        return np.asarray(rows, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"image is not a numeric grid: {exc}") from exc


def sanitize_nans(image: np.ndarray) -> np.ndarray:
    """
    Replace NaN samples with zero.

    Args:
        image: Input image array

    Returns:
        A copy of the image with every NaN set to 0
    """
    out = np.array(image, dtype=np.float64, copy=True)
    out[np.isnan(out)] = 0.0
    return out
