from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

import numpy as np
from astropy.io import fits

from astroprof.errors import InvalidInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FitsImage:
    data: np.ndarray
    header: fits.Header
    hdu_index: int


def load_fits_image(path: str, hdu: Optional[int] = None) -> FitsImage:
    """
    Read a 2D image plane from a FITS file.

    Singleton axes (Stokes, a single channel) are squeezed away. Without
    ``hdu`` the first extension holding a 2D plane is used.

    Args:
        path: FITS file path
        hdu: Extension index to read, or None to search

    Returns:
        FitsImage with float64 data, the extension header and its index
    """
    if not os.path.exists(path):
        raise FileNotFoundError(path)

    with fits.open(path, memmap=False) as hdul:
        if hdu is not None:
            if hdu < 0 or hdu >= len(hdul):
                raise InvalidInputError(f"{path}: no HDU {hdu} (file has {len(hdul)})")
            candidates = [hdu]
        else:
            candidates = list(range(len(hdul)))

        for idx in candidates:
            ext = hdul[idx]
            if ext.data is None or not isinstance(ext.data, np.ndarray):
                continue
            data = np.squeeze(np.asarray(ext.data))
            if data.ndim == 2:
                logger.debug("%s: using HDU %d shape=%s", path, idx, data.shape)
                return FitsImage(data=data.astype(np.float64), header=ext.header.copy(), hdu_index=idx)
            if hdu is not None:
                raise InvalidInputError(
                    f"{path}: HDU {idx} has {data.ndim} non-degenerate axes, expected 2"
                )

    raise InvalidInputError(f"{path}: no 2D image found")
