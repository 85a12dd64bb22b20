from __future__ import annotations

from typing import Dict, NamedTuple, Protocol

import numpy as np


class RadialProfile(NamedTuple):
    radius: np.ndarray
    integrated: np.ndarray


class ProfileExtractor(Protocol):
    @property
    def name(self) -> str:
        ...

    def extract_batch(self, images: np.ndarray) -> Dict[str, object]:
        ...
