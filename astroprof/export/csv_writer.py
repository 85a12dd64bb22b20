from __future__ import annotations

import os

import numpy as np

from astroprof.features.base import RadialProfile


def write_profile_csv(path: str, profile: RadialProfile) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(path)) or ".", exist_ok=True)
    mat = np.stack([profile.radius.astype(float), profile.integrated.astype(float)], axis=1)
    np.savetxt(path, mat, delimiter=",", header="radius,integrated", comments="")


def read_profile_csv(path: str) -> RadialProfile:
    mat = np.loadtxt(path, delimiter=",", skiprows=1, ndmin=2)
    return RadialProfile(radius=mat[:, 0], integrated=mat[:, 1])
