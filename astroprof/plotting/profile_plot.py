from __future__ import annotations

import os
from typing import Optional

import numpy as np

from astroprof.features.base import RadialProfile
from astroprof.features.radial_power import find_peak
from astroprof.utils.common import sanitize_nans


def plot_radial_profile(ax, profile: RadialProfile, *, label: Optional[str] = None, title: Optional[str] = None) -> None:
    ax.plot(profile.radius, profile.integrated, marker="o", markersize=3, linewidth=1.5, label=label)
    ax.set_xlabel("radius [pix]")
    ax.set_ylabel("integrated power (normalised)")
    lo = min(0.0, float(np.min(profile.integrated)))
    hi = max(1.0, float(np.max(profile.integrated)))
    pad = 0.05 * (hi - lo)
    ax.set_ylim(lo - pad if lo < 0 else lo, hi + pad)
    ax.grid(True, alpha=0.25)
    if title:
        ax.set_title(title)
    if label:
        ax.legend(loc="lower right")


def _plot_image(ax, image: np.ndarray, title: str) -> None:
    import matplotlib.pyplot as plt  # type: ignore

    work = sanitize_nans(image)
    im = ax.imshow(work, cmap="viridis", origin="lower")
    x, y = find_peak(work)
    ax.plot([x], [y], marker="+", color="red", markersize=10)
    ax.set_title(title)
    ax.set_xticks([])
    ax.set_yticks([])
    plt.colorbar(im, ax=ax, fraction=0.046, pad=0.04)


def save_profile_figure(
    profile: RadialProfile,
    out_path: str,
    *,
    image: Optional[np.ndarray] = None,
    title: Optional[str] = None,
) -> None:
    import matplotlib.pyplot as plt  # type: ignore

    if image is None:
        fig, ax = plt.subplots(1, 1, figsize=(6, 4.5))
        plot_radial_profile(ax, profile)
    else:
        fig, axes = plt.subplots(1, 2, figsize=(12, 5))
        _plot_image(axes[0], image, "image (peak marked)")
        plot_radial_profile(axes[1], profile, title="radial power")

    if title:
        fig.suptitle(title)
    fig.tight_layout()
    os.makedirs(os.path.dirname(os.path.abspath(out_path)) or ".", exist_ok=True)
    fig.savefig(out_path, dpi=160)
    plt.close(fig)
