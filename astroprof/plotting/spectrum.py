from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np

from astroprof.errors import InvalidInputError


def _as_spectrum(x: Sequence[float], y: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if x.ndim != 1 or y.ndim != 1:
        raise InvalidInputError("spectrum axes must be 1D")
    if x.shape[0] != y.shape[0]:
        raise InvalidInputError(f"x and y lengths differ ({x.shape[0]} != {y.shape[0]})")
    if x.shape[0] < 2:
        raise InvalidInputError("spectrum needs at least two channels")

    dx = np.diff(x)
    if np.all(dx < 0):
        x = x[::-1]
        y = y[::-1]
    elif not np.all(dx > 0):
        raise InvalidInputError("spectral axis must be strictly monotonic")
    return x, y


def channel_edges(x: np.ndarray) -> np.ndarray:
    """Channel boundaries: midpoints between centres, half a channel past each end."""
    mid = 0.5 * (x[:-1] + x[1:])
    first = x[0] - 0.5 * (x[1] - x[0])
    last = x[-1] + 0.5 * (x[-1] - x[-2])
    return np.concatenate([[first], mid, [last]])


def step_outline(x: Sequence[float], y: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Histogram-style outline of a channelised spectrum.

    Each channel becomes a flat segment spanning its edges, so the outline
    has two points per channel. The result runs in increasing x.
    """
    xs, ys = _as_spectrum(x, y)
    edges = channel_edges(xs)
    return np.repeat(edges, 2)[1:-1], np.repeat(ys, 2)


def _clip_outline(
    edges: np.ndarray, ys: np.ndarray, lo: float, hi: float
) -> Tuple[np.ndarray, np.ndarray]:
    lo = max(lo, float(edges[0]))
    hi = min(hi, float(edges[-1]))
    if lo >= hi:
        return np.empty(0), np.empty(0)

    def channel_at(v: float) -> int:
        return int(np.clip(np.searchsorted(edges, v, side="right") - 1, 0, ys.shape[0] - 1))

    i_lo = channel_at(lo)
    i_hi = channel_at(np.nextafter(hi, -np.inf))

    px = [lo]
    py = [ys[i_lo]]
    for i in range(i_lo + 1, i_hi + 1):
        px.extend([edges[i], edges[i]])
        py.extend([ys[i - 1], ys[i]])
    px.append(hi)
    py.append(ys[i_hi])
    return np.asarray(px), np.asarray(py)


def fillspec(
    ax,
    x: Sequence[float],
    y: Sequence[float],
    *,
    baseline: float = 0.0,
    window: Optional[Tuple[float, float]] = None,
    color: Optional[str] = None,
    alpha: float = 0.4,
    edgecolor: str = "k",
    label: Optional[str] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Draw a spectrum as a filled step histogram.

    Args:
        ax: matplotlib axes
        x: Channel centres (velocity or frequency), strictly monotonic
        y: Channel values
        baseline: Level the fill extends to
        window: Optional ``(lo, hi)`` range; only this part is filled
        color: Fill colour
        alpha: Fill opacity
        edgecolor: Outline colour
        label: Legend label for the fill

    Returns:
        The outline ``(xs, ys)`` as drawn
    """
    xs_c, ys_c = _as_spectrum(x, y)
    edges = channel_edges(xs_c)
    xs, ys = step_outline(xs_c, ys_c)

    if window is None:
        fx, fy = xs, ys
    else:
        lo, hi = sorted(float(v) for v in window)
        fx, fy = _clip_outline(edges, ys_c, lo, hi)

    if fx.shape[0]:
        ax.fill_between(fx, fy, baseline, color=color, alpha=alpha, linewidth=0, label=label)
    ax.plot(xs, ys, color=edgecolor, linewidth=1.0)
    ax.axhline(baseline, color=edgecolor, linewidth=0.5, alpha=0.5)
    return xs, ys
