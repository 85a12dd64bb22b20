#!/usr/bin/env python3

import argparse
import logging
import os
from typing import Optional, Sequence

import numpy as np

from astroprof.plotting.spectrum import fillspec
from astroprof.utils.common import setup_logging


def main(argv: Optional[Sequence[str]] = None) -> int:
    setup_logging()
    logger = logging.getLogger(__name__)

    import matplotlib.pyplot as plt  # type: ignore

    parser = argparse.ArgumentParser(description="Plot a spectrum as a filled step histogram.")
    parser.add_argument("spectrum", help="text file with two columns: velocity (or frequency) and flux")
    parser.add_argument("--delimiter", default=None)
    parser.add_argument("--skiprows", type=int, default=0)
    parser.add_argument("--window", type=float, nargs=2, default=None, metavar=("LO", "HI"))
    parser.add_argument("--baseline", type=float, default=0.0)
    parser.add_argument("--xlabel", default="velocity [km/s]")
    parser.add_argument("--ylabel", default="flux density [mJy]")
    parser.add_argument("--output", default=None, help="PNG path (default: <spectrum>.png)")
    args = parser.parse_args(argv)

    data = np.loadtxt(args.spectrum, delimiter=args.delimiter, skiprows=args.skiprows, ndmin=2)
    if data.shape[1] < 2:
        raise ValueError(f"{args.spectrum}: expected at least two columns")
    logger.info("%s: %d channels", args.spectrum, data.shape[0])

    fig, ax = plt.subplots(1, 1, figsize=(7, 4))
    fillspec(ax, data[:, 0], data[:, 1], baseline=args.baseline, window=args.window)
    ax.set_xlabel(args.xlabel)
    ax.set_ylabel(args.ylabel)
    ax.grid(True, alpha=0.25)
    fig.tight_layout()

    out_path = args.output or os.path.splitext(args.spectrum)[0] + ".png"
    fig.savefig(out_path, dpi=160)
    plt.close(fig)
    logger.info("Wrote: %s", out_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
