#!/usr/bin/env python3

import argparse
import logging
import os
from typing import Optional, Sequence

import numpy as np

from astroprof.errors import AstroProfError
from astroprof.export.csv_writer import write_profile_csv
from astroprof.features.radial_power import RadialPowerConfig, compute_radial_profile
from astroprof.io.fits_loader import load_fits_image
from astroprof.plotting.profile_plot import save_profile_figure
from astroprof.utils.common import setup_logging


def main(argv: Optional[Sequence[str]] = None) -> int:
    setup_logging()
    logger = logging.getLogger(__name__)

    parser = argparse.ArgumentParser(description="Plot radial power profiles of FITS images.")
    parser.add_argument("images", nargs="+", help="FITS image files")
    parser.add_argument("--hdu", type=int, default=None)
    parser.add_argument("--aperture-fraction", type=float, default=0.7)
    parser.add_argument("--output-dir", default="profile_viz")
    parser.add_argument("--keep-going", action="store_true", help="skip images that cannot be profiled")
    args = parser.parse_args(argv)

    logger.info("Starting visualization")
    logger.info("n_images=%d output_dir=%s", len(args.images), args.output_dir)

    config = RadialPowerConfig(aperture_fraction=float(args.aperture_fraction))
    os.makedirs(args.output_dir, exist_ok=True)

    n_failed = 0
    for path in args.images:
        stem = os.path.splitext(os.path.basename(path))[0]
        sample_dir = os.path.join(args.output_dir, stem)

        try:
            fits_image = load_fits_image(path, hdu=args.hdu)
            profile = compute_radial_profile(fits_image.data, config)
        except AstroProfError as e:
            if not args.keep_going:
                raise
            logger.warning("%s: skipped (%s)", path, e)
            n_failed += 1
            continue

        os.makedirs(sample_dir, exist_ok=True)
        save_profile_figure(
            profile,
            os.path.join(sample_dir, "profile.png"),
            image=fits_image.data,
            title=stem,
        )
        write_profile_csv(os.path.join(sample_dir, "profile.csv"), profile)
        np.save(os.path.join(sample_dir, "image.npy"), fits_image.data.astype(np.float32, copy=False))
        logger.info("%s: %d radii, max radius %.0f pix", stem, len(profile.radius), profile.radius[-1])

    logger.info("Saved profile visualizations to: %s", args.output_dir)
    logger.info("Each image folder contains:")
    logger.info("- profile.png (image with peak + integrated power)")
    logger.info("- profile.csv (radius, integrated)")
    logger.info("- image.npy (image as read)")

    return 1 if n_failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
