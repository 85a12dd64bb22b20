#!/usr/bin/env python3

import argparse
import logging
import os
from typing import List, Optional, Sequence

from astroprof.export.excel_exporter import export_profiles_to_excel
from astroprof.features.radial_power import RadialPowerConfig, compute_radial_profile, find_peak
from astroprof.io.fits_loader import load_fits_image
from astroprof.utils.common import sanitize_nans, setup_logging


def main(argv: Optional[Sequence[str]] = None) -> int:
    setup_logging()
    logger = logging.getLogger(__name__)

    parser = argparse.ArgumentParser(description="Radial power profiles of FITS images to an Excel workbook.")
    parser.add_argument("images", nargs="+", help="FITS image files")
    parser.add_argument("--hdu", type=int, default=None, help="HDU index to read (default: first 2D plane)")
    parser.add_argument("--aperture-fraction", type=float, default=0.7)
    parser.add_argument("--output", default="radial_profiles.xlsx")
    parser.add_argument("--no-progress", action="store_true")
    args = parser.parse_args(argv)

    logger.info("Starting Excel export")
    logger.info("n_images=%d aperture_fraction=%s output=%s", len(args.images), args.aperture_fraction, args.output)

    config = RadialPowerConfig(aperture_fraction=float(args.aperture_fraction))

    names: List[str] = []
    profiles = []
    peaks = []
    for path in args.images:
        fits_image = load_fits_image(path, hdu=args.hdu)
        logger.info("%s: HDU %d shape=%s", path, fits_image.hdu_index, fits_image.data.shape)
        profiles.append(compute_radial_profile(fits_image.data, config))
        peaks.append(find_peak(sanitize_nans(fits_image.data)))
        names.append(os.path.splitext(os.path.basename(path))[0])

    export_profiles_to_excel(
        names=names,
        profiles=profiles,
        peaks=peaks,
        output_path=args.output,
        progress=not args.no_progress,
    )

    logger.info("Wrote: %s", args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
