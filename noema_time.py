#!/usr/bin/env python3

import argparse
import logging
from typing import Optional, Sequence

from astroprof.sensitivity.noema_time import SEASONS, NoemaConfig, estimate_rms, estimate_time
from astroprof.utils.common import setup_logging


def main(argv: Optional[Sequence[str]] = None) -> int:
    setup_logging()
    logger = logging.getLogger(__name__)

    parser = argparse.ArgumentParser(description="NOEMA observing-time estimate.")
    parser.add_argument("--freq", type=float, required=True, help="sky frequency [GHz]")
    width = parser.add_mutually_exclusive_group(required=True)
    width.add_argument("--bandwidth", type=float, help="channel / continuum bandwidth [MHz]")
    width.add_argument("--velocity", type=float, help="velocity resolution [km/s]")
    goal = parser.add_mutually_exclusive_group(required=True)
    goal.add_argument("--rms", type=float, help="target rms per channel [mJy]")
    goal.add_argument("--hours", type=float, help="on-source time [h]; report the rms reached")
    parser.add_argument("--season", choices=list(SEASONS), default="winter")
    parser.add_argument("--antennas", type=int, default=12)
    parser.add_argument("--npol", type=int, choices=[1, 2], default=2)
    parser.add_argument("--overhead", type=float, default=1.6, help="total / on-source time ratio")
    args = parser.parse_args(argv)

    config = NoemaConfig(n_antennas=args.antennas, n_pol=args.npol, overhead_factor=args.overhead)

    if args.rms is not None:
        est = estimate_time(
            args.freq,
            args.rms,
            bandwidth_mhz=args.bandwidth,
            velocity_kms=args.velocity,
            season=args.season,
            config=config,
        )
        logger.info("band=%s Tsys=%.0f K channel=%.4g MHz", est.band, est.tsys_k, est.channel_width_hz / 1e6)
        logger.info("rms=%.3g mJy -> on-source %.2f h, total %.2f h", est.rms_mjy, est.on_source_hours, est.total_hours)
    else:
        rms = estimate_rms(
            args.freq,
            args.hours,
            bandwidth_mhz=args.bandwidth,
            velocity_kms=args.velocity,
            season=args.season,
            config=config,
        )
        logger.info("on-source %.2f h -> rms=%.3g mJy", args.hours, rms)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
