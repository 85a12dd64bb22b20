"""
Observing-time estimates for the NOEMA interferometer.

The point-source sensitivity follows the radiometer equation

    sigma = J_pK * T_sys / (eta * sqrt(N_a * (N_a - 1) * N_pol * dnu * t_on))

with sigma in Jy, dnu in Hz and t_on in seconds. Per-band conversion factors,
system temperatures and efficiencies are nominal values; pass your own
``bands`` to ``NoemaConfig`` to use different ones.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from astropy import constants as const

from astroprof.errors import InvalidInputError

logger = logging.getLogger(__name__)

C_KMS = const.c.to_value("km/s")
SEASONS = ("winter", "summer")


@dataclass(frozen=True)
class ReceiverBand:
    name: str
    freq_min_ghz: float
    freq_max_ghz: float
    jy_per_k: float
    tsys_winter_k: float
    tsys_summer_k: float
    eta: float

    def covers(self, freq_ghz: float) -> bool:
        return self.freq_min_ghz <= freq_ghz <= self.freq_max_ghz

    def tsys(self, season: str) -> float:
        if season == "winter":
            return self.tsys_winter_k
        if season == "summer":
            return self.tsys_summer_k
        raise InvalidInputError(f"unknown season {season!r}; expected one of {SEASONS}")


NOEMA_BANDS: Tuple[ReceiverBand, ...] = (
    ReceiverBand("3mm", 70.0, 119.0, jy_per_k=22.0, tsys_winter_k=100.0, tsys_summer_k=130.0, eta=0.9),
    ReceiverBand("2mm", 127.0, 179.0, jy_per_k=29.0, tsys_winter_k=150.0, tsys_summer_k=200.0, eta=0.85),
    ReceiverBand("1mm", 200.0, 276.0, jy_per_k=35.0, tsys_winter_k=180.0, tsys_summer_k=250.0, eta=0.8),
)


@dataclass(frozen=True)
class NoemaConfig:
    n_antennas: int = 12
    n_pol: int = 2
    # total telescope time per unit on-source time (calibration, slews)
    overhead_factor: float = 1.6
    bands: Tuple[ReceiverBand, ...] = NOEMA_BANDS

    def __post_init__(self) -> None:
        if self.n_antennas < 2:
            raise InvalidInputError("an interferometer needs at least two antennas")
        if self.n_pol not in (1, 2):
            raise InvalidInputError("n_pol must be 1 or 2")
        if self.overhead_factor < 1.0:
            raise InvalidInputError("overhead_factor must be >= 1")

    @property
    def n_baselines_term(self) -> int:
        return self.n_antennas * (self.n_antennas - 1)


@dataclass(frozen=True)
class TimeEstimate:
    band: str
    freq_ghz: float
    tsys_k: float
    channel_width_hz: float
    rms_mjy: float
    on_source_hours: float
    total_hours: float


def find_band(freq_ghz: float, bands: Tuple[ReceiverBand, ...] = NOEMA_BANDS) -> ReceiverBand:
    for band in bands:
        if band.covers(freq_ghz):
            return band
    ranges = ", ".join(f"{b.name}: {b.freq_min_ghz:g}-{b.freq_max_ghz:g} GHz" for b in bands)
    raise InvalidInputError(f"{freq_ghz:g} GHz is outside every receiver band ({ranges})")


def channel_width_hz(freq_ghz: float, velocity_kms: float) -> float:
    """Frequency width of a velocity channel, ``dnu = nu * dv / c``."""
    if velocity_kms <= 0:
        raise InvalidInputError("velocity resolution must be positive")
    return freq_ghz * 1e9 * velocity_kms / C_KMS


def _resolve_width(freq_ghz: float, bandwidth_mhz: Optional[float], velocity_kms: Optional[float]) -> float:
    if (bandwidth_mhz is None) == (velocity_kms is None):
        raise InvalidInputError("give exactly one of bandwidth_mhz or velocity_kms")
    if bandwidth_mhz is not None:
        if bandwidth_mhz <= 0:
            raise InvalidInputError("bandwidth must be positive")
        return bandwidth_mhz * 1e6
    return channel_width_hz(freq_ghz, velocity_kms)


def estimate_time(
    freq_ghz: float,
    rms_mjy: float,
    *,
    bandwidth_mhz: Optional[float] = None,
    velocity_kms: Optional[float] = None,
    season: str = "winter",
    config: NoemaConfig = NoemaConfig(),
) -> TimeEstimate:
    """
    On-source and total time needed to reach ``rms_mjy`` per channel.

    The channel is given either directly as ``bandwidth_mhz`` or as a
    velocity resolution ``velocity_kms`` at ``freq_ghz``.
    """
    if rms_mjy <= 0:
        raise InvalidInputError("target rms must be positive")

    band = find_band(freq_ghz, config.bands)
    tsys = band.tsys(season)
    dnu = _resolve_width(freq_ghz, bandwidth_mhz, velocity_kms)

    sigma_jy = rms_mjy * 1e-3
    t_on = (band.jy_per_k * tsys / (band.eta * sigma_jy)) ** 2 / (config.n_baselines_term * config.n_pol * dnu)
    on_hours = t_on / 3600.0

    logger.debug("band=%s tsys=%.0fK dnu=%.4gHz t_on=%.1fs", band.name, tsys, dnu, t_on)
    return TimeEstimate(
        band=band.name,
        freq_ghz=freq_ghz,
        tsys_k=tsys,
        channel_width_hz=dnu,
        rms_mjy=rms_mjy,
        on_source_hours=on_hours,
        total_hours=on_hours * config.overhead_factor,
    )


def estimate_rms(
    freq_ghz: float,
    on_source_hours: float,
    *,
    bandwidth_mhz: Optional[float] = None,
    velocity_kms: Optional[float] = None,
    season: str = "winter",
    config: NoemaConfig = NoemaConfig(),
) -> float:
    """Point-source rms in mJy reached after ``on_source_hours``."""
    if on_source_hours <= 0:
        raise InvalidInputError("on-source time must be positive")

    band = find_band(freq_ghz, config.bands)
    tsys = band.tsys(season)
    dnu = _resolve_width(freq_ghz, bandwidth_mhz, velocity_kms)

    t_on = on_source_hours * 3600.0
    sigma_jy = band.jy_per_k * tsys / (band.eta * math.sqrt(config.n_baselines_term * config.n_pol * dnu * t_on))
    return sigma_jy * 1e3
