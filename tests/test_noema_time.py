import math

import pytest

from astroprof.errors import InvalidInputError
from astroprof.sensitivity.noema_time import (
    C_KMS,
    NOEMA_BANDS,
    NoemaConfig,
    channel_width_hz,
    estimate_rms,
    estimate_time,
    find_band,
)


def test_band_lookup():
    assert find_band(100.0).name == "3mm"
    assert find_band(150.0).name == "2mm"
    assert find_band(230.538).name == "1mm"
    with pytest.raises(InvalidInputError):
        find_band(122.0)
    with pytest.raises(InvalidInputError):
        find_band(345.0)


def test_channel_width_from_velocity():
    assert channel_width_hz(100.0, C_KMS * 1e-5) == pytest.approx(1e6)
    with pytest.raises(InvalidInputError):
        channel_width_hz(100.0, 0.0)


def test_time_follows_radiometer_equation():
    est = estimate_time(100.0, 1.0, bandwidth_mhz=1.0)
    band = NOEMA_BANDS[0]

    t_on = (band.jy_per_k * band.tsys_winter_k / (band.eta * 1e-3)) ** 2 / (12 * 11 * 2 * 1e6)
    assert est.band == "3mm"
    assert est.on_source_hours == pytest.approx(t_on / 3600.0)
    assert est.total_hours == pytest.approx(1.6 * est.on_source_hours)


def test_time_scales_inverse_square_with_rms():
    deep = estimate_time(230.0, 0.5, velocity_kms=1.0)
    shallow = estimate_time(230.0, 1.0, velocity_kms=1.0)
    assert deep.on_source_hours == pytest.approx(4.0 * shallow.on_source_hours)


def test_summer_needs_more_time():
    winter = estimate_time(150.0, 1.0, bandwidth_mhz=10.0, season="winter")
    summer = estimate_time(150.0, 1.0, bandwidth_mhz=10.0, season="summer")
    assert summer.on_source_hours > winter.on_source_hours


def test_rms_inverts_time():
    est = estimate_time(110.0, 0.3, velocity_kms=0.5)
    rms = estimate_rms(110.0, est.on_source_hours, velocity_kms=0.5)
    assert rms == pytest.approx(0.3)


def test_fewer_antennas_need_more_time():
    full = estimate_time(100.0, 1.0, bandwidth_mhz=1.0)
    small = estimate_time(100.0, 1.0, bandwidth_mhz=1.0, config=NoemaConfig(n_antennas=9))
    assert small.on_source_hours == pytest.approx(full.on_source_hours * (12 * 11) / (9 * 8))


def test_invalid_requests():
    with pytest.raises(InvalidInputError):
        estimate_time(100.0, 1.0)
    with pytest.raises(InvalidInputError):
        estimate_time(100.0, 1.0, bandwidth_mhz=1.0, velocity_kms=1.0)
    with pytest.raises(InvalidInputError):
        estimate_time(100.0, 0.0, bandwidth_mhz=1.0)
    with pytest.raises(InvalidInputError):
        estimate_time(100.0, 1.0, bandwidth_mhz=-5.0)
    with pytest.raises(InvalidInputError):
        estimate_time(100.0, 1.0, bandwidth_mhz=1.0, season="spring")
    with pytest.raises(InvalidInputError):
        estimate_rms(100.0, 0.0, bandwidth_mhz=1.0)
    with pytest.raises(InvalidInputError):
        NoemaConfig(n_antennas=1)


def test_estimate_rms_value():
    rms = estimate_rms(100.0, 1.0, bandwidth_mhz=1.0)
    band = NOEMA_BANDS[0]
    expected = band.jy_per_k * band.tsys_winter_k / (band.eta * math.sqrt(12 * 11 * 2 * 1e6 * 3600.0)) * 1e3
    assert rms == pytest.approx(expected)
