import matplotlib.pyplot as plt
import numpy as np

from astroprof.features.base import RadialProfile
from astroprof.plotting.profile_plot import plot_radial_profile


def test_ylim_default_range_for_positive_profile():
    fig, ax = plt.subplots()
    profile = RadialProfile(radius=np.arange(4.0), integrated=np.array([0.2, 0.6, 0.9, 1.0]))

    plot_radial_profile(ax, profile)

    lo, hi = ax.get_ylim()
    assert lo == 0.0
    assert abs(hi - 1.05) < 1e-12
    plt.close(fig)


def test_ylim_follows_negative_and_overshooting_values():
    fig, ax = plt.subplots()
    profile = RadialProfile(radius=np.arange(4.0), integrated=np.array([-0.4, 0.3, 1.6, 1.0]))

    plot_radial_profile(ax, profile)

    lo, hi = ax.get_ylim()
    assert lo < -0.4
    assert hi > 1.6
    plt.close(fig)
