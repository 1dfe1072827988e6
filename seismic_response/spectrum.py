###############################
# Response Spectrum Module
# Written by: Hossein Karagah
# Date: 2026-10-19
# Description: This module builds elastic response spectra by running the Newmark-beta response analyzer
# over a range of natural periods.
###############################


import logging
from dataclasses import dataclass

import matplotlib.axes
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from seismic_response.response import AnalyzerParameters, ResponseAnalyzer, DEFAULT_BETA, DEFAULT_DAMPING_RATIO


logger = logging.getLogger(__name__)


@dataclass
class ResponseSpectrum:
    periods: np.ndarray
    sa: np.ndarray  # peak absolute acceleration
    sv: np.ndarray  # peak relative velocity
    sd: np.ndarray  # peak relative displacement
    damping_ratio: float

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            {'sa': self.sa, 'sv': self.sv, 'sd': self.sd},
            index=pd.Index(self.periods, name='period'),
        )

    def plot(self, ax: matplotlib.axes.Axes = None, **kwargs):
        """
        Plots the acceleration spectrum on the given axis.

        Args:
            ax (matplotlib.axes.Axes, optional): The axis to plot on. If None, a new figure and axis will be created.
        """
        if ax is None:
            fig, ax = plt.subplots()

        ax.plot(self.periods, self.sa, label=f"h = {self.damping_ratio:.0%}", **kwargs)
        ax.set_xlabel('Period (s)')
        ax.set_ylabel('Spectral acceleration')
        ax.grid(True, alpha=0.3)
        ax.legend()
        return ax


def response_spectrum(waveform, dt: float, periods, damping_ratio: float = DEFAULT_DAMPING_RATIO,
                      beta: float = DEFAULT_BETA) -> ResponseSpectrum:
    """Computes the elastic response spectrum of a ground acceleration waveform.

    Each period is analyzed from rest. A zero period stands for a rigid oscillator, whose absolute acceleration
    equals the ground acceleration.

    Args:
        waveform (array): Uniformly sampled ground acceleration.
        dt (float): s, sampling interval.
        periods (array): s, natural periods, all non-negative.
        damping_ratio (float, optional): Fraction of critical damping. Defaults to 0.05.
        beta (float, optional): Newmark beta. Defaults to 0.25.

    Raises:
        ValueError: If a period is negative.

    Returns:
        ResponseSpectrum: peak responses for each period.
    """
    xg = np.asarray(waveform, dtype=float)
    periods = np.atleast_1d(np.asarray(periods, dtype=float))
    if np.any(periods < 0):
        raise ValueError("Natural periods must not be negative.")

    sa = np.zeros(len(periods))
    sv = np.zeros(len(periods))
    sd = np.zeros(len(periods))
    if len(xg) == 0:
        return ResponseSpectrum(periods, sa, sv, sd, damping_ratio)

    pga = float(np.max(np.abs(xg)))
    for i, period in enumerate(periods):
        if period == 0:
            sa[i] = pga
            continue
        analyzer = ResponseAnalyzer(AnalyzerParameters(natural_period=period, dt=dt, damping_ratio=damping_ratio, beta=beta))
        peaks = analyzer.analyze_history(xg).peaks()
        sa[i] = peaks['absolute_acceleration']
        sv[i] = peaks['velocity']
        sd[i] = peaks['displacement']

    logger.debug("Computed response spectrum for %d periods.", len(periods))
    return ResponseSpectrum(periods, sa, sv, sd, damping_ratio)
