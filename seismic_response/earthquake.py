###############################
# Ground Motion Processing Module
# Written by: Hossein Karagah
# Date: 2026-10-19
# Description: This module provides functions to condition and characterize a ground acceleration waveform
# before it is fed to the response analyzer.
###############################


import numpy as np
from scipy.integrate import cumulative_trapezoid
from scipy.signal import butter, filtfilt


def get_time_axis(n: int, dt: float) -> np.ndarray:
    """Return n sample times starting at zero with a spacing of dt."""
    if dt <= 0:
        raise ValueError(f"dt must be positive, got {dt}.")
    return np.arange(n) * dt


def integrate_acceleration(acc, dt):
    """
    Integrate acceleration time history to get ground velocity and displacement

    Parameters:
    acc (array): Acceleration time history
    dt (float): Time step

    Returns:
    vel (array): Velocity at each time step, zero at time zero
    disp (array): Displacement at each time step, zero at time zero
    """
    acc = np.asarray(acc, dtype=float)
    if len(acc) == 0:
        return np.zeros(0), np.zeros(0)

    vel = cumulative_trapezoid(acc, dx=dt, initial=0)
    disp = cumulative_trapezoid(vel, dx=dt, initial=0)
    return vel, disp


def get_peak_ground_values(acc, dt):
    """
    Peak ground acceleration, velocity and displacement of a waveform.

    Args:
        acc (array): Acceleration time history
        dt (float): Time step

    Returns:
        tuple: (pga, pgv, pgd)
    """
    acc = np.asarray(acc, dtype=float)
    if len(acc) == 0:
        return 0.0, 0.0, 0.0
    vel, disp = integrate_acceleration(acc, dt)
    return float(np.max(np.abs(acc))), float(np.max(np.abs(vel))), float(np.max(np.abs(disp)))


def apply_baseline_correction(acc, dt, method='polyfit'):
    """
    Remove a baseline trend from an acceleration record. The input is not modified.

    Args:
        acc (array): Acceleration time history
        dt (float): Time step
        method (str): 'polyfit' subtracts a fitted quadratic, 'mean' subtracts the mean value

    Returns:
        np.ndarray: corrected acceleration
    """
    acc = np.array(acc, dtype=float)
    if method == 'polyfit':
        # Fit a polynomial to the acceleration data
        t_orig = get_time_axis(len(acc), dt)
        coeffs = np.polyfit(t_orig, acc, deg=2)
        acc -= np.polyval(coeffs, t_orig)
    elif method == 'mean':
        # Subtract the mean value
        acc -= np.mean(acc)
    else:
        raise ValueError(f"Invalid baseline correction method '{method}'. Choose 'polyfit' or 'mean'.")
    return acc


def apply_highpass_filter(data, fs, cutoff=0.05, order=4):
    """Zero-phase Butterworth high-pass filter.

    Args:
        data (array): Signal to filter
        fs (float): Hz, sampling frequency
        cutoff (float): Hz, corner frequency
        order (int): Filter order

    Returns:
        np.ndarray: filtered signal
    """
    nyquist = fs / 2
    if not 0 < cutoff < nyquist:
        raise ValueError(f"Cutoff frequency must be between 0 and the Nyquist frequency ({nyquist} Hz), got {cutoff}.")
    b, a = butter(order, cutoff / nyquist, btype='high', analog=False)
    return filtfilt(b, a, np.asarray(data, dtype=float))
