###############################
# SDOF Seismic Response Module
# Written by: Hossein Karagah
# Date: 2026-10-19
# Description: This module computes the time-history response of a single-degree-of-freedom oscillator
# subjected to ground acceleration using the implicit Newmark-beta method.
###############################


import logging
import math
from copy import copy
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Union

import matplotlib.axes
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd


logger = logging.getLogger(__name__)


# Constants ####################################################

DEFAULT_NATURAL_PERIOD = 0.5  # s
DEFAULT_DT = 0.01  # s
DEFAULT_DAMPING_RATIO = 0.05
DEFAULT_BETA = 0.25  # average acceleration
DEFAULT_MASS = 1.0  # kg, cancels out of the absolute acceleration


# Helper Functions #############################################

def _check_number(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        raise TypeError(f"{name} must be a real number, got {type(value).__name__}.")
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}.")
    return value


def _check_positive(name: str, value) -> float:
    value = _check_number(name, value)
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}.")
    return value


def get_stiffness(mass: float, natural_period: float) -> float:
    """Returns the spring stiffness giving the requested undamped natural period.

    Args:
        mass (float): kg, oscillator mass.
        natural_period (float): s, undamped natural period.

    Returns:
        float: stiffness, k = 4 pi^2 m / T^2.
    """
    return 4 * math.pi ** 2 * mass / natural_period ** 2


def get_damping_coefficient(mass: float, stiffness: float, damping_ratio: float) -> float:
    """Returns the viscous damping coefficient, c = 2 zeta sqrt(m k)."""
    return 2 * damping_ratio * math.sqrt(mass * stiffness)


# Main Classes #################################################

@dataclass(frozen=True)
class AnalyzerParameters:
    """Physical parameters of the oscillator and its state at time zero.

    Durations are in seconds. Accelerations are in any consistent unit (gal is customary).
    """
    natural_period: float = DEFAULT_NATURAL_PERIOD
    dt: float = DEFAULT_DT
    mass: float = DEFAULT_MASS
    damping_ratio: float = DEFAULT_DAMPING_RATIO
    beta: float = DEFAULT_BETA
    init_displacement: float = 0.0
    init_velocity: float = 0.0
    init_acceleration: float = 0.0
    init_ground_acceleration: float = 0.0

    @classmethod
    def from_milliseconds(cls, natural_period_ms: int, dt_ms: int, **kwargs) -> 'AnalyzerParameters':
        """Build parameters from durations given in milliseconds.

        Args:
            natural_period_ms (int): ms, undamped natural period.
            dt_ms (int): ms, sampling interval of the waveform.
            **kwargs: any other AnalyzerParameters field.

        Returns:
            AnalyzerParameters: parameters with durations converted to seconds.
        """
        return cls(natural_period=natural_period_ms / 1000, dt=dt_ms / 1000, **kwargs)


@dataclass(frozen=True)
class ResponseState:
    displacement: float
    velocity: float
    relative_acceleration: float

    def __iter__(self):
        return iter((self.displacement, self.velocity, self.relative_acceleration))


@dataclass
class ResponseHistory:
    """Full response of the oscillator, one entry per time step including time zero.

    Entry i of each array refers to time i * dt. Entry 0 is the initial condition.
    """
    dt: float
    displacement: np.ndarray
    velocity: np.ndarray
    relative_acceleration: np.ndarray
    absolute_acceleration: np.ndarray
    ground_acceleration: np.ndarray = field(repr=False)

    def __len__(self) -> int:
        return len(self.displacement)

    @property
    def time(self) -> np.ndarray:
        return np.arange(len(self)) * self.dt

    @property
    def states(self) -> List[ResponseState]:
        return [
            ResponseState(float(x), float(v), float(a))
            for x, v, a in zip(self.displacement, self.velocity, self.relative_acceleration)
        ]

    def peaks(self) -> dict:
        """Returns the peak absolute value of each response quantity.

        Returns:
            dict: keys 'displacement', 'velocity', 'relative_acceleration' and 'absolute_acceleration'.
        """
        return {
            'displacement': float(np.max(np.abs(self.displacement))),
            'velocity': float(np.max(np.abs(self.velocity))),
            'relative_acceleration': float(np.max(np.abs(self.relative_acceleration))),
            'absolute_acceleration': float(np.max(np.abs(self.absolute_acceleration))),
        }

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                'ground_acceleration': self.ground_acceleration,
                'displacement': self.displacement,
                'velocity': self.velocity,
                'relative_acceleration': self.relative_acceleration,
                'absolute_acceleration': self.absolute_acceleration,
            },
            index=pd.Index(self.time, name='time'),
        )

    def plot(self, ax: matplotlib.axes.Axes = None, quantity: str = 'absolute_acceleration', **kwargs):
        """
        Plots one response quantity against time, with the ground acceleration for acceleration quantities.

        Args:
            ax (matplotlib.axes.Axes, optional): The axis to plot on. If None, a new figure and axis will be created.
            quantity (str, optional): Name of the response array to plot. Defaults to 'absolute_acceleration'.
            **kwargs: Passed to ax.plot for the response curve.

        Returns:
            matplotlib.axes.Axes: The axis holding the plot.
        """
        valid = ('displacement', 'velocity', 'relative_acceleration', 'absolute_acceleration')
        if quantity not in valid:
            raise ValueError(f"Invalid quantity '{quantity}'. Choose one of {valid}.")

        if ax is None:
            fig, ax = plt.subplots()

        if quantity.endswith('acceleration'):
            ax.plot(self.time, self.ground_acceleration, 'b-', label='Ground Motion', linewidth=1.0, alpha=0.5)
        ax.plot(self.time, getattr(self, quantity), 'r-', label=quantity.replace('_', ' ').title(), **kwargs)
        ax.set_xlabel('Time (s)')
        ax.set_ylabel(quantity.replace('_', ' ').capitalize())
        ax.grid(True, alpha=0.3)
        ax.legend()
        return ax


class ResponseAnalyzer:
    def __init__(self, params: Optional[AnalyzerParameters] = None) -> None:
        """Newmark-beta response analyzer of a linear SDOF oscillator under ground acceleration.

        Stiffness and damping coefficient are derived from the mass, natural period and damping ratio
        and are never set on their own.

        Args:
            params (AnalyzerParameters, optional): Oscillator parameters. Defaults to the reference scenario
                (T = 0.5 s, dt = 0.01 s, zeta = 0.05, beta = 0.25, at rest).

        Raises:
            ValueError: If a duration or the mass is not positive, the damping ratio is negative,
                or any parameter is not finite.
        """
        params = AnalyzerParameters() if params is None else params

        self._dt = _check_positive("dt", params.dt)
        self._beta = _check_number("beta", params.beta)
        self._init_x = _check_number("init_displacement", params.init_displacement)
        self._init_v = _check_number("init_velocity", params.init_velocity)
        self._init_a = _check_number("init_acceleration", params.init_acceleration)
        self._init_xg = _check_number("init_ground_acceleration", params.init_ground_acceleration)
        self._set_dynamic_properties(params.mass, params.natural_period, params.damping_ratio)

    @classmethod
    def from_parameters(cls, params: AnalyzerParameters) -> 'ResponseAnalyzer':
        return cls(params)

    def _set_dynamic_properties(self, mass: float, natural_period: float, damping_ratio: float) -> None:
        mass = _check_positive("mass", mass)
        natural_period = _check_positive("natural_period", natural_period)
        damping_ratio = _check_number("damping_ratio", damping_ratio)
        if damping_ratio < 0:
            raise ValueError(f"damping_ratio must not be negative, got {damping_ratio}.")

        self._mass = mass
        self._stiffness = get_stiffness(mass, natural_period)
        self._damping_coefficient = get_damping_coefficient(mass, self._stiffness, damping_ratio)

        dt = self._dt
        self._effective_mass = mass + dt * self._damping_coefficient / 2 + self._beta * dt ** 2 * self._stiffness
        # A zero effective mass gives inf here and non-finite output downstream.
        with np.errstate(divide='ignore'):
            self._inv_effective_mass = float(np.divide(1.0, np.float64(self._effective_mass)))
        if self._effective_mass == 0:
            logger.warning("Effective mass is zero (beta=%s); the response will not be finite.", self._beta)

        logger.debug(
            "ResponseAnalyzer: m=%g, k=%g, c=%g, effective mass=%g",
            self._mass, self._stiffness, self._damping_coefficient, self._effective_mass,
        )

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def mass(self) -> float:
        return self._mass

    @property
    def stiffness(self) -> float:
        return self._stiffness

    @property
    def damping_coefficient(self) -> float:
        return self._damping_coefficient

    @property
    def beta(self) -> float:
        return self._beta

    @property
    def effective_mass(self) -> float:
        "Returns the denominator of the acceleration update, m + dt c / 2 + beta dt^2 k."
        return self._effective_mass

    @property
    def natural_period(self) -> float:
        return 2 * math.pi * math.sqrt(self._mass / self._stiffness)

    @property
    def damping_ratio(self) -> float:
        return self._damping_coefficient / (2 * math.sqrt(self._mass * self._stiffness))

    @property
    def initial_state(self) -> ResponseState:
        return ResponseState(self._init_x, self._init_v, self._init_a)

    @property
    def init_ground_acceleration(self) -> float:
        return self._init_xg

    def with_mass(self, mass: float, natural_period: float, damping_ratio: float) -> 'ResponseAnalyzer':
        """Returns a copy of the analyzer with stiffness and damping recomputed for a new mass.

        Beta, dt and the initial conditions are kept. The absolute acceleration does not depend on the mass,
        so this is meant for checking that invariance rather than for changing the dynamics.

        Args:
            mass (float): kg, new oscillator mass.
            natural_period (float): s, undamped natural period.
            damping_ratio (float): fraction of critical damping.

        Returns:
            ResponseAnalyzer: a new analyzer; this one is left untouched.
        """
        new = copy(self)
        new._set_dynamic_properties(mass, natural_period, damping_ratio)
        return new

    def step(self, state: ResponseState, ground_acceleration: float) -> ResponseState:
        """Advances the state by one time step.

        Args:
            state (ResponseState): displacement, velocity and relative acceleration at the current step.
            ground_acceleration (float): ground acceleration at the next step.

        Returns:
            ResponseState: state at the next step.
        """
        x, v, a = state
        dt, beta = self._dt, self._beta
        m, c, k = self._mass, self._damping_coefficient, self._stiffness

        p_1 = -(ground_acceleration * m)
        a_1 = (p_1 - c * (v + dt / 2 * a) - k * (x + dt * v + (1 / 2 - beta) * dt ** 2 * a)) * self._inv_effective_mass
        v_1 = v + (a_1 + a) * dt / 2
        x_1 = x + v * dt + (1 / 2 - beta) * a * dt ** 2 + beta * a_1 * dt ** 2
        return ResponseState(x_1, v_1, a_1)

    def iter_states(self, waveform: Union[Sequence[float], np.ndarray]) -> Iterator[ResponseState]:
        """Yields the initial state, then one state per ground acceleration sample.

        The waveform is consumed lazily, so this also works on generators.
        """
        state = self.initial_state
        yield state
        for xg in waveform:
            state = self.step(state, float(xg))
            yield state

    def analyze_history(self, waveform: Union[Sequence[float], np.ndarray]) -> ResponseHistory:
        """Computes the full response to a ground acceleration waveform.

        The initial ground acceleration is prepended to the waveform so that entry 0 of every output array
        is the state at time zero. The absolute acceleration at step i pairs the relative acceleration of
        step i with the ground acceleration that produced it.

        State i is stepped from state i - 1 with the ground acceleration of step i, so the initial ground
        acceleration only enters the time-zero absolute acceleration and no step consumes it. Older versions
        of this analyzer stepped once per extended sample starting from the initial ground acceleration;
        both agree when every initial condition is zero.

        Args:
            waveform (Union[Sequence[float], np.ndarray]): Uniformly sampled ground acceleration, one value per dt.

        Raises:
            ValueError: If the waveform is not one-dimensional.

        Returns:
            ResponseHistory: n + 1 entries for a waveform of n samples.
        """
        xg = self._as_waveform(waveform)
        ground = np.concatenate(([self._init_xg], xg))

        states = np.empty((len(ground), 3))
        for i, state in enumerate(self.iter_states(xg)):
            states[i] = tuple(state)

        history = ResponseHistory(
            dt=self._dt,
            displacement=states[:, 0],
            velocity=states[:, 1],
            relative_acceleration=states[:, 2],
            absolute_acceleration=states[:, 2] + ground,
            ground_acceleration=ground,
        )

        logger.debug("Analyzed %d samples.", len(xg))
        if not np.all(np.isfinite(states)):
            logger.warning("Response contains non-finite values; check the parameters and the waveform.")
        return history

    def analyze(self, waveform: Union[Sequence[float], np.ndarray]) -> np.ndarray:
        """Computes the absolute acceleration response, one value per input sample.

        The time-zero value is not included; use analyze_history for the full state history.

        Args:
            waveform (Union[Sequence[float], np.ndarray]): Uniformly sampled ground acceleration, one value per dt.

        Returns:
            np.ndarray: absolute acceleration, same length as the waveform.
        """
        return self.analyze_history(waveform).absolute_acceleration[1:]

    @staticmethod
    def _as_waveform(waveform) -> np.ndarray:
        xg = np.asarray(waveform, dtype=float)
        if xg.ndim != 1:
            raise ValueError(f"Waveform must be a one-dimensional sequence, got an array of shape {xg.shape}.")
        return xg

    def __repr__(self):
        return (
            f"ResponseAnalyzer(T={self.natural_period:.3f} s, dt={self._dt} s, zeta={self.damping_ratio:.3f}, "
            f"beta={self._beta}, m={self._mass}, k={self._stiffness:.4e}, c={self._damping_coefficient:.4e})"
        )


def calc_response_acc(data: Union[Sequence[float], np.ndarray], params: Optional[AnalyzerParameters] = None) -> np.ndarray:
    """Return the absolute acceleration response of an oscillator built from params to the waveform data."""
    return ResponseAnalyzer.from_parameters(params if params is not None else AnalyzerParameters()).analyze(data)
