"""Tests for the elastic response spectrum."""

import math

import matplotlib.pyplot as plt
import numpy as np
import pytest

from seismic_response.response import AnalyzerParameters, ResponseAnalyzer
from seismic_response.spectrum import ResponseSpectrum, response_spectrum


def _record(n=1000, seed=7):
    rng = np.random.default_rng(seed)
    t = np.arange(n) * 0.01
    return 200.0 * np.exp(-((t - 3.0) / 2.0) ** 2) * rng.standard_normal(n)


class TestResponseSpectrum:
    def test_zero_period_is_peak_ground_acceleration(self):
        acc = _record()
        spec = response_spectrum(acc, 0.01, [0.0, 0.5])
        assert spec.sa[0] == pytest.approx(np.max(np.abs(acc)))
        assert spec.sv[0] == 0.0
        assert spec.sd[0] == 0.0

    def test_matches_single_analysis(self):
        acc = _record()
        spec = response_spectrum(acc, 0.01, [0.3, 1.0], damping_ratio=0.02)
        analyzer = ResponseAnalyzer(AnalyzerParameters(natural_period=1.0, dt=0.01, damping_ratio=0.02))
        history = analyzer.analyze_history(acc)
        assert spec.sa[1] == np.max(np.abs(history.absolute_acceleration))
        assert spec.sv[1] == np.max(np.abs(history.velocity))
        assert spec.sd[1] == np.max(np.abs(history.displacement))

    def test_undamped_pseudo_acceleration(self):
        # without damping the absolute acceleration is -omega^2 times the displacement
        periods = np.array([0.1, 0.5, 2.0])
        spec = response_spectrum(_record(), 0.01, periods, damping_ratio=0.0)
        np.testing.assert_allclose(spec.sa, (2 * math.pi / periods) ** 2 * spec.sd, rtol=1e-9)

    def test_scalar_period(self):
        spec = response_spectrum(_record(), 0.01, 0.5)
        assert spec.periods.shape == (1,)
        assert spec.sa[0] > 0

    def test_negative_period_rejected(self):
        with pytest.raises(ValueError, match="negative"):
            response_spectrum(_record(), 0.01, [-0.1, 0.5])

    def test_empty_waveform(self):
        spec = response_spectrum([], 0.01, [0.0, 0.5, 1.0])
        assert np.all(spec.sa == 0.0)
        assert np.all(spec.sd == 0.0)

    def test_to_dataframe(self):
        spec = response_spectrum(_record(), 0.01, [0.0, 0.2, 0.4])
        df = spec.to_dataframe()
        assert df.index.name == 'period'
        assert list(df.columns) == ['sa', 'sv', 'sd']
        assert len(df) == 3

    def test_plot(self):
        spec = ResponseSpectrum(
            periods=np.array([0.0, 1.0]),
            sa=np.array([1.0, 2.0]),
            sv=np.zeros(2),
            sd=np.zeros(2),
            damping_ratio=0.05,
        )
        ax = spec.plot()
        assert len(ax.get_lines()) == 1
        assert ax.get_legend().get_texts()[0].get_text() == "h = 5%"
        plt.close('all')
