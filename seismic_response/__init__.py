"""Time-history response of a single-degree-of-freedom oscillator to ground acceleration (Newmark-beta)."""

from seismic_response.response import (
    AnalyzerParameters,
    ResponseAnalyzer,
    ResponseHistory,
    ResponseState,
    calc_response_acc,
)
from seismic_response.spectrum import ResponseSpectrum, response_spectrum

__version__ = "0.1.0"

__all__ = [
    "AnalyzerParameters",
    "ResponseAnalyzer",
    "ResponseHistory",
    "ResponseState",
    "calc_response_acc",
    "ResponseSpectrum",
    "response_spectrum",
]
