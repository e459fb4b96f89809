"""Goertzel single-bin power estimation.

Goertzel, G. (1958). An Algorithm for the Evaluation of Finite Trigonometric
Series. The American Mathematical Monthly, 65(1), 34-35.

This is the simplified real-valued form: the final term uses the real decay
``exp(-2*pi*f/sr)`` instead of the complex rotation ``exp(-j*2*pi*f/sr)``.
Power levels are therefore not the textbook DFT bin magnitude, and detection
thresholds are tuned against this variant.
"""

from typing import Sequence

import numpy as np
from scipy import signal

from dtmf_goertzel.errors import InvalidConfiguration


def power(samples, frequencies: Sequence[float], sample_rate: float) -> np.ndarray:
    """Compute the power in dB at each of ``frequencies``.

    Args:
        samples: Real samples in [-1, 1]. Any length, including zero.
        frequencies: Frequencies of interest in Hz.
        sample_rate: Sample rate of ``samples`` in Hz.

    Returns:
        float64 array with one dB value per frequency, in input order. A
        silent or empty window gives ``-inf``.
    """
    if sample_rate <= 0:
        raise InvalidConfiguration(f"Sample rate must be positive, got {sample_rate}")
    if len(frequencies) == 0:
        raise InvalidConfiguration("At least one frequency is required")

    x = np.asarray(samples, dtype=np.float64)
    powers = np.empty(len(frequencies), dtype=np.float64)
    for i, freq in enumerate(frequencies):
        omega = 2.0 * np.pi * freq / sample_rate
        coeff = 2.0 * np.cos(omega)
        wnk = np.exp(-omega)
        current, previous = _final_state(x, coeff)
        with np.errstate(divide="ignore"):
            powers[i] = 20.0 * np.log10(np.abs(current - wnk * previous))
    return powers


def _final_state(x: np.ndarray, coeff: float) -> tuple[float, float]:
    """Run s[n] = x[n] + coeff*s[n-1] - s[n-2] and return (s[N-1], s[N-2])."""
    if x.size == 0:
        return 0.0, 0.0
    s = signal.lfilter([1.0], [1.0, -coeff, 1.0], x)
    if s.size == 1:
        return float(s[-1]), 0.0
    return float(s[-1]), float(s[-2])
