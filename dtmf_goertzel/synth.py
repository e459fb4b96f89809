"""Composite sine tone generation for DTMF keys and arbitrary frequency sets."""

import math
from typing import Iterable, Sequence

import numpy as np

from dtmf_goertzel import keypad
from dtmf_goertzel.errors import InvalidConfiguration

# Full scale for signed 16-bit PCM
PCM16_SCALE = 32767.0


def synthesize(
    sample_rate: float, duration_ms: int, frequencies: Sequence[float]
) -> np.ndarray:
    """Build an equal-weight mix of sine tones.

    Args:
        sample_rate: Sample rate in Hz.
        duration_ms: Tone length in milliseconds.
        frequencies: Tone frequencies in Hz. May be empty.

    Returns:
        float64 array of ``floor(duration_ms / 1000 * sample_rate)`` samples.
        Each sample is the mean of the individual sines, so values stay
        nominally within [-1, 1]; nothing is clamped. With no frequencies the
        result is all zeros.
    """
    if sample_rate <= 0:
        raise InvalidConfiguration(f"Sample rate must be positive, got {sample_rate}")
    if duration_ms < 0:
        raise InvalidConfiguration(f"Duration must not be negative, got {duration_ms}")

    n_samples = int(math.floor(duration_ms / 1000.0 * sample_rate))
    freqs = np.asarray(frequencies, dtype=np.float64)
    if freqs.size == 0:
        return np.zeros(n_samples, dtype=np.float64)

    n = np.arange(n_samples, dtype=np.float64)
    tones = np.sin(2.0 * np.pi * np.outer(freqs, n) / sample_rate)
    return tones.sum(axis=0) / freqs.size


def to_pcm16(samples: np.ndarray) -> np.ndarray:
    """Quantize [-1, 1] samples to int16, rounding half up."""
    scaled = np.floor(np.asarray(samples, dtype=np.float64) * PCM16_SCALE + 0.5)
    return scaled.astype(np.int16)


def synthesize_key_tone(sample_rate: float, key: str, duration_ms: int) -> np.ndarray:
    """Return the 16-bit PCM tone a telephone emits for ``key``."""
    entry = keypad.lookup(key)
    return to_pcm16(synthesize(sample_rate, duration_ms, entry.frequencies))


def synthesize_sequence(
    sample_rate: float, keys: Iterable[str], tone_ms: int, gap_ms: int = 0
) -> np.ndarray:
    """Concatenate the tones of several keys, each followed by ``gap_ms`` of silence."""
    gap = synthesize(sample_rate, gap_ms, [])
    parts = []
    for key in keys:
        entry = keypad.lookup(key)
        parts.append(synthesize(sample_rate, tone_ms, entry.frequencies))
        parts.append(gap)
    if not parts:
        return np.zeros(0, dtype=np.float64)
    return np.concatenate(parts)
