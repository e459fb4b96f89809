"""DTMF key detection for a single window of samples.

Runs the Goertzel estimator over the four row and four column frequencies and
cross-matches them against the keypad. A key is reported only when both its
row and its column tone clear the power threshold, which rejects single-tone
noise and cross-talk.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable

import numpy as np

from dtmf_goertzel import goertzel, keypad
from dtmf_goertzel.keypad import KeypadEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PowerReading:
    """A detected key with the powers (dB) of its row and column tones."""

    entry: KeypadEntry
    row_power: float
    column_power: float

    @property
    def key(self) -> str:
        return self.entry.key

    @property
    def average_power(self) -> float:
        return (self.row_power + self.column_power) / 2.0

    @property
    def total_power(self) -> float:
        """Row plus column power; ranks in the same order as average_power."""
        return self.row_power + self.column_power

    def as_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "row_hz": self.entry.row_frequency,
            "col_hz": self.entry.column_frequency,
            "row_power_db": round(self.row_power, 2),
            "col_power_db": round(self.column_power, 2),
        }


def rank_readings(readings: Iterable[PowerReading]) -> list[PowerReading]:
    """Sort strongest first by row + column power.

    The sort is stable: readings with equal totals keep their incoming order.
    """
    return sorted(readings, key=lambda r: r.total_power, reverse=True)


def detect(samples, sample_rate: float, power_threshold: float) -> list[PowerReading]:
    """Detect DTMF keys in one window of samples.

    Args:
        samples: Real samples in [-1, 1]; float32 input is up-converted.
        sample_rate: Sample rate in Hz.
        power_threshold: Minimum power in dB that both the row and the column
            tone must exceed.

    Returns:
        Matching keys ranked strongest first. Empty when nothing matches.
    """
    x = np.asarray(samples, dtype=np.float64)
    row_powers = goertzel.power(x, keypad.row_frequencies(), sample_rate)
    col_powers = goertzel.power(x, keypad.column_frequencies(), sample_rate)

    matches = [
        PowerReading(entry, float(row_powers[entry.row]), float(col_powers[entry.column]))
        for entry in keypad.all_entries()
        if row_powers[entry.row] > power_threshold
        and col_powers[entry.column] > power_threshold
    ]
    if matches:
        logger.debug(
            "window of %d samples: %s",
            x.size,
            ", ".join(f"{m.key}({m.row_power:.1f}/{m.column_power:.1f} dB)" for m in matches),
        )
    return rank_readings(matches)
