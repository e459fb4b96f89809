"""Fixed-size window scanning over long sample buffers."""

import logging
from typing import Any, Iterator

import numpy as np

from dtmf_goertzel import keypad
from dtmf_goertzel.detector import PowerReading, detect
from dtmf_goertzel.errors import InvalidConfiguration

logger = logging.getLogger(__name__)

DEFAULT_BIN_SIZE = 256
DEFAULT_POWER_THRESHOLD = 25.0


def _check_sample_rate(sample_rate: float):
    if sample_rate <= 0:
        raise InvalidConfiguration(f"Sample rate must be positive, got {sample_rate}")


def iter_windows(samples, bin_size: int) -> Iterator[tuple[int, np.ndarray]]:
    """Return an iterator of (start_index, window) over non-overlapping windows.

    The last window is shorter than ``bin_size`` when the buffer length is not
    a multiple of it. A non-positive ``bin_size`` is rejected here, before
    iteration starts.
    """
    if bin_size <= 0:
        raise InvalidConfiguration(f"Bin size must be positive, got {bin_size}")
    return _windows(np.asarray(samples), bin_size)


def _windows(x: np.ndarray, bin_size: int) -> Iterator[tuple[int, np.ndarray]]:
    for start in range(0, len(x), bin_size):
        yield start, x[start:start + bin_size]


def scan_for_key(
    samples,
    bin_size: int,
    sample_rate: float,
    power_threshold: float,
    expected_key: str,
) -> bool:
    """Return True if ``expected_key`` is the strongest key in any window.

    Only the top-ranked reading of each window counts. A weaker detection of
    ``expected_key`` ranked below another key in the same window is not a hit.
    """
    _check_sample_rate(sample_rate)
    keypad.lookup(expected_key)
    for start, window in iter_windows(samples, bin_size):
        readings = detect(window, sample_rate, power_threshold)
        if readings and readings[0].key == expected_key:
            logger.debug("found %r in window starting at sample %d", expected_key, start)
            return True
    return False


class KeyFilter:
    """Detector and scanner bound to a sample rate and power threshold."""

    def __init__(self, sample_rate: float, power_threshold: float):
        _check_sample_rate(sample_rate)
        self.sample_rate = sample_rate
        self.power_threshold = power_threshold

    def detect(self, samples) -> list[PowerReading]:
        return detect(samples, self.sample_rate, self.power_threshold)

    def scan_for_key(self, samples, bin_size: int, expected_key: str) -> bool:
        return scan_for_key(
            samples, bin_size, self.sample_rate, self.power_threshold, expected_key
        )

    def __repr__(self) -> str:
        return f"KeyFilter(sample_rate={self.sample_rate}, power_threshold={self.power_threshold})"


def analyze(
    data: np.ndarray,
    sr: int,
    bin_size: int = DEFAULT_BIN_SIZE,
    power_threshold: float = DEFAULT_POWER_THRESHOLD,
) -> dict[str, Any]:
    """Report the strongest DTMF key in every window of ``data``.

    Args:
        data: Mono audio array, samples in [-1, 1].
        sr: Sample rate in Hz.
        bin_size: Window length in samples.
        power_threshold: Minimum row and column power in dB.

    Returns:
        Result dict with detected, confidence, data (one entry per window
        holding a detection). Confidence is the share of windows with a key.
    """
    _check_sample_rate(sr)
    windows = []
    n_windows = 0
    for start, window in iter_windows(data, bin_size):
        n_windows += 1
        readings = detect(window, sr, power_threshold)
        if not readings:
            continue
        top = readings[0].as_dict()
        top["start_sec"] = round(start / sr, 4)
        top["matches"] = len(readings)
        windows.append(top)

    confidence = len(windows) / n_windows if n_windows else 0.0

    return {
        "detected": bool(windows),
        "confidence": confidence,
        "data": {
            "sample_rate_hz": sr,
            "bin_size": bin_size,
            "power_threshold_db": power_threshold,
            "windows_scanned": n_windows,
            "keys": sorted({w["key"] for w in windows}, key=keypad.KEYS.index),
            "windows": windows,
        },
    }


def format_result(result: dict[str, Any]) -> str:
    d = result["data"]
    if not result["detected"]:
        return f"No DTMF keys detected in {d['windows_scanned']} windows."

    lines = []
    lines.append(f"Keys:      {' '.join(d['keys'])}")
    lines.append(f"Windows:   {len(d['windows'])}/{d['windows_scanned']} "
                 f"({d['bin_size']} samples, threshold {d['power_threshold_db']:.1f} dB)")
    lines.append("")
    lines.append(f"  {'Key':>3}  {'Start (s)':>10}  {'Row Hz':>7}  {'Col Hz':>7}  "
                 f"{'Row dB':>7}  {'Col dB':>7}  {'Matches':>7}")
    lines.append(f"  {'-'*3}  {'-'*10}  {'-'*7}  {'-'*7}  {'-'*7}  {'-'*7}  {'-'*7}")
    for w in d["windows"]:
        lines.append(
            f"  {w['key']:>3}  {w['start_sec']:>10.3f}  {w['row_hz']:>7.0f}  {w['col_hz']:>7.0f}  "
            f"{w['row_power_db']:>7.2f}  {w['col_power_db']:>7.2f}  {w['matches']:>7}"
        )
    return "\n".join(lines)
