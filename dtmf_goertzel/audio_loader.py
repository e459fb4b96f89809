"""Decode audio files to mono sample buffers and write 16-bit PCM tones."""

from typing import Optional

import numpy as np
import soundfile as sf


def load_audio(path: str, channel: Optional[int] = None) -> tuple[np.ndarray, int]:
    """Read a WAV, FLAC or OGG file as a single channel of samples.

    Multi-channel files are averaged down to one channel unless ``channel``
    picks one of them. An out-of-range ``channel`` raises IndexError.

    Returns:
        Tuple of (samples, sample_rate); samples are a 1-D float32 array
        normalized to [-1, 1], ready for the detector.
    """
    data, sr = sf.read(path, dtype="float32", always_2d=True)
    if channel is not None:
        return data[:, channel], sr
    return data.mean(axis=1, dtype=np.float32), sr


def write_pcm16(path: str, samples: np.ndarray, sr: int) -> str:
    """Write int16 samples as a mono 16-bit PCM file."""
    sf.write(path, np.asarray(samples, dtype=np.int16), sr, subtype="PCM_16")
    return path
