"""Click-based CLI entry point for DTMF tone generation and detection."""

import logging
import sys
from typing import Optional

import click
import numpy as np

from dtmf_goertzel import __version__
from dtmf_goertzel import scanner as _scanner
from dtmf_goertzel.audio_loader import load_audio, write_pcm16
from dtmf_goertzel.errors import DTMFError
from dtmf_goertzel.synth import synthesize_key_tone, synthesize_sequence, to_pcm16

DEFAULT_SAMPLE_RATE = 8000
DEFAULT_TONE_MS = 250
DEFAULT_GAP_MS = 50


# ─── Shared options ──────────────────────────────────────────────────────────

def _load(path: str, channel: Optional[int] = None) -> tuple[np.ndarray, int]:
    """Load one channel (or the downmix) of ``path``, exiting on failure."""
    try:
        return load_audio(path, channel)
    except FileNotFoundError:
        click.echo(f"Error: File not found: {path}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Error loading file: {e}", err=True)
        sys.exit(1)


def _fail(e: DTMFError):
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def _scan_options(f):
    f = click.option("--threshold", default=_scanner.DEFAULT_POWER_THRESHOLD, show_default=True,
                     type=float, help="Minimum row and column power in dB.")(f)
    f = click.option("--bin-size", default=_scanner.DEFAULT_BIN_SIZE, show_default=True,
                     type=click.IntRange(min=1), help="Window length in samples.")(f)
    return f


# ─── CLI group ───────────────────────────────────────────────────────────────

@click.group()
@click.version_option(version=__version__, prog_name="dtmf")
@click.option("-v", "--verbose", is_flag=True, help="Log per-window detections.")
def main(verbose: bool):
    """DTMF (ITU-T Q.23) tone generator and Goertzel detector.

    \b
    Keypad:
      1 2 3 A
      4 5 6 B
      7 8 9 C
      * 0 # D
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ─── generate ────────────────────────────────────────────────────────────────

@main.command()
@click.argument("keys")
@click.option("-o", "--output", default="dtmf.wav", show_default=True,
              help="Output WAV file path.")
@click.option("--rate", default=DEFAULT_SAMPLE_RATE, show_default=True,
              type=click.IntRange(min=1), help="Sample rate in Hz.")
@click.option("--duration", default=DEFAULT_TONE_MS, show_default=True,
              type=click.IntRange(min=0), help="Tone length per key in milliseconds.")
@click.option("--gap", default=DEFAULT_GAP_MS, show_default=True,
              type=click.IntRange(min=0), help="Silence after each key in milliseconds.")
def generate(keys: str, output: str, rate: int, duration: int, gap: int):
    """Write the tone(s) for KEYS as a 16-bit PCM WAV file."""
    try:
        if len(keys) == 1:
            pcm = synthesize_key_tone(rate, keys, duration)
        else:
            pcm = to_pcm16(synthesize_sequence(rate, keys, duration, gap))
    except DTMFError as e:
        _fail(e)
    write_pcm16(output, pcm, rate)
    click.echo(f"Wrote {len(pcm):,} samples ({len(pcm) / rate:.3f}s) to {output}")


# ─── detect ──────────────────────────────────────────────────────────────────

@main.command()
@click.argument("file", type=click.Path(exists=True))
@_scan_options
@click.option("--channel", default=None, type=click.IntRange(min=0),
              help="Analyze one channel instead of the mono downmix.")
def detect(file: str, bin_size: int, threshold: float, channel: Optional[int]):
    """Report the strongest DTMF key in every window of FILE."""
    data, sr = _load(file, channel)
    try:
        result = _scanner.analyze(data, sr, bin_size=bin_size, power_threshold=threshold)
    except DTMFError as e:
        _fail(e)
    click.echo(_scanner.format_result(result))
    sys.exit(0 if result["detected"] else 1)


# ─── find ────────────────────────────────────────────────────────────────────

@main.command()
@click.argument("file", type=click.Path(exists=True))
@click.argument("key")
@_scan_options
def find(file: str, key: str, bin_size: int, threshold: float):
    """Check whether KEY is the strongest tone in any window of FILE."""
    data, sr = _load(file)
    try:
        found = _scanner.scan_for_key(data, bin_size, sr, threshold, key)
    except DTMFError as e:
        _fail(e)
    click.echo(f"Key {key}: {'found' if found else 'not found'}")
    sys.exit(0 if found else 1)


def run():
    main(auto_envvar_prefix="DTMF")


if __name__ == "__main__":
    run()
