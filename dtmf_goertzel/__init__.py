"""DTMF tone synthesis and Goertzel-based key detection."""

__version__ = "0.1.0"

from dtmf_goertzel.detector import PowerReading, detect, rank_readings
from dtmf_goertzel.errors import DTMFError, InvalidConfiguration, UnknownKey
from dtmf_goertzel.goertzel import power
from dtmf_goertzel.keypad import KeypadEntry, all_entries, lookup
from dtmf_goertzel.scanner import KeyFilter, scan_for_key
from dtmf_goertzel.synth import synthesize, synthesize_key_tone

__all__ = [
    "DTMFError",
    "InvalidConfiguration",
    "KeyFilter",
    "KeypadEntry",
    "PowerReading",
    "UnknownKey",
    "all_entries",
    "detect",
    "lookup",
    "power",
    "rank_readings",
    "scan_for_key",
    "synthesize",
    "synthesize_key_tone",
]
