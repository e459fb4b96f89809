"""The 4x4 DTMF keypad from ITU-T Recommendation Q.23."""

from dataclasses import dataclass
from types import MappingProxyType

from dtmf_goertzel.errors import UnknownKey

# Index order matters: the detector cross-matches row index to column index.
ROW_FREQUENCIES = (697.0, 770.0, 852.0, 941.0)
COLUMN_FREQUENCIES = (1209.0, 1336.0, 1477.0, 1633.0)

# Row-major, upper left to lower right
LAYOUT = (
    ("1", "2", "3", "A"),
    ("4", "5", "6", "B"),
    ("7", "8", "9", "C"),
    ("*", "0", "#", "D"),
)


@dataclass(frozen=True)
class KeypadEntry:
    """A key and its (row, column) placement on the keypad."""

    key: str
    row: int
    column: int

    @property
    def row_frequency(self) -> float:
        return ROW_FREQUENCIES[self.row]

    @property
    def column_frequency(self) -> float:
        return COLUMN_FREQUENCIES[self.column]

    @property
    def frequencies(self) -> tuple[float, float]:
        return self.row_frequency, self.column_frequency


def _build_tone_map() -> MappingProxyType:
    table = {}
    for row, keys in enumerate(LAYOUT):
        for column, key in enumerate(keys):
            table[key] = KeypadEntry(key, row, column)
    return MappingProxyType(table)


TONE_MAP = _build_tone_map()
KEYS = tuple(TONE_MAP)
_ENTRIES = tuple(TONE_MAP.values())


def lookup(key: str) -> KeypadEntry:
    """Return the keypad entry for ``key``.

    Raises:
        UnknownKey: if ``key`` is not one of the 16 keypad symbols.
    """
    try:
        return TONE_MAP[key]
    except (KeyError, TypeError):
        raise UnknownKey(key) from None


def all_entries() -> tuple[KeypadEntry, ...]:
    """All 16 entries in layout order."""
    return _ENTRIES


def row_frequencies() -> tuple[float, ...]:
    return ROW_FREQUENCIES


def column_frequencies() -> tuple[float, ...]:
    return COLUMN_FREQUENCIES
