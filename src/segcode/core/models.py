"""
segcode Models - Pure data classes for the table generator.

Configuration values are immutable: every edit builds a new
``EncodingConfig`` via ``with_changes()``.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Tuple

from ..patterns import DIGITS
from ..segments import FORWARD_ORDER

MIN_DIGITS = 1
MAX_DIGITS = 12
SEGMENT_BITS = 8


class BitOrder(Enum):
    """Which end of the byte the first segment in the order occupies."""
    MSB = 'msb'
    LSB = 'lsb'


class Polarity(Enum):
    """Drive polarity. Common anode lights a segment on logic 0."""
    COMMON_CATHODE = 'common_cathode'
    COMMON_ANODE = 'common_anode'


class NumberFormat(Enum):
    BIN = 'bin'
    DEC = 'dec'
    HEX = 'hex'


class OutputStyle(Enum):
    """Shape of the emitted character table."""
    ARRAY = 'array'    # charset string + parallel byte table
    MACRO = 'macro'    # one #define per character
    ENUM = 'enum'      # single enum block


class ScanMode(Enum):
    STATIC = 'static'      # every digit driven at once
    DYNAMIC = 'dynamic'    # digits multiplexed through a select mask


class OrderPreset(Enum):
    FORWARD = 'forward'
    REVERSE = 'reverse'
    CUSTOM = 'custom'


_ENUM_FIELDS = {
    'bit_order': BitOrder,
    'polarity': Polarity,
    'number_format': NumberFormat,
    'output_style': OutputStyle,
    'scan_mode': ScanMode,
}


@dataclass(frozen=True)
class EncodingConfig:
    """Everything that determines the generated table text."""
    order: Tuple[str, ...] = FORWARD_ORDER
    bit_order: BitOrder = BitOrder.MSB
    polarity: Polarity = Polarity.COMMON_CATHODE
    number_format: NumberFormat = NumberFormat.BIN
    output_style: OutputStyle = OutputStyle.ARRAY
    scan_mode: ScanMode = ScanMode.STATIC
    digit_count: int = 4
    charset: Tuple[str, ...] = tuple(DIGITS)

    def __post_init__(self):
        # Tuples keep the value hashable; charset drops duplicates in order
        object.__setattr__(self, 'order', tuple(self.order))
        object.__setattr__(self, 'charset', tuple(dict.fromkeys(self.charset)))
        # Plain strings ('msb', 'dynamic', ...) become their enum members
        for name, enum_cls in _ENUM_FIELDS.items():
            object.__setattr__(self, name, enum_cls(getattr(self, name)))

    def with_changes(self, **changes) -> 'EncodingConfig':
        """Return a new config with *changes* applied."""
        return replace(self, **changes)


@dataclass(frozen=True)
class EncodedEntry:
    """One table row: source character and its encodings."""
    char: str
    raw_value: int      # segment bits before polarity
    value: int          # polarity-adjusted
    text: str           # value rendered in the configured number format


@dataclass
class GenerateResult:
    """Output of one generation pass."""
    code: str
    warnings: List[str] = field(default_factory=list)
    entries: List[EncodedEntry] = field(default_factory=list)
    digit_entries: List[EncodedEntry] = field(default_factory=list)
    preview: List[str] = field(default_factory=list)
